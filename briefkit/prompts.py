"""System instructions and user prompt templates for the model calls."""

from .answers import format_history

CLARIFYING_QUESTIONS_SYSTEM = (
    "You are a product strategist focused on building the product. Create 3 to 5 essential "
    "clarifying questions about requirements, scope, workflows, data, integrations, constraints, "
    "and risks. Do NOT ask about marketing, sales, pricing, support, customer success, or "
    "go-to-market. Always include an 'Other: [please specify]' option. Output JSON only."
)

INTERVIEW_SYSTEM = (
    "You are BriefKit, a product interviewer focused on building the product. Ask one concise, "
    "high-signal question at a time. Tailor each question to the user's idea. Cover problem, "
    "user, goals, scope, workflows, data, integrations, constraints, success metrics, risks, and "
    "dependencies. Do NOT ask about marketing, sales, pricing, support, customer success, or "
    "go-to-market. Do NOT ask about budget or timeline. Keep questions under 25 words. When "
    "enough information is collected, respond with done=true and provide a short summary list. "
    "Output JSON only."
)

NAMING_SYSTEM = "You create concise product naming from a short brief. Output JSON only."

PRD_SYSTEM = (
    "You are a senior product manager. Use the inputs to produce a structured PRD plan. "
    "Output JSON only."
)


def clarifying_questions_prompt(feature_name, description, is_new_project):
    project_type = "New project" if is_new_project else "New feature"
    return f"""Feature: {feature_name}
Type: {project_type}
Description: {description}

Return JSON in the shape: {{
  "questions": [
    {{
      "question": "...",
      "options": ["A. ...", "B. ...", "C. ...", "D. Other: [please specify]"]
    }}
  ]
}}"""


def interview_step_prompt(brief, history):
    return f"""Brief: {brief}

Conversation so far:
{format_history(history)}

Return JSON: {{
  "message": "next question or completion message",
  "done": false,
  "summary": ["optional bullets"]
}}"""


def naming_prompt(brief):
    return f"""Brief: {brief}

Return JSON in the shape: {{
  "projectName": "Short product name",
  "featureName": "Primary feature name",
  "description": "One sentence description"
}}"""


def prd_data_prompt(project_name, feature_name, description, branch_name, clarifying_answers):
    return f"""Inputs:
- Project: {project_name}
- Feature: {feature_name}
- Description: {description}
- Branch: {branch_name}
- Clarifying answers:
{clarifying_answers}

Return JSON in this shape:
{{
  "project": "...",
  "branchName": "...",
  "description": "...",
  "introduction": "...",
  "goals": ["..."],
  "features": [
    {{
      "name": "...",
      "summary": "...",
      "userStoryIds": ["US-001", "US-002"]
    }}
  ],
  "userStories": [
    {{
      "id": "US-001",
      "title": "...",
      "description": "As a [user], I want ... so that ...",
      "acceptanceCriteria": ["...", "...", "Typecheck passes"]
    }}
  ],
  "functionalRequirements": ["FR-1: ...", "FR-2: ..."],
  "nonGoals": ["..."],
  "designConsiderations": ["..."],
  "technicalConsiderations": ["..."],
  "successMetrics": ["..."],
  "openQuestions": ["..."]
}}

Rules:
- Include 3 to 7 features.
- Provide 4 to 10 user stories.
- Acceptance criteria must be verifiable and specific.
- Keep wording concise and implementation-ready.
- Do NOT mention external tools or dev-browser in acceptance criteria unless explicitly required by the inputs."""

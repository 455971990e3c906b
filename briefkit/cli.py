"""Interactive terminal interviewer.

Asks for an output directory and a brief, runs the interview (with an
optional live preview and feedback round), then writes
``tasks/prd-<feature>.md`` and ``prd.json`` and prints a one-line JSON
summary as the last line of output.
"""

import argparse
import json
import logging
import os
import re
import sys

from . import openai_client, synthesis
from .answers import build_numbered_answers
from .errors import MissingInputError
from .json_utils import safe_json_stringify
from .logging_config import configure_logging
from .prd import resolve_feature_stories, resolve_output_paths
from .session import InterviewSession, SessionState

logger = logging.getLogger(__name__)

FINISH_COMMAND = "/finish"
RESTART_COMMAND = "/restart"

FEATURE_FEEDBACK = re.compile(r'^f(\d+)(?::\s*|\s+)(.+)$', re.IGNORECASE)
STORY_FEEDBACK = re.compile(r'^s\s+([^\s:]+)(?::\s*|\s+)(.+)$', re.IGNORECASE)

FEEDBACK_HELP = (
    "\nAdd feedback to steer the PRD:\n"
    "  f<N> <note>     note on feature N (e.g. f2 merge with search)\n"
    "  s <ID> <note>   note on a story (e.g. s US-003 needs offline mode)\n"
    "  blank line to generate, /restart to start over\n"
)


class Terminal:
    """Line-based prompt/response I/O for one CLI session."""

    def __init__(self, stdin=None, stdout=None):
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout
        self.closed = False

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False

    def write(self, text):
        self.stdout.write(text)
        self.stdout.flush()

    def divider(self, label):
        self.write(f"\n--- {label} ---\n")

    def ask(self, prompt):
        if self.closed:
            raise MissingInputError("Input closed.")
        self.write(prompt)
        line = self.stdin.readline()
        if not line:
            raise MissingInputError("Input closed.")
        return line.rstrip("\r\n")

    def close(self):
        if not self.closed:
            self.stdout.flush()
            self.closed = True


def build_parser():
    parser = argparse.ArgumentParser(
        prog='briefkit',
        description="Interview-driven PRD generator: answer a few questions, get a PRD and prd.json.",
    )
    parser.add_argument('--output-dir', help="directory for tasks/prd-*.md and prd.json (prompted if omitted)")
    parser.add_argument('--brief', help="what you want to build (prompted if omitted)")
    parser.add_argument('--skip-preview', action='store_true',
                        help="do not refresh the feature/story preview or ask for feedback")
    parser.add_argument('--write-prompt', action='store_true',
                        help="also write prompt.md with the agent loop instructions")
    parser.add_argument('--simple', action='store_true',
                        help="answer a fixed set of multiple-choice questions instead of the interview")
    parser.add_argument('--model', help="OpenAI model (defaults to OPENAI_MODEL or gpt-4o-mini)")
    parser.add_argument('--log-level', default=os.getenv('BRIEFKIT_LOG_LEVEL', 'WARNING'),
                        help="logging level for stderr (default: WARNING)")
    return parser


def parse_feedback(line):
    """Parse ``f<N> <note>`` or ``s <ID> <note>``.

    Returns ``('feature', index, note)``, ``('story', id, note)`` or None.
    """
    match = FEATURE_FEEDBACK.match(line)
    if match and int(match.group(1)) > 0:
        return 'feature', int(match.group(1)) - 1, match.group(2).strip()
    match = STORY_FEEDBACK.match(line)
    if match:
        return 'story', match.group(1), match.group(2).strip()
    return None


def show_preview(terminal, session):
    features = session.preview_features
    stories = session.preview_stories
    terminal.divider("Preview")
    if not features:
        terminal.write("No features yet.\n")
    for index, feature in enumerate(features, start=1):
        if not isinstance(feature, dict):
            continue
        terminal.write(f"f{index}. {feature.get('name') or '(unnamed)'}: {feature.get('summary') or ''}\n")
        for story in resolve_feature_stories(feature, stories):
            terminal.write(f"      {story.get('id')}: {story.get('title') or ''}\n")
    if stories:
        terminal.write(f"{len(stories)} user stories drafted.\n")


def resolve_output_dir(args, terminal):
    output_dir = args.output_dir
    if output_dir is None:
        output_dir = terminal.ask(
            "Output directory for PRD + JSON (leave blank for current directory): "
        ).strip()
    return os.path.abspath(output_dir) if output_dir else os.getcwd()


def run_interview(session, terminal, args, client):
    """Drive the session until the interview is done.

    Returns False when the user asked to restart.
    """
    terminal.divider("Interview")
    terminal.write(f"Type {FINISH_COMMAND} to stop the interview or {RESTART_COMMAND} to start over.\n")
    raw_step = openai_client.generate_interview_step(session.brief, session.history, client=client, model=args.model)
    session.receive_step(openai_client.coerce_interview_step(raw_step))

    while session.state is SessionState.INTERVIEW_IN_PROGRESS:
        terminal.write(f"\nQ{session.turn_number}: {session.current_question}\n")
        answer = terminal.ask("Your answer: ").strip()
        command = answer.lower()
        if command == FINISH_COMMAND:
            session.finish()
            break
        if command == RESTART_COMMAND:
            return False

        session.answer(answer)
        raw_step, preview = synthesis.run_turn(
            session.brief,
            session.history,
            session.feedback_lines(),
            with_preview=not args.skip_preview,
            client=client,
            model=args.model,
        )
        if preview is not None:
            session.set_preview(preview)
            show_preview(terminal, session)
        session.receive_step(openai_client.coerce_interview_step(raw_step))

    if session.closing_message:
        terminal.write(f"\n{session.closing_message}\n")
    if session.summary:
        terminal.write("\nInterview complete. Summary:\n")
        terminal.write("".join(f"- {item}\n" for item in session.summary))
    return True


def refresh_preview(session, terminal, args, client):
    session.set_preview(synthesis.build_preview(
        session.brief, session.history, session.feedback_lines(), client=client, model=args.model
    ))
    show_preview(terminal, session)


def collect_feedback(session, terminal, args, client):
    """Feedback round after the interview. Returns False on restart."""
    if session.preview is None:
        refresh_preview(session, terminal, args, client)
    terminal.write(FEEDBACK_HELP)
    while True:
        line = terminal.ask("Feedback: ").strip()
        if not line or line.lower() == FINISH_COMMAND:
            return True
        if line.lower() == RESTART_COMMAND:
            return False
        parsed = parse_feedback(line)
        if parsed is None:
            terminal.write("Could not read that. Use f<N> <note> or s <ID> <note>.\n")
            continue
        kind, key, note = parsed
        if kind == 'feature':
            session.add_feature_message(key, note)
        else:
            session.add_story_message(key, note)
        refresh_preview(session, terminal, args, client)


def write_artifacts(artifacts, feature_name, output_dir, write_prompt=False):
    paths = resolve_output_paths(feature_name, output_dir)
    os.makedirs(paths.tasks_dir, exist_ok=True)
    with open(paths.prd_path, 'w', encoding='utf-8') as f:
        f.write(artifacts['prdMarkdown'])
    with open(paths.prd_json_path, 'w', encoding='utf-8') as f:
        f.write(safe_json_stringify(artifacts['prdJson']))
    if write_prompt:
        with open(paths.prompt_path, 'w', encoding='utf-8') as f:
            f.write(artifacts['promptMarkdown'])
    logger.info(f"Wrote {paths.prd_path} and {paths.prd_json_path}")
    return paths


def export(result, terminal, output_dir, args):
    """Render, write and echo the PRD; returns the machine summary."""
    artifacts = synthesis.build_artifacts(result)
    feature_name = result.names.feature_name
    paths = write_artifacts(artifacts, feature_name, output_dir, args.write_prompt)

    terminal.divider("PRD MARKDOWN")
    terminal.write(f"{artifacts['prdMarkdown']}\n")
    terminal.divider("PRD JSON")
    terminal.write(f"{safe_json_stringify(artifacts['prdJson'])}\n")
    terminal.divider("MACHINE SUMMARY")

    summary = {
        'ok': True,
        'outputDir': output_dir,
        'prdPath': paths.prd_path,
        'prdJsonPath': paths.prd_json_path,
        'project': artifacts['prdJson']['project'],
        'branchName': artifacts['prdJson']['branchName'],
        'feature': feature_name,
        'userStoryCount': len(artifacts['prdJson']['userStories']),
    }
    if args.write_prompt:
        summary['promptPath'] = paths.prompt_path
    return artifacts, summary


def run_guided(args, terminal, client):
    output_dir = resolve_output_dir(args, terminal)
    session = InterviewSession()
    brief = args.brief

    while True:
        if not brief:
            brief = terminal.ask("What do you want to build? ")
        session.start(brief)
        brief = None
        if not run_interview(session, terminal, args, client):
            terminal.write("\nRestarting interview.\n")
            session.restart()
            continue
        if not args.skip_preview and not collect_feedback(session, terminal, args, client):
            terminal.write("\nRestarting interview.\n")
            session.restart()
            continue
        break

    terminal.divider("Generating PRD")
    result = synthesis.synthesize(
        session.brief,
        session.history,
        session.summary,
        session.feedback_lines(),
        client=client,
        model=args.model,
    )
    artifacts, summary = export(result, terminal, output_dir, args)
    session.mark_generated(artifacts)
    return summary


def _ask_required(terminal, prompt, message):
    value = terminal.ask(prompt).strip()
    if not value:
        raise MissingInputError(message)
    return value


def run_simple(args, terminal, client):
    """Multiple-choice flow: a handful of clarifying questions, then the PRD."""
    output_dir = resolve_output_dir(args, terminal)
    feature_name = _ask_required(terminal, "Feature name: ", "Feature name is required.")
    description = args.brief or _ask_required(terminal, "Describe the feature: ", "Description is required.")
    project_name = terminal.ask("Project name (leave blank to use the feature name): ").strip() or feature_name
    is_new_project = terminal.ask("Is this a new project? [y/N]: ").strip().lower().startswith('y')

    terminal.divider("Clarifying Questions")
    questions = openai_client.coerce_questions(openai_client.generate_clarifying_questions(
        feature_name, description, is_new_project, client=client, model=args.model
    ))
    answers = []
    for index, question in enumerate(questions, start=1):
        terminal.write(f"\n{index}. {question.question}\n")
        terminal.write("".join(f"   {option}\n" for option in question.options))
        answers.append({'question': question.question, 'answer': terminal.ask("Your answer: ").strip()})

    terminal.divider("Generating PRD")
    names = openai_client.InferredNames(project_name, feature_name, description)
    result = synthesis.synthesize_with_names(
        names, build_numbered_answers(answers), client=client, model=args.model
    )
    _, summary = export(result, terminal, output_dir, args)
    return summary


def run(args, terminal, client=None):
    terminal.write("\nBriefKit PRD Interviewer (CLI)\n")
    terminal.write("Describe the product, answer the interview, then export PRD + prd.json.\n\n")
    client = client or openai_client.get_openai_client()
    if args.simple:
        return run_simple(args, terminal, client)
    return run_guided(args, terminal, client)


def main(argv=None, stdin=None, stdout=None, client=None):
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)

    with Terminal(stdin, stdout) as terminal:
        try:
            summary = run(args, terminal, client)
        except Exception as e:
            logger.debug("CLI run failed", exc_info=True)
            terminal.write(f"\nError: {e}\n")
            terminal.write(json.dumps({'ok': False, 'error': str(e)}) + "\n")
            return 1
        terminal.write(json.dumps(summary) + "\n")
    return 0


if __name__ == '__main__':
    sys.exit(main())

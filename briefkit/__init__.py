"""BriefKit: interview-driven PRD generator.

Interview a user about what they want to build, then turn the answers into
a markdown PRD (``tasks/prd-<feature>.md``) and a story-tracking
``prd.json``.
"""

__version__ = "0.1.0"

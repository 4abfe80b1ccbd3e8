"""Interactive homework assignment workflow."""

from homework_assigner.homework.prompts import Prompter, PromptResult, validate
from homework_assigner.homework.service import (
    AssignmentReport,
    HomeworkAssignment,
    HomeworkService,
    IssueOutcome,
)

__all__ = [
    "AssignmentReport",
    "HomeworkAssignment",
    "HomeworkService",
    "IssueOutcome",
    "PromptResult",
    "Prompter",
    "validate",
]

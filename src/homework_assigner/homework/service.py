"""Assign one homework issue to every member of a team.

The sequence is: read the gist body, resolve the team by name, then open one
issue per member. The first two steps fail fast. Issue creation keeps going
past individual failures and reports what happened for each member; issues
already created are never rolled back.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

import requests
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from homework_assigner.errors import InvalidAnswer
from homework_assigner.github.client import GitHubClient
from homework_assigner.github.models import Issue
from homework_assigner.homework.prompts import (
    COURSE_PATTERN,
    GIST_ID_PATTERN,
    REPO_PATTERN,
    TEAM_PATTERN,
    TITLE_PATTERN,
    Prompter,
    validate,
)

logger = logging.getLogger(__name__)

# Field name -> (question, pattern), in the order they are asked.
QUESTIONS = {
    "course": ("What class (Github Org) would you like to assign homework for?", COURSE_PATTERN),
    "repo": ("What repo do you use to track homework?", REPO_PATTERN),
    "team": ("What team are your students on?", TEAM_PATTERN),
    "title": ("What is the title of this homework?", TITLE_PATTERN),
    "gist_id": ("What is the Gist Id for this homework issue?", GIST_ID_PATTERN),
}


class HomeworkAssignment(BaseModel):
    """The five answers needed to assign a homework.

    The console patterns are enforced where answers are typed in (see
    `HomeworkService.collect`); programmatic callers only need non-empty values.
    """

    model_config = ConfigDict(frozen=True)

    course: str = Field(min_length=1)
    repo: str = Field(min_length=1)
    team: str = Field(min_length=1)
    title: str = Field(min_length=1)
    gist_id: str = Field(min_length=1)


@dataclass(frozen=True, slots=True)
class IssueOutcome:
    """Result of creating the issue for one member."""

    login: str
    issue: Issue | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.issue is not None


@dataclass(slots=True)
class AssignmentReport:
    assignment: HomeworkAssignment
    outcomes: list[IssueOutcome] = field(default_factory=list)

    @property
    def created(self) -> list[IssueOutcome]:
        return [o for o in self.outcomes if o.ok]

    @property
    def failed(self) -> list[IssueOutcome]:
        return [o for o in self.outcomes if not o.ok]

    @property
    def ok(self) -> bool:
        return not self.failed


class HomeworkService:
    def __init__(self, *, github: GitHubClient) -> None:
        self._github = github

    def collect(self, prompter: Prompter, **prefilled: str | None) -> HomeworkAssignment:
        """Build an assignment, prompting for every field not already given.

        Prefilled values are held to the same patterns as typed answers.

        Raises:
            InvalidAnswer: If a prefilled value doesn't match its pattern.
        """
        unknown = set(prefilled) - set(QUESTIONS)
        if unknown:
            raise TypeError(f"Unknown assignment fields: {sorted(unknown)}")

        answers: dict[str, str] = {}
        for name, (question, pattern) in QUESTIONS.items():
            value = prefilled.get(name)
            if value is None:
                answers[name] = prompter.ask(question, pattern)
                continue
            result = validate(value, pattern)
            if not result.accepted:
                raise InvalidAnswer(f"Invalid {name} {value!r}: must match {pattern.pattern}")
            answers[name] = result.value
        return HomeworkAssignment(**answers)

    def assign(self, assignment: HomeworkAssignment) -> AssignmentReport:
        body = self._github.get_gist_content(assignment.gist_id)
        students = self._github.get_team_by_name(assignment.course, assignment.team)
        logger.info(
            "Assigning homework",
            extra={
                "course": assignment.course,
                "team": assignment.team,
                "students": len(students),
            },
        )

        report = AssignmentReport(assignment=assignment)
        for student in students:
            try:
                issue = self._github.create_issue(
                    assignment.course,
                    assignment.repo,
                    assignment.title,
                    body,
                    student.login,
                )
            except (requests.RequestException, ValidationError) as e:
                logger.exception("Issue creation failed", extra={"assignee": student.login})
                report.outcomes.append(IssueOutcome(login=student.login, error=str(e)))
                continue
            report.outcomes.append(IssueOutcome(login=student.login, issue=issue))

        logger.info(
            "Homework assigned",
            extra={"created_count": len(report.created), "failed_count": len(report.failed)},
        )
        return report

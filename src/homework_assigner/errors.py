"""Exceptions raised when a lookup against GitHub data comes up empty."""

from __future__ import annotations

from dataclasses import dataclass


class HomeworkAssignerError(Exception):
    """Base class for errors raised by this package."""


@dataclass(frozen=True, slots=True)
class TeamNotFound(HomeworkAssignerError, LookupError):
    """Raised when no team in the organization has the requested name."""

    org: str
    team: str

    def __str__(self) -> str:
        return f"No team named {self.team!r} in organization {self.org!r}"


@dataclass(frozen=True, slots=True)
class EmptyGist(HomeworkAssignerError, LookupError):
    """Raised when a gist has no files to take content from."""

    gist_id: str

    def __str__(self) -> str:
        return f"Gist {self.gist_id} has no files"


class PageCountUnavailable(HomeworkAssignerError, ValueError):
    """Raised when a response carries no usable rel="last" link."""


@dataclass(frozen=True, slots=True)
class PromptAborted(HomeworkAssignerError):
    """Raised when a prompt gives up: input ended or attempts ran out."""

    question: str
    attempts: int

    def __str__(self) -> str:
        return f"No valid answer after {self.attempts} attempt(s): {self.question}"


class InvalidAnswer(HomeworkAssignerError, ValueError):
    """Raised when a value supplied up front doesn't match its question's pattern."""

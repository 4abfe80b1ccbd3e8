"""Validated console prompts.

Each question is re-asked until the answer matches its pattern. The retry
policy (`max_attempts`) and the I/O functions are injectable so the loop can
be driven from tests without a terminal.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass

from homework_assigner.errors import PromptAborted

logger = logging.getLogger(__name__)

# ASCII word characters only, matching what GitHub accepts in these names.
COURSE_PATTERN = re.compile(r"^[\w\-]+$", re.ASCII)
REPO_PATTERN = re.compile(r"^\w+$", re.ASCII)
TEAM_PATTERN = re.compile(r"^\w+$", re.ASCII)
TITLE_PATTERN = re.compile(r"^[\w\- ]+$", re.ASCII)
GIST_ID_PATTERN = re.compile(r"^[0-9a-f]{20}$")
YES_NO_PATTERN = re.compile(r"^[yn]$", re.IGNORECASE)

RETRY_MESSAGE = "Sorry, I didn't understand that."


@dataclass(frozen=True, slots=True)
class PromptResult:
    """Outcome of checking a single answer."""

    value: str
    accepted: bool


def validate(answer: str, pattern: re.Pattern[str]) -> PromptResult:
    """Check one answer against a pattern.

    Only the line terminator is removed; surrounding spaces count against the
    pattern.
    """
    value = answer.rstrip("\r\n")
    # fullmatch so a trailing newline can't slip past "$".
    return PromptResult(value=value, accepted=pattern.fullmatch(value) is not None)


class Prompter:
    """Asks questions on the console until a valid answer is given.

    Args:
        read: Returns one line of input; `EOFError` or Ctrl-C ends the session.
            Defaults to `input`.
        write: Writes one line of output. Defaults to `print`.
        max_attempts: Rejected answers tolerated per question. `None` means
            keep asking forever.
    """

    def __init__(
        self,
        *,
        read: Callable[[], str] | None = None,
        write: Callable[[str], None] | None = None,
        max_attempts: int | None = None,
    ) -> None:
        if max_attempts is not None and max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self._read = read or input
        self._write = write or print
        self._max_attempts = max_attempts

    def ask(self, question: str, pattern: re.Pattern[str]) -> str:
        attempts = 0
        while True:
            self._write(question)
            try:
                answer = self._read()
            except (EOFError, KeyboardInterrupt):
                raise PromptAborted(question=question, attempts=attempts) from None

            attempts += 1
            result = validate(answer, pattern)
            if result.accepted:
                return result.value

            logger.debug("Rejected answer", extra={"question": question, "attempt": attempts})
            if self._max_attempts is not None and attempts >= self._max_attempts:
                raise PromptAborted(question=question, attempts=attempts)
            self._write(RETRY_MESSAGE)

    def confirm(self, question: str) -> bool:
        """Ask a y/n question; returns True for yes."""

        return self.ask(question, YES_NO_PATTERN).upper() == "Y"

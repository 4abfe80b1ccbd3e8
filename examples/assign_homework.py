#!/usr/bin/env python3
"""Programmatic homework assignment example.

This demonstrates using the components directly, without prompts:

* load settings from `.env`
* read the issue body from a gist
* open one issue per member of a team and print the outcome for each
"""

from __future__ import annotations

import argparse
from typing import Sequence

from homework_assigner.config import AssignerSettings
from homework_assigner.github.client import GitHubClient
from homework_assigner.homework.service import HomeworkAssignment, HomeworkService
from homework_assigner.logging import configure_logging


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Assign a homework (programmatic example).")
    parser.add_argument("--org", required=True, help="GitHub organization")
    parser.add_argument("--repo", required=True, help="Repository used to track homework")
    parser.add_argument("--team", required=True, help="Team the students are on")
    parser.add_argument("--title", required=True, help="Homework title")
    parser.add_argument("--gist", required=True, help="Gist id holding the issue body")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)

    settings = AssignerSettings()
    configure_logging(settings.log_level)

    github = GitHubClient(settings=settings)
    try:
        service = HomeworkService(github=github)
        report = service.assign(
            HomeworkAssignment(
                course=args.org,
                repo=args.repo,
                team=args.team,
                title=args.title,
                gist_id=args.gist,
            )
        )
    finally:
        github.close()

    for outcome in report.outcomes:
        status = f"#{outcome.issue.number}" if outcome.issue else f"failed: {outcome.error}"
        print(f"{outcome.login}: {status}")
    return 0 if report.ok else 1


if __name__ == "__main__":
    raise SystemExit(main())

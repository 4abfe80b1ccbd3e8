"""CLI entrypoint for the homework assigner."""

from __future__ import annotations

import argparse
import logging
import sys

from pydantic import ValidationError

from homework_assigner import __version__
from homework_assigner.config import AssignerSettings
from homework_assigner.errors import EmptyGist, InvalidAnswer, PromptAborted, TeamNotFound
from homework_assigner.github.client import GitHubClient
from homework_assigner.homework.prompts import Prompter
from homework_assigner.homework.service import AssignmentReport, HomeworkService
from homework_assigner.logging import configure_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="homework-assigner",
        description="Assign homework issues to the members of a GitHub team",
    )
    parser.add_argument("--version", action="version", version=f"homework-assigner {__version__}")

    subparsers = parser.add_subparsers(dest="command", required=True)

    assign = subparsers.add_parser(
        "assign",
        help="Open one issue per team member, using a gist as the issue body",
        description="Values not given as options are asked for interactively.",
    )
    assign.add_argument("--org", "--course", dest="course", default=None, help="GitHub organization")
    assign.add_argument("--repo", default=None, help="Repository used to track homework")
    assign.add_argument("--team", default=None, help="Team the students are on")
    assign.add_argument("--title", default=None, help="Homework title")
    assign.add_argument("--gist", dest="gist_id", default=None, help="Gist id holding the issue body")
    assign.add_argument(
        "--max-attempts",
        type=int,
        default=None,
        help="Give up after this many invalid answers to one question (default: keep asking)",
    )
    assign.add_argument(
        "--confirm",
        action="store_true",
        help="Ask for confirmation before creating any issue",
    )

    teams = subparsers.add_parser("teams", help="List the teams of an organization")
    teams.add_argument("--org", required=True, help="GitHub organization")

    members = subparsers.add_parser("members", help="List the members of a team found by name")
    members.add_argument("--org", required=True, help="GitHub organization")
    members.add_argument("--team", required=True, help="Exact team name")

    followers = subparsers.add_parser("followers", help="List the followers of a user")
    followers.add_argument("--user", required=True, help="GitHub login")
    pages = followers.add_mutually_exclusive_group()
    pages.add_argument("--page", type=int, default=1, help="Page to fetch (default: 1)")
    pages.add_argument("--all", action="store_true", help="Fetch every page")
    pages.add_argument(
        "--count-pages",
        action="store_true",
        help="Only print how many pages of followers there are",
    )

    issues = subparsers.add_parser("issues", help="List issues, newest first")
    issues.add_argument("--owner", required=True, help="Repository owner")
    issues.add_argument("--repo", required=True, help="Repository name")

    comment = subparsers.add_parser("comment", help="Comment on an issue")
    comment.add_argument("--owner", required=True, help="Repository owner")
    comment.add_argument("--repo", required=True, help="Repository name")
    comment.add_argument("--issue-number", type=int, required=True, help="Issue number")
    comment.add_argument("--body", required=True, help="Comment text")

    gist = subparsers.add_parser("gist", help="Print the content of a gist's first file")
    gist.add_argument("gist_id", help="Gist id")

    return parser


def _print_report(report: AssignmentReport) -> None:
    for outcome in report.outcomes:
        if outcome.issue is not None:
            print(f"{outcome.login}: created issue #{outcome.issue.number}")
        else:
            print(f"{outcome.login}: FAILED ({outcome.error})")
    print(
        f"Assigned {report.assignment.title!r} to {len(report.created)} of "
        f"{len(report.outcomes)} member(s) of {report.assignment.team}"
    )


def _run_assign(args: argparse.Namespace, github: GitHubClient) -> int:
    service = HomeworkService(github=github)
    prompter = Prompter(max_attempts=args.max_attempts)

    assignment = service.collect(
        prompter,
        course=args.course,
        repo=args.repo,
        team=args.team,
        title=args.title,
        gist_id=args.gist_id,
    )
    if args.confirm and not prompter.confirm(
        f"Assign {assignment.title!r} to team {assignment.team} in {assignment.course}/{assignment.repo}? (y/n)"
    ):
        print("Cancelled")
        return 0

    report = service.assign(assignment)
    _print_report(report)
    return 0 if report.ok else 4


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = AssignerSettings()
        token = settings.require_token()
    except (ValidationError, ValueError) as e:
        # Logging isn't configured yet; keep it simple and actionable.
        print("Configuration error (check your .env):", file=sys.stderr)
        print(e, file=sys.stderr)
        return 2

    configure_logging(settings.log_level, log_file=settings.log_file)

    github = GitHubClient(token, settings=settings)
    try:
        if args.command == "assign":
            return _run_assign(args, github)

        if args.command == "teams":
            for team in github.list_teams(args.org):
                print(f"{team.id}\t{team.name}")
            return 0

        if args.command == "members":
            for member in github.get_team_by_name(args.org, args.team):
                print(member.login)
            return 0

        if args.command == "followers":
            if args.count_pages:
                print(github.count_follower_pages(args.user))
                return 0
            if args.all:
                users = github.list_all_followers(args.user)
            else:
                users = github.list_followers(args.user, args.page)
            for user in users:
                print(user.login)
            return 0

        if args.command == "issues":
            for issue in github.list_issues(args.owner, args.repo):
                assignee = issue.assignee.login if issue.assignee else "-"
                print(f"#{issue.number}\t{assignee}\t{issue.title}")
            return 0

        if args.command == "comment":
            created = github.create_comment(args.owner, args.repo, args.issue_number, args.body)
            print(f"Created comment {created.id}" + (f": {created.html_url}" if created.html_url else ""))
            return 0

        if args.command == "gist":
            print(github.get_gist_content(args.gist_id))
            return 0

        logger.error("Unknown command", extra={"command": args.command})
        return 2

    except (TeamNotFound, EmptyGist) as e:
        logger.warning(str(e))
        print(str(e), file=sys.stderr)
        return 3

    except PromptAborted as e:
        print(f"\n{e}", file=sys.stderr)
        return 130

    except InvalidAnswer as e:
        # Prefilled option values that don't match their pattern.
        print(str(e), file=sys.stderr)
        return 2

    except Exception:
        logger.exception("Command failed")
        return 1

    finally:
        github.close()


if __name__ == "__main__":
    raise SystemExit(main())

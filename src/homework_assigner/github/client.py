"""GitHub REST client for the homework assigner.

Every public method maps to a single GitHub endpoint (or a short, fixed chain of
them) and returns the decoded payload. There is no retry: HTTP errors surface as
`requests.HTTPError`, malformed payloads as `pydantic.ValidationError`.
"""

from __future__ import annotations

import logging
from typing import Any, TypeVar
from urllib.parse import parse_qs, urlparse

import requests
from pydantic import TypeAdapter

from homework_assigner.config import AssignerSettings
from homework_assigner.errors import EmptyGist, PageCountUnavailable, TeamNotFound
from homework_assigner.github.models import Comment, Gist, Issue, Member, Team

logger = logging.getLogger(__name__)

# GitHub's default page size for the followers listing.
FOLLOWERS_PAGE_SIZE = 30

_T = TypeVar("_T")


class GitHubClient:
    """Thin wrapper over the handful of GitHub endpoints the workflow needs."""

    def __init__(
        self,
        token: str | None = None,
        *,
        settings: AssignerSettings | None = None,
        session: requests.Session | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            token: GitHub token. Falls back to the configured `OAUTH_TOKEN`.
            settings: Settings providing base URL, user agent and timeout.
            session: Optional injected session (used by tests).

        Raises:
            ValueError: If no token is available.
        """
        settings = settings or AssignerSettings()
        if token is None:
            token = settings.require_token()
        if not token:
            raise ValueError("GitHub token is required")

        self._base_url = settings.github_base_url.rstrip("/")
        self._timeout = settings.request_timeout
        self._headers = {
            "Authorization": f"token {token}",
            "User-Agent": settings.user_agent,
            "Accept": "application/vnd.github+json",
        }
        self._session = session or requests.Session()

    @property
    def headers(self) -> dict[str, str]:
        """Return a copy of the headers sent with every request."""

        return dict(self._headers)

    def _url(self, path: str) -> str:
        return f"{self._base_url}/{path.lstrip('/')}"

    def request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
    ) -> requests.Response:
        """Send one request relative to the API base URL and return the raw response."""

        url = self._url(path)
        logger.debug("GitHub request", extra={"method": method, "url": url, "params": params})
        resp = self._session.request(
            method,
            url,
            headers=self._headers,
            params=params,
            json=json,
            timeout=self._timeout,
        )
        resp.raise_for_status()
        return resp

    @staticmethod
    def _decode(model: type[_T], resp: requests.Response) -> _T:
        return TypeAdapter(model).validate_python(resp.json())

    # Teams

    def list_teams(self, org: str) -> list[Team]:
        resp = self.request("GET", f"/orgs/{org}/teams")
        return self._decode(list[Team], resp)

    def list_members(self, team_id: int) -> list[Member]:
        resp = self.request("GET", f"/teams/{team_id}/members")
        return self._decode(list[Member], resp)

    def get_team_by_name(self, org: str, team_name: str) -> list[Member]:
        """Return the members of the first team in `org` named exactly `team_name`.

        Raises:
            TeamNotFound: If no team has that name.
        """
        teams = self.list_teams(org)
        team = next((t for t in teams if t.name == team_name), None)
        if team is None:
            raise TeamNotFound(org=org, team=team_name)
        logger.debug("Resolved team", extra={"org": org, "team": team_name, "team_id": team.id})
        return self.list_members(team.id)

    # Followers

    def fetch_followers_page(self, user: str, page: int = 1) -> requests.Response:
        """Fetch one page of followers and return the raw response (headers included)."""

        if page < 1:
            raise ValueError("page must be a positive integer")
        return self.request("GET", f"/users/{user}/followers", params={"page": page})

    def list_followers(self, user: str, page: int = 1) -> list[Member]:
        return self._decode(list[Member], self.fetch_followers_page(user, page))

    def list_all_followers(self, user: str) -> list[Member]:
        """Collect followers across pages.

        A full page means "ask for the next one", so a total that is an exact
        multiple of the page size ends with one extra, empty fetch.
        """
        followers: list[Member] = []
        page = 1
        batch = self.list_followers(user, page)
        while len(batch) == FOLLOWERS_PAGE_SIZE:
            followers.extend(batch)
            page += 1
            batch = self.list_followers(user, page)
        followers.extend(batch)
        logger.debug("Fetched followers", extra={"user": user, "pages": page, "count": len(followers)})
        return followers

    @staticmethod
    def get_page_count(response: requests.Response) -> int:
        """Return the page number of the rel="last" entry in a response's Link header.

        Raises:
            PageCountUnavailable: If there is no Link header, no rel="last" entry,
                or that entry has no numeric `page` parameter.
        """
        last = response.links.get("last")
        if last is None:
            raise PageCountUnavailable('Response has no rel="last" link')
        pages = parse_qs(urlparse(last.get("url", "")).query).get("page")
        if not pages or not pages[0].isdigit():
            raise PageCountUnavailable(f"No page number in last link: {last.get('url')!r}")
        return int(pages[0])

    def count_follower_pages(self, user: str) -> int:
        """Return how many follower pages `user` has, from the first page's Link header.

        GitHub omits the header when everything fits on one page.
        """
        try:
            return self.get_page_count(self.fetch_followers_page(user, 1))
        except PageCountUnavailable:
            return 1

    # Issues and comments

    def list_issues(self, owner: str, repo: str) -> list[Issue]:
        """List issues, newest first."""

        resp = self.request(
            "GET",
            f"/repos/{owner}/{repo}/issues",
            params={"sort": "created", "direction": "desc"},
        )
        return self._decode(list[Issue], resp)

    def create_issue(
        self,
        owner: str,
        repo: str,
        title: str,
        body: str | None = None,
        assignee: str | None = None,
    ) -> Issue:
        """Create an issue.

        Args:
            owner: Repository owner (user or organization).
            repo: Repository name.
            title: Issue title.
            body: Issue body, sent as null when omitted.
            assignee: Login to assign, sent as null when omitted.

        Returns:
            The created issue.
        """
        logger.info(
            "Creating issue",
            extra={"repo": f"{owner}/{repo}", "title": title, "assignee": assignee},
        )
        resp = self.request(
            "POST",
            f"/repos/{owner}/{repo}/issues",
            json={"title": title, "body": body, "assignee": assignee},
        )
        issue = self._decode(Issue, resp)
        logger.info("Issue created", extra={"issue_number": issue.number, "assignee": assignee})
        return issue

    def create_comment(self, owner: str, repo: str, issue_number: int, comment: str) -> Comment:
        if issue_number <= 0:
            raise ValueError("issue_number must be a positive integer")
        resp = self.request(
            "POST",
            f"/repos/{owner}/{repo}/issues/{issue_number}/comments",
            json={"body": comment},
        )
        return self._decode(Comment, resp)

    # Gists

    def get_gist(self, gist_id: str) -> Gist:
        return self._decode(Gist, self.request("GET", f"/gists/{gist_id}"))

    def get_gist_content(self, gist_id: str) -> str:
        """Return the content of the first file in a gist.

        Raises:
            EmptyGist: If the gist has no files.
        """
        first = self.get_gist(gist_id).first_file()
        if first is None:
            raise EmptyGist(gist_id=gist_id)
        return first.content or ""

    def close(self) -> None:
        """Close the underlying HTTP session."""

        self._session.close()
        logger.debug("GitHub client closed")

"""Pydantic models for the GitHub payloads the client consumes.

Only the fields we read are declared; everything else GitHub sends is ignored.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class GitHubModel(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)


class Team(GitHubModel):
    id: int
    name: str
    slug: str | None = None


class Member(GitHubModel):
    """A user as it appears in team member and follower listings."""

    login: str
    id: int | None = None
    html_url: str | None = None


class GistFile(GitHubModel):
    filename: str | None = None
    content: str | None = None


class Gist(GitHubModel):
    id: str
    description: str | None = None
    # JSON object order is kept by the decoder, so iteration follows the API.
    files: dict[str, GistFile] = Field(default_factory=dict)

    def first_file(self) -> GistFile | None:
        """Return the first file listed in the gist, if any."""

        return next(iter(self.files.values()), None)


class Issue(GitHubModel):
    number: int
    title: str
    body: str | None = None
    assignee: Member | None = None
    html_url: str | None = None
    created_at: str | None = None


class Comment(GitHubModel):
    id: int
    body: str | None = None
    html_url: str | None = None

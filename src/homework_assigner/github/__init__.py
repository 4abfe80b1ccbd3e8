"""GitHub REST client and payload models."""

from homework_assigner.github.client import FOLLOWERS_PAGE_SIZE, GitHubClient
from homework_assigner.github.models import Comment, Gist, GistFile, Issue, Member, Team

__all__ = [
    "FOLLOWERS_PAGE_SIZE",
    "Comment",
    "Gist",
    "GistFile",
    "GitHubClient",
    "Issue",
    "Member",
    "Team",
]

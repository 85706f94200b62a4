"""GitHub repository contents API client."""

from .client import GitHubClient, GitHubRequest, GitHubResponse, get_token
from .contents import ContentsService
from .errors import RequestError, ResolutionError
from .models import (
    Commit,
    RepositoryContents,
    RepositoryFile,
    RepositoryId,
    RepositoryIdProvider,
)

__all__ = [
    "GitHubClient",
    "GitHubRequest",
    "GitHubResponse",
    "ContentsService",
    "RequestError",
    "ResolutionError",
    "Commit",
    "RepositoryContents",
    "RepositoryFile",
    "RepositoryId",
    "RepositoryIdProvider",
    "get_token",
]

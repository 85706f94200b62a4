"""Base class for GitHub API services."""

import logging
from typing import Any

from .errors import ResolutionError
from .models import RepositoryIdProvider

logger = logging.getLogger(__name__)

SEGMENT_REPOS = "/repos"


class GitHubService:
    """Service bound to an explicit GitHub client."""

    def __init__(self, client: Any):
        """
        Args:
            client: Transport exposing get/put/delete, usually a GitHubClient
        """
        if client is None:
            raise ValueError("Client cannot be None")
        self.client = client

    def get_id(self, repository: RepositoryIdProvider | None) -> str:
        """Resolve a repository reference to its "owner/name" id."""
        if repository is None:
            raise ResolutionError("Repository cannot be None")
        generate_id = getattr(repository, "generate_id", None)
        if generate_id is None:
            raise ResolutionError(f"Not a repository reference: {repository!r}")
        repo_id = generate_id()
        if not repo_id:
            raise ResolutionError("Repository id cannot be empty")
        return repo_id

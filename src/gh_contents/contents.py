"""Repository contents service."""

import logging

from .client import GitHubRequest
from .errors import RequestError
from .models import RepositoryContents, RepositoryFile, RepositoryIdProvider
from .service import SEGMENT_REPOS, GitHubService

logger = logging.getLogger(__name__)

SEGMENT_CONTENTS = "/contents"
SEGMENT_README = "/readme"

NOT_FOUND_MESSAGE = "Not Found (404)"


def _is_not_found(error: RequestError) -> bool:
    if error.status is not None:
        return error.status == 404
    return str(error) == NOT_FOUND_MESSAGE


class ContentsService(GitHubService):
    """
    Service for the repository contents API.

    See https://docs.github.com/rest/repos/contents
    """

    def get_readme(
        self, repository: RepositoryIdProvider, ref: str | None = None
    ) -> RepositoryContents:
        """
        Get the repository README.

        Args:
            repository: Repository reference
            ref: Branch/tag/commit (default branch when empty)

        Returns:
            README entry with base64 content
        """
        repo_id = self.get_id(repository)
        request = GitHubRequest(
            uri=f"{SEGMENT_REPOS}/{repo_id}{SEGMENT_README}",
            type=RepositoryContents,
        )
        if ref:
            request.params = {"ref": ref}
        logger.info("Fetching README: %s ref=%s", repo_id, ref)
        return self.client.get(request).body

    def get_contents(
        self,
        repository: RepositoryIdProvider,
        path: str | None = None,
        ref: str | None = None,
    ) -> list[RepositoryContents]:
        """
        Get contents of a path at a reference.

        A file path yields a list with the single file entry, a directory
        path yields its listing.

        Args:
            repository: Repository reference
            path: Path in repository (empty for root)
            ref: Branch/tag/commit (default branch when empty)

        Returns:
            List of RepositoryContents
        """
        repo_id = self.get_id(repository)
        uri = f"{SEGMENT_REPOS}/{repo_id}{SEGMENT_CONTENTS}"
        if path:
            if not path.startswith("/"):
                uri += "/"
            uri += path
        request = GitHubRequest(
            uri=uri,
            type=RepositoryContents,
            array_type=list[RepositoryContents],
        )
        if ref:
            request.params = {"ref": ref}
        logger.info("Fetching contents: %s path=%s ref=%s", repo_id, path, ref)

        body = self.client.get(request).body
        if isinstance(body, RepositoryContents):
            logger.debug("Single file response: %s", body.name)
            return [body]
        logger.debug("Directory listing: %d items", len(body))
        return body

    def exists(
        self,
        repository: RepositoryIdProvider,
        path: str | None,
        ref: str | None = None,
    ) -> bool:
        """Check if contents exist at path."""
        try:
            return len(self.get_contents(repository, path, ref)) != 0
        except RequestError as e:
            if _is_not_found(e):
                logger.debug("Contents not found: %s", path)
                return False
            raise

    def create_file(
        self,
        repository: RepositoryIdProvider,
        file: RepositoryContents,
        branch: str | None = None,
    ) -> RepositoryFile:
        """Create a file. `file.content` must be base64-encoded."""
        return self._save_file(repository, file, branch)

    def update_file(
        self,
        repository: RepositoryIdProvider,
        file: RepositoryContents,
        branch: str | None = None,
    ) -> RepositoryFile:
        """Update a file. `file.sha` must be the current blob SHA."""
        return self._save_file(repository, file, branch)

    def delete_file(
        self,
        repository: RepositoryIdProvider,
        file: RepositoryContents,
        branch: str | None = None,
    ) -> None:
        """
        Delete a file.

        A RequestError with status 200 is treated as success, any other
        status is raised.
        """
        repo_id = self.get_id(repository)
        uri = self._file_uri(file, repo_id)
        params = self._file_params(file, branch)
        logger.info("Deleting file: %s path=%s branch=%s", repo_id, file.path, branch)
        try:
            self.client.delete(uri, params)
        except RequestError as e:
            if e.status != 200:
                raise
            logger.debug("Ignoring delete error with status 200: %s", e)

    def _save_file(
        self,
        repository: RepositoryIdProvider,
        file: RepositoryContents,
        branch: str | None,
    ) -> RepositoryFile:
        repo_id = self.get_id(repository)
        uri = self._file_uri(file, repo_id)
        params = self._file_params(file, branch)
        logger.info(
            "Saving file: %s path=%s branch=%s (%s)",
            repo_id, file.path, branch, params["message"],
        )
        return self.client.put(uri, params, RepositoryFile)

    @staticmethod
    def _file_uri(file: RepositoryContents, repo_id: str) -> str:
        return f"{SEGMENT_REPOS}/{repo_id}{SEGMENT_CONTENTS}/{file.path}"

    @staticmethod
    def _file_params(
        file: RepositoryContents, branch: str | None
    ) -> dict[str, str]:
        params: dict[str, str] = {}
        if file.sha is not None:
            params["sha"] = file.sha
            if file.content is not None:
                params["content"] = file.content
                params["message"] = f"update file {file.name}"
            else:
                params["message"] = f"delete file {file.name}"
        else:
            params["content"] = file.content
            params["message"] = f"create file {file.name}"
        if branch is not None:
            params["branch"] = branch
        return params

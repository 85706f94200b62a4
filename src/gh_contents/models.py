"""GitHub contents API data models."""

import base64
from datetime import datetime
from typing import Literal, Protocol
from urllib.parse import urlparse

from pydantic import BaseModel, Field

from .errors import ResolutionError

TYPE_FILE = "file"
TYPE_DIR = "dir"
TYPE_SYMLINK = "symlink"
TYPE_SUBMODULE = "submodule"

ENCODING_BASE64 = "base64"


class RepositoryContents(BaseModel):
    """File or directory entry returned by the contents API."""

    name: str | None = None
    path: str = ""
    type: Literal["file", "dir", "symlink", "submodule"] | None = None
    sha: str | None = None  # Git blob SHA, required for update/delete
    size: int | None = None
    content: str | None = None  # Only set when a single file is fetched
    encoding: str | None = None  # Usually "base64" for files
    url: str | None = None
    html_url: str | None = None
    git_url: str | None = None
    download_url: str | None = None

    @classmethod
    def from_bytes(
        cls, path: str, data: bytes, sha: str | None = None
    ) -> "RepositoryContents":
        """Build an entry ready to be written, with base64-encoded content."""
        return cls(
            name=path.rstrip("/").rsplit("/", 1)[-1],
            path=path,
            type=TYPE_FILE,
            sha=sha,
            size=len(data),
            content=base64.b64encode(data).decode("ascii"),
            encoding=ENCODING_BASE64,
        )

    def decoded_content(self) -> bytes:
        """Decode the base64 payload of a file entry."""
        if self.content is None:
            raise ValueError(f"File has no content: {self.path}")
        if self.encoding not in (None, ENCODING_BASE64):
            raise ValueError(f"Unsupported encoding {self.encoding!r}: {self.path}")
        # The API wraps base64 payloads at 60 columns
        return base64.b64decode("".join(self.content.split()))


class CommitUser(BaseModel):
    """Commit author or committer."""

    name: str | None = None
    email: str | None = None
    date: datetime | None = None


class CommitTree(BaseModel):
    """Tree a commit points at."""

    sha: str
    url: str | None = None


class Commit(BaseModel):
    """Commit created by a contents write."""

    sha: str | None = None
    message: str | None = None
    url: str | None = None
    html_url: str | None = None
    author: CommitUser | None = None
    committer: CommitUser | None = None
    tree: CommitTree | None = None
    parents: list[CommitTree] = Field(default_factory=list)


class RepositoryFile(BaseModel):
    """Result of a create or update: the written entry and its commit."""

    content: RepositoryContents | None = None
    commit: Commit | None = None


class RepositoryIdProvider(Protocol):
    """Anything that can name a repository in an API path."""

    def generate_id(self) -> str | None: ...


class RepositoryId(BaseModel):
    """Repository owner and name."""

    owner: str
    name: str

    def generate_id(self) -> str:
        return f"{self.owner}/{self.name}"

    @classmethod
    def create_from_id(cls, value: str) -> "RepositoryId":
        """Parse an "owner/name" id."""
        owner, sep, name = value.strip().strip("/").partition("/")
        if not sep or not owner or not name or "/" in name:
            raise ResolutionError(f"Invalid repository id: {value!r}")
        return cls(owner=owner, name=name)

    @classmethod
    def create_from_url(cls, url: str) -> "RepositoryId":
        """
        Parse a repository URL.

        Accepts https://github.com/owner/name, with or without a trailing
        ".git" or extra path segments after the name.
        """
        parsed = urlparse(url.strip())
        segments = [s for s in parsed.path.split("/") if s]
        if not parsed.netloc or len(segments) < 2:
            raise ResolutionError(f"Invalid repository URL: {url!r}")
        name = segments[1].removesuffix(".git")
        if not name:
            raise ResolutionError(f"Invalid repository URL: {url!r}")
        return cls(owner=segments[0], name=name)

    def __str__(self) -> str:
        return self.generate_id()

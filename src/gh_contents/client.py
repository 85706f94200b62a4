"""GitHub REST transport."""

import logging
import os
import subprocess
from dataclasses import dataclass, field
from typing import Any, TypeVar

import httpx
from pydantic import TypeAdapter
from tenacity import (
    retry,
    retry_if_exception,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
    before_sleep_log,
)

from .errors import RequestError

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Retry configuration
DEFAULT_MAX_RETRIES = 3
DEFAULT_MIN_WAIT = 1  # seconds
DEFAULT_MAX_WAIT = 10  # seconds
DEFAULT_TIMEOUT = 30.0  # seconds

# Retryable exceptions
RETRYABLE_EXCEPTIONS = (
    httpx.ConnectError,
    httpx.ConnectTimeout,
    httpx.ReadTimeout,
    httpx.WriteTimeout,
    httpx.PoolTimeout,
    httpx.NetworkError,
)


def get_token_from_gh_cli() -> str | None:
    """
    Get GitHub token from gh cli.

    Returns:
        Token string or None if gh cli not available/authenticated
    """
    try:
        result = subprocess.run(
            ["gh", "auth", "token"],
            capture_output=True,
            text=True,
            timeout=5,
        )
        if result.returncode == 0 and result.stdout.strip():
            logger.info("Using token from gh cli")
            return result.stdout.strip()
    except (subprocess.TimeoutExpired, FileNotFoundError) as e:
        logger.debug("gh cli not available: %s", e)
    return None


def get_token(token: str | None = None, use_gh_cli: bool = False) -> str | None:
    """
    Get GitHub token from various sources.

    Priority:
    1. Explicitly provided token
    2. Environment variable GH_TOKEN / GITHUB_TOKEN
    3. gh cli (`gh auth token`) - only if use_gh_cli=True

    Args:
        token: Explicitly provided token
        use_gh_cli: Whether to use gh cli credentials (requires user consent)

    Returns:
        GitHub token or None
    """
    if token:
        logger.debug("Using explicitly provided token")
        return token

    # Check environment variables
    env_token = os.environ.get("GH_TOKEN") or os.environ.get("GITHUB_TOKEN")
    if env_token:
        logger.info("Using token from environment variable")
        return env_token

    # Try gh cli only if explicitly allowed
    if use_gh_cli:
        return get_token_from_gh_cli()

    return None


def _is_server_error(exc: BaseException) -> bool:
    return (
        isinstance(exc, httpx.HTTPStatusError)
        and exc.response.status_code >= 500
    )


def create_retry_decorator(max_retries: int = DEFAULT_MAX_RETRIES):
    """Create a retry decorator with specified max retries."""
    return retry(
        retry=(
            retry_if_exception_type(RETRYABLE_EXCEPTIONS)
            | retry_if_exception(_is_server_error)
        ),
        stop=stop_after_attempt(max_retries),
        wait=wait_exponential(multiplier=1, min=DEFAULT_MIN_WAIT, max=DEFAULT_MAX_WAIT),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        reraise=True,
    )


def request_error(response: httpx.Response) -> RequestError:
    """Build a RequestError from an error response body."""
    message = None
    errors = None
    try:
        data = response.json()
    except ValueError:
        data = None
    if isinstance(data, dict):
        message = data.get("message")
        errors = data.get("errors")
    return RequestError(
        response.status_code,
        message or response.reason_phrase or "Request failed",
        errors if isinstance(errors, list) else None,
    )


@dataclass
class GitHubRequest:
    """
    GET request description.

    `type` is used when the body decodes to a JSON object and `array_type`
    when it decodes to a JSON array, so one request can accept either shape.
    """

    uri: str
    params: dict[str, str] = field(default_factory=dict)
    type: Any = None
    array_type: Any = None


@dataclass
class GitHubResponse:
    """Decoded response."""

    status: int
    body: Any


class GitHubClient:
    """GitHub REST API client with retry support."""

    BASE_URL = "https://api.github.com"

    def __init__(
        self,
        token: str | None = None,
        base_url: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        use_gh_cli: bool = False,
        max_retries: int = DEFAULT_MAX_RETRIES,
        transport: httpx.BaseTransport | None = None,
    ):
        """
        Initialize GitHub client.

        Args:
            token: GitHub personal access token (optional)
            base_url: Custom base URL (defaults to GitHub API)
            timeout: Request timeout in seconds
            use_gh_cli: Use gh cli credentials (requires user consent)
            max_retries: Maximum number of retry attempts (default: 3)
            transport: Custom httpx transport (mocking, proxies)
        """
        self.base_url = (base_url or self.BASE_URL).rstrip("/")
        self.timeout = timeout
        self.max_retries = max_retries
        self.transport = transport
        self.headers = {
            "Accept": "application/vnd.github.v3+json",
            "User-Agent": "gh-contents-client",
        }

        # Get token
        resolved_token = get_token(token, use_gh_cli=use_gh_cli)

        if resolved_token:
            self.headers["Authorization"] = f"token {resolved_token}"
            logger.debug("GitHub client initialized with token")
        else:
            logger.warning("GitHub client initialized without token (rate limited)")
        logger.info("GitHub client ready, base_url=%s, max_retries=%d", self.base_url, max_retries)

    def _request(
        self, method: str, uri: str, **kwargs: Any
    ) -> httpx.Response:
        """Make HTTP request to GitHub API with retry."""
        url = f"{self.base_url}{uri}"

        @create_retry_decorator(self.max_retries)
        def do_request() -> httpx.Response:
            logger.debug("Request: %s %s", method, url)
            with httpx.Client(
                timeout=self.timeout,
                headers=self.headers,
                transport=self.transport,
                follow_redirects=True,
            ) as client:
                response = client.request(method, url, **kwargs)
                logger.debug(
                    "Response: %s %s (status=%d)",
                    method,
                    uri,
                    response.status_code,
                )
                # Retry on 5xx errors
                if response.status_code >= 500:
                    logger.warning("Server error %d, will retry", response.status_code)
                response.raise_for_status()
                return response

        try:
            return do_request()
        except httpx.HTTPStatusError as e:
            error = request_error(e.response)
            logger.debug("Request failed: %s %s: %s", method, uri, error)
            raise error from e

    def download(self, url: str) -> bytes:
        """Download raw content (e.g. a file's download_url) with retry."""
        @create_retry_decorator(self.max_retries)
        def do_download() -> bytes:
            logger.debug("Downloading: %s", url)
            with httpx.Client(
                timeout=self.timeout,
                headers=self.headers,
                transport=self.transport,
                follow_redirects=True,
            ) as client:
                response = client.get(url)
                if response.status_code >= 500:
                    logger.warning("Server error %d, will retry", response.status_code)
                response.raise_for_status()
                return response.content

        try:
            return do_download()
        except httpx.HTTPStatusError as e:
            raise request_error(e.response) from e

    @staticmethod
    def _decode(response: httpx.Response, type_: Any) -> Any:
        if not response.content:
            return None
        data = response.json()
        if type_ is None:
            return data
        return TypeAdapter(type_).validate_python(data)

    def get(self, request: GitHubRequest) -> GitHubResponse:
        """
        GET a resource.

        Returns:
            GitHubResponse whose body is validated as `request.type` for a
            JSON object or as `request.array_type` for a JSON array
        """
        response = self._request("GET", request.uri, params=request.params or None)
        data = response.json()
        if isinstance(data, list) and request.array_type is not None:
            body = TypeAdapter(request.array_type).validate_python(data)
        elif isinstance(data, dict) and request.type is not None:
            body = TypeAdapter(request.type).validate_python(data)
        else:
            body = data
        return GitHubResponse(status=response.status_code, body=body)

    def put(self, uri: str, params: dict[str, str], type_: type[T]) -> T:
        """PUT a JSON body and validate the response as `type_`."""
        response = self._request("PUT", uri, json=params)
        return self._decode(response, type_)

    def delete(self, uri: str, params: dict[str, str] | None = None) -> None:
        """DELETE with an optional JSON body."""
        if params:
            self._request("DELETE", uri, json=params)
        else:
            self._request("DELETE", uri)

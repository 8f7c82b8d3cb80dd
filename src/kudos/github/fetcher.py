"""Profile fetchers backed by the gh CLI or the GitHub REST API."""

import asyncio
import json
import time
from abc import ABC, abstractmethod
from typing import Any
from urllib.parse import quote

import httpx

from ..config import KudosConfig
from ..errors import FetchError, SchemaError
from ..logging import JSONLLogger, safe_emit
from .models import ProfileRecord


def _user_path(login: str) -> str:
    return f"users/{quote(login, safe='')}"


def _parse_json(text: str, source: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise SchemaError(f"Invalid JSON from {source}: {e}") from e


class ProfileFetcher(ABC):
    """Resolves a GitHub login to a validated profile.

    Implementations make exactly one request per call and never retry.
    """

    @abstractmethod
    async def fetch(self, login: str) -> ProfileRecord:
        """Fetch the profile for `login`.

        Raises:
            FetchError: The lookup itself failed.
            SchemaError: The response is not a valid profile.
        """
        ...


class GhCliFetcher(ProfileFetcher):
    """Fetch profiles with `gh api users/<login>`."""

    def __init__(self, gh_path: str = "gh", logger: JSONLLogger | None = None) -> None:
        self._gh_path = gh_path
        self._logger = logger

    async def fetch(self, login: str) -> ProfileRecord:
        argv = [self._gh_path, "api", _user_path(login)]
        start_time = time.monotonic()

        try:
            process = await asyncio.create_subprocess_exec(
                *argv,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except FileNotFoundError as e:
            raise FetchError(f"gh CLI not found: {self._gh_path}") from e
        except OSError as e:
            raise FetchError(f"Failed to run gh: {e}") from e

        stdout, stderr = await process.communicate()
        exit_code = process.returncode
        duration_ms = (time.monotonic() - start_time) * 1000

        if self._logger is not None:
            safe_emit(self._logger.log_command, argv, exit_code, duration_ms, login=login)

        if exit_code != 0:
            message = stderr.decode("utf-8", errors="replace").strip()
            raise FetchError(message or f"gh exited with code {exit_code}")

        payload = _parse_json(stdout.decode("utf-8", errors="replace"), "gh api")
        return ProfileRecord.from_payload(payload)


class HttpFetcher(ProfileFetcher):
    """Fetch profiles from the GitHub REST API over httpx."""

    def __init__(
        self,
        base_url: str = "https://api.github.com",
        token: str | None = None,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
        logger: JSONLLogger | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._token = token
        self._timeout = timeout
        self._transport = transport
        self._logger = logger

    def _headers(self) -> dict[str, str]:
        headers = {
            "Accept": "application/vnd.github+json",
            "User-Agent": "kudos",
        }
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    async def fetch(self, login: str) -> ProfileRecord:
        url = f"{self._base_url}/{_user_path(login)}"
        start_time = time.monotonic()

        try:
            async with httpx.AsyncClient(
                timeout=self._timeout,
                headers=self._headers(),
                transport=self._transport,
            ) as client:
                response = await client.get(url)
        except httpx.TimeoutException as e:
            raise FetchError(f"Request timed out after {self._timeout}s") from e
        except httpx.RequestError as e:
            raise FetchError(f"Request failed: {e}") from e

        if self._logger is not None:
            safe_emit(
                self._logger.log,
                "http_fetch",
                login=login,
                duration_ms=(time.monotonic() - start_time) * 1000,
                status_code=response.status_code,
            )

        if response.status_code == 404:
            raise FetchError(f"GitHub user not found: {login}")
        if not response.is_success:
            raise FetchError(
                f"GitHub API returned HTTP {response.status_code} for {login}"
            )

        payload = _parse_json(response.text, "GitHub API")
        return ProfileRecord.from_payload(payload)


def create_fetcher(config: KudosConfig, logger: JSONLLogger | None = None) -> ProfileFetcher:
    """Build the fetcher selected by `config.fetch_backend`."""
    if config.fetch_backend == "http":
        return HttpFetcher(
            base_url=config.api_base_url,
            token=config.github_token,
            timeout=config.http_timeout,
            logger=logger,
        )
    return GhCliFetcher(gh_path=config.gh_path, logger=logger)

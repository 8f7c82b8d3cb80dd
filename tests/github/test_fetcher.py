"""Tests for the gh CLI and HTTP profile fetchers."""

import json
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from kudos.config import KudosConfig
from kudos.errors import FetchError, SchemaError
from kudos.github import GhCliFetcher, HttpFetcher, create_fetcher
from kudos.logging import JSONLLogger

USER = {
    "login": "ada",
    "name": "Ada Lovelace",
    "twitter_username": None,
    "blog": "",
    "bio": None,
    "avatar_url": "https://avatars.githubusercontent.com/u/1",
    "html_url": "https://github.com/ada",
    "public_repos": 3,
    "followers": 10,
}


def fake_process(stdout: bytes = b"", stderr: bytes = b"", returncode: int = 0) -> MagicMock:
    process = MagicMock()
    process.communicate = AsyncMock(return_value=(stdout, stderr))
    process.returncode = returncode
    return process


def patch_exec(process: MagicMock | None = None, side_effect=None):
    return patch(
        "kudos.github.fetcher.asyncio.create_subprocess_exec",
        new=AsyncMock(return_value=process, side_effect=side_effect),
    )


class TestGhCliFetcher:
    @pytest.mark.asyncio
    async def test_fetch_parses_profile(self):
        with patch_exec(fake_process(stdout=json.dumps(USER).encode())) as exec_mock:
            record = await GhCliFetcher().fetch("ada")

        assert record.login == "ada"
        assert record.name == "Ada Lovelace"
        assert record.blog is None
        args = exec_mock.call_args.args
        assert list(args) == ["gh", "api", "users/ada"]

    @pytest.mark.asyncio
    async def test_custom_gh_path(self):
        with patch_exec(fake_process(stdout=json.dumps(USER).encode())) as exec_mock:
            await GhCliFetcher(gh_path="/opt/gh/bin/gh").fetch("ada")

        assert exec_mock.call_args.args[0] == "/opt/gh/bin/gh"

    @pytest.mark.asyncio
    async def test_login_is_quoted(self):
        with patch_exec(fake_process(stdout=json.dumps(USER).encode())) as exec_mock:
            await GhCliFetcher().fetch("../repos")

        assert exec_mock.call_args.args[2] == "users/..%2Frepos"

    @pytest.mark.asyncio
    async def test_nonzero_exit_raises_fetch_error(self):
        process = fake_process(stderr=b"gh: Not Found (HTTP 404)\n", returncode=1)
        with patch_exec(process):
            with pytest.raises(FetchError, match="Not Found"):
                await GhCliFetcher().fetch("nobody-here")

    @pytest.mark.asyncio
    async def test_nonzero_exit_without_stderr(self):
        with patch_exec(fake_process(returncode=4)):
            with pytest.raises(FetchError, match="exited with code 4"):
                await GhCliFetcher().fetch("ada")

    @pytest.mark.asyncio
    async def test_missing_binary(self):
        with patch_exec(side_effect=FileNotFoundError("gh")):
            with pytest.raises(FetchError, match="gh CLI not found"):
                await GhCliFetcher().fetch("ada")

    @pytest.mark.asyncio
    async def test_invalid_json_is_schema_error(self):
        with patch_exec(fake_process(stdout=b"<html>rate limited</html>")):
            with pytest.raises(SchemaError, match="Invalid JSON"):
                await GhCliFetcher().fetch("ada")

    @pytest.mark.asyncio
    async def test_missing_field_is_schema_error(self):
        payload = {k: v for k, v in USER.items() if k != "html_url"}
        with patch_exec(fake_process(stdout=json.dumps(payload).encode())):
            with pytest.raises(SchemaError, match="html_url"):
                await GhCliFetcher().fetch("ada")

    @pytest.mark.asyncio
    async def test_single_attempt(self):
        process = fake_process(stderr=b"connection reset", returncode=1)
        with patch_exec(process) as exec_mock:
            with pytest.raises(FetchError):
                await GhCliFetcher().fetch("ada")

        assert exec_mock.await_count == 1

    @pytest.mark.asyncio
    async def test_logs_command(self, tmp_path: Path):
        logger = JSONLLogger(log_dir=tmp_path)
        with patch_exec(fake_process(stdout=json.dumps(USER).encode())):
            await GhCliFetcher(logger=logger).fetch("ada")

        entry = json.loads(logger.log_path.read_text().splitlines()[0])
        assert entry["event"] == "command"
        assert entry["argv"] == ["gh", "api", "users/ada"]
        assert entry["login"] == "ada"
        assert "duration_ms" in entry


def mock_transport(handler) -> httpx.MockTransport:
    return httpx.MockTransport(handler)


class TestHttpFetcher:
    @pytest.mark.asyncio
    async def test_fetch_parses_profile(self):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=USER)

        fetcher = HttpFetcher(transport=mock_transport(handler))
        record = await fetcher.fetch("ada")

        assert record.login == "ada"
        assert str(seen[0].url) == "https://api.github.com/users/ada"
        assert seen[0].headers["Accept"] == "application/vnd.github+json"
        assert "Authorization" not in seen[0].headers

    @pytest.mark.asyncio
    async def test_sends_token(self):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=USER)

        fetcher = HttpFetcher(token="ghp_test", transport=mock_transport(handler))
        await fetcher.fetch("ada")

        assert seen[0].headers["Authorization"] == "Bearer ghp_test"

    @pytest.mark.asyncio
    async def test_custom_base_url(self):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=USER)

        fetcher = HttpFetcher(
            base_url="https://ghe.example.com/api/v3/",
            transport=mock_transport(handler),
        )
        await fetcher.fetch("ada")

        assert str(seen[0].url) == "https://ghe.example.com/api/v3/users/ada"

    @pytest.mark.asyncio
    async def test_not_found(self):
        fetcher = HttpFetcher(
            transport=mock_transport(lambda r: httpx.Response(404, json={"message": "Not Found"}))
        )
        with pytest.raises(FetchError, match="not found: ghost"):
            await fetcher.fetch("ghost")

    @pytest.mark.asyncio
    async def test_server_error(self):
        fetcher = HttpFetcher(transport=mock_transport(lambda r: httpx.Response(503)))
        with pytest.raises(FetchError, match="HTTP 503"):
            await fetcher.fetch("ada")

    @pytest.mark.asyncio
    async def test_connection_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        fetcher = HttpFetcher(transport=mock_transport(handler))
        with pytest.raises(FetchError, match="Request failed"):
            await fetcher.fetch("ada")

    @pytest.mark.asyncio
    async def test_timeout(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("too slow", request=request)

        fetcher = HttpFetcher(timeout=2.5, transport=mock_transport(handler))
        with pytest.raises(FetchError, match="timed out after 2.5s"):
            await fetcher.fetch("ada")

    @pytest.mark.asyncio
    async def test_invalid_json(self):
        fetcher = HttpFetcher(
            transport=mock_transport(lambda r: httpx.Response(200, text="not json"))
        )
        with pytest.raises(SchemaError):
            await fetcher.fetch("ada")


class TestCreateFetcher:
    def test_default_is_gh(self):
        fetcher = create_fetcher(KudosConfig(db_path=Path("x.db")))
        assert isinstance(fetcher, GhCliFetcher)

    def test_http_backend(self):
        config = KudosConfig(fetch_backend="http", github_token="t", db_path=Path("x.db"))
        fetcher = create_fetcher(config)
        assert isinstance(fetcher, HttpFetcher)

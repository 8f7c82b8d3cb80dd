"""Contributor lookup tool.

Fetches a GitHub profile, formats a changeset credit line and stores a
note about the contributor in memory for future reference.
"""

import json
import logging
from typing import Any

from ..config import KudosConfig
from ..credits import format_credit_line
from ..errors import KudosError
from ..github import ProfileFetcher, create_fetcher
from ..logging import JSONLLogger
from ..memory import MemoryRecorder, open_store
from .base import Tool, ToolResult

logger = logging.getLogger(__name__)

UNKNOWN_ERROR = "Unknown error fetching contributor"


def reset_contributor_cache() -> None:
    """Reset cached contributor lookups.

    There is no cache yet; kept so callers and tests can reset state.
    """


class ContributorLookupTool(Tool):
    """Tool that turns a GitHub login into a ready-to-paste credit line."""

    def __init__(self, fetcher: ProfileFetcher, recorder: MemoryRecorder) -> None:
        self.fetcher = fetcher
        self.recorder = recorder

    @classmethod
    def from_config(
        cls, config: KudosConfig, event_logger: JSONLLogger | None = None
    ) -> "ContributorLookupTool":
        """Wire the configured fetcher and a SQLite-backed recorder."""
        db_path = config.db_path
        return cls(
            fetcher=create_fetcher(config, logger=event_logger),
            recorder=MemoryRecorder(lambda: open_store(db_path)),
        )

    @property
    def name(self) -> str:
        return "contributor_lookup"

    @property
    def description(self) -> str:
        return (
            "Fetch GitHub contributor profile and generate formatted changeset credit. "
            "Automatically stores contributor info in memory. "
            "Returns login, name, twitter, bio, and ready-to-paste credit_line."
        )

    @property
    def parameters(self) -> dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                "login": {
                    "type": "string",
                    "minLength": 1,
                    "description": "GitHub username (required)",
                },
                "issue": {
                    "type": "integer",
                    "description": "Issue number for context (optional)",
                },
            },
            "required": ["login"],
        }

    async def lookup(self, login: str, issue: int | None = None) -> dict[str, Any]:
        """Run fetch, format and record for one contributor.

        Returns:
            The success report, or `{"error", "login"}` when the fetch fails.
        """
        try:
            profile = await self.fetcher.fetch(login)
        except KudosError as e:
            return {"error": str(e), "login": login}
        except Exception:
            logger.exception("Unexpected error fetching contributor %s", login)
            return {"error": UNKNOWN_ERROR, "login": login}

        credit_line = format_credit_line(profile, issue)
        memory_stored = self.recorder.record(profile, issue)

        return {
            "login": profile.login,
            "name": profile.name,
            "twitter": profile.twitter_username,
            "bio": profile.bio,
            "credit_line": credit_line,
            "memory_stored": memory_stored,
        }

    async def execute(self, login: str, issue: int | None = None, **kwargs: Any) -> ToolResult:
        """Look up a contributor and return the report as JSON."""
        result = await self.lookup(login, issue)
        output = json.dumps(result, indent=2)

        if "error" in result:
            return ToolResult(success=False, output=output, error=result["error"])

        return ToolResult(
            success=True,
            output=output,
            metadata={"memory_stored": result["memory_stored"]},
        )

"""GitHub profile model and payload validation."""

from dataclasses import dataclass
from typing import Any

from ..errors import SchemaError

REQUIRED_STRING_FIELDS = ("login", "avatar_url", "html_url")
OPTIONAL_STRING_FIELDS = ("name", "twitter_username", "blog", "bio")
OPTIONAL_INT_FIELDS = ("public_repos", "followers")


@dataclass(frozen=True)
class ProfileRecord:
    """Validated subset of a GitHub user's public profile.

    Attributes:
        login: GitHub username, never empty.
        name: Display name, None when the user has not set one.
        twitter_username: Twitter/X handle without the leading '@'.
        blog: Website URL. Not used for credits.
        bio: Profile bio.
        avatar_url: Avatar image URL.
        html_url: Profile page URL.
        public_repos: Number of public repositories, if reported.
        followers: Follower count, if reported.
    """

    login: str
    avatar_url: str
    html_url: str
    name: str | None = None
    twitter_username: str | None = None
    blog: str | None = None
    bio: str | None = None
    public_repos: int | None = None
    followers: int | None = None

    @classmethod
    def from_payload(cls, payload: Any) -> "ProfileRecord":
        """Build a record from a `users/<login>` API response.

        Empty strings are treated as absent. Unknown keys are ignored.

        Raises:
            SchemaError: If a required field is missing or a field has the
                wrong type.
        """
        if not isinstance(payload, dict):
            raise SchemaError(
                f"Expected a JSON object for the user profile, got {type(payload).__name__}"
            )

        values: dict[str, Any] = {}

        for key in REQUIRED_STRING_FIELDS:
            value = payload.get(key)
            if value is None:
                raise SchemaError(f"Missing required field '{key}'")
            if not isinstance(value, str):
                raise SchemaError(
                    f"Invalid field '{key}': expected string, got {type(value).__name__}"
                )
            values[key] = value

        if not values["login"]:
            raise SchemaError("Invalid field 'login': must not be empty")

        for key in OPTIONAL_STRING_FIELDS:
            value = payload.get(key)
            if value is not None and not isinstance(value, str):
                raise SchemaError(
                    f"Invalid field '{key}': expected string or null, got {type(value).__name__}"
                )
            values[key] = value or None

        for key in OPTIONAL_INT_FIELDS:
            value = payload.get(key)
            # bool is a subclass of int
            if value is not None and (isinstance(value, bool) or not isinstance(value, int)):
                raise SchemaError(
                    f"Invalid field '{key}': expected integer, got {type(value).__name__}"
                )
            values[key] = value

        return cls(**values)

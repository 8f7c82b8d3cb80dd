"""Data models for contributor memory notes."""

from dataclasses import dataclass

from ..github.models import ProfileRecord


@dataclass(frozen=True)
class MemoryNote:
    """A free-text note about a contributor.

    Attributes:
        information: Human-readable summary of the contributor.
        tags: Ordered, de-duplicated tags for later recall.
    """

    information: str
    tags: tuple[str, ...] = ()

    @property
    def tags_csv(self) -> str:
        """Tags in the comma-joined form the store expects."""
        return ",".join(self.tags)


@dataclass(frozen=True)
class StoredNote:
    """A note as read back from the store."""

    id: int
    information: str
    tags: str
    created_at: str

    @property
    def tag_list(self) -> list[str]:
        return [tag for tag in self.tags.split(",") if tag]


def _ordered_tags(*candidates: str | None) -> tuple[str, ...]:
    seen: dict[str, None] = {}
    for tag in candidates:
        if tag:
            seen.setdefault(tag, None)
    return tuple(seen)


def build_note(profile: ProfileRecord, issue_number: int | None = None) -> MemoryNote:
    """Summarise a contributor profile as a memory note.

    Example:
        "Contributor @ada: Ada Lovelace (@ada on Twitter). Filed issue #42. Bio: 'Math'"
    """
    information = f"Contributor @{profile.login}: {profile.name or profile.login}"
    if profile.twitter_username:
        information += f" (@{profile.twitter_username} on Twitter)"
    if issue_number:
        information += f". Filed issue #{issue_number}"
    if profile.bio:
        information += f". Bio: '{profile.bio}'"

    tags = _ordered_tags(
        "contributor",
        profile.login,
        f"issue-{issue_number}" if issue_number else None,
    )
    return MemoryNote(information=information, tags=tags)

"""Changeset credit line formatting.

Tiers are tried in order and the first match wins:

1. Name + Twitter: "Thanks to {name} ([@twitter](https://x.com/twitter)) for reporting #{issue}!"
2. Twitter only:   "Thanks to [@twitter](https://x.com/twitter) for reporting #{issue}!"
3. Name only:      "Thanks to {name} (@{login} on GitHub) for reporting #{issue}!"
4. Login only:     "Thanks to @{login} for reporting #{issue}!"

Without an issue number the tail reads "for the report!".
"""

from dataclasses import dataclass
from typing import Callable

from ..github.models import ProfileRecord


@dataclass(frozen=True)
class CreditTier:
    """One formatting rule, selected by which optional fields are present."""

    name: str
    matches: Callable[[ProfileRecord], bool]
    template: str


@dataclass(frozen=True)
class CreditLine:
    """A rendered credit line and the tier that produced it."""

    text: str
    tier: CreditTier


# Order matters: name_and_twitter must precede both single-field tiers.
CREDIT_TIERS: tuple[CreditTier, ...] = (
    CreditTier(
        name="name_and_twitter",
        matches=lambda p: bool(p.name and p.twitter_username),
        template="Thanks to {name} ([@{twitter}](https://x.com/{twitter})) for {issue_text}!",
    ),
    CreditTier(
        name="twitter_only",
        matches=lambda p: bool(p.twitter_username),
        template="Thanks to [@{twitter}](https://x.com/{twitter}) for {issue_text}!",
    ),
    CreditTier(
        name="name_only",
        matches=lambda p: bool(p.name),
        template="Thanks to {name} (@{login} on GitHub) for {issue_text}!",
    ),
    CreditTier(
        name="login_only",
        matches=lambda p: True,
        template="Thanks to @{login} for {issue_text}!",
    ),
)


def issue_text(issue_number: int | None = None) -> str:
    """Describe what the contributor is being thanked for."""
    if issue_number:
        return f"reporting #{issue_number}"
    return "the report"


def select_tier(profile: ProfileRecord) -> CreditTier:
    """Return the first tier whose predicate matches `profile`."""
    for tier in CREDIT_TIERS:
        if tier.matches(profile):
            return tier
    # login_only always matches
    return CREDIT_TIERS[-1]


def render_credit(profile: ProfileRecord, issue_number: int | None = None) -> CreditLine:
    """Render the credit line for `profile`, keeping the selected tier."""
    tier = select_tier(profile)
    text = tier.template.format(
        name=profile.name,
        twitter=profile.twitter_username,
        login=profile.login,
        issue_text=issue_text(issue_number),
    )
    return CreditLine(text=text, tier=tier)


def format_credit_line(profile: ProfileRecord, issue_number: int | None = None) -> str:
    """Format a changeset credit line for `profile`."""
    return render_credit(profile, issue_number).text

"""Changeset credit formatting."""

from .formatter import (
    CREDIT_TIERS,
    CreditLine,
    CreditTier,
    format_credit_line,
    issue_text,
    render_credit,
    select_tier,
)

__all__ = [
    "CREDIT_TIERS",
    "CreditLine",
    "CreditTier",
    "format_credit_line",
    "issue_text",
    "render_credit",
    "select_tier",
]

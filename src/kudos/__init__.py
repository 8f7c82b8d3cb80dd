"""Kudos - GitHub contributor lookup and changeset credits."""

__version__ = "0.1.0"

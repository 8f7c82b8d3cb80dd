"""Error types for contributor lookups."""


class KudosError(Exception):
    """Base class for errors raised by kudos."""


class FetchError(KudosError):
    """The external profile lookup failed (process, network or auth)."""


class SchemaError(KudosError):
    """The lookup succeeded but the payload is not a valid profile."""


class RecorderError(KudosError):
    """Writing a contributor note to the memory store failed."""

# =============================================================================
# mensa/errors.py  —  Exception Taxonomy
# =============================================================================
#
# Every failure the tools can report maps onto one of these classes.  Each
# carries a short machine-readable ``kind`` that ends up in the tool payload
# as ``error_type``, next to the human-readable message.
#
# Internal helpers RAISE these.  The public operations (MenuFetcher and the
# MCP tools) catch them at their boundary and turn them into a
# ``MenuResult`` / failure dict, so no exception ever reaches the agent.
# =============================================================================

from typing import Optional


class MensaError(Exception):
    """Base class for all errors raised by the mensa package."""

    kind = "error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(MensaError):
    """A caller-supplied argument is malformed (e.g. a bad date)."""

    kind = "validation_error"


class NotFoundError(MensaError):
    """Unknown facility, or no menu for the requested week/day."""

    kind = "not_found"


class TransportError(MensaError):
    """The eat-api answered with a non-success HTTP status."""

    kind = "transport_error"

    def __init__(self, status_code: int, reason: Optional[str] = None) -> None:
        self.status_code = status_code
        self.reason = reason or ""
        super().__init__(f"HTTP error {status_code}: {self.reason}")


class ParseError(MensaError):
    """The eat-api payload could not be decoded or had an unexpected shape."""

    kind = "parse_error"


class FetchError(MensaError):
    """The facility list could not be loaded."""

    kind = "fetch_error"


class UnknownError(MensaError):
    """Anything else, wrapped with its original message."""

    kind = "unknown_error"

"""Exception hierarchy for the horse farm backend."""


class HorseFarmError(Exception):
    """Base exception for all horse farm errors."""


class SourceError(HorseFarmError):
    """Raised by a transport client when a remote data source call fails."""

    reason = "source_error"


class SourceHTTPError(SourceError):
    """Non-success HTTP status from a remote source."""

    reason = "http_error"

    def __init__(self, status_code: int, message: str = "") -> None:
        self.status_code = status_code
        super().__init__(f"HTTP {status_code}: {message}" if message else f"HTTP {status_code}")


class SourceTransportError(SourceError):
    """Network-level failure (connection refused, timeout, DNS)."""

    reason = "transport_error"


class MalformedPayloadError(SourceError):
    """Response body is not JSON or lacks the expected envelope."""

    reason = "malformed_payload"


class GraphQLError(SourceError):
    """GraphQL response carried a non-empty ``errors`` array."""

    reason = "graphql_error"

    def __init__(self, messages: list) -> None:
        self.messages = messages
        super().__init__("GraphQL errors: " + ", ".join(messages))


class SubmissionError(HorseFarmError):
    """Raised when a lead form could not be delivered to the CRM webhook."""

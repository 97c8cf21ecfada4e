# error taxonomy shared by services and routers
# every error carries the http status it is rendered with by app.main


class JournaiError(Exception):
    """base class for errors surfaced to api callers as {success: false, error}"""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(JournaiError):
    """missing or malformed request fields"""

    status_code = 400


class InvalidHistory(ValidationError):
    """conversation history does not end with a user-authored message"""


class SessionStateError(ValidationError):
    """operation not allowed in the session's current lifecycle state"""


class NotFound(JournaiError):
    status_code = 404


class GatingDenied(JournaiError):
    """mentor threshold or vent cooldown not met"""

    status_code = 403

    def __init__(self, message: str, hours_remaining: float | None = None):
        super().__init__(message)
        self.hours_remaining = hours_remaining


class EmptyCompletion(JournaiError):
    """every attempt against the completion service came back blank"""

    def __init__(self, message: str = "The assistant was unable to generate a response. Please try again."):
        super().__init__(message)


class CompletionError(JournaiError):
    """the completion service itself raised"""


class PersistenceError(JournaiError):
    """document store read or write failed"""


class MalformedSummary(JournaiError):
    """weekly summary output did not parse into the expected shape.
    absorbed by the aggregator, never rendered."""

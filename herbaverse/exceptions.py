"""
Error taxonomy for the HerbaVerse service.
Routers translate these into JSON error bodies; messages are safe to show users.
"""


class HerbaVerseError(Exception):
    """Base error carrying the HTTP status to surface"""

    status_code = 500

    def __init__(self, message: str, status_code: int = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class InvalidInput(HerbaVerseError):
    """Request rejected before any upstream call"""

    status_code = 400


class ServiceNotConfigured(HerbaVerseError):
    """Required API key or client is missing"""

    status_code = 503


class UpstreamUnavailable(HerbaVerseError):
    """LLM service unreachable or returned a non-2xx status (429/402 kept as-is)"""

    status_code = 502


class MalformedUpstreamResponse(HerbaVerseError):
    """LLM service answered 2xx but the body is not the expected JSON shape"""

    status_code = 500


class PersistenceFailure(HerbaVerseError):
    """Audit write failed. Logged only, never returned to the caller."""

"""Error taxonomy shared by the engine and the HTTP layer."""


class ScraperError(Exception):
    """Base error carrying the HTTP status it maps to."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ClientError(ScraperError):
    """Raised when a request is missing a required parameter."""

    status_code = 400


class NotFoundError(ScraperError):
    """Raised for unrecognized routes."""

    status_code = 404


class ExtractionError(ScraperError):
    """Raised when launching, navigating, waiting or evaluating fails."""

    status_code = 500

"""
Domain errors raised by services and mapped to JSON bodies in main.py.
"""


class UdyogError(Exception):
    """Base class for errors that carry their own HTTP status."""

    status_code = 500

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class ApplicationNotFound(UdyogError):
    status_code = 404

    def __init__(self, application_id: str):
        super().__init__(f"Application {application_id} not found")
        self.application_id = application_id


class InvalidStatusTransition(UdyogError):
    status_code = 409

    def __init__(self, current: str, requested: str):
        super().__init__(f"Cannot move application from '{current}' to '{requested}'")
        self.current = current
        self.requested = requested


class UpstreamServiceError(UdyogError):
    """A hosted dependency (CDN, AI provider) rejected or failed the call."""

    status_code = 500


class PayloadTooLarge(UdyogError):
    status_code = 413

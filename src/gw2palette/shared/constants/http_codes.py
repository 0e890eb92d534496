"""HTTP Status Code Constants.

This module contains HTTP status code constants for clear and
type-safe handling of GW2 API responses.
"""


class HTTPStatusCodes:
    """HTTP status code constants."""

    OK = 200
    NOT_FOUND = 404

    @staticmethod
    def is_success(code: int) -> bool:
        """Check if status code indicates success (2xx)."""
        return 200 <= code < 300


class HTTPHeaders:
    """Common HTTP header names."""

    ACCEPT = "Accept"
    SCHEMA_VERSION = "X-Schema-Version"


class ContentTypes:
    """Common content type values."""

    JSON = "application/json"

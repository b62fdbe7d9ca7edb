"""Error taxonomy shared by the catalog and trending store clients"""

from typing import Optional


class ReelScoutError(Exception):
    """Base error for all client failures"""


class ConfigurationError(ReelScoutError):
    """A required setting is missing"""


class TransportError(ReelScoutError):
    """Network failure or non-2xx response"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class LogicalFailure(ReelScoutError):
    """2xx response whose body carries a failure sentinel"""

    def __init__(self, message: str, payload: Optional[dict] = None):
        super().__init__(message)
        self.payload = payload or {}


class NotFound(ReelScoutError):
    """Detail lookup for an identifier the catalog does not know"""

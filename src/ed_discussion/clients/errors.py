"""Exceptions raised by the Ed clients."""

from typing import Any, Dict, List, Optional


class EdError(Exception):
    """Base class for every failure raised by this package"""


class ConfigError(EdError, ValueError):
    """Required configuration is missing or malformed"""


class TransportError(EdError):
    """
    The request never produced a response: connection refused, DNS, TLS,
    timeout and the like. The underlying exception is chained as __cause__.
    """

    def __init__(self, message: str, url: Optional[str] = None):
        super().__init__(message)
        self.url = url


class HttpStatusError(EdError):
    """The service answered with a non-2xx status"""

    def __init__(self, status: int, url: str, body: bytes = b"", message: Optional[str] = None):
        self.status = status
        self.url = url
        self.body = body
        self.message = message
        detail = f": {message}" if message else ""
        super().__init__(f"HTTP {status} from {url}{detail}")


class DecodeError(EdError):
    """
    The body is not valid JSON, or does not have the shape of the requested
    resource. `errors` holds one entry per problem with a dotted `path`.
    """

    def __init__(self, model: str, errors: List[Dict[str, Any]], url: Optional[str] = None):
        self.model = model
        self.errors = errors
        self.url = url
        super().__init__(f"could not decode {model}: {self.detail}")

    @property
    def path(self) -> str:
        """Path of the first offending field ('' for the document itself)"""
        return self.errors[0]["path"] if self.errors else ""

    @property
    def detail(self) -> str:
        parts = []
        for error in self.errors:
            if error["path"]:
                parts.append(f"{error['path']}: {error['message']}")
            else:
                parts.append(error["message"])
        return "; ".join(parts)

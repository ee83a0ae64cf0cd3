"""
Exception Classes for ePOS-Print.

Every error raised by this package derives from EposError. Nothing is
retried internally; retry policy belongs to the caller.
"""

from typing import Optional


class EposError(Exception):
    """Base exception for all ePOS-Print errors."""

    pass


class CommandError(EposError):
    """A command was rejected before anything was sent."""

    pass


class IllegalForMode(CommandError):
    """Command kind is not permitted in the document's mode."""

    def __init__(self, kind: str, mode: str):
        super().__init__(f"{kind} cannot be used in {mode} mode")
        self.kind = kind
        self.mode = mode


class InvalidPayload(CommandError):
    """Command content violates a range or symbology rule."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class DocumentSpent(CommandError):
    """Document was already handed to a dispatch."""

    pass


class SerializeError(EposError):
    """A value could not be rendered to, or parsed from, wire XML."""

    pass


class UnknownCatalogValue(SerializeError):
    """A wire token does not belong to a closed enumeration."""

    def __init__(self, catalog: str, token: str):
        super().__init__(f"Unknown {catalog} value: {token!r}")
        self.catalog = catalog
        self.token = token


class TransportError(EposError):
    """Network or HTTP failure while talking to the printer."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


class ResponseError(EposError):
    """The printer answered, but reported a failed print job."""

    def __init__(self, response):
        super().__init__(f"error sending document: {response}")
        self.response = response

    @property
    def code(self) -> str:
        return self.response.code

    @property
    def status(self) -> int:
        return self.response.status

    @property
    def flags(self) -> list[str]:
        return self.response.flags

"""Custom exception classes for the relay."""

from common.types import SurfaceReference


class RelayException(Exception):
    """
    Base exception class for all relay errors.
    """
    pass


class MalformedConfigError(RelayException):
    """
    Raised when configuration text is structurally invalid or a required
    integer field is not numeric. Fatal at startup.
    """

    def __init__(self, message: str, line_number: int = None):
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)
        self.line_number = line_number


class UnresolvedSurfaceError(RelayException):
    """
    Raised when a surface reference cannot be resolved to a live surface
    (unknown block, block without surfaces, index out of range).
    """

    def __init__(self, reference: SurfaceReference, reason: str):
        super().__init__(f"Cannot resolve surface {reference}: {reason}")
        self.reference = reference
        self.reason = reason


class MissingFieldWarning(RelayException):
    """
    Raised when a required field is absent from a config section.
    The section is skipped.
    """

    def __init__(self, section_name: str, field: str):
        super().__init__(f"Missing '{field}' configuration in [{section_name}] section")
        self.section_name = section_name
        self.field = field


class PayloadTypeMismatch(RelayException):
    """
    Raised when a broadcast message carries a non-text payload.
    The message is discarded.
    """

    def __init__(self, tag: str, payload_type: type):
        super().__init__(f"Payload for tag '{tag}' is {payload_type.__name__}, expected str")
        self.tag = tag
        self.payload_type = payload_type


class HostBootstrapError(RelayException):
    """
    Raised when the hosting program block cannot be located uniquely.
    """
    pass

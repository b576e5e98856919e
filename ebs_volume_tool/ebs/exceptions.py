"""
Custom exceptions for EBS operations.

Note: This code was generated with assistance from AI coding tools
and has been reviewed and tested by a human.
"""


class EBSToolError(Exception):
    """Base exception for EBS operations."""

    pass


class ValidationError(EBSToolError):
    """Invalid argument combination, detected before any request is sent."""

    pass


class CredentialsError(EBSToolError):
    """No AWS credentials could be resolved for signing."""

    pass


class TransportError(EBSToolError):
    """The request never produced an HTTP response (DNS, connection, timeout)."""

    def __init__(self, action: str, reason: str):
        super().__init__(f"{action} request failed: {reason}")
        self.action = action
        self.reason = reason


class RemoteError(EBSToolError):
    """The service answered with a non-success status.

    The message is the raw response body; its format is not interpreted.
    """

    def __init__(self, action: str, status_code: int, body: str):
        super().__init__(body)
        self.action = action
        self.status_code = status_code
        self.body = body


class DecodeError(EBSToolError):
    """Response body did not have the expected structure."""

    pass


class NotFoundError(EBSToolError):
    """A lookup expected exactly one result and got none."""

    pass


class AmbiguousResultError(NotFoundError):
    """A lookup expected exactly one result and got several."""

    pass


class ResourceFailedError(EBSToolError):
    """A polled volume or snapshot reached the error state."""

    pass


class WaitTimeoutError(EBSToolError, TimeoutError):
    """Polling deadline exceeded."""

    pass

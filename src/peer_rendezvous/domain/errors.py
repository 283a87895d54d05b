"""Failures raised by the signaling service."""


class SignalingError(Exception):
    """Base class for signaling failures.

    ``message`` is the client-facing text sent back in the error envelope.
    """

    message = "Signaling request failed"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)
        if message is not None:
            self.message = message


class InvalidConnectionNameError(SignalingError):
    """Connection name is empty or longer than 100 characters."""

    message = "Invalid connection name"


class InvalidOfferError(SignalingError):
    """Offer payload is missing or empty."""

    message = "Invalid offer"


class PasswordMismatchError(SignalingError):
    """Connection is password protected and the supplied password differs."""

    message = "Invalid or incorrect password"


class ConnectionNotFoundError(SignalingError):
    """No connection exists for the name when reading the offer or answering."""

    message = "Connection offer not found"


class OfferNotFoundError(SignalingError):
    """Connection exists but has no offer stored."""

    message = "Connection offer not found"


class ConnectionDoesNotExistError(SignalingError):
    """No connection exists for the name when reading the answer."""

    message = "Connection does not exist"


class AnswerNotFoundError(SignalingError):
    """Connection exists but no answer has been published yet."""

    message = "Connection answer not found"


class StorageFailureError(SignalingError):
    """The connection store failed to read or write."""

    def __init__(self, cause: Exception) -> None:
        super().__init__(f"Error: {cause}")
        self.cause = cause

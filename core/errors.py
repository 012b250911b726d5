class RelayError(Exception):
    """Base exception for the status relay."""


class DecodeError(RelayError):
    """The inbound payload does not match the status event shape."""


class ConfigError(RelayError):
    """An environment setting is present but unusable."""


class DeliveryError(RelayError):
    """The chat webhook could not be reached or rejected the message."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code

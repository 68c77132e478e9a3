class ConfigurationError(RuntimeError):
    """Required credentials or settings are missing or malformed."""


class NotAuthenticatedError(RuntimeError):
    def __init__(self, message="User not authenticated"):
        super().__init__(message)


class StoreError(RuntimeError):
    """A read or write against the persistence backend failed."""


class AdvisoryError(RuntimeError):
    """The generative advisory service failed or returned an unusable reply."""


__all__ = [
    "AdvisoryError",
    "ConfigurationError",
    "NotAuthenticatedError",
    "StoreError",
]

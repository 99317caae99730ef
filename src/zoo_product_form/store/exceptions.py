"""Custom exceptions for the service store."""


class ServiceStoreError(Exception):
    """Base exception for local persistence failures."""


class ServiceNotFoundError(ServiceStoreError):
    """Raised when a service id does not exist."""

    def __init__(self, service_id: int):
        self.service_id = service_id
        super().__init__(f"Service not found: id={service_id}")


class ValidationError(ServiceStoreError):
    """Raised when input fails validation before any write."""

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(f"{field}: {message}")

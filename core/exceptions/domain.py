class NotFoundError(Exception):
    """Requested resource does not exist or is not visible to the caller."""
    pass


class ConflictError(Exception):
    """Resource already exists or clashes with current state."""
    pass


class ValidationError(Exception):
    """Input data failed a business rule."""
    pass


class InvalidStateError(ConflictError):
    """Operation is not allowed in the resource's current state."""
    pass


class ExternalServiceError(Exception):
    """An upstream service failed or is unavailable."""

    def __init__(self, message: str, unavailable: bool = False):
        super().__init__(message)
        self.unavailable = unavailable

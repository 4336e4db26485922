"""
Fleet-wide exception hierarchy.

All services raise these types so a presentation layer can map them to
user-facing messages in one place.

Usage:
    from fleet_maintenance.core.exceptions import UnauthorizedError, ValidationError

    raise UnauthorizedError(resource="ships", action="create", role="Engineer")
    raise ValidationError("IMO number must be 7 digits", details={"imo": "123"})

Missing update/delete targets are NOT exceptions: services return ``None``
or ``False`` for them.
"""


class UnauthorizedError(Exception):
    """Raised when the current user may not perform an action on a resource.

    Covers both the static policy table and the Engineer ownership rule on
    jobs (``reason`` carries the more specific explanation in that case).

    Args:
        resource: Resource name from the permission table (e.g. "jobs").
        action: One of view / create / edit / delete.
        role: Role of the acting user, or None when nobody is logged in.
        reason: Optional override for the human-readable message.
    """

    def __init__(
        self,
        resource: str,
        action: str,
        role: str | None = None,
        reason: str | None = None,
    ) -> None:
        self.resource = resource
        self.action = action
        self.role = role
        msg = reason or f"Unauthorized: You do not have permission to {action} {resource}"
        super().__init__(msg)


class AuthenticationError(Exception):
    """Raised when a login attempt fails.

    The message is deliberately the same for unknown email and wrong password.
    """

    def __init__(self, message: str = "Invalid email or password") -> None:
        super().__init__(message)


class ValidationError(Exception):
    """Raised when input violates a domain invariant in the service layer.

    Field formats are the presentation layer's job; the services only check
    invariants that keep stored data consistent (IMO format, foreign keys).

    Args:
        message: Human-readable explanation of what failed.
        details: Optional field-level breakdown. Keys are field names.
    """

    def __init__(self, message: str, details: dict | None = None) -> None:
        self.details = details or {}
        super().__init__(message)


class StorageUnavailableError(Exception):
    """Raised when the storage backend cannot be written while seeding.

    Regular reads never raise this; they degrade to empty collections.

    Args:
        key: Storage key that was being accessed.
        cause: The underlying backend exception, if any.
    """

    def __init__(self, key: str, cause: Exception | None = None) -> None:
        self.key = key
        self.cause = cause
        msg = f"Storage unavailable for key {key!r}"
        if cause is not None:
            msg += f": {cause}"
        super().__init__(msg)

"""Domain layer errors.

Every failure the content engine reports to its caller is one of these
kinds. The request layer maps them to status codes.
"""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Missing, out-of-range or enum-violating input.

    Also raised when a reply references a parent comment that belongs
    to a different post.
    """

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class NotAuthorizedError(DomainError):
    """Raised when a user attempts to modify content they don't own."""

    def __init__(self, action: str, resource: str, resource_id: str, user_id: str):
        self.action = action
        self.resource = resource
        self.resource_id = resource_id
        self.user_id = user_id
        super().__init__(
            f"User {user_id} is not authorized to {action} {resource} {resource_id}"
        )


class UnauthenticatedError(DomainError):
    """Raised when an operation needs an actor and none was supplied."""

    def __init__(self, action: str):
        self.action = action
        super().__init__(f"Authentication required to {action}")


class ConflictError(DomainError):
    """Raised when a write loses a uniqueness race (slug, like)."""

    pass


class IntegrityViolationError(DomainError):
    """The store disagrees with a content graph invariant.

    Internal: callers catch it, log it and run counter reconciliation
    instead of surfacing it.
    """

    def __init__(self, message: str, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(message)

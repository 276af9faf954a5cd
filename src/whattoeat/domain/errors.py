"""Error taxonomy shared by services, adapters and the HTTP boundary."""


class WhatToEatError(Exception):
    """Base class for errors that map to an HTTP status."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFoundError(WhatToEatError):
    """Record is absent or owned by someone else."""

    status_code = 404
    default_message = "Not found"


class UnauthorizedError(WhatToEatError):
    """Request carries no valid credentials."""

    status_code = 401
    default_message = "Unauthorized"


class InvalidInputError(WhatToEatError):
    """Request input failed validation."""

    status_code = 400
    default_message = "Invalid input"


class BackendError(WhatToEatError):
    """A managed backing service failed; details stay server-side."""

    status_code = 500


class StorageError(BackendError):
    """Database or object store failure."""


class IdentityServiceError(BackendError):
    """Identity provider could not be reached or answered unexpectedly."""

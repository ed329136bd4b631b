"""Error taxonomy shared by the store, the identity gate and the HTTP layer.

Each error carries the HTTP status it is reported with; the handlers in
``taskboard.main`` turn them into ``{"message": ...}`` bodies.
"""


class TaskBoardError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(TaskBoardError):
    """Malformed or missing input; the caller may fix it and resubmit."""

    status_code = 400


class Unauthenticated(TaskBoardError):
    """Missing or unknown identity; the caller should log in again."""

    status_code = 401


class NotFound(TaskBoardError):
    """Record absent, or owned by someone else."""

    status_code = 404


class Conflict(TaskBoardError):
    """Duplicate unique field."""

    status_code = 409

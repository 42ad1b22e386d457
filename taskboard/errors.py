"""Error taxonomy shared by the service layer and the HTTP boundary."""

from fastapi import status


class TaskboardError(Exception):
    """Base class for errors that map onto an HTTP status."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(TaskboardError):
    status_code = status.HTTP_400_BAD_REQUEST


class ForbiddenError(TaskboardError):
    status_code = status.HTTP_403_FORBIDDEN


class NotFoundError(TaskboardError):
    status_code = status.HTTP_404_NOT_FOUND

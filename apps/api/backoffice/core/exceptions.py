"""
Domain errors raised by the service layer.

Routers never build error responses themselves: the handlers registered in
``backoffice.main`` turn these into the ``{success: false, error}`` envelope.
"""


class BackOfficeError(Exception):
    """Base class for errors that map onto an HTTP status."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(BackOfficeError):
    status_code = 404


class ConflictError(BackOfficeError):
    """The request is valid but clashes with current data (stock, capacity)."""

    status_code = 409


class InvalidInputError(BackOfficeError):
    status_code = 422

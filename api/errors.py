"""
Error kinds raised by the query layer.

Only two kinds reach the caller: malformed input (400) and everything
else (500).
"""


class QueryError(Exception):
    """Base exception for query-layer errors."""
    status_code = 500

    def __init__(self, message: str = "Internal Server Error"):
        super().__init__(message)
        self.message = message


class BadRequestError(QueryError):
    """Raised when a request parameter cannot be parsed."""
    status_code = 400


class InternalError(QueryError):
    """Raised when the store or the handler fails. Detail is never surfaced."""
    status_code = 500

"""
Error types raised by the table metadata extractors.

Driver and query failures are not wrapped: SQLAlchemy exceptions reach the
caller unchanged. These types cover the conditions the extractors detect
themselves.
"""


class IntrospectionError(Exception):
    """Base class for introspection errors."""

    unsupported: bool = False


class ConnectionMissingError(IntrospectionError, ValueError):
    """Raised when no database connection was supplied."""

    def __init__(self, message: str = "database connection is None"):
        super().__init__(message)


class UnsupportedDialectError(IntrospectionError, ValueError):
    """Raised when no metadata provider is registered for a database product."""

    unsupported = True

    def __init__(self, dialect: str, available: list[str] | None = None):
        self.dialect = dialect
        self.available = list(available or [])
        super().__init__(
            f"No metadata provider registered for database type '{dialect}'. "
            f"Available types: {', '.join(self.available)}"
        )


class UnsupportedOperationError(IntrospectionError, NotImplementedError):
    """
    Raised when a provider does not implement an operation at all.

    This marks a known capability gap of the dialect, not a query failure;
    callers may treat it as fatal or skip the operation.
    """

    unsupported = True

    def __init__(self, dialect: str, operation: str):
        self.dialect = dialect
        self.operation = operation
        super().__init__(f"{operation} is not supported for {dialect}")

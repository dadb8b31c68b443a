class DomainError(Exception):
    pass


class ValidationError(DomainError):
    """Inbound lead submission is malformed or incomplete."""

    def __init__(self, errors):
        self.errors = list(errors)
        fields = ", ".join(".".join(error["path"]) for error in self.errors)
        super().__init__(f"Validation failed for: {fields}")


class PersistenceError(DomainError):
    """The lead store rejected a write or could not be reached on any transport."""

    def __init__(self, message, cause=None, attempted=None, code=None):
        super().__init__(message)
        self.cause = cause
        self.attempted = list(attempted or [])
        self.code = code


class StoreUnavailable(PersistenceError):
    """Transient connectivity failure on one transport."""
    pass


class SchemaDriftError(DomainError):
    """The target table lacks a column this build knows about."""

    def __init__(self, column, cause=None):
        super().__init__(f"Unknown column: {column}")
        self.column = column
        self.cause = cause


class SignatureError(DomainError):
    pass

from .domain import (
    DomainError,
    PersistenceError,
    SchemaDriftError,
    SignatureError,
    StoreUnavailable,
    ValidationError,
)

__all__ = [
    "DomainError",
    "PersistenceError",
    "SchemaDriftError",
    "SignatureError",
    "StoreUnavailable",
    "ValidationError",
]

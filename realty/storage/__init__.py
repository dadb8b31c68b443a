from .base import LeadStore, is_connectivity_failure, missing_column
from .rest import RestLeadStore
from .sql import SqlLeadStore

__all__ = [
    "LeadStore",
    "RestLeadStore",
    "SqlLeadStore",
    "is_connectivity_failure",
    "missing_column",
]

from .lead import Lead
from .project import Project

__all__ = ["Lead", "Project"]

"""tasktree - hierarchical checklists whose status derives from their children."""

__version__ = "0.1.0"

from tasktree.tasks.models import Project, Task, TaskStatus, TaskType
from tasktree.tasks.address import format_address, parse_address
from tasktree.display import DisplayManager, render_long, render_short
from tasktree.shell import ProjectShell

__all__ = [
    "Project",
    "Task",
    "TaskStatus",
    "TaskType",
    "format_address",
    "parse_address",
    "DisplayManager",
    "render_long",
    "render_short",
    "ProjectShell",
]

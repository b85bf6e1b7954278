"""Task tree models and addressing."""

from tasktree.tasks.address import format_address, parse_address
from tasktree.tasks.models import Project, Task, TaskStatus, TaskType

__all__ = ["Project", "Task", "TaskStatus", "TaskType", "format_address", "parse_address"]

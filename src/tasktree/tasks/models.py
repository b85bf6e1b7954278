"""Task tree data models."""

import logging
from enum import Enum
from typing import TYPE_CHECKING, Iterator, Optional, Sequence

from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from rich.text import Text

logger = logging.getLogger(__name__)


class TaskType(str, Enum):
    """How a task's readiness aggregates over its children."""

    ALL = "all"  # Every child must be complete
    ANY = "any"  # One complete child is enough

    def evaluate(self, children: Sequence["Task"]) -> bool:
        """
        Apply this aggregation rule to a children sequence.

        An empty sequence is ready for ALL and not ready for ANY.

        Args:
            children: Direct children of a task

        Returns:
            True if the rule is satisfied
        """
        if self is TaskType.ALL:
            return all(child.complete for child in children)
        return any(child.complete for child in children)

    @property
    def label(self) -> str:
        """Display label ("All" / "Any")."""
        return self.value.capitalize()

    def __str__(self) -> str:
        return self.label


class TaskStatus(str, Enum):
    """Derived task status."""

    COMPLETE = "complete"  # No longer influences parent completability
    READY = "ready"  # Can be done whenever
    INCOMPLETE = "incomplete"  # Waiting on children
    BLOCKING = "blocking"  # Prevented by something outside the tree

    @property
    def label(self) -> str:
        """Display label ("Complete", "Ready", ...)."""
        return self.value.capitalize()


class Task(BaseModel):
    """
    A node in the task tree.

    ``complete`` and ``blocking`` are raw flags owned by the caller. The
    status is derived from them plus the children's ``complete`` flags and is
    recomputed on every call.

    Leaf lists returned by :meth:`get_blocking` and :meth:`get_completable`
    reference nodes of the live tree; do not add children while iterating
    over one.
    """

    name: str
    description: str = ""
    complete: bool = False
    blocking: bool = False
    variant: TaskType = TaskType.ALL
    children: list["Task"] = Field(default_factory=list)

    def status(self) -> TaskStatus:
        """
        Derive the task status.

        Completion wins over blocking, and blocking wins over readiness.

        Returns:
            Current status
        """
        if self.complete:
            return TaskStatus.COMPLETE
        if self.blocking:
            return TaskStatus.BLOCKING
        if self.ready():
            return TaskStatus.READY
        return TaskStatus.INCOMPLETE

    def ready(self) -> bool:
        """Check whether the task's children satisfy its variant."""
        return self.variant.evaluate(self.children)

    def is_leaf(self) -> bool:
        """Check whether the task has no children."""
        return not self.children

    def get_blocking(self) -> list["Task"]:
        """
        Get all blocking leaf tasks in this subtree.

        Only leaves are considered; a composite task is never reported even
        if its own blocking flag is set.

        Returns:
            Blocking leaves in depth-first, child order
        """
        return [leaf for leaf in self._iter_leaves() if leaf.blocking]

    def get_completable(self) -> list["Task"]:
        """
        Get every leaf task in this subtree, whatever its flags.

        Returns:
            Leaves in depth-first, child order
        """
        return list(self._iter_leaves())

    def _iter_leaves(self) -> Iterator["Task"]:
        # Iterative pre-order walk
        stack: list[Task] = [self]
        while stack:
            node = stack.pop()
            if node.is_leaf():
                yield node
            else:
                stack.extend(reversed(node.children))

    def find(self, address: Sequence[int]) -> Optional["Task"]:
        """
        Look up the task at an address relative to this one.

        Args:
            address: Zero-based child indices, outermost first

        Returns:
            Task or None if any index is out of bounds
        """
        node = self
        for index in address:
            if not 0 <= index < len(node.children):
                logger.debug(
                    f"No child at index {index} under '{node.name}' "
                    f"({len(node.children)} children)"
                )
                return None
            node = node.children[index]
        return node

    def add_child(self, address: Sequence[int], new_child: "Task") -> bool:
        """
        Append a task to the children of the task at ``address``.

        An empty address appends directly to this task. Nothing is modified
        when the address does not exist.

        Args:
            address: Zero-based child indices, outermost first
            new_child: Task to insert

        Returns:
            True if inserted, False if the address was not found
        """
        parent = self.find(address)
        if parent is None:
            return False

        parent.children.append(new_child)
        logger.debug(f"Added child '{new_child.name}' to '{parent.name}'")
        return True

    def display_short(self) -> "Text":
        """Render as a one-line status glyph plus colored name."""
        from tasktree.display import render_short

        return render_short(self)

    def display_long(self) -> "Text":
        """Render the short form followed by status, description, variant and child count."""
        from tasktree.display import render_long

        return render_long(self)

    def __str__(self) -> str:
        return self.display_short().plain


class Project(BaseModel):
    """Named handle around a single root task."""

    primary: Task

    @classmethod
    def create(cls, name: str, description: str = "") -> "Project":
        """
        Create a project with an empty root task.

        Args:
            name: Project name, also used as the root task name
            description: Project description

        Returns:
            New project
        """
        project = cls(primary=Task(name=name, description=description))
        logger.info(f"Created project: {name}")
        return project

    @property
    def name(self) -> str:
        return self.primary.name

    @property
    def description(self) -> str:
        return self.primary.description

    def status(self) -> TaskStatus:
        return self.primary.status()

    def find(self, address: Sequence[int]) -> Optional[Task]:
        return self.primary.find(address)

    def add_child(self, address: Sequence[int], new_child: Task) -> bool:
        return self.primary.add_child(address, new_child)

    def get_blocking(self) -> list[Task]:
        return self.primary.get_blocking()

    def get_completable(self) -> list[Task]:
        return self.primary.get_completable()

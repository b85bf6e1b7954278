"""Rich rendering for task trees."""

import logging
from typing import Any, Optional, Sequence

from rich.console import Console
from rich.table import Table
from rich.text import Text
from rich.tree import Tree

from tasktree.tasks.address import format_address
from tasktree.tasks.models import Task, TaskStatus

logger = logging.getLogger(__name__)


STATUS_GLYPHS = {
    TaskStatus.COMPLETE: "[X]",
    TaskStatus.INCOMPLETE: "[ ]",
    TaskStatus.BLOCKING: "[!]",
    TaskStatus.READY: "[*]",
}

STATUS_STYLES = {
    TaskStatus.COMPLETE: "green",
    TaskStatus.INCOMPLETE: "white",
    TaskStatus.BLOCKING: "red",
    TaskStatus.READY: "blue",
}


def render_short(task: Task) -> Text:
    """
    Render a task as ``<glyph> <name>`` with the name colored by status.

    Args:
        task: Task to render

    Returns:
        Styled one-line text
    """
    status = task.status()
    text = Text(f"{STATUS_GLYPHS[status]} ")
    text.append(task.name, style=STATUS_STYLES[status])
    return text


def render_long(task: Task) -> Text:
    """
    Render a task's short form followed by its details.

    Args:
        task: Task to render

    Returns:
        Styled multi-line text
    """
    text = render_short(task)
    text.append(f"\n\tStatus: {task.status().label}")
    text.append(f"\n\tDescription: {task.description}")
    text.append(f"\n\tVariant: {task.variant.label}")
    text.append(f"\n\tChildren: {len(task.children)}")
    return text


def build_tree(
    task: Task,
    show_addresses: bool = False,
    guide_style: str = "dim",
    address: Sequence[int] = (),
) -> Tree:
    """
    Build a rich tree of short renders for a subtree.

    Args:
        task: Subtree root
        show_addresses: Prefix each node with its dotted address
        guide_style: Style of the tree guide lines
        address: Address of ``task`` (used for the prefixes)

    Returns:
        Rich Tree
    """
    tree = Tree(_tree_label(task, address, show_addresses), guide_style=guide_style)
    _add_branches(tree, task, list(address), show_addresses)
    return tree


def _add_branches(tree: Tree, task: Task, address: list[int], show_addresses: bool) -> None:
    pending = [(tree, task, address)]
    while pending:
        branch, node, node_address = pending.pop()
        for index, child in enumerate(node.children):
            child_address = node_address + [index]
            child_branch = branch.add(_tree_label(child, child_address, show_addresses))
            pending.append((child_branch, child, child_address))


def _tree_label(task: Task, address: Sequence[int], show_addresses: bool) -> Text:
    label = render_short(task)
    if show_addresses:
        label = Text.assemble((f"{format_address(address)} ", "dim"), label)
    return label


class DisplayManager:
    """
    Console output for task trees.

    Config options:
        show_addresses: Prefix tree nodes with their address (default: True)
        guide_style: Style for tree guide lines (default: "dim")
    """

    def __init__(self, console: Console | None = None, config: Optional[dict[str, Any]] = None):
        """
        Initialize display manager.

        Args:
            console: Rich Console instance (creates new if None)
            config: Display configuration
        """
        self.console = console or Console()
        config = config or {}
        self.show_addresses = config.get("show_addresses", True)
        self.guide_style = config.get("guide_style", "dim")
        self._enabled = True

    def enable(self) -> None:
        """Enable display output."""
        self._enabled = True

    def disable(self) -> None:
        """Disable display output."""
        self._enabled = False

    def is_enabled(self) -> bool:
        """Check if display is enabled."""
        return self._enabled

    def show_tree(self, task: Task, address: Sequence[int] = ()) -> None:
        """
        Display a subtree.

        Args:
            task: Subtree root
            address: Address of ``task`` relative to the project root
        """
        if not self._enabled:
            return

        self.console.print(
            build_tree(
                task,
                show_addresses=self.show_addresses,
                guide_style=self.guide_style,
                address=address,
            )
        )

    def show_details(self, task: Task) -> None:
        """Display the long form of a task."""
        if not self._enabled:
            return

        self.console.print(render_long(task))

    def show_leaves(self, title: str, root: Task, leaves: Sequence[Task]) -> None:
        """
        Display a list of leaf tasks with their addresses.

        Args:
            title: Table title
            root: Tree the leaves belong to (used to resolve addresses)
            leaves: Leaf tasks to list
        """
        if not self._enabled:
            return

        if not leaves:
            self.console.print(Text(f"{title}: none", style="dim"))
            return

        addresses = {id(task): address for address, task in iter_with_addresses(root)}

        table = Table(title=title, show_header=True, header_style="bold magenta")
        table.add_column("Address", style="dim")
        table.add_column("Task")
        table.add_column("Description", style="white")

        for leaf in leaves:
            address = addresses.get(id(leaf))
            table.add_row(
                format_address(address) if address is not None else "?",
                render_short(leaf),
                Text(leaf.description),
            )

        self.console.print(table)


def iter_with_addresses(task: Task, address: Sequence[int] = ()):
    """Yield ``(address, task)`` pairs for a subtree in depth-first pre-order."""
    stack = [(list(address), task)]
    while stack:
        node_address, node = stack.pop()
        yield node_address, node
        for index in reversed(range(len(node.children))):
            stack.append((node_address + [index], node.children[index]))

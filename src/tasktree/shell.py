"""Interactive command interpreter over a single in-memory project."""

import logging
import shlex

from rich.console import Console
from rich.markup import escape

from tasktree.display import DisplayManager
from tasktree.tasks.address import format_address, parse_address
from tasktree.tasks.models import Project, Task, TaskType

logger = logging.getLogger(__name__)


HELP_TEXT = """[cyan]Available Commands:[/cyan]
  add <address> <name> \\[description] \\[--any]  - Add a child task under <address>
  done <address> / undone <address>            - Mark or unmark a task complete
  block <address> / unblock <address>          - Set or clear a task's blocking flag
  show \\[address]                               - Show the task tree
  info <address>                               - Show task details
  blocking                                     - List blocking leaf tasks
  next                                         - List leaf tasks still to do
  leaves                                       - List every leaf task
  help                                         - Show this help message
  exit, quit                                   - Leave the shell

Addresses are dotted child indices (e.g. 0.2.1); "." is the project root.
"""


class ProjectShell:
    """Executes shell commands against a project."""

    FLAG_COMMANDS = {
        "done": ("complete", True),
        "undone": ("complete", False),
        "block": ("blocking", True),
        "unblock": ("blocking", False),
    }

    def __init__(self, project: Project, display: DisplayManager | None = None):
        """
        Initialize the shell.

        Args:
            project: Project to operate on
            display: Display manager (creates new if None)
        """
        self.project = project
        self.display = display or DisplayManager()

    @property
    def console(self) -> Console:
        return self.display.console

    def execute(self, line: str) -> bool:
        """
        Execute one command line.

        Args:
            line: Raw user input

        Returns:
            False if the session should end, True otherwise
        """
        try:
            parts = shlex.split(line)
        except ValueError as e:
            self.console.print(f"[red]Could not parse input: {escape(str(e))}[/red]")
            return True

        if not parts:
            return True

        command, args = parts[0].lower(), parts[1:]

        if command in ("exit", "quit"):
            return False

        handler = getattr(self, f"_cmd_{command}", None)
        if command in self.FLAG_COMMANDS:
            handler = self._set_flag
            args = [command, *args]

        if handler is None:
            self.console.print(f"[yellow]Unknown command: {escape(command)}[/yellow]")
            self.console.print("[yellow]Type help for available commands[/yellow]")
            return True

        try:
            handler(args)
        except ValueError as e:
            self.console.print(f"[red]{escape(str(e))}[/red]")

        return True

    def _resolve(self, text: str) -> tuple[list[int], Task]:
        address = parse_address(text)
        task = self.project.find(address)
        if task is None:
            raise ValueError(f"No task at address {format_address(address)}")
        return address, task

    def _cmd_help(self, args: list[str]) -> None:
        self.console.print(HELP_TEXT)

    def _cmd_add(self, args: list[str]) -> None:
        variant = TaskType.ALL
        if "--any" in args:
            variant = TaskType.ANY
            args = [arg for arg in args if arg != "--any"]

        if len(args) < 2 or len(args) > 3:
            raise ValueError("Usage: add <address> <name> [description] [--any]")

        address = parse_address(args[0])
        description = args[2] if len(args) == 3 else ""
        task = Task(name=args[1], description=description, variant=variant)

        if not self.project.add_child(address, task):
            raise ValueError(f"No task at address {format_address(address)}")

        parent = self.project.find(address)
        new_address = format_address([*address, len(parent.children) - 1])
        logger.info(f"Added task '{task.name}' at {new_address}")
        self.console.print(f"[green]✓ Added[/green] {new_address} {escape(task.name)}")

    def _set_flag(self, args: list[str]) -> None:
        command, args = args[0], args[1:]
        if len(args) != 1:
            raise ValueError(f"Usage: {command} <address>")

        field, value = self.FLAG_COMMANDS[command]
        address, task = self._resolve(args[0])
        setattr(task, field, value)

        logger.info(f"Set {field}={value} on '{task.name}' ({format_address(address)})")
        self.console.print(task.display_short())

    def _cmd_show(self, args: list[str]) -> None:
        address, task = self._resolve(args[0] if args else ".")
        self.display.show_tree(task, address)

    def _cmd_info(self, args: list[str]) -> None:
        if len(args) != 1:
            raise ValueError("Usage: info <address>")

        _, task = self._resolve(args[0])
        self.display.show_details(task)

    def _cmd_blocking(self, args: list[str]) -> None:
        root = self.project.primary
        self.display.show_leaves("Blocking", root, root.get_blocking())

    def _cmd_next(self, args: list[str]) -> None:
        root = self.project.primary
        pending = [task for task in root.get_completable() if not task.complete]
        self.display.show_leaves("Next", root, pending)

    def _cmd_leaves(self, args: list[str]) -> None:
        root = self.project.primary
        self.display.show_leaves("Leaves", root, root.get_completable())

"""CLI interface for tasktree."""

import logging
import sys
from pathlib import Path
from typing import Any

import click
from dotenv import load_dotenv
from prompt_toolkit import PromptSession
from prompt_toolkit.formatted_text import HTML
from prompt_toolkit.history import FileHistory
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from tasktree import __version__
from tasktree.display import DisplayManager
from tasktree.shell import ProjectShell
from tasktree.tasks.models import Project, Task, TaskType

# Load environment variables from .env file
load_dotenv()

console = Console()

DEFAULT_CONFIG_PATH = Path("config/default.yaml")

LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


def _load_config(config_path: Path | None) -> dict:
    """
    Load the YAML configuration.

    A missing, unreadable or non-mapping file yields an empty config.

    Args:
        config_path: Config file (defaults to config/default.yaml)

    Returns:
        Configuration dictionary
    """
    import yaml

    config_path = config_path or DEFAULT_CONFIG_PATH
    if not config_path.exists():
        console.print(f"[yellow]Warning: Config file not found at {escape(str(config_path))}[/yellow]")
        return {}

    try:
        with open(config_path) as f:
            loaded = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        console.print(f"[red]Error loading config:[/red] {escape(str(e))}")
        return {}

    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        console.print(f"[yellow]Warning: Ignoring {escape(str(config_path))}, expected a mapping[/yellow]")
        return {}
    return loaded


def _section(config: dict, key: str) -> dict:
    """Return a config section, treating null or non-mapping sections as empty."""
    section = config.get(key)
    return section if isinstance(section, dict) else {}


def _log_level(value: Any) -> int:
    """Accept a level name ("info") or a numeric level (20)."""
    if isinstance(value, int):
        return value
    name = str(value).upper()
    return getattr(logging, name) if name in LOG_LEVELS else logging.WARNING


def _setup_logging(config: dict) -> None:
    """Configure root logging from the ``logging`` section."""
    log_config = _section(config, "logging")
    log_file = Path(log_config.get("file") or "./.tasktree/logs/tasktree.log")
    log_file.parent.mkdir(parents=True, exist_ok=True)

    handlers: list[logging.Handler] = [logging.FileHandler(log_file)]
    if log_config.get("console", False):
        handlers.append(logging.StreamHandler())

    logging.basicConfig(
        level=_log_level(log_config.get("level", "WARNING")),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=handlers,
    )


def build_demo_project() -> Project:
    """Build a small sample project covering every status."""
    project = Project.create("Release 1.0", "Ship the first public release")

    project.add_child([], Task(name="Write code", description="Implement the features"))
    project.add_child([0], Task(name="Core library", complete=True))
    project.add_child([0], Task(name="Command line"))

    project.add_child([], Task(name="Publish", description="Get the package out", variant=TaskType.ANY))
    project.add_child([1], Task(name="Upload to the index", blocking=True))
    project.add_child([1], Task(name="Attach to a tagged release"))

    project.add_child([], Task(name="Announce", description="Tell people about it"))

    return project


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--config",
    type=click.Path(exists=True, path_type=Path),
    envvar="TASKTREE_CONFIG",
    help="Path to configuration file",
)
@click.pass_context
def cli(ctx: click.Context, config: Path | None) -> None:
    """tasktree - hierarchical checklists with derived status."""
    ctx.ensure_object(dict)
    ctx.obj["config"] = config


@cli.command()
@click.option("--name", type=str, help="Project name")
@click.option("--description", type=str, help="Project description")
@click.pass_context
def shell(ctx: click.Context, name: str | None, description: str | None) -> None:
    """Start an interactive session on a new project."""
    config = _load_config(ctx.obj.get("config"))
    _setup_logging(config)

    project_config = _section(config, "project")
    project = Project.create(
        name or str(project_config.get("name") or "Untitled"),
        description or str(project_config.get("description") or ""),
    )

    display = DisplayManager(console=console, config=_section(config, "display"))
    project_shell = ProjectShell(project, display)

    cli_config = _section(config, "cli")
    history_file = cli_config.get("history_file") or "./.tasktree/history"
    Path(history_file).parent.mkdir(parents=True, exist_ok=True)
    prompt_name = str(cli_config.get("prompt") or "tasktree")

    console.print(Panel(f"[bold]{escape(project.name)}[/bold]\nType [cyan]help[/cyan] for commands", title="tasktree"))

    session: PromptSession[str] = PromptSession(history=FileHistory(history_file))

    while True:
        try:
            user_input = session.prompt(HTML("<ansicyan>{}</ansicyan>> ").format(prompt_name))
        except KeyboardInterrupt:
            console.print("[yellow]Press Ctrl+D or type exit to leave[/yellow]")
            continue
        except EOFError:
            break

        if not project_shell.execute(user_input):
            break

    console.print("[dim]Bye[/dim]")


@cli.command()
@click.pass_context
def demo(ctx: click.Context) -> None:
    """Show a sample project with its blocking and completable tasks."""
    config = _load_config(ctx.obj.get("config"))
    _setup_logging(config)

    project = build_demo_project()
    display = DisplayManager(console=console, config=_section(config, "display"))

    display.show_tree(project.primary)
    display.show_leaves("Blocking", project.primary, project.get_blocking())
    display.show_leaves("Completable", project.primary, project.get_completable())


def main() -> None:
    """Main entry point."""
    try:
        cli(obj={})
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted by user[/yellow]")
        sys.exit(1)
    except Exception as e:
        console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()

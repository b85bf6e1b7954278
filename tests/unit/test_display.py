"""Unit tests for task rendering."""

from io import StringIO

import pytest
from rich.console import Console

from tasktree.display import (
    STATUS_GLYPHS,
    STATUS_STYLES,
    DisplayManager,
    build_tree,
    iter_with_addresses,
    render_long,
    render_short,
)
from tasktree.tasks.models import Task, TaskStatus, TaskType


def _console() -> Console:
    return Console(file=StringIO(), width=120, record=True)


def _sample() -> Task:
    root = Task(name="root", description="top")
    root.add_child([], Task(name="a", complete=True))
    root.add_child([], Task(name="b", variant=TaskType.ANY))
    root.add_child([1], Task(name="b0", blocking=True))
    return root


class TestRenderShort:
    """Tests for render_short."""

    @pytest.mark.parametrize(
        "task,expected,style",
        [
            (Task(name="n", complete=True), "[X] n", "green"),
            (Task(name="n", variant=TaskType.ANY), "[ ] n", "white"),
            (Task(name="n", blocking=True), "[!] n", "red"),
            (Task(name="n"), "[*] n", "blue"),
        ],
    )
    def test_glyph_and_color(self, task, expected, style):
        """Test each status gets its glyph and name color."""
        text = render_short(task)
        assert text.plain == expected
        assert len(text.spans) == 1
        assert text.spans[0].start == 4
        assert text.spans[0].style == style

    def test_tables_cover_every_status(self):
        """Test glyph and style tables cover all statuses."""
        for status in TaskStatus:
            assert status in STATUS_GLYPHS
            assert status in STATUS_STYLES

    def test_task_display_short(self):
        """Test Task.display_short delegates to render_short."""
        task = Task(name="n")
        assert task.display_short().plain == render_short(task).plain
        assert str(task) == "[*] n"

    def test_name_is_not_markup(self):
        """Test names containing brackets are rendered literally."""
        task = Task(name="[bold]x[/bold]")
        assert render_short(task).plain == "[*] [bold]x[/bold]"


class TestRenderLong:
    """Tests for render_long."""

    def test_layout(self):
        """Test the long form lines."""
        root = _sample()
        assert render_long(root).plain == (
            "[ ] root\n"
            "\tStatus: Incomplete\n"
            "\tDescription: top\n"
            "\tVariant: All\n"
            "\tChildren: 2"
        )

    def test_any_variant(self):
        """Test the variant label for Any tasks."""
        task = Task(name="t", variant=TaskType.ANY)
        assert "\tVariant: Any" in task.display_long().plain


class TestBuildTree:
    """Tests for tree rendering."""

    def test_tree_contains_all_nodes(self):
        """Test every node appears in the rendered tree."""
        console = _console()
        console.print(build_tree(_sample()))
        output = console.export_text()
        for line in ("[ ] root", "[X] a", "[ ] b", "[!] b0"):
            assert line in output

    def test_addresses(self):
        """Test address prefixes."""
        console = _console()
        console.print(build_tree(_sample(), show_addresses=True))
        output = console.export_text()
        assert ". [ ] root" in output
        assert "0 [X] a" in output
        assert "1.0 [!] b0" in output

    def test_iter_with_addresses(self):
        """Test depth-first address enumeration."""
        pairs = [(address, task.name) for address, task in iter_with_addresses(_sample())]
        assert pairs == [([], "root"), ([0], "a"), ([1], "b"), ([1, 0], "b0")]


class TestDisplayManager:
    """Tests for DisplayManager."""

    def test_config(self):
        """Test config options are read."""
        manager = DisplayManager(console=_console(), config={"show_addresses": False})
        assert manager.show_addresses is False
        assert manager.guide_style == "dim"

    def test_disable(self):
        """Test nothing is printed when disabled."""
        console = _console()
        manager = DisplayManager(console=console)
        manager.disable()
        assert manager.is_enabled() is False

        manager.show_tree(_sample())
        manager.show_details(_sample())
        assert console.export_text() == ""

        manager.enable()
        assert manager.is_enabled() is True

    def test_show_details(self):
        """Test details output."""
        console = _console()
        DisplayManager(console=console).show_details(_sample())
        assert "Status: Incomplete" in console.export_text()

    def test_show_leaves(self):
        """Test leaf listing with addresses."""
        console = _console()
        root = _sample()
        DisplayManager(console=console).show_leaves("Blocking", root, root.get_blocking())
        output = console.export_text()
        assert "Blocking" in output
        assert "1.0" in output
        assert "b0" in output

    def test_show_no_leaves(self):
        """Test empty leaf listing."""
        console = _console()
        DisplayManager(console=console).show_leaves("Blocking", Task(name="t"), [])
        assert "Blocking: none" in console.export_text()

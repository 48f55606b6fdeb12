"""Output formatting utilities for the CLI."""

from __future__ import annotations

import json
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Iterable, Mapping

import questionary
from prompt_toolkit.styles import Style
from rich.console import Console
from rich.table import Table
from rich.theme import Theme

from hbschema.core.schema import ClusterSchemaDefinition

_THEME = Theme(
    {
        "ok": "bold green",
        "warn": "yellow",
        "err": "bold red",
        "title": "bold cyan",
        "meta": "dim",
    }
)

# Central style for questionary (prompt_toolkit) confirmation prompts.
QUESTIONARY_STYLE_CONFIRM = Style.from_dict(
    {
        "qmark": "bold ansicyan",
        "question": "bold",
        "answer": "bold ansigreen",
        "instruction": "ansibrightblack",
        "error": "bold ansired",
    }
)

_MAX_KEY_WIDTH = 32

console = Console(theme=_THEME)


def _truncate(text: str, max_len: int) -> str:
    """Return text capped at max_len characters using an ASCII ellipsis."""
    if max_len <= 3 or len(text) <= max_len:
        return text[:max_len]
    return f"{text[: max_len - 3]}..."


def format_row_key(key: bytes) -> str:
    """Render a row key for display, escaping bytes that are not UTF-8."""
    return _truncate(key.decode("utf-8", errors="backslashreplace"), _MAX_KEY_WIDTH)


@dataclass(frozen=True)
class Out:
    """Output formatter for CLI messages and tables."""

    def info(self, msg: str) -> None:
        """Print an info message."""
        console.print(f"[title]›[/] {msg}")

    @contextmanager
    def status(self, msg: str):
        """Show a transient status spinner while work is in progress."""
        with console.status(msg, spinner="dots"):
            yield

    def success(self, msg: str) -> None:
        """Print a success message."""
        console.print(f"[ok]✓[/] {msg}")

    def warn(self, msg: str) -> None:
        """Print a warning message."""
        console.print(f"[warn]⚠[/] {msg}")

    def error(self, msg: str) -> None:
        """Print an error message."""
        console.print(f"[err]✗[/] {msg}")

    def header(self, title: str) -> None:
        """Print a header message."""
        console.print(f"[title]{title}[/]")

    def hint(self, msg: str) -> None:
        """Print a dimmed hint line."""
        console.print(f"[meta]{msg}[/]")

    def kv(self, items: Mapping[str, Any]) -> None:
        """Print key-value pairs."""
        for k, v in items.items():
            console.print(f"[meta]{k}[/]: {v}")

    def confirm(self, message: str, *, default: bool = False) -> bool:
        """
        Ask the user for a yes/no confirmation.

        Returns:
            True if the user confirms, False otherwise (including Ctrl-C).
        """
        console.print("[meta]Use y/n then Enter[/]")
        prompt = questionary.confirm(
            f"[hbschema] {message}",
            default=default,
            style=QUESTIONARY_STYLE_CONFIRM,
            auto_enter=False,
        )
        return bool(prompt.ask())

    def schema_table(
        self, definition: ClusterSchemaDefinition, title: str = "Tables"
    ) -> None:
        """Render one row per table: name, column families, split summary."""
        t = Table(title=title, show_lines=False)
        t.add_column("Table", style="ok")
        t.add_column("Column families")
        t.add_column("Splits", justify="right", style="meta")
        t.add_column("Split range", style="meta")

        for table in definition:
            families = ", ".join(table.column_families) or "-"
            split_range = ""
            if table.splits:
                split_range = (
                    f"{format_row_key(table.splits[0])} … "
                    f"{format_row_key(table.splits[-1])}"
                )
            t.add_row(table.name, families, str(len(table.splits)), split_range)

        console.print(t)

    def families_table(
        self, definition: ClusterSchemaDefinition, title: str = "Column families"
    ) -> None:
        """Render every column family with its configuration."""
        t = Table(title=title, show_lines=False)
        t.add_column("Table", style="ok")
        t.add_column("Family")
        t.add_column("Configuration", style="meta")

        for table in definition:
            for family, config in table.column_families.items():
                t.add_row(table.name, family, json.dumps(dict(config), sort_keys=True))

        console.print(t)

    def create_results_table(
        self, results: Iterable[Any], title: str = "Create results"
    ) -> None:
        """
        Render per-table creation results.

        Expects objects with `.table`, `.ok` and optional `.error`
        (like hbschema.core.writers.TableCreateResult).
        """
        t = Table(title=title, show_lines=False)
        t.add_column("Table", style="ok")
        t.add_column("Result")

        for r in results:
            ok = bool(getattr(r, "ok", False))
            err = getattr(r, "error", None)
            t.add_row(
                str(getattr(r, "table", "")),
                "[ok]CREATED[/]" if ok else f"[err]FAIL[/] {err}",
            )

        console.print(t)


out = Out()

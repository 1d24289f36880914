"""Confirmation and presentation boundary"""
from typing import List, Optional, Protocol, Sequence

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from git_workspaces.constants import (
    SYMBOL_BULLET,
    SYMBOL_CURRENT,
    SYMBOL_ERROR,
    SYMBOL_SUCCESS,
    SYMBOL_WARNING,
)
from git_workspaces.logging_config import get_logger
from git_workspaces.models.worktree import Workspace, WorkspaceStatus

logger = get_logger(__name__)

CONFIRM_ANSWERS = ("y", "yes")


class UserInterface(Protocol):
    """What the removal engine needs from whoever is driving it."""

    def confirm(self, prompt: str) -> bool:
        ...

    def show_warnings(self, warnings: Sequence[str]) -> None:
        ...

    def show_clean_report(
        self, removable: Sequence[WorkspaceStatus], non_removable: Sequence[WorkspaceStatus]
    ) -> None:
        ...

    def show_workspaces(self, workspaces: Sequence[Workspace]) -> None:
        ...

    def info(self, message: str) -> None:
        ...

    def success(self, message: str) -> None:
        ...

    def warning(self, message: str) -> None:
        ...

    def error(self, message: str) -> None:
        ...


class ConsoleUI:
    """Terminal implementation of UserInterface built on rich."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def confirm(self, prompt: str) -> bool:
        """Ask a y/N question. Anything but "y" or "yes" declines.

        EOFError and KeyboardInterrupt are not caught: an interrupted prompt
        aborts the operation.
        """
        response = self.console.input(f"{prompt} ")
        return response.strip().lower() in CONFIRM_ANSWERS

    def show_warnings(self, warnings: Sequence[str]) -> None:
        self.console.print(f"[yellow]{SYMBOL_WARNING}  Warning:[/yellow]")
        for warning in warnings:
            self.console.print(f"[yellow]  {SYMBOL_BULLET} {escape(warning)}[/yellow]")

    def show_clean_report(
        self, removable: Sequence[WorkspaceStatus], non_removable: Sequence[WorkspaceStatus]
    ) -> None:
        """Show which worktrees can be removed and why the others cannot."""
        if removable:
            self.console.print("\nThe following worktrees will be removed:")
            for status in removable:
                wt = status.workspace
                self.console.print(f"  {SYMBOL_BULLET} {wt.path} (branch: {wt.branch})")

        if non_removable:
            self.console.print("\n[yellow]The following worktrees will be kept:[/yellow]")
            for status in non_removable:
                wt = status.workspace
                reasons = ", ".join(status.warnings)
                self.console.print(f"  {SYMBOL_BULLET} {wt.path} (branch: {wt.branch}): [dim]{escape(reasons)}[/dim]")

        if not removable:
            self.console.print("\nNo worktrees can be removed.")

    def show_workspaces(self, workspaces: Sequence[Workspace]) -> None:
        """Display a table of worktrees."""
        table = Table()
        table.add_column("")
        table.add_column("Branch")
        table.add_column("Path")
        table.add_column("Commit")

        for wt in workspaces:
            marker = SYMBOL_CURRENT if wt.is_current else ""
            if wt.is_detached:
                branch = "[dim](detached)[/dim]"
            elif wt.is_main:
                branch = f"[cyan]{wt.branch}[/cyan]"
            else:
                branch = wt.branch
            table.add_row(marker, branch, wt.path, wt.commit[:8], style="bold" if wt.is_current else None)

        self.console.print(table)

    def info(self, message: str) -> None:
        self.console.print(escape(message))

    def success(self, message: str) -> None:
        self.console.print(f"[green]{SYMBOL_SUCCESS} {escape(message)}[/green]")

    def warning(self, message: str) -> None:
        self.console.print(f"[yellow]{SYMBOL_WARNING}  {escape(message)}[/yellow]")

    def error(self, message: str) -> None:
        self.console.print(f"[red]{SYMBOL_ERROR} {escape(message)}[/red]")


def format_removal_summary(removed: List[str], failed: List[tuple]) -> str:
    """One-line summary of a batch removal."""
    summary = f"Removed {len(removed)} worktree(s)"
    if failed:
        summary += f", {len(failed)} failed"
    return summary

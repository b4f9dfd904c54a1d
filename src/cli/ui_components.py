"""Rich rendering for command results.

Keeps command functions free of layout details. API-provided text is wrapped
in `Text` so brackets in titles or bodies are never read as Rich markup.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterable, Iterator

import typer
from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from core.domain.errors import PydrinthError
from core.domain.models import DownloadResult, ProjectDetail, ResolvedDependency, SearchHit

err_console = Console(stderr=True, soft_wrap=True)


@contextmanager
def handle_errors() -> Iterator[None]:
    """Print a `PydrinthError` to stderr and exit with its code."""

    try:
        yield
    except PydrinthError as exc:
        err_console.print(Text.assemble(("Error: ", "bold red"), str(exc)))
        raise typer.Exit(code=exc.exit_code) from exc


def print_search_hits(console: Console, hits: Iterable[SearchHit]) -> None:
    for hit in hits:
        line = Text()
        line.append(f'"{hit.title}"', style="bold cyan")
        line.append(f" : {hit.slug}")
        console.print(line)
        console.print(Text(hit.description))
        console.print()


def print_project(console: Console, project: ProjectDetail) -> None:
    console.print(Text(f"{project.project_type} - {project.title}", style="bold"))
    console.print(Text("".join(project.categories), style="magenta"))
    console.print()
    console.print(Text(project.body))
    console.print()


def print_dependencies(console: Console, dependencies: Iterable[ResolvedDependency]) -> None:
    for dependency in dependencies:
        line = Text()
        line.append(f"{dependency.dependency_type}:", style="yellow")
        line.append(f' "{dependency.title}" - {dependency.slug}')
        console.print(line)


def build_download_panel(result: DownloadResult) -> Panel:
    body = Text()
    body.append(f"{result.filename}\n", style="bold")
    body.append(f"from {result.url}\n", style="dim")
    body.append(f"saved to {result.path}")
    return Panel(body, title=Text("Download complete", style="bold green"), border_style="green")

"""pydrinth command-line interface.

Each command opens one API session, delegates to `core.services` and renders
the result. `PydrinthError` is the only exception handled here, settings
loading included: it is printed to stderr and becomes the process exit code.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Annotated, Iterator

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.text import Text

from adapters.http_client import build_client
from adapters.json_exporter import dump_models_json
from adapters.modrinth_api import ModrinthApi
from cli import __version__, doctor
from cli.ui_components import (
    build_download_panel,
    err_console,
    handle_errors,
    print_dependencies,
    print_project,
    print_search_hits,
)
from core.config import AppSettings, load_settings
from core.minecraft_dir import locate_mods_dir
from core.services.download import download_file, find_version_file
from core.services.projects import project_dependencies, project_info
from core.services.search import search_mods

log = logging.getLogger(__name__)

app = typer.Typer(
    no_args_is_help=True,
    help="Search, inspect and download Minecraft mods from Modrinth.",
)
app.add_typer(doctor.app, name="doctor")

_console = Console(soft_wrap=True)


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


@contextmanager
def _open_api(settings: AppSettings) -> Iterator[ModrinthApi]:
    with build_client(settings) as client:
        yield ModrinthApi(client, settings)


def _version_callback(value: bool) -> None:
    if value:
        _console.print(f"pydrinth {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", help="Log requests and decisions (DEBUG).")] = False,
    version: Annotated[
        bool | None,
        typer.Option("--version", callback=_version_callback, is_eager=True, help="Show the version and exit."),
    ] = None,
) -> None:
    with handle_errors():
        settings = load_settings()
    _configure_logging("DEBUG" if verbose else settings.log_level)


@app.command()
def search(
    query: Annotated[str, typer.Option("--query", "-q", help="The string to search for matching mods.")],
    game_version: Annotated[
        str,
        typer.Option("--gameversion", "--game-version", "-v", help="The Minecraft version to search mods for."),
    ],
    categories: Annotated[
        list[str] | None,
        typer.Option(
            "--categories",
            "-c",
            help='Categories like "optimization"; the mod loader also goes here. Repeatable.',
        ),
    ] = None,
    as_json: Annotated[bool, typer.Option("--json", help="Print the hits as JSON.")] = False,
) -> None:
    """Search Modrinth for mods."""

    with handle_errors():
        settings = load_settings()
        with _open_api(settings) as api:
            hits = search_mods(api, query, game_version, categories)

    if as_json:
        typer.echo(dump_models_json(hits))
    else:
        print_search_hits(_console, hits)


@app.command()
def download(
    project: Annotated[
        str,
        typer.Option("--project", "-p", help='The project to download: a slug like "sodium" or an id like "AABBCC".'),
    ],
    game_version: Annotated[
        str,
        typer.Option("--game-version", "--gameversion", "-v", help="The targeted Minecraft version."),
    ],
    loader: Annotated[str, typer.Option("--loader", "-l", help="The mod loader for the mod.")],
    mcdir: Annotated[
        bool,
        typer.Option("--mcdir", help="Install the mod into the .minecraft/mods folder when it can be found."),
    ] = False,
    output_dir: Annotated[
        Path | None,
        typer.Option(
            "--output-dir",
            "-o",
            exists=True,
            file_okay=False,
            dir_okay=True,
            help="Directory to save into (defaults to the current directory).",
        ),
    ] = None,
    force: Annotated[bool, typer.Option("--force", help="Overwrite an existing file.")] = False,
) -> None:
    """Download the first matching file of a project."""

    with handle_errors():
        settings = load_settings()
        target_dir = output_dir or Path.cwd()
        if mcdir:
            mods_dir = locate_mods_dir(settings.minecraft_dir)
            if mods_dir is None:
                log.warning("Couldn't find the .minecraft directory; saving to %s instead", target_dir)
            else:
                target_dir = mods_dir

        with _open_api(settings) as api:
            version_file = find_version_file(api, project, loader, game_version)
            _console.print(Text(f"Downloading {version_file.filename} from {version_file.url}"))
            result = download_file(api, version_file, target_dir, force=force)

    _console.print(build_download_panel(result))


@app.command()
def info(
    project: Annotated[str, typer.Option("--project", "-p", help="The project to describe: a slug or an id.")],
    as_json: Annotated[bool, typer.Option("--json", help="Print the project as JSON.")] = False,
) -> None:
    """Show a project's type, title, categories and description."""

    with handle_errors():
        settings = load_settings()
        with _open_api(settings) as api:
            detail = project_info(api, project)

    if as_json:
        typer.echo(dump_models_json(detail))
    else:
        print_project(_console, detail)


@app.command()
def dependencies(
    project: Annotated[str, typer.Option("--project", "-p", help="The project to list dependencies for.")],
    game_version: Annotated[
        str,
        typer.Option("--game-version", "--gameversion", "-v", help="The Minecraft version of the mod."),
    ],
    loader: Annotated[str, typer.Option("--loader", "-l", help="The mod loader of the mod.")],
    as_json: Annotated[bool, typer.Option("--json", help="Print the dependencies as JSON.")] = False,
) -> None:
    """List the dependencies of a project's newest matching version."""

    with handle_errors():
        settings = load_settings()
        with _open_api(settings) as api:
            resolved = project_dependencies(api, project, loader, game_version)

    if as_json:
        typer.echo(dump_models_json(resolved))
    else:
        print_dependencies(_console, resolved)


def run() -> None:
    app()

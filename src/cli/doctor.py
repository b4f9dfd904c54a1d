"""Doctor command for environment diagnostics."""

from __future__ import annotations

from pathlib import Path

import httpx
import typer
from rich.console import Console
from rich.table import Table

from adapters.http_client import build_client
from cli.ui_components import handle_errors
from core.config import AppSettings, get_user_env_file, load_settings, write_user_env_vars
from core.minecraft_dir import default_minecraft_dir

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console(soft_wrap=True)


def _check_api(settings: AppSettings) -> tuple[bool, str]:
    url = f"{settings.api_base_url.rstrip('/')}/tag/loader"
    try:
        with build_client(settings) as client:
            response = client.get(url)
    except httpx.HTTPError as exc:
        return False, str(exc)
    return response.is_success, f"HTTP {response.status_code}"


def _check_mods_dir(settings: AppSettings) -> tuple[str, str]:
    # Read-only: `download --mcdir` is the one that creates `mods`.
    root = settings.minecraft_dir or default_minecraft_dir()
    if root is None:
        return "OPTIONAL", "unknown platform -> --mcdir saves to the output directory"

    root = root.expanduser()
    mods = root / "mods"
    if mods.is_dir():
        return "OK", str(mods)
    if root.is_dir():
        return "OPTIONAL", f"{mods} missing -> created by the first --mcdir download"
    return "OPTIONAL", f"{root} not found -> --mcdir saves to the output directory"


@app.command()
def run() -> None:
    """Run baseline diagnostics and show what would be used."""

    with handle_errors():
        settings = load_settings()

    table = Table(title="pydrinth doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    table.add_row("API base_url", "OK", settings.api_base_url)
    table.add_row("User-Agent", "OK", settings.user_agent)

    ok_api, detail_api = _check_api(settings)
    table.add_row("API connectivity", "OK" if ok_api else "FAIL", detail_api)

    table.add_row("Mods directory", *_check_mods_dir(settings))

    table.add_row("User config", "OK" if get_user_env_file().exists() else "OPTIONAL", str(get_user_env_file()))

    _console.print(table)

    if not ok_api:
        raise typer.Exit(code=1)


@app.command()
def setup() -> None:
    """Interactive setup (stores config in the user config .env)."""

    with handle_errors():
        settings = load_settings()

    user_agent = typer.prompt("User-Agent", default=settings.user_agent, show_default=True).strip()
    minecraft_dir = typer.prompt(
        "Minecraft directory (empty = auto-detect)",
        default=str(settings.minecraft_dir or ""),
        show_default=False,
    ).strip()

    if not user_agent:
        raise typer.BadParameter("User-Agent is required")
    if minecraft_dir and not Path(minecraft_dir).expanduser().is_dir():
        raise typer.BadParameter(f"{minecraft_dir} is not a directory")

    env_path = write_user_env_vars(
        {
            "PYDRINTH_USER_AGENT": user_agent,
            "PYDRINTH_MINECRAFT_DIR": minecraft_dir or None,
        }
    )

    _console.print(f"[green]Saved config to:[/green] {env_path}")

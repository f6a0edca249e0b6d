"""Version information for git-smart-check."""

import importlib.metadata
from pathlib import Path
from typing import List

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from . import __version__

DISTRIBUTION_NAME = "gitsmartcheck"

console = Console()


def get_installed_version() -> str:
    """Version recorded in the installed distribution's metadata."""
    try:
        return importlib.metadata.version(DISTRIBUTION_NAME)
    except importlib.metadata.PackageNotFoundError:
        return "unknown"


def get_installation_path() -> Path:
    return Path(__file__).parent


def missing_modules() -> List[str]:
    """Names of validation modules that fail to import."""
    missing = []
    for module in ("cli", "config", "protection", "templates", "commit_message", "names"):
        try:
            importlib.import_module(f"{__package__}.{module}")
        except ImportError as e:
            console.print(f"[red]Cannot import {module}: {e}[/red]")
            missing.append(module)
    return missing


def display_version_info() -> None:
    """Print version, installation path and a module import check in a panel."""
    from .templates import DEFAULT_TEMPLATES

    installed_version = get_installed_version()

    info = Text()
    info.append("git-smart-check\n", style="bold blue")
    info.append(f"Package version: {__version__}\n", style="green")
    info.append(f"Installed version: {installed_version}\n", style="cyan")
    info.append(f"Installation path: {get_installation_path()}\n", style="yellow")
    info.append(f"Built-in commit templates: {len(DEFAULT_TEMPLATES)}\n")

    if installed_version not in (__version__, "unknown"):
        info.append("\nInstalled metadata is out of date, reinstall with: pip install -e .\n", style="red")

    missing = missing_modules()
    if missing:
        info.append(f"\nBroken modules: {', '.join(missing)}\n", style="red")
    else:
        info.append("\nAll validation modules import cleanly\n", style="green")

    console.print(Panel(info, title="Version Information", border_style="blue"))

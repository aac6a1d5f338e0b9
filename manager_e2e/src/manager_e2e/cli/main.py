"""CLI application for the manager E2E suite."""

import logging
from typing import Optional

import typer
from playwright.sync_api import Error as PlaywrightError
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from manager_e2e.core.config import Config
from manager_e2e.models.communications import POST_TYPES, SIMPLE_POST_PATH
from manager_e2e.sessions.storage_state import create_storage_state, summarize_storage_state
from manager_e2e.utils.sanitization import mask_email

app = typer.Typer(
    name="manager-e2e",
    help="Manager E2E - browser tests for the communications manager",
    no_args_is_help=True,
)

console = Console()


def get_config() -> Config:
    """Load and validate configuration from the environment."""
    try:
        config = Config.from_env()
        config.validate()
        return config
    except ValueError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)


def setup_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Manager E2E command line."""
    setup_logging("DEBUG" if verbose else Config.from_env().log_level)


@app.command("auth-setup")
def auth_setup(
    base_url: Optional[str] = typer.Option(None, "--base-url", "-u", help="Manager base URL"),
    storage_state: Optional[str] = typer.Option(
        None,
        "--storage-state",
        "-o",
        help="Where to save the storage state JSON",
    ),
) -> None:
    """Log in by hand in a browser window and save the session for the tests."""
    config = get_config()
    target_url = base_url or config.base_url
    target_path = storage_state or config.storage_state

    def announce(login_url: str) -> None:
        console.print(Panel(
            f"Complete the login in the browser window.\n[dim]{login_url}[/dim]",
            title="Manager login",
            border_style="yellow",
        ))

    try:
        saved = create_storage_state(target_url, target_path, on_ready=announce)
    except (PlaywrightError, OSError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    console.print(f"[green]Storage state saved to:[/green] {saved}")


@app.command("info")
def show_info() -> None:
    """Show configuration and the communication types under test."""
    config = get_config()

    settings = Table(title="Manager E2E Configuration")
    settings.add_column("Setting", style="cyan")
    settings.add_column("Value", style="white")

    state = summarize_storage_state(config.storage_state)
    state_text = (
        f"{config.storage_state} ({state['cookies']} cookies, {state['origins']} origins)"
        if state["exists"]
        else f"{config.storage_state} [red](missing)[/red]"
    )

    settings.add_row("Base URL", config.base_url)
    settings.add_row("Storage state", state_text)
    settings.add_row("Users file", str(config.users_file))
    settings.add_row("Media dir", str(config.media_dir))
    settings.add_row("Microsoft SSO allowed", "yes" if config.allow_sso else "no")
    settings.add_row("Prefer Microsoft SSO", "yes" if config.prefer_sso else "no")
    settings.add_row("SSO account", mask_email(config.sso_email) if config.sso_email else "-")
    console.print(settings)

    types = Table(title="Communication Types")
    types.add_column("Type", style="cyan")
    types.add_column("Wizard path", style="white")
    types.add_column("Collects data", style="green")

    types.add_row("Post simples", SIMPLE_POST_PATH, "no")
    for post_type in POST_TYPES:
        types.add_row(post_type.name, post_type.path, "yes" if post_type.data_collection else "no")
    console.print(types)

    console.print("\n[yellow]Environment Variables:[/yellow]")
    console.print("  MANAGER_E2E_BASE_URL        Manager base URL")
    console.print("  MANAGER_E2E_STORAGE_STATE   Saved session (default: storage/auth.json)")
    console.print("  MANAGER_E2E_USERS_FILE      Users JSON (default: data/users.json)")
    console.print("  MANAGER_E2E_RUN             Set to 1 to run the browser tests")
    console.print("  ALLOW_MICROSOFT_SSO         Allow the Microsoft SSO/MFA login path")


@app.command("version")
def show_version() -> None:
    """Show version information."""
    from manager_e2e import __version__
    console.print(f"Manager E2E v{__version__}")


def main() -> None:
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()

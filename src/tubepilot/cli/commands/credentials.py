"""Credentials command implementation."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.table import Table

from tubepilot.cli.commands.run import load_config
from tubepilot.core.config.credentials import CredentialStore
from tubepilot.core.models.entities import mask_token
from tubepilot.plugins.platforms.oauth import GoogleTokenRefresher
from tubepilot.plugins.platforms.youtube_api import PlatformAPIError

if TYPE_CHECKING:
    from pathlib import Path

console = Console()


async def run_credentials_command(
    action: str,
    email: str | None,
    access_token: str | None,
    refresh_token: str | None,
    name: str,
    config_file: Path | None,
) -> bool:
    """Run credential management commands."""
    config = load_config(config_file)
    store = CredentialStore(config.storage.credentials_dir)

    if action == "list":
        list_users(store)
        return True

    if action not in ("add", "remove", "refresh"):
        console.print(f"[red]Unknown action: {action}[/red]")
        console.print("Available actions: add, list, remove, refresh")
        return False

    if not email:
        console.print(f"[red]An e-mail is required for '{action}'[/red]")
        return False

    if action == "add":
        if not access_token or not refresh_token:
            console.print("[red]--access-token and --refresh-token are required[/red]")
            return False
        store.save(email, access_token, refresh_token, full_name=name)
        console.print(f"[green]Saved credentials for {email}[/green]")
        return True

    if action == "remove":
        if store.remove(email):
            console.print(f"[green]Removed {email}[/green]")
            return True
        console.print(f"[yellow]{email} not found[/yellow]")
        return False

    credential = store.get_credential(email)
    if credential is None:
        console.print(f"[red]No stored credentials for {email}[/red]")
        return False

    try:
        refreshed = await GoogleTokenRefresher(config.platform).refresh(credential)
    except PlatformAPIError as e:
        console.print(f"[red]Refresh failed: {e}[/red]")
        return False

    store.update_tokens(email, refreshed)
    console.print(f"[green]Refreshed access token for {email}[/green]")
    return True


def list_users(store: CredentialStore) -> None:
    users = store.list_users()
    if not users:
        console.print("[yellow]No stored users[/yellow]")
        return

    table = Table(title="Stored users")
    table.add_column("E-mail", style="cyan")
    table.add_column("Name")
    table.add_column("Access token")
    table.add_column("Updated")

    for email in users:
        record = store.get(email) or {}
        table.add_row(
            email,
            record.get("full_name", ""),
            mask_token(record.get("access_token", "")),
            record.get("updated_at", ""),
        )

    console.print(table)

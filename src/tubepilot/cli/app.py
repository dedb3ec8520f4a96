"""Main CLI application."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from tubepilot import __version__

# Create main app
app = typer.Typer(
    name="tubepilot",
    help="Topic-driven YouTube engagement automation",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

console = Console()


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        console.print(f"[bold blue]tubepilot[/bold blue] v{__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-v",
            help="Show version",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """tubepilot - watch, like, comment and curate videos for a topic."""
    pass


@app.command()
def run(
    topic: Annotated[str, typer.Argument(help="Topic to search for")],
    user: Annotated[
        str | None,
        typer.Option("--user", "-u", help="E-mail of a stored user"),
    ] = None,
    access_token: Annotated[
        str | None,
        typer.Option("--access-token", envvar="TUBEPILOT_ACCESS_TOKEN", help="OAuth access token"),
    ] = None,
    refresh_token: Annotated[
        str | None,
        typer.Option("--refresh-token", envvar="TUBEPILOT_REFRESH_TOKEN", help="OAuth refresh token"),
    ] = None,
    config: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Config file path"),
    ] = None,
    headless: Annotated[
        bool | None,
        typer.Option("--headless/--no-headless", help="Run the browser headless"),
    ] = None,
    budget_minutes: Annotated[
        float | None,
        typer.Option("--budget-minutes", help="Total watch time budget for the run"),
    ] = None,
    cap_minutes: Annotated[
        float | None,
        typer.Option("--cap-minutes", help="Maximum watch time per video"),
    ] = None,
    phase_order: Annotated[
        str | None,
        typer.Option("--phase-order", help="channels_first or videos_first"),
    ] = None,
    cookies_file: Annotated[
        Path | None,
        typer.Option("--cookies-file", help="JSON file of browser cookies"),
    ] = None,
) -> None:
    """Run the engagement pipeline for a topic."""
    from tubepilot.cli.commands.run import run_pipeline_command

    ok = asyncio.run(
        run_pipeline_command(
            topic=topic,
            user=user,
            access_token=access_token,
            refresh_token=refresh_token,
            config_file=config,
            headless=headless,
            budget_minutes=budget_minutes,
            cap_minutes=cap_minutes,
            phase_order=phase_order,
            cookies_file=cookies_file,
        )
    )
    if not ok:
        raise typer.Exit(1)


@app.command()
def credentials(
    action: Annotated[
        str,
        typer.Argument(help="Action: add, list, remove, refresh"),
    ],
    email: Annotated[
        str | None,
        typer.Argument(help="User e-mail"),
    ] = None,
    access_token: Annotated[
        str | None,
        typer.Option("--access-token", help="OAuth access token"),
    ] = None,
    refresh_token: Annotated[
        str | None,
        typer.Option("--refresh-token", help="OAuth refresh token"),
    ] = None,
    name: Annotated[
        str,
        typer.Option("--name", help="Display name"),
    ] = "",
    config: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Config file path"),
    ] = None,
) -> None:
    """Manage stored user credentials."""
    from tubepilot.cli.commands.credentials import run_credentials_command

    ok = asyncio.run(
        run_credentials_command(
            action=action,
            email=email,
            access_token=access_token,
            refresh_token=refresh_token,
            name=name,
            config_file=config,
        )
    )
    if not ok:
        raise typer.Exit(1)


@app.command(name="config")
def config_cmd(
    action: Annotated[
        str,
        typer.Argument(help="Action: show, init"),
    ],
    file: Annotated[
        Path | None,
        typer.Option("--file", "-f", help="Config file path"),
    ] = None,
) -> None:
    """Manage configuration."""
    from tubepilot.core.models.config import Config

    if action == "show":
        import yaml

        cfg = Config.from_yaml(file) if file and file.exists() else Config()
        console.print(yaml.dump(cfg.to_dict(), default_flow_style=False))

    elif action == "init":
        output_path = file or Path("./config/default.yaml")
        cfg = Config()
        cfg.to_yaml(output_path)
        console.print(f"[green]Config initialized at {output_path}[/green]")

    else:
        console.print(f"[red]Unknown action: {action}[/red]")
        console.print("Available actions: show, init")
        raise typer.Exit(1)


@app.command()
def serve(
    port: Annotated[
        int,
        typer.Option("--port", "-p", help="Port to listen on"),
    ] = 8080,
    host: Annotated[
        str,
        typer.Option("--host", "-h", help="Host to bind to"),
    ] = "127.0.0.1",
    reload: Annotated[
        bool,
        typer.Option("--reload", help="Enable auto-reload for development"),
    ] = False,
) -> None:
    """Start the HTTP API."""
    import uvicorn

    from tubepilot.core.models.config import Config

    console.print("[bold green]Starting tubepilot API[/bold green]")
    console.print(f"  Host: {host}")
    console.print(f"  Port: {port}")
    if not Config().api.auth_enabled:
        console.print("[yellow]  No API key set (TUBEPILOT_API__KEY); requests will be refused[/yellow]")
    console.print()

    uvicorn.run(
        "tubepilot.api:create_app",
        host=host,
        port=port,
        reload=reload,
        factory=True,
    )


def main() -> None:
    """Entry point."""
    app()


if __name__ == "__main__":
    main()

"""Run command implementation."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from rich.console import Console
from rich.table import Table

from tubepilot.core.config.credentials import CredentialStore
from tubepilot.core.logging import configure_logging
from tubepilot.core.models.config import MINUTE_MS, Config
from tubepilot.core.models.entities import Credential, TopicRequest
from tubepilot.runners.pipeline_runner import run_topic

if TYPE_CHECKING:
    from pathlib import Path

    from tubepilot.core.models.entities import PipelineResult

console = Console()

PHASE_ORDERS = ("channels_first", "videos_first")


def load_config(config_file: Path | None) -> Config:
    if config_file and config_file.exists():
        return Config.from_yaml(config_file)
    return Config()


async def run_pipeline_command(
    topic: str,
    user: str | None,
    access_token: str | None,
    refresh_token: str | None,
    config_file: Path | None,
    headless: bool | None,
    budget_minutes: float | None,
    cap_minutes: float | None,
    phase_order: str | None,
    cookies_file: Path | None,
) -> bool:
    """Run the pipeline once and print a summary.

    Returns:
        True when the run completed
    """
    config = load_config(config_file)
    configure_logging(config.logs)

    # Override with CLI options
    if headless is not None:
        config.browser.headless = headless
    if budget_minutes is not None:
        config.pipeline.watch_budget_ms = int(budget_minutes * MINUTE_MS)
    if cap_minutes is not None:
        config.pipeline.per_video_cap_ms = int(cap_minutes * MINUTE_MS)
    if phase_order is not None:
        if phase_order not in PHASE_ORDERS:
            console.print(f"[red]Invalid phase order: {phase_order}[/red]")
            console.print(f"Available: {', '.join(PHASE_ORDERS)}")
            return False
        config.pipeline.phase_order = phase_order

    if cookies_file is not None:
        if not cookies_file.exists():
            console.print(f"[red]Cookies file not found: {cookies_file}[/red]")
            return False
        try:
            config.browser.cookies = json.loads(cookies_file.read_text())
        except ValueError as e:
            console.print(f"[red]Invalid cookies file: {e}[/red]")
            return False

    if not topic.strip():
        console.print("[red]Topic is required[/red]")
        return False

    credential = _resolve_credential(config, user, access_token, refresh_token)
    if credential is None:
        return False

    console.print(f"[bold blue]tubepilot[/bold blue] - Processing topic [bold]{topic}[/bold]")
    console.print(
        f"Budget: {config.pipeline.watch_budget_ms / MINUTE_MS:g} min, "
        f"Per video: {config.pipeline.per_video_cap_ms / MINUTE_MS:g} min, "
        f"Order: {config.pipeline.phase_order}"
    )

    try:
        result = await run_topic(credential, TopicRequest(topic=topic.strip()), config)
    except Exception as e:
        console.print(f"[red]Processing error: {e}[/red]")
        return False

    print_summary(result)
    return True


def _resolve_credential(
    config: Config,
    user: str | None,
    access_token: str | None,
    refresh_token: str | None,
) -> Credential | None:
    if access_token:
        return Credential(access_token=access_token, refresh_token=refresh_token or "")

    if user:
        credential = CredentialStore(config.storage.credentials_dir).get_credential(user)
        if credential is None:
            console.print(f"[red]No stored credentials for {user}[/red]")
        return credential

    console.print("[red]Provide --user or --access-token[/red]")
    return None


def print_summary(result: PipelineResult) -> None:
    table = Table(title=f"Run summary: {result.topic}")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Outcome", result.outcome.value)
    table.add_row("Videos found", str(result.videos_found))
    table.add_row("Videos processed", str(result.videos_processed))
    table.add_row("Watched", f"{result.budget.accumulated_ms / MINUTE_MS:.1f} min")
    table.add_row("Budget", f"{result.budget.limit_ms / MINUTE_MS:.1f} min")
    table.add_row("Channels subscribed", str(len(result.channels_subscribed)))
    table.add_row("Duration", f"{result.duration_s:.1f} s")

    console.print()
    console.print(table)

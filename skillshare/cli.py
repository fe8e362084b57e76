"""SkillShare CLI — browse, publish and rate skills on a local store."""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from skillshare import __version__
from skillshare.config import load_config
from skillshare.controller import SkillShareController
from skillshare.models import ALL_CATEGORIES, SkillCategory, SkillDraft, TransactionStatus
from skillshare.store.file_store import FileStore
from skillshare.wallet import StaticWalletProvider

console = Console()

_CATEGORY_CHOICES = [c.value for c in SkillCategory]


def _build_controller(ctx: click.Context) -> SkillShareController:
    config = ctx.obj["config"]
    return SkillShareController(FileStore(config.store_dir), config=config)


async def _connect(controller: SkillShareController, wallet: str | None) -> None:
    address = wallet or controller.config.wallet_address
    if address:
        await controller.connect_wallet(StaticWalletProvider([address]))


def _print_transaction(controller: SkillShareController) -> None:
    tx = controller.transaction
    style = {
        TransactionStatus.SUCCESS: "green",
        TransactionStatus.ERROR: "red",
        TransactionStatus.PENDING: "yellow",
    }[tx.status]
    console.print(f"  [{style}]{tx.message}[/]")


@click.group()
@click.version_option(version=__version__)
@click.option("--config", "config_path", default=None, type=click.Path(exists=True), help="YAML config file")
@click.option("--store-dir", "-s", default=None, help="Store directory (overrides config)")
@click.option("--verbose", "-v", is_flag=True, help="Debug logging")
@click.pass_context
def main(ctx: click.Context, config_path: str | None, store_dir: str | None, verbose: bool):
    """SkillShare — anonymous peer-to-peer skill sharing.

    Skills are published to a key/value store with their content passed
    through a placeholder privacy encoding.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )
    config = load_config(config_path)
    if store_dir:
        config.store_dir = Path(store_dir)
    ctx.obj = {"config": config}


# ── Browse ───────────────────────────────────────────────────────────


@main.command(name="list")
@click.option("--search", "-q", default="", help="Match category or owner")
@click.option("--category", "-c", default=ALL_CATEGORIES, type=click.Choice([ALL_CATEGORIES, *_CATEGORY_CHOICES]))
@click.pass_context
def list_skills(ctx: click.Context, search: str, category: str):
    """List shared skills, newest first."""
    controller = _build_controller(ctx)
    asyncio.run(controller.load_all())
    controller.set_search(search)
    controller.set_filter(category)

    skills = controller.filtered_records
    if not skills:
        console.print("[yellow]No matching skills found.[/]")
        return

    table = Table(title=f"Available Skills ({len(skills)} of {len(controller.records)})")
    table.add_column("ID", style="dim")
    table.add_column("Category", style="cyan", no_wrap=True)
    table.add_column("Owner", overflow="fold")
    table.add_column("Shared")
    table.add_column("Rating", justify="right", style="green")

    for skill in skills:
        table.add_row(
            skill.id,
            skill.category.value,
            skill.owner,
            datetime.fromtimestamp(skill.timestamp).strftime("%Y-%m-%d"),
            "★" * skill.rating if skill.rating else "-",
        )

    console.print(table)


@main.command()
@click.pass_context
def stats(ctx: click.Context):
    """Show the community skill distribution."""
    controller = _build_controller(ctx)
    asyncio.run(controller.load_all())

    table = Table(title=f"Community Skill Distribution ({len(controller.records)} skills)")
    table.add_column("Category", style="cyan")
    table.add_column("Count", justify="right")
    table.add_column("Share", justify="right", style="green")

    for stat in controller.statistics:
        table.add_row(stat.category.value, str(stat.count), f"{stat.percentage:.0f}%")

    console.print(table)


@main.command()
@click.pass_context
def index(ctx: click.Context):
    """Print the registry index as stored."""
    controller = _build_controller(ctx)
    ids = asyncio.run(controller.index.load_index())

    if not ids:
        console.print("[yellow]Registry index is empty.[/]")
        return
    for record_id in ids:
        console.print(f"  {record_id}")


# ── Publish / rate ───────────────────────────────────────────────────


@main.command()
@click.option("--category", "-c", required=True, type=click.Choice(_CATEGORY_CHOICES))
@click.option("--description", "-d", default="", help="What you can teach")
@click.option("--experience", "-e", default="", help="Your experience level")
@click.option("--wallet", "-w", default=None, help="Owner address (defaults to SKILLSHARE_WALLET)")
@click.pass_context
def submit(ctx: click.Context, category: str, description: str, experience: str, wallet: str | None):
    """Share a skill anonymously."""
    controller = _build_controller(ctx)
    draft = SkillDraft(category=category, description=description, experience=experience)

    async def run() -> bool:
        await _connect(controller, wallet)
        return await controller.submit(draft)

    console.print(f"\n[bold blue]SkillShare[/] — Sharing a {category} skill\n")
    ok = asyncio.run(run())
    _print_transaction(controller)
    if not ok:
        ctx.exit(1)


@main.command()
@click.argument("skill_id")
@click.argument("stars", type=click.IntRange(1, 5))
@click.option("--wallet", "-w", default=None, help="Rater address (defaults to SKILLSHARE_WALLET)")
@click.pass_context
def rate(ctx: click.Context, skill_id: str, stars: int, wallet: str | None):
    """Rate a skill from 1 to 5 stars."""
    controller = _build_controller(ctx)

    async def run() -> bool:
        await _connect(controller, wallet)
        return await controller.rate(skill_id, stars)

    ok = asyncio.run(run())
    _print_transaction(controller)
    if not ok:
        ctx.exit(1)


@main.command()
@click.argument("skill_id")
@click.pass_context
def learn(ctx: click.Context, skill_id: str):
    """Ask to learn a skill from its owner."""
    controller = _build_controller(ctx)
    asyncio.run(controller.load_all())

    record = controller.find_record(skill_id)
    if record is None:
        console.print(f"[red]Skill not found:[/] {skill_id}")
        ctx.exit(1)

    message = controller.request_to_learn(skill_id)
    console.print(Panel(message, title=f"{record.category.value} from {record.short_owner}..."))

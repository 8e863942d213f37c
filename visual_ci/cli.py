"""CLI entry point for the screenshot test runner."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from visual_ci.build_runner import ShellBuild
from visual_ci.github.status_reporter import GitHubStatusReporter
from visual_ci.models.config import RunnerConfig
from visual_ci.models.report_data import ReportData
from visual_ci.orchestrator import DiffOrchestrator
from visual_ci.plugins import load_factory

console = Console()


def setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )


def build_orchestrator(cfg: RunnerConfig) -> DiffOrchestrator:
    """Construct every collaborator once and hand them to the orchestrator."""
    if not cfg.report_controller:
        raise click.UsageError("'report_controller' is not set in the config file")
    if not cfg.image_differ:
        raise click.UsageError("'image_differ' is not set in the config file")

    try:
        controller_factory = load_factory(cfg.report_controller)
        differ_factory = load_factory(cfg.image_differ)
    except (ImportError, ValueError) as e:
        raise click.UsageError(str(e)) from e

    return DiffOrchestrator(
        cfg,
        build=ShellBuild(cfg.build),
        report_controller=controller_factory(cfg),
        image_differ=differ_factory(cfg),
        status_reporter=GitHubStatusReporter(cfg.github),
    )


def _summary_table(title: str, report_data: ReportData) -> Table:
    screenshots = report_data.screenshots
    table = Table(title=title)
    table.add_column("Category", style="bold")
    table.add_column("Screenshots")
    table.add_row("Changed", f"[red]{len(screenshots.changed)}[/red]")
    table.add_row("Added", f"[yellow]{len(screenshots.added)}[/yellow]")
    table.add_row("Removed", f"[yellow]{len(screenshots.removed)}[/yellow]")
    table.add_row("Unchanged", f"[green]{len(screenshots.unchanged)}[/green]")
    if report_data.meta.report_html_url:
        table.caption = report_data.meta.report_html_url
    return table


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """Visual regression screenshot tests for pull requests"""
    setup_logging(verbose)


@cli.command()
@click.option("--config", "-c", default="visual-ci.json", help="Config file path")
def test(config: str) -> None:
    """Build, capture and diff screenshots, then publish the PR status."""
    try:
        cfg = RunnerConfig.load(config)
    except FileNotFoundError:
        console.print(f"[red]Config file not found: {config}[/red]")
        console.print("Run 'visual-ci init' to create a default config.")
        sys.exit(1)

    orchestrator = build_orchestrator(cfg)
    exit_code = orchestrator.run_sync()

    if orchestrator.primary_report is not None:
        console.print(_summary_table(f"Diff against {cfg.diff_base}", orchestrator.primary_report))
    if orchestrator.reference_report is not None:
        console.print(_summary_table(f"Diff against {cfg.stable_branch}", orchestrator.reference_report))

    sys.exit(int(exit_code))


@cli.command()
@click.option("--diff-base", "-d", default="origin/master", help="Branch, tag or commit to diff against")
def init(diff_base: str) -> None:
    """Create a default configuration file."""
    config_path = Path("visual-ci.json")
    if config_path.exists():
        if not click.confirm("visual-ci.json already exists. Overwrite?"):
            return

    cfg = RunnerConfig(diff_base=diff_base)
    cfg.save(config_path)
    console.print(f"[green]Created {config_path}[/green]")
    console.print("\nSet 'report_controller' and 'image_differ' to your factories, then run:")
    console.print("  [blue]visual-ci test[/blue]")


if __name__ == "__main__":
    cli()

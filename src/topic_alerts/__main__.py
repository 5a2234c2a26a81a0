"""CLI entry point for topic-alerts."""

from __future__ import annotations

import asyncio
import logging
import sys

import click

from . import __version__
from .exceptions import TopicAlertsError


# ── Helpers ──────────────────────────────────────────────


def _configure_logging(verbose: bool = False) -> None:
    """Console logging for the CLI."""
    log_format = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"

    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(logging.Formatter(log_format, datefmt=date_format))

    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, handlers=[console], force=True)
    for noisy in ("aiohttp", "asyncio"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


def _load(config_path: str | None):
    from .config import load_config

    try:
        return load_config(config_path)
    except TopicAlertsError as e:
        raise click.ClickException(str(e)) from e


# ── CLI Commands ─────────────────────────────────────────


@click.group()
@click.version_option(version=__version__, prog_name="topic-alerts")
def main() -> None:
    """topic-alerts — chat notifications from message-bus topics."""


@main.command()
@click.option("--config", "config_path", default=None, help="Config file path")
@click.option(
    "--input",
    "input_file",
    type=click.File("r"),
    default="-",
    help="Update stream, one '<topic> <payload>' per line (default: stdin)",
)
@click.option(
    "--grace", default=None, type=float, help="Override alerts_grace_seconds"
)
@click.option("--verbose", "-v", is_flag=True, help="Debug logging")
def run(config_path: str | None, input_file, grace: float | None, verbose: bool) -> None:
    """Process updates and send alerts until the input ends."""
    from .app import Application
    from .transport import LineTransport

    _configure_logging(verbose)
    config = _load(config_path)
    if grace is not None:
        config.alerts_grace_seconds = grace
    try:
        config.validate_for_run()
        app = Application(config, LineTransport(input_file))
    except TopicAlertsError as e:
        raise click.ClickException(str(e)) from e

    try:
        asyncio.run(app.run())
    except KeyboardInterrupt:
        click.echo("Interrupted, shutting down...", err=True)


@main.command()
@click.option("--config", "config_path", default=None, help="Config file path")
def check(config_path: str | None) -> None:
    """Validate the configuration and show how every alert test is read."""
    from .notifications import LogNotifier
    from .orchestrator import UpdateOrchestrator

    config = _load(config_path)
    orchestrator = UpdateOrchestrator(config.events, LogNotifier())

    click.echo("topic-alerts configuration")
    click.echo("=" * 40)
    click.echo(f"Notifications: {config.notifications.default_type}")
    try:
        config.validate_for_run()
    except TopicAlertsError as e:
        click.echo(f"  Warning: {e}")

    topics = orchestrator.subscription_topics()
    click.echo(f"Topics: {len(topics)}")
    for topic in topics:
        click.echo(f"  {topic}")
    if not topics:
        click.echo("  (none configured)")

    rules = orchestrator.engine.rules
    click.echo(f"Alerts: {len(rules)}")
    for rule in rules:
        click.echo(f"  {rule.topic}: {rule.test.raw!r} → {rule.test.kind.value}")

    motd_path = config.motd_path()
    if config.events.motd:
        found = "found" if motd_path.exists() else "missing"
        click.echo(f"MOTD template: {motd_path} ({found})")
    else:
        click.echo("MOTD: disabled")


@main.command()
@click.option("--config", "config_path", default=None, help="Config file path")
def motd(config_path: str | None) -> None:
    """Print the status digest with every value still unknown."""
    from functools import partial

    from .config import load_motd_template
    from .notifications import LogNotifier
    from .orchestrator import UpdateOrchestrator

    config = _load(config_path)
    orchestrator = UpdateOrchestrator(
        config.events,
        LogNotifier(),
        motd_loader=partial(load_motd_template, config),
    )
    click.echo(orchestrator.render_status_digest())


if __name__ == "__main__":
    main()

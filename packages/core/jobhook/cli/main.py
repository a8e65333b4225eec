"""JobHook CLI main entry point.

This module provides the command-line interface using Click framework.
It plays the part of the orchestration host: it loads a notification
configuration and execution data, then hands a trigger to the notifier.
"""

import logging
import sys
from pathlib import Path
from typing import Any

import click

from jobhook import __version__
from jobhook.base import BaseNotifier
from jobhook.config.loader import ConfigLoader
from jobhook.config.models import NotificationConfig
from jobhook.exceptions import ConfigurationError, DeliveryRejectedError, JobHookError
from jobhook.models import SUPPORTED_TRIGGERS, TRIGGER_STYLES
from jobhook.registry import NotifierRegistry

# Import packages to trigger auto-registration
try:
    import jobhook_mattermost  # noqa: F401
except ImportError:
    pass

logger = logging.getLogger(__name__)

TRIGGER_CHOICE = click.Choice(sorted(SUPPORTED_TRIGGERS))


def parse_options(options: tuple[str, ...]) -> dict[str, str]:
    """Parse repeated ``key=value`` options into a dict.

    Raises:
        click.BadParameter: If an option has no '='
    """
    parsed: dict[str, str] = {}
    for option in options:
        key, sep, value = option.partition("=")
        if not sep or not key.strip():
            raise click.BadParameter(f"Expected key=value, got '{option}'", param_hint="--option")
        parsed[key.strip()] = value
    return parsed


def build_notifier(config: NotificationConfig) -> BaseNotifier:
    """Instantiate the notifier configured in ``config``."""
    notifier_class = NotifierRegistry.get(config.notifier.type)
    return notifier_class(config.notifier.params)


def load_event(
    loader: ConfigLoader,
    config: NotificationConfig,
    execution_data_path: Path | None,
    options: tuple[str, ...],
) -> tuple[dict[str, Any], dict[str, Any]]:
    """Load execution data and merge per-call options over configured defaults."""
    execution_data = loader.load_data_file(execution_data_path) if execution_data_path else {}
    notification_config = {**config.config, **parse_options(options)}
    return execution_data, notification_config


def event_options(func):
    """Options shared by commands that take a job-lifecycle event."""
    func = click.option(
        "--option",
        "-o",
        "options",
        multiple=True,
        help="Free-form config value passed to the template (key=value, repeatable)",
    )(func)
    func = click.option(
        "--execution-data",
        "-d",
        "execution_data_path",
        type=click.Path(exists=True, dir_okay=False, path_type=Path),
        help="JSON or YAML file with execution data",
    )(func)
    func = click.option(
        "--trigger",
        "-t",
        type=TRIGGER_CHOICE,
        required=True,
        help="Job-lifecycle event",
    )(func)
    return func


@click.group()
@click.version_option(version=__version__, prog_name="jobhook")
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose logging (DEBUG level)",
)
@click.option(
    "--quiet",
    "-q",
    is_flag=True,
    help="Suppress all output except errors",
)
def cli(verbose: bool, quiet: bool) -> None:
    """JobHook - job-lifecycle notifications for chat-ops webhooks.

    \b
    Examples:
        jobhook notify configs/ops.yaml -t failure -d execution.json
        jobhook render configs/ops.yaml -t start -d execution.json
        jobhook validate configs/ops.yaml
    """
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)
    elif quiet:
        logging.getLogger().setLevel(logging.ERROR)


@cli.command()
@click.argument("config_path", type=click.Path(exists=True, path_type=Path))
@event_options
def notify(
    config_path: Path,
    trigger: str,
    execution_data_path: Path | None,
    options: tuple[str, ...],
) -> None:
    """Send a notification for a job-lifecycle event.

    CONFIG_PATH: Path to YAML configuration file

    \b
    Examples:
        jobhook notify configs/ops.yaml -t start -d execution.json
        jobhook notify configs/ops.yaml -t failure -d execution.yaml -o channel=oncall
    """
    try:
        loader = ConfigLoader()
        config = loader.load_file(config_path)
        execution_data, notification_config = load_event(
            loader, config, execution_data_path, options
        )

        notifier = build_notifier(config)
        try:
            notifier.notify(trigger, execution_data, notification_config)
        finally:
            notifier.close()

        click.echo(f"✅ Notification sent: {trigger} ({config.name})")

    except ConfigurationError as e:
        click.echo(f"❌ Configuration error: {e}", err=True)
        sys.exit(1)
    except DeliveryRejectedError as e:
        click.echo(f"❌ Delivery rejected: {e.response_body}", err=True)
        logger.debug(f"Rejected payload:\n{e.payload}")
        sys.exit(1)
    except JobHookError as e:
        click.echo(f"❌ Error: {e}", err=True)
        sys.exit(1)


@cli.command()
@click.argument("config_path", type=click.Path(exists=True, path_type=Path))
@event_options
def render(
    config_path: Path,
    trigger: str,
    execution_data_path: Path | None,
    options: tuple[str, ...],
) -> None:
    """Render the payload for an event without sending it.

    CONFIG_PATH: Path to YAML configuration file

    \b
    Example:
        jobhook render configs/ops.yaml -t success -d execution.json
    """
    try:
        loader = ConfigLoader()
        config = loader.load_file(config_path)
        execution_data, notification_config = load_event(
            loader, config, execution_data_path, options
        )

        notifier = build_notifier(config)
        renderer = getattr(notifier, "render", None)
        if renderer is None:
            raise ConfigurationError(
                f"Notifier '{config.notifier.type}' does not support rendering",
                config_path="notifier.type",
            )

        click.echo(renderer(trigger, execution_data, notification_config))

    except ConfigurationError as e:
        click.echo(f"❌ Configuration error: {e}", err=True)
        sys.exit(1)
    except JobHookError as e:
        click.echo(f"❌ Error: {e}", err=True)
        sys.exit(1)


@cli.command()
@click.argument("config_path", type=click.Path(exists=True, path_type=Path))
def validate(config_path: Path) -> None:
    """Validate configuration file without sending anything.

    CONFIG_PATH: Path to YAML configuration file

    \b
    Example:
        jobhook validate configs/ops.yaml
    """
    try:
        click.echo(f"🔍 Validating configuration: {config_path}")

        config = ConfigLoader().load_file(config_path)
        build_notifier(config)

        click.echo()
        click.echo("=" * 70)
        click.echo("CONFIGURATION SUMMARY")
        click.echo("=" * 70)
        click.echo(f"Name: {config.name}")
        if config.description:
            click.echo(f"Description: {config.description}")
        click.echo(f"Notifier: {config.notifier.type}")
        if config.config:
            click.echo(f"Config keys: {', '.join(sorted(config.config))}")

        click.echo()
        click.echo("✅ Configuration is valid!")

    except ConfigurationError as e:
        click.echo(f"❌ Configuration error: {e}", err=True)
        sys.exit(1)


@cli.command("list-triggers")
def list_triggers() -> None:
    """List recognised job-lifecycle triggers and their colors."""
    click.echo("🔔 Triggers:")
    click.echo()
    for name in sorted(TRIGGER_STYLES):
        style = TRIGGER_STYLES[name]
        click.echo(f"  • {name:10s} - color: {style.color}, template: {style.template}")


@cli.command("list-notifiers")
def list_notifiers() -> None:
    """List available notifiers."""
    click.echo("📢 Available Notifiers:")
    click.echo()

    notifiers = NotifierRegistry.list_all()
    if not notifiers:
        click.echo("  No notifiers registered")
        return

    for name in sorted(notifiers):
        notifier_class = NotifierRegistry.get(name)
        docstring = notifier_class.__doc__ or "No description"
        # First line of docstring
        description = docstring.strip().split("\n")[0]
        click.echo(f"  • {name:15s} - {description}")


def main() -> None:
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()

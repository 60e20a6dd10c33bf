"""
zapp — CLI entrypoint.

Usage:
    zapp --help
    zapp run
    zapp check
    zapp tree

Exit codes:
    0  every task succeeded or was skipped
    1  at least one task failed (or ``check`` found errors)
    2  fatal configuration or environment error
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click

from zapp import __version__
from zapp.core.observability.logging_config import setup_logging

EXIT_FAILURE = 1
EXIT_FATAL = 2


@click.group()
@click.version_option(version=__version__, prog_name="zapp")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config-dir",
    "-C",
    "config_dir",
    type=click.Path(file_okay=False),
    default=None,
    help="Config directory (default: $ZAPP_CONFIG_DIR or ~/.config/zapp).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_dir: str | None,
) -> None:
    """zapp — provision your environment from a tree of tasks."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["config_dir"] = Path(config_dir).expanduser() if config_dir else None

    # ── Logging setup (once, at process start) ──────────────────
    if debug:
        level = "DEBUG"
    elif verbose:
        level = "INFO"
    elif quiet:
        level = "ERROR"
    else:
        level = os.environ.get("ZAPP_LOG_LEVEL", "WARNING")

    setup_logging(
        level=level,
        log_file=os.environ.get("ZAPP_LOG_FILE"),
        log_file_level=os.environ.get("ZAPP_LOG_FILE_LEVEL"),
        quiet_third_party=not debug,
    )


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output the report as JSON.")
@click.option("--mock", is_flag=True, help="Report every task as run without executing it.")
@click.pass_context
def run(ctx: click.Context, as_json: bool, mock: bool) -> None:
    """Run every task in declared order."""
    from zapp.core.use_cases.run import run_provision

    result = run_provision(
        config_dir=ctx.obj.get("config_dir"),
        emit=None if as_json else click.echo,
        styled=True,
        mock_mode=mock,
        capture_output=as_json,
    )

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
    elif result.error:
        click.secho(f"❌ {result.error}", fg="red", err=True)

    if result.error:
        sys.exit(EXIT_FATAL)

    report = result.report
    assert report is not None

    if not as_json and ctx.obj.get("verbose"):
        for res in report.results:
            if res.error:
                click.secho(f"   ✗ {res.name}: {res.error}", fg="red", err=True)

    if not result.ok:
        sys.exit(EXIT_FAILURE)


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def check(ctx: click.Context, as_json: bool) -> None:
    """Validate the configuration without running anything."""
    from zapp.core.use_cases.config_check import check_config

    result = check_config(config_dir=ctx.obj.get("config_dir"))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.valid else EXIT_FAILURE)

    if result.valid:
        click.secho("✅ Configuration is valid", fg="green", bold=True)
        click.echo(f"   Config: {result.config_dir}")
        click.echo(f"   Tasks: {result.task_count}")
        click.echo(f"   Params: {result.param_count}")
    else:
        click.secho("❌ Configuration errors:", fg="red", bold=True)
        for err in result.errors:
            click.echo(f"   • {err}")

    if result.warnings and not ctx.obj.get("quiet"):
        click.echo()
        click.secho("⚠️  Warnings:", fg="yellow")
        for warn in result.warnings:
            click.echo(f"   • {warn}")

    if not result.valid:
        sys.exit(EXIT_FAILURE)


@cli.command()
@click.pass_context
def tree(ctx: click.Context) -> None:
    """Show the task tree as it would run."""
    from zapp.core.errors import ConfigError
    from zapp.core.use_cases.run import load_provisioning

    try:
        prov = load_provisioning(ctx.obj.get("config_dir"))
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red", err=True)
        sys.exit(EXIT_FATAL)

    for depth, task in prov.tree.walk():
        marker = " [su]" if task.privileged else ""
        click.echo(f"{'  ' * depth}{task.name}{marker}  — {task.describe()}")


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()

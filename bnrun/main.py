"""
bnrun — CLI entrypoint.

Usage:
    bnrun build
    bnrun deploy:prod --dry
    bnrun all --skip 'echo*' --skip 'deploy:*'
    bnrun --list
    bnrun --check
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click

from bnrun import __version__
from bnrun.core.config.loader import DEFAULT_SCRIPT_DIR, SCRIPT_DIR_ENV
from bnrun.core.models.plan import PlanStep
from bnrun.core.observability.logging_config import (
    LOG_FILE_ENV,
    LOG_FILE_LEVEL_ENV,
    LOG_LEVEL_ENV,
    setup_logging,
)


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__, prog_name="bnrun")
@click.argument("target", required=False)
@click.option(
    "--script-dir",
    "-s",
    "script_dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=DEFAULT_SCRIPT_DIR,
    envvar=SCRIPT_DIR_ENV,
    show_default=True,
    help="Directory of the script definition files.",
)
@click.option("--verbose", "-l", "-v", is_flag=True, help="Show the planning tree.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress step boxes and non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option("--dry", "-d", "dry_run", is_flag=True, help="Print the plan without executing it.")
@click.option("--skip", "skip", multiple=True, metavar="PATTERN", help="Glob pattern of steps to skip (repeatable).")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Print the plan as JSON (implies --dry).")
@click.option("--list", "list_scripts", is_flag=True, help="List the registered scripts.")
@click.option("--check", "check", is_flag=True, help="Validate the script definitions.")
def cli(
    target: str | None,
    script_dir: Path,
    verbose: bool,
    quiet: bool,
    debug: bool,
    dry_run: bool,
    skip: tuple[str, ...],
    as_json: bool,
    list_scripts: bool,
    check: bool,
) -> None:
    """bnrun — run declarative scripts with pre/command/post phases.

    TARGET is a script name, or a parameterized one such as deploy:prod.
    """
    # ── Logging setup (once, at process start) ──────────────────
    if debug:
        level = "DEBUG"
    elif verbose:
        level = "INFO"
    elif quiet:
        level = "ERROR"
    else:
        level = os.environ.get(LOG_LEVEL_ENV, "WARNING")

    setup_logging(
        level=level,
        log_file=os.environ.get(LOG_FILE_ENV),
        log_file_level=os.environ.get(LOG_FILE_LEVEL_ENV),
    )

    if check:
        _check(script_dir, as_json)
        return

    if list_scripts:
        _list(script_dir, as_json)
        return

    if not target:
        raise click.UsageError("Missing argument 'TARGET'.")

    _run(target, script_dir, skip, dry_run, as_json, quiet)


def _run(
    target: str,
    script_dir: Path,
    skip: tuple[str, ...],
    dry_run: bool,
    as_json: bool,
    quiet: bool,
) -> None:
    from bnrun.core.use_cases.run import run_script
    from bnrun.ui.cli.render import explain_step, format_step_box, step_prefix

    def print_box(step: PlanStep) -> None:
        if not quiet:
            click.echo(format_step_box(target, step))

    result = run_script(
        target=target,
        script_dir=script_dir,
        skip=skip,
        dry_run=dry_run or as_json,
        on_step=None if as_json else print_box,
    )

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.ok else 1)

    if result.error and result.plan is None:
        click.secho(f"❌ {result.error}", fg="red", err=True)
        sys.exit(1)

    plan = result.plan
    assert plan is not None

    if dry_run:
        width = max((len(step_prefix(s)) for s in plan.steps), default=0)
        for step in plan.steps:
            print_box(step)
            line = explain_step(step, width)
            if step.skip:
                click.secho(f"Skipping {line}", fg="yellow")
            else:
                click.echo(line)
        return

    if result.error:
        click.secho(f"❌ {result.error}", fg="red", err=True)
        if result.failed_step is not None:
            click.echo(f"   in script: {result.failed_step.script}", err=True)
        sys.exit(1)


def _list(script_dir: Path, as_json: bool) -> None:
    from bnrun.core.config.loader import load_scripts
    from bnrun.core.errors import InvalidScriptDefinition

    try:
        registry = load_scripts(script_dir)
    except InvalidScriptDefinition as e:
        if as_json:
            click.echo(json.dumps({"error": str(e)}, indent=2))
        else:
            click.secho(f"❌ {e}", fg="red", err=True)
        sys.exit(1)

    if as_json:
        click.echo(json.dumps(
            [t.model_dump(mode="json") for t in registry],
            indent=2,
        ))
        return

    click.secho(f"📋 Scripts in {script_dir}: {len(registry)}", fg="cyan", bold=True)
    for template in registry:
        description = f"  — {template.description}" if template.description else ""
        click.echo(f"   • {template.name}{description}")


def _check(script_dir: Path, as_json: bool) -> None:
    from bnrun.core.use_cases.check import check_scripts

    result = check_scripts(script_dir)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.valid else 1)

    if result.valid:
        assert result.registry is not None
        click.secho("✅ Script definitions are valid", fg="green", bold=True)
        click.echo(f"   Scripts: {len(result.registry)}")
    else:
        click.secho("❌ Script definition errors:", fg="red", bold=True)
        for err in result.errors:
            click.echo(f"   • {err}")

    if result.warnings:
        click.echo()
        click.secho("⚠️  Warnings:", fg="yellow")
        for warn in result.warnings:
            click.echo(f"   • {warn}")

    if not result.valid:
        sys.exit(1)


if __name__ == "__main__":
    cli()

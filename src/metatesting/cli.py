from __future__ import annotations

import importlib
from pathlib import Path

import typer

app = typer.Typer(name="metatesting", help="Run check-based test functions")


@app.callback()
def main():
    """Run check-based test functions and report their outcomes."""


def _load_target(target: str):
    module_name, sep, func_name = target.partition(":")
    if not sep or not module_name or not func_name:
        raise ValueError(f"target must look like 'module:function', got '{target}'")
    module = importlib.import_module(module_name)
    try:
        return getattr(module, func_name)
    except AttributeError:
        raise ValueError(f"module '{module_name}' has no attribute '{func_name}'") from None


@app.command()
def run(
    target: str = typer.Argument(help="Test function to run, as module:function"),
    config: str | None = typer.Option(None, help="Path to run YAML config"),
    junit: str | None = typer.Option(None, help="Write a JUnit XML report here"),
    debug_log: str | None = typer.Option(None, help="Write debug output to this file"),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Show nested testsets and debug output"
    ),
):
    """Call TARGET inside a top-level testset and print its summary."""
    from metatesting.config import RunConfig, load_config
    from metatesting.exceptions import TestSetException
    from metatesting.reporting.junit import write_junit
    from metatesting.reporting.text import format_summary
    from metatesting.testset import DefaultTestSet, testset
    from metatesting.verbose import setup_logger

    if config is not None:
        config_path = Path(config)
        if not config_path.exists():
            typer.echo(f"Error: config file not found: {config}", err=True)
            raise typer.Exit(1)
        run_config = load_config(config_path)
    else:
        run_config = RunConfig()

    # Command-line flags take precedence over the config file
    verbose = verbose or run_config.verbose
    junit = junit or run_config.junit
    debug_log = debug_log or run_config.debug_log

    logger = setup_logger(
        Path(debug_log) if debug_log else None, verbose=verbose
    )

    try:
        func = _load_target(target)
    except Exception as e:
        # Import-time failures of the target module land here too
        typer.echo(f"Error: {type(e).__name__}: {e}", err=True)
        raise typer.Exit(1)

    logger.debug("Running %s", target)
    failed = False
    try:
        with testset(
            target,
            DefaultTestSet,
            verbose=verbose,
            show_timing=run_config.show_timing,
        ) as ts:
            func()
    except TestSetException as e:
        failed = True
        logger.debug("%s", e)

    typer.echo(format_summary(ts))

    if junit:
        junit_path = write_junit(ts, Path(junit))
        typer.echo(f"JUnit report: {junit_path}")

    if failed:
        raise typer.Exit(1)

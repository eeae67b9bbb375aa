"""CLI entry point for verdict."""
from __future__ import annotations

import sys
from typing import Optional, Tuple

import click

from verdict import __version__, bootstrap
from verdict.config import RunSettings, apply_overrides, load_settings
from verdict.errors import VerdictError
from verdict.reporting import ReportFormat, ReporterConfig, create_reporter
from verdict.runner import LocalBoundary, RunCoordinator, StreamSink, dispatch
from verdict.suite import from_test, load_suites


CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


class CliState:
    """Holds global CLI state."""

    def __init__(self, verbose: bool) -> None:
        self.verbose = verbose


def _print_version(_: click.Context, __: click.Parameter, value: bool) -> None:
    if not value or click.get_current_context().resilient_parsing:
        return
    click.echo(f"verdict {__version__}")
    raise click.exceptions.Exit()


@click.group(context_settings=CONTEXT_SETTINGS)
@click.option("--verbose", is_flag=True, help="Enable verbose logging output.")
@click.option(
    "--version",
    is_flag=True,
    callback=_print_version,
    expose_value=False,
    is_eager=True,
    help="Show the verdict version and exit.",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """Top level CLI group for verdict."""

    bootstrap(verbose=verbose)
    ctx.obj = CliState(verbose=verbose)


@cli.command()
@click.argument("suites", nargs=-1)
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    help="YAML settings file (defaults to ./verdict.yaml when present).",
)
@click.option("--seed", type=int, help="Initial random seed; reuse it to reproduce a run.")
@click.option("--fuzz", "fuzz_runs", type=int, help="Number of values drawn per fuzz test.")
@click.option("--filter", "filter_text", type=str, help="Only run tests whose labels contain this text.")
@click.option(
    "--report",
    "report_format",
    type=click.Choice([fmt.value for fmt in ReportFormat]),
    help="Report format (console by default).",
)
@click.option("--workers", type=int, help="Number of tests run concurrently.")
@click.option("--no-color", is_flag=True, help="Disable ANSI colors in console output.")
@click.pass_obj
def run(
    state: CliState,
    suites: Tuple[str, ...],
    config_path: Optional[str],
    seed: Optional[int],
    fuzz_runs: Optional[int],
    filter_text: Optional[str],
    report_format: Optional[str],
    workers: Optional[int],
    no_color: bool,
) -> None:
    """Run the test suites defined in SUITES (module[:attr] or file.py[:attr])."""

    try:
        settings = apply_overrides(
            load_settings(config_path),
            seed=seed,
            fuzz_runs=fuzz_runs,
            filter=filter_text,
            report=report_format,
            workers=workers,
            color=False if no_color else None,
            verbose=True if state.verbose else None,
            suites=suites or None,
        ).resolved_seed()
        exit_code = run_suites(settings)
    except VerdictError as exc:
        raise click.ClickException(str(exc)) from exc
    raise click.exceptions.Exit(exit_code)


def run_suites(settings: RunSettings) -> int:
    """Classify, run and report the configured suites; returns the exit code."""

    assert settings.seed is not None
    suite = load_suites(settings.suites)
    seeded = from_test(
        suite,
        initial_seed=settings.seed,
        fuzz_runs=settings.fuzz_runs,
        filter=settings.filter,
    )
    reporter = create_reporter(
        settings.report,
        ReporterConfig(
            seed=settings.seed,
            fuzz_runs=settings.fuzz_runs,
            globs=settings.globs,
            paths=settings.suites,
        ),
        use_color=settings.color,
        verbose=settings.verbose,
    )
    sink = StreamSink(color=settings.color if settings.report is ReportFormat.CONSOLE else False)
    coordinator = RunCoordinator(reporter, sink)
    dispatch(LocalBoundary(seeded), coordinator, workers=settings.workers)
    if sink.exit_code is None:
        raise VerdictError(
            f"Run did not complete: {len(coordinator.results)} of {coordinator.tests_count} results received"
        )
    return sink.exit_code


def main(argv: Optional[list[str]] = None) -> int:
    """Program entry point for console_scripts shim."""

    argv = argv if argv is not None else sys.argv[1:]
    try:
        cli.main(args=argv, prog_name="verdict", standalone_mode=True)
    except click.ClickException as err:  # pragma: no cover - click handles display
        err.show()
        return err.exit_code
    except SystemExit as exc:  # click may raise exit code
        return int(exc.code or 0)
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())

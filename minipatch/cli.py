import logging
from pathlib import Path

import typer
from typer.core import TyperCommand

from minipatch.config import RunOptions, debug_from_env
from minipatch.errors import FormatError, SourceFileError
from minipatch.logging import setup_logging
from minipatch.patch.parser import load_patch
from minipatch.patch.trace import NULL_TRACER, LogTracer, Tracer
from minipatch.report import FileStatus, RunReport
from minipatch.runner import iter_apply

logger = logging.getLogger(__name__)

# click's UsageError (and its subclasses) exit with 2
CLICK_USAGE_EXIT_CODE = 2
USAGE_EXIT_CODE = 1


class PatchCommand(TyperCommand):
    """Reports usage errors with exit status 1 instead of click's 2."""

    def parse_args(self, ctx: typer.Context, args: list[str]) -> list[str]:
        # Matched on exit_code, not class: typer may raise from its own click copy
        try:
            return super().parse_args(ctx, args)
        except Exception as exc:
            if getattr(exc, "exit_code", None) == CLICK_USAGE_EXIT_CODE:
                exc.exit_code = USAGE_EXIT_CODE
            raise


app = typer.Typer(
    add_completion=False,
    rich_markup_mode=None,
    context_settings={"help_option_names": ["-h", "--help"]},
)


def run(options: RunOptions) -> int:
    """Apply the patch described by ``options`` and return the exit status."""

    handler = setup_logging(logging.DEBUG if options.debug else logging.WARNING)
    tracer = LogTracer(logging.getLogger("minipatch.trace")) if options.debug else NULL_TRACER
    try:
        return _run(options, tracer)
    finally:
        logging.getLogger("minipatch").removeHandler(handler)


def _run(options: RunOptions, tracer: Tracer) -> int:
    try:
        patch_set = load_patch(options.patch_file)
    except FormatError as exc:
        typer.echo(f"Parse error: {exc.reason}", err=True)
        typer.echo(f"On line {exc.line_number}: {exc.text}", err=True)
        return 1
    except SourceFileError as exc:
        typer.echo(f"Error: Unable to open patch file: {exc.path}", err=True)
        return 1

    report = RunReport(dry_run=options.dry_run)
    try:
        for outcome in iter_apply(
            patch_set,
            base_dir=options.base_dir,
            dry_run=options.dry_run,
            tracer=tracer,
        ):
            typer.echo(outcome.message(), err=True)
            report.outcomes.append(outcome)
    except SourceFileError as exc:
        logger.debug("Aborting run: %s", exc)
        typer.echo(f"Error: {exc}", err=True)
        return 1

    logger.info(
        "%d files checked: %d already patched, %d patched, %d to be patched, %d unclean",
        len(report.outcomes),
        report.count(FileStatus.ALREADY_PATCHED),
        report.count(FileStatus.PATCHED),
        report.count(FileStatus.WOULD_PATCH),
        report.unclean_count,
    )
    return report.exit_code


@app.command(cls=PatchCommand)
def minipatch_cmd(
    patch_file: Path = typer.Argument(..., help="Unified diff to apply"),
    base_dir: Path | None = typer.Argument(
        None, help="Directory prefixed to every path in the patch"
    ),
    dry_run: bool = typer.Option(
        False, "--dry-run", "-n", help="Don't make any changes"
    ),
):
    """
    Apply a patch idempotently: hunks that are already applied are skipped,
    files that match neither side of the patch are reported as NOT CLEAN.
    """
    options = RunOptions(
        patch_file=patch_file,
        base_dir=base_dir,
        dry_run=dry_run,
        debug=debug_from_env(),
    )
    raise typer.Exit(code=run(options))


def main() -> None:
    app(prog_name="minipatch")

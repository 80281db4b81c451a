import logging
from collections.abc import Iterator
from pathlib import Path

from minipatch.errors import UncleanFileError
from minipatch.files import read_source, resolve_patch_path, write_source
from minipatch.patch.matcher import matches
from minipatch.patch.models import FilePatch, PatchSet
from minipatch.patch.reconcile import classify
from minipatch.patch.rewrite import rewrite
from minipatch.patch.trace import NULL_TRACER, Tracer
from minipatch.report import FileOutcome, FileStatus, RunReport

logger = logging.getLogger(__name__)


def is_fully_applied(
    target_lines: list[str],
    file_patch: FilePatch,
    tracer: Tracer = NULL_TRACER,
) -> bool:
    """True when every hunk's new lines already sit at their new_start."""
    tracer.trace(">> Checking")
    is_applied = True
    for hunk in file_patch.hunks:
        # No short-circuit so the trace shows every hunk
        is_applied &= matches(target_lines, hunk.new_start, hunk.new_lines, tracer)
    return is_applied


def apply_file_patch(
    file_patch: FilePatch,
    base_dir: Path | None = None,
    dry_run: bool = False,
    tracer: Tracer = NULL_TRACER,
) -> FileOutcome:
    """
    Bring one file up to date with its FilePatch.

    Raises:
        SourceFileError: If the target or original file cannot be read, or
            the result cannot be written.
    """

    new_path = resolve_patch_path(base_dir, file_patch.new_path)
    hunk_count = len(file_patch.hunks)

    target = read_source(new_path)
    if is_fully_applied(target.lines, file_patch, tracer):
        logger.info("%s already patched", new_path)
        return FileOutcome(
            status=FileStatus.ALREADY_PATCHED,
            path=str(new_path),
            hunks=hunk_count,
            applied_hunks=hunk_count,
        )

    orig_path = resolve_patch_path(base_dir, file_patch.original_path)
    original = read_source(orig_path)

    classification = classify(original.lines, file_patch.hunks, tracer)
    if classification.unclean:
        error = UncleanFileError(
            orig_path, classification.failed_hunk, classification.position
        )
        logger.info("Unclean file: %s", error)
        return FileOutcome(
            status=FileStatus.UNCLEAN,
            path=str(orig_path),
            hunks=hunk_count,
            error=str(error),
        )

    tracer.trace("PATCHING: %s", new_path)
    new_lines = rewrite(original.lines, file_patch.hunks, classification)

    if dry_run:
        status = FileStatus.WOULD_PATCH
    else:
        write_source(new_path, new_lines, original.ends_with_newline)
        status = FileStatus.PATCHED

    logger.info(
        "%s: %d of %d hunks already applied, %s",
        new_path,
        classification.applied_count,
        hunk_count,
        status,
    )
    return FileOutcome(
        status=status,
        path=str(new_path),
        hunks=hunk_count,
        applied_hunks=classification.applied_count,
    )


def iter_apply(
    patch_set: PatchSet,
    base_dir: Path | None = None,
    dry_run: bool = False,
    tracer: Tracer = NULL_TRACER,
) -> Iterator[FileOutcome]:
    """Yield one outcome per FilePatch that has hunks, in patch order."""
    for file_patch in patch_set:
        if not file_patch.hunks:
            logger.debug("Skipping %s: no hunks", file_patch.original_path)
            continue
        yield apply_file_patch(file_patch, base_dir, dry_run, tracer)


def apply_patch_set(
    patch_set: PatchSet,
    base_dir: Path | None = None,
    dry_run: bool = False,
    tracer: Tracer = NULL_TRACER,
) -> RunReport:
    report = RunReport(dry_run=dry_run)
    for outcome in iter_apply(patch_set, base_dir, dry_run, tracer):
        report.outcomes.append(outcome)
    return report

"""Idempotent application of unified-diff patches to a source tree."""

from minipatch.errors import (
    FormatError,
    MinipatchError,
    SourceFileError,
    UncleanFileError,
)
from minipatch.patch import (
    Classification,
    FilePatch,
    Hunk,
    PatchSet,
    classify,
    load_patch,
    matches,
    parse_patch,
    rewrite,
)
from minipatch.report import FileOutcome, FileStatus, RunReport
from minipatch.runner import apply_file_patch, apply_patch_set, iter_apply

__all__ = [
    "MinipatchError",
    "FormatError",
    "SourceFileError",
    "UncleanFileError",
    "Hunk",
    "FilePatch",
    "PatchSet",
    "Classification",
    "parse_patch",
    "load_patch",
    "matches",
    "classify",
    "rewrite",
    "FileStatus",
    "FileOutcome",
    "RunReport",
    "apply_file_patch",
    "apply_patch_set",
    "iter_apply",
]

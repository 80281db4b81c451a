import logging
from dataclasses import dataclass, field
from pathlib import Path

from minipatch.errors import SourceFileError

logger = logging.getLogger(__name__)


@dataclass
class SourceFile:
    path: Path
    lines: list[str] = field(default_factory=list)
    ends_with_newline: bool = True


def resolve_patch_path(base_dir: Path | None, relative_path: str) -> Path:
    """Prefix a path taken from the patch with the optional base directory."""
    if base_dir is None:
        return Path(relative_path)
    return Path(base_dir) / relative_path


def split_lines(text: str) -> list[str]:
    if text == "":
        return []
    lines = text.split("\n")
    if text.endswith("\n"):
        lines.pop()
    return [line.removesuffix("\r") for line in lines]


def read_source(path: Path) -> SourceFile:
    path = Path(path)
    try:
        # newline="" keeps \r so split_lines decides what a line ending is;
        # surrogateescape passes non-UTF-8 bytes through to write_source unchanged
        with path.open("r", encoding="utf-8", errors="surrogateescape", newline="") as f:
            text = f.read()
    except OSError as exc:
        logger.debug("Failed to read %s: %s", path, exc)
        raise SourceFileError(path, exc) from exc

    return SourceFile(
        path=path,
        lines=split_lines(text),
        ends_with_newline=text.endswith("\n") or text == "",
    )


def write_source(path: Path, lines: list[str], ends_with_newline: bool = True) -> None:
    path = Path(path)
    text = "\n".join(lines)
    if lines and ends_with_newline:
        text += "\n"
    try:
        path.write_text(text, encoding="utf-8", errors="surrogateescape", newline="\n")
    except OSError as exc:
        raise SourceFileError(path, exc) from exc
    logger.debug("Wrote %d lines to %s", len(lines), path)

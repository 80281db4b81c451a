import logging
import re
from pathlib import Path

from minipatch.errors import FormatError, SourceFileError
from minipatch.patch.models import FilePatch, Hunk, PatchSet

logger = logging.getLogger(__name__)

HUNK_HEADER_RE = re.compile(
    r"@@[ \t]*-([0-9]+),([0-9]+)[ \t]*\+([0-9]+),([0-9]+)[ \t]*@@"
)


class _PatchBuilder:
    """
    Accumulates a PatchSet one patch line at a time.

    Every ``on_*`` step returns ``None`` on success or a reason string when
    the line cannot be accepted; the driving loop turns the first reason into
    a FormatError.
    """

    def __init__(self):
        self.patch_set = PatchSet()

    @property
    def current_file(self) -> FilePatch | None:
        if not self.patch_set.files:
            return None
        return self.patch_set.files[-1]

    @property
    def current_hunk(self) -> Hunk | None:
        file_patch = self.current_file
        if file_patch is None or not file_patch.hunks:
            return None
        return file_patch.hunks[-1]

    def on_original_header(self, path: str) -> str | None:
        self.patch_set.files.append(FilePatch(original_path=path))
        return None

    def on_new_header(self, path: str) -> str | None:
        file_patch = self.current_file
        if file_patch is None or file_patch.has_new_path:
            return "`+++` without preceding ---"
        file_patch.new_path = path
        return None

    def on_hunk_header(self, line: str, line_number: int) -> str | None:
        match = HUNK_HEADER_RE.match(line)
        if match is None:
            return "Malformed hunk header, expected `@@ -<line>,<len> +<line>,<len> @@`"

        file_patch = self.current_file
        if file_patch is None or not file_patch.has_new_path:
            return "@@ without preceding header"

        original_start, original_len, new_start, new_len = (
            int(group) for group in match.groups()
        )
        file_patch.hunks.append(
            Hunk(
                # A zero start (insertion at the top of the file) maps to 0
                original_start=max(original_start - 1, 0),
                new_start=max(new_start - 1, 0),
                original_lines=[],
                new_lines=[],
                original_len=original_len,
                new_len=new_len,
                line_number=line_number,
            )
        )
        return None

    def on_body_line(self, line: str) -> str | None:
        marker = line[0]
        if marker not in ("+", "-", " "):
            # diff --git, index, \ No newline at end of file, ...
            return None

        hunk = self.current_hunk
        if hunk is None:
            return "Hunk body line without preceding @@ header"

        content = line[1:]
        if marker == "+":
            hunk.new_lines.append(content)
        elif marker == "-":
            hunk.original_lines.append(content)
        else:
            hunk.original_lines.append(content)
            hunk.new_lines.append(content)
        return None

    def feed(self, line: str, line_number: int) -> str | None:
        if line.startswith("---"):
            return self.on_original_header(line[3:].lstrip(" \t"))
        if line.startswith("+++"):
            return self.on_new_header(line[3:].lstrip(" \t"))
        if line.startswith("@@"):
            return self.on_hunk_header(line, line_number)
        return self.on_body_line(line)


def parse_patch(patch_txt: str) -> PatchSet:
    """
    Parse unified-diff style patch text into a PatchSet.

    Args:
        patch_txt: Full patch text.

    Returns:
        PatchSet with the hunks of every FilePatch sorted by original_start.

    Raises:
        FormatError: On the first line that cannot be parsed. Nothing from a
            partially parsed patch is returned.
    """

    builder = _PatchBuilder()

    for line_number, raw_line in enumerate(patch_txt.split("\n"), start=1):
        line = raw_line.removesuffix("\r")
        if line == "":
            continue

        reason = builder.feed(line, line_number)
        if reason is not None:
            logger.debug("Parse error on line %d: %s", line_number, reason)
            raise FormatError(line_number, line, reason)

    patch_set = builder.patch_set
    for file_patch in patch_set:
        file_patch.sort_hunks()

    logger.debug(
        "Parsed %d file patches, %d hunks",
        len(patch_set),
        sum(len(f.hunks) for f in patch_set),
    )
    return patch_set


def load_patch(patch_path: Path) -> PatchSet:
    patch_path = Path(patch_path)
    try:
        patch_txt = patch_path.read_text(encoding="utf-8", errors="surrogateescape")
    except OSError as exc:
        raise SourceFileError(patch_path, exc) from exc

    return parse_patch(patch_txt)

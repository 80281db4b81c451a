from pathlib import Path


class MinipatchError(Exception):
    pass


class FormatError(MinipatchError):
    """Malformed patch text. Carries the 1-based patch line number and its text."""

    def __init__(self, line_number: int, text: str, reason: str):
        super().__init__(f"{reason} (line {line_number}: {text})")
        self.line_number = line_number
        self.text = text
        self.reason = reason


class SourceFileError(MinipatchError):
    def __init__(self, path: Path, cause: OSError):
        super().__init__(f"Unable to open file: {str(path)} ({cause})")
        self.path = Path(path)
        self.cause = cause


class UncleanFileError(MinipatchError):
    """A file matches neither the pre-patch nor the post-patch text of a hunk."""

    def __init__(self, path: Path, hunk_index: int | None, position: int | None):
        super().__init__(
            f"{str(path)}: hunk {hunk_index} does not match at line "
            f"{position if position is None else position + 1}"
        )
        self.path = Path(path)
        self.hunk_index = hunk_index
        self.position = position

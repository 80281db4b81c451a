from dataclasses import dataclass, field


@dataclass
class Hunk:
    original_start: int
    new_start: int
    original_lines: list[str] = field(default_factory=list)
    new_lines: list[str] = field(default_factory=list)
    original_len: int = 0
    new_len: int = 0
    line_number: int = 0

    @property
    def original_end(self) -> int:
        return self.original_start + len(self.original_lines)

    @property
    def new_end(self) -> int:
        return self.new_start + len(self.new_lines)

    @property
    def shift(self) -> int:
        """Lines this hunk adds (positive) or removes (negative) once applied."""
        return self.new_end - self.original_end


@dataclass
class FilePatch:
    original_path: str
    new_path: str = ""
    hunks: list[Hunk] = field(default_factory=list)

    @property
    def has_new_path(self) -> bool:
        return self.new_path != ""

    def sort_hunks(self) -> None:
        self.hunks.sort(key=lambda hunk: hunk.original_start)


@dataclass
class PatchSet:
    files: list[FilePatch] = field(default_factory=list)

    def __iter__(self):
        return iter(self.files)

    def __len__(self) -> int:
        return len(self.files)

    def __getitem__(self, index: int) -> FilePatch:
        return self.files[index]


@dataclass(frozen=True)
class Classification:
    """
    Per-hunk reconciliation result for one file.

    ``applied[i]`` is True when hunk ``i`` is already present in the file.
    An unclean classification has no ``applied`` vector; ``failed_hunk`` and
    ``position`` record where reconciliation gave up.
    """

    applied: tuple[bool, ...] = ()
    unclean: bool = False
    failed_hunk: int | None = None
    position: int | None = None

    @classmethod
    def clean(cls, applied: list[bool]) -> "Classification":
        return cls(applied=tuple(applied))

    @classmethod
    def unclean_at(cls, hunk_index: int, position: int) -> "Classification":
        return cls(unclean=True, failed_hunk=hunk_index, position=position)

    @property
    def applied_count(self) -> int:
        return sum(1 for flag in self.applied if flag)

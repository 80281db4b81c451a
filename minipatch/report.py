from enum import StrEnum

from pydantic import BaseModel, Field


class FileStatus(StrEnum):
    ALREADY_PATCHED = "already_patched"
    PATCHED = "patched"
    WOULD_PATCH = "would_patch"
    UNCLEAN = "unclean"


class FileOutcome(BaseModel):
    status: FileStatus
    path: str
    hunks: int
    applied_hunks: int = 0
    error: str | None = None

    def message(self) -> str:
        """Diagnostic line printed for this file."""
        if self.status == FileStatus.ALREADY_PATCHED:
            return f"already patched: {self.path}"
        if self.status == FileStatus.UNCLEAN:
            return f"NOT CLEAN: {self.path}"
        if self.status == FileStatus.WOULD_PATCH:
            return f"`{self.path}` to be PATCHED"
        return f"`{self.path}` PATCHED"


class RunReport(BaseModel):
    dry_run: bool = False
    outcomes: list[FileOutcome] = Field(default_factory=list)

    @property
    def unclean_count(self) -> int:
        return sum(1 for o in self.outcomes if o.status == FileStatus.UNCLEAN)

    @property
    def ok(self) -> bool:
        return self.unclean_count == 0

    @property
    def exit_code(self) -> int:
        return 0 if self.ok else 1

    def count(self, status: FileStatus) -> int:
        return sum(1 for o in self.outcomes if o.status == status)

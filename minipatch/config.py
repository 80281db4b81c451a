import os
from pathlib import Path

from pydantic import BaseModel, ConfigDict, field_serializer

DEBUG_ENV_VAR = "MINIPATCH_DEBUG"


def debug_from_env() -> bool:
    # Presence is enough; the value is not inspected
    return os.getenv(DEBUG_ENV_VAR) is not None


class RunOptions(BaseModel):
    model_config = ConfigDict(
        extra="forbid",
    )

    patch_file: Path
    base_dir: Path | None = None
    dry_run: bool = False
    debug: bool = False

    @field_serializer("patch_file", "base_dir")
    def serialize_paths(self, v: Path | None) -> str | None:
        return None if v is None else str(v)

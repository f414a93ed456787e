from __future__ import annotations

import os
import shutil
import uuid
from datetime import datetime
from pathlib import Path
from typing import BinaryIO


DEFAULT_SUBDIRS = [
    "uploads",
    "results",
]


def _base_root() -> Path:
    env_root = os.getenv("SHEETMARK_DATA_ROOT")
    if env_root:
        return Path(env_root).expanduser().resolve()
    return Path(__file__).resolve().parents[2] / "data"


def ensure_data_root() -> Path:
    """Ensure the data folders exist and return the root path."""

    root = _base_root()
    for sub in DEFAULT_SUBDIRS:
        (root / sub).mkdir(parents=True, exist_ok=True)
    return root


def save_upload(filename: str, source: BinaryIO) -> Path:
    """Persist an uploaded workbook as ``uploads/<unique dir>/<filename>``."""

    safe_name = Path(filename).name
    folder = ensure_data_root() / "uploads" / uuid.uuid4().hex
    folder.mkdir()
    target = folder / safe_name
    with target.open("wb") as buffer:
        shutil.copyfileobj(source, buffer)
    return target


def discard_upload(path: Path) -> None:
    """Remove a stored upload together with its directory."""

    path.unlink(missing_ok=True)
    path.parent.rmdir()


def discard_result(path: Path) -> None:
    path.unlink(missing_ok=True)


def scratch_path(zone: str, prefix: str = "result", suffix: str = ".xlsx") -> Path:
    """Return a unique, not yet existing path inside one of the data folders."""

    return ensure_data_root() / zone / f"{prefix}_{uuid.uuid4().hex}{suffix}"


def download_name(source_path: str | Path, now: datetime | None = None) -> str:
    """Name offered to the client for a processed copy of ``source_path``."""

    stamp = (now or datetime.now()).strftime("%m%d%Y%H%M")
    return f"{Path(source_path).stem} basic process-{stamp}"

from __future__ import annotations

import hashlib
import os
import uuid
from datetime import datetime
from pathlib import Path

from note_universe.settings import RECOVERY_DIR


def atomic_write_text(
    path: Path,
    text: str,
    *,
    encoding: str = "utf-8",
) -> None:
    """
    Atomic-ish file write:
    - write to temp file in same directory
    - fsync
    - replace()

    Prevents partial writes on crash/power loss.
    """
    path = Path(path)
    parent = path.parent
    parent.mkdir(parents=True, exist_ok=True)

    tmp_path = parent / f".{path.name}.tmp-{uuid.uuid4().hex}"

    try:
        with open(tmp_path, "w", encoding=encoding, newline="") as f:
            f.write(text)
            f.flush()
            os.fsync(f.fileno())
        tmp_path.replace(path)
    finally:
        tmp_path.unlink(missing_ok=True)


def id_to_filename(note_id: str, *, suffix: str = ".json") -> str:
    # fixed-length name for any id; the id itself lives inside the document
    return hashlib.sha256(note_id.encode("utf-8")).hexdigest() + suffix


def write_recovery_copy(note_id: str, text: str, *, recovery_dir: Path = RECOVERY_DIR) -> Path:
    """
    Best-effort emergency save when normal save fails.

    Writes timestamped copy into:
      <app home>/recovery/
    """
    stem = id_to_filename(note_id or "Untitled", suffix="")
    ts = datetime.now().strftime("%Y%m%d-%H%M%S")

    recovery_path = Path(recovery_dir) / f"{stem}.recovery.{ts}.json"
    atomic_write_text(recovery_path, text, encoding="utf-8")

    return recovery_path

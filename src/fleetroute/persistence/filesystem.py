"""File-based persistence helpers for route optimization outputs."""

from __future__ import annotations

import json
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from ..config import settings

_UNSAFE_LABEL_CHARS = re.compile(r"[^A-Za-z0-9_-]+")


def run_slug(label: str | None, default: str = "optimization") -> str:
    """Reduce a free-form run label to a single safe path component."""
    slug = _UNSAFE_LABEL_CHARS.sub("_", (label or "").strip()).strip("_")
    return slug or default


class FileStorage:
    """Run directories under ``<data_root>/outputs`` for optimization artifacts."""

    def __init__(self, root: Path | None = None) -> None:
        self.root = (root or settings.data_root).resolve()
        self.output_root = self.root / "outputs"
        self.output_root.mkdir(parents=True, exist_ok=True)

    def make_run_directory(self, prefix: str = "route") -> Path:
        """Create ``<prefix>_<utc timestamp>`` directly inside the output root."""
        timestamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%S%fZ")
        path = (self.output_root / f"{run_slug(prefix, default='route')}_{timestamp}").resolve()
        if path.parent != self.output_root.resolve():
            raise ValueError(f"Run directory escapes output root: {path}")
        path.mkdir(exist_ok=False)
        return path

    def write_json(self, path: Path, data: Any, *, indent: int = 2) -> None:
        with path.open("w", encoding="utf-8") as handle:
            json.dump(data, handle, ensure_ascii=False, indent=indent)

    def write_csv(self, path: Path, content: str) -> None:
        with path.open("w", encoding="utf-8", newline="") as handle:
            handle.write(content)

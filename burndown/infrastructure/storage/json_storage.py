"""Single JSON document on disk.

Reads and writes never raise for I/O or decoding problems; they come back
as ``Err`` so the repository above can decide whether a bad snapshot is
fatal (it never is for the task store).
"""

import json
import os
from datetime import datetime
from pathlib import Path
from typing import Any

from burndown.domain.shared.result import Err, Ok, Result


class JsonFile:
    """One JSON document at a fixed path.

    Writes are atomic: the new content lands in a hidden sibling file
    that is then renamed over the target.

    Example:
        snapshot = JsonFile(Path("~/.burndown/tasks.json").expanduser())
        match snapshot.read():
            case Ok(value=data):
                ...
            case Err(error=reason):
                logger.warning(reason)
    """

    def __init__(self, path: Path, indent: int = 2) -> None:
        self.path = path
        self.indent = indent

    @property
    def staging_path(self) -> Path:
        return self.path.with_name(f".{self.path.name}.tmp")

    def exists(self) -> bool:
        return self.path.exists()

    def read(self) -> Result[Any, str]:
        """Decode the document.

        Returns:
            Ok(value) with the decoded JSON, or Err(str) when the file is
            missing, unreadable or not valid UTF-8 JSON.
        """
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return Err(f"No such file: {self.path}")
        except UnicodeDecodeError as e:
            return Err(f"{self.path} is not UTF-8 text: {e}")
        except OSError as e:
            return Err(f"Cannot read {self.path}: {e}")

        try:
            return Ok(json.loads(raw))
        except json.JSONDecodeError as e:
            return Err(f"Invalid JSON in {self.path} at line {e.lineno}: {e.msg}")

    def write(self, value: Any) -> Result[None, str]:
        """Replace the document with ``value``.

        The target is left as it was when encoding or writing fails.
        """
        try:
            encoded = json.dumps(value, indent=self.indent, ensure_ascii=False)
        except (TypeError, ValueError) as e:
            return Err(f"Cannot encode snapshot for {self.path}: {e}")

        staging = self.staging_path
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            staging.write_text(encoded, encoding="utf-8")
            os.replace(staging, self.path)
        except OSError as e:
            staging.unlink(missing_ok=True)
            return Err(f"Cannot write {self.path}: {e}")
        return Ok(None)

    def move_aside(self, label: str) -> Result[Path, str]:
        """Rename the document to ``<name>.<label>-<timestamp>``.

        Earlier copies are never overwritten.

        Returns:
            Ok(path) with the new location, or Err(str) if the rename failed.
        """
        stamp = datetime.now().strftime("%Y%m%dT%H%M%S")
        target = self.path.with_name(f"{self.path.name}.{label}-{stamp}")
        counter = 1
        while target.exists():
            target = self.path.with_name(f"{self.path.name}.{label}-{stamp}-{counter}")
            counter += 1

        try:
            os.replace(self.path, target)
        except OSError as e:
            return Err(f"Cannot move {self.path} aside: {e}")
        return Ok(target)

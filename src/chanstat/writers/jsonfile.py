"""Write each named dataset as a JSON file under a target directory."""

import json
import logging
import shutil
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


class JsonFileWriter:
    """Writes `name` -> `<target>/<name>.json`.

    The first write empties the target directory, so a run never mixes its
    output with files left over from an earlier one.
    """

    def __init__(self, target: Path | str, spacing: int | None = None):
        self.dir = Path(target)
        self.spacing = spacing
        self.cleaned = False

    def write(self, name: str, data: Any) -> Path:
        if not self.cleaned:
            self.clean()

        path = self.dir / f"{name}.json"
        path.parent.mkdir(parents=True, exist_ok=True)
        if self.spacing:
            text = json.dumps(data, indent=self.spacing)
        else:
            text = json.dumps(data, separators=(",", ":"))
        path.write_text(text, encoding="utf-8")
        logger.debug(f"Wrote {path}")
        return path

    def clean(self) -> None:
        """Remove everything inside the target directory (not the directory itself)."""
        self.cleaned = True
        if not self.dir.exists():
            return
        for child in self.dir.iterdir():
            if child.is_dir() and not child.is_symlink():
                shutil.rmtree(child)
            else:
                child.unlink()

import json
import logging
from pathlib import Path

from cutout_editor.utils.helpers import DEFAULT_TOLERANCE, clamp_tolerance

logger = logging.getLogger(__name__)

DEFAULT_PATH = Path.home() / ".cutout_editor_config.json"
MAX_RECENT = 12


class AppConfig:
    def __init__(self, path: Path | None = None):
        self.path = Path(path) if path else DEFAULT_PATH
        self.recent_files: list[str] = []
        self.tolerance: int = DEFAULT_TOLERANCE
        self._load()

    def _load(self):
        try:
            if self.path.exists():
                data = json.loads(self.path.read_text(encoding="utf-8"))
                self.recent_files = [str(p) for p in data.get("recent_files", [])][:MAX_RECENT]
                self.tolerance = clamp_tolerance(data.get("tolerance", DEFAULT_TOLERANCE))
        except (OSError, ValueError, TypeError, AttributeError) as e:
            logger.warning("Ignoring unreadable config %s: %s", self.path, e)
            self.recent_files = []
            self.tolerance = DEFAULT_TOLERANCE

    def add_recent(self, path: str | Path):
        # Move to top, dedupe, cap size
        entry = str(Path(path).resolve())
        self.recent_files = [entry] + [p for p in self.recent_files if p != entry]
        del self.recent_files[MAX_RECENT:]

    def clear_recent(self):
        self.recent_files = []

    def save(self):
        try:
            data = {
                "recent_files": self.recent_files[:MAX_RECENT],
                "tolerance": self.tolerance,
            }
            self.path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        except OSError as e:
            logger.warning("Could not save config %s: %s", self.path, e)

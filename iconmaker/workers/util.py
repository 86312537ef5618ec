from __future__ import annotations

import json
import logging
import shutil
import subprocess
import tempfile
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from platformdirs import user_config_dir, user_log_dir

from .models import GeneratedBundle

log = logging.getLogger(__name__)


def human_readable_size(num_bytes: int) -> str:
    units = ["B", "KB", "MB", "GB", "TB"]
    size = float(num_bytes)
    for unit in units:
        if size < 1024.0:
            return f"{size:.1f} {unit}"
        size /= 1024.0
    return f"{size:.1f} PB"


def reveal_in_finder(path: Path) -> None:
    try:
        subprocess.run(["open", "-R", str(path)], check=False)
    except Exception as e:
        log.debug("Could not reveal %s in Finder: %s", path, e)


# Persistence for conversion defaults
APP_NAME = "iconmaker"
CONFIG_FILE = Path(user_config_dir(APP_NAME)) / "settings.json"
LOG_DIR = Path(user_log_dir(APP_NAME))
LOG_FILE = LOG_DIR / "conversions.jsonl"

DEFAULT_SETTINGS: Dict[str, Any] = {
    "profile": "appiconset",
    "apply_badge": True,
    "resample_filter": "lanczos",
    "packager": "auto",
    "archive": False,
}


def load_settings() -> Dict[str, Any]:
    data = dict(DEFAULT_SETTINGS)
    try:
        if CONFIG_FILE.exists():
            stored = json.loads(CONFIG_FILE.read_text())
            if isinstance(stored, dict):
                data.update(stored)
    except Exception:
        pass
    return data


def save_settings(settings: Dict[str, Any]) -> None:
    try:
        CONFIG_FILE.parent.mkdir(parents=True, exist_ok=True)
        # Merge with existing config to preserve other fields
        data = {}
        if CONFIG_FILE.exists():
            try:
                data = json.loads(CONFIG_FILE.read_text())
            except Exception:
                data = {}
        data.update(settings)
        CONFIG_FILE.write_text(json.dumps(data, indent=2))
    except Exception:
        pass


# Conversion logging
def append_conversion_log(action: str, profile: str, output: Optional[Path], files: List[Path],
                          error: Optional[str] = None) -> None:
    try:
        LOG_DIR.mkdir(parents=True, exist_ok=True)
        entry = {
            "timestamp": datetime.now().isoformat(timespec="seconds"),
            "action": action,
            "profile": profile,
            "output": str(output) if output else None,
            "count": len(files),
            "files": [p.name for p in files[:20]],  # cap to keep lines reasonable
        }
        if error:
            entry["error"] = error
        with LOG_FILE.open("a", encoding="utf-8") as f:
            f.write(json.dumps(entry) + "\n")
    except Exception:
        pass


# Working directories and export
def new_work_dir() -> Path:
    """A fresh, uniquely named directory for one conversion run."""
    return Path(tempfile.mkdtemp(prefix=f"{APP_NAME}-"))


def bundle_size(bundle: GeneratedBundle) -> int:
    if bundle.output.is_file():
        return bundle.output.stat().st_size
    return sum(p.stat().st_size for p in bundle.output.rglob("*") if p.is_file())


def archive_bundle(bundle: GeneratedBundle) -> Path:
    """Zip a folder-style output next to it; packaged files are returned as-is."""
    if bundle.output.is_file():
        return bundle.output
    zip_path = bundle.output.with_name(bundle.output.name + ".zip")
    # A zip left by an earlier run in the same directory is stale
    zip_path.unlink(missing_ok=True)
    shutil.make_archive(str(zip_path)[:-4], "zip", bundle.output.parent, bundle.output.name)
    return zip_path


def discard_work_dir(path: Path) -> None:
    shutil.rmtree(path, ignore_errors=True)

"""Turn an ``.iconset`` folder into a single ``.icns`` file."""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
from pathlib import Path
from typing import List, Optional

from PIL import Image

from .errors import ExternalToolFailure

log = logging.getLogger(__name__)

ICONUTIL = "/usr/bin/iconutil"


class IconPackager:
    name = "base"

    def package(self, iconset_dir: Path, output_path: Path) -> Path:
        raise NotImplementedError


class IconutilPackager(IconPackager):
    name = "iconutil"

    def __init__(self, executable: Optional[str] = None) -> None:
        self.executable = executable or shutil.which("iconutil") or ICONUTIL

    def package(self, iconset_dir: Path, output_path: Path) -> Path:
        cmd = [self.executable, "-c", "icns", str(iconset_dir), "-o", str(output_path)]
        log.debug("Running %s", " ".join(cmd))
        try:
            result = subprocess.run(cmd, capture_output=True, text=True, check=False)
        except OSError as e:
            raise ExternalToolFailure(f"Cannot run {self.executable}: {e}") from e
        if result.returncode != 0 or not output_path.exists():
            raise ExternalToolFailure(
                f"iconutil exited with status {result.returncode} and wrote no {output_path.name}",
                output=(result.stderr or "").strip(),
            )
        return output_path


class PillowIcnsPackager(IconPackager):
    """Builds the .icns with Pillow; works where iconutil is unavailable."""

    name = "pillow"

    def package(self, iconset_dir: Path, output_path: Path) -> Path:
        images: List[Image.Image] = []
        for png in sorted(Path(iconset_dir).glob("*.png")):
            with Image.open(png) as img:
                img.load()
                images.append(img.convert("RGBA"))
        if not images:
            raise ExternalToolFailure(f"No PNG files in {iconset_dir}")

        # Largest first: Pillow uses it for any size not supplied
        images.sort(key=lambda im: im.size[0], reverse=True)
        try:
            images[0].save(output_path, format="ICNS", append_images=images[1:])
        except (OSError, ValueError) as e:
            raise ExternalToolFailure(f"Pillow could not write {output_path.name}: {e}") from e
        if not output_path.exists():
            raise ExternalToolFailure(f"{output_path.name} was not created")
        return output_path


def iconutil_available() -> bool:
    return shutil.which("iconutil") is not None or os.access(ICONUTIL, os.X_OK)


def default_packager(name: str = "auto") -> IconPackager:
    name = (name or "auto").lower()
    if name == "iconutil":
        return IconutilPackager()
    if name == "pillow":
        return PillowIcnsPackager()
    if name != "auto":
        raise ValueError(f"Unknown packager: {name!r}")
    return IconutilPackager() if iconutil_available() else PillowIcnsPackager()

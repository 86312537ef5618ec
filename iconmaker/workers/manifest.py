from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List

from .models import IconSpec

IDIOM = "mac"
AUTHOR = "IconMaker"
VERSION = 1


@dataclass(frozen=True)
class ManifestImage:
    size: str  # "WxH" in points
    idiom: str
    filename: str
    scale: str  # 1x | 2x

    @classmethod
    def from_spec(cls, spec: IconSpec) -> "ManifestImage":
        return cls(
            size=spec.point_label,
            idiom=IDIOM,
            filename=spec.filename,
            scale=spec.scale_label,
        )

    def to_dict(self) -> Dict[str, str]:
        return {
            "size": self.size,
            "idiom": self.idiom,
            "filename": self.filename,
            "scale": self.scale,
        }


@dataclass
class Manifest:
    """Contents.json for an Xcode asset catalog icon set.

    Records are appended in catalog order while the PNGs are written and the
    whole document is serialized once at the end of the run.
    """

    images: List[ManifestImage] = field(default_factory=list)
    version: int = VERSION
    author: str = AUTHOR

    def add(self, spec: IconSpec) -> ManifestImage:
        image = ManifestImage.from_spec(spec)
        self.images.append(image)
        return image

    def to_dict(self) -> Dict[str, Any]:
        return {
            "images": [img.to_dict() for img in self.images],
            "info": {"version": self.version, "author": self.author},
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2)

    def write(self, path: Path) -> Path:
        path.write_text(self.to_json(), encoding="utf-8")
        return path

    @classmethod
    def read(cls, path: Path) -> "Manifest":
        data = json.loads(path.read_text(encoding="utf-8"))
        info = data.get("info", {})
        return cls(
            images=[ManifestImage(**img) for img in data.get("images", [])],
            version=int(info.get("version", VERSION)),
            author=str(info.get("author", AUTHOR)),
        )

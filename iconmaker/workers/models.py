from __future__ import annotations

import enum
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, List, Optional

if TYPE_CHECKING:
    from PIL import Image

    from .manifest import Manifest


class OutputProfile(enum.Enum):
    NATIVE_ICON_SET = "appiconset"
    WEB_FAVICONS = "web"
    PACKAGED_ICON_SET = "icns"
    PNG_FOLDER = "png"

    @classmethod
    def from_name(cls, name: str) -> "OutputProfile":
        try:
            return cls(name.lower())
        except ValueError:
            choices = ", ".join(p.value for p in cls)
            raise ValueError(f"Unknown profile {name!r} (choose from {choices})") from None


@dataclass(frozen=True)
class IconSpec:
    pixel_size: int
    filename: str
    point_size: int
    scale: int = 1  # 1 | 2

    @property
    def scale_label(self) -> str:
        return f"{self.scale}x"

    @property
    def point_label(self) -> str:
        return f"{self.point_size}x{self.point_size}"


@dataclass(frozen=True)
class ProfileLayout:
    folder: str
    catalog: tuple
    allows_badge: bool = True
    writes_manifest: bool = False
    ico_sizes: tuple = ()
    packaged_name: Optional[str] = None  # set when the folder is handed to a packager


@dataclass
class GeneratedBundle:
    root: Path
    profile: OutputProfile
    output: Path
    files: List[Path] = field(default_factory=list)
    manifest: Optional["Manifest"] = None

    @property
    def is_packaged(self) -> bool:
        return self.output.is_file()


@dataclass
class ConversionRequest:
    source: "Image.Image"
    profile: OutputProfile
    apply_badge: bool
    dest_dir: Path

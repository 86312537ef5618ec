"""Static icon catalogs, one table per output profile."""

from __future__ import annotations

from typing import Iterable, Tuple

from .models import IconSpec, OutputProfile, ProfileLayout


def icon_spec(point_size: int, scale: int = 1) -> IconSpec:
    suffix = "@2x" if scale == 2 else ""
    return IconSpec(
        pixel_size=point_size * scale,
        filename=f"icon_{point_size}x{point_size}{suffix}.png",
        point_size=point_size,
        scale=scale,
    )


def _catalog(pairs: Iterable[Tuple[int, int]]) -> Tuple[IconSpec, ...]:
    return tuple(icon_spec(point, scale) for point, scale in pairs)


NATIVE_CATALOG = _catalog([
    (16, 1), (16, 2),
    (32, 1), (32, 2),
    (64, 1),
    (128, 1), (128, 2),
    (256, 1), (256, 2),
    (512, 1), (512, 2),
    (1024, 1),
])

# iconutil only accepts these names
PACKAGED_CATALOG = _catalog([
    (16, 1), (16, 2),
    (32, 1), (32, 2),
    (128, 1), (128, 2),
    (256, 1), (256, 2),
    (512, 1), (512, 2),
])

FAVICON_CATALOG = (
    IconSpec(pixel_size=16, filename="favicon-16x16.png", point_size=16),
    IconSpec(pixel_size=32, filename="favicon-32x32.png", point_size=32),
    IconSpec(pixel_size=180, filename="apple-touch-icon.png", point_size=180),
)

ICO_SIZES = (16, 32, 48)
ICO_FILENAME = "favicon.ico"
MANIFEST_FILENAME = "Contents.json"

PROFILE_LAYOUTS = {
    OutputProfile.NATIVE_ICON_SET: ProfileLayout(
        folder="AppIcon.appiconset",
        catalog=NATIVE_CATALOG,
        writes_manifest=True,
    ),
    OutputProfile.WEB_FAVICONS: ProfileLayout(
        folder="Favicons",
        catalog=FAVICON_CATALOG,
        allows_badge=False,
        ico_sizes=ICO_SIZES,
    ),
    OutputProfile.PACKAGED_ICON_SET: ProfileLayout(
        folder="AppIcon.iconset",
        catalog=PACKAGED_CATALOG,
        packaged_name="AppIcon.icns",
    ),
    OutputProfile.PNG_FOLDER: ProfileLayout(
        folder="AppIcon",
        catalog=NATIVE_CATALOG,
    ),
}


def layout_for(profile: OutputProfile) -> ProfileLayout:
    return PROFILE_LAYOUTS[profile]

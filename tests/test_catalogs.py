import pytest

from iconmaker.workers.catalogs import (
    FAVICON_CATALOG,
    ICO_SIZES,
    NATIVE_CATALOG,
    PACKAGED_CATALOG,
    PROFILE_LAYOUTS,
    icon_spec,
    layout_for,
)
from iconmaker.workers.models import OutputProfile


def test_native_catalog():
    assert [(s.pixel_size, s.filename) for s in NATIVE_CATALOG] == [
        (16, "icon_16x16.png"),
        (32, "icon_16x16@2x.png"),
        (32, "icon_32x32.png"),
        (64, "icon_32x32@2x.png"),
        (64, "icon_64x64.png"),
        (128, "icon_128x128.png"),
        (256, "icon_128x128@2x.png"),
        (256, "icon_256x256.png"),
        (512, "icon_256x256@2x.png"),
        (512, "icon_512x512.png"),
        (1024, "icon_512x512@2x.png"),
        (1024, "icon_1024x1024.png"),
    ]


def test_packaged_catalog_follows_iconset_naming():
    assert len(PACKAGED_CATALOG) == 10
    names = {s.filename for s in PACKAGED_CATALOG}
    for n in (16, 32, 128, 256, 512):
        assert f"icon_{n}x{n}.png" in names
        assert f"icon_{n}x{n}@2x.png" in names
    for spec in PACKAGED_CATALOG:
        assert spec.pixel_size == spec.point_size * spec.scale


def test_favicon_catalog():
    assert [(s.pixel_size, s.filename) for s in FAVICON_CATALOG] == [
        (16, "favicon-16x16.png"),
        (32, "favicon-32x32.png"),
        (180, "apple-touch-icon.png"),
    ]
    assert ICO_SIZES == (16, 32, 48)


def test_filenames_are_unique_per_catalog():
    for layout in PROFILE_LAYOUTS.values():
        names = [s.filename for s in layout.catalog]
        assert len(names) == len(set(names))


def test_icon_spec_labels():
    spec = icon_spec(32, 2)
    assert spec.pixel_size == 64
    assert spec.point_label == "32x32"
    assert spec.scale_label == "2x"


def test_every_profile_has_a_layout():
    assert set(PROFILE_LAYOUTS) == set(OutputProfile)
    assert not layout_for(OutputProfile.WEB_FAVICONS).allows_badge
    assert layout_for(OutputProfile.NATIVE_ICON_SET).writes_manifest
    assert layout_for(OutputProfile.PACKAGED_ICON_SET).packaged_name == "AppIcon.icns"
    assert not layout_for(OutputProfile.PNG_FOLDER).writes_manifest


@pytest.mark.parametrize("name,profile", [
    ("appiconset", OutputProfile.NATIVE_ICON_SET),
    ("WEB", OutputProfile.WEB_FAVICONS),
    ("icns", OutputProfile.PACKAGED_ICON_SET),
    ("png", OutputProfile.PNG_FOLDER),
])
def test_profile_from_name(name, profile):
    assert OutputProfile.from_name(name) is profile


def test_unknown_profile():
    with pytest.raises(ValueError):
        OutputProfile.from_name("ico")

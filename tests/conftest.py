import pytest
from PIL import Image, ImageDraw

from iconmaker.workers import util
from iconmaker.workers.packaging import IconPackager

FAKE_ICNS = b"icns\x00\x00\x00\x08"


def draw_icon(size=512, background=(30, 144, 255, 255)):
    """Opaque square test artwork: a coloured tile with a bordered shape."""
    img = Image.new("RGBA", (size, size), background)
    draw = ImageDraw.Draw(img)
    margin = size // 25
    draw.rounded_rectangle([margin, margin, size - margin, size - margin],
                           radius=size // 10, outline=(0, 0, 0, 255), width=max(1, size // 64))
    c, t = size // 2, size * 2 // 5
    draw.rounded_rectangle([c - t // 3, c - t // 6, c + t // 3, c + t // 2],
                           radius=max(1, size // 25), fill=(255, 255, 255, 255))
    return img


class FixturePackager(IconPackager):
    """Stands in for iconutil by writing a fixed .icns payload."""

    name = "fixture"

    def __init__(self):
        self.calls = []

    def package(self, iconset_dir, output_path):
        self.calls.append(sorted(p.name for p in iconset_dir.iterdir()))
        output_path.write_bytes(FAKE_ICNS)
        return output_path


class SilentPackager(IconPackager):
    """Reports success without writing anything, like an unchecked iconutil run."""

    name = "silent"

    def package(self, iconset_dir, output_path):
        return output_path


@pytest.fixture
def source():
    return draw_icon(512)


@pytest.fixture
def wide_source():
    return Image.new("RGBA", (300, 120), (200, 50, 50, 255))


@pytest.fixture
def source_file(tmp_path, source):
    path = tmp_path / "artwork.png"
    source.save(path)
    return path


@pytest.fixture(autouse=True)
def isolated_dirs(tmp_path, monkeypatch):
    config_dir = tmp_path / "config"
    log_dir = tmp_path / "logs"
    monkeypatch.setattr(util, "CONFIG_FILE", config_dir / "settings.json")
    monkeypatch.setattr(util, "LOG_DIR", log_dir)
    monkeypatch.setattr(util, "LOG_FILE", log_dir / "conversions.jsonl")
    return config_dir, log_dir

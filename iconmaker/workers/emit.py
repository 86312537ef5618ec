from __future__ import annotations

import logging
import shutil
import threading
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from PIL import Image

from .catalogs import ICO_FILENAME, MANIFEST_FILENAME, layout_for
from .errors import (
    ConversionCancelled,
    ConversionFailed,
    ExternalToolFailure,
    IconMakerError,
    ImageAllocationError,
    ImageEncodeError,
)
from .ico import build_ico
from .imaging import DEFAULT_FILTER, compose, encode_png, resample
from .manifest import Manifest
from .models import ConversionRequest, GeneratedBundle, IconSpec, OutputProfile
from .packaging import IconPackager, default_packager

log = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int], None]


class IconSetEmitter:
    """Writes every asset of an output profile into a destination directory."""

    def __init__(
        self,
        packager: Optional[IconPackager] = None,
        resample_filter: str = DEFAULT_FILTER,
        on_progress: Optional[ProgressCallback] = None,
    ) -> None:
        self._packager = packager
        self.resample_filter = resample_filter
        self.on_progress = on_progress

    @property
    def packager(self) -> IconPackager:
        if self._packager is None:
            self._packager = default_packager()
        return self._packager

    def emit(
        self,
        source: Image.Image,
        profile: OutputProfile,
        apply_badge: bool,
        dest_dir: Path,
        cancel_event: Optional[threading.Event] = None,
    ) -> GeneratedBundle:
        layout = layout_for(profile)
        dest_dir = Path(dest_dir)
        folder = dest_dir / layout.folder
        badge = apply_badge and layout.allows_badge
        total = len(layout.catalog) + (1 if layout.ico_sizes else 0) + (1 if layout.writes_manifest else 0)
        log.info("Generating %s in %s (badge=%s)", profile.value, folder, badge)

        files: List[Path] = []
        manifest = Manifest() if layout.writes_manifest else None
        try:
            folder.mkdir(parents=True, exist_ok=True)
            working = compose(source, badge, self.resample_filter)

            for spec in layout.catalog:
                _check_cancel(cancel_event)
                files.append(self._write_png(working, spec, folder))
                if manifest is not None:
                    manifest.add(spec)
                self._report(len(files), total)

            if layout.ico_sizes:
                _check_cancel(cancel_event)
                # Favicons always come from the untouched source
                files.append(self._write_ico(source, layout.ico_sizes, folder / ICO_FILENAME))
                self._report(len(files), total)

            if manifest is not None:
                files.append(manifest.write(folder / MANIFEST_FILENAME))
                self._report(len(files), total)
        except ConversionFailed:
            raise
        except (ImageAllocationError, ImageEncodeError, OSError) as e:
            raise ConversionFailed(f"{profile.value} conversion failed: {e}") from e
        except Exception as e:
            raise ConversionFailed(f"{profile.value} conversion failed unexpectedly: {e}") from e

        output = folder
        if layout.packaged_name:
            _check_cancel(cancel_event)
            output = self._package(folder, dest_dir / layout.packaged_name)
            files = [output]

        log.info("Wrote %d file(s) for %s", len(files), profile.value)
        return GeneratedBundle(root=dest_dir, profile=profile, output=output, files=files, manifest=manifest)

    def _write_png(self, image: Image.Image, spec: IconSpec, folder: Path) -> Path:
        resized = resample(image, (spec.pixel_size, spec.pixel_size), self.resample_filter)
        path = folder / spec.filename
        path.write_bytes(encode_png(resized))
        log.debug("Wrote %s (%dpx)", path.name, spec.pixel_size)
        return path

    def _write_ico(self, source: Image.Image, sizes: Sequence[int], path: Path) -> Path:
        pngs = [(s, encode_png(resample(source, (s, s), self.resample_filter))) for s in sizes]
        path.write_bytes(build_ico(pngs))
        log.debug("Wrote %s with %d images", path.name, len(pngs))
        return path

    def _package(self, iconset: Path, output: Path) -> Path:
        log.info("Packaging %s with %s", iconset.name, self.packager.name)
        try:
            result = self.packager.package(iconset, output)
        except ConversionFailed:
            raise
        except OSError as e:
            raise ConversionFailed(f"Packaging {iconset.name} failed: {e}") from e
        except Exception as e:
            raise ExternalToolFailure(f"{self.packager.name} failed on {iconset.name}: {e}") from e
        if not Path(result).is_file():
            raise ExternalToolFailure(f"{self.packager.name} did not produce {output.name}")
        try:
            shutil.rmtree(iconset)
        except OSError as e:
            log.warning("Could not remove %s: %s", iconset, e)
        return result

    def _report(self, done: int, total: int) -> None:
        if self.on_progress is not None:
            self.on_progress(done, total)


def _check_cancel(cancel_event: Optional[threading.Event]) -> None:
    if cancel_event is not None and cancel_event.is_set():
        raise ConversionCancelled("Conversion cancelled")


class ConversionController:
    """Runs one conversion at a time on a background thread.

    Callbacks fire on the worker thread; a UI must marshal them to its own
    thread. Starting a new conversion cancels the previous one, whose result
    is then dropped.
    """

    def __init__(
        self,
        on_done: Callable[[GeneratedBundle], None],
        on_error: Callable[[IconMakerError], None],
        emitter: Optional[IconSetEmitter] = None,
    ) -> None:
        self.on_done = on_done
        self.on_error = on_error
        self.emitter = emitter or IconSetEmitter()
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start_conversion(self, request: ConversionRequest) -> None:
        self.stop()
        self._stop_event = threading.Event()
        self._thread = threading.Thread(
            target=self._run_conversion, args=(request, self._stop_event), daemon=True
        )
        self._thread.start()

    def stop(self) -> None:
        self._stop_event.set()
        if self._thread and self._thread.is_alive():
            self._thread.join(timeout=0.2)

    def wait(self, timeout: Optional[float] = None) -> bool:
        if self._thread is not None:
            self._thread.join(timeout)
        return not self.is_running

    def _run_conversion(self, request: ConversionRequest, stop_event: threading.Event) -> None:
        try:
            bundle = self.emitter.emit(
                request.source,
                request.profile,
                request.apply_badge,
                request.dest_dir,
                cancel_event=stop_event,
            )
        except ConversionCancelled:
            log.info("Conversion into %s cancelled", request.dest_dir)
        except IconMakerError as e:
            self.on_error(e)
        except Exception as e:
            failure = ConversionFailed(f"Unexpected error: {e}")
            failure.__cause__ = e
            self.on_error(failure)
        else:
            self.on_done(bundle)

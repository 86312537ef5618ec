import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from iconmaker import __version__
from iconmaker.utils.dependency_manager import DependencyManager

PROFILE_CHOICES = ["appiconset", "web", "icns", "png"]
FILTER_CHOICES = ["lanczos", "bicubic", "bilinear"]
PACKAGER_CHOICES = ["auto", "iconutil", "pillow"]


def _setting(settings: Dict[str, Any], defaults: Dict[str, Any], key: str, choices: List[str]) -> str:
    value = str(settings.get(key, "")).lower()
    return value if value in choices else defaults[key]


def build_parser(settings: Dict[str, Any], defaults: Dict[str, Any]) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="iconmaker",
        description="Turn an image into macOS app icons, an Xcode icon set or web favicons.",
    )
    parser.add_argument("source", type=Path, help="Image to convert (PNG, JPEG, ...).")
    parser.add_argument("-p", "--profile", choices=PROFILE_CHOICES,
                        default=_setting(settings, defaults, "profile", PROFILE_CHOICES),
                        help="Output type.")
    parser.add_argument("--badge", dest="apply_badge", action=argparse.BooleanOptionalAction,
                        default=bool(settings.get("apply_badge", defaults["apply_badge"])),
                        help="Place the image on the macOS rounded-rect shape (824 on 1024).")
    parser.add_argument("-o", "--output", type=Path, default=None,
                        help="Directory to write into (default: a fresh temporary directory).")
    parser.add_argument("--zip", dest="archive", action=argparse.BooleanOptionalAction,
                        default=bool(settings.get("archive", defaults["archive"])),
                        help="Zip folder outputs after generating them.")
    parser.add_argument("--filter", dest="resample_filter", choices=FILTER_CHOICES,
                        default=_setting(settings, defaults, "resample_filter", FILTER_CHOICES),
                        help="Resampling filter.")
    parser.add_argument("--packager", choices=PACKAGER_CHOICES,
                        default=_setting(settings, defaults, "packager", PACKAGER_CHOICES),
                        help="How .icns files are built.")
    parser.add_argument("--reveal", action="store_true", help="Reveal the result in Finder.")
    parser.add_argument("--save-defaults", action="store_true",
                        help="Remember profile, badge, filter, packager and zip options.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every written file.")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    dep_manager = DependencyManager()
    all_deps_available, missing_deps = dep_manager.check_all_dependencies()
    if not all_deps_available:
        print(f"Missing dependencies: {', '.join(missing_deps)}", file=sys.stderr)
        print(f"Please install manually:\n{dep_manager.install_hint()}", file=sys.stderr)
        return 1

    from rich.console import Console
    from rich.progress import BarColumn, Progress, TextColumn
    from rich.table import Table

    from iconmaker.workers import util
    from iconmaker.workers.emit import IconSetEmitter
    from iconmaker.workers.errors import ConversionFailed, ExternalToolFailure
    from iconmaker.workers.imaging import load_source
    from iconmaker.workers.models import OutputProfile
    from iconmaker.workers.packaging import default_packager

    settings = util.load_settings()
    args = build_parser(settings, util.DEFAULT_SETTINGS).parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING, format="%(message)s")
    console = Console()

    if args.save_defaults:
        util.save_settings({
            "profile": args.profile,
            "apply_badge": args.apply_badge,
            "resample_filter": args.resample_filter,
            "packager": args.packager,
            "archive": args.archive,
        })

    profile = OutputProfile.from_name(args.profile)
    if profile is OutputProfile.PACKAGED_ICON_SET and args.packager == "auto" and dep_manager.optional_missing:
        console.print(f"[yellow]{dep_manager.get_installation_status()}[/yellow]")
    if profile is OutputProfile.WEB_FAVICONS and args.apply_badge:
        console.print("[dim]Favicons never get the rounded-rect badge.[/dim]")

    try:
        source = load_source(args.source)
    except (OSError, ValueError) as e:
        console.print(f"[red]Cannot read {args.source}:[/red] {e}")
        return 2

    work_dir = args.output or util.new_work_dir()
    emitter = IconSetEmitter(packager=default_packager(args.packager), resample_filter=args.resample_filter)

    with Progress(TextColumn("{task.description}"), BarColumn(), console=console, transient=True) as progress:
        task = progress.add_task(f"Generating {profile.value} icons", total=None)
        emitter.on_progress = lambda done, total: progress.update(task, completed=done, total=total)
        try:
            bundle = emitter.emit(source, profile, args.apply_badge, work_dir)
        except ConversionFailed as e:
            util.append_conversion_log("failed", profile.value, None, [], error=str(e))
            console.print(f"[red]Conversion failed:[/red] {e}")
            if isinstance(e, ExternalToolFailure) and e.output:
                console.print(e.output)
            if args.output is None:
                util.discard_work_dir(work_dir)
            return 1

    util.append_conversion_log("generated", profile.value, bundle.output, bundle.files)

    table = Table(title=f"{profile.value} ({len(bundle.files)} files)")
    table.add_column("File")
    table.add_column("Size", justify="right")
    for path in bundle.files:
        table.add_row(path.name, util.human_readable_size(path.stat().st_size))
    console.print(table)

    result = bundle.output
    if args.archive:
        result = util.archive_bundle(bundle)
    console.print(f"[green]Done:[/green] {result} ({util.human_readable_size(util.bundle_size(bundle))})")

    if args.reveal:
        util.reveal_in_finder(result)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

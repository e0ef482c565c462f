#!/usr/bin/env python3
"""
subtitle_linker.py - Link loose subtitles next to their videos for Jellyfin/Plex.

Flow (per directory):
- Find video files directly inside the directory (mkv/mp4/avi by default).
- Find subtitle files anywhere below it (srt/vtt/idx/ass/dts by default).
- Work out each subtitle's language from its name ('2_English.srt' -> en)
  and its episode from its path ('Subs/Show.S01E02/English.srt' -> S01E02).
- Refuse to touch the directory if the videos look unrelated (different
  titles, or episodes mixed with movies).
- Drop duplicate subtitles (same language + episode; first by name wins).
- Symlink every subtitle next to every matching video as
      <video stem>.<lang>[.default].<ext>

Usage:
    python subtitle_linker.py                       # current directory
    python subtitle_linker.py /media/Movie /media/Show
    python subtitle_linker.py --dry-run -v /media/Show
    python subtitle_linker.py --config config.yaml /media/Movie
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, cast

try:
    import yaml
except ImportError as e:
    print("❌ PyYAML is not installed. Install it with:\n   pip install pyyaml")
    raise SystemExit(1) from e

try:
    from rich import box
    from rich.console import Console
    from rich.markup import escape
    from rich.table import Table
    from rich.theme import Theme
except ImportError as e:
    print("❌ rich is not installed. Install it with:\n   pip install rich")
    raise SystemExit(1) from e

from media_naming import (
    LinkCreationFailed,
    LinkPlan,
    NamingError,
    NoVideosFound,
    SubtitleEntry,
    UnknownLanguage,
    VideoEntry,
    dedupe_subtitles,
    pair_entries,
    resolve_language,
    validate_videos,
)
from subtitle_languages import Language, all_languages

# ---------------------------------------------------------------------------
# CONFIG DEFAULTS
# ---------------------------------------------------------------------------

DEFAULT_CONFIG_PATH = Path("config.yaml")
DEFAULT_VIDEO_EXTS = ("mp4", "mkv", "avi")
DEFAULT_SUBTITLE_EXTS = ("srt", "vtt", "idx", "ass", "dts")
DEFAULT_LANGUAGE = "en"
DEFAULT_LOG_DIR = Path.home() / ".local" / "share" / "subtitle-linker"

THEME = Theme(
    {
        "title": "bold cyan",
        "ok": "bold green",
        "warn": "bold yellow",
        "err": "bold red",
        "dim": "dim",
    }
)
console = Console(theme=THEME, highlight=False, soft_wrap=True)
err_console = Console(theme=THEME, highlight=False, soft_wrap=True, stderr=True)

# Global verbose flag (set by --verbose)
VERBOSE = False


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------


def setup_logging(log_dir: Path | None = DEFAULT_LOG_DIR) -> Path | None:
    """Set up file logging in addition to console output.

    Returns the log file path if successful, None otherwise.
    """
    if log_dir is None:
        logging.getLogger().addHandler(logging.NullHandler())
        return None
    try:
        log_dir.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = log_dir / f"subtitle_linker_{timestamp}.log"
        logging.basicConfig(
            level=logging.DEBUG if VERBOSE else logging.INFO,
            format="%(asctime)s [%(levelname)s] %(message)s",
            handlers=[
                logging.FileHandler(log_file),
            ],
        )
        return log_file
    except OSError:
        logging.getLogger().addHandler(logging.NullHandler())
        return None


def log(msg: str, style: str | None = None) -> None:
    console.print(f"[{style}]{escape(msg)}[/]" if style else escape(msg))
    logging.info(msg)


def debug(msg: str) -> None:
    """Print debug message if verbose mode is enabled."""
    logging.debug(msg)
    if VERBOSE:
        console.print(f"[dim][DEBUG] {escape(msg)}[/]")


def warn(msg: str) -> None:
    err_console.print(f"[warn][WARN][/] {escape(msg)}")
    logging.warning(msg)


def error(msg: str) -> None:
    err_console.print(f"[err][ERROR][/] {escape(msg)}")
    logging.error(msg)


# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------


def _coerce_bool(v: Any, default: bool) -> bool:
    if isinstance(v, bool):
        return v
    if isinstance(v, int | float):
        return bool(v)
    if isinstance(v, str):
        s = v.strip().lower()
        if s in ("true", "ture", "yes", "y", "1", "on", "enabled"):
            return True
        if s in ("false", "no", "n", "0", "off", "disabled"):
            return False
    return default


def _expand_path(p: str) -> str:
    """Expand ~ and $VARS and return a normalized path string (doesn't require existence)."""
    p = (p or "").strip()
    if not p:
        return p
    p = os.path.expandvars(p)
    return str(Path(p).expanduser())


def _coerce_extensions(v: Any, default: Iterable[str]) -> frozenset[str]:
    """Accept ['srt', '.ASS'] or 'srt, ass' and return {'srt', 'ass'}."""
    if v is None:
        items: Iterable[Any] = default
    elif isinstance(v, str):
        items = v.split(",")
    elif isinstance(v, list | tuple | set):
        items = v
    else:
        raise ValueError(f"extensions must be a list or comma-separated string, got {v!r}")
    exts = frozenset(str(x).strip().lstrip(".").lower() for x in items)
    exts = exts - {""}
    if not exts:
        raise ValueError("extension list is empty")
    return exts


@dataclass(frozen=True)
class LinkerCfg:
    video_extensions: frozenset[str]
    subtitle_extensions: frozenset[str]
    default_language: Language
    create_links: bool  # false = never touch the filesystem
    relative_links: bool
    log_dir: Path | None


def load_config(path: Path | None) -> LinkerCfg:
    raw: dict[str, Any] = {}
    if path is not None:
        if not path.exists():
            raise FileNotFoundError(f"Config not found: {path}")
        loaded = yaml.safe_load(path.read_text(encoding="utf-8"))
        if loaded is None:
            raw = {}
        elif not isinstance(loaded, dict):
            raise ValueError("config.yaml root must be a mapping")
        else:
            raw = cast(dict[str, Any], loaded)

    lang_token = str(raw.get("default_language", DEFAULT_LANGUAGE))
    try:
        default_language = resolve_language(lang_token)
    except UnknownLanguage as e:
        raise ValueError(f"default_language: {e}") from e

    log_dir_raw = raw.get("log_dir", str(DEFAULT_LOG_DIR))
    log_dir = Path(_expand_path(str(log_dir_raw))) if log_dir_raw else None

    return LinkerCfg(
        video_extensions=_coerce_extensions(raw.get("video_extensions"), DEFAULT_VIDEO_EXTS),
        subtitle_extensions=_coerce_extensions(
            raw.get("subtitle_extensions"), DEFAULT_SUBTITLE_EXTS
        ),
        default_language=default_language,
        create_links=_coerce_bool(raw.get("create_links", True), True),
        relative_links=_coerce_bool(raw.get("relative_links", True), True),
        log_dir=log_dir,
    )


# ---------------------------------------------------------------------------
# Directory scanning
# ---------------------------------------------------------------------------


def has_extension(path: Path, extensions: frozenset[str]) -> bool:
    return path.suffix.lstrip(".").lower() in extensions


def discover_videos(root: Path, extensions: frozenset[str]) -> list[Path]:
    """Video files directly inside root, sorted by name."""
    return sorted(
        (p for p in root.iterdir() if p.is_file() and has_extension(p, extensions)),
        key=lambda p: p.name,
    )


def discover_subtitles(root: Path, extensions: frozenset[str]) -> list[Path]:
    """Subtitle files anywhere below root, sorted by path.

    Symlinks are skipped (files and directories), which also keeps links made
    by a previous run out of the result.
    """

    def _on_error(e: OSError) -> None:
        warn(f"Cannot read {e.filename}: {e.strerror}")

    found: list[Path] = []
    for dirpath, _, filenames in os.walk(root, onerror=_on_error, followlinks=False):
        for name in filenames:
            p = Path(dirpath) / name
            if p.is_symlink() or not has_extension(p, extensions):
                continue
            found.append(p)
    return sorted(found, key=str)


# ---------------------------------------------------------------------------
# Symlinks
# ---------------------------------------------------------------------------


def ensure_symlink(target: Path, link: Path, dry_run: bool, relative: bool = True) -> str:
    """Create a symlink link -> target (if needed).

    Returns a status string: 'linked', 'would-link', 'exists-same' or
    'exists-different'. Raises LinkCreationFailed if the OS refuses.
    """
    if link.is_symlink() or link.exists():
        try:
            if link.is_symlink() and link.resolve() == target.resolve():
                return "exists-same"
        except OSError:
            pass
        return "exists-different"

    if dry_run:
        return "would-link"

    link_target = Path(os.path.relpath(target, link.parent)) if relative else target.absolute()
    try:
        link.symlink_to(link_target)
    except OSError as e:
        raise LinkCreationFailed(f"{link} -> {link_target}: {e}") from e
    return "linked"


# ---------------------------------------------------------------------------
# Main processing
# ---------------------------------------------------------------------------


@dataclass
class RunStats:
    pairings: int = 0
    linked: int = 0
    would_link: int = 0
    already: int = 0
    skipped: int = 0
    errors: int = 0


def classify_subtitles(paths: Iterable[Path], stats: RunStats) -> list[SubtitleEntry]:
    subtitles: list[SubtitleEntry] = []
    for path in paths:
        try:
            subtitles.append(SubtitleEntry.from_path(path))
        except UnknownLanguage as e:
            warn(f"Skipping {path}: {e}")
            stats.skipped += 1
    return subtitles


def plan_directory(root: Path, cfg: LinkerCfg, stats: RunStats) -> list[LinkPlan]:
    """Scan root and work out every link to create. Nothing is written.

    Raises NoVideosFound, MixedSeriesAndMovies or InconsistentTitles.
    """
    video_paths = discover_videos(root, cfg.video_extensions)
    if not video_paths:
        raise NoVideosFound(root)
    debug(f"videos in {root}: {[p.name for p in video_paths]}")

    videos = [VideoEntry.from_path(p) for p in video_paths]
    title = validate_videos(videos)
    debug(f"title prefix: {title!r}")

    subtitle_paths = discover_subtitles(root, cfg.subtitle_extensions)
    debug(f"subtitles in {root}: {[str(p.relative_to(root)) for p in subtitle_paths]}")

    subtitles = classify_subtitles(subtitle_paths, stats)
    unique = dedupe_subtitles(subtitles)
    if len(unique) != len(subtitles):
        debug(f"dropped {len(subtitles) - len(unique)} duplicate subtitle(s)")

    plans = pair_entries(videos, unique, cfg.default_language)
    for plan in plans:
        debug(f"pair {plan.video.path.name} <- {plan.target.relative_to(root)}")
    return plans


def link_plans(plans: Iterable[LinkPlan], cfg: LinkerCfg, dry_run: bool, stats: RunStats) -> None:
    for plan in plans:
        stats.pairings += 1
        try:
            status = ensure_symlink(
                plan.target, plan.link_path, dry_run=dry_run, relative=cfg.relative_links
            )
        except LinkCreationFailed as e:
            stats.errors += 1
            error(f"Failed to link {plan.link_name}: {e}")
            continue

        if status == "linked":
            stats.linked += 1
            log(f"[LINKED]   {plan.link_name}", style="ok")
        elif status == "would-link":
            stats.would_link += 1
            log(f"[DRY-RUN]  {plan.link_name}", style="dim")
        elif status == "exists-same":
            stats.already += 1
            log(f"[EXISTS]   {plan.link_name}", style="dim")
        else:
            stats.errors += 1
            warn(f"[CLASH]    {plan.link_path} exists and is not a link to {plan.target}")


def render_summary(root: Path, stats: RunStats, dry_run: bool) -> None:
    table = Table(title=escape(str(root)), show_header=False, box=box.SIMPLE, padding=(0, 1))
    table.add_column("key", style="cyan")
    table.add_column("val")
    table.add_row("Pairings", str(stats.pairings))
    if dry_run:
        table.add_row("Would link", str(stats.would_link))
    else:
        table.add_row("New links", str(stats.linked))
    table.add_row("Already present", str(stats.already))
    table.add_row("Skipped subtitles", str(stats.skipped))
    table.add_row("Errors / clashes", str(stats.errors))
    table.add_row("Mode", "DRY-RUN" if dry_run else "LIVE")
    console.print(table)
    logging.info(
        "%s: pairings=%d linked=%d would_link=%d already=%d skipped=%d errors=%d",
        root,
        stats.pairings,
        stats.linked,
        stats.would_link,
        stats.already,
        stats.skipped,
        stats.errors,
    )


def process_directory(root: Path, cfg: LinkerCfg, dry_run: bool) -> RunStats:
    log(f"\n--- {root} ---", style="title")
    stats = RunStats()
    plans = plan_directory(root, cfg, stats)
    if not plans:
        warn(f"No subtitle matches any video in {root}")
    link_plans(plans, cfg, dry_run, stats)
    render_summary(root, stats, dry_run)
    return stats


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(
        description="Symlink loose subtitles next to their videos (Jellyfin/Plex naming)",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    python subtitle_linker.py                          # current directory
    python subtitle_linker.py "/media/Movie (2020)"    # one folder
    python subtitle_linker.py --dry-run -v a/ b/ c/    # preview several
        """,
    )
    ap.add_argument("dirs", nargs="*", type=Path, help="Directories to process (default: .)")
    ap.add_argument(
        "--config",
        "-c",
        type=Path,
        help=f"YAML config file (default: ./{DEFAULT_CONFIG_PATH} if present)",
    )
    ap.add_argument(
        "--dry-run", "-n", action="store_true", help="Show what would be linked, change nothing"
    )
    ap.add_argument("--verbose", "-v", action="store_true", help="Show detailed debug output")
    ap.add_argument(
        "--list-languages", action="store_true", help="Print recognised languages and exit"
    )
    return ap.parse_args(argv)


def print_languages() -> None:
    table = Table(title="Languages", box=box.SIMPLE)
    table.add_column("Tag", style="cyan")
    table.add_column("ISO 639-2")
    table.add_column("Name")
    for lang in all_languages():
        table.add_row(lang.tag, lang.alpha3, lang.name)
    console.print(table)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)

    global VERBOSE
    VERBOSE = args.verbose

    if args.list_languages:
        print_languages()
        return

    config_path = args.config
    if config_path is None and DEFAULT_CONFIG_PATH.exists():
        config_path = DEFAULT_CONFIG_PATH
    try:
        cfg = load_config(config_path)
    except (OSError, ValueError, yaml.YAMLError) as e:
        error(f"Invalid configuration: {e}")
        raise SystemExit(1) from e

    log_file = setup_logging(cfg.log_dir)
    if log_file:
        debug(f"Logging to: {log_file}")

    dry_run = args.dry_run or not cfg.create_links
    dirs: list[Path] = args.dirs or [Path.cwd()]

    try:
        for path in dirs:
            if not path.is_dir():
                error(f"{path} is not a folder, ignoring")
                continue
            try:
                process_directory(path, cfg, dry_run)
            except (NamingError, OSError) as e:
                error(f"failed to process {path}: {e}")
    except KeyboardInterrupt:
        console.print("\n[dim]⏹  Interrupted by user.[/]")


if __name__ == "__main__":
    main(sys.argv[1:])

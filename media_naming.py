"""
Matching & naming rules for a directory of loose videos and subtitles.

Given the videos and subtitles found in one directory this module decides:
- whether every video is a series episode or every video is standalone,
- whether several videos are cuts/qualities of the same title,
- which language each subtitle is in (and drops duplicates),
- which subtitle goes with which video, and what the link is called.

Nothing here touches the filesystem; see subtitle_linker.py for the CLI.

Naming scheme (Jellyfin/Plex external subtitles):
    <video stem>.<language tag>[.default].<subtitle extension>
    e.g. 'Movie - 1080p.mkv' + 'Subs/2_English.srt' -> 'Movie - 1080p.en.default.srt'
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from pathlib import Path

from subtitle_languages import Language, lookup_language

# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class NamingError(Exception):
    """Base class for everything this module raises."""


class NoVideosFound(NamingError):
    def __init__(self, root: Path | str | None = None) -> None:
        super().__init__(f"no video files found in {root}" if root else "no video files found")
        self.root = root


class MixedSeriesAndMovies(NamingError):
    """Some videos carry an episode tag and some don't."""


class InconsistentTitles(NamingError):
    """Videos are not versions of the same title."""


class UnknownLanguage(NamingError):
    def __init__(self, token: str) -> None:
        super().__init__(f"unknown language: {token!r}")
        self.token = token


class MalformedEpisodeIdentifier(NamingError):
    pass


class LinkCreationFailed(NamingError):
    pass


# ---------------------------------------------------------------------------
# Filename patterns
# ---------------------------------------------------------------------------

# S01E02, anywhere in the text. Exactly two digits each.
EPISODE_REGEX = re.compile(r"S(?P<season>\d{2})E(?P<episode>\d{2})", re.IGNORECASE)

QUALITY_TOKENS = ("4K HDR", "4K", "1080p", "720p")

# Matches at the end of a stem:
#   ' - 720p'              (movie)
#   ' S01E01 - 1080p'      (episode)
#   ' - S01E01 - 4K HDR'   (episode, dash separated)
QUALITY_SUFFIX_REGEX = re.compile(
    r"(?:\s*-?\s*S\d{2}E\d{2})?"  # optional episode tag
    r" - "
    r"(?:" + "|".join(re.escape(tok) for tok in QUALITY_TOKENS) + r")$",
    re.IGNORECASE,
)

NUMERIC_PREFIX_REGEX = re.compile(r"^\d+_")


def strip_quality_suffix(stem: str) -> str:
    """Remove a trailing '[SxxExx] - <quality>' suffix from a filename stem.

    'Show - 720p'         -> 'Show'
    'Show S01E01 - 1080p' -> 'Show'
    'Movie'               -> 'Movie'  (unchanged)
    """
    return QUALITY_SUFFIX_REGEX.sub("", stem, count=1)


def strip_numeric_prefix(stem: str) -> str:
    """'2_English' -> 'English'. Stems without a 'digits_' prefix are returned as-is."""
    return NUMERIC_PREFIX_REGEX.sub("", stem, count=1)


# ---------------------------------------------------------------------------
# Episode identifiers
# ---------------------------------------------------------------------------


@dataclass(frozen=True, order=True)
class EpisodeId:
    season: int
    episode: int

    def __post_init__(self) -> None:
        for label, value in (("season", self.season), ("episode", self.episode)):
            if not 1 <= value <= 99:
                raise MalformedEpisodeIdentifier(f"{label} must be within 1..99, got {value}")

    @classmethod
    def parse(cls, code: str) -> EpisodeId:
        """Parse a complete 'S01E02' code (case-insensitive)."""
        m = EPISODE_REGEX.fullmatch(code.strip())
        if not m:
            raise MalformedEpisodeIdentifier(f"not an episode code: {code!r}")
        return cls(int(m.group("season")), int(m.group("episode")))

    def __str__(self) -> str:
        return f"S{self.season:02d}E{self.episode:02d}"


def extract_episode_id(text: str) -> EpisodeId | None:
    """Return the episode identifier of the first 'SxxExx' found in text.

    Only the first occurrence is considered. A zero season or episode
    ('S00E01', 'S01E00') yields None.
    """
    m = EPISODE_REGEX.search(text)
    if not m:
        return None
    try:
        return EpisodeId(int(m.group("season")), int(m.group("episode")))
    except MalformedEpisodeIdentifier as e:
        logging.debug("Ignoring episode tag %r in %s: %s", m.group(0), text, e)
        return None


# ---------------------------------------------------------------------------
# Languages
# ---------------------------------------------------------------------------


def resolve_language(token: str) -> Language:
    """Map a language name or code ('English', 'eng', 'en') to a Language.

    Raises UnknownLanguage if nothing matches.
    """
    language = lookup_language(token)
    if language is None:
        raise UnknownLanguage(token)
    return language


# ---------------------------------------------------------------------------
# Entries
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class VideoEntry:
    path: Path
    episode: EpisodeId | None

    @classmethod
    def from_path(cls, path: Path) -> VideoEntry:
        return cls(path=path, episode=extract_episode_id(str(path)))


@dataclass(frozen=True)
class SubtitleEntry:
    path: Path
    language: Language
    episode: EpisodeId | None

    @classmethod
    def from_path(cls, path: Path) -> SubtitleEntry:
        """Classify a subtitle file. Raises UnknownLanguage."""
        language = resolve_language(strip_numeric_prefix(path.stem))
        return cls(path=path, language=language, episode=extract_episode_id(str(path)))

    @property
    def key(self) -> tuple[Language, EpisodeId | None]:
        return self.language, self.episode


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


def validate_videos(videos: Sequence[VideoEntry]) -> str:
    """Check that the videos belong together and return their title prefix.

    Rules:
    - either every video has an episode tag or none has one
    - every stem starts with the title prefix of the first video, i.e. its
      stem minus a '[SxxExx] - <quality>' suffix (the whole stem if there is
      no such suffix)

    Raises NoVideosFound, MixedSeriesAndMovies or InconsistentTitles.
    """
    if not videos:
        raise NoVideosFound()

    title_prefix = strip_quality_suffix(videos[0].path.stem)
    if len(videos) == 1:
        return title_prefix

    with_episode = [v for v in videos if v.episode is not None]
    if with_episode and len(with_episode) != len(videos):
        without = [v.path.name for v in videos if v.episode is None]
        raise MixedSeriesAndMovies(
            f"{len(with_episode)} episode file(s) mixed with standalone file(s): "
            + ", ".join(without)
        )

    for video in videos[1:]:
        if not video.path.stem.startswith(title_prefix):
            raise InconsistentTitles(
                f"{video.path.name!r} does not start with {title_prefix!r} "
                f"(from {videos[0].path.name!r})"
            )
    return title_prefix


# ---------------------------------------------------------------------------
# Deduplication
# ---------------------------------------------------------------------------


def dedupe_subtitles(subtitles: Iterable[SubtitleEntry]) -> list[SubtitleEntry]:
    """Keep the first subtitle per (language, episode); drop later ones.

    Input order is discovery order, so the lexicographically first path wins.
    """
    seen: set[tuple[Language, EpisodeId | None]] = set()
    kept: list[SubtitleEntry] = []
    for sub in subtitles:
        if sub.key in seen:
            logging.debug("Dropping duplicate subtitle %s (%s)", sub.path, sub.language)
            continue
        seen.add(sub.key)
        kept.append(sub)
    return kept


# ---------------------------------------------------------------------------
# Pairing & naming
# ---------------------------------------------------------------------------


def build_link_name(video_stem: str, language_tag: str, extension: str, is_default: bool) -> str:
    """Build the external subtitle filename for a video.

    ('Movie', 'en', '.srt', True)  -> 'Movie.en.default.srt'
    ('Movie', 'fr', 'ass', False)  -> 'Movie.fr.ass'
    """
    parts = [video_stem, language_tag]
    if is_default:
        parts.append("default")
    parts.append(extension.lstrip("."))
    return ".".join(parts)


@dataclass(frozen=True)
class LinkPlan:
    """One video <-> subtitle pairing, ready for the link creator."""

    video: VideoEntry
    subtitle: SubtitleEntry
    link_name: str

    @property
    def target(self) -> Path:
        return self.subtitle.path

    @property
    def link_path(self) -> Path:
        return self.video.path.parent / self.link_name


def pair_entries(
    videos: Sequence[VideoEntry],
    subtitles: Sequence[SubtitleEntry],
    default_language: Language,
) -> list[LinkPlan]:
    """Pair every video with every subtitle of the same episode (or both none)."""
    plans: list[LinkPlan] = []
    for video in videos:
        for sub in subtitles:
            if video.episode != sub.episode:
                continue
            name = build_link_name(
                video_stem=video.path.stem,
                language_tag=sub.language.tag,
                extension=sub.path.suffix,
                is_default=sub.language == default_language,
            )
            plans.append(LinkPlan(video=video, subtitle=sub, link_name=name))
    return plans

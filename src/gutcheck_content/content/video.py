"""YouTube video reference parsing and embed URL building."""

from __future__ import annotations

import re
from dataclasses import dataclass
from urllib.parse import urlencode

_ID = r"([A-Za-z0-9_-]{11})"
_WATCH = re.compile(r"youtube\.com/watch\?(?:.*&)?v=" + _ID)
_SHORT = re.compile(r"youtu\.be/" + _ID)
_EMBED = re.compile(r"youtube\.com/embed/" + _ID)
_SHORTS = re.compile(r"youtube\.com/shorts/" + _ID)
_BARE_ID = re.compile(r"^" + _ID + r"$")
_T_PARAM = re.compile(r"[?&]t=([^&#]+)")
_START_PARAM = re.compile(r"[?&]start=(\d+)")
_DURATION_PART = re.compile(r"(\d+)([hms])")
_UNIT_SECONDS = {"h": 3600, "m": 60, "s": 1}


@dataclass(frozen=True)
class VideoReference:
    video_id: str
    start_seconds: int | None = None


def parse_time(value: str) -> int | None:
    """Parse ``"50"``, ``"50s"``, ``"1m20s"`` or ``"1h30m45s"`` into seconds."""
    if not value:
        return None
    if value.isdigit():
        return int(value)
    parts = _DURATION_PART.findall(value)
    if not parts:
        return None
    return sum(int(amount) * _UNIT_SECONDS[unit] for amount, unit in parts)


def parse_youtube(value: object) -> VideoReference | None:
    """Extract the video id and optional start offset from a URL or bare id.

    Accepts watch, youtu.be, embed and shorts URLs as well as an 11-character
    id. Returns ``None`` when nothing recognisable is found.
    """
    if not isinstance(value, str):
        return None
    text = value.strip()
    if not text:
        return None

    for pattern, time_pattern in ((_WATCH, _T_PARAM), (_SHORT, _T_PARAM), (_EMBED, _START_PARAM)):
        match = pattern.search(text)
        if match:
            start = time_pattern.search(text)
            return VideoReference(match.group(1), parse_time(start.group(1)) if start else None)

    match = _SHORTS.search(text) or _BARE_ID.match(text)
    if match:
        return VideoReference(match.group(1))
    return None


def build_youtube_embed_url(video_id: str, start_seconds: int | None = None) -> str:
    """Build an autoplaying embed URL with related videos disabled."""
    if not video_id:
        raise ValueError("video_id is required")
    if not _BARE_ID.match(video_id):
        raise ValueError(f"Invalid video ID format: {video_id}")

    params = {"autoplay": "1", "rel": "0"}
    if start_seconds is not None and start_seconds > 0:
        params["start"] = str(start_seconds)
    return f"https://www.youtube.com/embed/{video_id}?{urlencode(params)}"

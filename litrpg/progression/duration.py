"""
Duration codec - human time strings to seconds and back.

Accepted input is a run of "<number><unit>" tokens and nothing else,
unit one of hr/h, min/m, sec/s (case-insensitive), e.g. "1 hr 30 min",
"90s", "2.5 min". Text with anything besides tokens, spaces and commas
("Heals 50 hp", "Until 3 stacks") is not a duration. Output is always
the long form: "1 hr 5 min", "4 min 30 sec", "45 sec".

"Instant", "Passive" and "Toggle" are not durations. They, free-form
text ("Varies") and empty strings are never scaled: scale_duration()
returns them unchanged.
"""

from __future__ import annotations

import re
from typing import Optional

from litrpg.progression.numeric import round_half_up

SENTINELS = frozenset({"instant", "passive", "toggle"})

_TOKEN = re.compile(r"(\d+(?:\.\d+)?)\s*(hr|min|sec|h|m|s)\b", re.IGNORECASE)
_SEPARATORS = re.compile(r"[\s,]*")

_UNIT_SECONDS = {
    "hr": 3600, "h": 3600,
    "min": 60, "m": 60,
    "sec": 1, "s": 1,
}


def is_sentinel(text: Optional[str]) -> bool:
    return text is not None and text.strip().lower() in SENTINELS


def try_parse_duration(text: Optional[str]) -> Optional[float]:
    """
    Total seconds in text, or None when it is not a duration.

    Sentinels and text with anything besides time tokens return None.
    """
    if not text or is_sentinel(text):
        return None

    matches = list(_TOKEN.finditer(text))
    if not matches:
        return None
    if not _SEPARATORS.fullmatch(_TOKEN.sub("", text)):
        return None

    return sum(float(m.group(1)) * _UNIT_SECONDS[m.group(2).lower()] for m in matches)


def parse_duration(text: Optional[str]) -> float:
    """
    Total seconds in text; 0 when nothing matches.

    A 0 here is ambiguous ("0 sec" vs "Varies"). Callers that scale
    should use try_parse_duration() or is_time_scalable().
    """
    seconds = try_parse_duration(text)
    return seconds if seconds is not None else 0.0


def is_time_scalable(text: Optional[str]) -> bool:
    return try_parse_duration(text) is not None


def format_duration(seconds: float, precise: bool = False) -> str:
    """
    Format seconds as "H hr M min S sec", omitting zero components.

    Args:
        seconds: Total seconds; negatives format as 0
        precise: Keep one decimal for non-whole values under a minute
    """
    seconds = max(0.0, seconds)

    if precise and seconds < 60:
        tenths = round_half_up(seconds * 10)
        if tenths < 600 and tenths % 10:
            return f"{tenths / 10:.1f} sec"

    total = round_half_up(seconds)
    if total < 60:
        return f"{total} sec"

    hours, remainder = divmod(total, 3600)
    minutes, secs = divmod(remainder, 60)

    parts = []
    if hours:
        parts.append(f"{hours} hr")
    if minutes:
        parts.append(f"{minutes} min")
    if secs:
        parts.append(f"{secs} sec")
    return " ".join(parts)


def scale_duration(text: Optional[str], factor: float, precise: bool = False) -> Optional[str]:
    """
    Multiply a duration string by factor.

    Non-durations pass through unchanged. Scaled results are floored
    at one second so a duration never collapses to zero.
    """
    seconds = try_parse_duration(text)
    if seconds is None:
        return text
    return format_duration(max(1.0, seconds * factor), precise=precise)

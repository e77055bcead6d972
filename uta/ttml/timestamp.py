from __future__ import annotations

import re

from uta.errors import MalformedTimestamp

# [MM:]SS.fff
_MINUTES_FORM = re.compile(
    r"(?:(?P<minutes>\d+):)?(?P<seconds>\d{1,2})\.(?P<millis>\d{3})",
    re.ASCII,
)
# [HH:][MM:]SS.fff, a lone prefix is minutes
_HOURS_FORM = re.compile(
    r"(?:(?P<hours>\d+):)??(?:(?P<minutes>\d+):)?(?P<seconds>\d{1,2})\.(?P<millis>\d{3})",
    re.ASCII,
)
_FORMS = (_MINUTES_FORM, _HOURS_FORM)


def parse_timestamp(text: str) -> int:
    """TTML clock value (`[[HH:]MM:]SS.fff`) -> milliseconds."""
    for form in _FORMS:
        m = form.fullmatch(text)
        if m is not None:
            break
    else:
        raise MalformedTimestamp(text)

    fields = m.groupdict(default="0")
    hours = int(fields.get("hours", "0"))
    minutes = int(fields["minutes"])
    seconds = int(fields["seconds"])
    millis = int(fields["millis"])
    return ((hours * 60 + minutes) * 60 + seconds) * 1000 + millis


def format_lrc_time(ms: int) -> str:
    m, rem = divmod(ms, 60_000)
    s, ms2 = divmod(rem, 1_000)
    # centiseconds, truncated
    return f"{m:02d}:{s:02d}.{ms2 // 10:02d}"


def translate(text: str) -> str:
    return format_lrc_time(parse_timestamp(text))

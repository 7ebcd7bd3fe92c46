"""Timestamp patterns in the ``yyyy-MM-dd_HH-mm-ss`` style.

The settings file stores date formats as letter patterns rather than
``strftime`` directives, so hand-edited values stay readable:

=======  ==========================================
letter   field
=======  ==========================================
``y``    year (``yy`` gives two digits)
``M``    month (``MMM`` short name, ``MMMM`` full)
``d``    day of month
``E``    weekday (``EEE`` short name, ``EEEE`` full)
``H``    hour 0-23
``k``    hour 1-24
``h``    hour 1-12
``K``    hour 0-11
``m``    minute
``s``    second
``S``    millisecond
``a``    AM/PM marker
=======  ==========================================

Text in single quotes is copied literally (``''`` is a quote). Any other
letter is also copied as-is.
"""

from __future__ import annotations

from datetime import datetime

MONTHS = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]
WEEKDAYS = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]


def tokenize(pattern: str) -> list[tuple[str, str]]:
    """Split *pattern* into ``("field", "yyyy")`` / ``("text", "-")`` tokens."""
    tokens: list[tuple[str, str]] = []
    i = 0
    n = len(pattern)
    while i < n:
        ch = pattern[i]
        if ch == "'":
            if i + 1 < n and pattern[i + 1] == "'":
                tokens.append(("text", "'"))
                i += 2
                continue
            end = i + 1
            literal = []
            while end < n:
                if pattern[end] == "'":
                    if end + 1 < n and pattern[end + 1] == "'":
                        literal.append("'")
                        end += 2
                        continue
                    break
                literal.append(pattern[end])
                end += 1
            tokens.append(("text", "".join(literal)))
            i = end + 1
        elif ch.isascii() and ch.isalpha():
            end = i
            while end < n and pattern[end] == ch:
                end += 1
            tokens.append(("field", pattern[i:end]))
            i = end
        else:
            end = i
            while end < n and pattern[end] != "'" and not (pattern[end].isascii() and pattern[end].isalpha()):
                end += 1
            tokens.append(("text", pattern[i:end]))
            i = end
    return tokens


def _render_field(field: str, when: datetime) -> str:
    letter = field[0]
    width = len(field)

    if letter == "y":
        if width == 2:
            return f"{when.year % 100:02d}"
        return str(when.year).zfill(width)
    if letter == "M":
        if width >= 4:
            return MONTHS[when.month - 1]
        if width == 3:
            return MONTHS[when.month - 1][:3]
        return str(when.month).zfill(width)
    if letter == "E":
        name = WEEKDAYS[when.weekday()]
        return name if width >= 4 else name[:3]
    if letter == "d":
        return str(when.day).zfill(width)
    if letter == "H":
        return str(when.hour).zfill(width)
    if letter == "k":
        return str(when.hour or 24).zfill(width)
    if letter == "h":
        return str(when.hour % 12 or 12).zfill(width)
    if letter == "K":
        return str(when.hour % 12).zfill(width)
    if letter == "m":
        return str(when.minute).zfill(width)
    if letter == "s":
        return str(when.second).zfill(width)
    if letter == "S":
        return str(when.microsecond // 1000).zfill(width)
    if letter == "a":
        return "AM" if when.hour < 12 else "PM"
    return field


def format_timestamp(pattern: str, when: datetime) -> str:
    """Render *when* according to a letter *pattern*."""
    parts = []
    for kind, value in tokenize(pattern):
        parts.append(_render_field(value, when) if kind == "field" else value)
    return "".join(parts)

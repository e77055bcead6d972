from __future__ import annotations

from enum import Enum

from uta.lrc.export import export_lrc
from uta.ttml.markup import parse_markup
from uta.ttml.pretty import format_markup
from uta.ttml.synth import synthesize


class OutputMode(str, Enum):
    TTML = "ttml"
    LRC = "lrc"

    @property
    def extension(self) -> str:
        return self.value


def convert(raw_markup: str | bytes, artist: str, title: str, mode: OutputMode) -> str:
    """
    Raw TTML -> text ready to be written as a .ttml or .lrc file.

    Raises a ConversionError subclass; there is no partial output.
    """
    doc = parse_markup(raw_markup)
    if mode is OutputMode.TTML:
        return format_markup(doc)
    return export_lrc(synthesize(doc, artist, title))

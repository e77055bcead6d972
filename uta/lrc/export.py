from __future__ import annotations

from uta.ttml.timestamp import format_lrc_time

from .model import LrcDocument


def export_lrc(doc: LrcDocument) -> str:
    out: list[str] = [f"[{k}:{v}]" for k, v in doc.tags]
    for line in doc.lines:
        out.append(f"[{format_lrc_time(line.t_ms)}]{line.text}")
    return "\n".join(out) + ("\n" if out else "")

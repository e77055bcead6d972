from __future__ import annotations

from uta.ttml.markup import (
    COMMENT,
    DOCUMENT_ID,
    ELEMENT,
    INSTRUCTION,
    TEXT,
    MarkupDocument,
    Node,
    XmlDeclaration,
)

INDENT = 2
MAX_LINE_LENGTH = 128
END_PAD = 1

_TEXT_ESCAPES = str.maketrans({"&": "&amp;", "<": "&lt;", ">": "&gt;", "\r": "&#13;"})
_ATTR_ESCAPES = str.maketrans(
    {
        "&": "&amp;",
        "<": "&lt;",
        ">": "&gt;",
        '"': "&quot;",
        "\n": "&#10;",
        "\r": "&#13;",
        "\t": "&#9;",
    }
)


def format_markup(doc: MarkupDocument) -> str:
    """
    Pretty-print a parsed document.

    Elements holding only elements (and indentation) are laid out one child
    per line; anything with other text, even a lone space between spans, is
    written inline byte for byte, so lyric text is never re-indented. Start
    tags longer than MAX_LINE_LENGTH get one attribute per line.
    """
    out: list[str] = []
    if doc.declaration is not None:
        out.append(_declaration(doc.declaration))
    for idx in doc.children(DOCUMENT_ID):
        _write_block(doc, idx, 0, out)
    return "\n".join(out) + "\n" * END_PAD


def _declaration(decl: XmlDeclaration) -> str:
    s = f'<?xml version="{decl.version}"'
    if decl.encoding:
        s += f' encoding="{decl.encoding}"'
    if decl.standalone is not None:
        s += f' standalone="{"yes" if decl.standalone else "no"}"'
    return s + "?>"


def _is_layout(node: Node) -> bool:
    # indentation, as opposed to a significant space between inline elements
    return node.kind == TEXT and not node.value.strip() and "\n" in node.value


def _is_block(doc: MarkupDocument, node: Node) -> bool:
    kids = [doc.node(c) for c in node.children]
    return any(k.kind != TEXT for k in kids) and all(k.kind != TEXT or _is_layout(k) for k in kids)


def _write_block(doc: MarkupDocument, idx: int, depth: int, out: list[str]) -> None:
    node = doc.node(idx)
    pad = " " * (INDENT * depth)
    if node.kind == TEXT:
        # only indentation between block children gets here; the layout replaces it
        return
    if node.kind != ELEMENT:
        out.append(pad + _inline(doc, idx))
        return

    if not node.children:
        out.extend(_start_tag(node, pad, "/>"))
    elif _is_block(doc, node):
        out.extend(_start_tag(node, pad, ">"))
        for c in node.children:
            _write_block(doc, c, depth + 1, out)
        out.append(f"{pad}</{node.name}>")
    else:
        lines = _start_tag(node, pad, ">")
        content = "".join(_inline(doc, c) for c in node.children)
        lines[-1] += f"{content}</{node.name}>"
        out.extend(lines)


def _attr_strings(node: Node) -> list[str]:
    return [f'{k}="{v.translate(_ATTR_ESCAPES)}"' for k, v in node.attrs]


def _start_tag(node: Node, pad: str, end: str) -> list[str]:
    attrs = _attr_strings(node)
    line = f"{pad}<{' '.join([node.name, *attrs])}{end}"
    if len(line) <= MAX_LINE_LENGTH or len(attrs) < 2:
        return [line]
    inner = pad + " " * INDENT
    lines = [f"{pad}<{node.name}"]
    lines.extend(inner + a for a in attrs)
    lines[-1] += end
    return lines


def _inline(doc: MarkupDocument, idx: int) -> str:
    node = doc.node(idx)
    if node.kind == TEXT:
        return node.value.translate(_TEXT_ESCAPES)
    if node.kind == COMMENT:
        return f"<!--{node.value}-->"
    if node.kind == INSTRUCTION:
        return f"<?{node.name} {node.value}?>" if node.value else f"<?{node.name}?>"

    head = " ".join([node.name, *_attr_strings(node)])
    if not node.children:
        return f"<{head}/>"
    inner = "".join(_inline(doc, c) for c in node.children)
    return f"<{head}>{inner}</{node.name}>"

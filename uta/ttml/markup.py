from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator
from xml.parsers import expat

from uta.errors import MalformedMarkup

DOCUMENT = "document"
ELEMENT = "element"
TEXT = "text"
COMMENT = "comment"
INSTRUCTION = "instruction"

DOCUMENT_ID = 0


@dataclass(frozen=True, slots=True)
class Node:
    kind: str
    name: str = ""  # tag for elements, target for processing instructions
    value: str = ""
    attrs: tuple[tuple[str, str], ...] = ()
    parent: int | None = None
    children: tuple[int, ...] = ()


@dataclass(frozen=True, slots=True)
class XmlDeclaration:
    version: str
    encoding: str | None = None
    standalone: bool | None = None


def _tag_matches(name: str, selector: str) -> bool:
    # "tt:body" and "body" both answer to "body"
    return name == selector or name.rpartition(":")[2] == selector


class MarkupDocument:
    """
    Read-only XML tree stored as an arena.

    Node 0 is the document node; every other node keeps the index of its
    parent and the ordered indices of its children. Qualified names and
    xmlns attributes are kept exactly as written.
    """

    __slots__ = ("_nodes", "declaration")

    def __init__(self, nodes: tuple[Node, ...], declaration: XmlDeclaration | None = None):
        self._nodes = nodes
        self.declaration = declaration

    def __len__(self) -> int:
        return len(self._nodes)

    def node(self, idx: int) -> Node:
        return self._nodes[idx]

    @property
    def root(self) -> int:
        for idx in self._nodes[DOCUMENT_ID].children:
            if self._nodes[idx].kind == ELEMENT:
                return idx
        raise MalformedMarkup("Document has no root element")

    def children(self, idx: int) -> tuple[int, ...]:
        return self._nodes[idx].children

    def parent(self, idx: int) -> int | None:
        return self._nodes[idx].parent

    def iter_descendants(self, idx: int) -> Iterator[int]:
        """Pre-order walk below `idx` (document order), `idx` itself excluded."""
        stack = list(reversed(self._nodes[idx].children))
        while stack:
            cur = stack.pop()
            yield cur
            stack.extend(reversed(self._nodes[cur].children))

    def find(self, idx: int, tag: str) -> int | None:
        return next(self._iter_tag(idx, tag), None)

    def find_all(self, idx: int, tag: str) -> list[int]:
        return list(self._iter_tag(idx, tag))

    def _iter_tag(self, idx: int, tag: str) -> Iterator[int]:
        for d in self.iter_descendants(idx):
            n = self._nodes[d]
            if n.kind == ELEMENT and _tag_matches(n.name, tag):
                yield d

    def attr(self, idx: int, name: str) -> str | None:
        for k, v in self._nodes[idx].attrs:
            if k == name:
                return v
        return None

    def text(self, idx: int) -> str | None:
        """Literal text of the first child, None if there is none or it is not text."""
        children = self._nodes[idx].children
        if not children:
            return None
        first = self._nodes[children[0]]
        return first.value if first.kind == TEXT else None


class _TreeBuilder:
    def __init__(self) -> None:
        # kind, name, value, attrs, parent, children
        self._drafts: list[list] = [[DOCUMENT, "", "", (), None, []]]
        self._open: list[int] = [DOCUMENT_ID]
        self.declaration: XmlDeclaration | None = None

    def _append(self, kind: str, name: str = "", value: str = "", attrs: tuple = ()) -> int:
        parent = self._open[-1]
        idx = len(self._drafts)
        self._drafts.append([kind, name, value, attrs, parent, []])
        self._drafts[parent][5].append(idx)
        return idx

    def start(self, name: str, attrs: list[str]) -> None:
        pairs = tuple(zip(attrs[0::2], attrs[1::2]))
        self._open.append(self._append(ELEMENT, name, attrs=pairs))

    def end(self, name: str) -> None:
        self._open.pop()

    def data(self, text: str) -> None:
        parent = self._open[-1]
        if parent == DOCUMENT_ID:
            return
        siblings = self._drafts[parent][5]
        if siblings and self._drafts[siblings[-1]][0] == TEXT:
            self._drafts[siblings[-1]][2] += text
        else:
            self._append(TEXT, value=text)

    def comment(self, text: str) -> None:
        self._append(COMMENT, value=text)

    def instruction(self, target: str, data: str) -> None:
        self._append(INSTRUCTION, target, data)

    def xml_decl(self, version: str | None, encoding: str | None, standalone: int) -> None:
        self.declaration = XmlDeclaration(
            version=version or "1.0",
            encoding=encoding,
            standalone=None if standalone == -1 else bool(standalone),
        )

    def close(self) -> MarkupDocument:
        nodes = tuple(
            Node(kind=k, name=n, value=v, attrs=a, parent=p, children=tuple(c))
            for k, n, v, a, p, c in self._drafts
        )
        return MarkupDocument(nodes, self.declaration)


def parse_markup(text: str | bytes) -> MarkupDocument:
    builder = _TreeBuilder()
    parser = expat.ParserCreate()
    parser.ordered_attributes = True
    parser.buffer_text = True
    parser.StartElementHandler = builder.start
    parser.EndElementHandler = builder.end
    parser.CharacterDataHandler = builder.data
    parser.CommentHandler = builder.comment
    parser.ProcessingInstructionHandler = builder.instruction
    parser.XmlDeclHandler = builder.xml_decl
    try:
        parser.Parse(text, True)
    except (expat.ExpatError, UnicodeError) as e:
        raise MalformedMarkup(f"Invalid markup: {e}") from e
    return builder.close()

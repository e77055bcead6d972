import pytest

from uta.errors import MalformedMarkup
from uta.ttml.markup import COMMENT, DOCUMENT_ID, ELEMENT, TEXT, parse_markup

TTML = (
    '<tt xmlns="http://www.w3.org/ns/ttml" xmlns:ttm="http://www.w3.org/ns/ttml#metadata">'
    '<head><metadata><ttm:agent type="person" xml:id="v1"/></metadata></head>'
    '<body dur="1:00.000"><div begin="1.000">'
    '<p begin="1.000" end="2.000">One &amp; two</p>'
    '<p begin="2.000" end="3.000"><!-- note -->Three</p>'
    "</div></body></tt>"
)


def test_root_and_children():
    doc = parse_markup(TTML)
    root = doc.node(doc.root)
    assert root.kind == ELEMENT
    assert root.name == "tt"
    assert root.parent == DOCUMENT_ID
    assert [doc.node(c).name for c in doc.children(doc.root)] == ["head", "body"]


def test_attributes_keep_namespace_declarations():
    doc = parse_markup(TTML)
    assert doc.attr(doc.root, "xmlns") == "http://www.w3.org/ns/ttml"
    assert doc.attr(doc.root, "missing") is None


def test_find_and_find_all_document_order():
    doc = parse_markup(TTML)
    body = doc.find(DOCUMENT_ID, "body")
    assert body is not None
    ps = doc.find_all(body, "p")
    assert [doc.attr(p, "begin") for p in ps] == ["1.000", "2.000"]
    assert doc.find(body, "span") is None


def test_find_matches_local_name():
    doc = parse_markup(TTML)
    agent = doc.find(doc.root, "agent")
    assert agent is not None
    assert doc.node(agent).name == "ttm:agent"
    assert doc.attr(agent, "xml:id") == "v1"


def test_text_is_first_child_only():
    doc = parse_markup(TTML)
    first, second = doc.find_all(doc.root, "p")
    assert doc.text(first) == "One & two"
    # first child is a comment
    assert doc.node(doc.children(second)[0]).kind == COMMENT
    assert doc.text(second) is None


def test_text_absent():
    doc = parse_markup('<p begin="1.000"/>')
    assert doc.text(doc.root) is None


def test_adjacent_character_data_is_one_text_node():
    doc = parse_markup("<p>a&amp;b<![CDATA[<c>]]>d</p>")
    kids = doc.children(doc.root)
    assert len(kids) == 1
    assert doc.node(kids[0]).kind == TEXT
    assert doc.text(doc.root) == "a&b<c>d"


def test_parents_point_back():
    doc = parse_markup(TTML)
    for idx in doc.iter_descendants(DOCUMENT_ID):
        parent = doc.parent(idx)
        assert parent is not None
        assert idx in doc.children(parent)


def test_declaration_kept():
    doc = parse_markup('<?xml version="1.0" encoding="UTF-8"?><tt/>')
    assert doc.declaration is not None
    assert doc.declaration.version == "1.0"
    assert doc.declaration.encoding == "UTF-8"
    assert doc.declaration.standalone is None


@pytest.mark.parametrize("bad", ["", "<tt>", "<tt></body>", "not xml", "<a/><b/>"])
def test_malformed(bad):
    with pytest.raises(MalformedMarkup):
        parse_markup(bad)


def test_invalid_utf8_bytes():
    with pytest.raises(MalformedMarkup):
        parse_markup(b'<tt><p begin="1.000">\xff\xfe</p></tt>')


def test_lone_surrogate_in_str():
    with pytest.raises(MalformedMarkup):
        parse_markup("<tt>\udcff</tt>")

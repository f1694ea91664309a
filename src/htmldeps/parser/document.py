"""HTML document parsing and serialization.

The tree's own markup serializer does not give us a stable DOCTYPE line, so
the declaration is read from the tree, rendered separately, and prepended to
the serialized markup.
"""

from __future__ import annotations

import re

from bs4 import BeautifulSoup, Doctype, NavigableString, Tag

from ..types import DocumentType

PARSER = "html.parser"

_DOCTYPE_RE = re.compile(
    r"""^\s*(?:doctype\s+)?(?P<name>[^\s>]+)
    (?:\s+PUBLIC\s+(?P<q1>["'])(?P<public>.*?)(?P=q1)
        (?:\s+(?P<q2>["'])(?P<system1>.*?)(?P=q2))?
     |\s+SYSTEM\s+(?P<q3>["'])(?P<system2>.*?)(?P=q3)
    )?\s*$""",
    re.IGNORECASE | re.VERBOSE | re.DOTALL,
)


def parse_html(text: str) -> BeautifulSoup:
    return BeautifulSoup(text, PARSER)


def parse_fragment(markup: str) -> list[Tag | NavigableString]:
    """Parse a markup fragment and detach its top-level nodes."""

    fragment = BeautifulSoup(markup, PARSER)
    return [node.extract() for node in list(fragment.contents)]  # type: ignore[misc]


def _find_doctype_node(doc: BeautifulSoup) -> Doctype | None:
    for node in doc.contents:
        if isinstance(node, Doctype):
            return node
    return None


def get_doctype(doc: BeautifulSoup) -> DocumentType | None:
    node = _find_doctype_node(doc)
    if node is None:
        return None
    m = _DOCTYPE_RE.match(str(node))
    if m is None:
        # unrecognized shape; keep the whole declaration as the name
        return DocumentType(name=str(node).strip())
    return DocumentType(
        name=m.group("name"),
        public_id=m.group("public") or "",
        system_id=m.group("system1") or m.group("system2") or "",
    )


def render_doctype(doctype: DocumentType | None) -> str:
    """Render a DOCTYPE line, collapsing empty fields.

    ``<!DOCTYPE name PUBLIC "pub" "sys">``, ``<!DOCTYPE name SYSTEM "sys">``
    when only the system id is set, ``<!DOCTYPE name>`` when neither is.
    """

    if doctype is None:
        return ""
    parts = [doctype.name]
    if doctype.public_id:
        parts.append(f'PUBLIC "{doctype.public_id}"')
    if doctype.system_id:
        parts.append(f'"{doctype.system_id}"' if doctype.public_id else f'SYSTEM "{doctype.system_id}"')
    return "<!DOCTYPE " + " ".join(parts) + ">"


def serialize_html(doc: BeautifulSoup) -> str:
    dtd = render_doctype(get_doctype(doc))
    body = "".join(str(node) for node in doc.contents if not isinstance(node, Doctype))
    if not dtd:
        return body
    return dtd + "\n" + body.lstrip()


def is_attached(elem: Tag, doc: BeautifulSoup) -> bool:
    """False once an ancestor of ``elem`` has been cleared out of ``doc``."""

    return any(parent is doc for parent in elem.parents)


def set_inner_content(elem: Tag, text: str) -> None:
    """Replace the children of ``elem``.

    ``script`` and ``style`` bodies are raw text; anything else is parsed as
    markup so embedded subtrees (SVG) come back as elements.
    """

    elem.clear()
    if not text:
        return
    if elem.name in ("script", "style"):
        elem.string = text
        return
    for node in parse_fragment(text):
        elem.append(node)


__all__ = [
    "PARSER",
    "get_doctype",
    "is_attached",
    "parse_fragment",
    "parse_html",
    "render_doctype",
    "serialize_html",
    "set_inner_content",
]

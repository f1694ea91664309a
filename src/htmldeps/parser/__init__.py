from __future__ import annotations

__all__ = [
    "DocumentType",
    "InlinedDependencies",
    "InlinedResource",
    "LinkedDependencies",
    "LinkedResource",
    "extract_inlined_deps",
    "extract_linked_deps",
    "get_doctype",
    "parse_html",
    "reinsert_inlined_deps",
    "reinsert_linked_deps",
    "render_doctype",
    "restore_inlined_deps",
    "restore_linked_deps",
    "serialize_html",
]

# Re-export types (explicit alias marks intent for linters)
from ..types import DocumentType as DocumentType
from ..types import InlinedDependencies as InlinedDependencies
from ..types import InlinedResource as InlinedResource
from ..types import LinkedDependencies as LinkedDependencies
from ..types import LinkedResource as LinkedResource

# Re-export primary functions from modular submodules (explicit alias)
from .document import get_doctype as get_doctype
from .document import parse_html as parse_html
from .document import render_doctype as render_doctype
from .document import serialize_html as serialize_html
from .inlined import extract_inlined_deps as extract_inlined_deps
from .inlined import reinsert_inlined_deps as reinsert_inlined_deps
from .inlined import restore_inlined_deps as restore_inlined_deps
from .linked import extract_linked_deps as extract_linked_deps
from .linked import reinsert_linked_deps as reinsert_linked_deps
from .linked import restore_linked_deps as restore_linked_deps

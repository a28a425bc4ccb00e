from __future__ import annotations

from typing import Optional, Union

from lxml import etree, html

from ..errors import DocumentError
from .tree import DocumentTree


def parse_html(markup: Union[str, bytes]) -> html.HtmlElement:
    """Parse a full HTML document; fragments get the usual html/body wrapper."""
    if not markup or not markup.strip():
        raise DocumentError("empty document")
    try:
        return html.document_fromstring(markup)
    except (etree.ParserError, ValueError) as e:
        raise DocumentError(f"could not parse markup: {e}") from e


def load_document(markup: Union[str, bytes], title: Optional[str] = None) -> DocumentTree:
    return DocumentTree(parse_html(markup), title=title)

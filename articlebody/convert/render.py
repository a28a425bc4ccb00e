from __future__ import annotations

from typing import Callable, Dict

from lxml import etree, html
from markdownify import MarkdownConverter

from ..errors import ArticleBodyError


class ArticleMarkdownConverter(MarkdownConverter):
    def convert_pre(self, el, text, parent_tags):  # fenced code blocks
        lang = None
        code_el = el.find("code")
        if code_el is not None:
            for token in code_el.get("class", []) or []:
                if token.startswith("language-"):
                    lang = token.split("-", 1)[-1]
                    break
        body = (text or "").strip("\n")
        return f"\n```{lang or ''}\n{body}\n```\n\n"


def _post_process(md: str) -> str:
    lines = [line.rstrip() for line in md.splitlines()]
    out = "\n".join(lines)
    while "\n\n\n" in out:
        out = out.replace("\n\n\n", "\n\n")
    return out.strip() + "\n"


def to_html(element: html.HtmlElement) -> str:
    # with_tail=False: the text after the element belongs to its parent
    return etree.tostring(element, encoding="unicode", method="html", with_tail=False)


def to_text(element: html.HtmlElement) -> str:
    return " ".join(element.text_content().split()) + "\n"


def to_markdown(element: html.HtmlElement) -> str:
    conv = ArticleMarkdownConverter(bullets="*", escape_asterisks=False, heading_style="ATX")
    return _post_process(conv.convert(to_html(element)))


RENDERERS: Dict[str, Callable[[html.HtmlElement], str]] = {
    "html": to_html,
    "text": to_text,
    "markdown": to_markdown,
}


def render(element: html.HtmlElement, fmt: str = "html") -> str:
    try:
        renderer = RENDERERS[fmt]
    except KeyError:
        raise ArticleBodyError(f"unknown output format {fmt!r}; choose from {', '.join(RENDERERS)}") from None
    return renderer(element)

from __future__ import annotations

import re
from typing import FrozenSet


UNLIKELY_CANDIDATES = re.compile(
    r"-ad-|ai2html|banner|breadcrumbs|combx|comment|community|cover-wrap|disqus|extra|footer|gdpr|header|"
    r"legends|menu|related|remark|replies|rss|shoutbox|sidebar|skyscraper|social|sponsor|supplemental|"
    r"ad-break|agegate|pagination|pager|popup|yom-remote",
    re.IGNORECASE,
)
OK_MAYBE_ITS_A_CANDIDATE = re.compile(r"and|article|body|column|content|main|shadow", re.IGNORECASE)

POSITIVE = re.compile(
    r"article|body|content|entry|hentry|h-entry|main|page|pagination|post|text|blog|story",
    re.IGNORECASE,
)
NEGATIVE = re.compile(
    r"-ad-|hidden|^hid$| hid$| hid |^hid |banner|combx|comment|com-|contact|foot|footer|footnote|gdpr|"
    r"masthead|media|meta|outbrain|promo|related|scroll|share|shoutbox|sidebar|skyscraper|sponsor|"
    r"shopping|tags|tool|widget",
    re.IGNORECASE,
)
BYLINE = re.compile(r"byline|author|dateline|writtenby|p-author", re.IGNORECASE)

NORMALIZE = re.compile(r"\s{2,}")
TOKENIZE = re.compile(r"\W+")
HAS_CONTENT = re.compile(r"\S")
HASH_URL = re.compile(r"^#.+")

UNLIKELY_ROLES: FrozenSet[str] = frozenset(
    {"menu", "menubar", "complementary", "navigation", "alert", "alertdialog", "dialog"}
)

TAGS_TO_SCORE: FrozenSet[str] = frozenset({"h2", "h3", "h4", "h5", "h6", "p", "td", "pre"})
# A div holding any of these is a container, not a paragraph in disguise.
DIV_TO_P_ELEMS: FrozenSet[str] = frozenset({"blockquote", "dl", "div", "img", "ol", "p", "pre", "table", "ul"})
EMPTY_WHEN_TEXTLESS: FrozenSet[str] = frozenset({"div", "section", "header", "h1", "h2", "h3", "h4", "h5", "h6"})
TITLE_HEADINGS: FrozenSet[str] = frozenset({"h1", "h2"})

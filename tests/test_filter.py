from articlebody.config import ExtractionConfig
from articlebody.document.loader import load_document
from articlebody.extract.context import ExtractionFlags, PassContext
from articlebody.extract.filter import (
    Action,
    Decision,
    RelevanceFilter,
    _display_is_none,
    collect_scorable,
    is_element_without_content,
)


TEXT = "Some paragraph text that is long enough to matter."


def _ctx(body, flags=ExtractionFlags.ALL, title=None):
    tree = load_document(f"<html><head><title>Page</title></head><body>{body}</body></html>", title=title)
    return PassContext(tree=tree, flags=flags, config=ExtractionConfig())


def _node(ctx, xpath):
    return ctx.tree.index_of(ctx.tree.element(ctx.tree.root).xpath(xpath)[0])


def _ids(ctx, nodes):
    return [ctx.tree.id(n) for n in nodes]


def test_display_none_parsing():
    assert _display_is_none("display:none")
    assert _display_is_none("color: red; DISPLAY : None !important")
    assert not _display_is_none("display: block")
    assert not _display_is_none("")
    assert not _display_is_none(None)


def test_invisible_subtrees_are_skipped():
    ctx = _ctx(
        f"<div style='display: none'><p id='styled'>{TEXT}</p></div>"
        f"<div hidden><p id='hidden'>{TEXT}</p></div>"
        f"<div aria-hidden='true'><p id='aria'>{TEXT}</p></div>"
        f"<div aria-hidden='true' class='mwe-math-fallback-image-inline'><p id='math'>{TEXT}</p></div>"
        f"<p id='shown'>{TEXT}</p>"
    )
    assert _ids(ctx, collect_scorable(ctx)) == ["math", "shown"]


def test_modal_dialog_is_skipped_even_without_strip_flag():
    ctx = _ctx(
        f"<div aria-modal='true' role='dialog'><p id='modal'>{TEXT}</p></div>"
        f"<div role='dialog'><p id='dialog'>{TEXT}</p></div>",
        flags=ExtractionFlags.NONE,
    )
    assert _ids(ctx, collect_scorable(ctx)) == ["dialog"]


def test_byline_skips_only_the_node():
    ctx = _ctx(
        "<p class='byline' id='by'>By Jane Doe</p>"
        "<div class='author'><p id='inner'>Written for the weekend edition</p></div>"
        f"<p class='author-bio' id='bio'>{TEXT * 3}</p>"
    )
    assert _ids(ctx, collect_scorable(ctx)) == ["inner", "bio"]


def test_rel_and_itemprop_bylines():
    ctx = _ctx("<p rel='author' id='rel'>Jane</p><p itemprop='author name' id='prop'>John</p><p id='body'>x</p>")
    assert _ids(ctx, collect_scorable(ctx)) == ["body"]


def test_title_heading_is_dropped_once():
    ctx = _ctx(
        "<h2 id='first'>Breaking: X Happens</h2><h2 id='second'>Breaking: X Happens</h2><h3 id='other'>Other</h3>",
        title="Breaking: X Happens – Today",
    )
    assert _ids(ctx, collect_scorable(ctx)) == ["second", "other"]


def test_title_heading_check_fires_once_per_filter():
    ctx = _ctx("<h1 id='a'>Breaking: X Happens</h1><h1 id='b'>Breaking: X Happens</h1>", title="Breaking: X Happens – Today")
    f = RelevanceFilter(ctx)
    assert f.decide(_node(ctx, "//h1[@id='a']")) == Decision(Action.SKIP_NODE)
    assert f.decide(_node(ctx, "//h1[@id='b']")) == Decision(Action.DESCEND)
    # a fresh pass gets a fresh check
    assert RelevanceFilter(ctx).decide(_node(ctx, "//h1[@id='b']")) == Decision(Action.SKIP_NODE)


def test_unlikely_candidates_only_while_flag_active():
    body = (
        f"<div class='sidebar'><p id='side'>{TEXT}</p></div>"
        f"<div class='sidebar content'><p id='ok'>{TEXT}</p></div>"
        f"<div role='navigation'><p id='nav'>{TEXT}</p></div>"
        f"<p id='main'>{TEXT}</p>"
    )
    strict = _ctx(body)
    assert _ids(strict, collect_scorable(strict)) == ["ok", "main"]
    relaxed = _ctx(body, flags=ExtractionFlags.ALL & ~ExtractionFlags.STRIP_UNLIKELYS)
    assert _ids(relaxed, collect_scorable(relaxed)) == ["side", "ok", "nav", "main"]


def test_unlikely_inside_table_is_kept():
    ctx = _ctx(f"<table><tr><th><div class='comment' id='c'>{TEXT}</div></th></tr></table>")
    assert _ids(ctx, collect_scorable(ctx)) == ["c"]


def test_empty_structural_nodes():
    ctx = _ctx("<div id='e'><br><br></div><div id='f'></div><section id='s'><hr></section><div id='g'><span></span></div>")
    assert is_element_without_content(ctx.tree, _node(ctx, "//div[@id='e']"))
    assert is_element_without_content(ctx.tree, _node(ctx, "//div[@id='f']"))
    assert is_element_without_content(ctx.tree, _node(ctx, "//section"))
    assert not is_element_without_content(ctx.tree, _node(ctx, "//div[@id='g']"))
    f = RelevanceFilter(ctx)
    assert f.decide(_node(ctx, "//div[@id='e']")) == Decision(Action.SKIP_NODE)
    assert f.decide(_node(ctx, "//div[@id='g']")).action is Action.SCORE


def test_div_normalization():
    ctx = _ctx(
        f"<div id='wrap'><p id='only'>{TEXT}</p></div>"
        "<div id='links'><p id='lp'><a href='/x'>all of this is link text</a></p></div>"
        "<div id='plain'>Just text <b>bold</b></div>"
        "<div id='outer'><div id='inner'>text</div></div>"
        "<div id='mixed'>Intro text<p id='mp'>para</p></div>"
    )
    f = RelevanceFilter(ctx)
    assert f.decide(_node(ctx, "//div[@id='wrap']")) == Decision(Action.SCORE, _node(ctx, "//p[@id='only']"))
    assert f.decide(_node(ctx, "//div[@id='links']")) == Decision(Action.DESCEND)
    assert f.decide(_node(ctx, "//div[@id='plain']")) == Decision(Action.SCORE, _node(ctx, "//div[@id='plain']"))
    assert f.decide(_node(ctx, "//div[@id='outer']")) == Decision(Action.DESCEND)
    assert f.decide(_node(ctx, "//div[@id='mixed']")) == Decision(Action.DESCEND)
    assert _ids(ctx, collect_scorable(ctx)) == ["only", "lp", "plain", "inner", "mp"]


def test_scorable_tags_are_not_walked_into():
    ctx = _ctx(f"<table><tr><td id='cell'><p id='nested'>{TEXT}</p></td></tr></table>")
    assert _ids(ctx, collect_scorable(ctx)) == ["cell"]


def test_unlikely_inside_code_is_kept():
    ctx = _ctx(f"<code><span class='comment'><p id='c'>{TEXT}</p></span></code>")
    assert ctx.is_active(ExtractionFlags.STRIP_UNLIKELYS)
    assert _ids(ctx, collect_scorable(ctx)) == ["c"]


def test_unlikely_links_are_kept():
    ctx = _ctx(f"<a class='sidebar' href='/x'><p id='x'>{TEXT}</p></a>")
    assert _ids(ctx, collect_scorable(ctx)) == ["x"]


def test_unlikely_body_is_kept():
    tree = load_document(f"<html><body class='sidebar'><p id='p'>{TEXT}</p></body></html>")
    ctx = PassContext(tree=tree, flags=ExtractionFlags.ALL, config=ExtractionConfig())
    assert _ids(ctx, collect_scorable(ctx)) == ["p"]


def test_wrapper_div_with_trailing_newline_text_is_not_unwrapped():
    ctx = _ctx(
        f"<div id='intro'>Intro\n<p id='a'>{TEXT}</p></div>"
        f"<div id='tail'><p id='b'>{TEXT}</p>Read more \n</div>"
        f"<div id='blank'>\n  <p id='c'>{TEXT}</p>\n</div>"
    )
    f = RelevanceFilter(ctx)
    assert f.decide(_node(ctx, "//div[@id='intro']")) == Decision(Action.DESCEND)
    assert f.decide(_node(ctx, "//div[@id='tail']")) == Decision(Action.DESCEND)
    assert f.decide(_node(ctx, "//div[@id='blank']")) == Decision(Action.SCORE, _node(ctx, "//p[@id='c']"))

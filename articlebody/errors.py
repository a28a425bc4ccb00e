from __future__ import annotations


class ArticleBodyError(RuntimeError):
    pass


class DocumentError(ArticleBodyError):
    """Markup could not be turned into a document tree."""


class ConfigError(ArticleBodyError, ValueError):
    pass

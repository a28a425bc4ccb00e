from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

from .config import ExtractionConfig
from .convert.render import render
from .document.loader import load_document
from .extract.controller import ExtractionResult, extract
from .utils.io import STDIN, read_source, write_text_file
from .utils.logging import get_logger


@dataclass
class RunConfig:
    source: Union[str, Path] = STDIN
    output: Optional[Path] = None
    format: str = "html"
    title: Optional[str] = None  # overrides the document's <title>
    encoding: Optional[str] = None
    log_level: str = "WARNING"
    extraction: ExtractionConfig = field(default_factory=ExtractionConfig)


@dataclass
class RunOutput:
    result: ExtractionResult
    rendered: str
    path: Optional[Path] = None


def run(cfg: RunConfig) -> RunOutput:
    logger = get_logger()
    source_label = "stdin" if str(cfg.source) == STDIN else str(cfg.source)
    logger.info(f"Source: {source_label}")

    tree = load_document(read_source(cfg.source, cfg.encoding), title=cfg.title)
    result = extract(tree, cfg.extraction)
    if not result.found:
        logger.error(f"No content found after {result.passes} pass(es)")
        raise SystemExit(1)

    how = "fallback" if result.fallback else "threshold met"
    logger.info(
        f"Selected <{tree.tag(result.node)}> with {result.text_length} characters "
        f"after {result.passes} pass(es) ({how})"
    )
    rendered = render(result.element, cfg.format)
    if cfg.output is None:
        return RunOutput(result=result, rendered=rendered)
    written = write_text_file(cfg.output, rendered)
    logger.info(f"Saved: {written.path} ({written.bytes_written} bytes)")
    return RunOutput(result=result, rendered=rendered, path=written.path)

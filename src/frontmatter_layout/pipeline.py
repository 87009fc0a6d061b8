"""Minimal host pipeline: register transforms, run them one document at a time.

Usage::

    from frontmatter_layout import Pipeline, auto_frontmatter_layout

    pipeline = Pipeline().use(auto_frontmatter_layout, {"defaultLayout": "@/layout/post.astro"})
    text = pipeline.process("# Title\\n\\nBody", source="pages/index.md")
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any

from frontmatter_layout.markdown import parse_markdown, stringify
from frontmatter_layout.plugin import Transform
from frontmatter_layout.types import DocumentTree

logger = logging.getLogger(__name__)

PluginFactory = Callable[[Any], Transform]


class Pipeline:
    """Ordered sequence of document transforms.

    Each registered plugin factory is called once with its options; the
    resulting transform is applied to every document passed through
    :meth:`run`. Errors raised by a transform propagate unchanged.
    """

    def __init__(self) -> None:
        self.transforms: list[Transform] = []

    def use(self, plugin: PluginFactory, options: Mapping[str, Any] | None = None) -> Pipeline:
        """Register *plugin* with *options*. Returns the pipeline for chaining."""
        self.transforms.append(plugin(options))
        return self

    def run(self, tree: DocumentTree, source: str | None = None) -> DocumentTree:
        for t in self.transforms:
            logger.debug("Applying %s to %s", getattr(t, "__name__", t), source)
            tree = t(tree, source)
        return tree

    def process(self, text: str, source: str | None = None) -> str:
        """Parse *text*, run every transform and serialize the result."""
        return stringify(self.run(parse_markdown(text), source))

    def process_file(self, path: Path | str, write: bool = False) -> str:
        """Process the markdown file at *path*, using the path as document identity.

        When *write* is true and the output differs from the file contents,
        the file is rewritten. Line endings are read and written untranslated.

        Raises:
            FileNotFoundError: If *path* does not exist.
        """
        path = Path(path)
        with path.open(encoding="utf-8", newline="") as f:
            text = f.read()
        result = self.process(text, source=str(path))

        if write and result != text:
            path.write_text(result, encoding="utf-8", newline="")
            logger.info("Updated %s", path)
        return result

"""Inject a default ``layout`` into markdown frontmatter during a site build.

Two paths to use:

**Transform** — call the transform directly on a parsed tree::

    from frontmatter_layout import LayoutConfig, parse_markdown, stringify, transform

    tree = transform(parse_markdown(text), LayoutConfig())
    text = stringify(tree)

**Pipeline** — register the plugin with its build options::

    from frontmatter_layout import Pipeline, auto_frontmatter_layout

    pipeline = Pipeline().use(
        auto_frontmatter_layout,
        {"defaultLayout": "src/layout/layout.astro", "skipIfHasLayout": True},
    )
    pipeline.process_file("pages/about.md", write=True)
"""

from frontmatter_layout.exceptions import FrontmatterError, ParseError, StructuralError
from frontmatter_layout.markdown import parse_markdown, stringify
from frontmatter_layout.pipeline import Pipeline
from frontmatter_layout.plugin import auto_frontmatter_layout, transform
from frontmatter_layout.types import (
    BlockNode,
    DocumentTree,
    FrontmatterNode,
    LayoutConfig,
)
from frontmatter_layout.validate import validate_document

__all__ = [
    "BlockNode",
    "DocumentTree",
    "FrontmatterError",
    "FrontmatterNode",
    "LayoutConfig",
    "ParseError",
    "Pipeline",
    "StructuralError",
    "auto_frontmatter_layout",
    "parse_markdown",
    "stringify",
    "transform",
    "validate_document",
]

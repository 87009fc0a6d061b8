"""Build-pipeline transform that gives every document a default layout.

Usage::

    from frontmatter_layout import auto_frontmatter_layout, parse_markdown

    plugin = auto_frontmatter_layout({"defaultLayout": "@/layout/layout-markdown.astro"})
    tree = plugin(parse_markdown(text), source="pages/about.md")

The transform is a plain function of ``(tree, config)``. It keeps no state
between calls, so documents can be processed concurrently.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import PurePath
from typing import Any, Protocol

from frontmatter_layout.frontmatter import inject_layout, locate_frontmatter, synthesize_frontmatter
from frontmatter_layout.types import DocumentTree, LayoutConfig

logger = logging.getLogger(__name__)


class Transform(Protocol):
    """A document transform as registered in a pipeline."""

    def __call__(self, tree: DocumentTree, source: str | None = None) -> DocumentTree: ...


def is_excluded(source: str | None, config: LayoutConfig) -> bool:
    """Return whether *source* lies under one of ``config.exclude``.

    Paths are compared lexically; no filesystem access happens.
    """
    if source is None or not config.exclude:
        return False
    path = PurePath(source)
    return any(path.is_relative_to(prefix) for prefix in config.exclude)


def transform(
    tree: DocumentTree,
    config: LayoutConfig,
    source: str | None = None,
) -> DocumentTree:
    """Ensure *tree* declares ``layout`` in its frontmatter.

    Documents without frontmatter get a new block holding only ``layout``.
    Documents with frontmatter have the key added or, when
    ``skip_if_has_layout`` is false, overwritten. The tree is mutated in
    place and returned.

    *source* identifies the document in log records and error messages.

    Raises:
        ParseError: If existing frontmatter is not well-formed YAML.
        StructuralError: If existing frontmatter is not a YAML mapping.
    """
    if is_excluded(source, config):
        logger.debug("Skipping excluded document %s", source)
        return tree

    node = locate_frontmatter(tree)
    if node is None:
        synthesize_frontmatter(tree, config)
        logger.debug("Added frontmatter with layout %r to %s", config.default_layout, source)
    elif inject_layout(node, config, source):
        logger.debug("Set layout %r in %s", config.default_layout, source)
    else:
        logger.debug("Kept existing layout in %s", source)
    return tree


def auto_frontmatter_layout(options: Mapping[str, Any] | LayoutConfig | None = None) -> Transform:
    """Create the layout transform from host pipeline options.

    *options* may be a ``LayoutConfig`` or a mapping using either the
    camelCase option names (``defaultLayout``, ``skipIfHasLayout``) or
    the snake_case field names.

    Raises:
        pydantic.ValidationError: If the options are invalid.
    """
    if isinstance(options, LayoutConfig):
        config = options
    else:
        config = LayoutConfig.model_validate(dict(options or {}))

    def auto_layout(tree: DocumentTree, source: str | None = None) -> DocumentTree:
        return transform(tree, config, source)

    return auto_layout

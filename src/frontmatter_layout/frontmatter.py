"""Locate, create and rewrite the YAML frontmatter of a document tree."""

from __future__ import annotations

from collections.abc import Hashable
from typing import Any

import yaml
from yaml.constructor import ConstructorError

from frontmatter_layout.exceptions import ParseError, StructuralError
from frontmatter_layout.types import BlockNode, DocumentTree, FrontmatterNode, LayoutConfig

LAYOUT_KEY = "layout"


class _UniqueKeyLoader(yaml.SafeLoader):
    """Safe loader that rejects a key repeated within one mapping."""

    def construct_mapping(self, node, deep=False):
        seen = set()
        for key_node, _ in node.value:
            if key_node.tag == "tag:yaml.org,2002:merge":
                continue
            key = self.construct_object(key_node, deep=deep)
            if not isinstance(key, Hashable):
                continue
            if key in seen:
                raise ConstructorError(
                    "while constructing a mapping",
                    node.start_mark,
                    f"found duplicate key {key!r}",
                    key_node.start_mark,
                )
            seen.add(key)
        return super().construct_mapping(node, deep=deep)


def locate_frontmatter(tree: DocumentTree) -> FrontmatterNode | None:
    """Return the tree's frontmatter node, or ``None`` when it has none.

    Frontmatter can only ever be the first child, so nothing past index 0
    is inspected.
    """
    if tree.children and isinstance(tree.children[0], FrontmatterNode):
        return tree.children[0]
    return None


def synthesize_frontmatter(tree: DocumentTree, config: LayoutConfig) -> FrontmatterNode:
    """Insert a new frontmatter node holding only ``layout`` as the first child."""
    newline = "\r\n" if tree.children and "\r\n" in _text_of(tree.children[0]) else "\n"
    node = FrontmatterNode(
        value=dump_metadata({LAYOUT_KEY: config.default_layout}, newline),
        trailing=newline * 2 if tree.children else newline,
        newline=newline,
    )
    tree.children.insert(0, node)
    return node


def _text_of(node: BlockNode) -> str:
    return node.value + node.trailing


def load_metadata(text: str, source: str | None = None) -> dict[str, Any]:
    """Parse frontmatter YAML into a mapping.

    An empty block yields an empty mapping. A key repeated within one
    mapping is an error rather than last-one-wins.

    Raises:
        ParseError: If *text* is not well-formed YAML.
        StructuralError: If the YAML root is not a mapping.
    """
    try:
        metadata = yaml.load(text, Loader=_UniqueKeyLoader)
    except yaml.YAMLError as exc:
        raise ParseError(exc, source) from exc

    if metadata is None:
        return {}
    if not isinstance(metadata, dict):
        raise StructuralError(type(metadata).__name__, source)
    return metadata


def dump_metadata(metadata: dict[str, Any], newline: str = "\n") -> str:
    """Serialize *metadata* as block YAML, keeping key order but not comments or quoting."""
    return yaml.safe_dump(
        metadata,
        line_break=newline,
        sort_keys=False,
        default_flow_style=False,
        allow_unicode=True,
        width=1000,
    )


def has_layout(metadata: dict[str, Any]) -> bool:
    # A null or empty layout declares nothing.
    return bool(metadata.get(LAYOUT_KEY))


def inject_layout(
    node: FrontmatterNode,
    config: LayoutConfig,
    source: str | None = None,
) -> bool:
    """Set ``layout`` in an existing frontmatter node.

    Every other key keeps its value and position; ``layout`` is appended
    when missing and overwritten in place otherwise. When the document
    already declares a layout and ``skip_if_has_layout`` is set, the node
    is left untouched. Parsing happens before any mutation, so the node is
    unchanged when an error is raised.

    Returns ``True`` if the node text was rewritten.

    Raises:
        ParseError: If the node text is not well-formed YAML.
        StructuralError: If the YAML root is not a mapping.
    """
    metadata = load_metadata(node.value, source)

    if has_layout(metadata) and config.skip_if_has_layout:
        return False
    if metadata.get(LAYOUT_KEY) == config.default_layout:
        return False

    metadata[LAYOUT_KEY] = config.default_layout
    node.value = dump_metadata(metadata, node.newline)
    return True

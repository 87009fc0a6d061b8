"""Block-level markdown reader and writer.

Splits a document into an optional YAML frontmatter block followed by
verbatim body blocks separated on blank lines. The body is never
interpreted, so ``stringify(parse_markdown(text)) == text`` for any input.
"""

from __future__ import annotations

import re

from frontmatter_layout.types import BlockNode, DocumentTree, FrontmatterNode, Node

FENCE = "---"
BOM = "\ufeff"

_FRONTMATTER_PATTERN = re.compile(
    r"\A---(?P<newline>\r?\n)(?P<value>.*?)^---(?=\r?$)", re.DOTALL | re.MULTILINE
)
_LEADING_BLANK_LINES = re.compile(r"(?:[ \t]*\r?\n)*")
_BLANK_LINE_RUN = re.compile(r"(\r?\n(?:[ \t]*\r?\n)+)")


def parse_markdown(text: str) -> DocumentTree:
    """Parse *text* into a document tree.

    Only a block opened by a ``---`` line at the very start of the text and
    closed by a later ``---`` line is frontmatter. Any further ``---``
    blocks stay in the body. LF and CRLF line endings are both recognised
    and kept as found; a leading byte order mark is set aside on the tree.
    """
    children: list[Node] = []
    bom = text.startswith(BOM)
    body = text[len(BOM) :] if bom else text

    match = _FRONTMATTER_PATTERN.match(body)
    if match:
        body = body[match.end() :]
        trailing = _LEADING_BLANK_LINES.match(body).group(0)
        body = body[len(trailing) :]
        children.append(
            FrontmatterNode(
                value=match.group("value"),
                trailing=trailing,
                newline=match.group("newline"),
            )
        )

    children.extend(_split_blocks(body))
    return DocumentTree(children=children, bom=bom)


def _split_blocks(text: str) -> list[BlockNode]:
    if not text:
        return []

    parts = _BLANK_LINE_RUN.split(text)
    values = parts[0::2]
    separators = parts[1::2] + [""]
    return [BlockNode(value=v, trailing=s) for v, s in zip(values, separators) if v or s]


def stringify(tree: DocumentTree) -> str:
    """Serialize *tree* back to markdown text."""
    out: list[str] = [BOM] if tree.bom else []
    for child in tree.children:
        if isinstance(child, FrontmatterNode):
            value = child.value
            if value and not value.endswith("\n"):
                value += child.newline
            out.append(f"{FENCE}{child.newline}{value}{FENCE}{child.trailing}")
        else:
            out.append(child.value + child.trailing)
    return "".join(out)

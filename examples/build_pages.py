"""Add a default layout to every markdown page under a directory.

Pages under ``content/`` keep whatever layout they declare themselves; every
other page gets ``@/layout/layout-markdown.astro`` unless it already names
one. Pass ``--write`` to update files in place.
"""

import logging
import sys
from pathlib import Path

from frontmatter_layout import FrontmatterError, Pipeline, auto_frontmatter_layout

pipeline = Pipeline().use(
    auto_frontmatter_layout,
    {"defaultLayout": "@/layout/layout-markdown.astro", "exclude": ["content"]},
)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    write = "--write" in sys.argv[1:]

    failed = 0
    for path in sorted(Path(".").rglob("*.md")):
        try:
            pipeline.process_file(path, write=write)
        except FrontmatterError as exc:
            print(exc, file=sys.stderr)
            failed += 1

    sys.exit(1 if failed else 0)

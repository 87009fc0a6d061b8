"""Tests for the layout transform and its plugin factory."""

import copy
import logging

import pytest
import yaml
from pydantic import ValidationError

from frontmatter_layout.exceptions import ParseError, StructuralError
from frontmatter_layout.markdown import parse_markdown, stringify
from frontmatter_layout.plugin import auto_frontmatter_layout, is_excluded, transform
from frontmatter_layout.types import LayoutConfig


def _run(text, config=None, source=None):
    return stringify(transform(parse_markdown(text), config or LayoutConfig(), source))


def _frontmatter(text):
    return yaml.safe_load(parse_markdown(text).children[0].value)


class TestTransformScenarios:
    def test_adds_frontmatter_to_plain_document(self):
        result = _run("# Title\n\nBody")

        assert result == "---\nlayout: src/layout/layout.astro\n---\n\n# Title\n\nBody"

    def test_adds_layout_to_existing_frontmatter(self):
        result = _run("---\ntitle: My Page\n---\n# Title")

        assert result == "---\ntitle: My Page\nlayout: src/layout/layout.astro\n---\n# Title"

    def test_keeps_declared_layout_by_default(self):
        text = "---\nlayout: custom.astro\n---\n# Title"

        assert _run(text) == text

    def test_overwrites_declared_layout_when_not_skipping(self):
        config = LayoutConfig(default_layout="other.astro", skip_if_has_layout=False)

        result = _run("---\nlayout: custom.astro\n---\n# Title", config)

        assert result == "---\nlayout: other.astro\n---\n# Title"

    @pytest.mark.parametrize(
        "text",
        [
            "---\n: : :\n---\n# Title",
            "---\ntitle: [unclosed\n---\n# Title",
            "---\ntitle: First\ntitle: Second\n---\n# Title",
        ],
    )
    def test_raises_on_malformed_frontmatter_and_leaves_tree_alone(self, text):
        tree = parse_markdown(text)
        before = copy.deepcopy(tree)

        with pytest.raises(ParseError):
            transform(tree, LayoutConfig())

        assert tree == before
        assert stringify(tree) == text

    def test_duplicate_key_error_names_key_and_source(self):
        tree = parse_markdown("---\ntitle: First\ntitle: Second\n---\n# Title")

        with pytest.raises(ParseError, match="duplicate key 'title'") as exc_info:
            transform(tree, LayoutConfig(), source="pages/dup.md")

        assert exc_info.value.source == "pages/dup.md"

    def test_raises_on_non_mapping_frontmatter(self):
        tree = parse_markdown("---\n- a\n- b\n---\n# Title")

        with pytest.raises(StructuralError, match="pages/list.md"):
            transform(tree, LayoutConfig(), source="pages/list.md")

    def test_empty_document_gets_frontmatter(self):
        assert _run("") == "---\nlayout: src/layout/layout.astro\n---\n"

    def test_keeps_declared_layout_in_crlf_document(self):
        text = "---\r\ntitle: T\r\nlayout: custom.astro\r\n---\r\n# Title\r\n"

        assert _run(text) == text

    def test_adds_layout_to_crlf_frontmatter_with_crlf(self):
        result = _run("---\r\ntitle: T\r\n---\r\n# Title\r\n")

        assert result == "---\r\ntitle: T\r\nlayout: src/layout/layout.astro\r\n---\r\n# Title\r\n"

    def test_overwrites_layout_in_crlf_document(self):
        config = LayoutConfig(default_layout="other.astro", skip_if_has_layout=False)

        result = _run("---\r\nlayout: custom.astro\r\n---\r\n# Title\r\n", config)

        assert result == "---\r\nlayout: other.astro\r\n---\r\n# Title\r\n"

    def test_adds_crlf_frontmatter_to_plain_crlf_document(self):
        result = _run("# Title\r\n\r\nBody\r\n")

        assert result == "---\r\nlayout: src/layout/layout.astro\r\n---\r\n\r\n# Title\r\n\r\nBody\r\n"

    def test_keeps_byte_order_mark_ahead_of_frontmatter(self):
        result = _run("\ufeff---\ntitle: T\n---\n# Title")

        assert result == "\ufeff---\ntitle: T\nlayout: src/layout/layout.astro\n---\n# Title"

    def test_byte_order_mark_stays_first_when_frontmatter_is_added(self):
        assert _run("\ufeff# Title").startswith("\ufeff---\nlayout:")


class TestTransformProperties:
    DOCUMENTS = [
        "",
        "# Title\n\nBody\n",
        "---\n---\n# Empty frontmatter\n",
        "---\ntitle: My Page\ndate: 2024-01-24\ntags:\n  - a\n---\n# Title\n",
        "---\nlayout: custom.astro\ntitle: T\n---\n\nBody",
        "---\nlayout:\n---\nBody",
    ]
    CONFIGS = [
        LayoutConfig(),
        LayoutConfig(default_layout="other.astro", skip_if_has_layout=False),
    ]

    @pytest.mark.parametrize("config", CONFIGS)
    @pytest.mark.parametrize("text", DOCUMENTS)
    def test_is_idempotent(self, text, config):
        once = _run(text, config)

        assert _run(once, config) == once

    @pytest.mark.parametrize("text", DOCUMENTS)
    def test_result_always_declares_a_layout(self, text):
        assert _frontmatter(_run(text)).get("layout")

    def test_existing_keys_keep_values_and_order(self):
        text = "---\ntitle: My Page\ndescription: About\norder: 3\n---\n# Title\n"

        metadata = _frontmatter(_run(text))

        assert list(metadata) == ["title", "description", "order", "layout"]
        assert metadata["order"] == 3

    def test_body_is_untouched(self):
        body = "# Title\n\n---\nnot: frontmatter\n---\n\nText\n"

        result = _run("---\ntitle: T\n---\n" + body)

        assert result.endswith("---\n" + body)

    def test_returns_same_tree_object(self):
        tree = parse_markdown("# Title")

        assert transform(tree, LayoutConfig()) is tree


class TestExclusion:
    def test_excluded_source_is_left_alone(self):
        config = LayoutConfig(exclude=("content",))

        assert _run("# Title", config, source="content/posts/a.md") == "# Title"

    def test_other_sources_are_transformed(self):
        config = LayoutConfig(exclude=("content",))

        assert _run("# Title", config, source="src/pages/a.md").startswith("---\nlayout:")

    def test_prefix_must_match_whole_path_segments(self):
        config = LayoutConfig(exclude=("content",))

        assert is_excluded("contents/a.md", config) is False
        assert is_excluded("content/a.md", config) is True

    def test_no_source_is_never_excluded(self):
        assert is_excluded(None, LayoutConfig(exclude=("content",))) is False


class TestLogging:
    def test_logs_branch_with_source(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="frontmatter_layout"):
            _run("# Title", source="pages/a.md")

        assert "Added frontmatter" in caplog.text
        assert "pages/a.md" in caplog.text

    def test_logs_kept_layout(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="frontmatter_layout"):
            _run("---\nlayout: a.astro\n---\n", source="pages/b.md")

        assert "Kept existing layout in pages/b.md" in caplog.text


class TestAutoFrontmatterLayout:
    def test_accepts_camel_case_options(self):
        plugin = auto_frontmatter_layout({"defaultLayout": "@/layout/post.astro", "skipIfHasLayout": False})

        tree = plugin(parse_markdown("---\nlayout: x.astro\n---\n"))

        assert yaml.safe_load(tree.children[0].value) == {"layout": "@/layout/post.astro"}

    def test_defaults_without_options(self):
        plugin = auto_frontmatter_layout()

        tree = plugin(parse_markdown("# Title"))

        assert yaml.safe_load(tree.children[0].value) == {"layout": "src/layout/layout.astro"}

    def test_accepts_config_instance(self):
        plugin = auto_frontmatter_layout(LayoutConfig(default_layout="a.astro"))

        tree = plugin(parse_markdown("# Title"), "pages/a.md")

        assert yaml.safe_load(tree.children[0].value) == {"layout": "a.astro"}

    def test_rejects_unknown_option(self):
        with pytest.raises(ValidationError):
            auto_frontmatter_layout({"defaultLayuot": "typo.astro"})

    def test_propagates_errors_with_source(self):
        plugin = auto_frontmatter_layout()

        with pytest.raises(ParseError, match="pages/broken.md"):
            plugin(parse_markdown("---\ntitle: [unclosed\n---\n"), "pages/broken.md")

    def test_transform_takes_source_by_keyword(self):
        plugin = auto_frontmatter_layout()

        with pytest.raises(ParseError, match="pages/kw.md"):
            plugin(tree=parse_markdown("---\na: 1\na: 2\n---\n"), source="pages/kw.md")

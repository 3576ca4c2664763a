"""
Shared pytest fixtures for the arbor test suite.

Grammar-backed fixtures load the JSON grammar from
tree-sitter-language-pack; tests using them are skipped when the pack is
not installed.

Usage in tests:
    def test_something(json_tree):
        assert json_tree.root.type == "document"
"""

import pytest

try:
    import tree_sitter_language_pack  # noqa: F401
    LANGUAGE_PACK_AVAILABLE = True
except ImportError:
    LANGUAGE_PACK_AVAILABLE = False


SAMPLE_JSON = '[1, null]'

NESTED_JSON = '{"name": "arbor", "tags": ["a", "b"], "meta": {"depth": 3, "ok": true}}'


@pytest.fixture
def registry():
    """Fresh registry with the built-in language specs."""
    from arbor.languages import default_registry
    return default_registry()


@pytest.fixture
def json_grammar(registry):
    """JSON Grammar loaded from the language pack."""
    if not LANGUAGE_PACK_AVAILABLE:
        pytest.skip("tree-sitter-language-pack not installed")
    return registry.grammar("json")


@pytest.fixture
def json_parser(json_grammar):
    """Parser bound to the JSON grammar, closed after the test."""
    from arbor import Parser
    with Parser(json_grammar) as parser:
        yield parser


@pytest.fixture
def json_tree(json_parser):
    """Tree for SAMPLE_JSON, closed after the test."""
    with json_parser.parse(SAMPLE_JSON) as tree:
        yield tree


@pytest.fixture
def nested_tree(json_parser):
    """Tree for NESTED_JSON, closed after the test."""
    with json_parser.parse(NESTED_JSON) as tree:
        yield tree

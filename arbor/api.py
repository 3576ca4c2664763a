"""
Convenience entry points that wire config, registry and Parser together.

Usage:
    from arbor import parse

    with parse('[1, null]', language="json") as tree:
        print(tree.root.string_expression())
"""

from typing import Optional, Union

from .config import Config, get_config
from .core.parser import Parser
from .core.tree import Tree
from .languages import GrammarRegistry, default_registry

_default_registry: Optional[GrammarRegistry] = None


def _registry() -> GrammarRegistry:
    global _default_registry
    if _default_registry is None:
        _default_registry = default_registry()
    return _default_registry


def open_parser(
    language: Optional[str] = None,
    config: Optional[Config] = None,
    registry: Optional[GrammarRegistry] = None,
) -> Parser:
    """
    Create a Parser for a registered language.

    Args:
        language: Registered language name; defaults to config's default_language
        config: Settings to apply (loaded from config files when omitted)
        registry: Grammar provider (the shared built-in registry when omitted)

    Raises:
        UnknownGrammarError: If the language is not registered
        GrammarUnavailableError: If the grammar cannot be loaded
        IncompatibleGrammarError: If strict_version and the grammar ABI is unsupported
    """
    if config is None:
        config = get_config()
    if registry is None:
        registry = _registry()
    grammar = registry.grammar(language or config.parse.default_language)
    return Parser(
        grammar,
        max_source_bytes=config.parse.max_source_bytes,
        strict_version=config.parse.strict_version,
    )


def parse(
    source: Union[str, bytes],
    language: Optional[str] = None,
    config: Optional[Config] = None,
    registry: Optional[GrammarRegistry] = None,
) -> Tree:
    """Parse source in one call. The temporary Parser is closed before returning."""
    with open_parser(language, config, registry) as parser:
        return parser.parse(source)

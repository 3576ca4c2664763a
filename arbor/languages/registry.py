"""
Grammar Registry — Routes language names and file paths to Grammars.

Central registry that maps file extensions to LanguageSpec instances and
loads the matching tree-sitter grammar on first use. Grammars come from
tree-sitter-language-pack; adding a language is a matter of registering
a spec, not changing code.

Usage:
    registry = GrammarRegistry()
    registry.register(JSON_SPEC)
    registry.register(PYTHON_SPEC)

    grammar = registry.grammar("json")
    grammar = registry.grammar_for_path(Path("src/app.py"))
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Set

from ..core.grammar import Grammar
from ..errors import GrammarUnavailableError, UnknownGrammarError

logger = logging.getLogger(__name__)

# Lazy import for the language pack so specs can be registered without it
_language_pack_available = None


def _check_language_pack() -> bool:
    """Check if tree-sitter-language-pack is available."""
    global _language_pack_available
    if _language_pack_available is None:
        try:
            import tree_sitter_language_pack  # noqa: F401
            _language_pack_available = True
        except ImportError:
            _language_pack_available = False
    return _language_pack_available


@dataclass
class LanguageSpec:
    """
    Identity of a language for grammar lookup.

    Attributes:
        name: Registry key (e.g., "json", "python")
        tree_sitter_name: Grammar name in the language pack (e.g., "tsx")
        extensions: File extensions this language handles (e.g., {'.py'})
    """
    name: str
    tree_sitter_name: str
    extensions: Set[str] = field(default_factory=set)

    def matches_extension(self, ext: str) -> bool:
        """Check if this spec handles the given extension."""
        return ext.lower() in {e.lower() for e in self.extensions}


class GrammarRegistry:
    """
    Registry of language specs with a cache of loaded Grammars.

    Grammars are loaded lazily and live for the registry's lifetime;
    the engine languages behind them are never released.
    """

    def __init__(self):
        """Initialize empty registry."""
        self._specs: Dict[str, LanguageSpec] = {}  # name -> spec
        self._extension_map: Dict[str, str] = {}  # ext -> spec name
        self._grammars: Dict[str, Grammar] = {}  # name -> loaded grammar

    def register(self, spec: LanguageSpec) -> None:
        """
        Register a language spec.

        Args:
            spec: LanguageSpec to register

        Raises:
            ValueError: If extension already registered to a different spec
        """
        for ext in spec.extensions:
            ext_lower = ext.lower()
            existing = self._extension_map.get(ext_lower)
            if existing is not None and existing != spec.name:
                raise ValueError(
                    f"Extension {ext} already registered to {existing}, "
                    f"cannot register to {spec.name}"
                )

        previous = self._specs.get(spec.name)
        if previous is not None:
            self._drop_extensions(previous)
            self._grammars.pop(spec.name, None)

        self._specs[spec.name] = spec
        for ext in spec.extensions:
            self._extension_map[ext.lower()] = spec.name

    def unregister(self, name: str) -> bool:
        """
        Unregister a language spec by name.

        Returns:
            True if unregistered, False if not found
        """
        spec = self._specs.pop(name, None)
        if spec is None:
            return False
        self._drop_extensions(spec)
        self._grammars.pop(name, None)
        return True

    def _drop_extensions(self, spec: LanguageSpec) -> None:
        for ext in spec.extensions:
            ext_lower = ext.lower()
            if self._extension_map.get(ext_lower) == spec.name:
                del self._extension_map[ext_lower]

    def get_spec(self, file_path: Path) -> Optional[LanguageSpec]:
        """Get the spec for a file based on its extension, or None."""
        name = self._extension_map.get(Path(file_path).suffix.lower())
        return self._specs.get(name) if name else None

    def get_spec_by_name(self, name: str) -> Optional[LanguageSpec]:
        return self._specs.get(name)

    def grammar(self, name: str) -> Grammar:
        """
        Get the Grammar for a registered language, loading it on first use.

        Args:
            name: Registered language name (e.g., "json")

        Raises:
            UnknownGrammarError: If name is not registered
            GrammarUnavailableError: If the language pack is missing or
                cannot provide the grammar
        """
        cached = self._grammars.get(name)
        if cached is not None:
            return cached

        spec = self._specs.get(name)
        if spec is None:
            raise UnknownGrammarError(name, self._specs.keys())

        if not _check_language_pack():
            raise GrammarUnavailableError(
                "tree-sitter-language-pack is not installed; "
                "install arbor[languages] to load grammars"
            )

        from tree_sitter_language_pack import get_language
        try:
            raw = get_language(spec.tree_sitter_name)
        except Exception as e:
            raise GrammarUnavailableError(
                f"Language pack has no grammar '{spec.tree_sitter_name}'"
            ) from e

        grammar = Grammar(raw, name=spec.name)
        logger.debug("Loaded %r (ABI %d, %d symbols)", grammar.name, grammar.version, grammar.symbol_count)
        self._grammars[name] = grammar
        return grammar

    def grammar_for_path(self, file_path: Path) -> Optional[Grammar]:
        """Get the Grammar for a file's extension, or None if unsupported."""
        spec = self.get_spec(file_path)
        return self.grammar(spec.name) if spec else None

    def supported_extensions(self) -> Set[str]:
        return set(self._extension_map.keys())

    def supported_languages(self) -> List[str]:
        return list(self._specs.keys())

    def is_supported(self, file_path: Path) -> bool:
        return Path(file_path).suffix.lower() in self._extension_map

    def is_available(self) -> bool:
        """Check if grammars can be loaded at all."""
        return _check_language_pack()

    def __len__(self) -> int:
        return len(self._specs)

    def __contains__(self, name: str) -> bool:
        return name in self._specs

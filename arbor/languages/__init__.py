"""
Built-in language specs.

Each spec names a grammar in tree-sitter-language-pack and the file
extensions routed to it:
- json: JSON (.json)
- python: Python (.py, .pyi)
- javascript: JavaScript (.js, .jsx, .mjs, .cjs)
- typescript: TypeScript (.ts); tsx: TSX (.tsx)
- html: HTML (.html, .htm)
- css: CSS (.css)
"""

from .registry import GrammarRegistry, LanguageSpec

JSON_SPEC = LanguageSpec(name="json", tree_sitter_name="json", extensions={'.json'})
PYTHON_SPEC = LanguageSpec(name="python", tree_sitter_name="python", extensions={'.py', '.pyi'})
JAVASCRIPT_SPEC = LanguageSpec(
    name="javascript",
    tree_sitter_name="javascript",
    extensions={'.js', '.jsx', '.mjs', '.cjs'},
)
TYPESCRIPT_SPEC = LanguageSpec(name="typescript", tree_sitter_name="typescript", extensions={'.ts'})
TSX_SPEC = LanguageSpec(name="tsx", tree_sitter_name="tsx", extensions={'.tsx'})
HTML_SPEC = LanguageSpec(name="html", tree_sitter_name="html", extensions={'.html', '.htm'})
CSS_SPEC = LanguageSpec(name="css", tree_sitter_name="css", extensions={'.css'})

BUILTIN_SPECS = (
    JSON_SPEC,
    PYTHON_SPEC,
    JAVASCRIPT_SPEC,
    TYPESCRIPT_SPEC,
    TSX_SPEC,
    HTML_SPEC,
    CSS_SPEC,
)


def default_registry() -> GrammarRegistry:
    """Create a fresh registry holding every built-in spec."""
    registry = GrammarRegistry()
    for spec in BUILTIN_SPECS:
        registry.register(spec)
    return registry


__all__ = [
    'GrammarRegistry',
    'LanguageSpec',
    'JSON_SPEC',
    'PYTHON_SPEC',
    'JAVASCRIPT_SPEC',
    'TYPESCRIPT_SPEC',
    'TSX_SPEC',
    'HTML_SPEC',
    'CSS_SPEC',
    'BUILTIN_SPECS',
    'default_registry',
]

"""
arbor — Typed, resource-safe syntax trees over tree-sitter.

This package provides the object model on top of the tree-sitter engine:
- Grammar: a language's symbol table and ABI version
- Parser: parses buffers into Trees for one Grammar
- Tree: exclusive owner of a parse result
- Node: non-owning, null-propagating view into a Tree
- Cursor: efficient depth-first walker

Design principle: absent data is a null Node, not an exception; released
resources are refused loudly.

Usage:
    from arbor import open_parser

    with open_parser("json") as parser, parser.parse('[1, null]') as tree:
        array = tree.root.named_child(0)
        array.type                  # "array"
        array.named_child_count     # 2
        tree.root.string_expression()
        # "(document (array (number) (null)))"
"""

import logging

from .api import open_parser, parse
from .config import Config, ConfigManager, ParseConfig, get_config
from .core import Cursor, Extent, Grammar, Node, Parser, Point, Tree, iter_nodes
from .errors import (
    ArborError,
    CursorClosedError,
    GrammarUnavailableError,
    IncompatibleGrammarError,
    InvalidSymbolError,
    ParseError,
    ParserClosedError,
    ResourceClosedError,
    SourceTooLargeError,
    TreeClosedError,
    UnknownGrammarError,
)
from .languages import GrammarRegistry, LanguageSpec, default_registry

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    'open_parser',
    'parse',
    'Config',
    'ConfigManager',
    'ParseConfig',
    'get_config',
    'Cursor',
    'Extent',
    'Grammar',
    'Node',
    'Parser',
    'Point',
    'Tree',
    'iter_nodes',
    'GrammarRegistry',
    'LanguageSpec',
    'default_registry',
    'ArborError',
    'CursorClosedError',
    'GrammarUnavailableError',
    'IncompatibleGrammarError',
    'InvalidSymbolError',
    'ParseError',
    'ParserClosedError',
    'ResourceClosedError',
    'SourceTooLargeError',
    'TreeClosedError',
    'UnknownGrammarError',
]

"""
lolmark - LOLCODE-flavoured markup to HTML compiler

Tokenizer, classifier, parser/scope analyzer and HTML code generator.
"""

__version__ = "1.0.0"

from .tokenizer import Tokenizer, TokenStream
from .vocabulary import classify, matches, recognized
from .parser import Parser
from .compiler import Compiler, source_compile
from .errors import CompileError, LexicalError, GrammarError, SemanticError
from .log import LOG, state_connectToLogger

__all__ = [
    "Tokenizer",
    "TokenStream",
    "classify",
    "matches",
    "recognized",
    "Parser",
    "Compiler",
    "source_compile",
    "CompileError",
    "LexicalError",
    "GrammarError",
    "SemanticError",
    "LOG",
    "state_connectToLogger",
    "__version__",
]

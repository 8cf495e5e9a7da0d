"""
lolmark - LOLCODE-flavoured markup to HTML compiler

Checks a #hai ... #kthxbye document and emits an equivalent HTML page.
"""

__version__ = "1.0.0"

from .lib import (
    Tokenizer,
    Parser,
    Compiler,
    source_compile,
    CompileError,
    LOG,
    state_connectToLogger,
)

__all__ = [
    "Tokenizer",
    "Parser",
    "Compiler",
    "source_compile",
    "CompileError",
    "LOG",
    "state_connectToLogger",
    "__version__",
]

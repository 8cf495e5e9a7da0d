"""
Compilation errors

Every violation the front end can detect is fatal. The core raises one of
the exceptions below on the first violation; the CLI stage that called it
decides how to exit.
"""

from typing import Optional


class CompileError(Exception):
    """Base class for lexical, syntax and semantic errors"""

    kind: str = "Compile"

    def __init__(self, message: str, line: Optional[int] = None) -> None:
        self.message = message
        self.line = line
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.line is None:
            return f"{self.kind} error: {self.message}"
        return f"{self.kind} error on line {self.line}: {self.message}"


class LexicalError(CompileError):
    """Raised when a lexeme matches no token category"""
    kind = "Lexical"


class GrammarError(CompileError):
    """Raised on a wrong token category, premature end of input, or trailing tokens"""
    kind = "Syntax"


class SemanticError(CompileError):
    """Raised on a duplicate declaration in one frame or a use with no declaration"""
    kind = "Semantic"

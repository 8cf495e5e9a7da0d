"""
Tokenizer for lolmark source text

Splits raw source into (lexeme, line) tokens on whitespace boundaries and
provides the TokenStream cursor both the parser and the compiler consume.

Tokens are never split or merged by content. Whether a lexeme is legal is
decided later, when a consumer takes it off the stream.

Example:
    >>> tokens = Tokenizer("#hai\\n  hello world\\n#kthxbye").tokenize()
    >>> [(t.lexeme, t.line) for t in tokens]
    [('#hai', 1), ('hello', 2), ('world', 2), ('#kthxbye', 3)]
"""

from collections import deque
from typing import Deque, Iterable, List, Optional

from ..models.tokens import Token
from .log import LOG


class Tokenizer:
    """
    Character scanner producing tokens in source order

    Attributes:
        source: Raw source text
        position: Current character position
        line_number: Current line (incremented on each newline)
        current_build: Characters of the token under construction
        tokens: Tokens produced so far
    """

    def __init__(self, source: str) -> None:
        self.source = source
        self.position = 0
        self.line_number = 1
        self.current_build: List[str] = []
        self.build_line = 1
        self.tokens: List[Token] = []

    def tokenize(self) -> List[Token]:
        """
        Scan the whole source

        Whitespace closes the token being built; a newline also advances the
        line counter. Any open token is flushed at end of input.

        Returns:
            Tokens in source order (empty list for blank source)
        """
        while self.position < len(self.source):
            char = self.source[self.position]
            self.position += 1

            if char.isspace():
                self.token_flush()
                if char == '\n':
                    self.line_number += 1
            else:
                if not self.current_build:
                    self.build_line = self.line_number
                self.current_build.append(char)

        self.token_flush()
        LOG(f"Tokenized {len(self.tokens)} lexemes over {self.line_number} lines", level=2)
        return self.tokens

    def token_flush(self) -> None:
        """Push the token under construction, if any"""
        if self.current_build:
            self.tokens.append(Token(''.join(self.current_build), self.build_line))
            self.current_build = []


class TokenStream:
    """
    Forward cursor over a private copy of a token sequence

    Each consumer (parser, compiler) builds its own stream, so consuming
    tokens in one traversal never affects another.
    """

    def __init__(self, tokens: Iterable[Token]) -> None:
        self.queue: Deque[Token] = deque(tokens)
        self.consumed = 0
        self.last_line = 1

    def peek(self) -> Optional[Token]:
        """Current token, or None at end of input"""
        return self.queue[0] if self.queue else None

    def advance(self) -> Optional[Token]:
        """Remove and return the current token, or None at end of input"""
        if not self.queue:
            return None
        token = self.queue.popleft()
        self.consumed += 1
        self.last_line = token.line
        return token

    def at_end(self) -> bool:
        return not self.queue

    def remaining(self) -> int:
        return len(self.queue)

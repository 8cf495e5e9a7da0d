"""
Token data models

Defines the Token record produced by the tokenizer and the closed set of
syntactic categories a lexeme can be classified into.
"""

from enum import Enum
from dataclasses import dataclass


@dataclass(frozen=True)
class Token:
    """
    A single lexeme and the source line it started on

    Attributes:
        lexeme: Maximal run of non-whitespace characters (e.g., "#hai", "hello")
        line: 1-based source line number (for error reporting)

    Example:
        For source "#hai\\n#kthxbye":
        [Token(lexeme="#hai", line=1), Token(lexeme="#kthxbye", line=2)]
    """
    lexeme: str
    line: int


class TokenCategory(Enum):
    """
    Syntactic categories of lexemes

    Tag markers start with '#'; element keywords and marker words are bare;
    TEXT, ADDRESS and IDENTIFIER are validated by regular expression.
    """
    # Tag markers
    DOCUMENT_START = "#hai"
    DOCUMENT_END = "#kthxbye"
    COMMENT_START = "#obtw"
    COMMENT_END = "#tldr"
    BLOCK_START = "#maek"
    BLOCK_END = "#oic"
    ELEMENT_START = "#gimmeh"
    ELEMENT_END = "#mkay"
    VARIABLE_DECLARE_START = "#i"
    VARIABLE_DECLARE_MID = "#it"
    VARIABLE_USE_START = "#lemme"

    # Marker words completing the variable tags (#i haz, #it iz, #lemme see)
    HAZ = "haz"
    IZ = "iz"
    SEE = "see"

    # Element keywords
    HEAD = "head"
    TITLE = "title"
    PARAGRAPH = "paragraf"
    BOLD = "bold"
    ITALICS = "italics"
    LIST = "list"
    ITEM = "item"
    NEWLINE = "newline"
    SOUNDZ = "soundz"
    VIDZ = "vidz"

    # Regex-validated classes
    TEXT = "<text>"
    ADDRESS = "<address>"
    IDENTIFIER = "<identifier>"

    def describe(self) -> str:
        """Human-readable form used in error messages"""
        if self.value.startswith('<'):
            return self.name.lower()
        return f"'{self.value}'"

"""
Token classifier

Maps a lexeme to its syntactic category using fixed keyword tables and
three regular expressions. Keyword lookups are case-insensitive.

A lexeme starting with the tag prefix '#' is only ever checked against the
tag table. Anything else is checked against the bare keyword table and then
the TEXT, ADDRESS and IDENTIFIER patterns, in that order.

Overlaps are expected: "head" is both an element keyword and valid text,
"hello" is text and an identifier. classify() reports the first match;
matches() lets the parser ask about the category the grammar expects.
"""

import re
from typing import Dict, Optional, Pattern

from ..models.tokens import TokenCategory

TAG_PREFIX = '#'

TAG_KEYWORDS: Dict[str, TokenCategory] = {
    '#hai': TokenCategory.DOCUMENT_START,
    '#kthxbye': TokenCategory.DOCUMENT_END,
    '#obtw': TokenCategory.COMMENT_START,
    '#tldr': TokenCategory.COMMENT_END,
    '#maek': TokenCategory.BLOCK_START,
    '#oic': TokenCategory.BLOCK_END,
    '#gimmeh': TokenCategory.ELEMENT_START,
    '#mkay': TokenCategory.ELEMENT_END,
    '#i': TokenCategory.VARIABLE_DECLARE_START,
    '#it': TokenCategory.VARIABLE_DECLARE_MID,
    '#lemme': TokenCategory.VARIABLE_USE_START,
}

BARE_KEYWORDS: Dict[str, TokenCategory] = {
    'haz': TokenCategory.HAZ,
    'iz': TokenCategory.IZ,
    'see': TokenCategory.SEE,
    'head': TokenCategory.HEAD,
    'title': TokenCategory.TITLE,
    'paragraf': TokenCategory.PARAGRAPH,
    'bold': TokenCategory.BOLD,
    'italics': TokenCategory.ITALICS,
    'list': TokenCategory.LIST,
    'item': TokenCategory.ITEM,
    'newline': TokenCategory.NEWLINE,
    'soundz': TokenCategory.SOUNDZ,
    'vidz': TokenCategory.VIDZ,
}

TEXT_PATTERN: Pattern[str] = re.compile(r'^[A-Za-z0-9,.\'":?!_/ ]+$')
ADDRESS_PATTERN: Pattern[str] = re.compile(r'^[A-Za-z0-9,.\'":?!_/%]+$')
IDENTIFIER_PATTERN: Pattern[str] = re.compile(r'^[A-Za-z]+$')

# Checked in this order after the bare keyword table
REGEX_CATEGORIES = (
    (TokenCategory.TEXT, TEXT_PATTERN),
    (TokenCategory.ADDRESS, ADDRESS_PATTERN),
    (TokenCategory.IDENTIFIER, IDENTIFIER_PATTERN),
)

_REGEX_BY_CATEGORY: Dict[TokenCategory, Pattern[str]] = dict(REGEX_CATEGORIES)


def classify(lexeme: str) -> Optional[TokenCategory]:
    """
    Classify a lexeme

    Args:
        lexeme: Token text

    Returns:
        First matching category, or None when the lexeme is unrecognized

    Example:
        >>> classify('#HAI')
        <TokenCategory.DOCUMENT_START: '#hai'>
        >>> classify('Paragraf')
        <TokenCategory.PARAGRAPH: 'paragraf'>
        >>> classify('hello')
        <TokenCategory.TEXT: '<text>'>
        >>> classify('100%') is TokenCategory.ADDRESS
        True
        >>> classify('#nope') is None
        True
    """
    lowered = lexeme.lower()
    if lexeme.startswith(TAG_PREFIX):
        return TAG_KEYWORDS.get(lowered)

    if lowered in BARE_KEYWORDS:
        return BARE_KEYWORDS[lowered]

    for category, pattern in REGEX_CATEGORIES:
        if pattern.match(lexeme):
            return category
    return None


def recognized(lexeme: str) -> bool:
    """Lexical acceptance test: does the lexeme belong to any category"""
    return classify(lexeme) is not None


def matches(lexeme: str, category: TokenCategory) -> bool:
    """
    Check a lexeme against one specific category

    Unlike classify(), this answers for overlapping categories too, so
    matches('head', TokenCategory.TEXT) is True.
    """
    if category in _REGEX_BY_CATEGORY:
        if lexeme.startswith(TAG_PREFIX):
            return False
        return _REGEX_BY_CATEGORY[category].match(lexeme) is not None

    lowered = lexeme.lower()
    if lexeme.startswith(TAG_PREFIX):
        return TAG_KEYWORDS.get(lowered) is category
    return BARE_KEYWORDS.get(lowered) is category

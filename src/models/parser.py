"""
Parser-specific data models

Type-safe structures for parser return values.
"""

from dataclasses import dataclass, field
from typing import List

from .scope import VariableBinding


@dataclass
class ParseReport:
    """
    Summary returned by Parser.parse() once a document is certified valid

    The parser does not build a tree; the code generator re-walks the
    tokens on its own. This report only carries what the pipeline logs.

    Attributes:
        token_count: Number of tokens consumed
        has_head: Whether the document carried a head/title block
        paragraph_count: Number of paragraph blocks seen
        declarations: Every binding declared, in source order
        max_scope_depth: Deepest ScopeStack depth reached (1 = global only)

    Example:
        For "#hai #i haz x #maek paragraf #lemme see x #mkay #oic #kthxbye":
        ParseReport(token_count=12, has_head=False, paragraph_count=1,
                    declarations=[VariableBinding("x", None, 1)],
                    max_scope_depth=2)
    """
    token_count: int = 0
    has_head: bool = False
    paragraph_count: int = 0
    declarations: List[VariableBinding] = field(default_factory=list)
    max_scope_depth: int = 1

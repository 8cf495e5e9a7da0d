"""
Models package for lolmark

Contains data structures and type definitions for the compilation pipeline.
"""

from .state import ProgramState, pipeline
from .tokens import Token, TokenCategory
from .scope import VariableBinding, ScopeFrame, ScopeStack
from .parser import ParseReport

__all__ = [
    "ProgramState",
    "pipeline",
    "Token",
    "TokenCategory",
    "VariableBinding",
    "ScopeFrame",
    "ScopeStack",
    "ParseReport",
]

"""
Variable scope models

VariableBinding records a single declaration; ScopeStack holds the nested
frames the parser checks declarations and uses against.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional


@dataclass
class VariableBinding:
    """
    A declared variable

    Attributes:
        name: Identifier (letters only)
        value: Assigned text, or None when declared without '#it iz'
        line: Source line of the declaration

    Example:
        "#i haz x #it iz hello world #mkay" on line 3:
        VariableBinding(name="x", value="hello world", line=3)
    """
    name: str
    value: Optional[str]
    line: int


ScopeFrame = Dict[str, VariableBinding]


@dataclass
class ScopeStack:
    """
    Ordered frames of bindings, innermost last

    The first frame is the global frame and is never removed. A frame is
    pushed when a paragraph opens and popped when it closes.
    """
    frames: List[ScopeFrame] = field(default_factory=lambda: [{}])

    @property
    def depth(self) -> int:
        return len(self.frames)

    def frame_push(self) -> None:
        self.frames.append({})

    def frame_pop(self) -> ScopeFrame:
        """
        Retire the innermost frame

        Returns:
            The popped frame, or an empty dict when only the global frame is
            left (the global frame stays in place)
        """
        if len(self.frames) == 1:
            return {}
        return self.frames.pop()

    def local_get(self, name: str) -> Optional[VariableBinding]:
        """Look up a name in the innermost frame only"""
        return self.frames[-1].get(name)

    def binding_add(self, binding: VariableBinding) -> None:
        self.frames[-1][binding.name] = binding

    def lookup(self, name: str) -> Optional[VariableBinding]:
        """
        Resolve a name from the innermost frame outwards

        Returns:
            First matching binding, or None if no frame declares the name
        """
        for frame in reversed(self.frames):
            if name in frame:
                return frame[name]
        return None

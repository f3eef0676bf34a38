"""
Machine state for one StaV compilation
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .values import Value


@dataclass
class Stack:
    """
    Mutable state threaded through evaluation of a single program.

    A fresh Stack is created per compilation and handed to the generator
    once evaluation finishes; it is never shared between compilations.

    Attributes:
        data: Value stack, bottom first (top is the last element)
        scope: Variables bound by `store`, read by `load` and interpolation
        title: Document title set by the `title` command
        theme: Stylesheet name set by the `theme` command
    """

    data: List[Value] = field(default_factory=list)
    scope: Dict[str, Value] = field(default_factory=dict)
    title: Optional[str] = field(default=None)
    theme: Optional[str] = field(default=None)

    def push(self, value: Value) -> None:
        self.data.append(value)

    def depth(self) -> int:
        return len(self.data)

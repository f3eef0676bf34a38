"""
Models package for stav

Contains data structures and type definitions for the compilation pipeline.
"""

from .state import ProgramState, pipeline
from .stack import Stack
from .values import (
    Command,
    HtmlTag,
    Integer,
    Link,
    Literal,
    Node,
    Symbol,
    TagKind,
    Text,
    Value,
)

__all__ = [
    "ProgramState",
    "pipeline",
    "Stack",
    "Command",
    "HtmlTag",
    "Integer",
    "Link",
    "Literal",
    "Node",
    "Symbol",
    "TagKind",
    "Text",
    "Value",
]

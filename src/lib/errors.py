"""
The single failure signal of the StaV compiler core
"""


class CompileError(Exception):
    """
    Raised when a program cannot be compiled.

    Tokenizer, classification, evaluation and generation failures all raise
    this one type. The message is a hint for debug logs only; callers decide
    on *whether* compilation failed, never on *why*.
    """
    pass

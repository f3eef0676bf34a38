"""
stav - Stack-based composition system

A tiny stack language whose programs assemble a static HTML document.
"""

__version__ = "1.0.0"

from .lib import Compiler, CompileError, compile_source, LOG, state_connectToLogger

__all__ = ["Compiler", "CompileError", "compile_source", "LOG", "state_connectToLogger", "__version__"]

"""
stav - Stack-based composition system

A tiny stack language whose programs assemble a static HTML document.
"""

__version__ = "1.0.0"

from .tokenizer import Tokenizer, tokenize
from .parser import Parser
from .evaluator import Evaluator
from .generator import Generator
from .compiler import Compiler, compile_source
from .errors import CompileError
from .log import LOG, state_connectToLogger

__all__ = [
    "Tokenizer",
    "tokenize",
    "Parser",
    "Evaluator",
    "Generator",
    "Compiler",
    "compile_source",
    "CompileError",
    "LOG",
    "state_connectToLogger",
    "__version__",
]

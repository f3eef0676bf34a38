"""
Compiler for StaV source to HTML

Drives the four core stages in order:

    source --tokenize/classify--> nodes --evaluate--> Stack --generate--> HTML

The first failure in any stage aborts the whole compilation with a
CompileError; no partial document is ever returned.
"""

from typing import List, Optional

from ..models.stack import Stack
from ..models.values import Node
from .evaluator import Evaluator
from .generator import Generator
from .log import LOG
from .parser import Parser


class Compiler:
    """
    Compiles one StaV program to a standalone HTML document

    Responsibilities:
    - Parse source into nodes
    - Evaluate nodes on a fresh Stack
    - Render the final stack to HTML

    The intermediate products stay on the instance after compile() for
    inspection (nodes, stack).
    """

    def __init__(self, source: str) -> None:
        """
        Initialize compiler

        Args:
            source: Raw StaV source text
        """
        self.source = source
        self.nodes: List[Node] = []
        self.stack: Optional[Stack] = None

    def compile(self) -> str:
        """
        Compile the source to HTML

        Returns:
            Complete HTML document

        Raises:
            CompileError: If any stage fails
        """
        LOG("Starting compilation...", level=2)

        self.nodes = Parser(self.source).parse()
        self.stack = Evaluator().run(self.nodes)
        html = Generator(self.stack).generate()

        LOG("HTML document assembled", level=2)
        return html


def compile_source(source: str) -> str:
    """Compile StaV `source` to an HTML document, raising CompileError on failure"""
    return Compiler(source).compile()

r"""
Parser for StaV tokens

Classifies each token produced by the tokenizer as a literal value or a
command. Classification order:

1. "quoted"       -> Text (Paragraph), unescaped and trimmed
2. 32-bit integer -> Integer
3. https://...    -> Link
4. @name          -> Symbol
5. keyword        -> Command
6. anything else  -> CompileError

Text literal handling:
- A backslash followed by a line feed (what both a `\n` escape and a
  backslash line continuation look like after tokenizing) becomes `<br>`
- The inner text is then trimmed
- Finally each backslash is dropped and the character after it kept

Example:
    >>> parser = Parser('"Hello, World" 1 heading')
    >>> parser.parse()
    [Literal(value=Text(content='Hello, World', ...)), Literal(value=Integer(value=1)), <Command.HEADING: 'heading'>]
"""

import re
from typing import List, Optional

from ..models.values import Command, Integer, Link, Literal, Node, Symbol, Text, Value
from .errors import CompileError
from .log import LOG
from .tokenizer import tokenize


INTEGER_PATTERN = re.compile(r'[+-]?[0-9]+')
INT32_MIN = -(2 ** 31)
INT32_MAX = 2 ** 31 - 1

LINK_PREFIX = 'https://'
SYMBOL_PREFIX = '@'
LINE_BREAK = '<br>'


def text_unescape(text: str) -> str:
    """
    Drop escaping backslashes, keeping the character each one escapes.

    A lone trailing backslash is dropped.

    Example:
        >>> text_unescape(r'say \"hi\" \\ bye')
        'say "hi" \\ bye'
    """
    result = []
    is_escape = False
    for c in text:
        if is_escape:
            result.append(c)
            is_escape = False
        elif c == '\\':
            is_escape = True
        else:
            result.append(c)
    return ''.join(result)


def integer_parse(token: str) -> Optional[int]:
    """Parse a decimal i32, returning None when out of range or malformed"""
    if not INTEGER_PATTERN.fullmatch(token):
        return None
    number = int(token)
    if number < INT32_MIN or number > INT32_MAX:
        return None
    return number


def value_parse(token: str) -> Optional[Value]:
    """
    Classify a token as a literal value.

    Args:
        token: Trimmed raw token

    Returns:
        The literal value, or None if the token is not a literal
    """
    if len(token) >= 2 and token.startswith('"') and token.endswith('"'):
        inner = token[1:-1].replace('\\\n', LINE_BREAK).strip()
        return Text(content=text_unescape(inner))

    number = integer_parse(token)
    if number is not None:
        return Integer(number)

    if token.startswith(LINK_PREFIX):
        return Link(token)

    if token.startswith(SYMBOL_PREFIX):
        return Symbol(token[len(SYMBOL_PREFIX):])

    return None


def node_parse(token: str) -> Node:
    """
    Classify a token as a literal or a command.

    Raises:
        CompileError: If the token is neither
    """
    value = value_parse(token)
    if value is not None:
        return Literal(value)

    command = Command.keyword_lookup(token)
    if command is not None:
        return command

    raise CompileError(f"Unknown token: {token!r}")


class Parser:
    """
    Turns StaV source into a flat list of nodes

    There is no nesting in StaV: the parse result is simply the token
    stream with each token classified, in source order.
    """

    def __init__(self, source: str) -> None:
        """
        Args:
            source: Raw StaV source text
        """
        self.source = source
        self.nodes: List[Node] = []

    def parse(self) -> List[Node]:
        """
        Tokenize and classify the whole source.

        Returns:
            Nodes in source order; empty for empty/whitespace-only source

        Raises:
            CompileError: On a tokenizer failure or an unclassifiable token
        """
        self.nodes = [node_parse(token) for token in tokenize(self.source)]
        LOG(f"Parsed {len(self.nodes)} nodes", level=2)
        return self.nodes

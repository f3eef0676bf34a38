r"""
Tokenizer for StaV source text

Splits source into whitespace-delimited tokens. Double-quoted string
literals may contain whitespace and backslash escapes; everything else is
split on space, tab, CR and LF.

Quoting rules:
- A double quote toggles quoted mode and stays part of the token
- Inside quotes a backslash starts an escape: the backslash is kept and the
  next character follows it, with n, t, r mapped to LF, TAB, CR
- An escaped quote does not toggle quoted mode
- Outside quotes a backslash is an ordinary character

Example:
    >>> tokenize('"Hello, World" 1 heading')
    ['"Hello, World"', '1', 'heading']
    >>> tokenize('"a\\tb"')
    ['"a\\\tb"']
"""

from typing import List

from .errors import CompileError
from .log import LOG


WHITESPACE = (' ', '\n', '\t', '\r')

ESCAPES = {
    'n': '\n',
    't': '\t',
    'r': '\r',
}


class Tokenizer:
    """
    Single-pass character scanner producing raw tokens

    Raw tokens keep their quotes and escape backslashes; the parser strips
    and unescapes them during classification.
    """

    def __init__(self, source: str) -> None:
        """
        Args:
            source: Raw source text

        Attributes:
            tokens: Tokens completed so far
            current: Characters of the token being accumulated
            in_quote: Inside a double-quoted literal
            is_escape: Previous character was an escaping backslash
        """
        self.source = source
        self.tokens: List[str] = []
        self.current: List[str] = []
        self.in_quote = False
        self.is_escape = False

    def token_end(self) -> None:
        self.tokens.append(''.join(self.current))
        self.current = []

    def char_consume(self, c: str) -> None:
        """Feed one character into the scanner state"""
        if self.is_escape:
            self.current.append(ESCAPES.get(c, c))
            self.is_escape = False
        elif c == '"':
            self.in_quote = not self.in_quote
            self.current.append(c)
        elif c == '\\' and self.in_quote:
            self.current.append(c)
            self.is_escape = True
        elif c in WHITESPACE and not self.in_quote and self.current:
            self.token_end()
        else:
            # Leading whitespace lands here; it is trimmed away later
            self.current.append(c)

    def tokens_raw(self) -> List[str]:
        """
        Scan the whole source and return untrimmed tokens.

        Raises:
            CompileError: Input ends inside a quote or after an escaping
                          backslash
        """
        for c in self.source:
            self.char_consume(c)

        if self.is_escape:
            raise CompileError("Source ends with an unfinished escape")
        if self.in_quote:
            raise CompileError("Unterminated string literal")

        if self.current:
            self.token_end()
        return self.tokens

    def tokenize(self) -> List[str]:
        """
        Scan the source and return trimmed, non-empty tokens.

        Returns:
            Tokens in source order

        Raises:
            CompileError: If the source is lexically malformed
        """
        tokens = [token.strip() for token in self.tokens_raw()]
        tokens = [token for token in tokens if token]
        LOG(f"Tokenized {len(self.source)} characters into {len(tokens)} tokens", level=3)
        return tokens


def tokenize(source: str) -> List[str]:
    """Tokenize `source`; see Tokenizer.tokenize()"""
    return Tokenizer(source).tokenize()

"""
Custom Pygments lexer for StaV syntax highlighting

Highlights StaV source for documentation or previews.

Token types:
- String.Double: Quoted text literals
- String.Escape: Backslash escapes inside text literals
- Number.Integer: Integer literals
- Name.Namespace: https:// link literals
- Name.Variable: @name symbols
- Keyword: Markup commands (heading, link, list, ...)
- Name.Builtin: Stack and scope commands (dup, store, ...)
- Error: Anything the compiler would reject
"""

from pygments.lexer import RegexLexer, words
from pygments.token import Error, Keyword, Name, Number, String, Whitespace


MARKUP_COMMANDS = (
    'heading', 'font-size', 'link', 'block-quote', 'image', 'list', 'title', 'theme',
)

STACK_COMMANDS = (
    'load', 'store', 'concat', 'dup', 'swap', 'pop',
)

# A command or literal ends at whitespace or end of input
TOKEN_END = r'(?=[ \t\r\n]|\Z)'


class StavLexer(RegexLexer):
    """
    Lexer for the StaV stack language

    Example:
        "Hello, World" 1 heading

    Tokens:
        "Hello, World" → String.Double
        1 → Number.Integer
        heading → Keyword
    """

    name = 'StaV'
    aliases = ['stav']
    filenames = ['*.stav']

    tokens = {
        'root': [
            (r'[ \t\r\n]+', Whitespace),
            (r'"', String.Double, 'string'),
            (r'[+-]?[0-9]+' + TOKEN_END, Number.Integer),
            (r'https://[^ \t\r\n]*', Name.Namespace),
            (r'@[^ \t\r\n]*', Name.Variable),
            (words(MARKUP_COMMANDS, suffix=TOKEN_END), Keyword),
            (words(STACK_COMMANDS, suffix=TOKEN_END), Name.Builtin),
            (r'[^ \t\r\n]+', Error),
        ],

        'string': [
            (r'\\(.|\n)', String.Escape),
            (r'"', String.Double, '#pop'),
            (r'[^"\\]+', String.Double),
        ],
    }


def get_lexer() -> StavLexer:
    """
    Get the StavLexer instance

    Returns:
        StavLexer instance ready for use with Pygments
    """
    return StavLexer()


"""
Parser tests - token classification

Tests text, integer, link and symbol literals, command keywords and
classification failures.
"""

import pytest

from stav.lib.parser import Parser, node_parse, text_unescape, value_parse
from stav.lib.tokenizer import tokenize
from stav.lib.errors import CompileError
from stav.models.values import Command, HtmlTag, Integer, Link, Literal, Symbol, Text


def text_of(source: str) -> str:
    """Tokenize a single quoted literal and return its classified content"""
    [token] = tokenize(source)
    value = value_parse(token)
    assert isinstance(value, Text)
    return value.content


class TestTextLiterals:
    """Test quoted text classification"""

    def test_simple_text(self):
        """Quoted token becomes a Paragraph Text"""
        assert value_parse('"Hello"') == Text("Hello")
        assert value_parse('"Hello"').tag == HtmlTag.paragraph()

    def test_empty_text(self):
        """Two quotes make an empty Text"""
        assert value_parse('""') == Text("")

    def test_content_trimmed(self):
        """Surrounding whitespace inside quotes is trimmed"""
        assert value_parse('"   padded  "') == Text("padded")

    def test_lone_quote_is_not_text(self):
        """A single quote character is not a literal"""
        assert value_parse('"') is None

    def test_quoted_keyword_is_text(self):
        """Quoting wins over keyword and integer classification"""
        assert value_parse('"heading"') == Text("heading")
        assert value_parse('"42"') == Text("42")


class TestEscapeRoundTrip:
    """Test escapes through tokenize + classify"""

    def test_tab(self):
        assert text_of('"a\\tb"') == "a\tb"

    def test_carriage_return(self):
        assert text_of('"a\\rb"') == "a\rb"

    def test_backslash(self):
        assert text_of('"a\\\\b"') == "a\\b"

    def test_quote(self):
        assert text_of('"say \\"hi\\""') == 'say "hi"'

    def test_newline_becomes_line_break(self):
        """\\n escape renders as a <br> marker"""
        assert text_of('"line1\\nline2"') == "line1<br>line2"

    def test_line_continuation_becomes_line_break(self):
        """Backslash before a real line feed renders as <br>"""
        assert text_of('"one\\\ntwo"') == "one<br>two"

    def test_unescape_drops_lone_trailing_backslash(self):
        """A trailing backslash with nothing after it disappears"""
        assert text_unescape("abc\\") == "abc"


class TestOtherLiterals:
    """Test integer, link and symbol classification"""

    def test_integers(self):
        assert value_parse("42") == Integer(42)
        assert value_parse("-7") == Integer(-7)
        assert value_parse("+3") == Integer(3)
        assert value_parse("007") == Integer(7)

    def test_integer_bounds(self):
        """Only 32-bit signed values are integers"""
        assert value_parse("2147483647") == Integer(2147483647)
        assert value_parse("-2147483648") == Integer(-2147483648)
        assert value_parse("2147483648") is None
        assert value_parse("-2147483649") is None

    def test_not_integers(self):
        assert value_parse("1.5") is None
        assert value_parse("1_000") is None
        assert value_parse("-") is None

    def test_link(self):
        assert value_parse("https://example.com/a.png") == Link("https://example.com/a.png")

    def test_http_is_not_link(self):
        assert value_parse("http://example.com") is None

    def test_symbol(self):
        assert value_parse("@name") == Symbol("name")
        assert value_parse("@") == Symbol("")


class TestNodes:
    """Test literal/command node classification"""

    @pytest.mark.parametrize("command", list(Command))
    def test_every_keyword(self, command):
        """Each keyword classifies as its command"""
        assert node_parse(command.value) is command

    def test_literal_node(self):
        assert node_parse("5") == Literal(Integer(5))

    def test_unknown_token_fails(self):
        with pytest.raises(CompileError):
            node_parse("bogus")

    def test_keywords_are_case_sensitive(self):
        with pytest.raises(CompileError):
            node_parse("Heading")


class TestParser:
    """Test whole-source parsing"""

    def test_empty_source(self):
        assert Parser("").parse() == []

    def test_program(self):
        """Nodes come back in source order"""
        nodes = Parser('"a" "b" concat 2 heading').parse()
        assert nodes == [
            Literal(Text("a")),
            Literal(Text("b")),
            Command.CONCAT,
            Literal(Integer(2)),
            Command.HEADING,
        ]

    def test_tokenizer_failure_propagates(self):
        with pytest.raises(CompileError):
            Parser('"a" "oops').parse()

    def test_unknown_token_anywhere_fails(self):
        with pytest.raises(CompileError):
            Parser('"a" 1 heading frobnicate').parse()

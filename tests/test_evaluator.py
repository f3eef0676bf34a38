"""
Evaluator tests - the stack machine

Tests literal pushes, interpolation, every command, and the failure modes
(operand kind mismatch, underflow, missing variables).
"""

import pytest

from stav.lib.evaluator import Evaluator
from stav.lib.parser import Parser
from stav.lib.errors import CompileError
from stav.models.stack import Stack
from stav.models.values import HtmlTag, Integer, Link, Symbol, Text


def run(source: str) -> Stack:
    return Evaluator().run(Parser(source).parse())


class TestLiterals:
    """Test pushing literal values"""

    def test_empty_program(self):
        stack = run("")
        assert stack.data == []
        assert stack.scope == {}
        assert stack.title is None
        assert stack.theme is None

    def test_literals_pushed_in_order(self):
        stack = run('"Hello" 5 https://x.org @n')
        assert stack.data == [Text("Hello"), Integer(5), Link("https://x.org"), Symbol("n")]

    def test_run_on_given_stack(self):
        """An explicit starting stack is used and returned"""
        start = Stack(data=[Integer(1)])
        assert Evaluator().run(Parser("2").parse(), start) is start
        assert start.data == [Integer(1), Integer(2)]


class TestInterpolation:
    """Test @name substitution inside text literals"""

    def test_text_substitution(self):
        stack = run('"World" @who store "Hello, @who !"')
        assert stack.data == [Text("Hello, World !")]

    def test_integer_substitution(self):
        stack = run('3 @n store "n = @n"')
        assert stack.data == [Text("n = 3")]

    def test_link_substitution(self):
        stack = run('https://x.org @u store "see @u"')
        assert stack.data == [Text("see https://x.org")]

    def test_symbol_substitution(self):
        """A stored symbol interpolates as its bare name"""
        stack = run('@foo @s store "@s"')
        assert stack.data == [Text("foo")]

    def test_whitespace_collapses(self):
        """Inner whitespace runs become single spaces"""
        stack = run('"a    b\\t\\tc\\r d"')
        assert stack.data == [Text("a b c d")]

    def test_at_inside_word_untouched(self):
        stack = run('"mail@example"')
        assert stack.data == [Text("mail@example")]

    def test_missing_variable_fails(self):
        with pytest.raises(CompileError):
            run('"hello @nobody"')

    def test_future_binding_not_visible(self):
        """A literal only sees bindings made before it"""
        with pytest.raises(CompileError):
            run('"a @x b" "v" @x store')

    def test_rebinding(self):
        """Each literal sees the binding current at its evaluation"""
        stack = run('"one" @x store "@x" "two" @x store "@x"')
        assert stack.data == [Text("one"), Text("two")]

    def test_balanced_inner_quotes(self):
        stack = run('"say \\"hi   there\\""')
        assert stack.data == [Text('say "hi   there"')]

    def test_unbalanced_inner_quote_fails(self):
        """Content is re-tokenized, so a lone inner quote fails"""
        with pytest.raises(CompileError):
            run('"say \\"hi"')

    def test_tag_kept_through_interpolation(self):
        """Only content changes; the fresh literal is still a Paragraph"""
        stack = run('"x" @v store "@v"')
        assert stack.data[0].tag == HtmlTag.paragraph()


class TestMarkupCommands:
    """Test heading, font-size, link, block-quote, image, list"""

    def test_heading(self):
        assert run('"T" 2 heading').data == [Text("T", tag=HtmlTag.heading(2))]

    def test_heading_needs_integer_on_top(self):
        with pytest.raises(CompileError):
            run('"Hello, World" "h1" heading')

    def test_heading_empty_stack(self):
        with pytest.raises(CompileError):
            run("heading")

    def test_heading_missing_text(self):
        with pytest.raises(CompileError):
            run("1 heading")

    def test_heading_integer_below(self):
        with pytest.raises(CompileError):
            run("1 2 heading")

    def test_font_size(self):
        assert run('"T" 14 font-size').data == [Text("T", font_size=14)]

    def test_font_size_keeps_tag(self):
        assert run('"T" 1 heading 30 font-size').data == [
            Text("T", font_size=30, tag=HtmlTag.heading(1))
        ]

    def test_link(self):
        assert run('"Docs" https://docs.example link').data == [
            Text("Docs", tag=HtmlTag.link("https://docs.example"))
        ]

    def test_link_needs_link_value(self):
        with pytest.raises(CompileError):
            run('"Docs" "https://docs.example" link')

    def test_block_quote(self):
        assert run('"Q" block-quote').data == [Text("Q", tag=HtmlTag.blockQuote())]

    def test_list(self):
        assert run('"item" list').data == [Text("item", tag=HtmlTag.listItem())]

    def test_list_needs_text(self):
        with pytest.raises(CompileError):
            run("5 list")

    def test_image_leaves_text_beneath(self):
        """image pops only the Link; earlier text stays below"""
        stack = run('"pic" https://x/y.png image')
        assert stack.data == [Text("pic"), Text("", tag=HtmlTag.image("https://x/y.png"))]

    def test_image_needs_link(self):
        with pytest.raises(CompileError):
            run('"pic" image')


class TestDocumentCommands:
    """Test title and theme"""

    def test_title_and_theme(self):
        stack = run('"Hello" title "dark" theme')
        assert stack.title == "Hello"
        assert stack.theme == "dark"
        assert stack.data == []

    def test_last_title_wins(self):
        assert run('"A" title "B" title').title == "B"

    def test_title_needs_text(self):
        with pytest.raises(CompileError):
            run("1 title")


class TestScope:
    """Test store and load"""

    def test_store_then_load(self):
        stack = run('"v" @x store "other" pop 1 2 swap pop pop @x load')
        assert stack.data == [Text("v")]
        assert stack.scope == {"x": Text("v")}

    def test_store_any_value(self):
        assert run("5 @n store @n load").data == [Integer(5)]

    def test_last_store_wins(self):
        assert run("1 @n store 2 @n store @n load").data == [Integer(2)]

    def test_store_keeps_tag(self):
        stack = run('"T" 3 heading @h store @h load')
        assert stack.data == [Text("T", tag=HtmlTag.heading(3))]

    def test_load_missing(self):
        with pytest.raises(CompileError):
            run("@nope load")

    def test_load_needs_symbol(self):
        with pytest.raises(CompileError):
            run('"x" load')

    def test_store_underflow(self):
        with pytest.raises(CompileError):
            run("@x store")

    def test_store_needs_symbol_on_top(self):
        with pytest.raises(CompileError):
            run('"v" "x" store')

    def test_scope_is_per_run(self):
        """A new run starts with an empty scope"""
        run('"v" @x store')
        with pytest.raises(CompileError):
            run("@x load")


class TestStackCommands:
    """Test concat, dup, swap, pop"""

    def test_concat(self):
        assert run('"foo" "bar" concat').data == [Text("foobar")]

    def test_concat_keeps_first_styling(self):
        """Result takes tag and font size of the lower operand"""
        stack = run('"a" 20 font-size "b" 2 heading concat')
        assert stack.data == [Text("ab", font_size=20)]

    def test_concat_needs_texts(self):
        with pytest.raises(CompileError):
            run('"a" 1 concat')

    def test_dup(self):
        assert run('"a" dup').data == [Text("a"), Text("a")]

    def test_dup_copies_are_independent(self):
        stack = run('"a" dup 1 heading')
        assert stack.data == [Text("a"), Text("a", tag=HtmlTag.heading(1))]

    def test_dup_underflow(self):
        with pytest.raises(CompileError):
            run("dup")

    def test_swap(self):
        assert run("1 2 swap").data == [Integer(2), Integer(1)]

    def test_swap_underflow(self):
        with pytest.raises(CompileError):
            run("1 swap")

    def test_pop(self):
        assert run("1 2 pop").data == [Integer(1)]

    def test_pop_underflow(self):
        with pytest.raises(CompileError):
            run("pop")

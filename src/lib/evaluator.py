"""
Stack-machine evaluator for StaV programs

Executes parsed nodes strictly in source order against a Stack. Literals
are pushed (text literals after @name interpolation); commands pop typed
operands and push results according to a fixed command table.

Evaluation is a fold over the node list: each step takes the stack and
returns it, raising CompileError on the first failure so that no partial
result ever escapes.
"""

from dataclasses import replace
from functools import reduce
from typing import Callable, Dict, Iterable, Type, TypeVar

from ..models.stack import Stack
from ..models.values import (
    Command,
    HtmlTag,
    Integer,
    Link,
    Literal,
    Node,
    Symbol,
    Text,
    Value,
)
from .errors import CompileError
from .log import LOG
from .tokenizer import tokenize


V = TypeVar("V", Text, Integer, Link, Symbol)

CommandHandler = Callable[[Stack], None]


def value_pop(stack: Stack) -> Value:
    """Pop any value, failing on an empty stack"""
    if not stack.data:
        raise CompileError("Stack underflow")
    return stack.data.pop()


def operand_pop(stack: Stack, kind: Type[V]) -> V:
    """
    Pop the top value, requiring it to be of `kind`.

    Raises:
        CompileError: On underflow or when the top value has another kind
    """
    value = value_pop(stack)
    if not isinstance(value, kind):
        raise CompileError(
            f"Expected {kind.__name__} on the stack, found {type(value).__name__}"
        )
    return value


def scope_lookup(stack: Stack, name: str) -> Value:
    if name not in stack.scope:
        raise CompileError(f"Undefined variable @{name}")
    return stack.scope[name]


def text_interpolate(stack: Stack, content: str) -> str:
    """
    Substitute @name tokens in text content with their bound values.

    The content is re-tokenized with the source grammar, so runs of
    whitespace collapse to a single space in the result.

    Example:
        With scope {"who": Text("World")}:
        "Hello,   @who !"  ->  "Hello, World !"
    """
    words = []
    for token in tokenize(content):
        if token.startswith('@'):
            words.append(scope_lookup(stack, token[1:]).string_form())
        else:
            words.append(token)
    return ' '.join(words)


class Evaluator:
    """
    Runs StaV nodes against a Stack

    Maps every Command to a handler method. Each handler pops its operands
    top-first and pushes its result; the handlers never catch errors.
    """

    def __init__(self) -> None:
        self.handlers: Dict[Command, CommandHandler] = {
            Command.HEADING: self.heading_eval,
            Command.FONT_SIZE: self.fontSize_eval,
            Command.LINK: self.link_eval,
            Command.BLOCK_QUOTE: self.blockQuote_eval,
            Command.IMAGE: self.image_eval,
            Command.LIST: self.list_eval,
            Command.TITLE: self.title_eval,
            Command.THEME: self.theme_eval,
            Command.LOAD: self.load_eval,
            Command.STORE: self.store_eval,
            Command.CONCAT: self.concat_eval,
            Command.DUP: self.dup_eval,
            Command.SWAP: self.swap_eval,
            Command.POP: self.pop_eval,
        }

    def run(self, nodes: Iterable[Node], stack: Stack | None = None) -> Stack:
        """
        Evaluate `nodes` in order.

        Args:
            nodes: Parsed program
            stack: Starting state; a fresh empty Stack when omitted

        Returns:
            The stack after the last node

        Raises:
            CompileError: At the first failing node
        """
        final = reduce(self.node_eval, nodes, stack if stack is not None else Stack())
        LOG(f"Evaluation finished with {final.depth()} values on the stack", level=2)
        return final

    def node_eval(self, stack: Stack, node: Node) -> Stack:
        """Evaluate a single node, returning the same (mutated) stack"""
        if isinstance(node, Literal):
            self.literal_eval(stack, node.value)
        else:
            LOG(f"{node.value} (depth {stack.depth()})", level=3)
            self.handlers[node](stack)
        return stack

    def literal_eval(self, stack: Stack, value: Value) -> None:
        if isinstance(value, Text):
            value = replace(value, content=text_interpolate(stack, value.content))
        stack.push(value)

    # Markup commands

    def heading_eval(self, stack: Stack) -> None:
        level = operand_pop(stack, Integer)
        text = operand_pop(stack, Text)
        stack.push(replace(text, tag=HtmlTag.heading(level.value)))

    def fontSize_eval(self, stack: Stack) -> None:
        size = operand_pop(stack, Integer)
        text = operand_pop(stack, Text)
        stack.push(replace(text, font_size=size.value))

    def link_eval(self, stack: Stack) -> None:
        url = operand_pop(stack, Link)
        text = operand_pop(stack, Text)
        stack.push(replace(text, tag=HtmlTag.link(url.url)))

    def blockQuote_eval(self, stack: Stack) -> None:
        text = operand_pop(stack, Text)
        stack.push(replace(text, tag=HtmlTag.blockQuote()))

    def image_eval(self, stack: Stack) -> None:
        # Anything already on the stack stays beneath the new image
        url = operand_pop(stack, Link)
        stack.push(Text(content="", tag=HtmlTag.image(url.url)))

    def list_eval(self, stack: Stack) -> None:
        text = operand_pop(stack, Text)
        stack.push(replace(text, tag=HtmlTag.listItem()))

    # Document settings

    def title_eval(self, stack: Stack) -> None:
        stack.title = operand_pop(stack, Text).content

    def theme_eval(self, stack: Stack) -> None:
        stack.theme = operand_pop(stack, Text).content

    # Variables

    def load_eval(self, stack: Stack) -> None:
        symbol = operand_pop(stack, Symbol)
        stack.push(scope_lookup(stack, symbol.name))

    def store_eval(self, stack: Stack) -> None:
        symbol = operand_pop(stack, Symbol)
        stack.scope[symbol.name] = value_pop(stack)

    # Stack manipulation

    def concat_eval(self, stack: Stack) -> None:
        tail = operand_pop(stack, Text)
        head = operand_pop(stack, Text)
        stack.push(replace(head, content=head.content + tail.content))

    def dup_eval(self, stack: Stack) -> None:
        value = value_pop(stack)
        stack.push(value)
        stack.push(value)

    def swap_eval(self, stack: Stack) -> None:
        top = value_pop(stack)
        below = value_pop(stack)
        stack.push(top)
        stack.push(below)

    def pop_eval(self, stack: Stack) -> None:
        value_pop(stack)

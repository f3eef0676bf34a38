"""
HTML generator for a finished StaV stack

Renders each Text value (bottom of the stack first) to one HTML fragment
and embeds the fragments in a fixed document skeleton. Consecutive list
items are grouped into a single <ul>.
"""

from typing import List, Optional

from ..config import appsettings
from ..models.stack import Stack
from ..models.values import TagKind, Text
from .errors import CompileError
from .log import LOG


DOCUMENT_TEMPLATE = """<html>
    <head>
        <meta charset="UTF-8">
        <title>{title}</title>
        <link rel="stylesheet" href="{stylesheet}">
    </head>
    <body>
        {body}
    </body>
</html>
"""


def style_attr(font_size: Optional[int]) -> str:
    """Inline style attribute for a font size, with its leading space"""
    if font_size is None:
        return ""
    return f' style="font-size: {font_size}px;"'


def fragment_render(text: Text) -> str:
    """
    Render a single Text value to its HTML element.

    List items render to a bare <li>; grouping is the caller's job.

    Example:
        >>> fragment_render(Text("Hi", font_size=12, tag=HtmlTag.heading(2)))
        '<h2 style="font-size: 12px;">Hi</h2>'
    """
    tag = text.tag
    style = style_attr(text.font_size)

    if tag.kind is TagKind.PARAGRAPH:
        return f"<p{style}>{text.content}</p>"
    if tag.kind is TagKind.HEADING:
        return f"<h{tag.level}{style}>{text.content}</h{tag.level}>"
    if tag.kind is TagKind.LINK:
        return f'<a href="{tag.url}"{style}>{text.content}</a>'
    if tag.kind is TagKind.BLOCKQUOTE:
        return f"<blockquote{style}>{text.content}</blockquote>"
    if tag.kind is TagKind.IMAGE:
        return f'<img src="{tag.url}" alt="{text.content}">'
    if tag.kind is TagKind.LIST:
        return f"<li{style}>{text.content}</li>"
    raise CompileError(f"Unsupported tag {tag.kind}")


class Generator:
    """
    Builds the output document from a Stack

    The stack is consumed once; the generator only reads it.
    """

    def __init__(self, stack: Stack) -> None:
        self.stack = stack
        self.fragments: List[str] = []
        self.list_items: List[str] = []

    def list_flush(self) -> None:
        """Emit the pending list items as one <ul> group"""
        if self.list_items:
            self.fragments.append("<ul>{}</ul>".format("\n".join(self.list_items)))
            self.list_items = []

    def body_build(self) -> str:
        """
        Render every stack value in document order.

        Raises:
            CompileError: If any value on the stack is not Text
        """
        self.fragments = []
        self.list_items = []

        for value in self.stack.data:
            if not isinstance(value, Text):
                raise CompileError(
                    f"Cannot render {type(value).__name__} left on the stack"
                )
            if value.tag.kind is TagKind.LIST:
                self.list_items.append(fragment_render(value))
                continue
            self.list_flush()
            self.fragments.append(fragment_render(value))

        self.list_flush()
        return "\n".join(self.fragments)

    def generate(self) -> str:
        """
        Render the complete HTML document.

        Returns:
            Document text with title, stylesheet link and body

        Raises:
            CompileError: If the stack holds non-Text values
        """
        body = self.body_build()
        title = self.stack.title if self.stack.title is not None else appsettings.default_title
        theme = self.stack.theme if self.stack.theme is not None else appsettings.default_theme

        LOG(f"Rendered {len(self.fragments)} fragments (title={title!r}, theme={theme!r})", level=2)
        return DOCUMENT_TEMPLATE.format(
            title=title,
            stylesheet=appsettings.stylesheet_href(theme),
            body=body,
        )


def generate(stack: Stack) -> str:
    """Render `stack` to HTML; see Generator.generate()"""
    return Generator(stack).generate()

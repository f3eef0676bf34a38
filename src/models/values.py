"""
Value and node models for the StaV stack machine

Every type here is a closed tagged union expressed as frozen dataclasses
and Enums. Consumers discriminate with isinstance() or enum identity;
nothing here carries behavior beyond construction and string forms.

    Value   = Text | Integer | Link | Symbol
    Node    = Literal | Command
    HtmlTag = one of TagKind, with an optional level or url payload
"""

from enum import Enum
from dataclasses import dataclass
from typing import Optional, Union


class TagKind(Enum):
    """
    Kinds of HTML element a Text value can render to
    """
    PARAGRAPH = "paragraph"     # <p>
    HEADING = "heading"         # <h1> ... <h6>, level carried by the tag
    LINK = "link"               # <a href="...">
    IMAGE = "image"             # <img src="...">
    BLOCKQUOTE = "blockquote"   # <blockquote>
    LIST = "list"               # <li>, grouped into <ul> at generation


@dataclass(frozen=True)
class HtmlTag:
    """
    The HTML element attached to a Text value

    Only HEADING uses `level`, only LINK and IMAGE use `url`. Build tags
    through the named constructors rather than filling fields by hand.

    Example:
        >>> HtmlTag.heading(2)
        HtmlTag(kind=<TagKind.HEADING: 'heading'>, level=2, url=None)
    """
    kind: TagKind
    level: Optional[int] = None
    url: Optional[str] = None

    @classmethod
    def paragraph(cls) -> "HtmlTag":
        return cls(TagKind.PARAGRAPH)

    @classmethod
    def heading(cls, level: int) -> "HtmlTag":
        return cls(TagKind.HEADING, level=level)

    @classmethod
    def link(cls, url: str) -> "HtmlTag":
        return cls(TagKind.LINK, url=url)

    @classmethod
    def image(cls, url: str) -> "HtmlTag":
        return cls(TagKind.IMAGE, url=url)

    @classmethod
    def blockQuote(cls) -> "HtmlTag":
        return cls(TagKind.BLOCKQUOTE)

    @classmethod
    def listItem(cls) -> "HtmlTag":
        return cls(TagKind.LIST)


@dataclass(frozen=True)
class Text:
    """
    A text fragment destined for the document body

    Attributes:
        content: Fragment text, emitted verbatim into the HTML
        font_size: Optional font size in pixels
        tag: Element the fragment renders to (Paragraph unless changed)
    """
    content: str
    font_size: Optional[int] = None
    tag: HtmlTag = HtmlTag.paragraph()

    def string_form(self) -> str:
        return self.content


@dataclass(frozen=True)
class Integer:
    """A 32-bit signed integer literal"""
    value: int

    def string_form(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Link:
    """An https:// URL literal, kept as raw text"""
    url: str

    def string_form(self) -> str:
        return self.url


@dataclass(frozen=True)
class Symbol:
    """An @name literal; `name` excludes the leading @"""
    name: str

    def string_form(self) -> str:
        return self.name


Value = Union[Text, Integer, Link, Symbol]


class Command(Enum):
    """
    The fixed command set, keyed by source keyword

    Example:
        >>> Command("font-size")
        <Command.FONT_SIZE: 'font-size'>
    """
    HEADING = "heading"
    FONT_SIZE = "font-size"
    LINK = "link"
    BLOCK_QUOTE = "block-quote"
    IMAGE = "image"
    LIST = "list"
    TITLE = "title"
    THEME = "theme"
    LOAD = "load"
    STORE = "store"
    CONCAT = "concat"
    DUP = "dup"
    SWAP = "swap"
    POP = "pop"

    @classmethod
    def keyword_lookup(cls, keyword: str) -> Optional["Command"]:
        """Return the command spelled `keyword`, or None"""
        try:
            return cls(keyword)
        except ValueError:
            return None


@dataclass(frozen=True)
class Literal:
    """A node that pushes a value when evaluated"""
    value: Value


Node = Union[Literal, Command]

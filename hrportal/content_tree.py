"""Declarative description of a document, consumed by ``hrportal.rendering``.

Nodes only describe what goes on the page. Geometry is expressed in points and
margins follow the ``(left, top, right, bottom)`` order used throughout.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Union

Margin = tuple[float, float, float, float]

NO_MARGIN: Margin = (0, 0, 0, 0)

# Proportional column width: takes whatever the fixed-width siblings leave over.
STAR = "*"


@dataclass(frozen=True)
class TextStyle:
    font_size: float = 12
    bold: bool = False
    italic: bool = False
    underline: bool = False
    color: str | None = None
    margin: Margin = NO_MARGIN


@dataclass(frozen=True)
class Text:
    text: str
    style: str | None = None
    margin: Margin | None = None


@dataclass(frozen=True)
class Image:
    path: Path
    # Drawn width; the height follows from the image's aspect ratio.
    width: float
    alignment: str = "left"
    margin: Margin = NO_MARGIN


@dataclass(frozen=True)
class BulletList:
    items: tuple[str, ...]
    style: str | None = None
    margin: Margin = NO_MARGIN


@dataclass(frozen=True)
class Column:
    content: "Node"
    width: Union[float, str] = STAR


@dataclass(frozen=True)
class Columns:
    columns: tuple[Column, ...]
    column_gap: float = 0
    margin: Margin = NO_MARGIN


@dataclass(frozen=True)
class Stack:
    content: tuple["Node", ...]
    margin: Margin = NO_MARGIN


Node = Union[Text, Image, BulletList, Columns, Stack]

# Called with (current_page, page_count) for every page.
FooterCallback = Callable[[int, int], Node]


@dataclass
class DocumentDefinition:
    content: list[Node]
    page_size: str = "LETTER"
    page_margins: Margin = (40, 40, 40, 40)
    styles: dict[str, TextStyle] = field(default_factory=dict)
    footer: FooterCallback | None = None
    title: str | None = None
    author: str | None = None

    def style(self, name: str | None) -> TextStyle:
        if name is None:
            return TextStyle()
        return self.styles[name]

    def iter_nodes(self):
        """Yield every node in document order, descending into containers."""
        stack: list[Node] = list(reversed(self.content))
        while stack:
            node = stack.pop()
            yield node
            if isinstance(node, Columns):
                stack.extend(reversed([column.content for column in node.columns]))
            elif isinstance(node, Stack):
                stack.extend(reversed(node.content))

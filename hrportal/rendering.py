from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache
from io import BytesIO
from pathlib import Path
from typing import Callable, Mapping
from xml.sax.saxutils import escape

from django.conf import settings
from django.core.signals import setting_changed
from django.dispatch import receiver
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4, LETTER
from reportlab.lib.styles import ParagraphStyle
from reportlab.lib.utils import ImageReader
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont
from reportlab.pdfgen.canvas import Canvas
from reportlab.platypus import Image as PdfImage
from reportlab.platypus import ListFlowable, ListItem, Paragraph, SimpleDocTemplate, Table, TableStyle

from .content_tree import (
    NO_MARGIN,
    STAR,
    BulletList,
    Columns,
    DocumentDefinition,
    Image,
    Margin,
    Node,
    Stack,
    Text,
    TextStyle,
)

logger = logging.getLogger(__name__)

PAGE_SIZES = {"LETTER": LETTER, "A4": A4}


@dataclass(frozen=True)
class FontFamily:
    name: str
    normal: Path
    bold: Path
    italic: Path
    bold_italic: Path

    @classmethod
    def from_mapping(cls, family: Mapping[str, object]) -> "FontFamily":
        return cls(
            name=str(family["name"]),
            normal=Path(family["normal"]),
            bold=Path(family["bold"]),
            italic=Path(family["italic"]),
            bold_italic=Path(family["bold_italic"]),
        )

    def face(self, bold: bool = False, italic: bool = False) -> str:
        if bold and italic:
            return f"{self.name}-BoldItalic"
        if bold:
            return f"{self.name}-Bold"
        if italic:
            return f"{self.name}-Italic"
        return self.name


def _register_family(family: FontFamily) -> None:
    variants = (
        (family.face(), family.normal),
        (family.face(bold=True), family.bold),
        (family.face(italic=True), family.italic),
        (family.face(bold=True, italic=True), family.bold_italic),
    )
    for face_name, path in variants:
        pdfmetrics.registerFont(TTFont(face_name, str(path)))
    pdfmetrics.registerFontFamily(
        family.name,
        normal=family.face(),
        bold=family.face(bold=True),
        italic=family.face(italic=True),
        boldItalic=family.face(bold=True, italic=True),
    )


def _image_size(node: Image) -> tuple[float, float]:
    image_width, image_height = ImageReader(str(node.path)).getSize()
    width = float(node.width)
    return width, width * image_height / image_width


def _with_margin(flowable, margin: Margin):
    flowable.spaceBefore = margin[1]
    flowable.spaceAfter = margin[3]
    return flowable


def _footer_canvas(draw_footer: Callable[[Canvas, int, int], None]) -> type[Canvas]:
    """Canvas that defers footers until the page count is known."""

    class FooterCanvas(Canvas):
        def __init__(self, *args, **kwargs):
            super().__init__(*args, **kwargs)
            self._saved_page_states: list[dict] = []

        def showPage(self):
            self._saved_page_states.append(dict(self.__dict__))
            self._startPage()

        def save(self):
            page_count = len(self._saved_page_states)
            for state in self._saved_page_states:
                self.__dict__.update(state)
                draw_footer(self, self._pageNumber, page_count)
                super().showPage()
            super().save()

    return FooterCanvas


class DocumentRenderer:
    """Turns a ``DocumentDefinition`` into PDF bytes.

    The font family is registered with ReportLab once, when the renderer is
    built. A missing or unreadable font file fails here rather than mid-render.
    """

    def __init__(self, fonts: FontFamily) -> None:
        _register_family(fonts)
        self._fonts = fonts

    @property
    def fonts(self) -> FontFamily:
        return self._fonts

    def render(self, definition: DocumentDefinition) -> bytes:
        page_width, page_height = PAGE_SIZES[definition.page_size.upper()]
        left, top, right, bottom = definition.page_margins

        buffer = BytesIO()
        doc = SimpleDocTemplate(
            buffer,
            pagesize=(page_width, page_height),
            leftMargin=left,
            rightMargin=right,
            topMargin=top,
            bottomMargin=bottom,
            title=definition.title or "",
            author=definition.author or "",
        )

        story: list = []
        for node in definition.content:
            story.extend(self._flowables(definition, node, doc.width))

        def draw_footer(canvas: Canvas, current_page: int, page_count: int) -> None:
            if definition.footer is None:
                return
            node = definition.footer(current_page, page_count)
            if not isinstance(node, Image):
                raise TypeError(f"Footer must be an image node, got {type(node).__name__}")
            width, height = _image_size(node)
            if node.alignment == "center":
                x = (page_width - width) / 2
            elif node.alignment == "right":
                x = page_width - width
            else:
                x = 0
            y = max(0, bottom - height)
            canvas.saveState()
            canvas.drawImage(str(node.path), x, y, width=width, height=height, mask="auto")
            canvas.restoreState()

        doc.build(story, canvasmaker=_footer_canvas(draw_footer))
        data = buffer.getvalue()
        buffer.close()
        logger.debug("Rendered %s (%d bytes)", definition.title, len(data))
        return data

    def _paragraph_style(
        self, definition: DocumentDefinition, style_name: str | None, margin: Margin | None
    ) -> tuple[ParagraphStyle, TextStyle]:
        text_style = definition.style(style_name)
        left, top, right, bottom = margin if margin is not None else text_style.margin
        paragraph_style = ParagraphStyle(
            style_name or "default",
            fontName=self._fonts.face(text_style.bold, text_style.italic),
            fontSize=text_style.font_size,
            leading=text_style.font_size * 1.2,
            textColor=colors.HexColor(text_style.color) if text_style.color else colors.black,
            leftIndent=left,
            rightIndent=right,
            spaceBefore=top,
            spaceAfter=bottom,
        )
        return paragraph_style, text_style

    def _flowables(self, definition: DocumentDefinition, node: Node, avail_width: float) -> list:
        if isinstance(node, Text):
            style, text_style = self._paragraph_style(definition, node.style, node.margin)
            markup = escape(node.text).replace("\n", "<br/>")
            if text_style.underline:
                markup = f"<u>{markup}</u>"
            return [Paragraph(markup, style)]

        if isinstance(node, Image):
            width, height = _image_size(node)
            image = PdfImage(str(node.path), width=width, height=height)
            image.hAlign = node.alignment.upper()
            return [_with_margin(image, node.margin)]

        if isinstance(node, BulletList):
            style, _ = self._paragraph_style(definition, node.style, NO_MARGIN)
            items = [ListItem(Paragraph(escape(item), style)) for item in node.items]
            bullets = ListFlowable(
                items,
                bulletType="bullet",
                start="•",
                bulletFontName=style.fontName,
                bulletFontSize=style.fontSize,
                leftIndent=node.margin[0] + 12,
            )
            return [_with_margin(bullets, node.margin)]

        if isinstance(node, Stack):
            flowables: list = []
            for child in node.content:
                flowables.extend(self._flowables(definition, child, avail_width))
            if flowables and node.margin[1]:
                flowables[0].spaceBefore = node.margin[1]
            if flowables and node.margin[3]:
                flowables[-1].spaceAfter = node.margin[3]
            return flowables

        if isinstance(node, Columns):
            return [self._columns_table(definition, node, avail_width)]

        raise TypeError(f"Unsupported content node: {type(node).__name__}")

    def _columns_table(self, definition: DocumentDefinition, node: Columns, avail_width: float) -> Table:
        widths = self._column_widths(node, avail_width)
        cells: list = []
        col_widths: list[float] = []
        table_style = [
            ("VALIGN", (0, 0), (-1, -1), "TOP"),
            ("LEFTPADDING", (0, 0), (-1, -1), 0),
            ("RIGHTPADDING", (0, 0), (-1, -1), 0),
            ("TOPPADDING", (0, 0), (-1, -1), 0),
            ("BOTTOMPADDING", (0, 0), (-1, -1), 0),
        ]
        for index, (column, width) in enumerate(zip(node.columns, widths)):
            if index and node.column_gap:
                cells.append("")
                col_widths.append(node.column_gap)
            if isinstance(column.content, Image):
                col = len(cells)
                table_style.append(("ALIGN", (col, 0), (col, 0), column.content.alignment.upper()))
            cells.append(self._flowables(definition, column.content, width))
            col_widths.append(width)

        table = Table([cells], colWidths=col_widths, hAlign="LEFT")
        table.setStyle(TableStyle(table_style))
        return _with_margin(table, node.margin)

    @staticmethod
    def _column_widths(node: Columns, avail_width: float) -> list[float]:
        gaps = node.column_gap * max(len(node.columns) - 1, 0)
        fixed = sum(column.width for column in node.columns if column.width != STAR)
        stars = sum(1 for column in node.columns if column.width == STAR)
        remaining = max(avail_width - fixed - gaps, 0)
        star_width = remaining / stars if stars else 0
        return [star_width if column.width == STAR else float(column.width) for column in node.columns]


@lru_cache(maxsize=1)
def get_document_renderer() -> DocumentRenderer:
    """Process-wide renderer built from ``HRPORTAL_FONT_FAMILY``."""
    fonts = FontFamily.from_mapping(settings.HRPORTAL_FONT_FAMILY)
    logger.info("Registering font family %s for offer letters", fonts.name)
    return DocumentRenderer(fonts)


@receiver(setting_changed)
def _reset_renderer(sender, setting, **kwargs):
    if setting == "HRPORTAL_FONT_FAMILY":
        get_document_renderer.cache_clear()

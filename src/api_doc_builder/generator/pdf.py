"""PDF renderer: turns a Layout into a paginated document with reportlab."""

import logging
from datetime import datetime
from pathlib import Path
from urllib.parse import quote
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import cm
from reportlab.platypus import Flowable, PageBreak, Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from api_doc_builder.generator.layout import (
    BodyText,
    GroupHeader,
    Heading,
    Instruction,
    Layout,
    MediaTypes,
    ParametersTable,
    ResponsesTable,
    Subtitle,
)

logger = logging.getLogger(__name__)

MARGIN = 2 * cm
PARAMETER_COL_WIDTHS = [3.5 * cm, 2 * cm, 6.5 * cm, 2.5 * cm, 2.5 * cm]
RESPONSE_COL_WIDTHS = [2.5 * cm, 14.5 * cm]
HEADER_SHADING = colors.lightgrey
GRID_COLOR = colors.grey
LINK_COLOR = "#1d4ed8"


class _OutlineEntry(Flowable):
    """Zero-size flowable that adds a PDF outline (bookmark) entry where it lands."""

    def __init__(self, title: str, key: str, level: int):
        super().__init__()
        self.title = title
        self.key = key
        self.level = level

    def wrap(self, availWidth, availHeight):
        return 0, 0

    def draw(self):
        self.canv.bookmarkPage(self.key)
        self.canv.addOutlineEntry(self.title, self.key, level=self.level, closed=False)


class PdfRenderer:
    """Renders a Layout to PDF: cover page, contents, then one section per group."""

    def __init__(self):
        styles = getSampleStyleSheet()
        styles["Normal"].fontName = "Helvetica"
        styles["Normal"].fontSize = 10
        styles.add(ParagraphStyle(name="CoverTitle", parent=styles["Title"], fontSize=22, leading=26, spaceAfter=2 * cm, alignment=TA_CENTER))
        styles.add(ParagraphStyle(name="CoverLine", parent=styles["Normal"], alignment=TA_CENTER, spaceAfter=0.5 * cm))
        styles.add(ParagraphStyle(name="GroupTitle", parent=styles["Heading1"], fontSize=16, spaceBefore=0.5 * cm, spaceAfter=0.5 * cm))
        styles.add(ParagraphStyle(name="EndpointTitle", parent=styles["Heading2"], fontSize=13, spaceBefore=0.5 * cm, spaceAfter=0.2 * cm))
        styles.add(ParagraphStyle(name="EndpointSubtitle", parent=styles["Normal"], fontName="Helvetica-Oblique", spaceAfter=0.2 * cm))
        styles.add(ParagraphStyle(name="TocGroup", parent=styles["Heading3"], fontName="Helvetica-BoldOblique", spaceBefore=0.3 * cm))
        styles.add(ParagraphStyle(name="TocEntry", parent=styles["Normal"], leftIndent=1 * cm, spaceAfter=0.1 * cm))
        styles.add(ParagraphStyle(name="Cell", parent=styles["Normal"], fontSize=9, leading=11))
        styles.add(ParagraphStyle(name="HeaderCell", parent=styles["Cell"], fontName="Helvetica-Bold"))
        self.styles = styles
        self._outline_count = 0

    def render(self, layout: Layout, output: Path, generated_at: datetime | None = None) -> Path:
        """Write the PDF for ``layout`` to ``output`` and return the path."""
        generated_at = generated_at or datetime.now()
        meta = layout.meta

        output.parent.mkdir(parents=True, exist_ok=True)
        doc = SimpleDocTemplate(
            str(output),
            pagesize=A4,
            leftMargin=MARGIN,
            rightMargin=MARGIN,
            topMargin=MARGIN,
            bottomMargin=MARGIN,
            title=meta.title,
            subject=meta.subject,
            author=meta.author,
            creator="api-doc-builder",
        )

        self._outline_count = 0
        elements: list[Flowable] = []
        elements.extend(self._cover(layout, generated_at))
        elements.extend(self._contents(layout))
        for instruction in layout.instructions:
            elements.extend(self._instruction(instruction))

        doc.build(elements)
        logger.info("Rendered %d instructions to %s", len(layout.instructions), output)
        return output

    def _cover(self, layout: Layout, generated_at: datetime) -> list[Flowable]:
        meta = layout.meta
        s = self.styles
        elements: list[Flowable] = [Spacer(1, 4 * cm), Paragraph(escape(meta.title), s["CoverTitle"])]
        if meta.subject:
            elements.append(Paragraph(escape(meta.subject), s["CoverLine"]))
        elements.append(Paragraph(f"Version: {escape(meta.version or 'unknown')}", s["CoverLine"]))
        if meta.author:
            elements.append(Paragraph(f"Author: {escape(meta.author)}", s["CoverLine"]))
        elements.append(Paragraph(f"Generated: {generated_at:%Y-%m-%d %H:%M}", s["CoverLine"]))
        elements.append(PageBreak())
        return elements

    def _contents(self, layout: Layout) -> list[Flowable]:
        s = self.styles
        elements: list[Flowable] = [Paragraph("Contents", s["GroupTitle"])]
        if not layout.navigation:
            elements.append(Paragraph("No endpoints are defined in this document.", s["Normal"]))
            return elements

        current = None
        for link in layout.navigation:
            if link.category != current:
                current = link.category
                elements.append(Paragraph(escape(current), s["TocGroup"]))
            elements.append(Paragraph(link_markup(link.anchor, link.label), s["TocEntry"]))
        return elements

    def _instruction(self, instruction: Instruction) -> list[Flowable]:
        s = self.styles

        if isinstance(instruction, GroupHeader):
            return [
                PageBreak(),
                self._outline(instruction.category, level=0),
                Paragraph(escape(instruction.category), s["GroupTitle"]),
            ]

        if isinstance(instruction, Heading):
            label = f"{instruction.method} {instruction.path}"
            return [
                self._outline(label, level=1),
                Paragraph(anchor_markup(instruction.anchor, label), s["EndpointTitle"]),
            ]

        if isinstance(instruction, Subtitle):
            return [Paragraph(escape(instruction.text), s["EndpointSubtitle"])]

        if isinstance(instruction, BodyText):
            text = escape(instruction.text).replace("\n", "<br/>")
            return [Paragraph(text, s["Normal"]), Spacer(1, 0.2 * cm)]

        if isinstance(instruction, MediaTypes):
            consumes = ", ".join(instruction.consumes) or "none"
            produces = ", ".join(instruction.produces) or "none"
            return [
                Paragraph(f"<b>Consumes:</b> {escape(consumes)}", s["Normal"]),
                Paragraph(f"<b>Produces:</b> {escape(produces)}", s["Normal"]),
                Spacer(1, 0.2 * cm),
            ]

        if isinstance(instruction, ParametersTable):
            return [
                Paragraph("<b>Parameters</b>", s["Normal"]),
                Spacer(1, 0.1 * cm),
                self._table(instruction.columns, instruction.rows, PARAMETER_COL_WIDTHS),
            ]

        if isinstance(instruction, ResponsesTable):
            return [
                Paragraph("<b>Responses</b>", s["Normal"]),
                Spacer(1, 0.1 * cm),
                self._table(instruction.columns, instruction.rows, RESPONSE_COL_WIDTHS),
            ]

        raise TypeError(f"Unsupported layout instruction: {type(instruction).__name__}")

    def _outline(self, title: str, level: int) -> _OutlineEntry:
        self._outline_count += 1
        return _OutlineEntry(title, f"outline-{self._outline_count}", level)

    def _table(self, columns, rows, col_widths) -> Table:
        header = [Paragraph(escape(c), self.styles["HeaderCell"]) for c in columns]
        body = [[Paragraph(escape(cell), self.styles["Cell"]) for cell in row] for row in rows]
        table = Table([header, *body], colWidths=col_widths, repeatRows=1, hAlign="LEFT", spaceAfter=0.4 * cm)
        table.setStyle(
            TableStyle(
                [
                    ("BACKGROUND", (0, 0), (-1, 0), HEADER_SHADING),
                    ("GRID", (0, 0), (-1, -1), 0.5, GRID_COLOR),
                    ("VALIGN", (0, 0), (-1, -1), "TOP"),
                ]
            )
        )
        return table


def render_pdf(layout: Layout, output: Path, generated_at: datetime | None = None) -> Path:
    """Convenience wrapper around PdfRenderer.render."""
    return PdfRenderer().render(layout, output, generated_at=generated_at)


def link_markup(anchor: str, label: str) -> str:
    """Paragraph markup for an internal link to a named destination."""
    return f'<a href="#{_destination(anchor)}" color="{LINK_COLOR}">{escape(label)}</a>'


def anchor_markup(anchor: str, label: str) -> str:
    """Paragraph markup that defines a named destination in front of the label."""
    return f'<a name="{_destination(anchor)}"/>{escape(label)}'


def _destination(anchor: str) -> str:
    # Percent-encoded so any anchor is a valid, whitespace-free destination name
    return quote(anchor, safe="")

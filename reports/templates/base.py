"""
Shared building blocks for document templates (delivery notes, invoices).
"""

from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from reportlab.lib.units import cm
from reportlab.platypus import Paragraph, Spacer, Table

from core.services.reporting.canvas import draw_footer, draw_header
from core.services.reporting.datatable import DataTable
from core.services.reporting.styles import get_info_box_style
from core.services.reporting.template import CONTENT_WIDTH, ReportTemplate, format_value


# Column aliases: the first entry is the name used by our own sample data,
# the others are accepted from XML payloads.
ARTICLE_COLUMNS = ('Artikal', 'Name', 'ItemName')
CODE_COLUMNS = ('AltSifa', 'ItemId', 'Code')
UNIT_COLUMNS = ('EDM', 'Unit')
QUANTITY_COLUMNS = ('Kolicina', 'Quantity')
PRICE_COLUMNS = ('Cena', 'Price')


def to_decimal(value: Any) -> Optional[Decimal]:
    """
    Parse a cell value as a Decimal, accepting '1.234,50' style input.

    NaN and infinite values count as missing.
    """
    if value is None or value == "":
        return None
    if isinstance(value, Decimal):
        return _finite(value)
    if isinstance(value, (int, float)):
        return _finite(Decimal(str(value)))

    text = str(value).strip().replace(" ", "")
    if "," in text and "." in text:
        text = text.replace(".", "").replace(",", ".")
    elif "," in text:
        text = text.replace(",", ".")
    try:
        return _finite(Decimal(text))
    except InvalidOperation:
        return None


def _finite(value: Decimal) -> Optional[Decimal]:
    return value if value.is_finite() else None


def format_amount(value: Optional[Decimal]) -> str:
    if value is None:
        return ""
    return f"{value:,.2f}"


def pick(row: dict, names: tuple[str, ...]) -> Any:
    """First non-empty value among the aliased columns"""
    for name in names:
        value = row.get(name)
        if value not in (None, ""):
            return value
    return None


class DocumentReport(ReportTemplate):
    """
    Base template for trade documents.

    Provides the issuer/customer boxes, line-item detection and the page
    header/footer. Subclasses build the document-specific story.
    """

    document_label = "Document"

    def document_number(self) -> str:
        return self.field('Broj') or self.field('DocumentId')

    def line_table(self) -> Optional[DataTable]:
        """
        Find the table that holds the line items.

        The detail table is preferred; otherwise the first table in the data
        source that has an article column.
        """
        candidates = []
        if self.detail_table is not None:
            candidates.append(self.detail_table)
        if self.data_source is not None:
            candidates.extend(self.data_source.tables)

        for table in candidates:
            if any(table.has_column(name) for name in ARTICLE_COLUMNS) and len(table):
                return table
        return None

    def _labelled_lines(self, fields: list[tuple[str, str]]) -> list:
        lines = []
        for label, name in fields:
            value = self.field(name)
            if value:
                lines.append(self.paragraph(f"{label}: {value}"))
        return lines

    def build_parties(self) -> Optional[Table]:
        """Issuer and customer side by side"""
        issuer = self._labelled_lines([
            ('Company', 'ImeNaFirma'),
            ('Address', 'Adresa'),
            ('Phone', 'Telefon'),
            ('Tax number', 'DanocenBroj'),
            ('Bank account', 'BankaDeponent'),
        ])
        customer = self._labelled_lines([
            ('Customer', 'Naziv'),
            ('Customer code', 'Sifra'),
            ('EDB', 'EDB'),
            ('Phone', 'Telefoni'),
            ('Email', 'Email'),
        ])
        if not issuer and not customer:
            return None

        half = CONTENT_WIDTH / 2
        table = Table([[issuer or '', customer or '']], colWidths=[half, half])
        table.setStyle(get_info_box_style())
        return table

    def build_document_info(self, extra: Optional[list[tuple[str, str]]] = None) -> list:
        info = [(f"{self.document_label} No.", self.document_number()), ("Date", self.field('Datum'))]
        info.extend(extra or [])
        return [
            self.paragraph(f"{label}: {value}")
            for label, value in info
            if value
        ]

    def build_notes(self) -> list:
        notes = self.field('Zabeleska')
        if not notes:
            return []
        return [
            Paragraph("Notes", self.styles['ReportSubheading']),
            self.paragraph(notes, 'ReportNote'),
        ]

    def build_signatures(self, left: str, right: str) -> Table:
        half = CONTENT_WIDTH / 2
        table = Table(
            [['', ''], [self.paragraph(left), self.paragraph(right, 'ReportBodyRight')]],
            colWidths=[half, half],
            rowHeights=[1.5 * cm, None],
        )
        table.setStyle([
            ('LINEABOVE', (0, 1), (0, 1), 0.5, 'grey'),
            ('LINEABOVE', (1, 1), (1, 1), 0.5, 'grey'),
        ])
        return table

    def spacer(self, height: float = 0.4):
        return Spacer(1, height * cm)

    def draw_header_footer(self, canvas, doc):
        """Draw header and footer on each page"""
        company = self.field('ImeNaFirma') or self.title
        number = self.document_number()
        draw_header(canvas, doc, company, f"{self.title} {number}".strip())
        draw_footer(canvas, doc, f"Generated on {datetime.now().strftime('%d.%m.%Y %H:%M')}")


def cell(template: ReportTemplate, value: Any, right: bool = False):
    return template.paragraph(format_value(value), 'TableCellRight' if right else 'TableCell')

"""
Default Faktura (Invoice) Template

Template for generating invoice PDF reports.
"""

from decimal import Decimal

from reportlab.lib.units import cm
from reportlab.platypus import Paragraph, Table

from core.services.reporting.styles import get_table_style
from core.services.reporting.template import format_value

from .base import (
    ARTICLE_COLUMNS,
    PRICE_COLUMNS,
    QUANTITY_COLUMNS,
    UNIT_COLUMNS,
    DocumentReport,
    cell,
    format_amount,
    pick,
    to_decimal,
)


class DefaultFakturaReport(DocumentReport):
    """Template for invoices"""

    title = "Faktura"
    document_label = "Invoice"
    parameter_names = ("BrojNaFaktura", "ImeNaFaktura", "DatumNaValuta")

    def document_number(self) -> str:
        return self.parameter('BrojNaFaktura') or super().document_number()

    def build_story(self) -> list:
        """
        Build the PDF story from the bound data.

        Uses the same detail row fields as the delivery note, plus
        'Cena' (unit price). Parameters:
            BrojNaFaktura: invoice number (overrides 'Broj')
            ImeNaFaktura: document title (defaults to 'FAKTURA')
            DatumNaValuta: due date (overrides 'Valuta')
        """
        heading = self.parameter('ImeNaFaktura', 'FAKTURA')
        story = [self.paragraph(heading, 'ReportTitle')]

        parties = self.build_parties()
        if parties is not None:
            story.append(parties)
            story.append(self.spacer())

        due_date = self.parameter('DatumNaValuta') or self.field('Valuta')
        story.extend(self.build_document_info([("Due date", due_date)]))
        story.append(self.spacer())

        lines = self.line_table()
        if lines is not None:
            story.append(Paragraph("Invoice lines", self.styles['ReportHeading']))
            story.extend(self._build_lines(lines))
            story.append(self.spacer())

        story.extend(self.build_extra_tables(exclude=(lines,) if lines is not None else ()))

        bank_account = self.field('BankaDeponent')
        if bank_account:
            story.append(self.paragraph(f"Please pay to account: {bank_account}"))

        story.extend(self.build_notes())
        story.append(self.spacer(1))
        story.append(self.build_signatures("Issued by", "Received by"))

        return story

    def _build_lines(self, lines) -> list:
        table_data = [[
            self.paragraph(label, 'TableHeader')
            for label in ('#', 'Article', 'Unit', 'Quantity', 'Price', 'Amount')
        ]]

        grand_total = Decimal('0')
        for index, row in enumerate(lines, start=1):
            quantity = to_decimal(pick(row, QUANTITY_COLUMNS))
            price = to_decimal(pick(row, PRICE_COLUMNS))
            amount = quantity * price if quantity is not None and price is not None else None
            if amount is not None:
                grand_total += amount

            table_data.append([
                cell(self, index),
                cell(self, pick(row, ARTICLE_COLUMNS)),
                cell(self, pick(row, UNIT_COLUMNS)),
                cell(self, format_value(pick(row, QUANTITY_COLUMNS)), right=True),
                cell(self, format_amount(price), right=True),
                cell(self, format_amount(amount), right=True),
            ])

        table = Table(
            table_data,
            colWidths=[1 * cm, 7 * cm, 1.6 * cm, 2.2 * cm, 2.4 * cm, 2.8 * cm],
            repeatRows=1,
        )
        table.setStyle(get_table_style())

        return [
            table,
            self.paragraph(f"Total: {format_amount(grand_total)}", 'ReportTotal'),
        ]

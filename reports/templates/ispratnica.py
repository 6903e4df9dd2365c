"""
Ispratnica (Delivery Note) Template

Template for generating delivery note PDF reports.
"""

from reportlab.lib.units import cm
from reportlab.platypus import Paragraph, Table

from core.services.reporting.styles import get_table_style

from .base import (
    ARTICLE_COLUMNS,
    CODE_COLUMNS,
    QUANTITY_COLUMNS,
    UNIT_COLUMNS,
    DocumentReport,
    cell,
    format_amount,
    pick,
    to_decimal,
)


class IspratnicaReport(DocumentReport):
    """Template for delivery notes"""

    title = "Ispratnica"
    document_label = "Delivery note"
    parameter_names = ("Faktura",)

    def document_number(self) -> str:
        return self.parameter('Faktura') or super().document_number()

    def build_story(self) -> list:
        """
        Build the PDF story from the bound data.

        Expected detail row structure (all optional):
        {
            'Broj': str, 'Datum': str, 'Valuta': str,
            'ImeNaFirma': str, 'Adresa': str, 'Telefon': str,
            'DanocenBroj': str, 'BankaDeponent': str,
            'Naziv': str, 'Sifra': str, 'EDB': str, 'Telefoni': str, 'Email': str,
            'Artikal': str, 'AltSifa': str, 'EDM': str, 'Kolicina': int,
            'Zabeleska': str
        }
        One detail row per delivered article; header fields are read from the first row.
        """
        story = [Paragraph("ISPRATNICA", self.styles['ReportTitle'])]

        parties = self.build_parties()
        if parties is not None:
            story.append(parties)
            story.append(self.spacer())

        story.extend(self.build_document_info([("Due date", self.field('Valuta'))]))
        story.append(self.spacer())

        lines = self.line_table()
        if lines is not None:
            story.append(Paragraph("Delivered articles", self.styles['ReportHeading']))
            story.extend(self._build_lines(lines))
        else:
            detail = self.detail_table
            grid = self.grid(detail) if detail is not None and len(detail) else None
            if grid is not None:
                story.append(self.paragraph(detail.name, 'ReportHeading'))
                story.append(grid)

        story.append(self.spacer())
        story.extend(self.build_extra_tables(exclude=(lines,) if lines is not None else ()))
        story.extend(self.build_notes())
        story.append(self.spacer(1))
        story.append(self.build_signatures("Delivered by", "Received by"))

        return story

    def _build_lines(self, lines) -> list:
        table_data = [[
            self.paragraph(label, 'TableHeader')
            for label in ('#', 'Code', 'Article', 'Unit', 'Quantity')
        ]]

        total_quantity = None
        for index, row in enumerate(lines, start=1):
            quantity = to_decimal(pick(row, QUANTITY_COLUMNS))
            if quantity is not None:
                total_quantity = (total_quantity or 0) + quantity

            table_data.append([
                cell(self, index),
                cell(self, pick(row, CODE_COLUMNS)),
                cell(self, pick(row, ARTICLE_COLUMNS)),
                cell(self, pick(row, UNIT_COLUMNS)),
                cell(self, pick(row, QUANTITY_COLUMNS), right=True),
            ])

        table = Table(
            table_data,
            colWidths=[1 * cm, 2.5 * cm, 9 * cm, 1.8 * cm, 2.7 * cm],
            repeatRows=1,
        )
        table.setStyle(get_table_style())

        story = [table]
        if total_quantity is not None:
            story.append(self.paragraph(
                f"Total quantity: {format_amount(total_quantity)}", 'ReportTotal'
            ))
        return story

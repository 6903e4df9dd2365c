"""
Core Report Service

Provides PDF rendering of bound report templates.
"""

import logging
from io import BytesIO

from reportlab.lib.pagesizes import A4
from reportlab.lib.units import cm
from reportlab.platypus import SimpleDocTemplate

from .template import ReportTemplate


logger = logging.getLogger(__name__)


class ReportService:
    """
    Core service for PDF report generation.

    This service provides:
    - PDF rendering using ReportLab Platypus
    - Page header/footer hooks supplied by the template
    - Repeatable output for the same template state
    """

    def render(self, template: ReportTemplate) -> bytes:
        """
        Render a template to PDF bytes.

        The template must already have its data and parameters bound.

        Args:
            template: Template instance obtained from the registry

        Returns:
            PDF content as bytes
        """
        buffer = BytesIO()
        self.export_to_pdf(template, buffer)
        pdf_bytes = buffer.getvalue()
        buffer.close()

        logger.debug(f"Rendered {type(template).__name__}: {len(pdf_bytes)} bytes")
        return pdf_bytes

    def export_to_pdf(self, template: ReportTemplate, output) -> None:
        """
        Lay out the template and write the PDF to a file-like object.

        Args:
            template: Template instance with bound data
            output: Binary file-like object receiving the PDF
        """
        doc = SimpleDocTemplate(
            output,
            pagesize=A4,
            rightMargin=2 * cm,
            leftMargin=2 * cm,
            topMargin=2.2 * cm,
            bottomMargin=2.2 * cm,
            title=template.title,
        )

        story = template.build_story()

        # Check if template has custom header/footer
        if hasattr(template, 'draw_header_footer'):
            def on_page(canvas, doc_obj):
                template.draw_header_footer(canvas, doc_obj)

            doc.build(story, onFirstPage=on_page, onLaterPages=on_page)
        else:
            doc.build(story)

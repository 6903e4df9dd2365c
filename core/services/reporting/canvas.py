"""
Canvas Helpers

Provides helper functions for drawing page headers, footers and page numbers.
"""

from reportlab.lib import colors
from reportlab.lib.units import cm


def draw_page_number(canvas, doc):
    """
    Draw the page number at the bottom right.

    Args:
        canvas: ReportLab canvas object
        doc: ReportLab document object
    """
    canvas.saveState()
    canvas.setFont('Helvetica', 8)
    canvas.setFillColor(colors.HexColor('#666666'))
    canvas.drawRightString(
        doc.pagesize[0] - 2 * cm,
        1.2 * cm,
        f"Page {canvas.getPageNumber()}"
    )
    canvas.restoreState()


def draw_header(canvas, doc, left_text, right_text=None):
    """
    Draw a one-line page header with a rule underneath.

    Args:
        canvas: ReportLab canvas object
        doc: ReportLab document object
        left_text: Text drawn on the left (usually the issuing company)
        right_text: Optional text drawn on the right (usually the document number)
    """
    width, height = doc.pagesize
    canvas.saveState()

    canvas.setFont('Helvetica-Bold', 9)
    canvas.setFillColor(colors.HexColor('#1a1a1a'))
    canvas.drawString(2 * cm, height - 1.3 * cm, left_text)

    if right_text:
        canvas.setFont('Helvetica', 9)
        canvas.drawRightString(width - 2 * cm, height - 1.3 * cm, right_text)

    canvas.setStrokeColor(colors.HexColor('#cccccc'))
    canvas.setLineWidth(0.5)
    canvas.line(2 * cm, height - 1.5 * cm, width - 2 * cm, height - 1.5 * cm)

    canvas.restoreState()


def draw_footer(canvas, doc, footer_text=None):
    """
    Draw a footer rule, optional text on the left and the page number.

    Args:
        canvas: ReportLab canvas object
        doc: ReportLab document object
        footer_text: Optional text for the left side
    """
    canvas.saveState()

    canvas.setStrokeColor(colors.HexColor('#cccccc'))
    canvas.setLineWidth(0.5)
    canvas.line(2 * cm, 1.6 * cm, doc.pagesize[0] - 2 * cm, 1.6 * cm)

    if footer_text:
        canvas.setFont('Helvetica', 8)
        canvas.setFillColor(colors.HexColor('#666666'))
        canvas.drawString(2 * cm, 1.2 * cm, footer_text)

    canvas.restoreState()
    draw_page_number(canvas, doc)

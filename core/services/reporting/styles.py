"""
PDF Styling

Provides the paragraph and table styles shared by all report templates.
"""

from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER, TA_LEFT, TA_RIGHT
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.platypus import TableStyle


HEADER_BACKGROUND = colors.HexColor('#2d3748')
STRIPE_BACKGROUND = colors.HexColor('#f4f6f8')
MUTED_TEXT = colors.HexColor('#666666')


def get_report_styles():
    """
    Get standard report styles.

    Returns:
        Dictionary of ParagraphStyle objects keyed by style name
    """
    styles = getSampleStyleSheet()

    return {
        'ReportTitle': ParagraphStyle(
            'ReportTitle',
            parent=styles['Heading1'],
            fontSize=18,
            textColor=colors.HexColor('#1a1a1a'),
            spaceAfter=14,
            alignment=TA_CENTER,
            fontName='Helvetica-Bold'
        ),
        'ReportHeading': ParagraphStyle(
            'ReportHeading',
            parent=styles['Heading2'],
            fontSize=12,
            textColor=colors.HexColor('#333333'),
            spaceAfter=8,
            spaceBefore=10,
            alignment=TA_LEFT,
            fontName='Helvetica-Bold'
        ),
        'ReportSubheading': ParagraphStyle(
            'ReportSubheading',
            parent=styles['Heading3'],
            fontSize=10,
            textColor=colors.HexColor('#555555'),
            spaceAfter=6,
            spaceBefore=6,
            alignment=TA_LEFT,
            fontName='Helvetica-Bold'
        ),
        'ReportBody': ParagraphStyle(
            'ReportBody',
            parent=styles['BodyText'],
            fontSize=9,
            leading=12,
            alignment=TA_LEFT,
            fontName='Helvetica'
        ),
        'ReportBodyRight': ParagraphStyle(
            'ReportBodyRight',
            parent=styles['BodyText'],
            fontSize=9,
            leading=12,
            alignment=TA_RIGHT,
            fontName='Helvetica'
        ),
        'ReportTotal': ParagraphStyle(
            'ReportTotal',
            parent=styles['BodyText'],
            fontSize=11,
            alignment=TA_RIGHT,
            fontName='Helvetica-Bold'
        ),
        'ReportNote': ParagraphStyle(
            'ReportNote',
            parent=styles['Normal'],
            fontSize=8,
            textColor=MUTED_TEXT,
            alignment=TA_LEFT,
            fontName='Helvetica-Oblique'
        ),
        'TableHeader': ParagraphStyle(
            'TableHeader',
            parent=styles['Normal'],
            fontSize=8,
            textColor=colors.white,
            alignment=TA_LEFT,
            fontName='Helvetica-Bold'
        ),
        'TableCell': ParagraphStyle(
            'TableCell',
            parent=styles['Normal'],
            fontSize=8,
            alignment=TA_LEFT,
            fontName='Helvetica'
        ),
        'TableCellRight': ParagraphStyle(
            'TableCellRight',
            parent=styles['Normal'],
            fontSize=8,
            alignment=TA_RIGHT,
            fontName='Helvetica'
        ),
    }


def get_table_style():
    """
    Get the style for line-item and data tables.

    Returns:
        TableStyle with a dark header row and striped body rows
    """
    return TableStyle([
        ('BACKGROUND', (0, 0), (-1, 0), HEADER_BACKGROUND),
        ('BOTTOMPADDING', (0, 0), (-1, 0), 6),
        ('TOPPADDING', (0, 0), (-1, 0), 6),

        ('BOTTOMPADDING', (0, 1), (-1, -1), 4),
        ('TOPPADDING', (0, 1), (-1, -1), 4),
        ('ROWBACKGROUNDS', (0, 1), (-1, -1), [colors.white, STRIPE_BACKGROUND]),

        ('GRID', (0, 0), (-1, -1), 0.25, colors.grey),
        ('VALIGN', (0, 0), (-1, -1), 'TOP'),
    ])


def get_info_box_style():
    """
    Get the style for the label/value boxes at the top of a document
    (issuer, customer, document number).

    Returns:
        TableStyle with an outer border and no inner grid
    """
    return TableStyle([
        ('BOX', (0, 0), (-1, -1), 0.5, colors.grey),
        ('VALIGN', (0, 0), (-1, -1), 'TOP'),
        ('LEFTPADDING', (0, 0), (-1, -1), 6),
        ('RIGHTPADDING', (0, 0), (-1, -1), 6),
    ])

"""
Core Report Service

Provides template resolution, tabular report data and PDF rendering.
"""

from .datatable import DataColumn, DataSet, DataTable, XmlDataError, parse_xml_dataset
from .registry import ReportRegistry
from .service import ReportService
from .template import ReportTemplate

__all__ = [
    'DataColumn',
    'DataSet',
    'DataTable',
    'XmlDataError',
    'parse_xml_dataset',
    'ReportRegistry',
    'ReportService',
    'ReportTemplate',
]

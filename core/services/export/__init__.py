"""
Export Services

Batch and single-report PDF export.
"""

from .dto import (
    BatchExportResult,
    DocumentDescriptor,
    ExportedDocument,
    ExportFilter,
    SingleExportRequest,
    SingleExportResult,
)
from .lookup import DocumentLookup, InMemoryDocumentLookup
from .sample_data import ReportDataProvider
from .service import ExportService, get_export_service

__all__ = [
    'BatchExportResult',
    'DocumentDescriptor',
    'ExportedDocument',
    'ExportFilter',
    'SingleExportRequest',
    'SingleExportResult',
    'DocumentLookup',
    'InMemoryDocumentLookup',
    'ReportDataProvider',
    'ExportService',
    'get_export_service',
]

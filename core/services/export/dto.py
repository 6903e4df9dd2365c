"""
Data Transfer Objects for the export services
"""

import base64
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from django.utils import timezone


STATUS_SUCCESS = "Success"
STATUS_ERROR = "Error"
NO_TEMPLATE_STATUS = "Error: No report template"


@dataclass(frozen=True)
class DocumentDescriptor:
    """A document selected for export"""

    document_id: str
    document_type: str
    status: str
    created_date: datetime


@dataclass(frozen=True)
class ExportFilter:
    """
    Criteria for selecting documents to export.

    All fields are optional. When document_ids is non-empty, exactly those
    documents are exported.
    """

    document_type: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    status: Optional[str] = None
    document_ids: tuple[str, ...] = ()


@dataclass(frozen=True)
class ExportedDocument:
    """Outcome of exporting one document"""

    document_id: str
    document_type: str
    status: str
    created_date: datetime
    pdf_content: Optional[bytes] = None

    @classmethod
    def succeeded(cls, document: DocumentDescriptor, pdf_content: bytes) -> "ExportedDocument":
        return cls(
            document_id=document.document_id,
            document_type=document.document_type,
            status=document.status,
            created_date=document.created_date,
            pdf_content=pdf_content,
        )

    @classmethod
    def failed(cls, document: DocumentDescriptor, status: str) -> "ExportedDocument":
        return cls(
            document_id=document.document_id,
            document_type=document.document_type,
            status=status,
            created_date=document.created_date,
        )

    @property
    def is_error(self) -> bool:
        return self.pdf_content is None


@dataclass
class BatchExportResult:
    """Result of a batch export: one entry per selected document"""

    documents: list[ExportedDocument]
    export_date: datetime = field(default_factory=timezone.now)

    @property
    def total_count(self) -> int:
        return len(self.documents)


@dataclass(frozen=True)
class SingleExportRequest:
    """Request to render one report from parameters or an XML payload"""

    report_type: str
    output_path: Optional[str] = None
    xml_data_base64: Optional[str] = None
    parameters: dict[str, str] = field(default_factory=dict)


@dataclass
class SingleExportResult:
    """
    Result of a single report export.

    status is "Success" or "Error". On error pdf_content is None, except when
    rendering succeeded but saving to output_path failed.
    """

    report_type: str
    status: str = STATUS_SUCCESS
    pdf_content: Optional[bytes] = None
    pdf_content_base64: Optional[str] = None
    saved_file_path: Optional[str] = None
    pdf_size_bytes: int = 0
    generated_date: datetime = field(default_factory=timezone.now)
    error_message: Optional[str] = None

    @classmethod
    def success(cls, report_type: str, pdf_content: bytes,
                saved_file_path: Optional[str] = None) -> "SingleExportResult":
        return cls(
            report_type=report_type,
            pdf_content=pdf_content,
            pdf_content_base64=base64.b64encode(pdf_content).decode("ascii"),
            saved_file_path=saved_file_path,
            pdf_size_bytes=len(pdf_content),
        )

    @classmethod
    def error(cls, report_type: str, message: str,
              pdf_content: Optional[bytes] = None) -> "SingleExportResult":
        return cls(
            report_type=report_type,
            status=STATUS_ERROR,
            error_message=message,
            pdf_content=pdf_content,
            pdf_content_base64=base64.b64encode(pdf_content).decode("ascii") if pdf_content else None,
            pdf_size_bytes=len(pdf_content) if pdf_content else 0,
        )

    @property
    def is_success(self) -> bool:
        return self.status == STATUS_SUCCESS

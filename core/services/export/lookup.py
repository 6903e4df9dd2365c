"""
Document Lookup

Selects the documents a batch export should render.
"""

import logging
from datetime import datetime, timedelta, timezone as dt_timezone
from typing import Callable, Optional, Sequence

from django.utils import timezone

from core.services.config import DEFAULT_BATCH_SIZE

from .dto import DocumentDescriptor, ExportFilter


logger = logging.getLogger(__name__)


UNKNOWN_DOCUMENT_TYPE = "Unknown"


def _aware(value: datetime) -> datetime:
    """Treat naive bounds as UTC so they compare with generated timestamps"""
    if timezone.is_naive(value):
        return timezone.make_aware(value, dt_timezone.utc)
    return value


class DocumentLookup:
    """Interface for document sources used by the export service."""

    async def find(self, export_filter: ExportFilter) -> list[DocumentDescriptor]:
        """
        Find the documents matching a filter.

        Args:
            export_filter: Selection criteria

        Returns:
            Matching documents; an empty list when nothing matches
        """
        raise NotImplementedError


class InMemoryDocumentLookup(DocumentLookup):
    """
    Document lookup backed by generated sample documents.

    Generates one document per requested id, or a default batch of
    ``batch_size`` documents named doc1..docN. Document types cycle through
    ``supported_types`` unless the filter names a type.
    """

    def __init__(
        self,
        supported_types: Sequence[str],
        batch_size: int = DEFAULT_BATCH_SIZE,
        clock: Callable[[], datetime] = timezone.now,
    ):
        self.supported_types = list(supported_types)
        self.batch_size = batch_size
        self.clock = clock

    def _document_type(self, index: int, requested_type: Optional[str]) -> str:
        if requested_type:
            return requested_type
        if self.supported_types:
            return self.supported_types[index % len(self.supported_types)]
        return UNKNOWN_DOCUMENT_TYPE

    def _make_document(self, document_id: str, index: int, requested_type: Optional[str],
                       now: datetime) -> DocumentDescriptor:
        return DocumentDescriptor(
            document_id=document_id,
            document_type=self._document_type(index, requested_type),
            status="Active" if index % 3 == 0 else "Pending",
            created_date=now - timedelta(days=index),
        )

    def generate(self, export_filter: ExportFilter) -> list[DocumentDescriptor]:
        """Generate the candidate documents before predicate filtering"""
        now = self.clock()
        if export_filter.document_ids:
            return [
                self._make_document(document_id, index, export_filter.document_type, now)
                for index, document_id in enumerate(export_filter.document_ids)
            ]
        return [
            self._make_document(f"doc{index}", index, export_filter.document_type, now)
            for index in range(1, self.batch_size + 1)
        ]

    async def find(self, export_filter: ExportFilter) -> list[DocumentDescriptor]:
        documents = self.generate(export_filter)

        if export_filter.start_date is not None:
            start_date = _aware(export_filter.start_date)
            documents = [d for d in documents if d.created_date >= start_date]

        if export_filter.end_date is not None:
            end_date = _aware(export_filter.end_date)
            documents = [d for d in documents if d.created_date <= end_date]

        if export_filter.status:
            documents = [d for d in documents if d.status == export_filter.status]

        logger.debug(f"Document lookup matched {len(documents)} document(s)")
        return documents

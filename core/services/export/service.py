"""
Export Service

Renders documents to PDF: batch exports fan out one task per document,
single exports render one ad-hoc payload.
"""

import asyncio
import base64
import binascii
import logging
import uuid
from pathlib import Path
from typing import Optional

from asgiref.sync import sync_to_async
from django.apps import apps

from core.services.config import ExportSettings, get_export_settings
from core.services.exceptions import ExportCancelled, ReportPayloadError
from core.services.reporting.datatable import DataSet, XmlDataError, parse_xml_dataset
from core.services.reporting.registry import ReportRegistry
from core.services.reporting.service import ReportService
from core.services.reporting.template import ReportTemplate

from .dto import (
    NO_TEMPLATE_STATUS,
    BatchExportResult,
    DocumentDescriptor,
    ExportedDocument,
    ExportFilter,
    SingleExportRequest,
    SingleExportResult,
)
from .lookup import DocumentLookup, InMemoryDocumentLookup
from .sample_data import ReportDataProvider, create_parameter_data


logger = logging.getLogger(__name__)


def decode_payload(payload: str) -> bytes:
    """
    Decode a base64 payload. Embedded whitespace and line breaks are ignored.

    Raises:
        ReportPayloadError: If the payload is not valid base64
    """
    try:
        return base64.b64decode("".join(payload.split()), validate=True)
    except (binascii.Error, ValueError) as e:
        raise ReportPayloadError("Invalid base64 string") from e


def write_output_file(output_path: str, content: bytes) -> str:
    """
    Write content to a file, creating parent directories as needed.

    Returns:
        The path written to
    """
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(content)
    return str(path)


def _bind(template: ReportTemplate, data: DataSet) -> None:
    template.bind(data, data.table_names[0] if len(data) else "")


def _describe(error: BaseException) -> str:
    return str(error) or type(error).__name__


class ExportService:
    """
    Service coordinating PDF exports.

    Responsibilities:
    1. Select documents through a DocumentLookup
    2. Resolve a fresh template per document from the registry
    3. Render concurrently, at most ``max_concurrency`` at a time
    4. Turn per-document failures into error entries without affecting siblings

    Usage:
        service = ExportService(registry)
        result = await service.export_batch(ExportFilter(document_ids=('doc1', 'doc2')))
    """

    def __init__(
        self,
        registry: ReportRegistry,
        lookup: Optional[DocumentLookup] = None,
        data_provider: Optional[ReportDataProvider] = None,
        report_service: Optional[ReportService] = None,
        export_settings: Optional[ExportSettings] = None,
    ):
        """
        Initialize the service.

        Args:
            registry: Frozen template registry
            lookup: Document source (defaults to generated sample documents)
            data_provider: Source of per-document report data
            report_service: PDF renderer
            export_settings: Concurrency and archive settings (defaults to Django settings)
        """
        config = export_settings or get_export_settings()

        self.registry = registry
        self.lookup = lookup or InMemoryDocumentLookup(
            registry.supported_types(), batch_size=config.default_batch_size
        )
        self.data_provider = data_provider or ReportDataProvider()
        self.report_service = report_service or ReportService()
        self.max_concurrency = config.max_concurrency
        self.archive_dir = config.archive_dir

    @staticmethod
    def _raise_if_cancelled(cancel_event: Optional[asyncio.Event]) -> None:
        if cancel_event is not None and cancel_event.is_set():
            raise ExportCancelled("Export was cancelled")

    async def _render(self, template: ReportTemplate, cancel_event: Optional[asyncio.Event]) -> bytes:
        """
        Render a template in a worker thread.

        When cancel_event is set while rendering, the render is abandoned and
        ExportCancelled is raised.
        """
        render = sync_to_async(self.report_service.render, thread_sensitive=False)
        if cancel_event is None:
            return await render(template)

        render_task = asyncio.ensure_future(render(template))
        cancel_task = asyncio.ensure_future(cancel_event.wait())
        try:
            done, _ = await asyncio.wait(
                {render_task, cancel_task}, return_when=asyncio.FIRST_COMPLETED
            )
        finally:
            cancel_task.cancel()
            if not render_task.done():
                render_task.cancel()

        if render_task in done:
            return render_task.result()
        raise ExportCancelled("Export was cancelled during rendering")

    def _archive(self, document: DocumentDescriptor, pdf_content: bytes) -> None:
        """Keep a copy of a batch-rendered PDF in the archive directory"""
        path = self.archive_dir / f"{uuid.uuid4()}_{document.document_id}.pdf"
        try:
            write_output_file(str(path), pdf_content)
        except OSError as e:
            logger.warning(f"Could not archive PDF for document {document.document_id} to {path}: {e}")

    async def _export_document(
        self,
        document: DocumentDescriptor,
        semaphore: asyncio.Semaphore,
        cancel_event: Optional[asyncio.Event],
    ) -> ExportedDocument:
        async with semaphore:
            self._raise_if_cancelled(cancel_event)

            logger.info(
                f"Generating PDF for document {document.document_id} "
                f"of type {document.document_type}"
            )

            template = self.registry.resolve(document.document_type)
            if template is None:
                logger.warning(f"No report template found for document type {document.document_type}")
                return ExportedDocument.failed(document, NO_TEMPLATE_STATUS)

            # Templates with parameters take the document id in their first one
            if template.first_parameter_name:
                template.set_parameter(template.first_parameter_name, document.document_id)

            data = await self.data_provider.get_report_data(document)
            _bind(template, data)

            pdf_content = await self._render(template, cancel_event)

            if self.archive_dir is not None:
                await sync_to_async(self._archive, thread_sensitive=False)(document, pdf_content)

            logger.info(
                f"Successfully generated PDF for document {document.document_id}, "
                f"size: {len(pdf_content)} bytes"
            )
            return ExportedDocument.succeeded(document, pdf_content)

    async def export_batch(
        self,
        export_filter: ExportFilter,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> BatchExportResult:
        """
        Export all documents matching a filter.

        Args:
            export_filter: Document selection criteria
            cancel_event: Optional event; once set, no new document starts and
                running renders are abandoned

        Returns:
            BatchExportResult with exactly one entry per selected document

        Raises:
            ExportCancelled: If cancellation was observed
        """
        self._raise_if_cancelled(cancel_event)

        documents = await self.lookup.find(export_filter)
        logger.info(
            f"Exporting {len(documents)} document(s), "
            f"max {self.max_concurrency} concurrent render(s)"
        )

        semaphore = asyncio.Semaphore(self.max_concurrency)
        outcomes = await asyncio.gather(
            *(self._export_document(document, semaphore, cancel_event) for document in documents),
            return_exceptions=True,
        )

        exported = []
        cancelled = False
        for document, outcome in zip(documents, outcomes):
            if isinstance(outcome, (ExportCancelled, asyncio.CancelledError)):
                cancelled = True
            elif isinstance(outcome, Exception):
                logger.error(
                    f"Error generating PDF for document {document.document_id}: {outcome}",
                    exc_info=outcome,
                )
                exported.append(ExportedDocument.failed(document, f"Error: {_describe(outcome)}"))
            elif isinstance(outcome, BaseException):
                raise outcome
            else:
                exported.append(outcome)

        if cancelled:
            logger.warning(f"Batch export cancelled after {len(exported)} of {len(documents)} document(s)")
            raise ExportCancelled("Batch export was cancelled")

        return BatchExportResult(documents=exported)

    async def export_single(
        self,
        request: SingleExportRequest,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> SingleExportResult:
        """
        Render one report from parameters or a base64-encoded XML payload.

        Args:
            request: Report type, data and optional output path
            cancel_event: Optional cancellation event

        Returns:
            SingleExportResult; unknown report types and unreadable XML are
            reported as status "Error"

        Raises:
            ReportPayloadError: If xml_data_base64 is not valid base64
            ExportCancelled: If cancellation was observed
        """
        report_type = request.report_type
        logger.info(f"Starting single report export for type: {report_type}")
        self._raise_if_cancelled(cancel_event)

        template = self.registry.resolve(report_type)
        if template is None:
            logger.warning(f"Report type '{report_type}' not found")
            return SingleExportResult.error(report_type, f"Report type '{report_type}' not found")

        try:
            if request.xml_data_base64:
                logger.info("Decoding and parsing XML data")
                xml_bytes = decode_payload(request.xml_data_base64)
                try:
                    data = parse_xml_dataset(xml_bytes)
                except XmlDataError as e:
                    logger.error(f"Failed to parse XML data: {e}")
                    return SingleExportResult.error(report_type, f"Failed to parse XML data: {e}")
                logger.info(f"Parsed XML data into tables: {', '.join(data.table_names) or 'none'}")
            else:
                logger.info("No XML data provided, using parameters")
                data = create_parameter_data(request.parameters)

            _bind(template, data)

            for name, value in request.parameters.items():
                if template.set_parameter(name, value):
                    logger.info(f"Set parameter {name} = {value}")

            pdf_content = await self._render(template, cancel_event)
        except (ReportPayloadError, ExportCancelled):
            raise
        except Exception as e:
            logger.error(f"Error occurred during single report export: {e}", exc_info=True)
            return SingleExportResult.error(report_type, f"An error occurred: {_describe(e)}")

        logger.info(f"Successfully generated PDF, size: {len(pdf_content)} bytes")

        saved_path = None
        if request.output_path:
            try:
                saved_path = await sync_to_async(write_output_file, thread_sensitive=False)(
                    request.output_path, pdf_content
                )
            except OSError as e:
                logger.error(f"Failed to save PDF to file {request.output_path}: {e}")
                return SingleExportResult.error(
                    report_type, f"Failed to save file: {e}", pdf_content=pdf_content
                )
            logger.info(f"Saved PDF to: {saved_path}")

        return SingleExportResult.success(report_type, pdf_content, saved_file_path=saved_path)


def get_export_service() -> ExportService:
    """
    Build an ExportService around the registry created at startup.

    Returns:
        ExportService using the settings-configured concurrency and archive directory
    """
    registry = apps.get_app_config('core').report_registry
    return ExportService(registry)

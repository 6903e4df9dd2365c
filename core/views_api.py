"""
Report Export API Views.

This module provides HTTP API endpoints for exporting documents to PDF.
All endpoints live under /api/report/ and exchange JSON; PDF bytes are
transported as base64 strings.
"""
import asyncio
import base64
import json
import logging
from datetime import datetime, time

from django.apps import apps
from django.http import JsonResponse
from django.utils import timezone
from django.utils.dateparse import parse_date, parse_datetime
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_http_methods

from core.openapi import build_openapi_schema
from core.services.exceptions import ExportCancelled
from core.services.export import ExportFilter, SingleExportRequest, get_export_service

logger = logging.getLogger(__name__)

# Non-standard "client closed request" status
STATUS_CLIENT_CLOSED_REQUEST = 499


class RequestValidationError(ValueError):
    """Raised when a request body does not describe a valid export."""


def _isoformat(value):
    return value.isoformat() if value else None


def _encode_pdf(content):
    return base64.b64encode(content).decode('ascii') if content else None


def serialize_exported_document(document):
    """
    Serialize an ExportedDocument to a dictionary.

    Args:
        document: ExportedDocument instance

    Returns:
        Dictionary with document data, PDF content as base64
    """
    return {
        'documentId': document.document_id,
        'documentType': document.document_type,
        'status': document.status,
        'createdDate': _isoformat(document.created_date),
        'pdfContent': _encode_pdf(document.pdf_content),
    }


def serialize_batch_result(result):
    return {
        'documents': [serialize_exported_document(d) for d in result.documents],
        'totalCount': result.total_count,
        'exportDate': _isoformat(result.export_date),
    }


def serialize_single_result(result):
    """
    Serialize a SingleExportResult to a dictionary.

    Args:
        result: SingleExportResult instance

    Returns:
        Dictionary with result data
    """
    return {
        'reportType': result.report_type,
        'pdfContent': _encode_pdf(result.pdf_content),
        'pdfContentBase64': result.pdf_content_base64,
        'savedFilePath': result.saved_file_path,
        'pdfSizeBytes': result.pdf_size_bytes,
        'generatedDate': _isoformat(result.generated_date),
        'status': result.status,
        'errorMessage': result.error_message,
    }


def _load_body(request):
    """Decode a JSON object request body"""
    if not request.body:
        raise RequestValidationError('Request body is required')
    try:
        data = json.loads(request.body)
    except (json.JSONDecodeError, UnicodeDecodeError):
        raise RequestValidationError('Invalid JSON payload')
    if not isinstance(data, dict):
        raise RequestValidationError('Request body must be a JSON object')
    return data


def _optional_string(data, key):
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise RequestValidationError(f'{key} must be a string')
    return value or None


def _parse_date(data, key):
    """
    Parse an ISO 8601 date or datetime field.

    Date-only values mean midnight; values without an offset use the
    current time zone.
    """
    value = _optional_string(data, key)
    if value is None:
        return None

    try:
        parsed = parse_datetime(value)
        if parsed is None:
            day = parse_date(value)
            if day is not None:
                parsed = datetime.combine(day, time.min)
    except ValueError:
        parsed = None

    if parsed is None:
        raise RequestValidationError(f'{key} is not a valid date: {value}')
    if timezone.is_naive(parsed):
        parsed = timezone.make_aware(parsed)
    return parsed


def parse_export_filter(data):
    """
    Build an ExportFilter from a request body.

    Args:
        data: Decoded JSON body

    Returns:
        ExportFilter instance

    Raises:
        RequestValidationError: If the filter is missing or malformed
    """
    raw_filter = data.get('filter')
    if not isinstance(raw_filter, dict):
        raise RequestValidationError('Request and filter are required')

    document_ids = raw_filter.get('documentIds') or []
    if not isinstance(document_ids, list) or not all(isinstance(i, str) for i in document_ids):
        raise RequestValidationError('documentIds must be a list of strings')

    return ExportFilter(
        document_type=_optional_string(raw_filter, 'documentType'),
        start_date=_parse_date(raw_filter, 'startDate'),
        end_date=_parse_date(raw_filter, 'endDate'),
        status=_optional_string(raw_filter, 'status'),
        document_ids=tuple(document_ids),
    )


def parse_single_export_request(data):
    """
    Build a SingleExportRequest from a request body.

    Raises:
        RequestValidationError: If reportType is missing or fields have the wrong type
    """
    report_type = data.get('reportType')
    if not isinstance(report_type, str) or not report_type.strip():
        raise RequestValidationError('ReportType is required')

    parameters = data.get('parameters') or {}
    if not isinstance(parameters, dict) or not all(
        isinstance(k, str) and isinstance(v, str) for k, v in parameters.items()
    ):
        raise RequestValidationError('parameters must be an object of string values')

    return SingleExportRequest(
        report_type=report_type,
        output_path=_optional_string(data, 'outputPath'),
        xml_data_base64=_optional_string(data, 'xmlDataBase64'),
        parameters=parameters,
    )


@csrf_exempt
@require_http_methods(["POST"])
async def api_report_export(request):
    """
    POST /api/report/export

    Export all documents matching a filter.

    Request Body:
        {"filter": {"documentType", "startDate", "endDate", "status", "documentIds"}}

    Returns:
        200: Batch export result
        400: Missing or invalid filter
        499: Request was cancelled
        500: Unexpected failure
    """
    try:
        export_filter = parse_export_filter(_load_body(request))
    except RequestValidationError as e:
        return JsonResponse({'error': str(e)}, status=400)

    try:
        logger.info(f"Starting PDF export with filter: {export_filter}")
        result = await get_export_service().export_batch(export_filter)
        logger.info(f"PDF export completed successfully. Exported {result.total_count} documents")
        return JsonResponse(serialize_batch_result(result))
    except (ExportCancelled, asyncio.CancelledError):
        logger.warning("PDF export request was cancelled")
        return JsonResponse({'error': 'Request was cancelled'}, status=STATUS_CLIENT_CLOSED_REQUEST)
    except Exception as e:
        logger.error(f"Error occurred during PDF export: {e}", exc_info=True)
        return JsonResponse({'error': 'An error occurred during PDF export'}, status=500)


@csrf_exempt
@require_http_methods(["POST"])
async def api_report_export_single(request):
    """
    POST /api/report/export-single

    Render one report from parameters or base64-encoded XML data.

    Request Body:
        {"reportType", "outputPath", "xmlDataBase64", "parameters"}

    Returns:
        200: Single export result (status "Success" or "Error")
        400: Missing body or empty reportType
        499: Request was cancelled
        500: Unexpected failure, including malformed base64 data
    """
    try:
        export_request = parse_single_export_request(_load_body(request))
    except RequestValidationError as e:
        return JsonResponse({'error': str(e)}, status=400)

    try:
        result = await get_export_service().export_single(export_request)
        if result.is_success:
            logger.info(f"Single report export completed. PDF size: {result.pdf_size_bytes} bytes")
        else:
            logger.warning(f"Single report export failed: {result.error_message}")
        return JsonResponse(serialize_single_result(result))
    except (ExportCancelled, asyncio.CancelledError):
        logger.warning("Single report export request was cancelled")
        return JsonResponse({'error': 'Request was cancelled'}, status=STATUS_CLIENT_CLOSED_REQUEST)
    except Exception as e:
        logger.error(f"Error occurred during single report export: {e}", exc_info=True)
        return JsonResponse({'error': 'An error occurred during PDF export'}, status=500)


@require_http_methods(["GET"])
async def api_report_types(request):
    """
    GET /api/report/types

    List the document types that have a report template.

    Returns:
        200: {"types": [...]}
    """
    registry = apps.get_app_config('core').report_registry
    return JsonResponse({'types': registry.supported_types()})


@require_http_methods(["GET"])
async def api_report_schema(request):
    """
    GET /api/report/schema

    OpenAPI description of the report endpoints.

    Returns:
        200: OpenAPI 3 document
    """
    return JsonResponse(build_openapi_schema(request.build_absolute_uri('/')))

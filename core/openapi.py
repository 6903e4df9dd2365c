"""
OpenAPI description of the Report Export API.

Served at GET /api/report/schema.
"""

OPENAPI_VERSION = '3.0.3'
API_VERSION = '1.0.0'


def _ref(name):
    return {'$ref': f'#/components/schemas/{name}'}


def _json(schema):
    return {'application/json': {'schema': schema}}


def _error_response(description):
    return {'description': description, 'content': _json(_ref('Error'))}


def _nullable(schema):
    return dict(schema, nullable=True)


COMPONENT_SCHEMAS = {
    'Error': {
        'type': 'object',
        'properties': {'error': {'type': 'string'}},
        'required': ['error'],
    },
    'ReportFilter': {
        'type': 'object',
        'properties': {
            'documentType': {'type': 'string'},
            'startDate': {'type': 'string', 'format': 'date-time'},
            'endDate': {'type': 'string', 'format': 'date-time'},
            'status': {'type': 'string'},
            'documentIds': {'type': 'array', 'items': {'type': 'string'}},
        },
    },
    'ExportReportRequest': {
        'type': 'object',
        'properties': {'filter': _ref('ReportFilter')},
        'required': ['filter'],
    },
    'ReportDocument': {
        'type': 'object',
        'properties': {
            'documentId': {'type': 'string'},
            'documentType': {'type': 'string'},
            'status': {'type': 'string'},
            'createdDate': {'type': 'string', 'format': 'date-time'},
            'pdfContent': _nullable({'type': 'string', 'format': 'byte'}),
        },
    },
    'ExportReportResponse': {
        'type': 'object',
        'properties': {
            'documents': {'type': 'array', 'items': _ref('ReportDocument')},
            'totalCount': {'type': 'integer'},
            'exportDate': {'type': 'string', 'format': 'date-time'},
        },
    },
    'ExportSingleReportRequest': {
        'type': 'object',
        'properties': {
            'reportType': {'type': 'string', 'minLength': 1},
            'outputPath': {'type': 'string'},
            'xmlDataBase64': {'type': 'string', 'format': 'byte'},
            'parameters': {'type': 'object', 'additionalProperties': {'type': 'string'}},
        },
        'required': ['reportType'],
    },
    'ExportSingleReportResponse': {
        'type': 'object',
        'properties': {
            'reportType': {'type': 'string'},
            'pdfContent': _nullable({'type': 'string', 'format': 'byte'}),
            'pdfContentBase64': _nullable({'type': 'string', 'format': 'byte'}),
            'savedFilePath': _nullable({'type': 'string'}),
            'pdfSizeBytes': {'type': 'integer'},
            'generatedDate': {'type': 'string', 'format': 'date-time'},
            'status': {'type': 'string', 'enum': ['Success', 'Error']},
            'errorMessage': _nullable({'type': 'string'}),
        },
    },
    'ReportTypes': {
        'type': 'object',
        'properties': {'types': {'type': 'array', 'items': {'type': 'string'}}},
    },
}


def build_openapi_schema(server_url='/'):
    """
    Build the OpenAPI document for the Report Export API.

    Args:
        server_url: Base URL the API is served from

    Returns:
        OpenAPI 3 document as a dictionary
    """
    return {
        'openapi': OPENAPI_VERSION,
        'info': {
            'title': 'BS Report Service API',
            'version': API_VERSION,
            'description': 'Export documents to PDF in batches or one report at a time.',
        },
        'servers': [{'url': server_url}],
        'paths': {
            '/api/report/export': {
                'post': {
                    'operationId': 'exportReports',
                    'summary': 'Export all documents matching a filter',
                    'requestBody': {'required': True, 'content': _json(_ref('ExportReportRequest'))},
                    'responses': {
                        '200': {'description': 'Batch export result',
                                'content': _json(_ref('ExportReportResponse'))},
                        '400': _error_response('Missing or invalid filter'),
                        '499': _error_response('Request was cancelled'),
                        '500': _error_response('Unexpected failure'),
                    },
                },
            },
            '/api/report/export-single': {
                'post': {
                    'operationId': 'exportSingleReport',
                    'summary': 'Render one report from parameters or base64-encoded XML',
                    'requestBody': {'required': True, 'content': _json(_ref('ExportSingleReportRequest'))},
                    'responses': {
                        '200': {'description': 'Single export result, status Success or Error',
                                'content': _json(_ref('ExportSingleReportResponse'))},
                        '400': _error_response('Missing body or empty reportType'),
                        '499': _error_response('Request was cancelled'),
                        '500': _error_response('Unexpected failure, including malformed base64'),
                    },
                },
            },
            '/api/report/types': {
                'get': {
                    'operationId': 'listReportTypes',
                    'summary': 'List the document types that have a report template',
                    'responses': {
                        '200': {'description': 'Supported types', 'content': _json(_ref('ReportTypes'))},
                    },
                },
            },
            '/api/report/schema': {
                'get': {
                    'operationId': 'getApiSchema',
                    'summary': 'This OpenAPI document',
                    'responses': {
                        '200': {'description': 'OpenAPI 3 document',
                                'content': _json({'type': 'object'})},
                    },
                },
            },
        },
        'components': {'schemas': COMPONENT_SCHEMAS},
    }

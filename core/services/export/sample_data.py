"""
Report data for batch exports.

Builds the data sets bound to templates during a batch export. The data is
generated; a database-backed provider would replace ReportDataProvider.
"""

from datetime import datetime, timedelta
from decimal import Decimal
from typing import Mapping, Optional

from django.utils import timezone

from core.services.reporting.datatable import DataColumn, DataSet, DataTable

from .dto import DocumentDescriptor


DEFAULT_DOCUMENT_ID = "DEFAULT-001"

DELIVERY_NOTE_COLUMNS = [
    DataColumn('Artikal'),
    DataColumn('AltSifa'),
    DataColumn('EDM'),
    DataColumn('Kolicina', int),
    DataColumn('Cena', Decimal),
    DataColumn('Adresa'),
    DataColumn('Telefon'),
    DataColumn('ImeNaFirma'),
    DataColumn('Naziv'),
    DataColumn('Telefoni'),
    DataColumn('Email'),
    DataColumn('Sifra'),
    DataColumn('EDB'),
    DataColumn('Broj'),
    DataColumn('Datum'),
    DataColumn('Valuta'),
    DataColumn('BankaDeponent'),
    DataColumn('DanocenBroj'),
    DataColumn('Zabeleska'),
    DataColumn('Image1', bytes),
]

INVOICE_TYPES = {'invoice', 'faktura', 'defaultfaktura'}


def create_delivery_note_data(document_id: str, created_date: datetime,
                              table_name: str = 'Ispratnica') -> DataSet:
    """
    Create sample data for a delivery note or invoice.

    Args:
        document_id: Document number printed on the report
        created_date: Document date
        table_name: Name of the detail table

    Returns:
        DataSet with one detail table holding three article lines
    """
    table = DataTable(table_name, DELIVERY_NOTE_COLUMNS)
    due_date = timezone.now() + timedelta(days=30)

    for i in range(1, 4):
        table.add_row(
            Artikal=f"Sample Product {i}",
            AltSifa=f"SP00{i}",
            EDM="pc",
            Kolicina=i * 5,
            Cena=Decimal(i * 100),
            Adresa="123 Main St, Skopje",
            Telefon="+389 2 123 4567",
            ImeNaFirma="Sample Company DOOEL",
            Naziv="Customer Name Ltd.",
            Telefoni="+389 70 123 456",
            Email="customer@example.com",
            Sifra="CUST001",
            EDB="4080012345678",
            Broj=document_id,
            Datum=created_date.strftime("%d.%m.%Y"),
            Valuta=due_date.strftime("%d.%m.%Y"),
            BankaDeponent="Komercijalna Banka AD Skopje - 300123456789012",
            DanocenBroj="MK1234567890123",
            Zabeleska="Sample notes for this delivery note. Please handle with care.",
        )

    return DataSet("ReportData", [table])


def create_custom_report_data(document_id: str, created_date: datetime,
                              custom_data: Optional[Mapping[str, str]] = None) -> DataSet:
    """
    Create a one-row data set for report types without dedicated sample data.

    Args:
        document_id: Document identifier
        created_date: Document creation date
        custom_data: Additional string fields to include as columns

    Returns:
        DataSet with a single 'Document' table
    """
    columns = [
        DataColumn('DocumentId'),
        DataColumn('CreatedDate', datetime),
        DataColumn('GeneratedDate', datetime),
    ]
    reserved = {column.name for column in columns}
    custom_data = {
        name: value for name, value in (custom_data or {}).items() if name not in reserved
    }
    columns.extend(DataColumn(name) for name in custom_data)

    table = DataTable('Document', columns)
    table.add_row(
        custom_data,
        DocumentId=document_id,
        CreatedDate=created_date,
        GeneratedDate=timezone.now(),
    )
    return DataSet("ReportData", [table])


def create_parameter_data(parameters: Optional[Mapping[str, str]] = None) -> DataSet:
    """
    Create report data from request parameters.

    Produces a 'Header' table with one row (DocumentId, CreatedDate and one
    column per parameter) and an empty 'Items' table for templates that
    expect line items.

    Args:
        parameters: Request parameters; DocumentId defaults to DEFAULT-001

    Returns:
        DataSet named 'ReportData'
    """
    parameters = dict(parameters or {})

    columns = [DataColumn('DocumentId'), DataColumn('CreatedDate', datetime)]
    columns.extend(DataColumn(key) for key in parameters if key not in ('DocumentId', 'CreatedDate'))

    header = DataTable('Header', columns)
    values = {key: value for key, value in parameters.items() if key != 'CreatedDate'}
    values['DocumentId'] = parameters.get('DocumentId') or DEFAULT_DOCUMENT_ID
    values['CreatedDate'] = timezone.now()
    header.add_row(values)

    items = DataTable('Items', [
        DataColumn('ItemId'),
        DataColumn('Name'),
        DataColumn('Quantity', int),
        DataColumn('Price', Decimal),
    ])

    return DataSet("ReportData", [header, items])


class ReportDataProvider:
    """Supplies the data set bound to a document's template."""

    async def get_report_data(self, document: DocumentDescriptor) -> DataSet:
        """
        Get report data for a document.

        Args:
            document: Document being exported

        Returns:
            DataSet matching the schema expected by the document's template
        """
        document_type = document.document_type.casefold()

        if document_type == 'ispratnica':
            return create_delivery_note_data(document.document_id, document.created_date)
        if document_type in INVOICE_TYPES:
            return create_delivery_note_data(
                document.document_id, document.created_date, table_name='Faktura'
            )
        return create_custom_report_data(document.document_id, document.created_date)

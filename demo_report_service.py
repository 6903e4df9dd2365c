#!/usr/bin/env python
"""
Demonstration of the Export Service

This script renders a small batch of documents and two single reports,
writing the PDFs to /tmp for inspection.
"""

import asyncio
import base64
import os
import sys
import django

# Setup Django
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))
os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'bsreport.settings')
django.setup()

from core.services.export import ExportFilter, SingleExportRequest, get_export_service


SAMPLE_XML = b"""<?xml version="1.0" encoding="utf-8"?>
<ReportData>
  <Header>
    <Broj>FAK-2024-001</Broj>
    <ImeNaFirma>Sample Company DOOEL</ImeNaFirma>
    <Naziv>Customer Name Ltd.</Naziv>
  </Header>
  <Items>
    <Item><Name>Consulting</Name><Quantity>8</Quantity><Price>45.00</Price></Item>
    <Item><Name>Travel</Name><Quantity>1</Quantity><Price>120.00</Price></Item>
  </Items>
</ReportData>"""


async def demo_batch_export():
    """Demonstrate exporting several documents concurrently"""
    print("\n=== Demo 1: Batch Export ===")

    service = get_export_service()
    result = await service.export_batch(ExportFilter(document_ids=('doc1', 'doc2', 'doc3')))

    print(f"✓ Exported {result.total_count} documents at {result.export_date:%H:%M:%S}")
    for document in result.documents:
        size = len(document.pdf_content) if document.pdf_content else 0
        print(f"  {document.document_id} ({document.document_type}): {document.status}, {size} bytes")

    return result


async def demo_single_from_parameters():
    """Demonstrate a single report built from parameters"""
    print("\n=== Demo 2: Single Report from Parameters ===")

    service = get_export_service()
    result = await service.export_single(SingleExportRequest(
        report_type='Ispratnica',
        output_path='/tmp/demo_ispratnica.pdf',
        parameters={'DocumentId': 'INV-001', 'Faktura': 'FAK-001'},
    ))

    print(f"✓ Status: {result.status}, {result.pdf_size_bytes} bytes")
    print(f"✓ Saved to: {result.saved_file_path}")
    return result


async def demo_single_from_xml():
    """Demonstrate a single report built from base64-encoded XML"""
    print("\n=== Demo 3: Single Report from XML ===")

    service = get_export_service()
    result = await service.export_single(SingleExportRequest(
        report_type='DefaultFaktura',
        output_path='/tmp/demo_faktura.pdf',
        xml_data_base64=base64.b64encode(SAMPLE_XML).decode('ascii'),
        parameters={'ImeNaFaktura': 'FAKTURA', 'DatumNaValuta': '31.12.2024'},
    ))

    print(f"✓ Status: {result.status}, {result.pdf_size_bytes} bytes")
    print(f"✓ Saved to: {result.saved_file_path}")
    return result


async def demo_unknown_type():
    """Demonstrate the result for an unknown report type"""
    print("\n=== Demo 4: Unknown Report Type ===")

    result = await get_export_service().export_single(SingleExportRequest(report_type='InvalidReportType'))
    print(f"✓ Status: {result.status}, message: {result.error_message}")
    return result


async def run_demos():
    await demo_batch_export()
    await demo_single_from_parameters()
    await demo_single_from_xml()
    await demo_unknown_type()


def main():
    """Run all demonstrations"""
    print("=" * 60)
    print("Export Service - Demonstration")
    print("=" * 60)

    try:
        asyncio.run(run_demos())

        print("\n" + "=" * 60)
        print("✓ All demonstrations completed successfully!")
        print("=" * 60)
        print("\nGenerated PDFs:")
        print("  - /tmp/demo_ispratnica.pdf")
        print("  - /tmp/demo_faktura.pdf")

    except Exception as e:
        print(f"\n✗ Error during demonstration: {e}")
        import traceback
        traceback.print_exc()
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())

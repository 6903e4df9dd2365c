"""
Tests for Core Report Service
"""

from datetime import datetime
from decimal import Decimal
from io import BytesIO

from django.test import SimpleTestCase
from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas as pdf_canvas
from reportlab.platypus import Paragraph, Table

from core.services.reporting import (
    DataColumn,
    DataSet,
    DataTable,
    ReportRegistry,
    ReportService,
    ReportTemplate,
    XmlDataError,
    parse_xml_dataset,
)
from core.services.reporting.canvas import draw_footer, draw_header, draw_page_number
from core.services.reporting.template import format_value


class SimpleReport(ReportTemplate):
    """Minimal template used by the tests"""

    title = "Simple"
    parameter_names = ("Number", "Heading")

    def build_story(self):
        story = [self.paragraph(self.parameter('Heading', 'Simple report'), 'ReportTitle')]
        table = self.detail_table
        if table is not None and len(table):
            story.append(self.grid(table))
        story.extend(self.build_extra_tables())
        return story


class ReportRegistryTestCase(SimpleTestCase):
    """Test cases for Report Template Registry"""

    def setUp(self):
        """Set up test registry"""
        self.registry = ReportRegistry()

    def test_register_template(self):
        """Test registering a template"""
        self.registry.register('Simple', SimpleReport)
        self.assertTrue(self.registry.is_registered('Simple'))

    def test_register_duplicate_raises_error(self):
        """Test that registering a duplicate key raises error, ignoring case"""
        self.registry.register('Simple', SimpleReport)

        with self.assertRaises(ValueError) as cm:
            self.registry.register('SIMPLE', SimpleReport)

        self.assertIn("already registered", str(cm.exception))

    def test_register_empty_type_raises_error(self):
        with self.assertRaises(ValueError):
            self.registry.register('', SimpleReport)

    def test_register_after_freeze_raises_error(self):
        """Test that a frozen registry rejects new templates"""
        self.registry.register('Simple', SimpleReport)
        self.assertIs(self.registry.freeze(), self.registry)
        self.assertTrue(self.registry.frozen)

        with self.assertRaises(RuntimeError):
            self.registry.register('Other', SimpleReport)

    def test_resolve_is_case_insensitive(self):
        """Test resolving a template with different casing"""
        self.registry.register('Ispratnica', SimpleReport)

        for document_type in ('Ispratnica', 'ispratnica', 'ISPRATNICA'):
            self.assertIsInstance(self.registry.resolve(document_type), SimpleReport)

    def test_resolve_returns_new_instance(self):
        """Test that every resolve creates a fresh template"""
        self.registry.register('Simple', SimpleReport)

        first = self.registry.resolve('Simple')
        first.set_parameter('Number', 'A-1')
        second = self.registry.resolve('Simple')

        self.assertIsNot(first, second)
        self.assertIsNone(second.parameters['Number'])

    def test_resolve_unknown_returns_none(self):
        """Test that unknown, empty and missing types resolve to None"""
        self.registry.register('Simple', SimpleReport)

        self.assertIsNone(self.registry.resolve('UnknownType'))
        self.assertIsNone(self.registry.resolve(''))
        self.assertIsNone(self.registry.resolve(None))

    def test_supported_types_keeps_registration_order(self):
        """Test listing all registered templates"""
        self.registry.register('Ispratnica', SimpleReport)
        self.registry.register('Invoice', SimpleReport)
        self.registry.register('Faktura', SimpleReport)

        self.assertEqual(self.registry.supported_types(), ['Ispratnica', 'Invoice', 'Faktura'])


class DataTableTestCase(SimpleTestCase):
    """Test cases for DataTable and DataSet"""

    def setUp(self):
        self.table = DataTable('Items', [
            DataColumn('Name'),
            DataColumn('Quantity', int),
            DataColumn('Price', Decimal),
        ])

    def test_add_row_fills_missing_columns(self):
        row = self.table.add_row(Name='Product 1')

        self.assertEqual(row, {'Name': 'Product 1', 'Quantity': None, 'Price': None})
        self.assertEqual(len(self.table), 1)
        self.assertEqual(self.table.first_row(), row)

    def test_add_row_accepts_mapping_and_keywords(self):
        self.table.add_row({'Name': 'Product 1'}, Quantity=3)
        self.assertEqual(self.table.rows[0]['Quantity'], 3)

    def test_add_row_unknown_column_raises_error(self):
        with self.assertRaises(ValueError) as cm:
            self.table.add_row(Name='Product 1', Color='red')

        self.assertIn("Color", str(cm.exception))
        self.assertEqual(len(self.table), 0)

    def test_add_row_wrong_type_raises_error(self):
        with self.assertRaises(ValueError):
            self.table.add_row(Quantity='ten')

    def test_string_columns(self):
        table = DataTable('Header', ['DocumentId', 'CreatedDate'])
        self.assertEqual(table.column_names, ['DocumentId', 'CreatedDate'])
        self.assertTrue(table.has_column('DocumentId'))
        self.assertFalse(table.has_column('Missing'))

    def test_duplicate_column_raises_error(self):
        with self.assertRaises(ValueError):
            DataTable('Header', ['DocumentId', 'DocumentId'])

    def test_dataset_table_names_are_unique(self):
        dataset = DataSet('ReportData', [self.table])

        with self.assertRaises(ValueError):
            dataset.add_table(DataTable('Items', ['Name']))

        self.assertIn('Items', dataset)
        self.assertIs(dataset.table('Items'), self.table)
        self.assertIsNone(dataset.table('Missing'))
        self.assertEqual(dataset.table_names, ['Items'])


class ParseXmlDatasetTestCase(SimpleTestCase):
    """Test cases for XML payload parsing"""

    def test_parse_header_and_items(self):
        xml = b"""<?xml version="1.0" encoding="utf-8"?>
        <ReportData>
          <Header>
            <DocumentId>INV-001</DocumentId>
            <CustomerName>Test Customer</CustomerName>
          </Header>
          <Items>
            <Item><Name>Product 1</Name><Quantity>10</Quantity></Item>
            <Item><Name>Product 2</Name><Quantity>5</Quantity><Price>12.50</Price></Item>
          </Items>
        </ReportData>"""

        dataset = parse_xml_dataset(xml)

        self.assertEqual(dataset.name, 'ReportData')
        self.assertEqual(dataset.table_names, ['Header', 'Item'])
        self.assertEqual(dataset.table('Header').first_row()['DocumentId'], 'INV-001')

        items = dataset.table('Item')
        self.assertEqual(len(items), 2)
        self.assertEqual(items.column_names, ['Name', 'Quantity', 'Price'])
        self.assertIsNone(items.rows[0]['Price'])
        self.assertEqual(items.rows[1]['Price'], '12.50')

    def test_parse_attributes_and_namespaces(self):
        xml = '<d:Data xmlns:d="urn:test"><d:Row id="1" name="A"/><d:Row id="2"/></d:Data>'

        dataset = parse_xml_dataset(xml)

        self.assertEqual(dataset.name, 'Data')
        rows = dataset.table('Row').rows
        self.assertEqual(rows[0], {'id': '1', 'name': 'A'})
        self.assertEqual(rows[1], {'id': '2', 'name': None})

    def test_parse_empty_root(self):
        dataset = parse_xml_dataset(b'<ReportData/>')
        self.assertEqual(len(dataset), 0)

    def test_parse_malformed_xml_raises_error(self):
        with self.assertRaises(XmlDataError):
            parse_xml_dataset(b'<ReportData><Header></ReportData>')

    def test_repeated_leaves_become_table(self):
        """Test that repeated sibling fields keep every value"""
        dataset = parse_xml_dataset(
            b'<R><Item><Name>Product 1</Name><Tag>a</Tag><Tag>b</Tag></Item></R>'
        )

        self.assertEqual(dataset.table('Item').rows, ({'Name': 'Product 1'},))
        self.assertEqual(dataset.table('Tag').rows, ({'Tag': 'a'}, {'Tag': 'b'}))

    def test_only_repeated_leaves(self):
        dataset = parse_xml_dataset(b'<R><Item><Tag>a</Tag><Tag>b</Tag></Item></R>')

        self.assertIsNone(dataset.table('Item'))
        self.assertEqual([row['Tag'] for row in dataset.table('Tag')], ['a', 'b'])

    def test_attribute_name_collision_raises_error(self):
        xml = b'<R xmlns:a="urn:a" xmlns:b="urn:b"><Row a:id="1" b:id="2"/></R>'

        with self.assertRaises(XmlDataError):
            parse_xml_dataset(xml)

    def test_attribute_and_child_collision_raises_error(self):
        with self.assertRaises(XmlDataError):
            parse_xml_dataset(b'<R><Row id="1"><id>2</id></Row></R>')

    def test_entities_are_not_expanded(self):
        xml = b"""<?xml version="1.0"?>
        <!DOCTYPE r [<!ENTITY ext SYSTEM "file:///etc/passwd">]>
        <r><Row><Value>&ext;</Value></Row></r>"""

        dataset = parse_xml_dataset(xml)
        self.assertNotIn('root:', dataset.table('Row').first_row()['Value'])


class ReportTemplateTestCase(SimpleTestCase):
    """Test cases for the template base class"""

    def setUp(self):
        self.template = SimpleReport()

    def test_declared_parameters_start_empty(self):
        self.assertEqual(self.template.parameters, {'Number': None, 'Heading': None})
        self.assertEqual(self.template.first_parameter_name, 'Number')

    def test_set_parameter_ignores_undeclared_names(self):
        self.assertTrue(self.template.set_parameter('Number', 'A-1'))
        self.assertFalse(self.template.set_parameter('Unknown', 'x'))
        self.assertNotIn('Unknown', self.template.parameters)

    def test_detail_table_follows_data_member(self):
        header = DataTable('Header', ['DocumentId'])
        items = DataTable('Items', ['Name'])
        dataset = DataSet('ReportData', [header, items])

        self.template.bind(dataset)
        self.assertIs(self.template.detail_table, header)

        self.template.bind(dataset, 'Items')
        self.assertIs(self.template.detail_table, items)

    def test_field_formats_first_row(self):
        table = DataTable('Header', [DataColumn('CreatedDate', datetime), DataColumn('Amount', Decimal)])
        table.add_row(CreatedDate=datetime(2024, 3, 5, 10, 30), Amount=Decimal('12.5'))
        self.template.bind(DataSet(tables=[table]))

        self.assertEqual(self.template.field('CreatedDate'), '05.03.2024')
        self.assertEqual(self.template.field('Amount'), '12.5')
        self.assertEqual(self.template.field('Missing', 'n/a'), 'n/a')

    def test_field_without_data(self):
        self.assertEqual(self.template.field('DocumentId'), '')
        self.assertEqual(self.template.detail_rows, ())

    def test_build_extra_tables_skips_detail_and_empty_tables(self):
        header = DataTable('Header', ['DocumentId'])
        header.add_row(DocumentId='A-1')
        notes = DataTable('Notes', ['Text'])
        notes.add_row(Text='Fragile')
        empty = DataTable('Empty', ['Text'])
        self.template.bind(DataSet(tables=[header, notes, empty]))

        story = self.template.build_extra_tables()

        paragraphs = [item for item in story if isinstance(item, Paragraph)]
        tables = [item for item in story if isinstance(item, Table)]
        self.assertEqual(len(tables), 1)
        self.assertEqual([p.getPlainText() for p in paragraphs], ['Notes'])

    def test_paragraph_escapes_markup(self):
        paragraph = self.template.paragraph('Smith & Sons <Ltd>')
        self.assertEqual(paragraph.getPlainText(), 'Smith & Sons <Ltd>')

    def test_format_value(self):
        self.assertEqual(format_value(None), '')
        self.assertEqual(format_value(5), '5')
        self.assertEqual(format_value(datetime(2024, 1, 31)), '31.01.2024')

    def test_base_template_requires_build_story(self):
        with self.assertRaises(NotImplementedError):
            ReportTemplate().build_story()


class ReportServiceTestCase(SimpleTestCase):
    """Test cases for ReportService"""

    def setUp(self):
        """Set up test data"""
        self.service = ReportService()

    def test_render_generates_pdf(self):
        """Test that render() generates PDF bytes"""
        template = SimpleReport()
        table = DataTable('Items', ['Name', 'Quantity'])
        table.add_row(Name='Product 1', Quantity='10')
        template.bind(DataSet(tables=[table]))
        template.set_parameter('Heading', 'Test Report')

        pdf_bytes = self.service.render(template)

        self.assertIsInstance(pdf_bytes, bytes)
        self.assertGreater(len(pdf_bytes), 0)
        self.assertTrue(pdf_bytes.startswith(b'%PDF-'))

    def test_render_without_data(self):
        """Test that a template renders even when nothing is bound"""
        pdf_bytes = self.service.render(SimpleReport())
        self.assertTrue(pdf_bytes.startswith(b'%PDF-'))

    def test_multi_page_report(self):
        """Test that report works with many rows (multi-page)"""
        template = SimpleReport()
        table = DataTable('Items', ['Name', 'Quantity'])
        for i in range(200):
            table.add_row(Name=f'Item {i}', Quantity=str(i))
        template.bind(DataSet(tables=[table]))

        pdf_bytes = self.service.render(template)

        self.assertGreater(len(pdf_bytes), 0)
        self.assertTrue(pdf_bytes.startswith(b'%PDF'))

    def test_export_to_pdf_writes_stream(self):
        buffer = BytesIO()
        self.service.export_to_pdf(SimpleReport(), buffer)
        self.assertTrue(buffer.getvalue().startswith(b'%PDF-'))


class CanvasHelpersTestCase(SimpleTestCase):
    """Test cases for header/footer drawing"""

    def test_draw_header_footer_and_page_number(self):
        """Test that the canvas helpers draw without errors"""
        buffer = BytesIO()
        c = pdf_canvas.Canvas(buffer, pagesize=A4)

        # Create mock doc object with pagesize attribute
        class MockDoc:
            pagesize = A4

        doc = MockDoc()

        draw_header(c, doc, 'Sample Company', 'Ispratnica 001')
        draw_footer(c, doc, 'Generated on 01.01.2024 12:00')
        draw_page_number(c, doc)

        c.save()
        self.assertGreater(len(buffer.getvalue()), 0)

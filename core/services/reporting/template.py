"""
Report Template Base

Defines the stateful template object the registry hands out: data binding,
named parameters and story construction. A template instance is used for a
single rendering and never shared.
"""

from html import escape
from typing import Any, Optional

from reportlab.lib.pagesizes import A4
from reportlab.lib.units import cm
from reportlab.platypus import Flowable, Paragraph, Spacer, Table

from .datatable import DataSet, DataTable
from .styles import get_report_styles, get_table_style


# A4 width minus the 2cm left and right page margins
CONTENT_WIDTH = A4[0] - 4 * cm


class ReportTemplate:
    """
    Base class for report templates.

    Subclasses declare their parameters in ``parameter_names`` and implement
    ``build_story``. ``draw_header_footer`` is optional.
    """

    title = "Report"
    parameter_names: tuple[str, ...] = ()

    def __init__(self):
        self.styles = get_report_styles()
        self.parameters: dict[str, Any] = {name: None for name in self.parameter_names}
        self.data_source: Optional[DataSet] = None
        self.data_member = ""

    def bind(self, data_source: DataSet, data_member: str = "") -> None:
        """
        Bind a data set to the template.

        Args:
            data_source: Data to render
            data_member: Name of the table that drives the detail rows
                (defaults to the first table)
        """
        self.data_source = data_source
        self.data_member = data_member

    def set_parameter(self, name: str, value: Any) -> bool:
        """
        Set a declared parameter.

        Returns:
            True if the parameter is declared by the template, False otherwise
        """
        if name not in self.parameters:
            return False
        self.parameters[name] = value
        return True

    @property
    def first_parameter_name(self) -> Optional[str]:
        return self.parameter_names[0] if self.parameter_names else None

    @property
    def detail_table(self) -> Optional[DataTable]:
        """The table selected by data_member, or the first table of the data source"""
        if self.data_source is None:
            return None
        if self.data_member:
            return self.data_source.table(self.data_member)
        tables = self.data_source.tables
        return tables[0] if tables else None

    @property
    def detail_rows(self) -> tuple[dict, ...]:
        table = self.detail_table
        return table.rows if table is not None else ()

    def field(self, name: str, default: str = "") -> str:
        """Value of a field from the first detail row, formatted for display"""
        rows = self.detail_rows
        if not rows or rows[0].get(name) is None:
            return default
        return format_value(rows[0][name])

    def parameter(self, name: str, default: str = "") -> str:
        value = self.parameters.get(name)
        return default if value in (None, "") else format_value(value)

    def paragraph(self, text: Any, style: str = "ReportBody") -> Paragraph:
        """Paragraph with the given text escaped for ReportLab markup"""
        return Paragraph(escape(format_value(text)), self.styles[style])

    def grid(self, table: DataTable, columns: Optional[list[str]] = None) -> Optional[Table]:
        """
        Build a styled table flowable for a DataTable.

        Returns:
            The Table flowable, or None if there is nothing to show
        """
        columns = columns or table.column_names
        if not columns:
            return None

        table_data = [[self.paragraph(name, "TableHeader") for name in columns]]
        for row in table:
            table_data.append([self.paragraph(row.get(name), "TableCell") for name in columns])

        col_width = CONTENT_WIDTH / len(columns)
        grid = Table(table_data, colWidths=[col_width] * len(columns), repeatRows=1)
        grid.setStyle(get_table_style())
        return grid

    def build_extra_tables(self, exclude: tuple[DataTable, ...] = ()) -> list[Flowable]:
        """Render every non-empty table other than the detail table as a generic grid"""
        story = []
        if self.data_source is None:
            return story

        skipped = (self.detail_table, *exclude)
        for table in self.data_source.tables:
            if any(table is other for other in skipped) or not len(table):
                continue
            grid = self.grid(table)
            if grid is None:
                continue
            story.append(Paragraph(escape(table.name), self.styles['ReportSubheading']))
            story.append(grid)
            story.append(Spacer(1, 0.3 * cm))
        return story

    def build_story(self) -> list[Flowable]:
        """Build the report story (content) from the bound data and parameters"""
        raise NotImplementedError("Report templates must implement build_story")


def format_value(value: Any) -> str:
    """Format a cell or parameter value for display"""
    if value is None:
        return ""
    if hasattr(value, "strftime"):
        return value.strftime("%d.%m.%Y")
    return str(value)

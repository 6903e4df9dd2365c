"""
Tabular Report Data

Provides the table structure that report templates are bound to, and the
parser that turns XML payloads into it.
"""

from collections import Counter
from dataclasses import dataclass
from typing import Any, Iterable, Iterator, Mapping, Optional, Union

from lxml import etree


class XmlDataError(ValueError):
    """Raised when an XML payload cannot be parsed into a DataSet"""
    pass


@dataclass(frozen=True)
class DataColumn:
    """A named, typed column of a DataTable"""

    name: str
    data_type: type = str


class DataTable:
    """
    Named table with a fixed set of typed columns and ordered rows.

    Rows are plain dicts keyed by column name. Every row carries every
    column; values that were not supplied are None.
    """

    def __init__(self, name: str, columns: Iterable[Union[DataColumn, str]] = ()):
        if not name:
            raise ValueError("Table name is required")

        self.name = name
        self._columns: dict[str, DataColumn] = {}
        for column in columns:
            if isinstance(column, str):
                column = DataColumn(column)
            if column.name in self._columns:
                raise ValueError(f"Duplicate column '{column.name}' in table '{name}'")
            self._columns[column.name] = column
        self._rows: list[dict[str, Any]] = []

    @property
    def columns(self) -> tuple[DataColumn, ...]:
        return tuple(self._columns.values())

    @property
    def column_names(self) -> list[str]:
        return list(self._columns)

    @property
    def rows(self) -> tuple[dict[str, Any], ...]:
        return tuple(self._rows)

    def has_column(self, name: str) -> bool:
        return name in self._columns

    def add_row(self, values: Optional[Mapping[str, Any]] = None, **kwargs) -> dict[str, Any]:
        """
        Append a row to the table.

        Args:
            values: Mapping of column name to value
            **kwargs: Additional column values

        Returns:
            The stored row

        Raises:
            ValueError: If a key is not a declared column or a value has the wrong type
        """
        supplied = dict(values or {}, **kwargs)

        unknown = [key for key in supplied if key not in self._columns]
        if unknown:
            raise ValueError(
                f"Unknown column(s) {', '.join(unknown)} for table '{self.name}'"
            )

        row = {}
        for name, column in self._columns.items():
            value = supplied.get(name)
            if value is not None and not isinstance(value, column.data_type):
                raise ValueError(
                    f"Column '{name}' of table '{self.name}' expects "
                    f"{column.data_type.__name__}, got {type(value).__name__}"
                )
            row[name] = value

        self._rows.append(row)
        return row

    def first_row(self) -> Optional[dict[str, Any]]:
        return self._rows[0] if self._rows else None

    def __len__(self) -> int:
        return len(self._rows)

    def __iter__(self) -> Iterator[dict[str, Any]]:
        return iter(self._rows)

    def __repr__(self) -> str:
        return f"DataTable({self.name!r}, columns={self.column_names!r}, rows={len(self._rows)})"


class DataSet:
    """Named, ordered collection of DataTables with unique names"""

    def __init__(self, name: str = "ReportData", tables: Iterable[DataTable] = ()):
        self.name = name
        self._tables: dict[str, DataTable] = {}
        for table in tables:
            self.add_table(table)

    def add_table(self, table: DataTable) -> DataTable:
        if table.name in self._tables:
            raise ValueError(f"Table '{table.name}' already exists in data set '{self.name}'")
        self._tables[table.name] = table
        return table

    def table(self, name: str) -> Optional[DataTable]:
        return self._tables.get(name)

    @property
    def tables(self) -> list[DataTable]:
        return list(self._tables.values())

    @property
    def table_names(self) -> list[str]:
        return list(self._tables)

    def __contains__(self, name: str) -> bool:
        return name in self._tables

    def __len__(self) -> int:
        return len(self._tables)

    def __repr__(self) -> str:
        return f"DataSet({self.name!r}, tables={self.table_names!r})"


def _local_name(element) -> str:
    return etree.QName(element).localname


def _is_leaf(element) -> bool:
    return not element.attrib and not any(isinstance(child.tag, str) for child in element)


def _collect_rows(element, tables: dict[str, list[dict[str, str]]]) -> None:
    """
    Walk an element tree and collect table rows.

    An element with attributes or leaf children becomes a row of the table
    named after the element. A leaf name repeated under the same parent
    becomes a table of its own with one row per occurrence. Children that
    have children of their own are walked recursively and produce rows in
    their own tables.

    Raises:
        XmlDataError: If two attributes, or an attribute and a leaf child,
            share a local name
    """
    element_name = _local_name(element)
    children = [child for child in element if isinstance(child.tag, str)]
    leaves = [child for child in children if _is_leaf(child)]
    leaf_counts = Counter(_local_name(child) for child in leaves)

    values = {}
    for key, value in element.attrib.items():
        name = etree.QName(key).localname
        if name in values or name in leaf_counts:
            raise XmlDataError(f"Element '{element_name}' has more than one field named '{name}'")
        values[name] = value

    repeated = []
    for child in leaves:
        name = _local_name(child)
        if leaf_counts[name] > 1:
            repeated.append((name, child.text or ""))
        else:
            values[name] = child.text or ""

    if values:
        tables.setdefault(element_name, []).append(values)

    for name, text in repeated:
        tables.setdefault(name, []).append({name: text})

    for child in children:
        if not _is_leaf(child):
            _collect_rows(child, tables)


def parse_xml_dataset(xml_data: Union[bytes, str]) -> DataSet:
    """
    Parse an XML document into a DataSet.

    Expected structure (any nesting depth is accepted):
        <ReportData>
          <Header>
            <DocumentId>INV-001</DocumentId>
          </Header>
          <Items>
            <Item><Name>Product 1</Name><Quantity>10</Quantity></Item>
          </Items>
        </ReportData>

    The root element names the data set. All values are kept as strings.

    Args:
        xml_data: XML document (bytes are preferred so the declared encoding is honoured)

    Returns:
        DataSet with one table per row-bearing element name

    Raises:
        XmlDataError: If the document is not well-formed XML, or an element
            carries two fields with the same name
    """
    if isinstance(xml_data, str):
        xml_data = xml_data.encode("utf-8")

    parser = etree.XMLParser(resolve_entities=False, no_network=True, remove_comments=True)
    try:
        root = etree.fromstring(xml_data, parser=parser)
    except etree.XMLSyntaxError as e:
        raise XmlDataError(str(e)) from e

    collected: dict[str, list[dict[str, str]]] = {}
    _collect_rows(root, collected)

    dataset = DataSet(_local_name(root))
    for table_name, rows in collected.items():
        column_names = list(dict.fromkeys(key for row in rows for key in row))
        table = DataTable(table_name, column_names)
        for row in rows:
            table.add_row(row)
        dataset.add_table(table)

    return dataset

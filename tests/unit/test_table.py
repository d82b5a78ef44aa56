"""Tests for TableData cell and layout editing."""

from scr4tch.models.content import TableData


def test_defaults() -> None:
    table = TableData()
    assert (table.row_count, table.column_count) == (3, 3)
    assert table.column_widths == [150.0] * 3
    assert table.row_heights == [36.0] * 3
    assert table.title == "Table"


def test_missing_cells_read_as_empty() -> None:
    assert TableData().cell_text(2, 2) == ""


def test_set_cell_keeps_one_record_per_coordinate() -> None:
    table = TableData()
    table.set_cell(0, 1, "first")
    table.set_cell(0, 1, "second")
    assert len(table.cells) == 1
    assert table.cell_text(0, 1) == "second"


def test_insert_row_shifts_cells_down() -> None:
    table = TableData()
    table.set_cell(1, 0, "x")
    table.insert_row(0)
    assert table.row_count == 4
    assert table.cell_text(2, 0) == "x"
    assert table.cell_text(1, 0) == ""
    assert len(table.row_heights) == 4


def test_insert_column_shifts_cells_right() -> None:
    table = TableData()
    table.set_cell(0, 2, "x")
    table.insert_column(1)
    assert table.column_count == 4
    assert table.cell_text(0, 3) == "x"


def test_remove_row_drops_its_cells_and_shifts_the_rest() -> None:
    table = TableData()
    table.set_cell(0, 0, "gone")
    table.set_cell(1, 0, "kept")
    table.remove_row(0)
    assert table.row_count == 2
    assert table.cell_text(0, 0) == "kept"
    assert [c.content for c in table.cells] == ["kept"]


def test_table_keeps_at_least_one_row_and_column() -> None:
    table = TableData(row_count=1, column_count=1)
    table.remove_row()
    table.remove_column()
    assert (table.row_count, table.column_count) == (1, 1)


def test_removing_a_row_or_column_outside_the_grid_changes_nothing() -> None:
    table = TableData()
    table.set_cell(2, 2, "corner")
    table.remove_row(5)
    table.remove_column(-1)
    assert (table.row_count, table.column_count) == (3, 3)
    assert (len(table.row_heights), len(table.column_widths)) == (3, 3)
    assert table.cell_text(2, 2) == "corner"


def test_insert_index_is_clamped_to_the_grid() -> None:
    table = TableData(row_count=2, column_count=2)
    table.set_cell(0, 0, "origin")
    table.insert_row(-3)
    table.insert_column(9)
    assert (table.row_count, table.column_count) == (3, 3)
    assert table.cell_text(1, 0) == "origin"
    assert table.column_widths[-1] == 150.0
    assert len(table.row_heights) == 3


def test_add_row_and_column_append_at_the_end() -> None:
    table = TableData(row_count=2, column_count=2)
    table.set_cell(1, 1, "corner")
    table.add_row()
    table.add_column()
    assert (table.row_count, table.column_count) == (3, 3)
    assert table.cell_text(1, 1) == "corner"


def test_sizes_are_clamped_and_lists_grow_on_demand() -> None:
    table = TableData()
    table.set_column_width(0, 10)
    table.set_row_height(0, 5)
    assert table.get_column_width(0) == 40.0
    assert table.get_row_height(0) == 20.0
    table.set_column_width(5, 200)
    assert len(table.column_widths) == 6
    assert table.get_column_width(4) == 150.0
    assert table.get_column_width(5) == 200
    assert table.get_row_height(99) == 36.0


def test_header_cells() -> None:
    table = TableData(has_header_column=False)
    assert table.is_header_cell(0, 2)
    assert not table.is_header_cell(1, 0)

from __future__ import annotations

from dxfcreator import colors, tables
from dxfcreator.handles import HandleAllocator
from dxfcreator.tables import Layer, SymbolTable, TextStyle
from tests._dxf_helpers import dxf_pairs


def _records(text: str, record_type: str) -> list[list[tuple[str, str]]]:
    records: list[list[tuple[str, str]]] = []
    current: list[tuple[str, str]] | None = None
    for code, value in dxf_pairs(text):
        if code == "0":
            current = [] if value == record_type else None
            if current is not None:
                records.append(current)
            continue
        if current is not None:
            current.append((code, value))
    return records


def test_define_keeps_existing_record() -> None:
    table: SymbolTable[Layer] = SymbolTable()

    assert table.define("walls", Layer("walls", colors.RED))
    assert not table.define("walls", Layer("walls", colors.BLUE))
    assert table.get("walls").color == colors.RED
    assert len(table) == 1


def test_select_returns_existing_or_new_record() -> None:
    table: SymbolTable[TextStyle] = SymbolTable()

    first = table.select("notes", TextStyle("notes", "arial.ttf"))
    second = table.select("notes", TextStyle("notes", "times.ttf"))

    assert first is second
    assert second.font == "arial.ttf"


def test_set_attribute_ignores_missing_record() -> None:
    table: SymbolTable[Layer] = SymbolTable()
    table.define("0", Layer("0"))

    table.set_attribute("0", "color", colors.CYAN)
    table.set_attribute("missing", "color", colors.RED)

    assert table.get("0").color == colors.CYAN
    assert "missing" not in table


def test_records_keep_registration_order() -> None:
    table: SymbolTable[Layer] = SymbolTable()
    for name in ("c", "a", "b"):
        table.define(name, Layer(name))

    assert list(table) == ["c", "a", "b"]
    assert [layer.name for layer in table.records()] == ["c", "a", "b"]


def test_linetype_table_emits_builtins_before_user_types() -> None:
    text = tables.linetype_table([tables.CONTINUOUS, tables.DASHED], HandleAllocator())
    records = _records(text, "LTYPE")

    names = [dict(record)["2"] for record in records]
    assert names == ["ByBlock", "ByLayer", "CONTINUOUS", "DASHED"]
    header = _records(text, "TABLE")[0]
    assert ("70", "4") in header


def test_linetype_pattern_from_catalog() -> None:
    description, groups = tables.linetype_pattern(tables.DASHED)

    assert description.startswith("Dashed")
    assert groups[0] == (73, 2)
    assert groups[1] == (40, 0.75)
    assert (49, 0.5) in groups
    assert (49, -0.25) in groups


def test_unknown_linetype_serializes_with_empty_pattern() -> None:
    text = tables.linetype_table(["ZIGZAG"], HandleAllocator())
    record = dict(_records(text, "LTYPE")[-1])

    assert record["2"] == "ZIGZAG"
    assert record["3"] == ""
    assert record["73"] == "0"
    assert record["40"] == "0.0"


def test_records_point_back_to_table_handle() -> None:
    handles = HandleAllocator()
    text = tables.layer_table([Layer("0"), Layer("walls", colors.RED)], handles)

    header = dict(_records(text, "TABLE")[0])
    layers = _records(text, "LAYER")
    assert header["5"] == "500"
    assert [dict(record)["330"] for record in layers] == ["500", "500"]
    assert [dict(record)["5"] for record in layers] == ["501", "502"]
    assert dict(layers[1])["62"] == "1"
    assert handles.last == 0x502


def test_style_table_writes_font_and_width_factor() -> None:
    text = tables.style_table([TextStyle("notes", "arial.ttf", width_factor=0.8)], HandleAllocator())
    record = dict(_records(text, "STYLE")[0])

    assert record["2"] == "notes"
    assert record["3"] == "arial.ttf"
    assert record["41"] == "0.8"
    assert record["4"] == ""

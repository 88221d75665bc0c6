from __future__ import annotations

from pathlib import Path
from typing import Iterator


def dxf_pairs(text: str) -> list[tuple[str, str]]:
    lines = text.splitlines()
    return [(lines[i].strip(), lines[i + 1]) for i in range(0, len(lines) - 1, 2)]


def iter_section_records(text: str, section: str) -> Iterator[dict[str, object]]:
    """Yield every record of ``section`` as ``{"type": ..., "groups": [...]}``."""
    section_name: str | None = None
    expect_section_name = False
    current: dict[str, object] | None = None

    for code, value in dxf_pairs(text):
        if code == "0":
            if current is not None and section_name == section:
                yield current
                current = None

            if value == "SECTION":
                expect_section_name = True
                continue

            if value == "ENDSEC":
                section_name = None
                continue

            if section_name == section:
                current = {"type": value, "groups": []}
            continue

        if expect_section_name and code == "2":
            section_name = value
            expect_section_name = False
            continue

        if section_name == section and current is not None:
            groups = current["groups"]
            assert isinstance(groups, list)
            groups.append((code, value))


def records_of_type(text: str, section: str, record_type: str) -> list[dict[str, object]]:
    return [record for record in iter_section_records(text, section) if record["type"] == record_type]


def dxf_entities_of_type(path: Path, entity_type: str) -> list[dict[str, object]]:
    text = path.read_text(encoding="utf-8", errors="replace")
    return records_of_type(text, "ENTITIES", entity_type)


def group_value(record: dict[str, object], code: str, default: str | None = None) -> str | None:
    groups = record["groups"]
    assert isinstance(groups, list)
    for group_code, raw_value in groups:
        if group_code == code:
            return raw_value
    return default


def group_values(record: dict[str, object], code: str) -> list[str]:
    groups = record["groups"]
    assert isinstance(groups, list)
    return [raw_value for group_code, raw_value in groups if group_code == code]


def group_float(record: dict[str, object], code: str, default: float = 0.0) -> float:
    value = group_value(record, code)
    return default if value is None else float(value)


def all_handles(text: str) -> list[str]:
    """Values of every handle-defining group (5 for records, 105 for DIMSTYLE)."""
    return [value.strip() for code, value in dxf_pairs(text) if code in {"5", "105"}]


def header_value(text: str, name: str) -> str | None:
    pairs = dxf_pairs(text)
    for i, (code, value) in enumerate(pairs):
        if code == "9" and value == name and i + 1 < len(pairs):
            return pairs[i + 1][1]
    return None


def triplet_close(
    actual: tuple[float, float, float],
    expected: tuple[float, float, float],
    eps: float = 1e-9,
) -> bool:
    return (
        abs(actual[0] - expected[0]) < eps
        and abs(actual[1] - expected[1]) < eps
        and abs(actual[2] - expected[2]) < eps
    )

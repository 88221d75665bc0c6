from __future__ import annotations

from pathlib import Path

import pytest

import dxfcreator
import dxfcreator.cli as cli_module
from dxfcreator.checking import AuditResult
from tests._dxf_helpers import dxf_entities_of_type, header_value


def test_cli_demo_writes_drawing(tmp_path: Path, capsys) -> None:
    output = tmp_path / "demo.dxf"

    code = cli_module.main(["demo", str(output), "--units", "inches"])

    assert code == 0
    assert output.exists()
    captured = capsys.readouterr()
    assert f"output: {output}" in captured.out
    assert "layouts: fullView, partialView" in captured.out
    text = output.read_text(encoding="utf-8")
    assert header_value(text, "$INSUNITS") == "1"
    assert len(dxf_entities_of_type(output, "LINE")) == 4
    assert len(dxf_entities_of_type(output, "INSERT")) == 1


def test_cli_demo_reports_missing_directory(tmp_path: Path, capsys) -> None:
    output = tmp_path / "missing" / "demo.dxf"

    code = cli_module.main(["demo", str(output)])

    assert code == 2
    assert "error: Directory not exists:" in capsys.readouterr().err


def test_demo_document_places_block_on_both_layouts() -> None:
    doc = cli_module.demo_document()

    north = doc.blocks.get("north")
    assert north is not None
    assert len(north.references) == 2
    assert [fragment.dxftype for fragment in north.fragments] == ["LWPOLYLINE", "HATCH", "MTEXT"]


def test_cli_audit_missing_file(tmp_path: Path, capsys) -> None:
    code = cli_module.main(["audit", str(tmp_path / "missing.dxf")])

    assert code == 2
    assert "error: file not found:" in capsys.readouterr().err


def test_cli_audit_reports_errors(monkeypatch, tmp_path: Path, capsys) -> None:
    path = tmp_path / "drawing.dxf"
    path.write_text("0\nEOF\n", encoding="utf-8")

    def _fake_audit(source):  # noqa: ANN001
        return AuditResult(
            source=str(source),
            dxf_version="AC1021",
            layouts=("Model", "A"),
            entity_count=3,
            errors=("bad owner",),
            fixes=("reset layer",),
        )

    monkeypatch.setattr(cli_module, "audit", _fake_audit)

    code = cli_module.main(["audit", str(path), "--verbose"])

    out = capsys.readouterr().out
    assert code == 1
    assert "layouts: Model, A" in out
    assert "total_entities: 3" in out
    assert "error[bad owner]" in out
    assert "fix[reset layer]" in out


def test_cli_audit_reports_load_failure(monkeypatch, tmp_path: Path, capsys) -> None:
    path = tmp_path / "drawing.dxf"
    path.write_text("", encoding="utf-8")

    def _failing_audit(source):  # noqa: ANN001
        raise ImportError("ezdxf is required")

    monkeypatch.setattr(cli_module, "audit", _failing_audit)

    assert cli_module.main(["audit", str(path)]) == 2
    assert "error: failed to audit DXF: ezdxf is required" in capsys.readouterr().err


def test_cli_audit_generated_file(tmp_path: Path, capsys) -> None:
    pytest.importorskip("ezdxf")
    output = tmp_path / "demo.dxf"
    assert cli_module.main(["demo", str(output)]) == 0
    capsys.readouterr()

    code = cli_module.main(["audit", str(output)])

    out = capsys.readouterr().out
    assert code == 0
    assert "version: AC1021" in out
    assert "errors: 0" in out


def test_cli_version(capsys) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["--version"])

    assert excinfo.value.code == 0
    assert capsys.readouterr().out.startswith("dxfcreator ")


def test_package_main_delegates_to_cli(capsys) -> None:
    assert dxfcreator.main([]) == 0
    assert "usage: dxfcreator" in capsys.readouterr().out

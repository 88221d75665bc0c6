from __future__ import annotations

import builtins
from pathlib import Path

import pytest

from dxfcreator import Document, audit, colors
import dxfcreator.checking as checking_module


def _drawing() -> Document:
    doc = Document()
    doc.add_layout("A")
    doc.set_layer("walls", colors.RED)
    doc.add_line((0, 0), (10, 0))
    doc.add_circle((5, 5), 2)
    return doc


def test_audit_loads_document_text() -> None:
    pytest.importorskip("ezdxf")

    result = audit(_drawing())

    assert result.source == "<document>"
    assert result.dxf_version == "AC1021"
    assert "Model" in result.layouts
    assert "A" in result.layouts
    assert result.errors == ()
    assert result.entity_count >= 2


def test_audit_loads_saved_file(tmp_path: Path) -> None:
    pytest.importorskip("ezdxf")
    path = tmp_path / "drawing.dxf"
    assert _drawing().save(path)

    result = audit(path)

    assert result.source == str(path)
    assert result.dxf_version == "AC1021"


def test_audit_rejects_document_without_layout() -> None:
    pytest.importorskip("ezdxf")

    with pytest.raises(ValueError):
        audit(Document())


def test_audit_requires_ezdxf(monkeypatch) -> None:
    real_import = builtins.__import__

    def _blocked_import(name, *args, **kwargs):  # noqa: ANN001
        if name == "ezdxf" or name.startswith("ezdxf."):
            raise ImportError("blocked")
        return real_import(name, *args, **kwargs)

    monkeypatch.setattr(builtins, "__import__", _blocked_import)

    with pytest.raises(ImportError, match="dxfcreator\\[dxf\\]"):
        checking_module.audit(_drawing())


def test_audit_demo_with_cross_block_inserts_is_clean() -> None:
    pytest.importorskip("ezdxf")
    from dxfcreator.cli import demo_document

    result = audit(demo_document())

    assert result.errors == ()
    assert result.layouts[0] == "Model"
    assert {"fullView", "partialView"} <= set(result.layouts)

from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from pathlib import Path

from .document import NO_LAYOUT, Document

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuditResult:
    source: str
    dxf_version: str
    layouts: tuple[str, ...]
    entity_count: int
    errors: tuple[str, ...]
    fixes: tuple[str, ...]

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)


def audit(source: Document | str | Path) -> AuditResult:
    """Load generated DXF text with ezdxf and report what its auditor finds."""
    ezdxf = _require_ezdxf()
    from ezdxf import recover

    source_name, text = _resolve_text(source)
    doc, auditor = recover.read(io.BytesIO(text.encode("utf-8")))
    layouts = tuple(doc.layout_names_in_taborder())
    entity_count = sum(len(layout) for layout in doc.layouts)
    logger.debug("audited %s with ezdxf %s", source_name, ezdxf.__version__)
    return AuditResult(
        source=source_name,
        dxf_version=doc.dxfversion,
        layouts=layouts,
        entity_count=entity_count,
        errors=tuple(entry.message for entry in auditor.errors),
        fixes=tuple(entry.message for entry in auditor.fixes),
    )


def _resolve_text(source: Document | str | Path) -> tuple[str, str]:
    if isinstance(source, Document):
        text = source.serialize()
        if text == NO_LAYOUT:
            raise ValueError("document has no layout")
        return "<document>", text
    path = Path(source)
    return str(path), path.read_text(encoding="utf-8", errors="replace")


def _require_ezdxf():
    try:
        import ezdxf
    except Exception as exc:
        raise ImportError(
            "ezdxf is required to audit DXF output. "
            'Install it with `pip install "dxfcreator[dxf]"`.'
        ) from exc
    return ezdxf

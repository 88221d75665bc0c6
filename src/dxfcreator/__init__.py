from typing import Sequence

from . import colors, tables
from .checking import AuditResult, audit
from .document import NO_LAYOUT, Document
from .entity import Fragment
from .layouts import LANDSCAPE, PORTRAIT, Layout, Margins
from .tables import Layer, TextStyle

__all__ = [
    "Document",
    "NO_LAYOUT",
    "Fragment",
    "Layer",
    "TextStyle",
    "Layout",
    "Margins",
    "LANDSCAPE",
    "PORTRAIT",
    "audit",
    "AuditResult",
    "colors",
    "tables",
]


def main(argv: Sequence[str] | None = None) -> int:
    from dxfcreator.cli import main as cli_main

    return cli_main(argv)

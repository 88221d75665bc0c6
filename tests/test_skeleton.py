from __future__ import annotations

from dxfcreator import Document, skeleton


def test_template_declares_every_placeholder() -> None:
    for name in skeleton.PLACEHOLDERS:
        assert "{" + name + "}" in skeleton.TEMPLATE


def test_render_leaves_unknown_names_untouched() -> None:
    rendered = skeleton.render("{A}|{B}|{ACAD_REACTORS", {"A": 1})

    assert rendered == "1|{B}|{ACAD_REACTORS"


def test_render_is_single_pass() -> None:
    assert skeleton.render("{A}", {"A": "{B}", "B": "x"}) == "{B}"


def test_serialize_substitutes_every_placeholder() -> None:
    doc = Document()
    doc.add_layout("A")
    doc.add_line((0, 0), (1, 1))

    text = doc.serialize()

    for name in skeleton.PLACEHOLDERS:
        assert "{" + name + "}" not in text

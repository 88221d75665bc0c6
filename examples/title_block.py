import dxfcreator
from dxfcreator import colors, tables


def main() -> None:
    doc = dxfcreator.Document(colors.MILLIMETERS)
    doc.add_layout("Sheet 1", paper_width=420.0, paper_height=297.0)

    doc.add_block("title", layer="frame")
    doc.set_layer("frame", colors.WHITE)
    doc.add_polyline_2d([(0, 0), (180, 0), (180, 40), (0, 40)], flag=1)
    doc.add_line((0, 20), (180, 20))
    doc.set_text_style("ISO", "isocp.shx")
    doc.add_text((5, 30), "PROJECT", 5, position=4)
    doc.add_text((5, 10), "DRAWING No.", 3.5, position=4)

    doc.select_layout("Sheet 1")
    doc.set_layer("outline", colors.CYAN, tables.CONTINUOUS)
    doc.add_polyline_2d([(10, 10), (410, 10), (410, 287), (10, 287)], flag=1)
    doc.add_insert("title", (230, 10))
    doc.set_layer("axis", colors.RED, tables.CENTER)
    doc.add_line((210, 20), (210, 277))

    if not doc.save("/tmp/title_block.dxf"):
        print(doc.error)
        return
    print("saved: /tmp/title_block.dxf")


if __name__ == "__main__":
    main()

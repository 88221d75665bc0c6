"""Static document skeleton and its placeholder substitution.

Every handle written here is at most ``handles.RESERVED_HANDLE_LIMIT``:
1 (BLOCK_RECORD table), 6/7/8/9/A (VIEW, UCS, VPORT, APPID, DIMSTYLE tables),
C/D/E/F (root, group and plot style dictionaries, "Normal" placeholder),
12 (ACAD appid), 1D (layout dictionary), 1F/20/21 (*Model_Space record,
block and end block), 22 (Model layout), 29 (*ACTIVE viewport) and the
image dictionary handle substituted for ACAD_IMAGE_DICT_HANDLE.
"""

from __future__ import annotations

import re
from typing import Mapping

ACAD_IMAGE_DICT_HANDLE = "77"

PLACEHOLDERS = (
    "LTYPES_TABLE",
    "LAYERS_TABLE",
    "STYLES_TABLE",
    "ENTITIES_SECTION",
    "BLOCKS",
    "BLOCK_RECORD",
    "LAYOUT_DICTIONARY",
    "LAYOUT_LIST",
    "OTHER_OBJECTS",
    "ACAD_IMAGE_DICT_HANDLE",
    "IMAGE_NAME_AND_POINTER",
    "ACTIVE_LAYER",
    "HANDSEED",
    "LEFT_MARGIN",
    "RIGHT_MARGIN",
    "TOP_MARGIN",
    "BOTTOM_MARGIN",
    "UNITS",
)

_PLACEHOLDER = re.compile(r"\{([A-Z_]+)\}")

TEMPLATE = """0
SECTION
2
HEADER
9
$ACADVER
1
AC1021
9
$ACADMAINTVER
70
0
9
$DWGCODEPAGE
3
ANSI_1252
9
$INSBASE
10
0.0
20
0.0
30
0.0
9
$EXTMIN
10
0.0
20
0.0
30
0.0
9
$EXTMAX
10
100.0
20
100.0
30
0.0
9
$LIMMIN
10
0.0
20
0.0
9
$LIMMAX
10
420.0
20
297.0
9
$CLAYER
8
{ACTIVE_LAYER}
9
$TILEMODE
70
0
9
$INSUNITS
70
{UNITS}
9
$MEASUREMENT
70
1
9
$HANDSEED
5
{HANDSEED}
0
ENDSEC
0
SECTION
2
CLASSES
0
CLASS
1
ACDBDICTIONARYWDFLT
2
AcDbDictionaryWithDefault
3
ObjectDBX Classes
90
0
91
0
280
0
281
0
0
CLASS
1
ACDBPLACEHOLDER
2
AcDbPlaceHolder
3
ObjectDBX Classes
90
0
91
0
280
0
281
0
0
CLASS
1
LAYOUT
2
AcDbLayout
3
ObjectDBX Classes
90
0
91
0
280
0
281
0
0
CLASS
1
IMAGE
2
AcDbRasterImage
3
ISM
90
2175
91
0
280
0
281
1
0
CLASS
1
IMAGEDEF
2
AcDbRasterImageDef
3
ISM
90
0
91
0
280
0
281
0
0
CLASS
1
IMAGEDEF_REACTOR
2
AcDbRasterImageDefReactor
3
ISM
90
1
91
0
280
0
281
0
0
ENDSEC
0
SECTION
2
TABLES
0
TABLE
2
VPORT
5
8
330
0
100
AcDbSymbolTable
70
1
0
VPORT
5
29
330
8
100
AcDbSymbolTableRecord
100
AcDbViewportTableRecord
2
*ACTIVE
70
0
10
0.0
20
0.0
11
1.0
21
1.0
12
0.0
22
0.0
13
0.0
23
0.0
14
10.0
24
10.0
15
10.0
25
10.0
16
0.0
26
0.0
36
1.0
17
0.0
27
0.0
37
0.0
40
100.0
41
1.5
42
50.0
43
0.0
44
0.0
50
0.0
51
0.0
71
0
72
100
73
1
74
3
75
0
76
0
77
0
78
0
0
ENDTAB
{LTYPES_TABLE}{LAYERS_TABLE}{STYLES_TABLE}0
TABLE
2
VIEW
5
6
330
0
100
AcDbSymbolTable
70
0
0
ENDTAB
0
TABLE
2
UCS
5
7
330
0
100
AcDbSymbolTable
70
0
0
ENDTAB
0
TABLE
2
APPID
5
9
330
0
100
AcDbSymbolTable
70
1
0
APPID
5
12
330
9
100
AcDbSymbolTableRecord
100
AcDbRegAppTableRecord
2
ACAD
70
0
0
ENDTAB
0
TABLE
2
DIMSTYLE
5
A
330
0
100
AcDbSymbolTable
70
0
100
AcDbDimStyleTable
71
0
0
ENDTAB
0
TABLE
2
BLOCK_RECORD
5
1
330
0
100
AcDbSymbolTable
70
1
0
BLOCK_RECORD
5
1F
330
1
100
AcDbSymbolTableRecord
100
AcDbBlockTableRecord
2
*Model_Space
340
22
70
0
280
1
281
1
{BLOCK_RECORD}0
ENDTAB
0
ENDSEC
0
SECTION
2
BLOCKS
0
BLOCK
5
20
330
1F
100
AcDbEntity
8
0
100
AcDbBlockBegin
2
*Model_Space
70
0
10
0.0
20
0.0
30
0.0
3
*Model_Space
1

0
ENDBLK
5
21
330
1F
100
AcDbEntity
8
0
100
AcDbBlockEnd
{BLOCKS}0
ENDSEC
0
SECTION
2
ENTITIES
{ENTITIES_SECTION}0
ENDSEC
0
SECTION
2
OBJECTS
0
DICTIONARY
5
C
330
0
100
AcDbDictionary
281
1
3
ACAD_GROUP
350
D
3
ACAD_IMAGE_DICT
350
{ACAD_IMAGE_DICT_HANDLE}
3
ACAD_LAYOUT
350
1D
3
ACAD_PLOTSTYLENAME
350
E
0
DICTIONARY
5
D
102
{ACAD_REACTORS
330
C
102
}
330
C
100
AcDbDictionary
281
1
0
DICTIONARY
5
{ACAD_IMAGE_DICT_HANDLE}
102
{ACAD_REACTORS
330
C
102
}
330
C
100
AcDbDictionary
281
1
{IMAGE_NAME_AND_POINTER}0
DICTIONARY
5
1D
102
{ACAD_REACTORS
330
C
102
}
330
C
100
AcDbDictionary
281
1
3
Model
350
22
{LAYOUT_DICTIONARY}0
ACDBDICTIONARYWDFLT
5
E
102
{ACAD_REACTORS
330
C
102
}
330
C
100
AcDbDictionary
281
1
3
Normal
350
F
100
AcDbDictionaryWithDefault
340
F
0
ACDBPLACEHOLDER
5
F
102
{ACAD_REACTORS
330
E
102
}
330
E
0
LAYOUT
5
22
102
{ACAD_REACTORS
330
1D
102
}
330
1D
100
AcDbPlotSettings
1

2
none_device
4

6

40
{LEFT_MARGIN}
41
{BOTTOM_MARGIN}
42
{RIGHT_MARGIN}
43
{TOP_MARGIN}
44
0.0
45
0.0
46
0.0
47
0.0
48
0.0
49
0.0
140
0.0
141
0.0
142
1.0
143
1.0
70
1712
72
0
73
0
74
0
7

75
0
76
0
77
2
78
300
147
1.0
148
0.0
149
0.0
100
AcDbLayout
1
Model
70
1
71
0
10
0.0
20
0.0
11
420.0
21
297.0
12
0.0
22
0.0
32
0.0
14
0.0
24
0.0
34
0.0
15
0.0
25
0.0
35
0.0
146
0.0
13
0.0
23
0.0
33
0.0
16
1.0
26
0.0
36
0.0
17
0.0
27
1.0
37
0.0
76
0
330
1F
331
29
{LAYOUT_LIST}{OTHER_OBJECTS}0
ENDSEC
0
EOF
"""


def render(template: str, values: Mapping[str, object]) -> str:
    """Replace each ``{NAME}`` in one pass; unknown names are left untouched."""

    def substitute(match: re.Match[str]) -> str:
        name = match.group(1)
        if name not in values:
            return match.group(0)
        return str(values[name])

    return _PLACEHOLDER.sub(substitute, template)

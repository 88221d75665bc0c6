"""AutoCAD Color Index values, lineweights and $INSUNITS codes."""

BYBLOCK = 0
RED = 1
YELLOW = 2
GREEN = 3
CYAN = 4
BLUE = 5
MAGENTA = 6
BLACK = 7
WHITE = 7
GRAY = 8
LIGHT_GRAY = 9
BYLAYER = 256

LINEWEIGHT_BYLAYER = -1
LINEWEIGHT_BYBLOCK = -2
LINEWEIGHT_DEFAULT = -3

UNITLESS = 0
INCHES = 1
FEET = 2
MILES = 3
MILLIMETERS = 4
CENTIMETERS = 5
METERS = 6
KILOMETERS = 7
MICROINCHES = 8
MILS = 9
YARDS = 10
ANGSTROMS = 11
NANOMETERS = 12
MICRONS = 13
DECIMETERS = 14
DECAMETERS = 15
HECTOMETERS = 16
GIGAMETERS = 17
ASTRONOMICAL_UNITS = 18
LIGHT_YEARS = 19
PARSECS = 20

UNITS = {
    "unitless": UNITLESS,
    "inches": INCHES,
    "feet": FEET,
    "miles": MILES,
    "millimeters": MILLIMETERS,
    "centimeters": CENTIMETERS,
    "meters": METERS,
    "kilometers": KILOMETERS,
    "microinches": MICROINCHES,
    "mils": MILS,
    "yards": YARDS,
    "angstroms": ANGSTROMS,
    "nanometers": NANOMETERS,
    "microns": MICRONS,
    "decimeters": DECIMETERS,
    "decameters": DECAMETERS,
    "hectometers": HECTOMETERS,
    "gigameters": GIGAMETERS,
    "astronomical_units": ASTRONOMICAL_UNITS,
    "light_years": LIGHT_YEARS,
    "parsecs": PARSECS,
}

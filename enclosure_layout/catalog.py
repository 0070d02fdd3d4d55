"""Static enclosure and component tables.

Both catalogs are read-only. Lookups fail fast on unknown keys; project files
are checked against them once, at load time (see ``project.py``).
"""

from .models import FOOTPRINT_GUIDES, ComponentSpec, CornerStyle, EnclosureDescriptor, Shape

ROUNDED = CornerStyle.ROUNDED
SHARP = CornerStyle.SHARP

MANUFACTURERS = {
    "Amplified Parts": "AMP",
    "Hammond": "HAM",
    "GØRVA design": "GOR",
    "Love My Switches": "LMS",
    "Stomp Box Parts": "SBP",
    "Tayda": "TAY",
    "Generic": "GEN",
}


class UnknownEnclosureError(KeyError):
    pass


class UnknownComponentError(KeyError):
    pass


def _enc(width, height, depth, manufacturer, display_name, rotates_labels=True,
         corner_style=ROUNDED, front_depth=None):
    return EnclosureDescriptor(
        width=width,
        height=height,
        depth=depth,
        corner_style=corner_style,
        manufacturer=manufacturer,
        display_name=display_name,
        rotates_labels=rotates_labels,
        is_trapezoidal=front_depth is not None,
        front_depth=front_depth,
    )


ENCLOSURE_TYPES: dict[str, EnclosureDescriptor] = {
    "AMP-1590A": _enc(38.6, 92.5, 26.9, "Amplified Parts", "1590A"),
    "AMP-1590B": _enc(61, 111.8, 26, "Amplified Parts", "1590B"),
    "AMP-1590BS": _enc(60.5, 111.8, 40, "Amplified Parts", "1590BS"),
    "AMP-1590C": _enc(94, 120, 51, "Amplified Parts", "1590C"),
    "AMP-1590LB": _enc(50.5, 50.5, 29, "Amplified Parts", "1590LB", rotates_labels=False),
    "AMP-125B": _enc(65.5, 121.2, 35.8, "Amplified Parts", "125B"),
    "AMP-1590XX": _enc(145.3, 121.2, 39.4, "Amplified Parts", "1590XX"),

    "HAM-1590A": _enc(39, 93, 29, "Hammond", "1590A"),
    "HAM-1590B": _enc(60, 113, 29, "Hammond", "1590B"),
    "HAM-1590LB": _enc(51, 51, 29, "Hammond", "1590LB", rotates_labels=False),
    "HAM-1590N1": _enc(66, 121, 38, "Hammond", "1590N1"),
    "HAM-1590BB": _enc(119, 94, 32, "Hammond", "1590BB"),
    "HAM-1590BB2": _enc(119, 94, 36, "Hammond", "1590BB2"),
    "HAM-1590BBS": _enc(120, 94, 40, "Hammond", "1590BBS"),
    "HAM-1590DD": _enc(188, 120, 35, "Hammond", "1590DD"),
    "HAM-1590XX": _enc(145, 121, 37, "Hammond", "1590XX"),

    # Keys from older project files, kept so they still open.
    "1590A": _enc(39, 93, 29, "Hammond", "1590A"),
    "1590B": _enc(60, 113, 29, "Hammond", "1590B"),
    "1590LB": _enc(51, 51, 29, "Hammond", "1590LB", rotates_labels=False),
    "1590BB": _enc(119, 94, 32, "Hammond", "1590BB"),
    "1590BB2": _enc(119, 94, 36, "Hammond", "1590BB2"),
    "1590BBS": _enc(120, 94, 40, "Hammond", "1590BBS"),
    "1590DD": _enc(188, 120, 35, "Hammond", "1590DD"),
    "1590XX": _enc(145, 121, 37, "Hammond", "1590XX"),

    "GOR-M45": _enc(45, 100, 33, "GØRVA design", "M45"),
    "GOR-C65": _enc(65, 120, 37, "GØRVA design", "C65"),
    "GOR-S90-mkII": _enc(90, 117.2, 37, "GØRVA design", "S90 mkII"),

    "LMS-1590A": _enc(38.5, 93.6, 28, "Love My Switches", "1590A"),
    "LMS-1590B": _enc(60.9, 111.9, 29.6, "Love My Switches", "1590B"),
    "LMS-1590LB": _enc(50, 50, 29, "Love My Switches", "1590LB", rotates_labels=False),
    "LMS-125B": _enc(66.98, 122, 35.94, "Love My Switches", "125B"),
    "LMS-1590BB": _enc(119.5, 94, 30, "Love My Switches", "1590BB"),
    "LMS-1590BBS": _enc(120, 94, 38.3, "Love My Switches", "1590BBS"),
    "LMS-1590DD": _enc(188, 120, 33, "Love My Switches", "1590DD"),
    "LMS-1590J": _enc(145, 95, 45.2, "Love My Switches", "1590J"),
    "LMS-1590XX": _enc(145, 120, 35, "Love My Switches", "1590XX"),

    "SBP-1590A": _enc(39, 93, 29.5, "Stomp Box Parts", "1590A"),
    "SBP-1590B-PRO": _enc(60.7, 112.2, 29.1, "Stomp Box Parts", "1590B Pro"),
    "SBP-1590LB": _enc(50.5, 50.5, 29, "Stomp Box Parts", "1590LB", rotates_labels=False),
    "SBP-125B": _enc(66, 122, 38, "Stomp Box Parts", "125B"),
    "SBP-125B-PRO": _enc(66, 121.3, 37.2, "Stomp Box Parts", "125B Pro"),
    "SBP-1590BB-PRO": _enc(119.1, 93.6, 32, "Stomp Box Parts", "1590BB Pro"),
    "SBP-1590BBS": _enc(119.6, 94, 40.4, "Stomp Box Parts", "1590BBS"),
    "SBP-1590XX": _enc(145, 120, 37, "Stomp Box Parts", "1590XX"),
    "SBP-1030L": _enc(69.8, 254, 51.3, "Stomp Box Parts", "1030L"),

    "TAY-1590A": _enc(38, 92, 28, "Tayda", "1590A"),
    "TAY-1590B": _enc(60, 112, 29, "Tayda", "1590B"),
    "TAY-1590LB": _enc(50.5, 50.5, 29, "Tayda", "1590LB"),
    "TAY-125B": _enc(66, 122, 37.5, "Tayda", "125B"),
    "TAY-1590BB": _enc(120, 94, 31, "Tayda", "1590BB"),
    "TAY-1590BB2": _enc(120, 94, 36, "Tayda", "1590BB2"),
    "TAY-1590DD": _enc(188, 119, 35.5, "Tayda", "1590DD"),
    "TAY-1590XX": _enc(145, 121, 37.5, "Tayda", "1590XX"),

    "GEN-BOX-100": _enc(100, 60, 40, "Generic", "Box 100", corner_style=SHARP),
    "GEN-WEDGE-120": _enc(120, 94, 40, "Generic", "Wedge 120", rotates_labels=False,
                          corner_style=SHARP, front_depth=25),
}

# Older files stored these ids for what is now the Love My Switches 125B.
_125B_MIGRATION = {"125B", "1590N1", "Hammond-125B", "Hammond-1590N1"}

GUIDE = FOOTPRINT_GUIDES

COMPONENT_TYPES: dict[str, ComponentSpec] = {
    "pot-9mm": ComponentSpec("9mm Potentiometer", 6.0, '1/4"', "Potentiometers"),
    "pot-16mm": ComponentSpec("16mm Potentiometer", 7.0, '9/32"', "Potentiometers"),
    "pot-17mm": ComponentSpec("17mm Potentiometer", 7.5, '19/64"', "Potentiometers"),
    "pot-24mm": ComponentSpec("24mm Potentiometer", 8.0, '5/16"', "Potentiometers"),
    "eighth-jack": ComponentSpec('1/8" Jack', 6.0, '1/4"', "Jacks"),
    "quarter-jack": ComponentSpec('1/4" Jack', 10.0, '3/8"', "Jacks"),
    "dc-jack-2": ComponentSpec("2 Pin DC Jack", 8.0, '5/16"', "Jacks"),
    "dc-jack-3": ComponentSpec("3 Pin DC Jack", 12.0, '1/2"', "Jacks"),
    "xlr-jack": ComponentSpec("XLR Jack", 15.0, '5/8"', "Jacks"),
    "footswitch": ComponentSpec("Footswitch", 12.0, '1/2"', "Switches"),
    "toggle": ComponentSpec("Toggle Switch", 7.0, '1/4"', "Switches"),
    "push-button": ComponentSpec("Push Button", 8.0, '5/16"', "Switches"),
    "rocker-switch": ComponentSpec("Rocker Switch", 12.0, '1/2"', "Switches"),
    "momentary-button": ComponentSpec("Momentary Button", 6.0, '1/4"', "Switches"),
    "rotary": ComponentSpec("Rotary Switch", 10.0, '3/8"', "Switches"),
    "led-3mm-bezel": ComponentSpec("3mm LED (bezel)", 7.0, '1/4"', "LEDs"),
    "led-3mm-no-bezel": ComponentSpec("3mm LED (no bezel)", 3.0, '1/8"', "LEDs"),
    "led-5mm-bezel": ComponentSpec("5mm LED (bezel)", 8.0, '5/16"', "LEDs"),
    "led-5mm-no-bezel": ComponentSpec("5mm LED (no bezel)", 5.0, '3/16"', "LEDs"),
    "jewel-light": ComponentSpec("Jewel Light Fixture", 16.0, '5/8"', "Fixtures"),
    "pilot-light": ComponentSpec("Pilot Light Fixture", 23.0, '7/8"', "Fixtures"),
    "screw-3": ComponentSpec("M3 Screw", 3, '1/8"', "Screws"),
    "screw-6": ComponentSpec("#6-32 Screw", 3.5, '5/8"', "Screws"),
    "screw-4": ComponentSpec("M4 Screw", 4, '5/32"', "Screws"),

    "slide-15": ComponentSpec("15mm Slider", 0, '5/32" × 19/32"', "Slide Potentiometers",
                              Shape.RECTANGLE, 4, 15),
    "slide-20": ComponentSpec("20mm Slider", 0, '5/32" × 25/32"', "Slide Potentiometers",
                              Shape.RECTANGLE, 4, 20),
    "slide-30": ComponentSpec("30mm Slider", 0, '5/32" × 1 3/16"', "Slide Potentiometers",
                              Shape.RECTANGLE, 4, 30),
    "slide-45": ComponentSpec("45mm Slider", 0, '5/32" × 1 49/64"', "Slide Potentiometers",
                              Shape.RECTANGLE, 4, 45),
    "slide-60": ComponentSpec("60mm Slider", 0, '5/32" × 2 23/64"', "Slide Potentiometers",
                              Shape.RECTANGLE, 4, 60),
    "slide-100": ComponentSpec("100mm Slider", 0, '5/32" × 3 15/16"', "Slide Potentiometers",
                               Shape.RECTANGLE, 4, 100),

    "spst-toggle": ComponentSpec("SPST Toggle", 0, '17/64" × 1/2"', GUIDE, Shape.RECTANGLE, 6.8, 12.8),
    "spst-mini": ComponentSpec("SPST Mini Toggle", 0, '1/4" × 3/8"', GUIDE, Shape.RECTANGLE, 6.35, 9.5),
    "spst-slide": ComponentSpec("SPDT Slide", 0, '15/64" × 1/2"', GUIDE, Shape.RECTANGLE, 6, 12.7),
    "dpdt-toggle": ComponentSpec("DPDT Toggle", 0, '29/64" × 1/2"', GUIDE, Shape.RECTANGLE, 11.43, 12.7),
    "dpdt-vintage": ComponentSpec("Vintage DPDT", 0, '35/64" × 35/64"', GUIDE, Shape.SQUARE, 14, 14),
    "dpdt-slide": ComponentSpec("Mini DPDT Slide", 0, '2/5" × 63/100"', GUIDE, Shape.RECTANGLE, 10, 16),
    "3pdt-generic": ComponentSpec("Generic 3PDT", 0, '45/64" × 43/64"', GUIDE, Shape.RECTANGLE, 18, 17.1),
    "3pdt-gorva": ComponentSpec("Gorva 3PDT", 0, '43/64" × 21/32"', GUIDE, Shape.RECTANGLE, 17, 16.7),
    "3pdt-toggle": ComponentSpec("3PDT Toggle", 0, '25/64" × 33/64"', GUIDE, Shape.RECTANGLE, 10, 13.2),
    "4pdt-generic": ComponentSpec("Generic 4PDT", 0, '51/64" × 43/64"', GUIDE, Shape.RECTANGLE, 20, 17),
    "4pdt-vintage": ComponentSpec("Vintage 4PDT", 0, '45/64" × 45/64"', GUIDE, Shape.SQUARE, 18, 18),
    "5pdt-generic": ComponentSpec("Generic 5PDT", 0, '57/64" × 43/64"', GUIDE, Shape.RECTANGLE, 22.5, 17),
    "dip-2": ComponentSpec("2-Pos DIP", 0, '25/64" × 13/64"', GUIDE, Shape.RECTANGLE, 10, 5),
    "dip-4": ComponentSpec("4-Pos DIP", 0, '29/64" × 13/64"', GUIDE, Shape.RECTANGLE, 11.6, 5),
    "rotary-1": ComponentSpec("1P4T Rotary", 10, '25/64"', GUIDE),
    "rotary-2": ComponentSpec("2P6T Rotary", 13, '33/64"', GUIDE),
    "pushbutton-momentary": ComponentSpec("Momentary Pushbutton", 6, '15/64"', GUIDE),
    "3pdt-washer": ComponentSpec("Generic 3PDT Washer", 17.2, '43/64"', GUIDE),
    "3pdt-nut": ComponentSpec("3PDT Aluminum Nut", 18.9, '3/4"', GUIDE),
    "3pdt-dress": ComponentSpec("3PDT Dress Nut", 19.6, '49/64"', GUIDE),

    "pot-7": ComponentSpec("7mm Potentiometer", 7, '9/32"', GUIDE),
    "pot-9": ComponentSpec("9mm Potentiometer", 9, '23/64"', GUIDE),
    "pot-10": ComponentSpec("10mm Potentiometer", 10, '25/64"', GUIDE),
    "pot-11": ComponentSpec("11mm Potentiometer", 11, '7/16"', GUIDE),
    "pot-16": ComponentSpec("16mm Potentiometer", 16, '5/8"', GUIDE),
    "pot-17": ComponentSpec("17mm Potentiometer", 17, '43/64"', GUIDE),
    "pot-18": ComponentSpec("18mm Potentiometer", 18, '45/64"', GUIDE),
    "pot-20": ComponentSpec("20mm Potentiometer", 20, '13/16"', GUIDE),
    "pot-24": ComponentSpec("24mm Potentiometer", 24, '15/16"', GUIDE),
    "pot-27": ComponentSpec("27mm Potentiometer", 27, '1 1/16"', GUIDE),
    "pot-30": ComponentSpec("30mm Potentiometer", 30, '1 3/16"', GUIDE),
    "pot-35": ComponentSpec("35mm Potentiometer", 35, '1 3/8"', GUIDE),

    "jack-mono-open": ComponentSpec('1/4" Mono Jack (Open)', 17.5, '11/16"', GUIDE),
    "jack-stereo-open": ComponentSpec('1/4" Stereo Jack (Open)', 19.05, '3/4"', GUIDE),
    "jack-mono-enclosed": ComponentSpec('1/4" Jack (Enclosed)', 0, '25/32" × 39/64"', GUIDE,
                                        Shape.RECTANGLE, 20, 15.5),
    "jack-mono-lumberg": ComponentSpec('1/4" Jack (Lumberg)', 0, '37/64" × 37/64"', GUIDE,
                                       Shape.SQUARE, 14.75, 14.75),

    "knob-10": ComponentSpec("10mm Knob", 10, '25/64"', GUIDE),
    "knob-125": ComponentSpec("12.5mm Knob", 12.5, '1/2"', GUIDE),
    "knob-135": ComponentSpec("13.5mm Knob", 13.5, '17/32"', GUIDE),
    "knob-16": ComponentSpec("16mm Knob", 16, '5/8"', GUIDE),
    "knob-19": ComponentSpec("19mm Knob", 19, '3/4"', GUIDE),
    "knob-20": ComponentSpec("20mm Knob", 20, '13/16"', GUIDE),
    "knob-22": ComponentSpec("22mm Knob", 22, '7/8"', GUIDE),
    "knob-25": ComponentSpec("25mm Knob", 25, '1"', GUIDE),
    "knob-29": ComponentSpec("29mm Knob", 29, '1 1/8"', GUIDE),
    "knob-32": ComponentSpec("32mm Knob", 32, '1 1/4"', GUIDE),
    "knob-35": ComponentSpec("35mm Knob", 35, '1 3/8"', GUIDE),
    "knob-40": ComponentSpec("40mm Knob", 40, '1 9/16"', GUIDE),
    "knob-52": ComponentSpec("52mm Knob", 52, '2 1/16"', GUIDE),
    "knob-61": ComponentSpec("61mm Knob", 61, '2 3/8"', GUIDE),

    "slideguide-15": ComponentSpec("15mm Slider", 0, '23/64" × 1 3/16"', GUIDE, Shape.RECTANGLE, 9, 30),
    "slideguide-20": ComponentSpec("20mm Slider", 0, '23/64" × 1 3/8"', GUIDE, Shape.RECTANGLE, 9, 35),
    "slideguide-30": ComponentSpec("30mm Slider", 0, '23/64" × 1 49/64"', GUIDE, Shape.RECTANGLE, 9, 45),
    "slideguide-45": ComponentSpec("45mm Slider", 0, '23/64" × 2 23/64"', GUIDE, Shape.RECTANGLE, 9, 60),
    "slideguide-60": ComponentSpec("60mm Slider", 0, '23/64" × 2 61/64"', GUIDE, Shape.RECTANGLE, 9, 75),
    "slideguide-100": ComponentSpec("100mm Slider", 0, '23/64" × 4 17/32"', GUIDE, Shape.RECTANGLE, 9, 115),
}


def lookup_enclosure(key: str) -> EnclosureDescriptor:
    try:
        return ENCLOSURE_TYPES[key]
    except KeyError:
        raise UnknownEnclosureError(key) from None


def lookup_component(key: str) -> ComponentSpec:
    try:
        return COMPONENT_TYPES[key]
    except KeyError:
        raise UnknownComponentError(key) from None


def normalize_enclosure_type(key: str) -> str:
    if key in _125B_MIGRATION:
        return "LMS-125B"
    return key


def manufacturer_prefix(key: str) -> str:
    if key in _125B_MIGRATION:
        return "LEG"
    descriptor = ENCLOSURE_TYPES.get(key)
    if descriptor is None:
        return ""
    return MANUFACTURERS.get(descriptor.manufacturer, "")


def enclosures_grouped() -> dict[str, list[str]]:
    grouped: dict[str, list[str]] = {name: [] for name in MANUFACTURERS}
    for key, descriptor in ENCLOSURE_TYPES.items():
        # Keys without a manufacturer prefix are legacy aliases.
        if "-" not in key:
            continue
        grouped.setdefault(descriptor.manufacturer, []).append(key)
    return grouped


def components_grouped() -> dict[str, list[str]]:
    grouped: dict[str, list[str]] = {}
    for key, spec in COMPONENT_TYPES.items():
        grouped.setdefault(spec.category, []).append(key)
    return grouped

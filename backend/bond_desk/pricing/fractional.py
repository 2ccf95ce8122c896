"""
Fractional Treasury Price Notation
──────────────────────────────────
US Treasuries quote in 32nds with an extra digit for eighths of a 32nd:

    "99-16+"  →  99 + 16/32 + 4/256 = 99.515625

Format is "base-XYz":
  • base — integer handle
  • XY   — two-digit 32nds, 00..31
  • z    — eighths of a 32nd, 0..7; 4 is written as '+'

A leading '-' marks a negative value (a crossed spread, say), applied to
the whole magnitude: "-0-00+" is −4/256. A literal '4' eighth is read the
same as '+' but always rendered as '+'.

Every representable price sits on the 1/256 grid, so floats hold them exactly.
"""

import math
import re

from ..errors import PriceFormatError

TICKS_PER_POINT = 256
TICKS_PER_32ND = 8

_FRACTION_RE = re.compile(r"^(-?)(\d+)-(\d{2})([0-7+])$")


def from_fraction(text: str) -> float:
    """Parse '[-]base-XYz' into a decimal price. Raises PriceFormatError."""
    match = _FRACTION_RE.match(text.strip()) if isinstance(text, str) else None
    if not match:
        raise PriceFormatError(f"invalid fractional price {text!r}", line=str(text))

    sign, base, xy, z_char = match.groups()
    xy_val = int(xy)
    if xy_val > 31:
        raise PriceFormatError(f"32nds out of range in {text!r}", line=text)
    z_val = 4 if z_char == "+" else int(z_char)

    value = int(base) + xy_val / 32.0 + z_val / 256.0
    return -value if sign else value


def to_fraction(value: float) -> str:
    """
    Render a decimal price as '[-]base-XYz'. The magnitude is floored to the
    1/256 grid, so negative values round toward zero.
    """
    sign = "-" if value < 0 else ""
    # absorbs float noise from arithmetic just below a grid point
    ticks = math.floor(abs(value) * TICKS_PER_POINT + 1e-9)
    if ticks == 0:
        sign = ""
    base, rem = divmod(ticks, TICKS_PER_POINT)
    xy, z = divmod(rem, TICKS_PER_32ND)
    z_char = "+" if z == 4 else str(z)
    return f"{sign}{base}-{xy:02d}{z_char}"

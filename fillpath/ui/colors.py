"""Board palette and color utilities for the UI."""


class BoardColors:
    """Light theme palette."""

    BG_TOP = "#e0f7fa"
    BG_BOTTOM = "#b2ebf2"

    PRIMARY = "#00838f"
    PRIMARY_LIGHT = "#4fb3bf"
    PRIMARY_DARK = "#005662"

    CELL_EMPTY = "#ffffff"
    CELL_FILLED = "#4fb3bf"
    CELL_BLOCKED = "#37474f"
    CELL_BORDER = "#b0bec5"

    CONNECTOR = "#005662"

    TEXT_PRIMARY = "#1a3a3a"
    TEXT_SECONDARY = "#4a6572"
    TEXT_MUTED = "#78909c"


def color_for(blocked: bool, filled: bool) -> str:
    """Fill color for a cell in the given state."""
    if blocked:
        return BoardColors.CELL_BLOCKED
    if filled:
        return BoardColors.CELL_FILLED
    return BoardColors.CELL_EMPTY


def blend_hex(a: str, b: str, t: float) -> str:
    """Blend two #RRGGBB colors. t=0 -> a, t=1 -> b."""
    try:
        a = a.strip()
        b = b.strip()
        if not (a.startswith("#") and b.startswith("#") and len(a) == 7 and len(b) == 7):
            return a
        t = max(0.0, min(1.0, float(t)))
        ar, ag, ab = int(a[1:3], 16), int(a[3:5], 16), int(a[5:7], 16)
        br, bg, bb = int(b[1:3], 16), int(b[3:5], 16), int(b[5:7], 16)
        r = int(ar + (br - ar) * t)
        g = int(ag + (bg - ag) * t)
        bl = int(ab + (bb - ab) * t)
        return f"#{r:02X}{g:02X}{bl:02X}"
    except (TypeError, ValueError):
        return a

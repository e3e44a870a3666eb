"""
Theme tokens and stylesheet for Cartridge.

Usage
-----
    from cartridge.ui.style import active_theme, set_theme, build_stylesheet

    t = active_theme()          # current Theme object
    set_theme("Neon")           # switch globally
    build_stylesheet()          # returns QSS for the active theme
"""

from __future__ import annotations

from dataclasses import dataclass


# ======================================================================
# Theme dataclass
# ======================================================================

@dataclass(frozen=True)
class Theme:
    name: str

    # Backgrounds
    bg_base:     str   # window background behind the artwork
    bg_overlay:  str   # translucent panels over the artwork
    bg_card:     str   # cover placeholder

    # Foregrounds
    fg_primary:   str  # titles
    fg_secondary: str  # footer / captions

    # Accents
    accent_primary: str  # highlight ring around the selected cover
    badge_bg:       str  # extension badge

    font_size: str = "11pt"


THEMES: dict[str, Theme] = {

    # -- Default: dark slate, cyan highlight -------------------------
    "Default": Theme(
        name="Default",
        bg_base="#0B0E13", bg_overlay="rgba(0, 0, 0, 170)", bg_card="#1A2028",
        fg_primary="#F2F4F8", fg_secondary="#8A95A5",
        accent_primary="#00C3E3", badge_bg="#E60012",
    ),

    # -- Neon: red/blue split, like the console's launch colours -----
    "Neon": Theme(
        name="Neon",
        bg_base="#101010", bg_overlay="rgba(16, 16, 16, 190)", bg_card="#242424",
        fg_primary="#FFFFFF", fg_secondary="#9A9A9A",
        accent_primary="#FF4554", badge_bg="#00B8E6",
    ),

    # -- Light ---------------------------------------------------------
    "Light": Theme(
        name="Light",
        bg_base="#EBEDF0", bg_overlay="rgba(255, 255, 255, 200)", bg_card="#D8DCE2",
        fg_primary="#1E2128", fg_secondary="#5A6270",
        accent_primary="#2E7BBF", badge_bg="#E60012",
    ),
}


# ======================================================================
# Active theme state
# ======================================================================

_active: Theme = THEMES["Default"]


def active_theme() -> Theme:
    """Return the current global theme."""
    return _active


def set_theme(name: str) -> Theme:
    """Set the active theme by name.  Returns the new theme."""
    global _active
    _active = THEMES.get(name, THEMES["Default"])
    return _active


# ======================================================================
# Dimensions (theme-independent)
# ======================================================================

CARD_WIDTH = 220
CARD_HEIGHT = 220
CARD_SPACING = 24
HIGHLIGHT_WIDTH = 4


# ======================================================================
# Stylesheet builder
# ======================================================================

def build_stylesheet(theme: Theme | None = None) -> str:
    """Return the complete application QSS for the given (or active) theme."""
    t = theme or _active

    return f"""

    * {{ font-size: {t.font_size}; }}

    QMainWindow   {{ background-color: {t.bg_base}; color: {t.fg_primary}; }}
    QWidget       {{ color: {t.fg_primary}; }}
    QLabel        {{ background: transparent; }}
    QScrollArea   {{ background: transparent; border: none; }}
    QScrollArea > QWidget > QWidget {{ background: transparent; }}
    QScrollBar:horizontal {{ height: 0px; }}

    /* -- Game strip ------------------------------------------------ */

    QLabel#gameCover {{
        background-color: {t.bg_card};
        border: {HIGHLIGHT_WIDTH}px solid transparent;
        border-radius: 6px;
    }}
    QLabel#gameCover[highlighted="true"] {{
        border: {HIGHLIGHT_WIDTH}px solid {t.accent_primary};
    }}
    QLabel#extensionBadge {{
        background-color: {t.badge_bg};
        color: #FFFFFF;
        font-size: 8pt;
        font-weight: 700;
        padding: 2px 6px;
        border-radius: 3px;
    }}

    /* -- Info panel ------------------------------------------------ */

    QLabel#gameInfoTitle {{
        color: {t.fg_primary};
        font-size: 22pt;
        font-weight: 600;
    }}
    QFrame#gameInfoLine {{
        background-color: {t.fg_primary};
        max-height: 1px;
        min-height: 1px;
    }}

    /* -- Empty state / footer -------------------------------------- */

    QLabel#emptyMessage {{ color: {t.fg_secondary}; font-size: 14pt; }}
    QWidget#footer      {{ background-color: {t.bg_overlay}; }}
    QLabel#footerVersion {{ color: {t.fg_secondary}; font-size: 8pt; }}

    /* -- Overlays -------------------------------------------------- */

    QWidget#loadingPopup {{ background-color: rgba(0, 0, 0, 160); }}
    QFrame#loadingBox {{
        background-color: {t.bg_overlay};
        border-radius: 10px;
        padding: 24px 36px;
    }}
    QLabel#gamepadToast {{
        background-color: rgba(0, 0, 0, 204);
        color: #FFFFFF;
        padding: 10px 20px;
        border-radius: 8px;
    }}
    """

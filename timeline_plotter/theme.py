"""
Theme for the Event Timeline Plotter window chrome.

Only the Qt widgets are dark; the charts always render on the light
``CHART_COLORS`` palette so on-screen and exported images match.

Widgets that need their own look are addressed by object name:
``loadingLabel`` (the placeholder shown until a dataset is ready) and
``chartButton`` (the copy / export buttons above each chart).
"""

from typing import Dict

from .constants import DARK_COLORS

LOADING_LABEL = "loadingLabel"
CHART_BUTTON = "chartButton"


def _stylesheet_rules(c: Dict[str, str]) -> Dict[str, Dict[str, str]]:
    return {
        "QMainWindow, QWidget": {
            "background-color": c['bg'],
            "color": c['fg'],
            "font-size": "13px",
        },
        "QTabWidget::pane": {
            "border": f"1px solid {c['border']}",
        },
        "QTabBar::tab": {
            "background-color": c['bg_alt'],
            "color": c['fg_dim'],
            "padding": "6px 18px",
            "border": f"1px solid {c['border']}",
            "border-bottom": "none",
        },
        "QTabBar::tab:selected": {
            "background-color": c['bg_widget'],
            "color": c['accent'],
        },
        "QPushButton": {
            "background-color": c['bg_widget'],
            "border": f"1px solid {c['border']}",
            "border-radius": "4px",
            "padding": "4px 12px",
        },
        "QPushButton:hover": {
            "background-color": c['selection'],
            "border-color": c['accent'],
        },
        f"QPushButton#{CHART_BUTTON}": {
            "font-size": "11px",
            "padding": "2px 8px",
            "min-height": "24px",
        },
        f"QLabel#{LOADING_LABEL}": {
            "color": c['fg_dim'],
            "font-size": "16px",
        },
        # URL prompt of the Open URL dialog
        "QLineEdit": {
            "background-color": c['bg_input'],
            "border": f"1px solid {c['border']}",
            "border-radius": "4px",
            "padding": "4px 8px",
        },
        "QStatusBar, QMenuBar": {
            "background-color": c['bg_alt'],
            "color": c['fg_dim'],
        },
        "QMenu": {
            "background-color": c['bg_widget'],
            "border": f"1px solid {c['border']}",
        },
        "QMenuBar::item:selected, QMenu::item:selected": {
            "background-color": c['selection'],
        },
    }


def get_dark_stylesheet(colors: Dict[str, str] = None) -> str:
    """Render the dark Qt stylesheet.

    Parameters
    ----------
    colors : dict, optional
        Palette with the keys of ``DARK_COLORS``; defaults to it.
    """
    rules = _stylesheet_rules(colors or DARK_COLORS)
    blocks = []
    for selector, props in rules.items():
        body = "\n".join(f"    {name}: {value};" for name, value in props.items())
        blocks.append(f"{selector} {{\n{body}\n}}")
    return "\n".join(blocks)

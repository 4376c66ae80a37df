"""
TUI module for the interactive log viewer.

This module provides the terminal front end:
- Viewer: Render loop with redraw gate and key dispatch
- KeyReader: cbreak-mode keypress reader with timeouts
- create_layout: Factory for the tab bar / lines / footer layout
- make_panel: Helper for creating styled panels
"""

from logalizer.tui.keyboard import KeyReader
from logalizer.tui.layout import create_layout, make_panel
from logalizer.tui.viewer import Viewer

__all__ = [
    "KeyReader",
    "Viewer",
    "create_layout",
    "make_panel",
]

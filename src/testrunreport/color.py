"""
Terminal colors for the report footer.
"""

from enum import Enum
import re

from rich.color import ColorSystem
from rich.style import Style


_LINE_BREAK_REGEX = re.compile(r'\r\n|\r|\n')


class StatusColor(Enum):
    """
    The colors the footer of a report can be shown in, with their rich styles.
    """
    SUCCESS = 'black on green'
    WARNING = 'black on yellow'
    ERROR = 'white on red'


def colorize(style: str, text: str) -> str:
    """
    Wrap text into the ANSI escape sequences for the given rich style.
    Whitespace-only text is returned unchanged.
    """
    if not text.strip():
        return text
    return Style.parse(style).render(text, color_system=ColorSystem.STANDARD)


def colorize_text_box(style: str, text: str) -> str:
    """
    Colorize each line of text separately, with all lines padded to the same width,
    so the colored block has an even right edge.
    """
    lines = _LINE_BREAK_REGEX.split(text)
    width = max(len(line) for line in lines)
    return '\n'.join(colorize(style, line.ljust(width)) for line in lines)


class Colorizer:
    """
    Applies StatusColors to text if enabled, and passes text through unchanged otherwise.
    """
    def __init__(self, enabled: bool):
        self.enabled = enabled


    def colorize(self, color: StatusColor, text: str) -> str:
        if not self.enabled:
            return text
        return colorize_text_box(color.value, text)

"""
ANSI truecolor output and terminal size discovery for mtrxfall.
"""
import os
from typing import List, Tuple

# ANSI escape helpers
CSI = "\x1b["

RGB = Tuple[int, int, int]


class TerminalSizeError(OSError):
    """Raised when the terminal can't report a usable size."""


def terminal_size(stream) -> Tuple[int, int]:
    """Return (width, height) of the terminal behind `stream` in cells."""
    try:
        cols, rows = os.get_terminal_size(stream.fileno())
    except (AttributeError, ValueError, OSError) as e:
        raise TerminalSizeError(f"determine terminal size: {e}") from e
    if cols < 1 or rows < 1:
        raise TerminalSizeError(f"determine terminal size: got {cols}x{rows}")
    return cols, rows


def fg_rgb(r: int, g: int, b: int) -> str:
    # Use 38;2 for truecolor
    return f"{CSI}38;2;{r};{g};{b}m"


def bg_rgb(r: int, g: int, b: int) -> str:
    return f"{CSI}48;2;{r};{g};{b}m"


class AnsiSink:
    """
    Queues escape sequences and text, then writes the whole frame in one go
    on flush(). Write and flush errors from the stream are not caught.
    """
    def __init__(self, stream):
        self.stream = stream
        self._pending: List[str] = []

    def set_foreground(self, color: RGB):
        self._pending.append(fg_rgb(*color))

    def set_background(self, color: RGB):
        self._pending.append(bg_rgb(*color))

    def print(self, text: str):
        self._pending.append(text)

    def move_to(self, x: int, y: int):
        # x, y are 0-based; the terminal counts from 1
        self._pending.append(f"{CSI}{y + 1};{x + 1}H")

    def hide_cursor(self):
        self._pending.append(CSI + '?25l')

    def show_cursor(self):
        self._pending.append(CSI + '?25h')

    def reset_colors(self):
        self._pending.append(CSI + '0m')

    def clear(self):
        self._pending.append(CSI + '2J' + CSI + 'H')

    def flush(self):
        frame = ''.join(self._pending)
        self._pending = []
        self.stream.write(frame)
        self.stream.flush()


def restore(sink):
    """Give the terminal back: default colours and a visible cursor."""
    sink.reset_colors()
    sink.show_cursor()
    sink.flush()

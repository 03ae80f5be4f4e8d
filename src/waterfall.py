"""
Glyph / Column / Waterfall: the per-frame state of the rain.

Each column owns a fixed strip of glyphs and a write head (active_index).
Every tick a column either idles (only possible with its head at the top)
or fades all of its glyphs one step and drops a fresh bright glyph at the
head. Trails come purely from how long ago each row was last overwritten.
"""
import colorsys
import random
from dataclasses import dataclass
from typing import List, Tuple

from PIL import ImageColor

RGB = Tuple[int, int, int]

# Half-width katakana plus a little punctuation
SYMBOLS = "ﾊﾐﾋｰｳｼﾅﾓﾆｻﾜﾂｵﾘｱﾎﾃﾏｹﾒｴｶｷﾑﾕﾗｾﾈｽﾀﾇﾍｦｲｸｺｿﾁﾄﾉﾌﾔﾖﾙﾚﾛﾝ¦*+-,.;"

# Head colours: blue and matrix green
SPAWN_COLORS: Tuple[RGB, ...] = tuple(
    ImageColor.getrgb(hex_code) for hex_code in ("#0096ff", "#00ff2b")
)

BLACK: RGB = (0, 0, 0)
EMPTY_CHAR = " "

# Per-tick fade, applied in HLS space so the hue holds while it darkens
SATURATION_FADE = 0.9
LIGHTNESS_FADE = 0.93

# Chance that a column parked at row 0 starts a new drop this tick
SPAWN_CHANCE = 0.1


def clamp(v: float, lo: float, hi: float) -> float:
    return lo if v < lo else hi if v > hi else v


def fade_hls(h: float, l: float, s: float) -> Tuple[float, float, float]:
    return (
        h,
        clamp(l * LIGHTNESS_FADE, 0.0, 1.0),
        clamp(s * SATURATION_FADE, 0.0, 1.0),
    )


def _channel(v: float) -> int:
    # truncate like an integer cast, then keep inside a byte
    return max(0, min(255, int(v * 255.0)))


def fade_color(color: RGB) -> RGB:
    """One fade step: desaturate and darken, keeping the hue."""
    r, g, b = color
    h, l, s = fade_hls(*colorsys.rgb_to_hls(r / 255.0, g / 255.0, b / 255.0))
    nr, ng, nb = colorsys.hls_to_rgb(h, l, s)
    return (_channel(nr), _channel(ng), _channel(nb))


@dataclass
class Glyph:
    character: str
    color: RGB

    @classmethod
    def random(cls, rng: random.Random, color: RGB) -> "Glyph":
        return cls(rng.choice(SYMBOLS), color)

    @classmethod
    def empty(cls) -> "Glyph":
        return cls(EMPTY_CHAR, BLACK)

    def fade(self):
        self.color = fade_color(self.color)

    def render(self, sink):
        sink.set_background(BLACK)
        sink.set_foreground(self.color)
        sink.print(self.character)


class Column:
    def __init__(self, height: int, base_color: RGB):
        if height < 1:
            raise ValueError(f"column height must be positive, got {height}")
        self.height = height
        self.base_color = base_color
        self.glyphs: List[Glyph] = [Glyph.empty() for _ in range(height)]
        self.active_index = 0

    def render_row(self, sink, row: int):
        self.glyphs[row].render(sink)

    def step(self, rng: random.Random) -> bool:
        """
        Advance one tick. Returns False when the column stayed parked at
        the top this tick (nothing changed), True when it spawned.
        """
        if self.active_index == 0 and rng.random() > SPAWN_CHANCE:
            return False

        for glyph in self.glyphs:
            glyph.fade()

        # the head is written after the fade so it always shows at full colour
        color = rng.choice(SPAWN_COLORS)
        self.glyphs[self.active_index] = Glyph.random(rng, color)
        self.active_index += 1
        if self.active_index >= self.height:
            self.active_index = 0
        return True


class Waterfall:
    """The full terminal grid: `width` columns, each `height` tall."""
    def __init__(self, width: int, height: int, base_color: RGB):
        if width < 1 or height < 1:
            raise ValueError(f"waterfall needs a positive size, got {width}x{height}")
        self.width = width
        self.height = height
        self.base_color = base_color
        self.columns: List[Column] = [Column(height, base_color) for _ in range(width)]

    def render(self, sink):
        # Row by row, left to right: the stream paints the screen in order,
        # so no per-cell cursor moves are needed.
        sink.hide_cursor()
        sink.move_to(0, 0)
        for y in range(self.height):
            for column in self.columns:
                column.render_row(sink, y)
        sink.reset_colors()
        sink.flush()

    def step(self, rng: random.Random) -> int:
        spawned = 0
        for column in self.columns:
            if column.step(rng):
                spawned += 1
        return spawned

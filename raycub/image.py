"""Pixel buffers, textures and colour conversion."""

from __future__ import annotations

from dataclasses import dataclass

_MASK32 = 0xFFFFFFFF


@dataclass
class Image:
    """A 32-bit RGB pixel buffer stored row by row."""

    width: int
    height: int
    pixels: list[int] | None = None

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError("image size must not be negative")
        size = self.width * self.height
        if self.pixels is None:
            self.pixels = [0] * size
        else:
            self.pixels = [p & _MASK32 for p in self.pixels]
            if len(self.pixels) != size:
                raise ValueError(
                    f"expected {size} pixels, got {len(self.pixels)}"
                )

    def _inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def put_pixel(self, x: int, y: int, color: int) -> None:
        """Set a pixel; coordinates outside the image are ignored."""
        if self._inside(x, y):
            self.pixels[y * self.width + x] = color & _MASK32

    def get_pixel(self, x: int, y: int) -> int:
        """Read a pixel; coordinates outside the image read as 0."""
        if not self._inside(x, y):
            return 0
        return self.pixels[y * self.width + x]

    def texture_pixel(self, x: int, y: int) -> int:
        """Read a pixel, wrapping coordinates around the texture."""
        if self.width == 0 or self.height == 0:
            raise ValueError("cannot sample an empty texture")
        return self.pixels[(y % self.height) * self.width + x % self.width]

    def fill_rows(self, start: int, stop: int, color: int) -> None:
        """Paint rows ``start`` to ``stop - 1`` in one colour, clipped."""
        start = max(start, 0)
        stop = min(stop, self.height)
        if start >= stop:
            return
        count = (stop - start) * self.width
        self.pixels[start * self.width:stop * self.width] = [color & _MASK32] * count


@dataclass
class Textures:
    """The textures a frame is drawn with."""

    floor: Image
    north: Image
    south: Image
    west: Image
    east: Image
    door: Image
    sky: Image


def color_shifts(red_mask: int, green_mask: int,
                 blue_mask: int) -> tuple[int, int, int, int, int, int]:
    """Return (shift, bits) for red, green and blue of a visual's masks."""
    result: list[int] = []
    for mask in (red_mask, green_mask, blue_mask):
        if mask <= 0:
            raise ValueError("colour masks must be positive")
        shift = (mask & -mask).bit_length() - 1
        mask >>= shift
        bits = (mask ^ (mask + 1)).bit_length() - 1
        result.extend((shift, bits))
    return tuple(result)


def convert_color(color: int, depth: int,
                  shifts: tuple[int, int, int, int, int, int]) -> int:
    """Turn a 0xRRGGBB colour into a pixel value for the given visual."""
    if depth >= 24:
        return color
    red = (color >> 8) & 0xFF00
    green = color & 0xFF00
    blue = (color << 8) & 0xFF00
    red_shift, red_bits, green_shift, green_bits, blue_shift, blue_bits = shifts
    return (((red >> (16 - red_bits)) << red_shift)
            + ((green >> (16 - green_bits)) << green_shift)
            + ((blue >> (16 - blue_bits)) << blue_shift))
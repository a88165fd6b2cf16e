"""WS2812 LED matrix helpers: colour packing, FIFO words and level frames."""

from __future__ import annotations

NUM_LEDS = 25

T1 = 3
T2 = 3
T3 = 4
CYCLES_PER_BIT = T1 + T2 + T3

WRAP_TARGET = 0
WRAP = 3
PROGRAM_INSTRUCTIONS = (0x6321, 0x1223, 0x1200, 0xA242)


def urgb_u32(r: int, g: int, b: int) -> int:
    """Pack 8-bit red, green and blue into a GRB word."""
    for name, value in (("r", r), ("g", g), ("b", b)):
        if not 0 <= value <= 0xFF:
            raise ValueError(f"{name}={value} is not an 8-bit channel value")
    return (g << 16) | (r << 8) | b


BLUE = urgb_u32(0, 0, 255)
RED = urgb_u32(255, 0, 0)


def fifo_word(pixel_grb: int) -> int:
    """Return the 32-bit word pushed to the state machine for one pixel."""
    return (pixel_grb << 8) & 0xFFFFFFFF


# (low, high, lit LEDs, colour); a high of None means no upper bound.
_LEVEL_BANDS = (
    (20.0, 30.0, 5, RED),
    (31.0, 39.0, 5, BLUE),
    (40.0, 59.0, 10, BLUE),
    (60.0, 70.0, 15, BLUE),
    (71.0, 79.0, 15, RED),
    (80.0, 99.0, 20, RED),
    (100.0, None, 25, RED),
)


def level_frame(level: float) -> list[int]:
    """Return the 25 GRB pixels that show a water level given in percent."""
    frame = [0] * NUM_LEDS
    for low, high, count, colour in _LEVEL_BANDS:
        if level >= low and (high is None or level <= high):
            frame[:count] = [colour] * count
            break
    return frame


def clock_divider(sys_hz: float, freq: float) -> float:
    """Return the state-machine clock divider for a bit frequency."""
    if freq <= 0:
        raise ValueError("frequency must be positive")
    return sys_hz / (freq * CYCLES_PER_BIT)
import pytest

from nivelagua.ws2812 import (
    BLUE,
    NUM_LEDS,
    RED,
    clock_divider,
    fifo_word,
    level_frame,
    urgb_u32,
)


def test_pure_blue_is_low_byte():
    assert urgb_u32(0, 0, 255) == 255


@pytest.mark.parametrize("r,g,b", [(0, 0, 0), (1, 2, 3), (255, 128, 7), (17, 255, 200)])
def test_channels_round_trip(r, g, b):
    word = urgb_u32(r, g, b)
    assert (word >> 16) & 0xFF == g
    assert (word >> 8) & 0xFF == r
    assert word & 0xFF == b
    assert word >> 24 == 0


@pytest.mark.parametrize("args", [(256, 0, 0), (0, -1, 0), (0, 0, 300)])
def test_channel_out_of_range(args):
    with pytest.raises(ValueError):
        urgb_u32(*args)


def test_colour_constants():
    assert BLUE == urgb_u32(0, 0, 255)
    assert RED == urgb_u32(255, 0, 0)
    assert RED != BLUE


@pytest.mark.parametrize("pixel", [0, 1, BLUE, RED, urgb_u32(255, 255, 255)])
def test_fifo_word_round_trip(pixel):
    word = fifo_word(pixel)
    assert word & 0xFF == 0
    assert word >> 8 == pixel
    assert word <= 0xFFFFFFFF


@pytest.mark.parametrize(
    "level,count,colour",
    [
        (20.0, 5, RED),
        (25.0, 5, RED),
        (30.0, 5, RED),
        (35.0, 5, BLUE),
        (50.0, 10, BLUE),
        (65.0, 15, BLUE),
        (70.0, 15, BLUE),
        (75.0, 15, RED),
        (90.0, 20, RED),
        (100.0, 25, RED),
        (150.0, 25, RED),
    ],
)
def test_level_frame_bands(level, count, colour):
    frame = level_frame(level)
    assert len(frame) == NUM_LEDS
    assert frame[:count] == [colour] * count
    assert frame[count:] == [0] * (NUM_LEDS - count)


@pytest.mark.parametrize("level", [0.0, 10.0, 19.9, 30.5, 39.5, 70.5, 99.5])
def test_level_frame_gaps_are_dark(level):
    assert level_frame(level) == [0] * NUM_LEDS


def test_clock_divider_default_clock():
    assert clock_divider(125_000_000, 800_000) == pytest.approx(15.625)


def test_clock_divider_scales_inversely():
    assert clock_divider(125_000_000, 400_000) == pytest.approx(
        2 * clock_divider(125_000_000, 800_000)
    )


def test_clock_divider_rejects_zero_frequency():
    with pytest.raises(ValueError):
        clock_divider(125_000_000, 0)
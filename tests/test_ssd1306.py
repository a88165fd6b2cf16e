import pytest

from nivelagua.font import glyph
from nivelagua.ssd1306 import HEIGHT, WIDTH, Command, SSD1306

ADDRESS = 0x3C


@pytest.fixture
def bus():
    return []


@pytest.fixture
def display(bus):
    return SSD1306(WIDTH, HEIGHT, False, ADDRESS, lambda addr, data: bus.append((addr, data)))


def lit(display):
    return {(x, y) for x in range(display.width) for y in range(display.height)
            if display.get_pixel(x, y)}


def test_buffer_layout(display):
    assert display.pages == HEIGHT // 8
    assert len(display.buffer) == display.pages * display.width + 1
    assert display.buffer[0] == 0x40
    assert not any(display.buffer[1:])


def test_command_writes_control_byte(display, bus):
    result = display.command(Command.SET_CONTRAST)
    assert result is None
    assert bus == [(ADDRESS, bytes((0x80, 0x81)))]
    assert display.buffer[0] == 0x40
    assert not any(display.buffer[1:])
    assert len(display.buffer) == display.pages * display.width + 1


def test_command_out_of_range_rejected(display):
    with pytest.raises(ValueError):
        display.command(256)


def test_config_sequence(display, bus):
    result = display.config()
    assert result is None
    sent = [data[1] for _, data in bus]
    assert all(data[0] == 0x80 for _, data in bus)
    assert sent[0] == Command.SET_DISP
    assert sent[-1] == Command.SET_DISP | 0x01
    mux = sent.index(Command.SET_MUX_RATIO)
    assert sent[mux + 1] == display.height - 1
    assert sent[sent.index(Command.SET_CHARGE_PUMP) + 1] == 0x14
    assert display.buffer[0] == 0x40
    assert not any(display.buffer[1:])


def test_send_data(display, bus):
    display.pixel(3, 5, True)
    display.send_data()
    commands = [data[1] for _, data in bus[:-1]]
    assert commands == [Command.SET_COL_ADDR, 0, display.width - 1,
                        Command.SET_PAGE_ADDR, 0, display.pages - 1]
    assert bus[-1] == (ADDRESS, bytes(display.buffer))


def test_pixel_origin_sets_first_data_bit(display):
    display.pixel(0, 0, True)
    assert display.buffer[1] == 1


def test_pixel_set_and_clear_round_trip(display):
    display.pixel(100, 37, True)
    assert display.get_pixel(100, 37)
    assert lit(display) == {(100, 37)}
    display.pixel(100, 37, False)
    assert not display.get_pixel(100, 37)
    assert lit(display) == set()


def test_pixel_outside_display_raises(display):
    with pytest.raises(IndexError):
        display.pixel(WIDTH, 0, True)
    with pytest.raises(IndexError):
        display.get_pixel(0, HEIGHT)


def test_fill_sets_and_clears_everything(display):
    display.fill(True)
    assert all(b == 0xFF for b in display.buffer[1:])
    assert display.buffer[0] == 0x40
    display.fill(False)
    assert not any(display.buffer[1:])
    assert display.buffer[0] == 0x40


def test_rect_outline(display):
    display.rect(10, 20, 6, 4, True, False)
    pixels = lit(display)
    assert {(20, 10), (25, 10), (20, 13), (25, 13)} <= pixels
    assert (22, 11) not in pixels
    assert all(x in (20, 25) or y in (10, 13) for x, y in pixels)
    assert all(20 <= x <= 25 and 10 <= y <= 13 for x, y in pixels)


def test_rect_filled(display):
    display.rect(10, 20, 6, 4, True, True)
    pixels = lit(display)
    assert pixels == {(x, y) for x in range(20, 26) for y in range(10, 14)}


def test_line_diagonal(display):
    display.line(0, 0, 10, 10, True)
    assert lit(display) == {(i, i) for i in range(11)}


def test_line_reverse_direction_matches(display, bus):
    display.line(30, 5, 2, 5, True)
    assert lit(display) == {(x, 5) for x in range(2, 31)}


def test_line_endpoints_included(display):
    display.line(3, 40, 50, 7, True)
    pixels = lit(display)
    assert (3, 40) in pixels and (50, 7) in pixels


def test_hline_and_vline(display):
    display.hline(5, 9, 2, True)
    display.vline(60, 10, 12, True)
    assert lit(display) == {(x, 2) for x in range(5, 10)} | {(60, y) for y in range(10, 13)}


def test_draw_char_matches_glyph(display):
    display.draw_char("A", 8, 16)
    columns = glyph("A")
    for i in range(8):
        for j in range(8):
            assert display.get_pixel(8 + i, 16 + j) == bool(columns[i] & (1 << j))


def test_draw_string_wraps_to_next_row(display):
    display.draw_string("AB", 112, 0)
    columns = glyph("B")
    for i in range(8):
        for j in range(8):
            assert display.get_pixel(i, 8 + j) == bool(columns[i] & (1 << j))
    assert not any(display.get_pixel(x, y) for x in range(120, 128) for y in range(8))


def test_draw_string_stops_at_bottom(display):
    display.draw_string("#" * 40, 8, 52)
    pixels = lit(display)
    assert pixels
    assert all(y < 60 for _, y in pixels)
import string

import pytest

from nivelagua.font import FONT, glyph


def test_uppercase_a_matches_table():
    assert glyph("A") == bytes((0x7C, 0x7E, 0x13, 0x11, 0x13, 0x7E, 0x7C, 0x00))


def test_tilde_is_last_glyph():
    assert glyph("~") == FONT[-8:]


def test_space_is_first_glyph():
    assert glyph(" ") == FONT[:8]
    assert glyph(" ") == bytes(8)


@pytest.mark.parametrize("char", ["\n", "\t", "\x7f", "é", "\x00"])
def test_unprintable_maps_to_space(char):
    assert glyph(char) == glyph(" ")


def test_every_printable_glyph_has_eight_bytes():
    printable = [chr(c) for c in range(ord(" "), ord("~") + 1)]
    assert all(len(glyph(c)) == 8 for c in printable)
    assert b"".join(glyph(c) for c in printable) == FONT


def test_distinct_letters_have_distinct_glyphs():
    glyphs = {glyph(c) for c in string.ascii_letters + string.digits}
    assert len(glyphs) == len(string.ascii_letters + string.digits)


@pytest.mark.parametrize("bad", ["", "ab"])
def test_non_single_character_rejected(bad):
    with pytest.raises(ValueError):
        glyph(bad)
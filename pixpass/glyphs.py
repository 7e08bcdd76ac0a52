"""Glyph table for the document pixel font.

Every glyph is eight rows of equal-width bit strings ("1" = ink). Cells are
not padded to a common width: the rasterizer packs glyphs by their visible
ink, so dead columns at either side of a cell never show up as spacing.
Lowercase glyphs sit on the same eight-row cell with ascenders and
descenders inside it.
"""

from types import MappingProxyType

_GLYPHS: dict[str, tuple[str, ...]] = {
    "A": ("0000", "0111", "1001", "1001", "1111", "1001", "1001", "0000"),
    "B": ("0000", "1110", "1001", "1110", "1001", "1001", "1110", "0000"),
    "C": ("0000", "0111", "1000", "1000", "1000", "1000", "0111", "0000"),
    "D": ("0000", "1110", "1001", "1001", "1001", "1001", "1110", "0000"),
    "E": ("0000", "0111", "1000", "1110", "1000", "1000", "1111", "0000"),
    "F": ("0000", "0111", "1000", "1110", "1000", "1000", "1000", "0000"),
    "G": ("0000", "0111", "1000", "1011", "1001", "1001", "0111", "0000"),
    "H": ("0000", "1001", "1001", "1111", "1001", "1001", "1001", "0000"),
    "I": ("000", "111", "010", "010", "010", "010", "111", "000"),
    "J": ("0000", "0011", "0001", "0001", "0001", "0001", "1110", "0000"),
    "K": ("0000", "1001", "1001", "1110", "1001", "1001", "1001", "0000"),
    "L": ("0000", "1000", "1000", "1000", "1000", "1000", "0111", "0000"),
    "M": ("00000", "10001", "11011", "10101", "10001", "10001", "10001", "00000"),
    "N": ("0000", "1001", "1101", "1011", "1001", "1001", "1001", "0000"),
    "O": ("0000", "0110", "1001", "1001", "1001", "1001", "0110", "0000"),
    "P": ("0000", "1110", "1001", "1001", "1110", "1000", "1000", "0000"),
    "Q": ("0000", "0110", "1001", "1001", "1101", "1011", "0111", "0000"),
    "R": ("0000", "1110", "1001", "1001", "1111", "1001", "1001", "0000"),
    "S": ("0000", "0111", "1000", "0100", "0010", "0001", "1110", "0000"),
    "T": ("00000", "11111", "00100", "00100", "00100", "00100", "00100", "00000"),
    "U": ("0000", "1001", "1001", "1001", "1001", "1001", "0110", "0000"),
    "V": ("0000", "1001", "1001", "1001", "1010", "1100", "1000", "0000"),
    "W": ("00000", "10001", "10001", "10001", "10101", "10101", "01010", "00000"),
    "X": ("0000", "1001", "1000", "0110", "0110", "1001", "1001", "0000"),
    "Y": ("0000", "1001", "1001", "0111", "0001", "0001", "0110", "0000"),
    "Z": ("0000", "1111", "0001", "0010", "0100", "1000", "1111", "0000"),
    "a": ("0000", "0000", "0000", "0111", "1001", "1001", "0111", "0000"),
    "b": ("0000", "1000", "1000", "1110", "1001", "1001", "0110", "0000"),
    "c": ("0000", "0000", "0000", "0111", "1000", "1000", "0111", "0000"),
    "d": ("0000", "0001", "0001", "0111", "1001", "1001", "0111", "0000"),
    "e": ("0000", "0000", "0000", "0110", "1011", "1100", "0110", "0000"),
    "f": ("000", "011", "100", "110", "100", "100", "100", "000"),
    "g": ("0000", "0000", "0111", "1001", "0111", "0001", "0110", "0000"),
    "h": ("0000", "0000", "1000", "1000", "1110", "1001", "1001", "0000"),
    "i": ("0", "1", "0", "1", "1", "1", "1", "0"),
    "j": ("00", "01", "00", "01", "01", "01", "10", "00"),
    "k": ("0000", "1000", "1000", "1001", "1110", "1001", "1001", "0000"),
    "l": ("0", "1", "1", "1", "1", "1", "1", "0"),
    "m": ("00000", "00000", "00000", "11110", "10101", "10101", "10101", "00000"),
    "n": ("0000", "0000", "0000", "1110", "1001", "1001", "1001", "0000"),
    "o": ("0000", "0000", "0000", "0110", "1001", "1001", "0110", "0000"),
    "p": ("0000", "0000", "1110", "1001", "1001", "1110", "1000", "1000"),
    "q": ("0000", "0111", "1001", "1001", "0111", "0001", "0001", "0000"),
    "r": ("0000", "0000", "0000", "1011", "1100", "1000", "1000", "0000"),
    "s": ("0000", "0000", "0000", "0111", "1100", "0011", "1110", "0000"),
    "t": ("0000", "0000", "0100", "0111", "0100", "0100", "0011", "0000"),
    "u": ("0000", "0000", "0000", "1001", "1001", "1001", "0111", "0000"),
    "v": ("0000", "0000", "0000", "1001", "1001", "0110", "0110", "0000"),
    "w": ("00000", "00000", "00000", "10101", "10101", "10101", "01111", "00000"),
    "x": ("0000", "0000", "0000", "1001", "0110", "0110", "1001", "0000"),
    "y": ("0000", "0000", "0000", "1001", "1001", "0111", "0001", "0110"),
    "z": ("0000", "0000", "0000", "1111", "0010", "0100", "1111", "0000"),
    "0": ("0000", "0110", "1001", "1011", "1101", "1001", "0110", "0000"),
    "1": ("00", "01", "11", "01", "01", "01", "01", "00"),
    "2": ("0000", "0110", "1001", "0010", "0100", "1000", "1111", "0000"),
    "3": ("0000", "0110", "1001", "0010", "0001", "1001", "0110", "0000"),
    "4": ("00000", "00010", "00110", "01010", "11111", "00010", "00010", "00000"),
    "5": ("0000", "1111", "1000", "1110", "0001", "0001", "1110", "0000"),
    "6": ("0000", "0110", "1000", "1110", "1001", "1001", "0110", "0000"),
    "7": ("0000", "1111", "1001", "0010", "0010", "0100", "0100", "0000"),
    "8": ("0000", "0110", "1001", "0110", "1001", "1001", "0110", "0000"),
    "9": ("0000", "0110", "1001", "1001", "0111", "0001", "0110", "0000"),
    ".": ("0", "0", "0", "0", "0", "0", "1", "0"),
    ",": ("00", "00", "00", "00", "00", "00", "01", "10"),
    " ": ("000", "000", "000", "000", "000", "000", "000", "000"),
    "-": ("000", "000", "000", "111", "000", "000", "000", "000"),
    ":": ("000", "000", "000", "010", "000", "010", "000", "000"),
}

GLYPHS = MappingProxyType(_GLYPHS)

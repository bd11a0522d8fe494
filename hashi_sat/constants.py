"""Defaults shared by the solver, renderer, CLI and benchmark."""

from collections import namedtuple

# Island values and the number of slots an island can have (one per direction)
MIN_ISLAND_VALUE = 1
MAX_ISLAND_VALUE = 8
MAX_SLOTS_PER_ISLAND = 4
WEIGHTS = (0, 1, 2)

DEFAULT_SOLVER = 'glucose3'

INPUT_DIR = 'Inputs'
OUTPUT_DIR = 'Outputs'

Glyphs = namedtuple('Glyphs', ['empty', 'horizontal', 'double_horizontal', 'vertical', 'double_vertical'])

UNICODE_GLYPHS = Glyphs(empty='.', horizontal='─', double_horizontal='═', vertical='│', double_vertical='║')
# Same symbols as the text output files
ASCII_GLYPHS = Glyphs(empty='0', horizontal='-', double_horizontal='=', vertical='|', double_vertical='$')

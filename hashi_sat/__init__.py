"""
Hashiwokakero ("Bridges") solver.

The board is turned into a SAT problem (PySAT), the model is turned back
into bridges, and the result is checked for connectivity.

    >>> from hashi_sat import solve
    >>> solve([[1, None, 1]])
    [Bridge(src=Coord(row=0, col=0), dst=Coord(row=0, col=2), is_vertical=False, weight=1)]
"""

from .board import Coord, Island, ParsedBoard, Slot, normalize_board, parse_board, slot_geometry, slot_id
from .connectivity import count_components, is_connected
from .decoder import Bridge, bridge_slot, decode
from .encoder import encode
from .errors import GlobalUnsatisfiable, HashiError, InvalidBoardError, LocalUnsatisfiable, Unsatisfiable
from .render import render_grid, render_text
from .solver import SolveReport, solve, solve_report
from .tables import BRIDGE_OPTIONS, bridge_options

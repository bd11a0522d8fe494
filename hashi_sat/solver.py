"""
Solving pipeline: validate -> parse -> encode -> SAT -> decode -> connectivity check.

The connectivity check closes the gap left by the flow constraints: when
the SAT model splits into several groups of islands, every group that does
not contain the root must get a bridge leaving it, which is added as a
clause before asking the solver again.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

from .board import ParsedBoard, normalize_board, parse_board
from .connectivity import connected_groups, cut_slots
from .constants import DEFAULT_SOLVER
from .decoder import Bridge, decode
from .encoder import encode
from .errors import GlobalUnsatisfiable, InvalidBoardError, LocalUnsatisfiable
from .oracle import SatOracle
from .registry import VariableRegistry

logger = logging.getLogger(__name__)

SOLVED = 'solved'
INVALID = 'invalid'
UNSAT_LOCAL = 'unsatisfiable_local'
UNSAT_GLOBAL = 'unsatisfiable_global'


@dataclass
class SolveReport:
    bridges: Optional[List[Bridge]]
    status: str
    message: str = ''
    rounds: int = 0
    num_islands: int = 0
    num_slots: int = 0
    num_vars: int = 0
    num_clauses: int = 0

    @property
    def solved(self) -> bool:
        return self.bridges is not None


def _solve_connected(parsed: ParsedBoard, oracle: SatOracle, check_connectivity: bool,
                     max_rounds: Optional[int], report: SolveReport) -> List[Bridge]:
    registry = oracle.registry
    root = parsed.root

    while True:
        if max_rounds is not None and report.rounds >= max_rounds:
            raise GlobalUnsatisfiable(f"No connected solution within {max_rounds} solver round(s)")

        atoms = oracle.solve()
        report.rounds += 1
        if atoms is None:
            raise GlobalUnsatisfiable("No assignment satisfies all constraints")

        bridges = decode(atoms)
        if not check_connectivity:
            return bridges

        groups = connected_groups(parsed.islands, bridges)
        if len(groups) <= 1:
            return bridges

        logger.debug("Round %d: %d disconnected groups, adding cut clauses", report.rounds, len(groups))
        for group in groups:
            if root in group:
                continue
            # At least one bridge has to leave the group
            oracle.require_any([oracle.negate(registry.weight(sid, 0)) for sid in cut_slots(parsed, group)])


def solve_report(board, *, use_flow: bool = True, check_connectivity: bool = True,
                 solver_name: str = DEFAULT_SOLVER, max_rounds: Optional[int] = None,
                 strict: bool = False) -> SolveReport:
    """
    Solve a board and describe how it went.

    board: nested sequences or a 2D numpy array; 0 or None = empty, 1-8 = island
    use_flow: add the directional flow constraints
    check_connectivity: re-solve until the bridges connect all islands
    strict: raise InvalidBoardError / LocalUnsatisfiable / GlobalUnsatisfiable
            instead of reporting them
    """
    report = SolveReport(bridges=None, status=SOLVED)
    try:
        normalized = normalize_board(board)
        report.num_islands = sum(value is not None for row in normalized for value in row)

        parsed = parse_board(normalized)
        report.num_slots = len(parsed.slots)

        with SatOracle(VariableRegistry(), solver_name=solver_name) as oracle:
            try:
                encode(parsed, oracle, use_flow=use_flow)
                report.bridges = _solve_connected(parsed, oracle, check_connectivity, max_rounds, report)
            finally:
                report.num_vars = oracle.num_vars
                report.num_clauses = oracle.num_clauses

    except InvalidBoardError as e:
        report.status, report.message = INVALID, str(e)
        if strict:
            raise
    except LocalUnsatisfiable as e:
        report.status, report.message = UNSAT_LOCAL, str(e)
        if strict:
            raise
    except GlobalUnsatisfiable as e:
        report.status, report.message = UNSAT_GLOBAL, str(e)
        if strict:
            raise

    logger.debug("Solve finished: %s after %d round(s) %s", report.status, report.rounds, report.message)
    return report


def solve(board, *, use_flow: bool = True, check_connectivity: bool = True,
          solver_name: str = DEFAULT_SOLVER, max_rounds: Optional[int] = None,
          strict: bool = False) -> Optional[List[Bridge]]:
    """
    Solve a Hashiwokakero board.
    Returns the bridges sorted by (src, dst), or None when there is no solution.
    """
    return solve_report(board, use_flow=use_flow, check_connectivity=check_connectivity,
                        solver_name=solver_name, max_rounds=max_rounds, strict=strict).bridges

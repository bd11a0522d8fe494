"""
Boolean satisfiability oracle on top of PySAT.

Formulas are built from registry literals (signed ints). Connectives
return a literal equivalent to the formula (Tseitin definitions), so they
compose: `require_exactly_one([conjunction(...), conjunction(...)])`.
"""

import logging
from typing import FrozenSet, List, Optional, Sequence

from pysat.card import CardEnc, EncType
from pysat.solvers import Solver

from .constants import DEFAULT_SOLVER
from .registry import VariableRegistry

logger = logging.getLogger(__name__)


class SatOracle:
    def __init__(self, registry: VariableRegistry, solver_name: str = DEFAULT_SOLVER,
                 card_encoding: int = EncType.pairwise):
        self.registry = registry
        self.solver_name = solver_name
        self.card_encoding = card_encoding
        self._solver = Solver(name=solver_name)
        self._true: Optional[int] = None
        self._contradiction = False
        self.num_clauses = 0
        self.num_calls = 0

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def close(self):
        if self._solver is not None:
            self._solver.delete()
            self._solver = None

    # --- Clauses ---

    def add_clause(self, lits: Sequence[int]):
        lits = list(lits)
        self.num_clauses += 1
        if not lits:
            self._contradiction = True
            return
        self._solver.add_clause(lits)

    def require(self, lit: int):
        self.add_clause([lit])

    def require_any(self, lits: Sequence[int]):
        """At least one literal holds. An empty list makes the formula unsatisfiable."""
        self.add_clause(lits)

    def forbid_all(self, lits: Sequence[int]):
        """The literals are not all true together. Blocks a model when enumerating solutions."""
        self.add_clause([-lit for lit in lits])

    # --- Connectives ---

    @staticmethod
    def negate(lit: int) -> int:
        return -lit

    def true(self) -> int:
        if self._true is None:
            self._true = self.registry.fresh()
            self.require(self._true)
        return self._true

    def conjunction(self, lits: Sequence[int]) -> int:
        """Literal equivalent to l1 & l2 & ... (TRUE when empty)."""
        lits = list(lits)
        if not lits:
            return self.true()
        if len(lits) == 1:
            return lits[0]
        aux = self.registry.fresh()
        for lit in lits:
            self.add_clause([-aux, lit])
        self.add_clause([aux] + [-lit for lit in lits])
        return aux

    def disjunction(self, lits: Sequence[int]) -> int:
        """Literal equivalent to l1 | l2 | ... (FALSE when empty)."""
        lits = list(lits)
        if not lits:
            return -self.true()
        if len(lits) == 1:
            return lits[0]
        aux = self.registry.fresh()
        self.add_clause([-aux] + lits)
        for lit in lits:
            self.add_clause([aux, -lit])
        return aux

    # --- Cardinality ---

    def require_at_most_one(self, lits: Sequence[int]):
        lits = list(lits)
        if len(lits) <= 1:
            return
        enc = CardEnc.atmost(lits=lits, bound=1, vpool=self.registry.pool, encoding=self.card_encoding)
        for clause in enc.clauses:
            self.add_clause(clause)

    def require_exactly_one(self, lits: Sequence[int]):
        lits = list(lits)
        if not lits:
            self.add_clause([])
            return
        if len(lits) == 1:
            self.require(lits[0])
            return
        enc = CardEnc.equals(lits=lits, bound=1, vpool=self.registry.pool, encoding=self.card_encoding)
        for clause in enc.clauses:
            self.add_clause(clause)

    # --- Solving ---

    def solve(self) -> Optional[FrozenSet]:
        """
        Run the SAT solver on everything added so far.
        Returns the registry atoms that are true in the model, or None if unsatisfiable.
        """
        self.num_calls += 1
        if self._contradiction or not self._solver.solve():
            logger.debug("%s: unsatisfiable (%d vars, %d clauses)",
                         self.solver_name, self.num_vars, self.num_clauses)
            return None
        model: List[int] = self._solver.get_model() or []
        return self.registry.true_atoms(model)

    @property
    def num_vars(self) -> int:
        return self.registry.top

"""Solver boundary: running programs through clingo.

The reasoner only sees two operations:

  Solver.solve(program)     one answer set, or None when none exists
  Solver.session(program)   a multi-shot session: next_model(), block(...),
                            cancel(), close()

Answer sets are copied out of clingo into plain ModelAtom values before the
solve handle is closed, so nothing outside this module touches clingo
symbols. Every call waits at most ``timeout`` seconds; running out of time
raises SolverTimeout, which callers must never read as "inconsistent".
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Iterator

import clingo

from .errors import SolverError, SolverTimeout
from .program import Program

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Answer sets
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ModelAtom:
    predicate: str
    arguments: tuple[str, ...] = ()
    negated: bool = False

    def render(self) -> str:
        sign = "-" if self.negated else ""
        if not self.arguments:
            return f"{sign}{self.predicate}"
        return f"{sign}{self.predicate}({','.join(self.arguments)})"

    def __str__(self) -> str:
        return self.render()


@dataclass(frozen=True)
class AnswerSet:
    """The atoms of one answer set, in clingo's sorted order."""

    atoms: tuple[ModelAtom, ...]

    def holds(self, predicate: str, *arguments: str, negated: bool = False) -> bool:
        return ModelAtom(predicate, tuple(arguments), negated) in self.atoms

    def __iter__(self) -> Iterator[ModelAtom]:
        return iter(self.atoms)

    def __len__(self) -> int:
        return len(self.atoms)

    def __contains__(self, item: object) -> bool:
        return item in self.atoms


def _copy_atom(symbol: clingo.Symbol) -> ModelAtom:
    return ModelAtom(
        symbol.name,
        tuple(str(arg) for arg in symbol.arguments),
        symbol.negative,
    )


# ---------------------------------------------------------------------------
# Solver interface
# ---------------------------------------------------------------------------

class SolverSession:
    """Incremental solving over one program."""

    def next_model(self) -> AnswerSet | None:
        raise NotImplementedError

    def block(self, atoms: Iterable[ModelAtom]) -> None:
        """Exclude every answer set containing all of ``atoms``."""
        raise NotImplementedError

    def cancel(self) -> None:
        raise NotImplementedError

    def close(self) -> None:
        """Release the solver resources held by this session."""

    @property
    def cancelled(self) -> bool:
        return False

    def __enter__(self) -> SolverSession:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


class Solver:
    """Answer-set solver. ``solve`` finds one model or proves there is none."""

    def solve(self, program: Program) -> AnswerSet | None:
        with self.session(program) as session:
            return session.next_model()

    def session(self, program: Program) -> SolverSession:
        raise NotImplementedError


# ---------------------------------------------------------------------------
# clingo implementation
# ---------------------------------------------------------------------------

class ClingoSession(SolverSession):
    """A clingo Control grounded once; blocking constraints go in new parts."""

    def __init__(self, program: Program, timeout: float | None = None, arguments: Iterable[str] = ()) -> None:
        self.timeout = timeout
        self._blocks = 0
        self._cancelled = False
        self._control = clingo.Control(["--models=1", *arguments], logger=self._on_message)
        text = program.render()
        logger.debug("Grounding program with %d rules", len(program))
        try:
            self._control.add("base", [], text)
            self._control.ground([("base", [])])
        except RuntimeError as exc:
            raise SolverError(f"clingo rejected the program: {exc}") from exc

    @staticmethod
    def _on_message(code: clingo.MessageCode, message: str) -> None:
        logger.debug("clingo %s: %s", code.name, message.strip())

    def next_model(self) -> AnswerSet | None:
        if self._cancelled or self._control is None:
            return None
        found: list[AnswerSet] = []

        def on_model(model: clingo.Model) -> None:
            found.append(AnswerSet(tuple(_copy_atom(s) for s in model.symbols(atoms=True))))

        try:
            with self._control.solve(on_model=on_model, async_=True) as handle:
                if not handle.wait(self.timeout):
                    handle.cancel()
                    raise SolverTimeout(self.timeout)
                result = handle.get()
        except RuntimeError as exc:
            raise SolverError(f"clingo failed while solving: {exc}") from exc

        if result.interrupted and not found:
            logger.info("Solving interrupted")
            return None
        return found[0] if found else None

    def block(self, atoms: Iterable[ModelAtom]) -> None:
        body = ", ".join(a.render() for a in atoms)
        if not body or self._control is None:
            return
        self._blocks += 1
        name = f"block_{self._blocks}"
        try:
            self._control.add(name, [], f":- {body}.")
            self._control.ground([(name, [])])
        except RuntimeError as exc:
            raise SolverError(f"clingo rejected a blocking constraint: {exc}") from exc

    def cancel(self) -> None:
        self._cancelled = True
        if self._control is not None:
            self._control.interrupt()

    def close(self) -> None:
        if self._control is not None:
            logger.debug("Releasing clingo control after %d blocking part(s)", self._blocks)
        self._control = None

    @property
    def closed(self) -> bool:
        return self._control is None

    @property
    def cancelled(self) -> bool:
        return self._cancelled


class ClingoSolver(Solver):
    """Solver backed by the clingo Python API."""

    def __init__(self, timeout: float | None = None, arguments: Iterable[str] = ()) -> None:
        self.timeout = timeout
        self.arguments = list(arguments)

    def session(self, program: Program) -> ClingoSession:
        return ClingoSession(program, self.timeout, self.arguments)

    def __repr__(self) -> str:
        return f"ClingoSolver(timeout={self.timeout})"

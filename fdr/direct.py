"""Direct translation: non-ground rules over variables.

Same semantics as the naive strategy, but rules are written once with
variables ranging over ``top/1`` and left to the solver's grounder:

  C ⊑ D                    d(X) :- c(X).
  A ⊓ ¬B ⊑ D               d(X) :- a(X), -b(X).       (no auxiliary)
  C ⊑ A ⊔ B                a(X) | b(X) :- c(X).
  C ⊑ ≥k R.D, C ⊑ ∃R.D     k { r(X,Y) : top(Y), d(Y) } :- c(X).
  C ⊑ ∀R.D                 :- c(X), r(X,Y), not d(Y).
  C ⊑ A ⊓ ∃R.B             split into C ⊑ A and C ⊑ ∃R.B

Anything else falls back to the shared encoding in translation.py, with a
single rule per auxiliary instead of one per element.

The choice rules are safe under the totality guess: a chosen ``r(x,y)`` is
also one of the two guessed alternatives, so every answer set of the direct
program is an answer set of the naive one over the ontology symbols.
"""

from __future__ import annotations

from typing import Iterable

from .config import Strategy
from .program import Atom, ChoiceHead, Rule, pos
from .translation import Body, Translator, is_nothing, is_thing, top
from .types import (
    ClassExpression,
    ObjectAllValuesFrom,
    ObjectComplementOf,
    ObjectIntersectionOf,
    ObjectMinCardinality,
    ObjectSomeValuesFrom,
    ObjectUnionOf,
    OWLClass,
)


def _is_literal_class(expr: ClassExpression) -> bool:
    """Named class or complement of a named class (one body literal)."""
    if isinstance(expr, ObjectComplementOf):
        expr = expr.operand
    return isinstance(expr, OWLClass)


class DirectTranslator(Translator):

    strategy = Strategy.DIRECT

    def _assignments(self, *variables: str) -> Iterable[tuple[str, ...]]:
        return [variables]

    def _body(self, expr: ClassExpression, term: str) -> Body:
        if (
            isinstance(expr, ObjectIntersectionOf)
            and expr.operands
            and all(_is_literal_class(op) for op in expr.operands)
        ):
            return tuple(self._member(op, term) for op in expr.operands)
        return super()._body(expr, term)

    def _subsumption(self, sub: ClassExpression, sup: ClassExpression) -> None:
        if is_thing(sup) or is_nothing(sub):
            return

        match sup:
            case ObjectIntersectionOf(operands=operands) if operands:
                for op in operands:
                    self._subsumption(sub, op)
            case ObjectUnionOf(operands=operands) if self._union_head(operands):
                body = self._body(sub, "X")
                self._emit(Rule(self._union_head(operands), body))
            case ObjectSomeValuesFrom(property=prop, filler=filler):
                self._choice(sub, 1, prop, filler)
            case ObjectMinCardinality(cardinality=k, property=prop, filler=filler) if k > 0:
                self._choice(sub, k, prop, filler)
            case ObjectAllValuesFrom(property=prop, filler=filler):
                body = self._body(sub, "X") + (
                    pos(self._role(prop, "X", "Y")),
                    self._member(filler, "Y").negate(),
                )
                self._emit(Rule((), body))
            case _:
                super()._subsumption(sub, sup)

    def _union_head(self, operands) -> tuple[Atom, ...]:
        """Disjunctive head for a union of (complemented) named classes."""
        if not operands:
            return ()
        heads = tuple(self._head_atom(op, "X") for op in operands)
        if any(h is None for h in heads):
            return ()
        return heads

    def _choice(self, sub: ClassExpression, lower: int, prop, filler: ClassExpression) -> None:
        cond = (pos(top("Y")),)
        if not is_thing(filler):
            cond += (self._member(filler, "Y"),)
        head = ChoiceHead(lower, ((self._role(prop, "X", "Y"), cond),))
        self._emit(Rule(head, self._body(sub, "X")))

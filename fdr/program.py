"""Program model: the answer-set program the translator builds.

A Program is an ordered list of statements (rules, comments, directives)
that renders to clingo's input language. Rules are immutable values; a
Program only grows, and ``copy()`` gives callers a private extension point
so a base program handed to the solver is never modified.

  Atom          p(t1,...,tn), optionally classically negated: -p(...)
  Literal       an atom or aggregate, optionally default-negated: not p(...)
  Count         #count{ t : l1, l2; ... } OP k
  ChoiceHead    k { a : l1, l2; ... }
  Rule          head :- body.   (empty head = integrity constraint)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Union


@dataclass(frozen=True)
class Atom:
    predicate: str
    args: tuple[str, ...] = ()
    negated: bool = False  # classical (strong) negation

    def render(self) -> str:
        sign = "-" if self.negated else ""
        if not self.args:
            return f"{sign}{self.predicate}"
        return f"{sign}{self.predicate}({','.join(self.args)})"

    def complement(self) -> Atom:
        return Atom(self.predicate, self.args, not self.negated)


@dataclass(frozen=True)
class Count:
    """A ``#count`` aggregate with a single right guard."""

    elements: tuple[tuple[str, tuple[Literal, ...]], ...]
    op: str
    bound: int

    def render(self) -> str:
        parts = "; ".join(
            f"{term} : {', '.join(lit.render() for lit in cond)}"
            for term, cond in self.elements
        )
        return f"#count{{ {parts} }} {self.op} {self.bound}"


@dataclass(frozen=True)
class Literal:
    atom: Union[Atom, Count]
    default_negated: bool = False

    def render(self) -> str:
        text = self.atom.render()
        return f"not {text}" if self.default_negated else text

    def negate(self) -> Literal:
        return Literal(self.atom, not self.default_negated)


def pos(atom: Atom | Count) -> Literal:
    return Literal(atom)


def neg(atom: Atom | Count) -> Literal:
    return Literal(atom, default_negated=True)


@dataclass(frozen=True)
class ChoiceHead:
    lower: int
    elements: tuple[tuple[Atom, tuple[Literal, ...]], ...]

    def render(self) -> str:
        parts = "; ".join(
            f"{atom.render()} : {', '.join(lit.render() for lit in cond)}"
            if cond else atom.render()
            for atom, cond in self.elements
        )
        bound = f"{self.lower} " if self.lower else ""
        return f"{bound}{{ {parts} }}"


@dataclass(frozen=True)
class Rule:
    """``head :- body.`` A disjunctive head is a tuple of several atoms."""

    head: Union[tuple[Atom, ...], ChoiceHead] = ()
    body: tuple[Literal, ...] = ()

    @property
    def is_constraint(self) -> bool:
        return isinstance(self.head, tuple) and not self.head

    @property
    def is_fact(self) -> bool:
        return not self.body and not self.is_constraint

    def with_body(self, *extra: Literal) -> Rule:
        return Rule(self.head, self.body + extra)

    def render(self) -> str:
        if isinstance(self.head, ChoiceHead):
            head = self.head.render()
        else:
            head = " | ".join(a.render() for a in self.head)
        if not self.body:
            return f"{head}."
        body = ", ".join(lit.render() for lit in self.body)
        if not head:
            return f":- {body}."
        return f"{head} :- {body}."


@dataclass(frozen=True)
class Comment:
    text: str

    def render(self) -> str:
        return f"% {self.text}"


@dataclass(frozen=True)
class Directive:
    """A clingo directive such as ``#defined aux_1/1.``"""
    text: str

    def render(self) -> str:
        return self.text


Statement = Union[Rule, Comment, Directive]


@dataclass
class Program:
    statements: list[Statement] = field(default_factory=list)

    def add(self, statement: Statement) -> None:
        self.statements.append(statement)

    def extend(self, statements) -> None:
        self.statements.extend(statements)

    def comment(self, text: str) -> None:
        self.add(Comment(text))

    def copy(self) -> Program:
        return Program(list(self.statements))

    @property
    def rules(self) -> list[Rule]:
        return [s for s in self.statements if isinstance(s, Rule)]

    def predicates(self) -> set[str]:
        """Predicate names occurring in rule heads."""
        names: set[str] = set()
        for rule in self.rules:
            if isinstance(rule.head, ChoiceHead):
                names.update(a.predicate for a, _ in rule.head.elements)
            else:
                names.update(a.predicate for a in rule.head)
        return names

    def render(self) -> str:
        return "\n".join(s.render() for s in self.statements) + "\n"

    def __iter__(self) -> Iterator[Statement]:
        return iter(self.statements)

    def __len__(self) -> int:
        return len(self.rules)

    def __str__(self) -> str:
        return self.render()

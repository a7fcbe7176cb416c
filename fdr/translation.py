"""Axiom translation: ontology axioms to answer-set programs.

The translation fixes the interpretation domain to the resolved Domain:

  top(e).                          one fact per domain element
  c(X) | -c(X) :- top(X).          every class decided for every element
  r(X,Y) | -r(X,Y) :- top(X),top(Y).
                                   every property decided for every pair

Each answer set of the program is then exactly one interpretation over the
domain that satisfies the axioms. Axioms become facts, rules, or integrity
constraints; nested class expressions become auxiliary predicates ``aux_n``
whose rules define them from the base atoms.

Strategies (selected through the TranslationContext):

  naive   every rule is grounded by the translator over the domain
  direct  non-ground rules with variables, inlined bodies, disjunctive and
          choice heads (see direct.py)
  naff    naive semantics; every axiom-derived rule carries a provenance
          literal active(k) so single axioms can be switched off

Every axiom kind also has a *violation* encoding: a list of rule bodies, one
of which holds exactly when the axiom is violated. Entailment checks add
the violation of a query axiom as a required witness; axioms without a
dedicated rule form are asserted as ``:- body.`` for each violation body.

Auxiliary predicates are named in pre-order of first occurrence and their
defining rules are emitted operands-first. Names are memoised per
translator, so a shared subexpression is defined once.
"""

from __future__ import annotations

import copy
import itertools
import logging
from dataclasses import dataclass
from typing import Iterable, Sequence

from .config import Strategy
from .domain import Domain, check_in_domain
from .errors import UnsupportedConstructError
from .program import Atom, Count, Directive, Literal, Program, Rule, neg, pos
from .signature import SignatureMapper
from .types import (
    NOTHING,
    THING,
    AsymmetricObjectProperty,
    Axiom,
    ClassAssertion,
    ClassExpression,
    Declaration,
    DifferentIndividuals,
    DisjointClasses,
    DisjointObjectProperties,
    DisjointUnion,
    EquivalentClasses,
    EquivalentObjectProperties,
    FunctionalObjectProperty,
    InverseFunctionalObjectProperty,
    InverseObjectProperties,
    IrreflexiveObjectProperty,
    NamedIndividual,
    NegativeObjectPropertyAssertion,
    ObjectAllValuesFrom,
    ObjectComplementOf,
    ObjectExactCardinality,
    ObjectHasSelf,
    ObjectHasValue,
    ObjectIntersectionOf,
    ObjectInverseOf,
    ObjectMaxCardinality,
    ObjectMinCardinality,
    ObjectOneOf,
    ObjectProperty,
    ObjectPropertyAssertion,
    ObjectPropertyDomain,
    ObjectPropertyRange,
    ObjectSomeValuesFrom,
    ObjectUnionOf,
    Ontology,
    OWLClass,
    PropertyExpression,
    ReflexiveObjectProperty,
    SameIndividual,
    SubClassOf,
    SubObjectPropertyOf,
    SymmetricObjectProperty,
    TransitiveObjectProperty,
    UnsupportedAxiom,
    signature_of,
)

logger = logging.getLogger(__name__)

Body = tuple[Literal, ...]


# ---------------------------------------------------------------------------
# Translation context: one per reasoning session
# ---------------------------------------------------------------------------

@dataclass
class TranslationContext:
    """Domain, symbol mapping and strategy of one reasoning session."""
    domain: Domain
    mapper: SignatureMapper
    strategy: Strategy = Strategy.NAIVE


def top(term: str) -> Atom:
    return Atom("top", (term,))


def is_variable(term: str) -> bool:
    return term[:1].isupper()


def inverse(prop: PropertyExpression) -> PropertyExpression:
    if isinstance(prop, ObjectInverseOf):
        return prop.property
    return ObjectInverseOf(prop)


def is_thing(expr: ClassExpression) -> bool:
    return isinstance(expr, OWLClass) and expr.is_thing


def is_nothing(expr: ClassExpression) -> bool:
    return isinstance(expr, OWLClass) and expr.is_nothing


def _pairs(items: Sequence) -> list[tuple]:
    return list(itertools.combinations(items, 2))


# ---------------------------------------------------------------------------
# Translator base
# ---------------------------------------------------------------------------

class Translator:
    """Strategy-independent translation.

    Subclasses decide how subject terms are produced (``_assignments``):
    the naive translator enumerates domain constants, the direct one uses
    variables bound by ``top/1``.
    """

    strategy: Strategy

    def __init__(self, context: TranslationContext, program: Program | None = None) -> None:
        self.context = context
        self.program = program if program is not None else Program()
        self._aux: dict[ClassExpression, str] = {}
        self._declared: set = set()
        self._counter = 0
        self._tag: Literal | None = None
        self._tagged = 0
        self._current: object = None
        self._constants: tuple[str, ...] | None = None

    @property
    def mapper(self) -> SignatureMapper:
        return self.context.mapper

    @property
    def domain(self) -> Domain:
        return self.context.domain

    # -----------------------------------------------------------------------
    # Entry points
    # -----------------------------------------------------------------------

    def translate(self, ontology: Ontology) -> Program:
        """Translate a whole ontology into ``self.program``."""
        signature = ontology.signature()
        check_in_domain(self.domain, ontology.individuals())
        self.mapper.register_all(signature | set(self.domain))

        self._header(ontology)
        self._declare(ontology.classes())
        self._declare(ontology.object_properties())
        for index, axiom in enumerate(ontology.axioms, start=1):
            self._translate_tracked(index, axiom)

        logger.debug(
            "%s translation: %d rules, %d auxiliary predicates",
            self.strategy.value, len(self.program), len(self._aux),
        )
        return self.program

    def translate_axiom(self, axiom: Axiom) -> None:
        """Emit the rules asserting ``axiom``."""
        self._current = axiom
        match axiom:
            case Declaration(entity=entity):
                self._declare([entity])
            case ClassAssertion(expression=expr, individual=ind):
                head = self._head_atom(expr, self._const(ind))
                if head is not None:
                    self._emit(Rule((head,)))
                elif not is_thing(expr):
                    self._constrain(self.violations(axiom))
            case ObjectPropertyAssertion(property=prop, subject=s, object=o):
                self._emit(Rule((self._role(prop, self._const(s), self._const(o)),)))
            case NegativeObjectPropertyAssertion(property=prop, subject=s, object=o):
                atom = self._role(prop, self._const(s), self._const(o))
                self._emit(Rule((atom.complement(),)))
            case SubClassOf(sub=sub, sup=sup):
                self._subsumption(sub, sup)
            case EquivalentClasses(expressions=exprs):
                first = exprs[0]
                for other in exprs[1:]:
                    self._subsumption(first, other)
                    self._subsumption(other, first)
            case DisjointUnion(owner=owner, expressions=exprs):
                union = ObjectUnionOf(tuple(exprs))
                self._subsumption(owner, union)
                self._subsumption(union, owner)
                self._constrain(self._disjoint_violations(exprs))
            case SubObjectPropertyOf(sub=sub, sup=sup):
                for x, y in self._assignments("X", "Y"):
                    self._emit(Rule((self._role(sup, x, y),), (pos(self._role(sub, x, y)),)))
            case EquivalentObjectProperties(properties=props):
                first = props[0]
                for other in props[1:]:
                    for x, y in self._assignments("X", "Y"):
                        self._emit(Rule((self._role(other, x, y),), (pos(self._role(first, x, y)),)))
                        self._emit(Rule((self._role(first, x, y),), (pos(self._role(other, x, y)),)))
            case InverseObjectProperties(first=first, second=second):
                for x, y in self._assignments("X", "Y"):
                    self._emit(Rule((self._role(second, y, x),), (pos(self._role(first, x, y)),)))
                    self._emit(Rule((self._role(first, y, x),), (pos(self._role(second, x, y)),)))
            case ObjectPropertyDomain(property=prop, domain=cls) if self._head_atom(cls, "X") is not None:
                for x, y in self._assignments("X", "Y"):
                    self._emit(Rule((self._head_atom(cls, x),), (pos(self._role(prop, x, y)),)))
            case ObjectPropertyRange(property=prop, range=cls) if self._head_atom(cls, "Y") is not None:
                for x, y in self._assignments("X", "Y"):
                    self._emit(Rule((self._head_atom(cls, y),), (pos(self._role(prop, x, y)),)))
            case TransitiveObjectProperty(property=prop):
                for x, y, z in self._assignments("X", "Y", "Z"):
                    self._emit(Rule(
                        (self._role(prop, x, z),),
                        (pos(self._role(prop, x, y)), pos(self._role(prop, y, z))),
                    ))
            case SymmetricObjectProperty(property=prop):
                for x, y in self._assignments("X", "Y"):
                    self._emit(Rule((self._role(prop, y, x),), (pos(self._role(prop, x, y)),)))
            case ReflexiveObjectProperty(property=prop):
                for (x,) in self._assignments("X"):
                    self._emit(Rule((self._role(prop, x, x),), self._bind(x)))
            case _:
                self._constrain(self.violations(axiom))

    def violations(self, axiom: Axiom) -> list[Body]:
        """Rule bodies that hold exactly when ``axiom`` is violated."""
        self._current = axiom
        match axiom:
            case Declaration():
                return []
            case ClassAssertion(expression=expr, individual=ind):
                return [(self._member(expr, self._const(ind)).negate(),)]
            case ObjectPropertyAssertion(property=prop, subject=s, object=o):
                return [(neg(self._role(prop, self._const(s), self._const(o))),)]
            case NegativeObjectPropertyAssertion(property=prop, subject=s, object=o):
                return [(pos(self._role(prop, self._const(s), self._const(o))),)]
            case SameIndividual(individuals=inds):
                distinct = sorted(set(inds))
                if len(distinct) > 1:
                    return [(pos(top(self._const(distinct[0]))),)]
                return []
            case DifferentIndividuals(individuals=inds):
                seen: set[NamedIndividual] = set()
                for ind in inds:
                    if ind in seen:
                        return [(pos(top(self._const(ind))),)]
                    seen.add(ind)
                return []
            case SubClassOf(sub=sub, sup=sup):
                return self._subsumption_violations(sub, sup)
            case EquivalentClasses(expressions=exprs):
                bodies: list[Body] = []
                for other in exprs[1:]:
                    bodies += self._subsumption_violations(exprs[0], other)
                    bodies += self._subsumption_violations(other, exprs[0])
                return bodies
            case DisjointClasses(expressions=exprs):
                return self._disjoint_violations(exprs)
            case DisjointUnion(owner=owner, expressions=exprs):
                union = ObjectUnionOf(tuple(exprs))
                return (
                    self._subsumption_violations(owner, union)
                    + self._subsumption_violations(union, owner)
                    + self._disjoint_violations(exprs)
                )
            case SubObjectPropertyOf(sub=sub, sup=sup):
                return self._property_inclusion_violations(sub, sup)
            case EquivalentObjectProperties(properties=props):
                bodies = []
                for other in props[1:]:
                    bodies += self._property_inclusion_violations(props[0], other)
                    bodies += self._property_inclusion_violations(other, props[0])
                return bodies
            case DisjointObjectProperties(properties=props):
                return [
                    (pos(self._role(r, x, y)), pos(self._role(s, x, y)))
                    for r, s in _pairs(props)
                    for x, y in self._assignments("X", "Y")
                ]
            case InverseObjectProperties(first=first, second=second):
                return (
                    self._property_inclusion_violations(first, inverse(second))
                    + self._property_inclusion_violations(second, inverse(first))
                )
            case ObjectPropertyDomain(property=prop, domain=cls):
                return [
                    (pos(self._role(prop, x, y)), self._member(cls, x).negate())
                    for x, y in self._assignments("X", "Y")
                ]
            case ObjectPropertyRange(property=prop, range=cls):
                return [
                    (pos(self._role(prop, x, y)), self._member(cls, y).negate())
                    for x, y in self._assignments("X", "Y")
                ]
            case FunctionalObjectProperty(property=prop):
                return self._functional_violations(prop)
            case InverseFunctionalObjectProperty(property=prop):
                return self._functional_violations(inverse(prop))
            case TransitiveObjectProperty(property=prop):
                return [
                    (pos(self._role(prop, x, y)), pos(self._role(prop, y, z)),
                     neg(self._role(prop, x, z)))
                    for x, y, z in self._assignments("X", "Y", "Z")
                ]
            case SymmetricObjectProperty(property=prop):
                return self._property_inclusion_violations(prop, inverse(prop))
            case AsymmetricObjectProperty(property=prop):
                return [
                    (pos(self._role(prop, x, y)), pos(self._role(prop, y, x)))
                    for x, y in self._assignments("X", "Y")
                ]
            case ReflexiveObjectProperty(property=prop):
                return [
                    self._bind(x) + (neg(self._role(prop, x, x)),)
                    for (x,) in self._assignments("X")
                ]
            case IrreflexiveObjectProperty(property=prop):
                return [(pos(self._role(prop, x, x)),) for (x,) in self._assignments("X")]
            case UnsupportedAxiom(description=description):
                raise UnsupportedConstructError(axiom, description)
            case _:
                raise UnsupportedConstructError(axiom, f"no translation for {type(axiom).__name__}")

    def add_negation(self, axiom: Axiom) -> str:
        """Require a witness of the violation of ``axiom``; return its name.

        The program becomes inconsistent exactly when no model violates the
        axiom, i.e. when the axiom is entailed.
        """
        self._current = axiom
        entities = signature_of(axiom)
        check_in_domain(self.domain, [e for e in entities if isinstance(e, NamedIndividual)])
        fresh = sorted(
            (e for e in entities if isinstance(e, (OWLClass, ObjectProperty)) and e not in self._declared),
            key=lambda e: e.iri,
        )
        self._declare(fresh)

        witness = self._fresh("witness")
        self.program.add(Directive(f"#defined {witness}/0."))
        for body in self.violations(axiom):
            self._emit_definition(Rule((Atom(witness),), body))
        self._emit_definition(Rule((), (neg(Atom(witness)),)))
        return witness

    def fork(self, program: Program) -> Translator:
        """A translator writing into ``program`` with this translator's state.

        Used to extend a copy of a translated program without touching the
        original or this translator's memo tables.
        """
        child = copy.copy(self)
        child.program = program
        child._aux = dict(self._aux)
        child._declared = set(self._declared)
        child._tag = None
        return child

    # -----------------------------------------------------------------------
    # Strategy hooks
    # -----------------------------------------------------------------------

    def _assignments(self, *variables: str) -> Iterable[tuple[str, ...]]:
        raise NotImplementedError

    def _body(self, expr: ClassExpression, term: str) -> Body:
        """Body literals expressing membership of ``term`` in ``expr``."""
        return (self._member(expr, term),)

    def _subsumption(self, sub: ClassExpression, sup: ClassExpression) -> None:
        if is_thing(sup) or is_nothing(sub):
            return
        for (x,) in self._assignments("X"):
            body = self._body(sub, x)
            head = self._head_atom(sup, x)
            if head is not None:
                self._emit(Rule((head,), body))
            elif is_nothing(sup):
                self._emit(Rule((), body))
            else:
                self._emit(Rule((), body + (self._member(sup, x).negate(),)))

    def _translate_tracked(self, index: int, axiom: Axiom) -> None:
        if not isinstance(axiom, Declaration):
            self.program.comment(str(axiom))
        self.translate_axiom(axiom)

    def _header(self, ontology: Ontology) -> None:
        name = ontology.iri or "anonymous ontology"
        self.program.comment(f"{self.strategy.value} translation of {name}")
        self.program.comment(f"fixed domain: {self.domain.size} element(s)")
        self.program.add(Directive("#defined bot/1."))
        for constant in self.constants:
            self._emit_definition(Rule((top(constant),)))

    # -----------------------------------------------------------------------
    # Terms and atoms
    # -----------------------------------------------------------------------

    @property
    def constants(self) -> tuple[str, ...]:
        if self._constants is None:
            self._constants = tuple(self.mapper.symbol_for(e) for e in self.domain)
        return self._constants

    def _const(self, individual: NamedIndividual) -> str:
        return self.mapper.symbol_for(individual)

    def _bind(self, *terms: str) -> Body:
        return tuple(pos(top(t)) for t in terms if is_variable(t))

    def _role(self, prop: PropertyExpression, subject: str, obj: str) -> Atom:
        if isinstance(prop, ObjectInverseOf):
            return Atom(self.mapper.symbol_for(prop.property), (obj, subject))
        if isinstance(prop, ObjectProperty):
            return Atom(self.mapper.symbol_for(prop), (subject, obj))
        raise UnsupportedConstructError(self._current, f"property expression {prop!r}")

    def _head_atom(self, expr: ClassExpression, term: str) -> Atom | None:
        """The atom to derive for ``term ∈ expr`` when that is a single atom."""
        match expr:
            case OWLClass() if not (expr.is_thing or expr.is_nothing):
                return Atom(self.mapper.symbol_for(expr), (term,))
            case ObjectComplementOf(operand=OWLClass() as cls) if not (cls.is_thing or cls.is_nothing):
                return Atom(self.mapper.symbol_for(cls), (term,), negated=True)
        return None

    def _member(self, expr: ClassExpression, term: str) -> Literal:
        """A positive literal true exactly when ``term`` is in ``expr``."""
        match expr:
            case OWLClass() if expr.is_thing:
                return pos(top(term))
            case OWLClass() if expr.is_nothing:
                return pos(Atom("bot", (term,)))
            case ObjectComplementOf(operand=OWLClass() as cls) if cls.is_thing:
                return self._member(NOTHING, term)
            case ObjectComplementOf(operand=OWLClass() as cls) if cls.is_nothing:
                return self._member(THING, term)
        head = self._head_atom(expr, term)
        if head is not None:
            return pos(head)
        return pos(Atom(self._aux_for(expr), (term,)))

    def _count(
        self,
        subject: str,
        prop: PropertyExpression,
        filler: ClassExpression,
        op: str,
        bound: int,
        complement: bool = False,
    ) -> Count:
        """``#count{ y : R(subject,y), D(y) } op bound`` over the domain."""
        elements = []
        for (y,) in self._assignments("Y"):
            cond: list[Literal] = [pos(self._role(prop, subject, y))]
            if complement:
                cond.append(self._member(filler, y).negate())
            elif not is_thing(filler):
                cond.append(self._member(filler, y))
            elements.append((y, tuple(cond)))
        return Count(tuple(elements), op, bound)

    # -----------------------------------------------------------------------
    # Auxiliary predicates for complex class expressions
    # -----------------------------------------------------------------------

    def _fresh(self, prefix: str) -> str:
        self._counter += 1
        return f"{prefix}_{self._counter}"

    def _aux_for(self, expr: ClassExpression) -> str:
        name = self._aux.get(expr)
        if name is None:
            name = self._fresh("aux")
            self._aux[expr] = name
            self._define(expr, name)
        return name

    def _define(self, expr: ClassExpression, name: str) -> None:
        def head(term: str) -> tuple[Atom, ...]:
            return (Atom(name, (term,)),)

        match expr:
            case ObjectComplementOf(operand=operand):
                for (x,) in self._assignments("X"):
                    body = self._bind(x) + (self._member(operand, x).negate(),)
                    self._emit_definition(Rule(head(x), body))
            case ObjectIntersectionOf(operands=operands):
                for (x,) in self._assignments("X"):
                    body = tuple(self._member(op, x) for op in operands) or (pos(top(x)),)
                    self._emit_definition(Rule(head(x), body))
            case ObjectUnionOf(operands=operands):
                self.program.add(Directive(f"#defined {name}/1."))
                for op in operands:
                    for (x,) in self._assignments("X"):
                        self._emit_definition(Rule(head(x), (self._member(op, x),)))
            case ObjectSomeValuesFrom(property=prop, filler=filler):
                for x, y in self._assignments("X", "Y"):
                    body = (pos(self._role(prop, x, y)),)
                    if not is_thing(filler):
                        body += (self._member(filler, y),)
                    self._emit_definition(Rule(head(x), body))
            case ObjectAllValuesFrom(property=prop, filler=filler):
                for (x,) in self._assignments("X"):
                    count = self._count(x, prop, filler, "<=", 0, complement=True)
                    self._emit_definition(Rule(head(x), self._bind(x) + (pos(count),)))
            case ObjectHasValue(property=prop, individual=ind):
                check_in_domain(self.domain, [ind])
                for (x,) in self._assignments("X"):
                    self._emit_definition(Rule(head(x), (pos(self._role(prop, x, self._const(ind))),)))
            case ObjectHasSelf(property=prop):
                for (x,) in self._assignments("X"):
                    self._emit_definition(Rule(head(x), (pos(self._role(prop, x, x)),)))
            case ObjectMinCardinality(cardinality=k, property=prop, filler=filler):
                self._define_count(name, prop, filler, ">=", k)
            case ObjectMaxCardinality(cardinality=k, property=prop, filler=filler):
                self._define_count(name, prop, filler, "<=", k)
            case ObjectExactCardinality(cardinality=k, property=prop, filler=filler):
                self._define_count(name, prop, filler, "=", k)
            case ObjectOneOf(individuals=individuals):
                check_in_domain(self.domain, individuals)
                self.program.add(Directive(f"#defined {name}/1."))
                for ind in sorted(set(individuals)):
                    self._emit_definition(Rule(head(self._const(ind))))
            case _:
                raise UnsupportedConstructError(self._current, f"class expression {expr!r}")

    def _define_count(self, name: str, prop, filler, op: str, bound: int) -> None:
        for (x,) in self._assignments("X"):
            count = self._count(x, prop, filler, op, bound)
            self._emit_definition(Rule((Atom(name, (x,)),), self._bind(x) + (pos(count),)))

    # -----------------------------------------------------------------------
    # Violation helpers
    # -----------------------------------------------------------------------

    def _subsumption_violations(self, sub: ClassExpression, sup: ClassExpression) -> list[Body]:
        return [
            self._body(sub, x) + (self._member(sup, x).negate(),)
            for (x,) in self._assignments("X")
        ]

    def _disjoint_violations(self, exprs: Sequence[ClassExpression]) -> list[Body]:
        return [
            self._body(c, x) + self._body(d, x)
            for c, d in _pairs(exprs)
            for (x,) in self._assignments("X")
        ]

    def _property_inclusion_violations(self, sub: PropertyExpression, sup: PropertyExpression) -> list[Body]:
        return [
            (pos(self._role(sub, x, y)), neg(self._role(sup, x, y)))
            for x, y in self._assignments("X", "Y")
        ]

    def _functional_violations(self, prop: PropertyExpression) -> list[Body]:
        return [
            self._bind(x) + (pos(self._count(x, prop, THING, ">=", 2)),)
            for (x,) in self._assignments("X")
        ]

    # -----------------------------------------------------------------------
    # Emission
    # -----------------------------------------------------------------------

    def _declare(self, entities: Iterable) -> None:
        """Emit the totality guess for classes and properties not yet declared."""
        for entity in entities:
            if entity in self._declared:
                continue
            if isinstance(entity, OWLClass):
                if entity.is_thing or entity.is_nothing:
                    continue
                symbol = self.mapper.symbol_for(entity)
                for (x,) in self._assignments("X"):
                    atom = Atom(symbol, (x,))
                    self._emit_definition(Rule((atom, atom.complement()), self._bind(x)))
            elif isinstance(entity, ObjectProperty):
                symbol = self.mapper.symbol_for(entity)
                for x, y in self._assignments("X", "Y"):
                    atom = Atom(symbol, (x, y))
                    self._emit_definition(Rule((atom, atom.complement()), self._bind(x, y)))
            else:
                continue
            self._declared.add(entity)

    def _emit(self, rule: Rule) -> None:
        """Emit a rule derived from the axiom being translated."""
        if self._tag is not None:
            rule = rule.with_body(self._tag)
            self._tagged += 1
        self.program.add(rule)

    def _emit_definition(self, rule: Rule) -> None:
        """Emit a rule shared by all axioms (domain, totality, auxiliaries)."""
        self.program.add(rule)

    def _constrain(self, bodies: list[Body]) -> None:
        for body in bodies:
            if body:
                self._emit(Rule((), body))


# ---------------------------------------------------------------------------
# Naive strategy: grounded over the domain by the translator
# ---------------------------------------------------------------------------

class NaiveTranslator(Translator):
    """Fully grounded translation: one rule per domain element (tuple)."""

    strategy = Strategy.NAIVE

    def _assignments(self, *variables: str) -> Iterable[tuple[str, ...]]:
        return itertools.product(self.constants, repeat=len(variables))


# ---------------------------------------------------------------------------
# Debug ("naff") strategy: provenance-tagged naive translation
# ---------------------------------------------------------------------------

class DebugTranslator(NaiveTranslator):
    """Naive translation with every axiom-derived rule tagged ``active(k)``.

    ``axiom(k)`` facts name the source axioms and
    ``active(K) :- axiom(K), not disabled(K).`` switches them on; adding
    ``disabled(k).`` removes exactly the rules of axiom k. Shared rules
    (domain facts, totality guesses, auxiliary definitions) are untagged.

    Totality guesses ``c(X) | -c(X)`` are not tagged. They come from the
    signature, not from one axiom, and switching one off would make ``c``
    false wherever no rule derives it. Justifications therefore only name
    logical axioms.
    """

    strategy = Strategy.NAFF

    def __init__(self, context: TranslationContext, program: Program | None = None) -> None:
        super().__init__(context, program)
        self.provenance: dict[int, Axiom] = {}

    def _header(self, ontology: Ontology) -> None:
        super()._header(ontology)
        self.program.add(Directive("#defined disabled/1."))
        self._emit_definition(Rule(
            (Atom("active", ("K",)),),
            (pos(Atom("axiom", ("K",))), neg(Atom("disabled", ("K",)))),
        ))

    def _translate_tracked(self, index: int, axiom: Axiom) -> None:
        if isinstance(axiom, Declaration):
            self.translate_axiom(axiom)
            return
        tag = str(index)
        self.program.comment(f"[{tag}] {axiom}")
        self.program.add(Rule((Atom("axiom", (tag,)),)))
        before = self._tagged
        self._tag = pos(Atom("active", (tag,)))
        try:
            self.translate_axiom(axiom)
        finally:
            self._tag = None
        if self._tagged > before:
            self.provenance[index] = axiom


def make_translator(context: TranslationContext, strategy: Strategy | None = None) -> Translator:
    """Build the translator for ``strategy`` (default: the context's)."""
    strategy = strategy or context.strategy
    if strategy is Strategy.NAIVE:
        return NaiveTranslator(context)
    if strategy is Strategy.NAFF:
        return DebugTranslator(context)
    if strategy is Strategy.DIRECT:
        from .direct import DirectTranslator
        return DirectTranslator(context)
    raise ValueError(f"Unknown strategy: {strategy}")

"""Core ontology types: entities, class expressions, and axioms.

The model covers the description-logic fragment the translator supports:

  Entities:           OWLClass, ObjectProperty, NamedIndividual
  Class expressions:  complement, intersection, union, existential, universal,
                      has-value, has-self, min/max/exact cardinality, one-of
  Axioms:             ABox assertions, class axioms, object property axioms

Everything is a frozen dataclass, so expressions and axioms are hashable and
can be used as memo keys by the translator. The unions at the bottom of each
section are closed: the translator dispatches over them with ``match`` and
rejects anything else.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Union

if TYPE_CHECKING:
    from rdflib import Graph


OWL_THING = "http://www.w3.org/2002/07/owl#Thing"
OWL_NOTHING = "http://www.w3.org/2002/07/owl#Nothing"


def local_name(iri: str) -> str:
    """Return the fragment or last path segment of an IRI."""
    for sep in ("#", "/", ":"):
        if sep in iri:
            tail = iri.rsplit(sep, 1)[1]
            if tail:
                return tail
    return iri


# ---------------------------------------------------------------------------
# Entities: the signature
# ---------------------------------------------------------------------------

@dataclass(frozen=True, order=True)
class OWLClass:
    """A named class. ``owl:Thing`` and ``owl:Nothing`` are instances too."""
    iri: str

    @property
    def is_thing(self) -> bool:
        return self.iri == OWL_THING

    @property
    def is_nothing(self) -> bool:
        return self.iri == OWL_NOTHING

    def __str__(self) -> str:
        return local_name(self.iri)


@dataclass(frozen=True, order=True)
class ObjectProperty:
    """A named object property (binary relation between elements)."""
    iri: str

    def __str__(self) -> str:
        return local_name(self.iri)


@dataclass(frozen=True, order=True)
class NamedIndividual:
    """A named individual. Under fixed-domain semantics, a domain element."""
    iri: str

    def __str__(self) -> str:
        return local_name(self.iri)


THING = OWLClass(OWL_THING)
NOTHING = OWLClass(OWL_NOTHING)

Entity = Union[OWLClass, ObjectProperty, NamedIndividual]


# ---------------------------------------------------------------------------
# Property expressions
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ObjectInverseOf:
    """The inverse R⁻ of a named object property R."""
    property: ObjectProperty

    def __str__(self) -> str:
        return f"ObjectInverseOf({self.property})"


PropertyExpression = Union[ObjectProperty, ObjectInverseOf]


# ---------------------------------------------------------------------------
# Class expressions
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ObjectComplementOf:
    operand: ClassExpression

    def __str__(self) -> str:
        return f"ObjectComplementOf({self.operand})"


@dataclass(frozen=True)
class ObjectIntersectionOf:
    operands: tuple[ClassExpression, ...]

    def __str__(self) -> str:
        return f"ObjectIntersectionOf({' '.join(str(o) for o in self.operands)})"


@dataclass(frozen=True)
class ObjectUnionOf:
    operands: tuple[ClassExpression, ...]

    def __str__(self) -> str:
        return f"ObjectUnionOf({' '.join(str(o) for o in self.operands)})"


@dataclass(frozen=True)
class ObjectSomeValuesFrom:
    property: PropertyExpression
    filler: ClassExpression = THING

    def __str__(self) -> str:
        return f"ObjectSomeValuesFrom({self.property} {self.filler})"


@dataclass(frozen=True)
class ObjectAllValuesFrom:
    property: PropertyExpression
    filler: ClassExpression = THING

    def __str__(self) -> str:
        return f"ObjectAllValuesFrom({self.property} {self.filler})"


@dataclass(frozen=True)
class ObjectHasValue:
    property: PropertyExpression
    individual: NamedIndividual

    def __str__(self) -> str:
        return f"ObjectHasValue({self.property} {self.individual})"


@dataclass(frozen=True)
class ObjectHasSelf:
    property: PropertyExpression

    def __str__(self) -> str:
        return f"ObjectHasSelf({self.property})"


@dataclass(frozen=True)
class ObjectMinCardinality:
    cardinality: int
    property: PropertyExpression
    filler: ClassExpression = THING

    def __str__(self) -> str:
        return f"ObjectMinCardinality({self.cardinality} {self.property} {self.filler})"


@dataclass(frozen=True)
class ObjectMaxCardinality:
    cardinality: int
    property: PropertyExpression
    filler: ClassExpression = THING

    def __str__(self) -> str:
        return f"ObjectMaxCardinality({self.cardinality} {self.property} {self.filler})"


@dataclass(frozen=True)
class ObjectExactCardinality:
    cardinality: int
    property: PropertyExpression
    filler: ClassExpression = THING

    def __str__(self) -> str:
        return f"ObjectExactCardinality({self.cardinality} {self.property} {self.filler})"


@dataclass(frozen=True)
class ObjectOneOf:
    individuals: tuple[NamedIndividual, ...]

    def __str__(self) -> str:
        return f"ObjectOneOf({' '.join(str(i) for i in self.individuals)})"


ClassExpression = Union[
    OWLClass,
    ObjectComplementOf,
    ObjectIntersectionOf,
    ObjectUnionOf,
    ObjectSomeValuesFrom,
    ObjectAllValuesFrom,
    ObjectHasValue,
    ObjectHasSelf,
    ObjectMinCardinality,
    ObjectMaxCardinality,
    ObjectExactCardinality,
    ObjectOneOf,
]


# ---------------------------------------------------------------------------
# Axioms: ABox
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Declaration:
    entity: Entity

    def __str__(self) -> str:
        return f"Declaration({type(self.entity).__name__}({self.entity}))"


@dataclass(frozen=True)
class ClassAssertion:
    expression: ClassExpression
    individual: NamedIndividual

    def __str__(self) -> str:
        return f"ClassAssertion({self.expression} {self.individual})"


@dataclass(frozen=True)
class ObjectPropertyAssertion:
    property: PropertyExpression
    subject: NamedIndividual
    object: NamedIndividual

    def __str__(self) -> str:
        return f"ObjectPropertyAssertion({self.property} {self.subject} {self.object})"


@dataclass(frozen=True)
class NegativeObjectPropertyAssertion:
    property: PropertyExpression
    subject: NamedIndividual
    object: NamedIndividual

    def __str__(self) -> str:
        return f"NegativeObjectPropertyAssertion({self.property} {self.subject} {self.object})"


@dataclass(frozen=True)
class SameIndividual:
    individuals: tuple[NamedIndividual, ...]

    def __str__(self) -> str:
        return f"SameIndividual({' '.join(str(i) for i in self.individuals)})"


@dataclass(frozen=True)
class DifferentIndividuals:
    individuals: tuple[NamedIndividual, ...]

    def __str__(self) -> str:
        return f"DifferentIndividuals({' '.join(str(i) for i in self.individuals)})"


# ---------------------------------------------------------------------------
# Axioms: class axioms
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class SubClassOf:
    sub: ClassExpression
    sup: ClassExpression

    def __str__(self) -> str:
        return f"SubClassOf({self.sub} {self.sup})"


@dataclass(frozen=True)
class EquivalentClasses:
    expressions: tuple[ClassExpression, ...]

    def __str__(self) -> str:
        return f"EquivalentClasses({' '.join(str(e) for e in self.expressions)})"


@dataclass(frozen=True)
class DisjointClasses:
    expressions: tuple[ClassExpression, ...]

    def __str__(self) -> str:
        return f"DisjointClasses({' '.join(str(e) for e in self.expressions)})"


@dataclass(frozen=True)
class DisjointUnion:
    owner: OWLClass
    expressions: tuple[ClassExpression, ...]

    def __str__(self) -> str:
        return f"DisjointUnion({self.owner} {' '.join(str(e) for e in self.expressions)})"


# ---------------------------------------------------------------------------
# Axioms: object property axioms
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class SubObjectPropertyOf:
    sub: PropertyExpression
    sup: PropertyExpression

    def __str__(self) -> str:
        return f"SubObjectPropertyOf({self.sub} {self.sup})"


@dataclass(frozen=True)
class EquivalentObjectProperties:
    properties: tuple[PropertyExpression, ...]

    def __str__(self) -> str:
        return f"EquivalentObjectProperties({' '.join(str(p) for p in self.properties)})"


@dataclass(frozen=True)
class DisjointObjectProperties:
    properties: tuple[PropertyExpression, ...]

    def __str__(self) -> str:
        return f"DisjointObjectProperties({' '.join(str(p) for p in self.properties)})"


@dataclass(frozen=True)
class InverseObjectProperties:
    first: PropertyExpression
    second: PropertyExpression

    def __str__(self) -> str:
        return f"InverseObjectProperties({self.first} {self.second})"


@dataclass(frozen=True)
class ObjectPropertyDomain:
    property: PropertyExpression
    domain: ClassExpression

    def __str__(self) -> str:
        return f"ObjectPropertyDomain({self.property} {self.domain})"


@dataclass(frozen=True)
class ObjectPropertyRange:
    property: PropertyExpression
    range: ClassExpression

    def __str__(self) -> str:
        return f"ObjectPropertyRange({self.property} {self.range})"


@dataclass(frozen=True)
class FunctionalObjectProperty:
    property: PropertyExpression

    def __str__(self) -> str:
        return f"FunctionalObjectProperty({self.property})"


@dataclass(frozen=True)
class InverseFunctionalObjectProperty:
    property: PropertyExpression

    def __str__(self) -> str:
        return f"InverseFunctionalObjectProperty({self.property})"


@dataclass(frozen=True)
class TransitiveObjectProperty:
    property: PropertyExpression

    def __str__(self) -> str:
        return f"TransitiveObjectProperty({self.property})"


@dataclass(frozen=True)
class SymmetricObjectProperty:
    property: PropertyExpression

    def __str__(self) -> str:
        return f"SymmetricObjectProperty({self.property})"


@dataclass(frozen=True)
class AsymmetricObjectProperty:
    property: PropertyExpression

    def __str__(self) -> str:
        return f"AsymmetricObjectProperty({self.property})"


@dataclass(frozen=True)
class ReflexiveObjectProperty:
    property: PropertyExpression

    def __str__(self) -> str:
        return f"ReflexiveObjectProperty({self.property})"


@dataclass(frozen=True)
class IrreflexiveObjectProperty:
    property: PropertyExpression

    def __str__(self) -> str:
        return f"IrreflexiveObjectProperty({self.property})"


@dataclass(frozen=True)
class UnsupportedAxiom:
    """Placeholder for a source statement outside the supported fragment.

    The loader keeps these instead of dropping them, so translation can
    fail loudly and name the offending construct.
    """
    description: str

    def __str__(self) -> str:
        return f"Unsupported({self.description})"


Axiom = Union[
    Declaration,
    ClassAssertion,
    ObjectPropertyAssertion,
    NegativeObjectPropertyAssertion,
    SameIndividual,
    DifferentIndividuals,
    SubClassOf,
    EquivalentClasses,
    DisjointClasses,
    DisjointUnion,
    SubObjectPropertyOf,
    EquivalentObjectProperties,
    DisjointObjectProperties,
    InverseObjectProperties,
    ObjectPropertyDomain,
    ObjectPropertyRange,
    FunctionalObjectProperty,
    InverseFunctionalObjectProperty,
    TransitiveObjectProperty,
    SymmetricObjectProperty,
    AsymmetricObjectProperty,
    ReflexiveObjectProperty,
    IrreflexiveObjectProperty,
    UnsupportedAxiom,
]


def axiom_sort_key(axiom: Axiom) -> tuple[str, str]:
    """Deterministic ordering for axiom sets read from unordered sources."""
    return (type(axiom).__name__, repr(axiom))


# ---------------------------------------------------------------------------
# Signature collection
# ---------------------------------------------------------------------------

def _walk(node: object, out: set) -> None:
    """Collect the named entities occurring anywhere inside ``node``."""
    if isinstance(node, (OWLClass, ObjectProperty, NamedIndividual)):
        if not (isinstance(node, OWLClass) and (node.is_thing or node.is_nothing)):
            out.add(node)
        return
    if isinstance(node, tuple):
        for item in node:
            _walk(item, out)
        return
    if isinstance(node, UnsupportedAxiom):
        return
    for name in getattr(node, "__dataclass_fields__", {}):
        _walk(getattr(node, name), out)


def signature_of(*nodes: object) -> set[Entity]:
    """Return every named entity (excluding Thing/Nothing) in the given nodes."""
    out: set = set()
    for node in nodes:
        _walk(node, out)
    return out


# ---------------------------------------------------------------------------
# Ontology: signature + axiom set
# ---------------------------------------------------------------------------

@dataclass
class Ontology:
    """An ontology: an ordered axiom list over a signature.

    ``graph`` keeps the rdflib graph the ontology was read from (if any), so
    the fixed-domain axiomatizer can write the original statements back out.
    """

    iri: str = ""
    axioms: list[Axiom] = field(default_factory=list)
    graph: Graph | None = field(default=None, repr=False, compare=False)

    # -----------------------------------------------------------------------
    # Builder API
    # -----------------------------------------------------------------------

    def add(self, axiom: Axiom) -> Axiom:
        """Append an axiom, ignoring exact duplicates."""
        if axiom not in self.axioms:
            self.axioms.append(axiom)
        return axiom

    def add_class(self, iri: str) -> OWLClass:
        cls = OWLClass(iri)
        self.add(Declaration(cls))
        return cls

    def add_object_property(self, iri: str) -> ObjectProperty:
        prop = ObjectProperty(iri)
        self.add(Declaration(prop))
        return prop

    def add_individual(self, iri: str) -> NamedIndividual:
        ind = NamedIndividual(iri)
        self.add(Declaration(ind))
        return ind

    # -----------------------------------------------------------------------
    # Signature
    # -----------------------------------------------------------------------

    def signature(self) -> set[Entity]:
        return signature_of(*self.axioms)

    def classes(self) -> list[OWLClass]:
        return sorted(e for e in self.signature() if isinstance(e, OWLClass))

    def object_properties(self) -> list[ObjectProperty]:
        return sorted(e for e in self.signature() if isinstance(e, ObjectProperty))

    def individuals(self) -> list[NamedIndividual]:
        return sorted(e for e in self.signature() if isinstance(e, NamedIndividual))

    def logical_axioms(self) -> list[Axiom]:
        return [a for a in self.axioms if not isinstance(a, Declaration)]

    def __len__(self) -> int:
        return len(self.axioms)

    def __repr__(self) -> str:
        return (
            f"Ontology({self.iri or '<anonymous>'}: "
            f"{len(self.classes())} classes, "
            f"{len(self.object_properties())} properties, "
            f"{len(self.individuals())} individuals, "
            f"{len(self.logical_axioms())} logical axioms)"
        )

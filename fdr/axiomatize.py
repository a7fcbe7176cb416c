"""Fixed-domain axiomatization: making the closed domain explicit in OWL.

A conventional open-world reasoner reproduces the fixed-domain answers for
an ontology once two axioms are added:

  DifferentIndividuals(e1 ... en)                unique names
  EquivalentClasses(owl:Thing ObjectOneOf(e1 ... en))
                                                 domain closure

fixed_domain_axioms() computes them from the Domain alone. axiomatize()
writes the ontology plus these axioms as RDF, keeping the statements of the
source graph when the ontology was loaded from a document.

The RDF writer here follows the OWL 2 mapping to RDF graphs for the
constructs the axiom model supports.
"""

from __future__ import annotations

import logging
from pathlib import Path

from rdflib import BNode, Graph, Literal, OWL, RDF, RDFS, URIRef, XSD
from rdflib.collection import Collection
from rdflib.util import guess_format

from .domain import Domain
from .errors import ConfigurationError
from .types import (
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
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Fixed-domain axioms
# ---------------------------------------------------------------------------

def fixed_domain_axioms(domain: Domain) -> list[Axiom]:
    """Unique-name and domain-closure axioms for ``domain``."""
    elements = tuple(domain)
    return [
        DifferentIndividuals(elements),
        EquivalentClasses((THING, ObjectOneOf(elements))),
    ]


def axiomatize(ontology: Ontology, domain: Domain, target: str | Path) -> Graph:
    """Write ``ontology`` plus its fixed-domain axioms to ``target``.

    The RDF syntax is chosen from the file suffix (RDF/XML when unknown).
    Returns the written graph.
    """
    graph = ontology_to_graph(ontology)
    for element in domain:
        graph.add((URIRef(element.iri), RDF.type, OWL.NamedIndividual))
    for axiom in fixed_domain_axioms(domain):
        add_axiom(graph, axiom)

    fmt = guess_format(str(target)) or "xml"
    try:
        graph.serialize(destination=str(target), format=fmt)
    except OSError as exc:
        raise ConfigurationError(f"cannot write axiomatization to {target} ({exc.strerror})") from exc
    logger.info("Wrote fixed-domain axiomatization (%d triples, %s) to %s", len(graph), fmt, target)
    return graph


# ---------------------------------------------------------------------------
# Axiom model → RDF
# ---------------------------------------------------------------------------

def ontology_to_graph(ontology: Ontology) -> Graph:
    """An RDF graph for ``ontology``: a copy of its source graph if it has one."""
    graph = Graph()
    graph.bind("owl", OWL)
    if ontology.graph is not None:
        for prefix, namespace in ontology.graph.namespaces():
            graph.bind(prefix, namespace, override=False)
        graph += ontology.graph
        return graph
    if ontology.iri:
        graph.add((URIRef(ontology.iri), RDF.type, OWL.Ontology))
    for axiom in ontology.axioms:
        add_axiom(graph, axiom)
    return graph


def _list(graph: Graph, items) -> BNode | URIRef:
    items = list(items)
    if not items:
        return RDF.nil
    node = BNode()
    Collection(graph, node, items)
    return node


def _count(n: int) -> Literal:
    return Literal(n, datatype=XSD.nonNegativeInteger)


def property_node(graph: Graph, prop: PropertyExpression):
    if isinstance(prop, ObjectInverseOf):
        node = BNode()
        graph.add((node, OWL.inverseOf, URIRef(prop.property.iri)))
        return node
    return URIRef(prop.iri)


def class_node(graph: Graph, expr: ClassExpression):
    """The RDF node for a class expression, adding its defining triples."""
    if isinstance(expr, OWLClass):
        return URIRef(expr.iri)

    node = BNode()
    match expr:
        case ObjectComplementOf(operand=operand):
            graph.add((node, RDF.type, OWL.Class))
            graph.add((node, OWL.complementOf, class_node(graph, operand)))
        case ObjectIntersectionOf(operands=operands):
            graph.add((node, RDF.type, OWL.Class))
            graph.add((node, OWL.intersectionOf, _list(graph, [class_node(graph, o) for o in operands])))
        case ObjectUnionOf(operands=operands):
            graph.add((node, RDF.type, OWL.Class))
            graph.add((node, OWL.unionOf, _list(graph, [class_node(graph, o) for o in operands])))
        case ObjectOneOf(individuals=individuals):
            graph.add((node, RDF.type, OWL.Class))
            graph.add((node, OWL.oneOf, _list(graph, [URIRef(i.iri) for i in individuals])))
        case ObjectSomeValuesFrom(property=prop, filler=filler):
            _restriction(graph, node, prop)
            graph.add((node, OWL.someValuesFrom, class_node(graph, filler)))
        case ObjectAllValuesFrom(property=prop, filler=filler):
            _restriction(graph, node, prop)
            graph.add((node, OWL.allValuesFrom, class_node(graph, filler)))
        case ObjectHasValue(property=prop, individual=ind):
            _restriction(graph, node, prop)
            graph.add((node, OWL.hasValue, URIRef(ind.iri)))
        case ObjectHasSelf(property=prop):
            _restriction(graph, node, prop)
            graph.add((node, OWL.hasSelf, Literal(True)))
        case ObjectMinCardinality(cardinality=k, property=prop, filler=filler):
            _cardinality(graph, node, prop, k, filler, OWL.minCardinality, OWL.minQualifiedCardinality)
        case ObjectMaxCardinality(cardinality=k, property=prop, filler=filler):
            _cardinality(graph, node, prop, k, filler, OWL.maxCardinality, OWL.maxQualifiedCardinality)
        case ObjectExactCardinality(cardinality=k, property=prop, filler=filler):
            _cardinality(graph, node, prop, k, filler, OWL.cardinality, OWL.qualifiedCardinality)
        case _:
            raise TypeError(f"Not a class expression: {expr!r}")
    return node


def _restriction(graph: Graph, node: BNode, prop: PropertyExpression) -> None:
    graph.add((node, RDF.type, OWL.Restriction))
    graph.add((node, OWL.onProperty, property_node(graph, prop)))


def _cardinality(graph, node, prop, k, filler, plain, qualified) -> None:
    _restriction(graph, node, prop)
    if filler == THING:
        graph.add((node, plain, _count(k)))
    else:
        graph.add((node, qualified, _count(k)))
        graph.add((node, OWL.onClass, class_node(graph, filler)))


_CHARACTERISTICS = {
    FunctionalObjectProperty: OWL.FunctionalProperty,
    InverseFunctionalObjectProperty: OWL.InverseFunctionalProperty,
    TransitiveObjectProperty: OWL.TransitiveProperty,
    SymmetricObjectProperty: OWL.SymmetricProperty,
    AsymmetricObjectProperty: OWL.AsymmetricProperty,
    ReflexiveObjectProperty: OWL.ReflexiveProperty,
    IrreflexiveObjectProperty: OWL.IrreflexiveProperty,
}

_DECLARED_TYPE = {
    OWLClass: OWL.Class,
    ObjectProperty: OWL.ObjectProperty,
    NamedIndividual: OWL.NamedIndividual,
}


def add_axiom(graph: Graph, axiom: Axiom) -> None:
    """Add the RDF triples for one axiom to ``graph``."""
    characteristic = _CHARACTERISTICS.get(type(axiom))
    if characteristic is not None:
        graph.add((property_node(graph, axiom.property), RDF.type, characteristic))
        return

    match axiom:
        case Declaration(entity=entity):
            graph.add((URIRef(entity.iri), RDF.type, _DECLARED_TYPE[type(entity)]))
        case ClassAssertion(expression=expr, individual=ind):
            graph.add((URIRef(ind.iri), RDF.type, class_node(graph, expr)))
        case ObjectPropertyAssertion(property=ObjectInverseOf(property=prop), subject=s, object=o):
            graph.add((URIRef(o.iri), URIRef(prop.iri), URIRef(s.iri)))
        case ObjectPropertyAssertion(property=prop, subject=s, object=o):
            graph.add((URIRef(s.iri), URIRef(prop.iri), URIRef(o.iri)))
        case NegativeObjectPropertyAssertion(property=prop, subject=s, object=o):
            node = BNode()
            graph.add((node, RDF.type, OWL.NegativePropertyAssertion))
            graph.add((node, OWL.sourceIndividual, URIRef(s.iri)))
            graph.add((node, OWL.assertionProperty, property_node(graph, prop)))
            graph.add((node, OWL.targetIndividual, URIRef(o.iri)))
        case SameIndividual(individuals=inds):
            for other in inds[1:]:
                graph.add((URIRef(inds[0].iri), OWL.sameAs, URIRef(other.iri)))
        case DifferentIndividuals(individuals=inds):
            node = BNode()
            graph.add((node, RDF.type, OWL.AllDifferent))
            graph.add((node, OWL.distinctMembers, _list(graph, [URIRef(i.iri) for i in inds])))
        case SubClassOf(sub=sub, sup=sup):
            graph.add((class_node(graph, sub), RDFS.subClassOf, class_node(graph, sup)))
        case EquivalentClasses(expressions=exprs):
            first = class_node(graph, exprs[0])
            for other in exprs[1:]:
                graph.add((first, OWL.equivalentClass, class_node(graph, other)))
        case DisjointClasses(expressions=exprs) if len(exprs) == 2:
            graph.add((class_node(graph, exprs[0]), OWL.disjointWith, class_node(graph, exprs[1])))
        case DisjointClasses(expressions=exprs):
            node = BNode()
            graph.add((node, RDF.type, OWL.AllDisjointClasses))
            graph.add((node, OWL.members, _list(graph, [class_node(graph, e) for e in exprs])))
        case DisjointUnion(owner=owner, expressions=exprs):
            graph.add((URIRef(owner.iri), OWL.disjointUnionOf,
                       _list(graph, [class_node(graph, e) for e in exprs])))
        case SubObjectPropertyOf(sub=sub, sup=sup):
            graph.add((property_node(graph, sub), RDFS.subPropertyOf, property_node(graph, sup)))
        case EquivalentObjectProperties(properties=props):
            first = property_node(graph, props[0])
            for other in props[1:]:
                graph.add((first, OWL.equivalentProperty, property_node(graph, other)))
        case DisjointObjectProperties(properties=props) if len(props) == 2:
            graph.add((property_node(graph, props[0]), OWL.propertyDisjointWith,
                       property_node(graph, props[1])))
        case DisjointObjectProperties(properties=props):
            node = BNode()
            graph.add((node, RDF.type, OWL.AllDisjointProperties))
            graph.add((node, OWL.members, _list(graph, [property_node(graph, p) for p in props])))
        case InverseObjectProperties(first=first, second=second):
            graph.add((property_node(graph, first), OWL.inverseOf, property_node(graph, second)))
        case ObjectPropertyDomain(property=prop, domain=cls):
            graph.add((property_node(graph, prop), RDFS.domain, class_node(graph, cls)))
        case ObjectPropertyRange(property=prop, range=cls):
            graph.add((property_node(graph, prop), RDFS.range, class_node(graph, cls)))
        case UnsupportedAxiom(description=description):
            logger.warning("Cannot write unsupported axiom: %s", description)
        case _:
            raise TypeError(f"Not an axiom: {axiom!r}")

"""OWL ontology loading with rdflib.

Reads OWL 2 ontologies serialized as RDF (RDF/XML, Turtle, N-Triples,
JSON-LD, anything rdflib parses) into the axiom model of types.py, following
the reverse OWL 2 RDF mapping for the supported constructs.

  load_ontology(locator)       file path or IRI → Ontology
  get_individuals(ontology)    its named individuals

Imports (owl:imports) are followed. Documents found by scanning directories
are indexed by their ontology IRI, so imports resolve to local files before
falling back to the network.

Constructs outside the supported fragment (data properties, anonymous
individuals, datatype restrictions) are kept as UnsupportedAxiom so that
translation fails loudly on them instead of dropping them. Annotations are
ignored.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from rdflib import BNode, Graph, Literal, OWL, RDF, RDFS, URIRef, XSD
from rdflib.collection import Collection
from rdflib.util import guess_format

from .errors import OntologyLoadError
from .types import (
    NOTHING,
    THING,
    OWL_NOTHING,
    OWL_THING,
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
    axiom_sort_key,
)

logger = logging.getLogger(__name__)


ONTOLOGY_SUFFIXES = (".owl", ".rdf", ".ttl", ".nt", ".n3", ".xml", ".jsonld", ".json-ld", ".trig")

_VOCABULARY = (str(OWL), str(RDF), str(RDFS), str(XSD))

_CHARACTERISTICS = {
    OWL.FunctionalProperty: FunctionalObjectProperty,
    OWL.InverseFunctionalProperty: InverseFunctionalObjectProperty,
    OWL.TransitiveProperty: TransitiveObjectProperty,
    OWL.SymmetricProperty: SymmetricObjectProperty,
    OWL.AsymmetricProperty: AsymmetricObjectProperty,
    OWL.ReflexiveProperty: ReflexiveObjectProperty,
    OWL.IrreflexiveProperty: IrreflexiveObjectProperty,
}

# Predicates that only occur inside structures read from their owner node.
_STRUCTURAL = {
    RDF.first, RDF.rest,
    OWL.onProperty, OWL.someValuesFrom, OWL.allValuesFrom, OWL.hasValue, OWL.hasSelf,
    OWL.minCardinality, OWL.maxCardinality, OWL.cardinality,
    OWL.minQualifiedCardinality, OWL.maxQualifiedCardinality, OWL.qualifiedCardinality,
    OWL.onClass, OWL.onDataRange, OWL.complementOf, OWL.intersectionOf, OWL.unionOf,
    OWL.oneOf, OWL.members, OWL.distinctMembers,
    OWL.sourceIndividual, OWL.assertionProperty, OWL.targetIndividual, OWL.targetValue,
}

_IGNORED = {
    OWL.imports, OWL.versionIRI, OWL.versionInfo, OWL.priorVersion,
    OWL.backwardCompatibleWith, OWL.incompatibleWith, OWL.deprecated,
    RDFS.label, RDFS.comment, RDFS.seeAlso, RDFS.isDefinedBy,
}


class UnsupportedExpression(Exception):
    """A class or property expression outside the object-property fragment."""


# ---------------------------------------------------------------------------
# Document discovery and parsing
# ---------------------------------------------------------------------------

def scan_directory(directory: str | Path) -> list[Path]:
    """Ontology documents below ``directory``, in path order."""
    root = Path(directory)
    return sorted(
        p for p in root.rglob("*")
        if p.is_file() and p.suffix.lower() in ONTOLOGY_SUFFIXES
    )


def _parse(graph: Graph, source: str) -> None:
    fmt = guess_format(source) or "xml"
    try:
        graph.parse(source, format=fmt)
    except Exception as exc:
        raise OntologyLoadError(source, str(exc) or type(exc).__name__) from exc


def _ontology_iri(graph: Graph) -> str:
    for subject in sorted(graph.subjects(RDF.type, OWL.Ontology), key=str):
        if isinstance(subject, URIRef):
            return str(subject)
    return ""


class OntologyLoader:
    """Loads ontologies, resolving imports against scanned directories."""

    def __init__(self, search_paths: Iterable[str | Path] = ()) -> None:
        self.documents: dict[str, Path] = {}
        for path in search_paths:
            self.register_directory(path)

    def register_directory(self, directory: str | Path) -> list[Path]:
        """Index the ontology documents below ``directory`` by ontology IRI."""
        found = scan_directory(directory)
        for path in found:
            graph = Graph()
            try:
                _parse(graph, str(path))
            except OntologyLoadError as exc:
                logger.warning("Skipping unreadable document: %s", exc)
                continue
            iri = _ontology_iri(graph)
            if iri:
                self.documents.setdefault(iri, path)
        logger.info("Indexed %d ontology document(s) in %s", len(self.documents), directory)
        return found

    def load(self, locator: str | Path) -> Ontology:
        """Parse the document at ``locator`` (and its imports) into an Ontology."""
        graph = Graph()
        root = str(locator)
        _parse(graph, root)
        iri = _ontology_iri(graph)
        self._follow_imports(graph, {root, iri})
        ontology = OntologyReader(graph, iri).read()
        logger.info("Loaded %r from %s", ontology, root)
        return ontology

    def _follow_imports(self, graph: Graph, seen: set[str]) -> None:
        pending = sorted((str(o) for o in graph.objects(None, OWL.imports)), reverse=True)
        while pending:
            iri = pending.pop()
            target = str(self.documents.get(iri, iri))
            if iri in seen or target in seen:
                continue
            seen.update((iri, target))
            logger.debug("Following import %s -> %s", iri, target)
            before = set(graph.objects(None, OWL.imports))
            _parse(graph, target)
            fresh = {str(o) for o in set(graph.objects(None, OWL.imports)) - before}
            pending.extend(sorted(fresh, reverse=True))


def load_ontology(locator: str | Path, search_paths: Iterable[str | Path] = ()) -> Ontology:
    return OntologyLoader(search_paths).load(locator)


def get_individuals(ontology: Ontology) -> frozenset[NamedIndividual]:
    return frozenset(ontology.individuals())


# ---------------------------------------------------------------------------
# RDF graph → axioms
# ---------------------------------------------------------------------------

class OntologyReader:
    """Reads the axioms of one merged RDF graph."""

    def __init__(self, graph: Graph, iri: str | None = None) -> None:
        self.graph = graph
        self.iri = _ontology_iri(graph) if iri is None else iri
        self.data_properties = {s for s in graph.subjects(RDF.type, OWL.DatatypeProperty)}
        self.annotation_properties = {s for s in graph.subjects(RDF.type, OWL.AnnotationProperty)}
        self.axioms: list[Axiom] = []

    def read(self) -> Ontology:
        for triple in self.graph:
            self._read_triple(*triple)
        ontology = Ontology(iri=self.iri, graph=self.graph)
        for axiom in sorted(self.axioms, key=axiom_sort_key):
            ontology.add(axiom)
        return ontology

    def _read_triple(self, s, p, o) -> None:
        if p in _STRUCTURAL or p in _IGNORED or p in self.annotation_properties:
            return
        try:
            axiom = self._axiom(s, p, o)
        except UnsupportedExpression as exc:
            axiom = UnsupportedAxiom(str(exc))
        if axiom is not None:
            self.axioms.append(axiom)

    def _axiom(self, s, p, o) -> Axiom | None:
        if p == RDF.type:
            return self._typing(s, o)
        if p == RDFS.subClassOf:
            return SubClassOf(self.class_expression(s), self.class_expression(o))
        if p == OWL.equivalentClass:
            return EquivalentClasses((self.class_expression(s), self.class_expression(o)))
        if p == OWL.disjointWith:
            return DisjointClasses((self.class_expression(s), self.class_expression(o)))
        if p == OWL.disjointUnionOf:
            return DisjointUnion(self._named_class(s), tuple(self.class_expression(x) for x in self._list(o)))
        if p == RDFS.subPropertyOf:
            return SubObjectPropertyOf(self.property_expression(s), self.property_expression(o))
        if p == OWL.equivalentProperty:
            return EquivalentObjectProperties((self.property_expression(s), self.property_expression(o)))
        if p == OWL.propertyDisjointWith:
            return DisjointObjectProperties((self.property_expression(s), self.property_expression(o)))
        if p == OWL.inverseOf:
            if isinstance(s, BNode):
                return None  # an inverse property expression, read where it is used
            return InverseObjectProperties(self.property_expression(s), self.property_expression(o))
        if p == RDFS.domain:
            if s in self.annotation_properties:
                return None
            return ObjectPropertyDomain(self.property_expression(s), self.class_expression(o))
        if p == RDFS.range:
            if s in self.annotation_properties:
                return None
            return ObjectPropertyRange(self.property_expression(s), self.class_expression(o))
        if p == OWL.sameAs:
            return SameIndividual((self.individual(s), self.individual(o)))
        if p == OWL.differentFrom:
            return DifferentIndividuals((self.individual(s), self.individual(o)))
        if isinstance(o, Literal):
            if p in self.data_properties:
                raise UnsupportedExpression(f"data property assertion {p}")
            return None  # annotation
        if str(p).startswith(str(OWL)):
            raise UnsupportedExpression(f"{p} axiom")
        if str(p).startswith(_VOCABULARY):
            logger.debug("Ignoring vocabulary triple %s %s %s", s, p, o)
            return None
        return ObjectPropertyAssertion(self.property_expression(p), self.individual(s), self.individual(o))

    def _typing(self, s, o) -> Axiom | None:
        if o in _CHARACTERISTICS:
            return _CHARACTERISTICS[o](self.property_expression(s))
        if o == OWL.Class and isinstance(s, URIRef):
            return Declaration(self._named_class(s))
        if o == OWL.ObjectProperty and isinstance(s, URIRef):
            return Declaration(ObjectProperty(str(s)))
        if o in (OWL.NamedIndividual, OWL.Thing) and isinstance(s, URIRef):
            return Declaration(NamedIndividual(str(s)))
        if o == OWL.DatatypeProperty:
            raise UnsupportedExpression(f"data property {s}")
        if o == OWL.AllDifferent:
            members = self.graph.value(s, OWL.distinctMembers) or self.graph.value(s, OWL.members)
            return DifferentIndividuals(tuple(self.individual(x) for x in self._list(members)))
        if o == OWL.AllDisjointClasses:
            members = self.graph.value(s, OWL.members)
            return DisjointClasses(tuple(self.class_expression(x) for x in self._list(members)))
        if o == OWL.AllDisjointProperties:
            members = self.graph.value(s, OWL.members)
            return DisjointObjectProperties(tuple(self.property_expression(x) for x in self._list(members)))
        if o == OWL.NegativePropertyAssertion:
            if self.graph.value(s, OWL.targetValue) is not None:
                raise UnsupportedExpression("negative data property assertion")
            return NegativeObjectPropertyAssertion(
                self.property_expression(self.graph.value(s, OWL.assertionProperty)),
                self.individual(self.graph.value(s, OWL.sourceIndividual)),
                self.individual(self.graph.value(s, OWL.targetIndividual)),
            )
        if o == OWL.Nothing:
            return ClassAssertion(NOTHING, self.individual(s))
        if isinstance(o, URIRef) and str(o).startswith(_VOCABULARY):
            return None  # owl:Restriction, owl:Ontology, rdfs:Class, ...
        return ClassAssertion(self.class_expression(o), self.individual(s))

    # -----------------------------------------------------------------------
    # Expressions
    # -----------------------------------------------------------------------

    def _list(self, node) -> list:
        if node is None:
            raise UnsupportedExpression("missing RDF list")
        return list(Collection(self.graph, node))

    @staticmethod
    def _cardinality(node) -> int:
        try:
            number = int(str(node))
        except ValueError:
            raise UnsupportedExpression(f"cardinality {node} is not an integer") from None
        if number < 0:
            raise UnsupportedExpression(f"negative cardinality {number}")
        return number

    def _named_class(self, node) -> OWLClass:
        if not isinstance(node, URIRef):
            raise UnsupportedExpression(f"expected a named class, got {node}")
        iri = str(node)
        if iri == OWL_THING:
            return THING
        if iri == OWL_NOTHING:
            return NOTHING
        return OWLClass(iri)

    def individual(self, node) -> NamedIndividual:
        if not isinstance(node, URIRef):
            raise UnsupportedExpression(f"anonymous individual {node}")
        return NamedIndividual(str(node))

    def property_expression(self, node) -> PropertyExpression:
        if isinstance(node, URIRef):
            if node in self.data_properties:
                raise UnsupportedExpression(f"data property {node}")
            return ObjectProperty(str(node))
        inverse = self.graph.value(node, OWL.inverseOf)
        if isinstance(inverse, URIRef):
            return ObjectInverseOf(ObjectProperty(str(inverse)))
        raise UnsupportedExpression(f"property expression {node}")

    def class_expression(self, node) -> ClassExpression:
        if isinstance(node, URIRef):
            return self._named_class(node)
        if node is None or isinstance(node, Literal):
            raise UnsupportedExpression(f"class expression {node}")

        g = self.graph
        if (operand := g.value(node, OWL.complementOf)) is not None:
            return ObjectComplementOf(self.class_expression(operand))
        if (items := g.value(node, OWL.intersectionOf)) is not None:
            return ObjectIntersectionOf(tuple(self.class_expression(x) for x in self._list(items)))
        if (items := g.value(node, OWL.unionOf)) is not None:
            return ObjectUnionOf(tuple(self.class_expression(x) for x in self._list(items)))
        if (items := g.value(node, OWL.oneOf)) is not None:
            return ObjectOneOf(tuple(self.individual(x) for x in self._list(items)))

        prop_node = g.value(node, OWL.onProperty)
        if prop_node is None:
            raise UnsupportedExpression(f"class expression {node}")
        if g.value(node, OWL.onDataRange) is not None:
            raise UnsupportedExpression(f"data range restriction on {prop_node}")
        prop = self.property_expression(prop_node)
        on_class = g.value(node, OWL.onClass)
        filler = self.class_expression(on_class) if on_class is not None else THING

        if (value := g.value(node, OWL.someValuesFrom)) is not None:
            return ObjectSomeValuesFrom(prop, self.class_expression(value))
        if (value := g.value(node, OWL.allValuesFrom)) is not None:
            return ObjectAllValuesFrom(prop, self.class_expression(value))
        if (value := g.value(node, OWL.hasValue)) is not None:
            return ObjectHasValue(prop, self.individual(value))
        if g.value(node, OWL.hasSelf) is not None:
            return ObjectHasSelf(prop)
        for predicate, kind in (
            (OWL.minCardinality, ObjectMinCardinality),
            (OWL.minQualifiedCardinality, ObjectMinCardinality),
            (OWL.maxCardinality, ObjectMaxCardinality),
            (OWL.maxQualifiedCardinality, ObjectMaxCardinality),
            (OWL.cardinality, ObjectExactCardinality),
            (OWL.qualifiedCardinality, ObjectExactCardinality),
        ):
            if (value := g.value(node, predicate)) is not None:
                return kind(self._cardinality(value), prop, filler)
        raise UnsupportedExpression(f"restriction {node} on {prop_node}")

"""SHACL Bridge: checking decoded models against SHACL shapes.

Complements the answer-set encoding with an independent check:
  - the ASP program decides which interpretations over the domain are models
  - SHACL validates one decoded model (as an RDF graph) against shapes
    derived from the same ontology

This bridge translates:
  1. The fixed domain → a closure shape: every owl:NamedIndividual must be
     one of the domain elements (sh:in)
  2. Class expressions → node constraints:
       named class          → sh:class
       complement           → sh:not
       intersection / union → sh:and / sh:or
       nominal              → sh:in
       ∃R.D                 → qualifiedValueShape + qualifiedMinCount 1
       ∀R.D                 → property shape with sh:node
       ≥k / ≤k / =k R       → sh:minCount / sh:maxCount (qualified if D ≠ ⊤)
       R value a            → sh:hasValue
  3. Axioms → shapes with targets:
       C ⊑ D, C ≡ D, disjointness     → sh:targetClass C
       C(a), R(a,b), ¬R(a,b)          → sh:targetNode a
       functional / domain            → sh:targetSubjectsOf R
       inverse-functional / range     → sh:targetObjectsOf R
  4. DecodedModel → RDF data graph for validation

Axioms with no SHACL counterpart (transitivity, self restrictions, property
inclusions, ...) are documented as rdfs:comment annotations in the shapes
graph to show where the SHACL check stops.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from itertools import count

from rdflib import BNode, Graph, Literal, Namespace, OWL, RDF, RDFS, URIRef
from rdflib.collection import Collection
from rdflib.namespace import SH

from .domain import Domain
from .models import DecodedModel
from .types import (
    ClassAssertion,
    ClassExpression,
    DisjointClasses,
    DisjointUnion,
    EquivalentClasses,
    FunctionalObjectProperty,
    InverseFunctionalObjectProperty,
    NegativeObjectPropertyAssertion,
    ObjectAllValuesFrom,
    ObjectComplementOf,
    ObjectExactCardinality,
    ObjectHasValue,
    ObjectIntersectionOf,
    ObjectInverseOf,
    ObjectMaxCardinality,
    ObjectMinCardinality,
    ObjectOneOf,
    ObjectPropertyAssertion,
    ObjectPropertyDomain,
    ObjectPropertyRange,
    ObjectSomeValuesFrom,
    ObjectUnionOf,
    Ontology,
    OWLClass,
    PropertyExpression,
    SubClassOf,
)


# ---------------------------------------------------------------------------
# Namespace for generated shapes
# ---------------------------------------------------------------------------

FDR = Namespace("urn:fixed-domain:shapes#")


# ---------------------------------------------------------------------------
# Class expressions → SHACL constraints
# ---------------------------------------------------------------------------

def _list(sg: Graph, items) -> BNode | URIRef:
    items = list(items)
    if not items:
        return RDF.nil
    node = BNode()
    Collection(sg, node, items)
    return node


def _path(sg: Graph, prop: PropertyExpression):
    if isinstance(prop, ObjectInverseOf):
        path = BNode()
        sg.add((path, SH.inversePath, URIRef(prop.property.iri)))
        return path
    return URIRef(prop.iri)


def _shape_for(sg: Graph, expr: ClassExpression) -> BNode | None:
    """A fresh node shape for ``expr``, or None when SHACL cannot express it."""
    scratch = Graph()
    shape = BNode()
    if not _constrain(scratch, shape, expr):
        return None
    sg += scratch
    return shape


def _counted(sg: Graph, shape, prop, filler, low: int | None, high: int | None) -> bool:
    prop_shape = BNode()
    sg.add((shape, SH.property, prop_shape))
    sg.add((prop_shape, SH.path, _path(sg, prop)))
    if isinstance(filler, OWLClass) and filler.is_thing:
        if low:
            sg.add((prop_shape, SH.minCount, Literal(low)))
        if high is not None:
            sg.add((prop_shape, SH.maxCount, Literal(high)))
        return True
    value_shape = _shape_for(sg, filler)
    if value_shape is None:
        return False
    sg.add((prop_shape, SH.qualifiedValueShape, value_shape))
    if low:
        sg.add((prop_shape, SH.qualifiedMinCount, Literal(low)))
    if high is not None:
        sg.add((prop_shape, SH.qualifiedMaxCount, Literal(high)))
    return True


def _constrain(sg: Graph, shape, expr: ClassExpression) -> bool:
    """Add constraints on ``shape`` requiring focus nodes to be in ``expr``."""
    match expr:
        case OWLClass() if expr.is_thing:
            return True
        case OWLClass() if expr.is_nothing:
            sg.add((shape, SH["in"], RDF.nil))
            return True
        case OWLClass():
            sg.add((shape, SH["class"], URIRef(expr.iri)))
            return True
        case ObjectComplementOf(operand=operand):
            inner = _shape_for(sg, operand)
            if inner is None:
                return False
            sg.add((shape, SH["not"], inner))
            return True
        case ObjectIntersectionOf(operands=operands) | ObjectUnionOf(operands=operands):
            shapes = [_shape_for(sg, op) for op in operands]
            if any(s is None for s in shapes):
                return False
            keyword = SH["and"] if isinstance(expr, ObjectIntersectionOf) else SH["or"]
            sg.add((shape, keyword, _list(sg, shapes)))
            return True
        case ObjectOneOf(individuals=individuals):
            sg.add((shape, SH["in"], _list(sg, [URIRef(i.iri) for i in individuals])))
            return True
        case ObjectSomeValuesFrom(property=prop, filler=filler):
            return _counted(sg, shape, prop, filler, 1, None)
        case ObjectAllValuesFrom(property=prop, filler=filler):
            value_shape = _shape_for(sg, filler)
            if value_shape is None:
                return False
            prop_shape = BNode()
            sg.add((shape, SH.property, prop_shape))
            sg.add((prop_shape, SH.path, _path(sg, prop)))
            sg.add((prop_shape, SH.node, value_shape))
            return True
        case ObjectHasValue(property=prop, individual=ind):
            prop_shape = BNode()
            sg.add((shape, SH.property, prop_shape))
            sg.add((prop_shape, SH.path, _path(sg, prop)))
            sg.add((prop_shape, SH.hasValue, URIRef(ind.iri)))
            return True
        case ObjectMinCardinality(cardinality=k, property=prop, filler=filler):
            return _counted(sg, shape, prop, filler, k, None)
        case ObjectMaxCardinality(cardinality=k, property=prop, filler=filler):
            return _counted(sg, shape, prop, filler, None, k)
        case ObjectExactCardinality(cardinality=k, property=prop, filler=filler):
            return _counted(sg, shape, prop, filler, k, k)
    return False


# ---------------------------------------------------------------------------
# Ontology → SHACL Shapes
# ---------------------------------------------------------------------------

def ontology_to_shacl(ontology: Ontology, domain: Domain) -> Graph:
    """Translate the SHACL-expressible part of an ontology into shapes.

    Each translatable axiom becomes one sh:NodeShape; the rest are listed
    as rdfs:comment annotations on ``fdr:OntologyShapes``.
    """
    sg = Graph()
    sg.bind("sh", SH)
    sg.bind("fdr", FDR)
    sg.bind("owl", OWL)

    closure = FDR.DomainClosureShape
    sg.add((closure, RDF.type, SH.NodeShape))
    sg.add((closure, SH.targetClass, OWL.NamedIndividual))
    sg.add((closure, SH["in"], _list(sg, [URIRef(e.iri) for e in domain])))
    sg.add((closure, RDFS.label, Literal(f"Fixed domain of {domain.size} element(s)")))

    numbers = count(1)

    def new_shape(axiom) -> URIRef:
        shape = FDR[f"AxiomShape{next(numbers)}"]
        sg.add((shape, RDF.type, SH.NodeShape))
        sg.add((shape, RDFS.label, Literal(str(axiom))))
        return shape

    def target_class(shape, cls: ClassExpression) -> bool:
        if not isinstance(cls, OWLClass) or cls.is_nothing:
            return False
        sg.add((shape, SH.targetClass, OWL.NamedIndividual if cls.is_thing else URIRef(cls.iri)))
        return True

    def subsumption(axiom, sub, sup) -> bool:
        if not isinstance(sub, OWLClass) or sub.is_nothing:
            return False
        value_shape = _shape_for(sg, sup)
        if value_shape is None:
            return False
        shape = new_shape(axiom)
        target_class(shape, sub)
        sg.add((shape, SH.node, value_shape))
        return True

    for axiom in ontology.logical_axioms():
        handled = False
        match axiom:
            case SubClassOf(sub=sub, sup=sup):
                handled = subsumption(axiom, sub, sup)
            case EquivalentClasses(expressions=exprs):
                handled = any(isinstance(a, OWLClass) for a in exprs) and all(
                    subsumption(axiom, a, b)
                    for a in exprs for b in exprs
                    if a != b and isinstance(a, OWLClass)
                )
            case DisjointClasses(expressions=exprs) | DisjointUnion(expressions=exprs):
                handled = True
                for a in exprs:
                    for b in exprs:
                        if a != b and isinstance(a, OWLClass):
                            handled &= subsumption(axiom, a, ObjectComplementOf(b))
                if isinstance(axiom, DisjointUnion):
                    handled &= subsumption(axiom, axiom.owner, ObjectUnionOf(tuple(exprs)))
            case ClassAssertion(expression=expr, individual=ind):
                value_shape = _shape_for(sg, expr)
                if value_shape is not None:
                    shape = new_shape(axiom)
                    sg.add((shape, SH.targetNode, URIRef(ind.iri)))
                    sg.add((shape, SH.node, value_shape))
                    handled = True
            case ObjectPropertyAssertion(property=prop, subject=s, object=o):
                shape = new_shape(axiom)
                sg.add((shape, SH.targetNode, URIRef(s.iri)))
                _constrain(sg, shape, ObjectHasValue(prop, o))
                handled = True
            case NegativeObjectPropertyAssertion(property=prop, subject=s, object=o):
                shape = new_shape(axiom)
                sg.add((shape, SH.targetNode, URIRef(s.iri)))
                _constrain(sg, shape, ObjectComplementOf(ObjectHasValue(prop, o)))
                handled = True
            case FunctionalObjectProperty(property=prop) | InverseFunctionalObjectProperty(property=prop):
                target = SH.targetSubjectsOf if isinstance(axiom, FunctionalObjectProperty) else SH.targetObjectsOf
                if not isinstance(prop, ObjectInverseOf):
                    shape = new_shape(axiom)
                    sg.add((shape, target, URIRef(prop.iri)))
                    path = prop if target == SH.targetSubjectsOf else ObjectInverseOf(prop)
                    _constrain(sg, shape, ObjectMaxCardinality(1, path))
                    handled = True
            case ObjectPropertyDomain(property=prop, domain=cls) | ObjectPropertyRange(property=prop, range=cls):
                target = SH.targetSubjectsOf if isinstance(axiom, ObjectPropertyDomain) else SH.targetObjectsOf
                value_shape = _shape_for(sg, cls)
                if value_shape is not None and not isinstance(prop, ObjectInverseOf):
                    shape = new_shape(axiom)
                    sg.add((shape, target, URIRef(prop.iri)))
                    sg.add((shape, SH.node, value_shape))
                    handled = True

        if not handled:
            sg.add((FDR.OntologyShapes, RDFS.comment, Literal(f"[no SHACL equivalent] {axiom}")))

    return sg


# ---------------------------------------------------------------------------
# DecodedModel → RDF Data Graph
# ---------------------------------------------------------------------------

def model_to_rdf(model: DecodedModel) -> Graph:
    """Translate a decoded model into an RDF data graph.

    Every domain element is typed owl:NamedIndividual plus its classes;
    property tuples become object property triples. Absent types are
    simply absent: the model is closed over the domain, so SHACL's
    sh:class failing on a missing type is the intended reading.
    """
    dg = Graph()
    dg.bind("owl", OWL)
    for element in model.elements:
        uri = URIRef(element.iri)
        dg.add((uri, RDF.type, OWL.NamedIndividual))
        for cls in model.types.get(element, []):
            dg.add((uri, RDF.type, URIRef(cls.iri)))
    for prop, subject, obj in model.relations:
        dg.add((URIRef(subject.iri), URIRef(prop.iri), URIRef(obj.iri)))
    return dg


# ---------------------------------------------------------------------------
# SHACL Validation
# ---------------------------------------------------------------------------

def shacl_validate(
    ontology: Ontology,
    domain: Domain,
    model: DecodedModel,
) -> SHACLValidationResult:
    """Run SHACL validation: ontology → shapes, model → data, then validate.

    Returns a structured result with conformance status and violation details.
    """
    from pyshacl import validate as pyshacl_validate

    shapes_graph = ontology_to_shacl(ontology, domain)
    data_graph = model_to_rdf(model)

    conforms, results_graph, results_text = pyshacl_validate(
        data_graph,
        shacl_graph=shapes_graph,
        inference="none",
        abort_on_first=False,
    )

    violations = []
    for result in results_graph.subjects(RDF.type, SH.ValidationResult):
        focus = results_graph.value(result, SH.focusNode)
        shape = results_graph.value(result, SH.sourceShape)
        message = results_graph.value(result, SH.resultMessage)
        severity = results_graph.value(result, SH.resultSeverity)
        label = shapes_graph.value(shape, RDFS.label) if shape is not None else None

        violations.append(SHACLViolation(
            focus_node=str(focus) if focus else "",
            shape=str(label or shape or ""),
            message=str(message) if message else "",
            severity=str(severity) if severity else "",
        ))

    return SHACLValidationResult(
        conforms=conforms,
        violations=violations,
        results_text=results_text,
        shapes_graph=shapes_graph,
        data_graph=data_graph,
    )


# ---------------------------------------------------------------------------
# Result types
# ---------------------------------------------------------------------------

def _short(iri: str) -> str:
    for sep in ("#", "/"):
        if sep in iri:
            iri = iri.rsplit(sep, 1)[-1]
    return iri


@dataclass
class SHACLViolation:
    """A single SHACL validation violation."""
    focus_node: str
    shape: str
    message: str
    severity: str

    def __repr__(self) -> str:
        return f"SHACLViolation({_short(self.focus_node)}: {self.message})"


@dataclass
class SHACLValidationResult:
    """Result of checking one model through the ontology→SHACL bridge."""
    conforms: bool
    violations: list[SHACLViolation] = field(default_factory=list)
    results_text: str = ""
    shapes_graph: Graph | None = None
    data_graph: Graph | None = None

    def summary(self) -> str:
        lines = []
        status = "CONFORMS" if self.conforms else "DOES NOT CONFORM"
        lines.append(f"SHACL Validation: {status}")
        lines.append("-" * 50)
        if self.violations:
            lines.append(f"  Violations ({len(self.violations)}):")
            for v in self.violations:
                lines.append(f"    - {_short(v.focus_node)} [{v.shape}]: {v.message}")
        else:
            lines.append("  No violations found.")
        return "\n".join(lines)

    def shapes_as_turtle(self) -> str:
        """Serialize the SHACL shapes graph as Turtle for inspection."""
        if self.shapes_graph is None:
            return ""
        return self.shapes_graph.serialize(format="turtle")

    def data_as_turtle(self) -> str:
        """Serialize the RDF data graph as Turtle for inspection."""
        if self.data_graph is None:
            return ""
        return self.data_graph.serialize(format="turtle")

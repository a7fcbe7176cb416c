"""Graph 3-Colouring: ontology definitions.

A tiny but demanding fixed-domain scenario: colour the vertices of a graph
with three colours so that adjacent vertices differ.

  Red, Green, Blue        pairwise disjoint colour classes
  owl:Thing ⊑ Red ⊔ Green ⊔ Blue
                          every domain element gets a colour
  X ⊑ ∀edge.¬X            for each colour X: neighbours differ
  edge(u,v) / ¬edge(u,v)  the graph, fully specified over the domain
  Red(a)                  breaks the colour symmetry at one vertex

Under open-world semantics nothing forces the colourings to be enumerable;
over the fixed domain {a, b, c, d} every model is exactly one colouring.

Two graphs are provided:
- TRIANGLE_WITH_PENDANT: a-b-c triangle plus c-d, exactly 4 colourings
- K4: the complete graph on four vertices, no colouring at all
"""

import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "../.."))

from fdr.types import (
    THING,
    ClassAssertion,
    DisjointClasses,
    NegativeObjectPropertyAssertion,
    ObjectAllValuesFrom,
    ObjectComplementOf,
    ObjectPropertyAssertion,
    ObjectUnionOf,
    Ontology,
    SubClassOf,
)


EX = "http://example.org/coloring#"

VERTICES = ("a", "b", "c", "d")
COLOURS = ("Red", "Green", "Blue")

TRIANGLE_WITH_PENDANT = (("a", "b"), ("b", "c"), ("a", "c"), ("c", "d"))
K4 = (("a", "b"), ("a", "c"), ("a", "d"), ("b", "c"), ("b", "d"), ("c", "d"))


def build_ontology(edges=TRIANGLE_WITH_PENDANT, fixed=(("a", "Red"),)) -> Ontology:
    """Build the colouring ontology for a directed edge list over VERTICES.

    Every ordered pair that is not an edge gets a negative property
    assertion, so the graph itself is not guessed by the reasoner.
    """
    onto = Ontology(iri="http://example.org/coloring")

    colours = {name: onto.add_class(EX + name) for name in COLOURS}
    edge = onto.add_object_property(EX + "edge")
    vertices = {name: onto.add_individual(EX + name) for name in VERTICES}

    onto.add(DisjointClasses(tuple(colours.values())))
    onto.add(SubClassOf(THING, ObjectUnionOf(tuple(colours.values()))))
    for colour in colours.values():
        onto.add(SubClassOf(colour, ObjectAllValuesFrom(edge, ObjectComplementOf(colour))))

    edge_set = set(edges)
    for u in VERTICES:
        for v in VERTICES:
            if (u, v) in edge_set:
                onto.add(ObjectPropertyAssertion(edge, vertices[u], vertices[v]))
            else:
                onto.add(NegativeObjectPropertyAssertion(edge, vertices[u], vertices[v]))

    for vertex, colour in fixed:
        onto.add(ClassAssertion(colours[colour], vertices[vertex]))
    return onto


def domain_individuals(onto: Ontology):
    """The literal fixed domain {a, b, c, d}."""
    return [i for i in onto.individuals() if i.iri[len(EX):] in VERTICES]

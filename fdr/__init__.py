"""Fixed-Domain Reasoner: OWL reasoning under fixed-domain semantics via ASP.

Fixed-domain semantics interprets an ontology over one finite, explicitly
named set of elements. This package compiles ontologies into answer-set
programs over that domain and answers queries with clingo:

- Signature mapping: ontology entities ↔ program symbols (signature)
- Domain resolution: the finite domain of discourse (domain)
- Translation: axioms → rules, with naive, direct and provenance-tagged
  strategies (translation, direct)
- Reasoning: consistency, entailment, justifications (reasoner)
- Models: lazy, blocking-clause enumeration and decoding (models)
- Axiomatization: domain closure and unique names as OWL axioms (axiomatize)

The reasoner cleanly separates the program from the queries on it:

  Reasoner.translate()          the program, as printed by ``fdr -T``
  Reasoner.is_consistent()      an answer set exists
  Reasoner.is_entailed(Q)       no answer set violates any axiom of Q
  Reasoner.justification()      minimal inconsistent subset of axioms
  Reasoner.iter_models(n)       decoded models, n = 0 for all

Ontologies are read from RDF with rdflib (owl_loader); decoded models can be
checked against SHACL shapes derived from the ontology via pySHACL
(shacl_bridge).
"""

__version__ = "0.1.0"

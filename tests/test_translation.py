"""Tests for the ontology → answer-set program translation.

These only inspect the rendered programs; nothing here calls the solver.
"""

import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from fdr.config import Strategy
from fdr.domain import resolve_domain
from fdr.errors import DomainError, UnsupportedConstructError
from fdr.reasoner import Reasoner
from fdr.signature import DefaultSignatureMapper
from fdr.solver import Solver
from fdr.translation import TranslationContext, make_translator
from fdr.types import (
    ClassAssertion,
    DisjointClasses,
    NamedIndividual,
    ObjectComplementOf,
    ObjectHasValue,
    ObjectIntersectionOf,
    ObjectMinCardinality,
    ObjectSomeValuesFrom,
    Ontology,
    SubClassOf,
    UnsupportedAxiom,
)


EX = "http://example.org/test#"


def _people() -> Ontology:
    """Person/Agent/Robot over two individuals, alice and bob."""
    onto = Ontology(EX.rstrip("#"))
    person = onto.add_class(EX + "Person")
    agent = onto.add_class(EX + "Agent")
    robot = onto.add_class(EX + "Robot")
    onto.add_object_property(EX + "knows")
    alice = onto.add_individual(EX + "alice")
    bob = onto.add_individual(EX + "bob")
    onto.add(ClassAssertion(person, alice))
    onto.add(ClassAssertion(ObjectComplementOf(person), bob))
    onto.add(SubClassOf(person, agent))
    onto.add(DisjointClasses((person, robot)))
    return onto


def _translate(onto: Ontology, strategy: Strategy):
    context = TranslationContext(resolve_domain(onto), DefaultSignatureMapper(), strategy)
    translator = make_translator(context)
    translator.translate(onto)
    return translator


def _lines(onto: Ontology, strategy: Strategy) -> list[str]:
    return _translate(onto, strategy).program.render().splitlines()


class _RecordingSolver(Solver):
    """Counts solver calls; never actually solves."""

    def __init__(self):
        self.calls = 0

    def session(self, program):
        self.calls += 1
        raise AssertionError("the solver must not be reached")


# ---------------------------------------------------------------------------
# Naive strategy
# ---------------------------------------------------------------------------

class TestNaiveTranslation:
    def test_domain_facts(self):
        lines = _lines(_people(), Strategy.NAIVE)
        assert "top(alice)." in lines
        assert "top(bob)." in lines
        assert "#defined bot/1." in lines

    def test_totality_is_ground(self):
        lines = _lines(_people(), Strategy.NAIVE)
        assert "person(alice) | -person(alice)." in lines
        assert "knows(alice,bob) | -knows(alice,bob)." in lines
        assert "knows(bob,bob) | -knows(bob,bob)." in lines

    def test_assertions(self):
        lines = _lines(_people(), Strategy.NAIVE)
        assert "person(alice)." in lines
        assert "-person(bob)." in lines

    def test_subclass_is_one_rule_per_element(self):
        lines = _lines(_people(), Strategy.NAIVE)
        assert "agent(alice) :- person(alice)." in lines
        assert "agent(bob) :- person(bob)." in lines

    def test_disjointness_is_a_constraint(self):
        lines = _lines(_people(), Strategy.NAIVE)
        assert ":- person(alice), robot(alice)." in lines
        assert ":- person(bob), robot(bob)." in lines

    def test_existential_uses_auxiliary(self):
        onto = _people()
        person, knows = onto.classes()[1], onto.object_properties()[0]
        onto.add(SubClassOf(person, ObjectSomeValuesFrom(knows, person)))
        lines = _lines(onto, Strategy.NAIVE)
        assert "aux_1(alice) :- knows(alice,bob), person(bob)." in lines
        assert ":- person(alice), not aux_1(alice)." in lines
        assert lines.index("aux_1(alice) :- knows(alice,alice), person(alice).") < lines.index(
            ":- person(alice), not aux_1(alice)."
        )

    def test_has_value_outside_domain_is_rejected(self):
        onto = _people()
        person, knows = onto.classes()[1], onto.object_properties()[0]
        onto.add(SubClassOf(person, ObjectHasValue(knows, NamedIndividual(EX + "carol"))))
        context = TranslationContext(
            resolve_domain(onto, explicit=[NamedIndividual(EX + "alice"), NamedIndividual(EX + "bob")]),
            DefaultSignatureMapper(),
        )
        with pytest.raises(DomainError, match="carol"):
            make_translator(context).translate(onto)


class TestAuxiliaryNaming:
    def _nested(self) -> Ontology:
        onto = Ontology()
        a = onto.add_class(EX + "A")
        b = onto.add_class(EX + "B")
        c = onto.add_class(EX + "C")
        r = onto.add_object_property(EX + "r")
        s = onto.add_object_property(EX + "s")
        ind = onto.add_individual(EX + "ind")
        inner = ObjectIntersectionOf((b, ObjectSomeValuesFrom(s, c)))
        onto.add(SubClassOf(a, ObjectSomeValuesFrom(r, inner)))
        onto.add(ClassAssertion(a, ind))
        return onto

    def test_names_in_preorder(self):
        lines = _lines(self._nested(), Strategy.NAIVE)
        assert "aux_1(ind) :- r(ind,ind), aux_2(ind)." in lines
        assert "aux_2(ind) :- b(ind), aux_3(ind)." in lines
        assert "aux_3(ind) :- s(ind,ind), c(ind)." in lines

    def test_operands_defined_first(self):
        lines = _lines(self._nested(), Strategy.NAIVE)
        first = lines.index("aux_3(ind) :- s(ind,ind), c(ind).")
        second = lines.index("aux_2(ind) :- b(ind), aux_3(ind).")
        third = lines.index("aux_1(ind) :- r(ind,ind), aux_2(ind).")
        assert first < second < third

    def test_shared_subexpression_defined_once(self):
        onto = self._nested()
        r = onto.object_properties()[0]
        c = onto.classes()[2]
        onto.add(SubClassOf(c, ObjectSomeValuesFrom(r, onto.axioms[-2].sup.filler)))
        lines = _lines(onto, Strategy.NAIVE)
        assert sum(1 for line in lines if line.startswith("aux_2(ind) :-")) == 1
        assert not any(line.startswith("aux_4(") for line in lines)

    def test_deterministic(self):
        assert _lines(self._nested(), Strategy.NAIVE) == _lines(self._nested(), Strategy.NAIVE)
        assert _lines(_people(), Strategy.DIRECT) == _lines(_people(), Strategy.DIRECT)


# ---------------------------------------------------------------------------
# Direct strategy
# ---------------------------------------------------------------------------

class TestDirectTranslation:
    def test_totality_uses_variables(self):
        lines = _lines(_people(), Strategy.DIRECT)
        assert "person(X) | -person(X) :- top(X)." in lines
        assert "knows(X,Y) | -knows(X,Y) :- top(X), top(Y)." in lines

    def test_subclass_rule(self):
        lines = _lines(_people(), Strategy.DIRECT)
        assert "agent(X) :- person(X)." in lines
        assert ":- person(X), robot(X)." in lines

    def test_assertions_stay_ground(self):
        lines = _lines(_people(), Strategy.DIRECT)
        assert "person(alice)." in lines
        assert "-person(bob)." in lines

    def test_min_cardinality_becomes_choice(self):
        onto = _people()
        person, knows = onto.classes()[1], onto.object_properties()[0]
        onto.add(SubClassOf(person, ObjectMinCardinality(2, knows, person)))
        lines = _lines(onto, Strategy.DIRECT)
        assert "2 { knows(X,Y) : top(Y), person(Y) } :- person(X)." in lines

    def test_intersection_body_is_inlined(self):
        onto = _people()
        agent, person, robot = onto.classes()
        onto.add(SubClassOf(ObjectIntersectionOf((person, ObjectComplementOf(robot))), agent))
        lines = _lines(onto, Strategy.DIRECT)
        assert "agent(X) :- person(X), -robot(X)." in lines
        assert not any(line.startswith("aux_") for line in lines)


# ---------------------------------------------------------------------------
# Debug (naff) strategy
# ---------------------------------------------------------------------------

class TestDebugTranslation:
    def _simple(self) -> Ontology:
        onto = Ontology()
        person = onto.add_class(EX + "Person")
        knows = onto.add_object_property(EX + "knows")
        alice = onto.add_individual(EX + "alice")
        onto.add(ClassAssertion(person, alice))
        onto.add(SubClassOf(person, ObjectSomeValuesFrom(knows, person)))
        return onto

    def test_axiom_facts_and_activation(self):
        lines = _lines(self._simple(), Strategy.NAFF)
        assert "axiom(4)." in lines
        assert "axiom(5)." in lines
        assert "active(K) :- axiom(K), not disabled(K)." in lines
        assert "#defined disabled/1." in lines

    def test_rules_are_tagged(self):
        lines = _lines(self._simple(), Strategy.NAFF)
        assert "person(alice) :- active(4)." in lines
        assert ":- person(alice), not aux_1(alice), active(5)." in lines

    def test_shared_rules_are_untagged(self):
        lines = _lines(self._simple(), Strategy.NAFF)
        assert "aux_1(alice) :- knows(alice,alice), person(alice)." in lines
        assert "person(alice) | -person(alice)." in lines
        assert "top(alice)." in lines

    def test_provenance(self):
        onto = self._simple()
        translator = _translate(onto, Strategy.NAFF)
        assert translator.provenance == {4: onto.axioms[3], 5: onto.axioms[4]}


# ---------------------------------------------------------------------------
# Unsupported constructs
# ---------------------------------------------------------------------------

class TestUnsupported:
    def test_unsupported_axiom_fails_before_solving(self):
        onto = _people()
        onto.add(UnsupportedAxiom("DataPropertyAssertion(age alice 42)"))
        solver = _RecordingSolver()
        reasoner = Reasoner(onto, solver=solver)
        with pytest.raises(UnsupportedConstructError, match="age"):
            reasoner.is_consistent()
        assert solver.calls == 0

    @pytest.mark.parametrize("strategy", list(Strategy))
    def test_every_strategy_rejects(self, strategy):
        onto = _people()
        onto.add(UnsupportedAxiom("HasKey(Person knows)"))
        with pytest.raises(UnsupportedConstructError):
            _translate(onto, strategy)

"""Tests for the Reasoner: consistency, entailment, justification, models."""

import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from fdr.config import Configuration, Strategy
from fdr.errors import SolverTimeout
from fdr.reasoner import Reasoner
from fdr.solver import ClingoSolver, Solver, SolverSession
from fdr.translation import DebugTranslator
from fdr.types import (
    THING,
    ClassAssertion,
    Declaration,
    DisjointClasses,
    EquivalentClasses,
    InverseFunctionalObjectProperty,
    NamedIndividual,
    ObjectComplementOf,
    ObjectMinCardinality,
    ObjectOneOf,
    ObjectSomeValuesFrom,
    Ontology,
    OWLClass,
    SubClassOf,
)


EX = "http://example.org/test#"
STRATEGIES = list(Strategy)


def _cls(name: str) -> OWLClass:
    return OWLClass(EX + name)


def _ind(name: str) -> NamedIndividual:
    return NamedIndividual(EX + name)


def _ontology(*axioms) -> Ontology:
    onto = Ontology()
    for axiom in axioms:
        onto.add(axiom)
    return onto


def _reasoner(onto: Ontology, strategy: Strategy = Strategy.NAIVE, **settings) -> Reasoner:
    return Reasoner(onto, Configuration(strategy=strategy, **settings))


def _successors() -> Ontology:
    """A(a), A ⊑ ∃r.B, B ⊑ ¬A over {a, b}: eight models."""
    a, b = _cls("A"), _cls("B")
    onto = Ontology()
    onto.add_class(a.iri)
    onto.add_class(b.iri)
    r = onto.add_object_property(EX + "r")
    onto.add_individual(EX + "a")
    onto.add_individual(EX + "b")
    onto.add(ClassAssertion(a, _ind("a")))
    onto.add(SubClassOf(a, ObjectSomeValuesFrom(r, b)))
    onto.add(SubClassOf(b, ObjectComplementOf(a)))
    return onto


def _pigeonhole(holes: int) -> Ontology:
    """holes + 1 pigeons, each sitting in its own hole: unsatisfiable."""
    onto = Ontology()
    pigeon = onto.add_class(EX + "Pigeon")
    hole = onto.add_class(EX + "Hole")
    sits = onto.add_object_property(EX + "sitsIn")
    nests = tuple(onto.add_individual(EX + f"h{i}") for i in range(holes))
    for i in range(holes + 1):
        onto.add(ClassAssertion(pigeon, onto.add_individual(EX + f"p{i}")))
    onto.add(EquivalentClasses((hole, ObjectOneOf(nests))))
    onto.add(SubClassOf(pigeon, ObjectSomeValuesFrom(sits, hole)))
    onto.add(InverseFunctionalObjectProperty(sits))
    return onto


class _TrackingSolver(ClingoSolver):
    """A real clingo solver that keeps every session it opens."""

    def __init__(self):
        super().__init__()
        self.sessions = []

    def session(self, program):
        session = super().session(program)
        self.sessions.append(session)
        return session


class _TimeoutSolver(Solver):
    class _Session(SolverSession):
        def next_model(self):
            raise SolverTimeout(0.5)

    def session(self, program):
        return self._Session()


# ---------------------------------------------------------------------------
# Consistency
# ---------------------------------------------------------------------------

class TestConsistency:
    @pytest.mark.parametrize("strategy", STRATEGIES)
    def test_class_clash(self, strategy):
        onto = _ontology(
            ClassAssertion(_cls("A"), _ind("a")),
            ClassAssertion(ObjectComplementOf(_cls("A")), _ind("a")),
        )
        assert not _reasoner(onto, strategy).is_consistent()

    @pytest.mark.parametrize("strategy", STRATEGIES)
    def test_subsumption_violation(self, strategy):
        onto = _ontology(
            ClassAssertion(_cls("A"), _ind("a")),
            SubClassOf(_cls("A"), _cls("B")),
            ClassAssertion(ObjectComplementOf(_cls("B")), _ind("a")),
        )
        assert not _reasoner(onto, strategy).is_consistent()

    @pytest.mark.parametrize("strategy", STRATEGIES)
    def test_disjointness(self, strategy):
        onto = _ontology(
            ClassAssertion(_cls("A"), _ind("a")),
            ClassAssertion(_cls("B"), _ind("a")),
            DisjointClasses((_cls("A"), _cls("B"))),
        )
        assert not _reasoner(onto, strategy).is_consistent()

    @pytest.mark.parametrize("strategy", STRATEGIES)
    def test_consistent(self, strategy):
        onto = _ontology(
            ClassAssertion(_cls("A"), _ind("a")),
            SubClassOf(_cls("A"), _cls("B")),
        )
        assert _reasoner(onto, strategy).is_consistent()

    def test_empty_ontology_is_consistent(self):
        assert _reasoner(Ontology()).is_consistent()


class TestCardinality:
    def _onto(self, k: int) -> Ontology:
        onto = Ontology()
        r = onto.add_object_property(EX + "r")
        for name in "abcd":
            onto.add_individual(EX + name)
        onto.add(ClassAssertion(_cls("C"), _ind("a")))
        onto.add(SubClassOf(_cls("C"), ObjectMinCardinality(k, r)))
        return onto

    @pytest.mark.parametrize("strategy", STRATEGIES)
    def test_more_successors_than_elements(self, strategy):
        assert not _reasoner(self._onto(5), strategy).is_consistent()

    @pytest.mark.parametrize("strategy", STRATEGIES)
    def test_as_many_successors_as_elements(self, strategy):
        assert _reasoner(self._onto(4), strategy).is_consistent()


# ---------------------------------------------------------------------------
# Entailment
# ---------------------------------------------------------------------------

class TestEntailment:
    def _chain(self) -> Ontology:
        return _ontology(
            ClassAssertion(_cls("A"), _ind("a")),
            SubClassOf(_cls("A"), _cls("B")),
            SubClassOf(_cls("B"), _cls("C")),
            ClassAssertion(_cls("C"), _ind("b")),
        )

    @pytest.mark.parametrize("strategy", [Strategy.NAIVE, Strategy.DIRECT])
    def test_transitive_subsumption(self, strategy):
        reasoner = _reasoner(self._chain(), strategy)
        assert reasoner.is_entailed([SubClassOf(_cls("A"), _cls("C"))])
        assert reasoner.is_entailed([ClassAssertion(_cls("C"), _ind("a"))])

    def test_asserted_axioms_are_entailed(self):
        onto = self._chain()
        assert _reasoner(onto).is_entailed(onto)

    def test_not_entailed(self):
        reasoner = _reasoner(self._chain())
        assert not reasoner.is_entailed([SubClassOf(_cls("C"), _cls("A"))])

    def test_new_class_is_not_entailed(self):
        reasoner = _reasoner(self._chain())
        assert not reasoner.is_entailed([ClassAssertion(_cls("D"), _ind("a"))])

    def test_domain_closure(self):
        onto = _ontology(ClassAssertion(_cls("A"), _ind("a")), ClassAssertion(_cls("A"), _ind("b")))
        closure = SubClassOf(THING, ObjectOneOf((_ind("a"), _ind("b"))))
        assert _reasoner(onto).is_entailed([closure])
        assert not _reasoner(onto).is_entailed([SubClassOf(THING, ObjectOneOf((_ind("a"),)))])

    def test_inconsistent_ontology_entails_everything(self):
        onto = _ontology(
            ClassAssertion(_cls("A"), _ind("a")),
            ClassAssertion(ObjectComplementOf(_cls("A")), _ind("a")),
        )
        assert _reasoner(onto).is_entailed([ClassAssertion(_cls("D"), _ind("a"))])

    def test_base_program_unchanged(self):
        reasoner = _reasoner(self._chain())
        before = reasoner.translate()
        reasoner.is_entailed([SubClassOf(_cls("A"), _cls("C"))])
        reasoner.is_entailed([ClassAssertion(_cls("D"), _ind("a"))])
        assert reasoner.translate() == before
        assert reasoner.is_consistent()


# ---------------------------------------------------------------------------
# Justification
# ---------------------------------------------------------------------------

class TestJustification:
    def test_minimal_inconsistent_subset(self):
        clash = [
            ClassAssertion(_cls("A"), _ind("a")),
            SubClassOf(_cls("A"), _cls("B")),
            ClassAssertion(ObjectComplementOf(_cls("B")), _ind("a")),
        ]
        onto = _ontology(
            ClassAssertion(_cls("C"), _ind("b")),
            clash[0],
            SubClassOf(_cls("D"), _cls("C")),
            clash[1],
            clash[2],
        )
        assert _reasoner(onto).justification() == clash

    def test_consistent_has_no_justification(self):
        onto = _ontology(ClassAssertion(_cls("A"), _ind("a")))
        assert _reasoner(onto).justification() is None

    def test_justification_is_inconsistent_alone(self):
        onto = _ontology(
            ClassAssertion(_cls("A"), _ind("a")),
            ClassAssertion(_cls("B"), _ind("a")),
            DisjointClasses((_cls("A"), _cls("B"))),
            ClassAssertion(_cls("A"), _ind("b")),
        )
        axioms = _reasoner(onto).justification()
        assert len(axioms) == 3
        assert not _reasoner(_ontology(*axioms)).is_consistent()

    def test_debug_translator(self):
        reasoner = _reasoner(_ontology(ClassAssertion(_cls("A"), _ind("a"))))
        assert isinstance(reasoner.debug_translator(), DebugTranslator)
        assert reasoner.debug_translator() is reasoner.translator(Strategy.NAFF)

    def test_untagged_translator_is_rejected(self, monkeypatch):
        reasoner = _reasoner(_ontology(ClassAssertion(_cls("A"), _ind("a"))))
        naive = reasoner.translator(Strategy.NAIVE)
        monkeypatch.setattr(reasoner, "translator", lambda strategy=None: naive)
        with pytest.raises(TypeError):
            reasoner.justification()

    def test_declarations_are_never_blamed(self):
        onto = Ontology()
        a = onto.add_class(EX + "A")
        alice = onto.add_individual(EX + "alice")
        onto.add(ClassAssertion(a, alice))
        onto.add(ClassAssertion(ObjectComplementOf(a), alice))
        axioms = _reasoner(onto).justification()
        assert axioms == onto.axioms[2:]
        assert not any(isinstance(axiom, Declaration) for axiom in axioms)


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------

class TestModels:
    def test_enumeration_releases_the_session(self):
        solver = _TrackingSolver()
        reasoner = Reasoner(_successors(), solver=solver)
        assert len(reasoner.enumerate_models(2)) == 2
        assert solver.sessions[-1].closed

    def test_abandoned_enumeration_releases_the_session(self):
        solver = _TrackingSolver()
        models = Reasoner(_successors(), solver=solver).iter_models()
        next(models)
        assert not solver.sessions[-1].closed
        models.close()
        assert solver.sessions[-1].closed

    def test_single_solve_releases_the_session(self):
        solver = _TrackingSolver()
        assert Reasoner(_successors(), solver=solver).is_consistent()
        assert all(session.closed for session in solver.sessions)

    def test_free_class_has_two_models(self):
        onto = Ontology()
        onto.add_class(EX + "A")
        onto.add_individual(EX + "a")
        assert len(_reasoner(onto).enumerate_models()) == 2

    def test_subsumption_has_three_models(self):
        onto = _ontology(SubClassOf(_cls("A"), _cls("B")))
        onto.add_individual(EX + "a")
        models = _reasoner(onto).enumerate_models()
        assert len(models) == 3
        for model in models:
            assert model.members(_cls("A")) <= model.members(_cls("B"))

    def test_models_are_distinct(self):
        models = _reasoner(_successors()).enumerate_models()
        assert len(models) == 8
        assert len({m.key for m in models}) == 8

    def test_every_model_satisfies_the_axioms(self):
        r = _successors().object_properties()[0]
        for model in _reasoner(_successors()).enumerate_models():
            assert model.has_type(_ind("a"), _cls("A"))
            assert model.has_type(_ind("b"), _cls("B"))
            assert model.related(r, _ind("a"), _ind("b"))

    def test_limit(self):
        reasoner = _reasoner(_successors())
        assert len(reasoner.enumerate_models(3)) == 3
        assert [m.index for m in reasoner.iter_models(2)] == [1, 2]

    def test_inconsistent_has_no_models(self):
        onto = _ontology(
            ClassAssertion(_cls("A"), _ind("a")),
            ClassAssertion(ObjectComplementOf(_cls("A")), _ind("a")),
        )
        assert _reasoner(onto).enumerate_models() == []

    def test_strategies_agree(self):
        keys = {
            strategy: {m.key for m in _reasoner(_successors(), strategy).enumerate_models()}
            for strategy in STRATEGIES
        }
        assert keys[Strategy.NAIVE] == keys[Strategy.DIRECT] == keys[Strategy.NAFF]

    def test_projection(self):
        configuration = Configuration()
        configuration.project_on([EX + "A"])
        models = Reasoner(_successors(), configuration).enumerate_models()
        assert len(models) == 1
        assert models[0].members(_cls("A")) == {_ind("a")}
        assert models[0].members(_cls("B")) == set()
        assert models[0].relations == []

    def test_negative_limit(self):
        with pytest.raises(ValueError):
            _reasoner(_successors()).enumerate_models(-1)

    def test_cancel_stops_enumeration(self):
        enumerator = _reasoner(_successors()).model_enumerator()
        seen = []
        for model in enumerator.models():
            seen.append(model)
            enumerator.cancel()
        assert len(seen) == 1

    def test_model_text(self):
        onto = _ontology(ClassAssertion(_cls("A"), _ind("a")))
        text = _reasoner(onto).enumerate_models()[0].to_text()
        assert text.splitlines() == ["Model 1:", "  a: A"]


class TestTimeout:
    def test_clingo_gives_up_on_a_hard_instance(self):
        reasoner = _reasoner(_pigeonhole(12), Strategy.DIRECT, solver_timeout=0.05)
        with pytest.raises(SolverTimeout) as info:
            reasoner.is_consistent()
        assert info.value.timeout == 0.05

    def test_timeout_is_not_inconsistency(self):
        onto = _ontology(ClassAssertion(_cls("A"), _ind("a")))
        reasoner = Reasoner(onto, solver=_TimeoutSolver())
        with pytest.raises(SolverTimeout):
            reasoner.is_consistent()
        with pytest.raises(SolverTimeout):
            reasoner.is_entailed([ClassAssertion(_cls("A"), _ind("a"))])

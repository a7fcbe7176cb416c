"""Model enumeration and decoding.

ModelEnumerator asks the solver for one answer set at a time. After each
one it adds a blocking constraint over that answer set's ontology-observable
literals (class and property atoms, both positive and classically negated),
so the next answer set differs on at least one of them. Auxiliary atoms are
never blocked on: they are functions of the observable ones.

With a projection, only the literals of the projected classes are blocked
on, so models that agree on those classes are reported once.

decode() turns an AnswerSet into a DecodedModel through the signature
mapper. Atoms the mapper does not know (top/1, aux_n/1, active/1, ...) are
skipped; they are program machinery, not ontology vocabulary.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterator

from .domain import Domain
from .program import Program
from .signature import SignatureMapper
from .solver import AnswerSet, ModelAtom, Solver, SolverSession
from .types import NamedIndividual, ObjectProperty, OWLClass

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Decoded model
# ---------------------------------------------------------------------------

@dataclass
class DecodedModel:
    """One interpretation over the fixed domain, in ontology vocabulary."""

    index: int
    elements: tuple[NamedIndividual, ...]
    types: dict[NamedIndividual, list[OWLClass]] = field(default_factory=dict)
    relations: list[tuple[ObjectProperty, NamedIndividual, NamedIndividual]] = field(default_factory=list)

    def has_type(self, individual: NamedIndividual, cls: OWLClass) -> bool:
        return cls in self.types.get(individual, [])

    def members(self, cls: OWLClass) -> set[NamedIndividual]:
        return {ind for ind, classes in self.types.items() if cls in classes}

    def related(self, prop: ObjectProperty, subject: NamedIndividual, obj: NamedIndividual) -> bool:
        return (prop, subject, obj) in self.relations

    @property
    def key(self) -> tuple:
        """Hashable identity ignoring the enumeration index."""
        return (
            tuple(sorted((ind, tuple(sorted(cls))) for ind, cls in self.types.items())),
            tuple(sorted(self.relations)),
        )

    def to_text(self) -> str:
        lines = [f"Model {self.index}:"]
        for element in self.elements:
            classes = ", ".join(str(c) for c in self.types.get(element, [])) or "-"
            lines.append(f"  {element}: {classes}")
            successors: dict[ObjectProperty, list[NamedIndividual]] = {}
            for prop, subject, obj in self.relations:
                if subject == element:
                    successors.setdefault(prop, []).append(obj)
            for prop, objects in successors.items():
                lines.append(f"    {prop} -> {', '.join(str(o) for o in objects)}")
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.to_text()


def decode(
    answer: AnswerSet,
    mapper: SignatureMapper,
    domain: Domain,
    index: int = 1,
    projection: frozenset[OWLClass] | None = None,
) -> DecodedModel:
    """Translate an answer set back into class memberships and property tuples.

    Only positive atoms are listed; with a projection, only memberships of
    the projected classes (and no property tuples) are kept.
    """
    model = DecodedModel(index, tuple(domain))
    for atom in answer:
        if atom.negated:
            continue
        entity = mapper.entity_for(atom.predicate)
        if entity is None:
            continue
        args = [mapper.entity_for(a) for a in atom.arguments]
        if not all(isinstance(a, NamedIndividual) for a in args):
            continue
        if isinstance(entity, OWLClass) and len(args) == 1:
            if projection is not None and entity not in projection:
                continue
            model.types.setdefault(args[0], []).append(entity)
        elif isinstance(entity, ObjectProperty) and len(args) == 2 and projection is None:
            model.relations.append((entity, args[0], args[1]))

    for classes in model.types.values():
        classes.sort()
    model.relations.sort()
    return model


# ---------------------------------------------------------------------------
# Enumeration
# ---------------------------------------------------------------------------

class ModelEnumerator:
    """Lazy, cancellable enumeration of the models of one program."""

    def __init__(
        self,
        program: Program,
        mapper: SignatureMapper,
        domain: Domain,
        solver: Solver,
        projection: frozenset[OWLClass] | None = None,
    ) -> None:
        self.program = program
        self.mapper = mapper
        self.domain = domain
        self.solver = solver
        self.projection = projection
        self._session: SolverSession | None = None
        self._cancelled = False

    def models(self, limit: int = 0) -> Iterator[DecodedModel]:
        """Yield up to ``limit`` distinct models (all of them when limit is 0)."""
        if limit < 0:
            raise ValueError("limit must be >= 0")
        self._cancelled = False
        session = self.solver.session(self.program)
        self._session = session
        count = 0
        try:
            while limit == 0 or count < limit:
                if self._cancelled:
                    break
                answer = session.next_model()
                if answer is None:
                    break
                count += 1
                yield decode(answer, self.mapper, self.domain, count, self.projection)
                blocking = self.observable(answer)
                if not blocking:
                    # nothing observable distinguishes further models
                    break
                session.block(blocking)
        finally:
            self._session = None
            session.close()
        logger.info("Enumerated %d model(s)", count)

    def observable(self, answer: AnswerSet) -> list[ModelAtom]:
        """Literals of ``answer`` that name ontology classes or properties."""
        literals = []
        for atom in answer:
            entity = self.mapper.entity_for(atom.predicate)
            if isinstance(entity, OWLClass):
                if self.projection is not None and entity not in self.projection:
                    continue
            elif isinstance(entity, ObjectProperty):
                if self.projection is not None:
                    continue
            else:
                continue
            literals.append(atom)
        return literals

    def cancel(self) -> None:
        """Stop the enumeration, interrupting a running solver call."""
        self._cancelled = True
        if self._session is not None:
            self._session.cancel()

    def __iter__(self) -> Iterator[DecodedModel]:
        return self.models()


def enumerate_models(
    program: Program,
    mapper: SignatureMapper,
    domain: Domain,
    solver: Solver,
    limit: int = 0,
    projection: frozenset[OWLClass] | None = None,
) -> list[DecodedModel]:
    return list(ModelEnumerator(program, mapper, domain, solver, projection).models(limit))

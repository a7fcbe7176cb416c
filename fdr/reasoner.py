"""Reasoning orchestrator: one session over one ontology.

A Reasoner fixes the domain, owns the translation context, and answers:

  is_consistent()             an answer set exists
  is_entailed(axioms)         each axiom's violation is unsatisfiable
  justification()             a minimal inconsistent subset of axioms
  iter_models(limit)          lazily decoded models
  axiomatize_fd_semantics(f)  OWL file with domain closure + unique names

Programs are translated once per strategy and never modified afterwards;
entailment and justification checks extend private copies.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Iterator

from rdflib import Graph

from .axiomatize import axiomatize
from .config import Configuration, Strategy
from .domain import Domain, resolve_domain
from .models import DecodedModel, ModelEnumerator
from .program import Atom, Program, Rule
from .signature import make_mapper
from .solver import ClingoSolver, Solver
from .translation import DebugTranslator, TranslationContext, Translator, make_translator
from .types import Axiom, Declaration, Ontology

logger = logging.getLogger(__name__)


class Reasoner:
    """Fixed-domain reasoning over one ontology."""

    def __init__(
        self,
        ontology: Ontology,
        configuration: Configuration | None = None,
        solver: Solver | None = None,
    ) -> None:
        self.ontology = ontology
        self.configuration = configuration or Configuration()
        config = self.configuration
        self.solver = solver or ClingoSolver(config.solver_timeout, config.solver_arguments)
        self.domain: Domain = resolve_domain(
            ontology, config.domain_individuals, config.max_domain_size
        )
        self.context = TranslationContext(
            self.domain, make_mapper(config.mapper.value), config.strategy
        )
        self._translators: dict[Strategy, Translator] = {}

    @property
    def domain_size(self) -> int:
        return self.domain.size

    @property
    def mapper(self):
        return self.context.mapper

    # -----------------------------------------------------------------------
    # Translation
    # -----------------------------------------------------------------------

    def translator(self, strategy: Strategy | None = None) -> Translator:
        """The translator for ``strategy``, translating the ontology on first use."""
        strategy = strategy or self.configuration.strategy
        translator = self._translators.get(strategy)
        if translator is None:
            translator = make_translator(self.context, strategy)
            translator.translate(self.ontology)
            self._translators[strategy] = translator
            logger.info(
                "Translated %r with the %s strategy: %d rules",
                self.ontology, strategy.value, len(translator.program),
            )
        return translator

    def debug_translator(self) -> DebugTranslator:
        translator = self.translator(Strategy.NAFF)
        if not isinstance(translator, DebugTranslator):
            raise TypeError(f"expected a provenance-tagged translator, got {type(translator).__name__}")
        return translator

    def program(self, strategy: Strategy | None = None) -> Program:
        return self.translator(strategy).program

    def translate(self, strategy: Strategy | None = None) -> str:
        """The rendered program, as printed by ``--translate``."""
        return self.program(strategy).render()

    # -----------------------------------------------------------------------
    # Queries
    # -----------------------------------------------------------------------

    def is_consistent(self) -> bool:
        return self.solver.solve(self.program()) is not None

    def is_entailed(self, query: Ontology | Iterable[Axiom]) -> bool:
        """True iff every model of the ontology satisfies every query axiom."""
        axioms = query.axioms if isinstance(query, Ontology) else list(query)
        base = self.translator()
        for axiom in axioms:
            if isinstance(axiom, Declaration):
                continue
            program = base.program.copy()
            base.fork(program).add_negation(axiom)
            if self.solver.solve(program) is not None:
                logger.info("Not entailed: %s", axiom)
                return False
            logger.debug("Entailed: %s", axiom)
        return True

    def justification(self) -> list[Axiom] | None:
        """A minimal set of axioms that is inconsistent on its own.

        Deletion-based search over the provenance-tagged program: each axiom
        is switched off in turn and stays off if the rest is still
        inconsistent. Returns None when the ontology is consistent.
        """
        translator = self.debug_translator()
        if self.solver.solve(translator.program) is not None:
            return None

        candidates = sorted(translator.provenance)
        needed = list(candidates)
        for index in candidates:
            trial = [i for i in needed if i != index]
            disabled = set(candidates) - set(trial)
            if not self._consistent_without(translator.program, disabled):
                needed = trial
        logger.info("Justification of %d axiom(s) out of %d", len(needed), len(candidates))
        return [translator.provenance[i] for i in needed]

    def _consistent_without(self, program: Program, disabled: Iterable[int]) -> bool:
        trial = program.copy()
        for index in sorted(disabled):
            trial.add(Rule((Atom("disabled", (str(index),)),)))
        return self.solver.solve(trial) is not None

    # -----------------------------------------------------------------------
    # Models
    # -----------------------------------------------------------------------

    def model_enumerator(self) -> ModelEnumerator:
        return ModelEnumerator(
            self.program(), self.mapper, self.domain, self.solver,
            self.configuration.projection,
        )

    def iter_models(self, limit: int = 0) -> Iterator[DecodedModel]:
        return self.model_enumerator().models(limit)

    def enumerate_models(self, limit: int = 0) -> list[DecodedModel]:
        return list(self.iter_models(limit))

    # -----------------------------------------------------------------------
    # Axiomatization
    # -----------------------------------------------------------------------

    def axiomatize_fd_semantics(self, target: str | Path) -> Graph:
        return axiomatize(self.ontology, self.domain, target)

    def __repr__(self) -> str:
        return f"Reasoner({self.ontology!r}, domain={self.domain.size}, strategy={self.configuration.strategy.value})"

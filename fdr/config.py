"""Session configuration.

One Configuration is built per CLI run (or per API call) and passed to every
Reasoner explicitly. Nothing in the package reads process-wide state.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from .types import NamedIndividual, OWLClass


class Strategy(Enum):
    """Translation strategies."""
    NAIVE = "naive"
    DIRECT = "direct"
    NAFF = "naff"  # naive semantics, provenance-tagged for justifications


class MapperKind(Enum):
    DEFAULT = "default"
    ASP = "asp"


@dataclass
class Configuration:
    """Settings shared by the reasoning sessions of one run.

    domain_individuals: explicit fixed domain (None = use the ontology's
        individuals).
    projection: classes to project models on (None = no projection).
    solver_timeout: seconds per solver call (None = wait indefinitely).
    max_domain_size: refuse domains larger than this (None = no cutoff).
    """
    strategy: Strategy = Strategy.NAIVE
    mapper: MapperKind = MapperKind.DEFAULT
    domain_individuals: tuple[NamedIndividual, ...] | None = None
    projection: frozenset[OWLClass] | None = None
    solver_timeout: float | None = None
    max_domain_size: int | None = None
    solver_arguments: list[str] = field(default_factory=list)

    def project_on(self, iris: list[str]) -> None:
        self.projection = frozenset(OWLClass(iri) for iri in iris)

    def set_domain_individuals(self, individuals) -> None:
        self.domain_individuals = tuple(sorted(set(individuals)))

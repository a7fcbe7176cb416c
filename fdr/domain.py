"""Domain resolution: fixing the finite domain of discourse.

Under fixed-domain semantics every interpretation ranges over one finite,
explicitly named set of elements. The domain is either supplied explicitly
(the individuals of a domain document) or taken from the ontology's own
named individuals. It is never empty: an ontology without individuals gets
a single synthesized anonymous element.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Iterator

from .errors import DomainError
from .types import NamedIndividual, Ontology

logger = logging.getLogger(__name__)


ANONYMOUS_ELEMENT = NamedIndividual("urn:fixed-domain:anonymous")


@dataclass(frozen=True)
class Domain:
    """A finite, non-empty, IRI-ordered set of domain elements."""

    elements: tuple[NamedIndividual, ...]
    synthesized: bool = False

    def __post_init__(self) -> None:
        if not self.elements:
            raise DomainError("A fixed domain must contain at least one element")

    @property
    def size(self) -> int:
        return len(self.elements)

    def __len__(self) -> int:
        return len(self.elements)

    def __iter__(self) -> Iterator[NamedIndividual]:
        return iter(self.elements)

    def __contains__(self, item: object) -> bool:
        return item in self.elements

    def __repr__(self) -> str:
        names = ", ".join(str(e) for e in self.elements)
        tag = " (synthesized)" if self.synthesized else ""
        return f"Domain({{{names}}}{tag})"


def resolve_domain(
    ontology: Ontology,
    explicit: Iterable[NamedIndividual] | None = None,
    max_size: int | None = None,
) -> Domain:
    """Fix the domain for one reasoning session.

    explicit: individuals of an explicit domain document; when given, they
        are the domain exactly.
    max_size: optional cutoff; a larger domain raises DomainError before
        any translation work is done.
    """
    if explicit is not None:
        elements = tuple(sorted(set(explicit)))
        source = "explicit domain"
    else:
        elements = tuple(ontology.individuals())
        source = "ontology individuals"

    if not elements:
        logger.info("No named individuals; synthesizing one anonymous domain element")
        domain = Domain((ANONYMOUS_ELEMENT,), synthesized=True)
    else:
        domain = Domain(elements)

    if max_size is not None and domain.size > max_size:
        raise DomainError(
            f"Domain has {domain.size} elements, exceeding the cutoff of {max_size}"
        )
    logger.info("Fixed domain of %d element(s) from %s", domain.size, source)
    return domain


def check_in_domain(domain: Domain, individuals: Iterable[NamedIndividual]) -> None:
    """Every individual mentioned by the ontology must be a domain element."""
    missing = sorted({i for i in individuals if i not in domain})
    if missing:
        names = ", ".join(i.iri for i in missing)
        raise DomainError(f"Individuals outside the fixed domain: {names}")

"""Signature mapping: ontology entities ↔ program symbols.

A mapper assigns every class, object property and individual a symbol that
is a legal clingo identifier, and remembers the assignment in both
directions. The mapping is injective and append-only for the lifetime of a
session: ``entity_for(symbol_for(e)) == e`` for every registered entity.

Two schemes are provided:

  DefaultSignatureMapper  sanitized local names  (Person → person)
  ASPSignatureMapper      kind-prefixed names    (Person → c_Person)

Program-level names used by the translator (``top``, ``aux_3``, ...) are
reserved, so an ontology symbol never collides with an auxiliary one.
"""

from __future__ import annotations

import logging
import re

from .types import Entity, NamedIndividual, ObjectProperty, OWLClass, local_name

logger = logging.getLogger(__name__)


# Names the translator emits itself.
RESERVED_NAMES = frozenset({"top", "bot", "axiom", "active", "disabled", "not"})
RESERVED_PREFIXES = ("aux_", "witness_")

_INVALID_CHARS = re.compile(r"[^A-Za-z0-9_]")


def sanitize(name: str) -> str:
    """Turn an arbitrary local name into a lower-case clingo identifier."""
    cleaned = _INVALID_CHARS.sub("_", name)
    if not cleaned or not cleaned[0].isalpha():
        cleaned = "n" + cleaned
    return cleaned[0].lower() + cleaned[1:]


def is_reserved(symbol: str) -> bool:
    return symbol in RESERVED_NAMES or symbol.startswith(RESERVED_PREFIXES)


class SignatureMapper:
    """Abstract mapper. Subclasses only decide the *candidate* symbol.

    Uniqueness is enforced here: a taken or reserved candidate gets a
    numeric suffix, tried in increasing order, so the result depends only on
    registration order.
    """

    def __init__(self) -> None:
        self._symbols: dict[Entity, str] = {}
        self._entities: dict[str, Entity] = {}

    # -----------------------------------------------------------------------
    # Contract
    # -----------------------------------------------------------------------

    def symbol_for(self, entity: Entity) -> str:
        """Return the symbol for ``entity``, registering it on first use."""
        symbol = self._symbols.get(entity)
        if symbol is None:
            symbol = self._claim(self.candidate(entity))
            self._symbols[entity] = symbol
            self._entities[symbol] = entity
            logger.debug("Mapped %r to %s", entity, symbol)
        return symbol

    def entity_for(self, symbol: str) -> Entity | None:
        """Return the entity behind ``symbol``, or None for auxiliary symbols."""
        return self._entities.get(symbol)

    def candidate(self, entity: Entity) -> str:
        raise NotImplementedError

    # -----------------------------------------------------------------------
    # Helpers
    # -----------------------------------------------------------------------

    def register_all(self, entities) -> None:
        """Register entities in a canonical order (kind, then IRI)."""
        order = {OWLClass: 0, ObjectProperty: 1, NamedIndividual: 2}
        for entity in sorted(entities, key=lambda e: (order[type(e)], e.iri)):
            self.symbol_for(entity)

    def _claim(self, candidate: str) -> str:
        if candidate.startswith(RESERVED_PREFIXES):
            candidate = "o" + candidate
        symbol = candidate
        suffix = 0
        while symbol in self._entities or is_reserved(symbol):
            suffix += 1
            symbol = f"{candidate}_{suffix}"
        return symbol

    def __contains__(self, entity: object) -> bool:
        return entity in self._symbols

    def __len__(self) -> int:
        return len(self._symbols)

    def items(self) -> list[tuple[Entity, str]]:
        return list(self._symbols.items())

    def __repr__(self) -> str:
        return f"{type(self).__name__}({len(self)} symbols)"


class DefaultSignatureMapper(SignatureMapper):
    """Sanitized local names: ``http://ex.org/onto#Person`` → ``person``."""

    def candidate(self, entity: Entity) -> str:
        return sanitize(local_name(entity.iri))


class ASPSignatureMapper(SignatureMapper):
    """Kind-prefixed names: classes ``c_``, properties ``r_``, individuals ``i_``.

    Keeps the original capitalisation of the local name, which makes the
    printed program easier to read against the ontology.
    """

    _PREFIX = {OWLClass: "c_", ObjectProperty: "r_", NamedIndividual: "i_"}

    def candidate(self, entity: Entity) -> str:
        name = _INVALID_CHARS.sub("_", local_name(entity.iri)) or "x"
        return self._PREFIX[type(entity)] + name


def make_mapper(kind: str = "default") -> SignatureMapper:
    if kind == "asp":
        return ASPSignatureMapper()
    if kind == "default":
        return DefaultSignatureMapper()
    raise ValueError(f"Unknown mapper kind: {kind}")

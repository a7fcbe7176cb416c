"""Error taxonomy for the fixed-domain reasoner.

  UsageError                 malformed command line; nothing is processed
  ConfigurationError         explicit domain / entailment document unusable
    DomainError              domain too large, or an individual outside it
  OntologyLoadError          an input ontology could not be read
  UnsupportedConstructError  an axiom kind has no translation rule
  SolverError                clingo unavailable, crashed, or rejected input
    SolverTimeout            no answer within the time budget

Decoding an atom that has no mapper entry is not an error: the mapper
returns None and the decoder skips the atom.
"""

from __future__ import annotations


class FixedDomainError(Exception):
    """Base class for every error raised by this package."""


class UsageError(FixedDomainError):
    pass


class ConfigurationError(FixedDomainError):
    pass


class DomainError(ConfigurationError):
    pass


class OntologyLoadError(FixedDomainError):
    def __init__(self, locator: str, reason: str = "") -> None:
        self.locator = locator
        message = f"Failed to load ontology {locator}"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class UnsupportedConstructError(FixedDomainError):
    """Raised when an axiom (or a class expression inside it) is untranslatable."""

    def __init__(self, axiom: object, detail: str = "") -> None:
        self.axiom = axiom
        message = f"Unsupported construct in axiom {axiom}"
        if detail:
            message += f" ({detail})"
        super().__init__(message)


class SolverError(FixedDomainError):
    pass


class SolverTimeout(SolverError):
    def __init__(self, timeout: float) -> None:
        self.timeout = timeout
        super().__init__(f"Solver gave no answer within {timeout:g} s")

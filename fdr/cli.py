"""Command-line interface.

  fdr [OPTION]... ONTOLOGY...

Actions (-T, -c, -e, -m, -j, -a) run in command-line order for every input
ontology. A directory argument is scanned for ontology documents: they are
indexed for owl:imports resolution and each one is processed.

Usage errors print the usage string and exit with status 2 before any
ontology is read. An ontology that fails to load or to reason is logged and
skipped; the exit status is then 1.
"""

from __future__ import annotations

import argparse
import logging
import re
import sys
import time
from contextlib import ExitStack
from dataclasses import replace
from pathlib import Path
from typing import TextIO

from . import __version__
from .config import Configuration, MapperKind, Strategy
from .errors import ConfigurationError, FixedDomainError, OntologyLoadError, UsageError
from .owl_loader import OntologyLoader, get_individuals
from .reasoner import Reasoner
from .types import Ontology

logger = logging.getLogger(__name__)

USAGE = "fdr [OPTION]... ONTOLOGY..."

EPILOG = """\
For example, to print the naive translation of example.owl:
  fdr --translate=naive example.owl
"""

_LEVELS = {1: logging.WARNING, 2: logging.INFO}


# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------

class _RecordAction(argparse.Action):
    """Append ``(dest, value)`` to ``namespace.actions``, keeping CLI order."""

    def __call__(self, parser, namespace, values, option_string=None):
        actions = list(getattr(namespace, "actions", None) or [])
        actions.append((self.dest, values))
        namespace.actions = actions


def _strategy(value: str) -> Strategy:
    try:
        return Strategy(value.lower())
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"unknown TARGET {value!r} (choose naive, direct or naff)"
        ) from None


def _count(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"{value!r} is not a number") from None
    if number < 0:
        raise argparse.ArgumentTypeError("NUMBER must be >= 0")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fdr",
        usage=USAGE,
        description="Fixed-domain reasoning for OWL ontologies via answer set programming.",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.set_defaults(actions=[])
    parser.add_argument("ontologies", nargs="*", metavar="ONTOLOGY",
                        help="ontology files, IRIs, or directories to scan")

    misc = parser.add_argument_group("Miscellaneous")
    misc.add_argument("-V", "--version", action="version", version=f"fdr version : {__version__}")

    debug = parser.add_argument_group("Debugging")
    debug.add_argument("-v", "--verbose", type=int, action="append", default=[], metavar="AMOUNT",
                       help="increase verbosity by AMOUNT levels (default 1)")

    optimize = parser.add_argument_group("Optimization")
    optimize.add_argument("-p", "--project", metavar="IRI1,..,IRIn",
                          help="project models on the given classes")
    optimize.add_argument("-t", "--timeout", type=float, metavar="SECONDS",
                          help="give up on a solver call after SECONDS")
    optimize.add_argument("--max-domain-size", type=int, metavar="N",
                          help="refuse fixed domains with more than N elements")
    optimize.add_argument("--mapper", choices=[k.value for k in MapperKind], default="default",
                          help="program symbol naming scheme")

    actions = parser.add_argument_group("Actions")
    actions.add_argument("-T", "--translate", type=_strategy, action=_RecordAction, metavar="TARGET",
                         help="print the translation to TARGET: naive, direct or naff")
    actions.add_argument("-O", "--output", metavar="FILE",
                         help="write non-debug output to FILE")
    actions.add_argument("-e", "--entail", action=_RecordAction, metavar="FILE",
                         help="check whether the ontology in FILE is entailed")
    actions.add_argument("-d", "--domain", metavar="FILE",
                         help="take the fixed domain from the individuals of FILE "
                              "(default: the individuals of the input ontology)")
    actions.add_argument("-m", "--model", type=_count, action=_RecordAction, metavar="NUMBER",
                         help="enumerate NUMBER models; 0 means all")
    actions.add_argument("-c", "--consistent", nargs=0, action=_RecordAction,
                         help="check whether the input ontology is consistent")
    actions.add_argument("-j", "--justification", nargs=0, action=_RecordAction,
                         help="report a minimal inconsistent set of axioms")

    utility = parser.add_argument_group("Utility Functions")
    utility.add_argument("-a", "--axiomatize", action=_RecordAction, metavar="FILE",
                         help="write the ontology with its fixed-domain axiomatization to FILE")
    return parser


_BARE_VERBOSE = re.compile(r"^-(v+)$")


def _normalize_argv(argv: list[str]) -> list[str]:
    """``-v`` / ``-vv`` / ``--verbose`` without a value mean one level each."""
    out = []
    for arg in argv:
        match = _BARE_VERBOSE.match(arg)
        if match:
            out.append(f"--verbose={len(match.group(1))}")
        elif arg == "--verbose":
            out.append("--verbose=1")
        else:
            out.append(arg)
    return out


def configure_logging(verbosity: int) -> None:
    level = _LEVELS.get(verbosity, logging.DEBUG if verbosity > 2 else logging.ERROR)
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )
    logging.getLogger().setLevel(level)


# ---------------------------------------------------------------------------
# Sessions
# ---------------------------------------------------------------------------

class Runner:
    """Runs the recorded actions over each input ontology."""

    def __init__(self, args: argparse.Namespace, output: TextIO) -> None:
        self.args = args
        self.output = output
        self.loader = OntologyLoader()
        self.configuration = Configuration(
            mapper=MapperKind(args.mapper),
            solver_timeout=args.timeout,
            max_domain_size=args.max_domain_size,
        )
        if args.project:
            self.configuration.project_on([iri.strip() for iri in args.project.split(",") if iri.strip()])
        self._documents: dict[str, Ontology | FixedDomainError] = {}

    def documents(self) -> list[str]:
        """Expand directory arguments into the documents they contain."""
        found: list[str] = []
        for locator in self.args.ontologies:
            if Path(locator).is_dir():
                found.extend(str(p) for p in self.loader.register_directory(locator))
            else:
                found.append(locator)
        return found

    def run(self) -> int:
        failures = 0
        for locator in self.documents():
            try:
                self.process(locator)
            except FixedDomainError as exc:
                logger.error("%s: %s", locator, exc)
                failures += 1
        return 1 if failures else 0

    def process(self, locator: str) -> None:
        start = time.perf_counter()
        ontology = self.loader.load(locator)
        logger.info("Parsed %s in %.3f s", locator, time.perf_counter() - start)

        configuration = replace(self.configuration)
        if self.args.domain:
            domain_ontology = self.auxiliary(self.args.domain, "domain")
            configuration.set_domain_individuals(get_individuals(domain_ontology))

        start = time.perf_counter()
        reasoner = Reasoner(ontology, configuration)
        logger.info("Reasoner ready in %.3f s (domain of %d)", time.perf_counter() - start, reasoner.domain_size)

        for name, value in self.args.actions:
            start = time.perf_counter()
            getattr(self, f"do_{name}")(reasoner, value)
            logger.info("Action %s finished in %.3f s", name, time.perf_counter() - start)

    def auxiliary(self, path: str, role: str) -> Ontology:
        """Load a domain or entailment document once; failures are configuration errors."""
        cached = self._documents.get(path)
        if cached is None:
            try:
                cached = self.loader.load(path)
            except OntologyLoadError as exc:
                cached = ConfigurationError(f"cannot load {role} document: {exc}")
            self._documents[path] = cached
        if isinstance(cached, FixedDomainError):
            raise cached
        return cached

    def write(self, text: str) -> None:
        self.output.write(text if text.endswith("\n") else text + "\n")
        self.output.flush()

    # -----------------------------------------------------------------------
    # Actions
    # -----------------------------------------------------------------------

    def do_translate(self, reasoner: Reasoner, strategy: Strategy) -> None:
        self.write(reasoner.translate(strategy))

    def do_consistent(self, reasoner: Reasoner, _value) -> None:
        if reasoner.is_consistent():
            self.write("Input ontologies are consistent")
        else:
            self.write("Input ontologies are inconsistent")

    def do_entail(self, reasoner: Reasoner, path: str) -> None:
        query = self.auxiliary(path, "entailment")
        self.write(f"Is entailed? : {str(reasoner.is_entailed(query)).lower()}")

    def do_model(self, reasoner: Reasoner, number: int) -> None:
        models = reasoner.enumerate_models(number)
        requested = "ALL" if number == 0 else str(number)
        self.write(f"Found {len(models)} models (requested {requested}):")
        for model in models:
            self.write(model.to_text())

    def do_justification(self, reasoner: Reasoner, _value) -> None:
        axioms = reasoner.justification()
        if axioms is None:
            self.write("Input ontologies are consistent; no justification")
            return
        self.write(f"Justification ({len(axioms)} axioms):")
        for axiom in axioms:
            self.write(f"  {axiom}")

    def do_axiomatize(self, reasoner: Reasoner, path: str) -> None:
        reasoner.axiomatize_fd_semantics(path)
        logger.info("Wrote fixed-domain axiomatization to %s", path)


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(_normalize_argv(list(sys.argv[1:] if argv is None else argv)))
    configure_logging(1 + sum(args.verbose))

    with ExitStack() as stack:
        try:
            if not args.ontologies:
                raise UsageError("no input ontologies given")
            output = sys.stdout
            if args.output:
                try:
                    output = stack.enter_context(open(args.output, "w", encoding="utf-8"))
                except OSError as exc:
                    raise UsageError(f"cannot open file: {args.output} ({exc.strerror})") from exc
        except UsageError as exc:
            parser.error(str(exc))
        return Runner(args, output).run()


if __name__ == "__main__":
    sys.exit(main())

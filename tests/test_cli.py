"""Tests for the fdr command-line interface."""

import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import logging

import pytest
from fdr import __version__
from fdr.cli import _normalize_argv, build_parser, configure_logging, main
from fdr.config import Strategy


PREFIXES = """\
@prefix : <http://example.org/test#> .
@prefix owl: <http://www.w3.org/2002/07/owl#> .
@prefix rdfs: <http://www.w3.org/2000/01/rdf-schema#> .
"""

CONSISTENT = PREFIXES + """
<http://example.org/test> a owl:Ontology .
:Person a owl:Class .
:alice a owl:NamedIndividual , :Person .
:bob a owl:NamedIndividual .
"""

INCONSISTENT = PREFIXES + """
:A a owl:Class .
:alice a owl:NamedIndividual , :A , [ a owl:Class ; owl:complementOf :A ] .
"""


@pytest.fixture
def consistent(tmp_path):
    path = tmp_path / "people.ttl"
    path.write_text(CONSISTENT, encoding="utf-8")
    return str(path)


@pytest.fixture
def inconsistent(tmp_path):
    path = tmp_path / "clash.ttl"
    path.write_text(INCONSISTENT, encoding="utf-8")
    return str(path)


def _document(tmp_path, name, body):
    path = tmp_path / name
    path.write_text(PREFIXES + body, encoding="utf-8")
    return str(path)


# ---------------------------------------------------------------------------
# Argument handling
# ---------------------------------------------------------------------------

class TestArguments:
    def test_bare_verbose_flags(self):
        assert _normalize_argv(["-vv", "--verbose", "-v3", "x.owl"]) == [
            "--verbose=2", "--verbose=1", "-v3", "x.owl",
        ]

    def test_actions_keep_command_line_order(self):
        args = build_parser().parse_args(["-m", "2", "-c", "-T", "direct", "-j", "x.owl"])
        assert [name for name, _ in args.actions] == ["model", "consistent", "translate", "justification"]
        assert args.actions[0][1] == 2
        assert args.actions[2][1] is Strategy.DIRECT

    def test_unknown_strategy_exits_2(self, consistent):
        with pytest.raises(SystemExit) as exc:
            main(["-T", "bogus", consistent])
        assert exc.value.code == 2

    def test_negative_model_count_exits_2(self, consistent):
        with pytest.raises(SystemExit) as exc:
            main(["-m", "-1", consistent])
        assert exc.value.code == 2

    def test_no_ontologies_exits_2(self):
        with pytest.raises(SystemExit) as exc:
            main(["-c"])
        assert exc.value.code == 2

    def test_unwritable_output_exits_2(self, consistent, tmp_path):
        with pytest.raises(SystemExit) as exc:
            main(["-c", "-O", str(tmp_path / "no" / "such" / "out.txt"), consistent])
        assert exc.value.code == 2

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["-V"])
        assert exc.value.code == 0
        assert f"fdr version : {__version__}" in capsys.readouterr().out

    def test_logging_levels(self):
        configure_logging(1)
        assert logging.getLogger().level == logging.WARNING
        configure_logging(2)
        assert logging.getLogger().level == logging.INFO
        configure_logging(3)
        assert logging.getLogger().level == logging.DEBUG
        configure_logging(1)


# ---------------------------------------------------------------------------
# Actions
# ---------------------------------------------------------------------------

class TestActions:
    def test_consistent(self, consistent, capsys):
        assert main(["-c", consistent]) == 0
        assert capsys.readouterr().out == "Input ontologies are consistent\n"

    def test_inconsistent(self, inconsistent, capsys):
        assert main(["-c", inconsistent]) == 0
        assert capsys.readouterr().out == "Input ontologies are inconsistent\n"

    def test_all_models(self, consistent, capsys):
        assert main(["-m", "0", consistent]) == 0
        out = capsys.readouterr().out
        assert out.startswith("Found 2 models (requested ALL):\n")
        assert "Model 1:" in out and "Model 2:" in out
        assert "  alice: Person" in out

    def test_model_limit(self, consistent, capsys):
        main(["-m", "1", consistent])
        out = capsys.readouterr().out
        assert out.startswith("Found 1 models (requested 1):\n")
        assert "Model 2:" not in out

    def test_translate(self, consistent, capsys):
        main(["-T", "naive", consistent])
        lines = capsys.readouterr().out.splitlines()
        assert "top(alice)." in lines
        assert "person(alice)." in lines
        assert "person(bob) | -person(bob)." in lines

    def test_translate_direct(self, consistent, capsys):
        main(["-T", "direct", consistent])
        assert "person(X) | -person(X) :- top(X)." in capsys.readouterr().out.splitlines()

    def test_entailment(self, consistent, tmp_path, capsys):
        yes = _document(tmp_path, "yes.ttl", ":alice a :Person .\n")
        no = _document(tmp_path, "no.ttl", ":bob a :Person .\n")
        main(["-e", yes, "-e", no, consistent])
        assert capsys.readouterr().out.splitlines() == ["Is entailed? : true", "Is entailed? : false"]

    def test_justification(self, inconsistent, capsys):
        main(["-j", inconsistent])
        lines = capsys.readouterr().out.splitlines()
        assert lines[0] == "Justification (2 axioms):"
        assert len(lines) == 3

    def test_justification_when_consistent(self, consistent, capsys):
        main(["-j", consistent])
        assert capsys.readouterr().out == "Input ontologies are consistent; no justification\n"

    def test_explicit_domain(self, consistent, tmp_path, capsys):
        domain = _document(
            tmp_path, "domain.ttl",
            ":alice a owl:NamedIndividual .\n:bob a owl:NamedIndividual .\n:carol a owl:NamedIndividual .\n",
        )
        main(["-d", domain, "-m", "0", consistent])
        assert capsys.readouterr().out.startswith("Found 4 models (requested ALL):")

    def test_projection(self, consistent, capsys):
        main(["-p", "http://example.org/test#Person", "-m", "0", consistent])
        assert capsys.readouterr().out.startswith("Found 2 models")

    def test_actions_run_in_order(self, consistent, capsys):
        main(["-m", "1", "-c", consistent])
        lines = capsys.readouterr().out.splitlines()
        assert lines[0].startswith("Found 1 models")
        assert lines[-1] == "Input ontologies are consistent"

    def test_output_file(self, consistent, tmp_path, capsys):
        target = tmp_path / "out.txt"
        assert main(["-c", "-O", str(target), consistent]) == 0
        assert target.read_text(encoding="utf-8") == "Input ontologies are consistent\n"
        assert capsys.readouterr().out == ""

    def test_axiomatize(self, consistent, tmp_path):
        target = tmp_path / "closed.ttl"
        assert main(["-a", str(target), consistent]) == 0
        text = target.read_text(encoding="utf-8")
        assert "AllDifferent" in text
        assert "oneOf" in text


# ---------------------------------------------------------------------------
# Failures and batches
# ---------------------------------------------------------------------------

class TestFailures:
    def test_missing_ontology_does_not_stop_the_batch(self, consistent, tmp_path, capsys, caplog):
        missing = str(tmp_path / "missing.owl")
        assert main(["-c", missing, consistent]) == 1
        assert capsys.readouterr().out == "Input ontologies are consistent\n"
        assert "missing.owl" in caplog.text

    def test_missing_domain_document(self, consistent, tmp_path, capsys):
        assert main(["-d", str(tmp_path / "nowhere.ttl"), "-c", consistent]) == 1
        assert capsys.readouterr().out == ""

    def test_unsupported_construct(self, tmp_path, capsys):
        data = _document(tmp_path, "data.ttl", ":age a owl:DatatypeProperty .\n:alice :age 42 .\n")
        assert main(["-c", data]) == 1

    def test_directory_is_scanned(self, tmp_path, capsys):
        _document(tmp_path, "one.ttl", ":alice a owl:NamedIndividual .\n")
        _document(tmp_path, "two.ttl", ":bob a owl:NamedIndividual .\n")
        assert main(["-c", str(tmp_path)]) == 0
        assert capsys.readouterr().out.splitlines() == ["Input ontologies are consistent"] * 2

    def test_malformed_cardinality_does_not_stop_the_batch(self, consistent, tmp_path, capsys, caplog):
        bad = _document(tmp_path, "bad.ttl", """
:knows a owl:ObjectProperty .
:alice a owl:NamedIndividual ,
    [ a owl:Restriction ; owl:onProperty :knows ; owl:minCardinality "two" ] .
""")
        assert main(["-c", bad, consistent]) == 1
        assert capsys.readouterr().out == "Input ontologies are consistent\n"
        assert "bad.ttl" in caplog.text
        assert "cardinality" in caplog.text

    def test_unwritable_axiomatization_target(self, consistent, tmp_path, capsys, caplog):
        target = tmp_path / "missing" / "out.ttl"
        assert main(["-a", str(target), "-c", consistent, consistent]) == 1
        assert not target.exists()
        assert "cannot write axiomatization" in caplog.text

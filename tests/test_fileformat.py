import io
import pathlib
import pytest

from dfamin.dfa import DFA, MalformedAutomatonError
from dfamin.fileformat import (
    ParseError, dump, dumps, emit_dot, load, parse, parse_numbers, print_report
)
from tests.conftest import SAMPLE_TEXT, sample_dfa


class TestParse:
    def test_numbers(self) -> None:
        assert parse_numbers("1 2 4") == [1, 2, 4]
        assert parse_numbers("  12\t3  ") == [12, 3]
        assert parse_numbers("-1 0") == [-1, 0]
        assert parse_numbers("") == []
        assert parse_numbers("   ") == []

    def test_invalid_numbers(self) -> None:
        with pytest.raises(ParseError) as e:
            parse_numbers("1 x 3")
        assert "'x 3'" in e.value.message
        with pytest.raises(ParseError):
            parse_numbers("abc")

    def test_non_ascii_digits(self) -> None:
        with pytest.raises(ParseError):
            parse_numbers("²")
        with pytest.raises(ParseError):
            parse_numbers("1 ٣")

    def test_numbers_need_separator(self) -> None:
        with pytest.raises(ParseError) as e:
            parse_numbers("3-1")
        assert e.value.message == "invalid number at '-1'"
        with pytest.raises(ParseError):
            parse("2\n1\n0\n1\n1-0\n")

    def test_sample(self) -> None:
        assert parse(SAMPLE_TEXT) == sample_dfa()

    def test_wrapped_rows(self) -> None:
        dfa = parse("6\n2\n1 2 4\n3 1 2 5\n2 5 0 4\n\n2 5\n5\n5\n")
        assert dfa == sample_dfa()

    def test_no_accepting_states(self) -> None:
        dfa = parse("2\n1\n\n1\n0\n")
        assert dfa.final == set()
        assert dfa.transition == [[1], [0]]

    def test_empty(self) -> None:
        dfa = parse("0\n3\n")
        assert dfa.num_states == 0
        assert dfa.num_symbols == 3

    def test_missing_header(self) -> None:
        with pytest.raises(ParseError) as e:
            parse("3\n")
        assert e.value.message == "line 2: missing alphabet size"
        with pytest.raises(ParseError) as e:
            parse("3 2\n1\n")
        assert e.value.message == "line 1: expected number of states"

    def test_bad_token(self) -> None:
        with pytest.raises(ParseError) as e:
            parse("2\n1\n0\n1\n0 a\n")
        assert e.value.message.startswith("line 5: ")

    def test_wrong_count(self) -> None:
        with pytest.raises(ParseError) as e:
            parse("2\n2\n0\n1 0\n1\n")
        assert e.value.message == "expected 4 transitions, found 3"

    def test_malformed(self) -> None:
        with pytest.raises(MalformedAutomatonError):
            parse("2\n1\n0\n1\n2\n")
        with pytest.raises(MalformedAutomatonError):
            parse("2\n1\n5\n1\n0\n")
        with pytest.raises(MalformedAutomatonError):
            parse("-2\n1\n\n")
        with pytest.raises(MalformedAutomatonError):
            parse("2\n-1\n\n")

    def test_load(self, tmp_path: pathlib.Path) -> None:
        fn = tmp_path / "dfa.txt"
        fn.write_text(SAMPLE_TEXT)
        assert load(str(fn)) == sample_dfa()

    def test_load_invalid_text(self, tmp_path: pathlib.Path) -> None:
        fn = tmp_path / "dfa.txt"
        fn.write_bytes(b"1\n1\n\xff\n0\n")
        with pytest.raises(ParseError):
            load(str(fn))


class TestOutput:
    def test_dump(self) -> None:
        dfa = sample_dfa()
        dfa.minimize()
        assert dumps(dfa) == "3\n2\n1\n0 1\n1 2\n2 2\n"

    def test_dump_sample(self) -> None:
        f = io.StringIO()
        dump(sample_dfa(), f)
        assert parse(f.getvalue()) == sample_dfa()

    def test_dump_no_accepting_states(self) -> None:
        dfa = DFA.from_table(1, 2, [], [[0, 0]])
        assert dumps(dfa) == "1\n2\n\n0 0\n"
        assert parse(dumps(dfa)) == dfa

    def test_report(self) -> None:
        dfa = sample_dfa()
        dfa.minimize()
        f = io.StringIO()
        print_report(dfa, 1, f)
        assert f.getvalue() == (
            "DFA 1\n"
            "Total states  -  3\n"
            "Alphabet Size -  2\n"
            "Final States  -  1\n"
            "Transition 0  -  0 1\n"
            "Transition 1  -  1 2\n"
            "Transition 2  -  2 2\n")

    def test_dot(self) -> None:
        dfa = sample_dfa()
        dfa.minimize()
        f = io.StringIO()
        emit_dot(dfa, f)
        lines = f.getvalue().splitlines()
        assert lines[0] == 'digraph "dfa" {'
        assert lines[-1] == "}"
        assert '"" -> 0;' in lines
        assert "1 [shape = doublecircle];" in lines
        assert "0 [shape = circle];" in lines
        assert '0 -> 0 [label = "0"];' in lines
        assert '0 -> 1 [label = "1"];' in lines
        assert '2 -> 2 [label = "0,1"];' in lines

    def test_dot_empty(self) -> None:
        f = io.StringIO()
        emit_dot(DFA(2), f, name="empty")
        assert f.getvalue() == 'digraph "empty" {\nrankdir = LR;\n}\n'

    def test_report_no_accepting_states(self) -> None:
        f = io.StringIO()
        print_report(DFA.from_table(1, 2, [], [[0, 0]]), 2, f)
        assert f.getvalue().splitlines() == [
            "DFA 2",
            "Total states  -  1",
            "Alphabet Size -  2",
            "Final States  -  ",
            "Transition 0  -  0 0"]

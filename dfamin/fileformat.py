"""Reading and writing automata in the plain text format.

The format lists the number of states, the alphabet size, the accepting
states (on a single line, which may be empty) and then the destination
of each transition, one row per state::

    6
    2
    1 2 4
    3 1
    2 5
    2 5
    0 4
    2 5
    5 5
"""

# SPDX-License-Identifier: GPL-3.0-or-later

# Copyright (C) 2022 Paolo Bonzini
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

from collections import defaultdict
import compynator.core         # type: ignore
import io
import typing

from .dfa import DFA, MalformedAutomatonError


Parser = typing.Callable[[str], typing.Union[compynator.core.Success, compynator.core.Failure]]

Space = compynator.core.One.where(str.isspace)
Spaces = Space.repeat(lower=0, reducer=lambda x, y: None)
Blanks = Space.repeat(lower=1, reducer=lambda x, y: None)


@typing.no_type_check
def _numbers_parser() -> Parser:
    from compynator.core import One, Terminal

    # str.isdigit also accepts characters such as '²' that int() rejects
    Digits = One.where(lambda c: c in "0123456789").repeat(lower=1)
    Number = Digits.value(int) | Terminal('-').then(Digits).value(lambda s: -int(s))

    # numbers must be separated by whitespace, so "3-1" is not [3, -1]
    First = Number.value(lambda x: [x])
    Rest = Blanks.then(First).repeat(value=[])
    return Spaces.then(First + Rest).skip(Spaces)


Numbers = _numbers_parser()


class ParseError(Exception):
    @property
    def message(self) -> str:
        return str(self.args[0])


def _compynator_parse(p: Parser, s: str) -> typing.Any:
    results = p(s)
    if not isinstance(results, compynator.core.Success):
        raise ParseError(f"invalid number at '{s.strip()}'")
    remain = s
    for result in results:
        if not result.remain:
            return result.value
        if len(result.remain) < len(remain):
            remain = result.remain
    raise ParseError(f"invalid number at '{remain.strip()}'")


def parse_numbers(line: str) -> list[int]:
    """Return the integers in a line of whitespace-separated numbers."""
    if not line.strip():
        return []
    return _compynator_parse(Numbers, line)  # type: ignore


def _parse_header_value(lines: list[str], lineno: int, what: str) -> int:
    if lineno >= len(lines):
        raise ParseError(f"line {lineno + 1}: missing {what}")
    try:
        values = parse_numbers(lines[lineno])
    except ParseError as e:
        raise ParseError(f"line {lineno + 1}: {e.message}")
    if len(values) != 1:
        raise ParseError(f"line {lineno + 1}: expected {what}")
    return values[0]


def parse(text: str) -> DFA:
    """Parse an automaton in text format.  Raise ``ParseError`` if
       the text is not a list of integers laid out as expected, and
       ``MalformedAutomatonError`` if the integers do not describe
       a valid DFA."""
    lines = text.splitlines()
    num_states = _parse_header_value(lines, 0, "number of states")
    num_symbols = _parse_header_value(lines, 1, "alphabet size")
    if num_states < 0:
        raise MalformedAutomatonError(f"negative state count {num_states}")
    if num_symbols < 0:
        raise MalformedAutomatonError(f"negative alphabet size {num_symbols}")

    final: list[int] = []
    cells: list[int] = []
    for lineno, line in enumerate(lines[2:], start=3):
        try:
            values = parse_numbers(line)
        except ParseError as e:
            raise ParseError(f"line {lineno}: {e.message}")
        if lineno == 3:
            final = values
        else:
            cells += values

    # the transition table is a stream of numbers, it need not be
    # laid out one row per line
    if len(cells) != num_states * num_symbols:
        raise ParseError(f"expected {num_states * num_symbols} transitions, found {len(cells)}")
    transition = [cells[i * num_symbols:(i + 1) * num_symbols] for i in range(num_states)]
    return DFA.from_table(num_states, num_symbols, final, transition)


def load(filename: str) -> DFA:
    with open(filename, "r") as f:
        try:
            text = f.read()
        except UnicodeDecodeError as e:
            raise ParseError(f"invalid text: {e.reason}")
    return parse(text)


def dump(dfa: DFA, f: typing.TextIO) -> None:
    print(dfa.num_states, file=f)
    print(dfa.num_symbols, file=f)
    print(*sorted(dfa.final), file=f)
    for row in dfa.transition:
        print(*row, file=f)


def dumps(dfa: DFA) -> str:
    f = io.StringIO()
    dump(dfa, f)
    return f.getvalue()


def print_report(dfa: DFA, index: int, f: typing.TextIO) -> None:
    print(f"DFA {index}", file=f)
    print(f"Total states  -  {dfa.num_states}", file=f)
    print(f"Alphabet Size -  {dfa.num_symbols}", file=f)
    print(f"Final States  -  {' '.join(map(str, sorted(dfa.final)))}", file=f)
    for state, row in enumerate(dfa.transition):
        print(f"Transition {state}  -  {' '.join(map(str, row))}", file=f)


def emit_dot(dfa: DFA, f: typing.TextIO, name: str = "dfa") -> None:
    print(f'digraph "{name}" {{', file=f)
    print("rankdir = LR;", file=f)
    if dfa.num_states:
        print('"" [shape = none];', file=f)
        print('"" -> 0;', file=f)
    for state in dfa.states():
        shape = "doublecircle" if state in dfa.final else "circle"
        print(f"{state} [shape = {shape}];", file=f)

    for source, row in enumerate(dfa.transition):
        # one edge per destination, labeled with all of its symbols
        labels: dict[int, list[str]] = defaultdict(lambda: list())
        for symbol, dest in enumerate(row):
            labels[dest].append(str(symbol))
        for dest, symbols in labels.items():
            print(f'{source} -> {dest} [label = "{",".join(symbols)}"];', file=f)

    print("}", file=f)

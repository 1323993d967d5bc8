"""Command line driver for dfamin."""

# SPDX-License-Identifier: GPL-3.0-or-later

# Copyright (C) 2022 Paolo Bonzini
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

import argparse
import sys
import typing

from . import open_unlink_on_error, output_filename
from .. import fileformat
from ..dfa import ConvergenceError, MalformedAutomatonError
from ..fileformat import ParseError


SEPARATOR = "======================"


class CheckError(Exception):
    @property
    def message(self) -> str:
        return str(self.args[0])


def eat(*args: typing.Any) -> None:
    pass


def print_stderr(*args: typing.Any) -> None:
    print(*args, file=sys.stderr)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dfamin",
        description="Minimize the deterministic finite automata in the given files.")
    parser.add_argument("--verbose", action="store_const",
                        const=print_stderr, default=eat,
                        help="Report progress while minimizing")
    parser.add_argument("--quiet", action="store_true",
                        help="Do not print the minimized automata on standard output")
    parser.add_argument("--output-dir", metavar="DIR",
                        help="Write the minimized automata to DIR instead of "
                             "next to the input files")
    parser.add_argument("--suffix", default="-minimized",
                        help="Suffix added to the name of the output files "
                             "(default: %(default)s)")
    parser.add_argument("--dot", action="store_true",
                        help="Also write a Graphviz DOT file for each minimized automaton")
    parser.add_argument("--check", action="store_true",
                        help="Verify that each minimized automaton matches the "
                             "same language as the input")
    parser.add_argument("files", metavar="FILE", nargs="+",
                        help="Automaton to be minimized")
    return parser


PARSER = build_parser()


def minimize_file(fn: str, index: int, args: argparse.Namespace) -> None:
    args.verbose(f"Reading {fn}")
    dfa = fileformat.load(fn)
    original = dfa.copy()

    kept = dfa.prune_unreachable()
    if len(kept) != original.num_states:
        args.verbose(f"{fn}: removed {original.num_states - len(kept)} unreachable states")

    dfa.minimize()
    args.verbose(f"{fn}: {original.num_states} states, {dfa.num_states} after minimization")

    if args.check and not dfa.is_equivalent(original):
        raise CheckError("minimized automaton does not match the same language")

    if not args.quiet:
        print("MINIMIZED ", end="")
        fileformat.print_report(dfa, index, sys.stdout)

    out = output_filename(fn, args.suffix, args.output_dir)
    args.verbose(f"Writing {out}")
    with open_unlink_on_error(out) as f:
        fileformat.dump(dfa, f)

    if args.dot:
        out = output_filename(fn, args.suffix, args.output_dir, ext=".dot")
        args.verbose(f"Writing {out}")
        with open_unlink_on_error(out) as f:
            fileformat.emit_dot(dfa, f)


def main(argv: typing.Optional[list[str]] = None) -> None:
    args = PARSER.parse_args(argv)

    failed = False
    for index, fn in enumerate(args.files, start=1):
        if not args.quiet:
            print(SEPARATOR)
        try:
            minimize_file(fn, index, args)
        except OSError as e:
            print(e, file=sys.stderr)
            failed = True
        except (ParseError, MalformedAutomatonError) as e:
            print(f"{fn}: {e.message}", file=sys.stderr)
            failed = True
        except (ConvergenceError, CheckError) as e:
            print(f"{fn}: internal error: {e}", file=sys.stderr)
            failed = True

    if not args.quiet:
        print(SEPARATOR)
    sys.exit(1 if failed else 0)

#! /usr/bin/env python3

# SPDX-License-Identifier: GPL-3.0-or-later

# Copyright (C) 2022 Paolo Bonzini
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

import abc
import itertools
import typing

T = typing.TypeVar('T')


class Automaton(typing.Generic[T], metaclass=abc.ABCMeta):
    """A deterministic automaton over the symbols ``0..num_symbols-1``.

       The transition function is total: every state has exactly one
       successor for each symbol.  The only failure state is the one
       of an automaton without states, which rejects every string."""

    num_symbols: int

    @abc.abstractmethod
    def initial(self) -> T:
        """Return the initial state, or the failure state if the
           automaton has no states."""
        pass

    @abc.abstractmethod
    def advance(self, source: T, symbol: int) -> T:
        """Return the state reached by the automaton when fed
           ``symbol`` from the state ``source``.  Raise ``ValueError``
           if ``symbol`` is not part of the alphabet."""
        pass

    def is_failure(self, state: T) -> bool:
        """Return True if ``state`` does not accept any string."""
        return state is None

    @abc.abstractmethod
    def is_final(self, state: T) -> bool:
        """Return True if ``state`` is an accepting state."""
        pass

    def check_symbol(self, symbol: int) -> None:
        if symbol < 0 or symbol >= self.num_symbols:
            raise ValueError(f"invalid symbol {symbol} for alphabet of size {self.num_symbols}")

    def run(self, feed: typing.Iterable[int]) -> T:
        """Return the state reached after reading the symbols in ``feed``."""
        s = self.initial()
        for symbol in feed:
            s = self.advance(s, symbol)
        return s

    def matches(self, feed: typing.Iterable[int]) -> bool:
        """Return True if the automaton matches the sequence
           of symbols in ``feed``."""
        return self.is_final(self.run(feed))

    def words(self, max_length: int) -> typing.Iterator[tuple[int, ...]]:
        """Yield every string over the alphabet with at most
           ``max_length`` symbols, shortest first."""
        for length in range(max_length + 1):
            yield from itertools.product(range(self.num_symbols), repeat=length)

    def accepted(self, max_length: int) -> typing.Iterator[tuple[int, ...]]:
        """Yield the strings with at most ``max_length`` symbols that
           the automaton matches."""
        return (word for word in self.words(max_length) if self.matches(word))

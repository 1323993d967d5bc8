#! /usr/bin/env python3

# SPDX-License-Identifier: GPL-3.0-or-later

# Copyright (C) 2022 Paolo Bonzini
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

from . import Automaton
import dataclasses
import typing


# Element ``s`` is the representative (smallest member) of the block
# that contains state ``s``.
Partition = list[int]


class MalformedAutomatonError(Exception):
    @property
    def message(self) -> str:
        return str(self.args[0])


class ConvergenceError(RuntimeError):
    pass


@dataclasses.dataclass
class DFA(Automaton[typing.Optional[int]]):
    num_symbols: int
    transition: list[list[int]]
    final: set[int]

    def __init__(self, num_symbols: int) -> None:
        super().__init__()
        if num_symbols < 0:
            raise MalformedAutomatonError(f"negative alphabet size {num_symbols}")
        self.num_symbols = num_symbols
        self.transition = []
        self.final = set()

    @classmethod
    def from_table(cls, num_states: int, num_symbols: int,
                   final: typing.Iterable[int],
                   transition: typing.Sequence[typing.Sequence[int]]) -> 'DFA':
        """Build a DFA from a dense transition table, where
           ``transition[i][j]`` is the destination of state ``i`` on
           symbol ``j``.  Raise ``MalformedAutomatonError`` unless the
           table is total and every state id is in range."""
        if num_states < 0:
            raise MalformedAutomatonError(f"negative state count {num_states}")
        if len(transition) != num_states:
            raise MalformedAutomatonError(
                f"expected {num_states} transition rows, found {len(transition)}")

        result = cls(num_symbols)
        result.transition = [list(row) for row in transition]
        result.final = set(final)
        result.validate()
        return result

    @property
    def num_states(self) -> int:
        return len(self.transition)

    def states(self) -> range:
        return range(len(self.transition))

    def copy(self) -> 'DFA':
        result = DFA(self.num_symbols)
        result.transition = [list(row) for row in self.transition]
        result.final = set(self.final)
        return result

    def add_state(self) -> int:
        """Add a state to the automaton and return its integer identifier.
           All transitions of the new state loop back to itself."""
        state = len(self.transition)
        self.transition.append([state] * self.num_symbols)
        return state

    def mark_final(self, state: int) -> None:
        """Mark a state as final.  Strings that lead to the state are
           matched by the automaton."""
        assert state >= 0 and state < len(self.transition)
        self.final.add(state)

    def add_transition(self, source: int, symbol: int, dest: int) -> None:
        """Set the destination of the transition for the given symbol from
           the source node ``source`` to ``dest``.  The transition replaces
           the previous one with the given source and symbol."""
        assert symbol >= 0 and symbol < self.num_symbols
        assert dest >= 0 and dest < len(self.transition)
        self.transition[source][symbol] = dest

    def validate(self) -> None:
        """Check that the transition table is dense and total, and that
           every accepting state exists."""
        n = len(self.transition)
        for state, row in enumerate(self.transition):
            if len(row) != self.num_symbols:
                raise MalformedAutomatonError(
                    f"state {state} has {len(row)} transitions, expected {self.num_symbols}")
            for symbol, dest in enumerate(row):
                if not isinstance(dest, int) or isinstance(dest, bool):
                    raise MalformedAutomatonError(
                        f"transition ({state}, {symbol}) is not a state id: {dest!r}")
                if dest < 0 or dest >= n:
                    raise MalformedAutomatonError(
                        f"transition ({state}, {symbol}) leads to invalid state {dest}")
        for state in sorted(self.final, key=repr):
            if not isinstance(state, int) or isinstance(state, bool) \
                    or state < 0 or state >= n:
                raise MalformedAutomatonError(f"invalid accepting state {state!r}")

    def initial(self) -> typing.Optional[int]:
        return 0 if self.transition else None

    def advance(self, source: typing.Optional[int], symbol: int) -> typing.Optional[int]:
        """Follow the transition out of ``source`` labeled ``symbol``.
           A negative symbol would silently index the row from the end,
           so the alphabet is checked even for the failure state."""
        self.check_symbol(symbol)
        if source is None:
            return None
        return self.transition[source][symbol]

    def is_final(self, state: typing.Optional[int]) -> bool:
        return state is not None and state in self.final

    def reachable_states(self) -> list[int]:
        """Return, in ascending order, the states that can be reached
           from the initial state."""
        if not self.transition:
            return []

        reachable = {0}
        frontier = {0}
        while frontier:
            successors: set[int] = set()
            for source in sorted(frontier):
                successors.update(self.transition[source])
            frontier = successors - reachable
            reachable |= frontier
        return sorted(reachable)

    def prune_unreachable(self) -> list[int]:
        """Remove the states that cannot be reached from the initial
           state.  The remaining states are renumbered contiguously in
           their original order; the result maps each new state id to
           the id it had before pruning."""
        kept = self.reachable_states()
        if len(kept) == len(self.transition):
            return kept

        # unreachable states are never the target of a reachable one,
        # so every cell of a kept row is in renumber
        renumber = {old: new for new, old in enumerate(kept)}
        self.transition = [
            [renumber[dest] for dest in self.transition[old]]
            for old in kept]
        self.final = {renumber[s] for s in self.final if s in renumber}
        return kept

    def initial_partition(self) -> Partition:
        """Split the states into an accepting and a rejecting block."""
        partition: Partition = []
        first_final: typing.Optional[int] = None
        first_nonfinal: typing.Optional[int] = None
        for state in self.states():
            if state in self.final:
                if first_final is None:
                    first_final = state
                partition.append(first_final)
            else:
                if first_nonfinal is None:
                    first_nonfinal = state
                partition.append(first_nonfinal)
        return partition

    def _equivalent(self, s1: int, s2: int, partition: Partition) -> bool:
        if partition[s1] != partition[s2]:
            return False
        for dest1, dest2 in zip(self.transition[s1], self.transition[s2]):
            if partition[dest1] != partition[dest2]:
                return False
        return True

    def refine(self, partition: Partition) -> Partition:
        """Perform one round of Moore's algorithm: two states stay in the
           same block if they were in the same block of ``partition`` and
           their successors are in the same block for every symbol.

           ``partition`` is only read, so the lookups always refer to
           the previous round."""
        n = len(self.transition)
        result = [-1] * n
        for s1 in range(n):
            if result[s1] != -1:
                continue
            result[s1] = s1
            for s2 in range(s1 + 1, n):
                if result[s2] == -1 and self._equivalent(s1, s2, partition):
                    result[s2] = s1
        return result

    def partitions(self) -> typing.Iterator[Partition]:
        """Yield the initial partition and then each refinement of it,
           stopping when a round does not change the partition; the last
           partition yielded is the Myhill-Nerode equivalence."""
        partition = self.initial_partition()
        yield partition
        if not partition:
            return

        # every round that changes the partition adds at least one block,
        # so the n-th round at the latest finds the fixed point
        for _ in range(len(partition)):
            refined = self.refine(partition)
            if refined == partition:
                return
            partition = refined
            yield partition

        raise ConvergenceError(
            f"partition refinement did not converge in {len(partition)} rounds")

    def quotient(self, partition: Partition) -> 'DFA':
        """Return the automaton obtained by collapsing each block of
           ``partition`` into a single state.  The blocks are numbered
           in the order of their representatives.  ``partition`` must be
           stable under ``refine``, otherwise the result depends on
           which member of a block provides its transitions."""
        assert len(partition) == len(self.transition)
        representatives = sorted(set(partition))
        index = {rep: i for i, rep in enumerate(representatives)}

        result = DFA(self.num_symbols)
        result.transition = [
            [index[partition[dest]] for dest in self.transition[rep]]
            for rep in representatives]
        result.final = {index[partition[s]] for s in self.final}
        return result

    def minimize(self) -> None:
        """Replace ``self`` with the minimal DFA that matches the same
           language."""
        self.validate()
        self.prune_unreachable()

        partition: Partition = []
        for partition in self.partitions():
            pass

        minimized = self.quotient(partition)
        self.transition = minimized.transition
        self.final = minimized.final

    def minimal(self) -> 'DFA':
        """Return a DFA that is equivalent to ``self`` but has a minimal
           number of states."""
        result = self.copy()
        result.minimize()
        return result

    def is_minimal(self) -> bool:
        """Return True if all states are reachable and no two of them
           are equivalent."""
        if len(self.reachable_states()) != len(self.transition):
            return False
        partition: Partition = []
        for partition in self.partitions():
            pass
        return len(set(partition)) == len(partition)

    def is_equivalent(self, other: 'DFA') -> bool:
        """Return True if ``self`` and ``other`` match the same strings.
           Both automata must have the same alphabet size."""
        if self.num_symbols != other.num_symbols:
            raise ValueError("automata have different alphabets")

        # walk the product automaton; None stands for the rejecting
        # sink of an automaton without states
        start = (self.initial(), other.initial())
        seen = {start}
        queue = [start]
        while queue:
            s1, s2 = queue.pop()
            if self.is_final(s1) != other.is_final(s2):
                return False
            for symbol in range(self.num_symbols):
                dest = (self.advance(s1, symbol), other.advance(s2, symbol))
                if dest not in seen:
                    seen.add(dest)
                    queue.append(dest)
        return True

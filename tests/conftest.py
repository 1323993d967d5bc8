import random
import pytest
import typing

from dfamin.dfa import DFA

SAMPLE_TEXT = """6
2
1 2 4
3 1
2 5
2 5
0 4
2 5
5 5
"""


def sample_dfa() -> DFA:
    return DFA.from_table(6, 2, {1, 2, 4},
                          [[3, 1], [2, 5], [2, 5], [0, 4], [2, 5], [5, 5]])


def random_dfa(seed: int) -> DFA:
    rng = random.Random(seed)
    n = rng.randint(1, 8)
    k = rng.randint(1, 3)
    final = {s for s in range(n) if rng.random() < 0.4}
    transition = [[rng.randrange(n) for _ in range(k)] for _ in range(n)]
    return DFA.from_table(n, k, final, transition)


@pytest.fixture
def sample() -> DFA:
    return sample_dfa()


@pytest.fixture(params=range(60))
def any_dfa(request: typing.Any) -> DFA:
    return random_dfa(request.param)

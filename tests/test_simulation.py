import numpy as np
import pytest

from automin.automaton import EPSILON, Automaton
from automin.simulation import accepts, epsilon_closure_matrix

# Accepts "ab" and "b" through an epsilon fork in front of both branches.
FORKED = Automaton.from_delta(
    states={"01q0", "01q1", "02q0", "02q1", "0f0", "0q0"},
    alphabet={"a", "b"},
    start="0q0",
    finals={"0f0"},
    delta=[
        ("01q0", "a", "01q1"),
        ("01q1", "b", "0f0"),
        ("02q0", "b", "02q1"),
        ("02q1", EPSILON, "0f0"),
        ("0q0", EPSILON, "01q0"),
        ("0q0", EPSILON, "02q0"),
    ],
)


@pytest.mark.parametrize(
    "word, expected",
    [
        ("ab", True),
        ("b", True),
        ("", False),
        ("a", False),
        ("ba", False),
        ("abb", False),
        ("c", False),
    ],
)
def test_accepts(word, expected):
    assert expected == accepts(FORKED, word)


def test_accepts_empty_word_when_start_is_final():
    automaton = Automaton.from_delta({"s"}, {"a"}, "s", {"s"})
    assert accepts(automaton, "")
    assert not accepts(automaton, "a")


def test_epsilon_closure_matrix():
    automaton = Automaton.from_delta(
        {"p", "q", "r"}, {"a"}, "p", {"r"}, [("p", EPSILON, "q"), ("q", EPSILON, "r")]
    )
    expected = np.array(
        [
            [True, True, True],
            [False, True, True],
            [False, False, True],
        ]
    )
    assert np.array_equal(expected, epsilon_closure_matrix(automaton))


def test_epsilon_closure_matrix_without_epsilon():
    automaton = Automaton.from_delta({"p", "q"}, {"a"}, "p", {"q"}, [("p", "a", "q")])
    assert np.array_equal(np.eye(2, dtype=bool), epsilon_closure_matrix(automaton))

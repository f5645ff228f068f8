import numpy as np
import scipy as sp

from automin.automaton import EPSILON, Automaton
from automin.relation import (
    boolean_decomposition,
    get_relation_matrix,
    reflexive_transitive_closure,
    states_indices,
    warshall,
)

RELATION_MATRIX = np.array(
    [
        [True, True, False, False],
        [False, True, True, False],
        [True, False, True, False],
        [False, False, False, True],
    ]
)

CLOSURE = np.array(
    [
        [True, True, True, False],
        [True, True, True, False],
        [True, True, True, False],
        [False, False, False, True],
    ]
)


def make_automaton() -> Automaton:
    return Automaton.from_delta(
        states={"q0", "q1", "q2", "q3"},
        alphabet={"a", "b"},
        start="q0",
        finals={"q1"},
        delta=[
            ("q0", "a", "q0"),
            ("q0", "b", "q1"),
            ("q1", "a", "q1"),
            ("q1", "b", "q2"),
            ("q2", "a", "q0"),
            ("q2", "b", "q2"),
            ("q3", "a", "q3"),
        ],
    )


def test_states_indices_follow_natural_order():
    expected = {"q0": 0, "q1": 1, "q2": 2, "q3": 3}
    assert expected == states_indices(make_automaton())


def test_boolean_decomposition():
    decomposition = boolean_decomposition(make_automaton())
    assert set(decomposition) == {"a", "b"}
    expected_a = np.array(
        [
            [True, False, False, False],
            [False, True, False, False],
            [True, False, False, False],
            [False, False, False, True],
        ]
    )
    assert np.array_equal(decomposition["a"].toarray(), expected_a)


def test_get_relation_matrix():
    actual = get_relation_matrix(make_automaton())
    assert actual.dtype == bool
    assert np.array_equal(RELATION_MATRIX, actual)


def test_relation_matrix_includes_epsilon_edges():
    automaton = Automaton.from_delta(
        {"p", "q", "r"}, {"a"}, "p", {"r"}, [("p", EPSILON, "q"), ("q", "a", "r")]
    )
    expected = np.array(
        [
            [False, True, False],
            [False, False, True],
            [False, False, False],
        ]
    )
    assert np.array_equal(expected, get_relation_matrix(automaton))


def test_relation_matrix_without_transitions():
    automaton = Automaton.from_delta({"p", "q"}, {"a"}, "p", {"q"})
    assert not get_relation_matrix(automaton).any()


def test_warshall():
    assert np.array_equal(CLOSURE, warshall(RELATION_MATRIX))


def test_warshall_does_not_touch_input():
    matrix = RELATION_MATRIX.copy()
    warshall(matrix)
    assert np.array_equal(RELATION_MATRIX, matrix)


def test_warshall_chain_is_not_reflexive():
    chain = np.array(
        [
            [False, True, False],
            [False, False, True],
            [False, False, False],
        ]
    )
    expected = np.array(
        [
            [False, True, True],
            [False, False, True],
            [False, False, False],
        ]
    )
    assert np.array_equal(expected, warshall(chain))


def test_warshall_accepts_sparse_matrices():
    sparse = sp.sparse.csc_matrix(RELATION_MATRIX)
    assert np.array_equal(CLOSURE, warshall(sparse))


def test_reflexive_closure_adds_diagonal_to_warshall():
    rng = np.random.default_rng(7)
    for _ in range(20):
        matrix = rng.random((6, 6)) < 0.2
        expected = warshall(matrix) | np.eye(6, dtype=bool)
        assert np.array_equal(expected, reflexive_transitive_closure(matrix))

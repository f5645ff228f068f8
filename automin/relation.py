import functools
import operator
import numpy as np
import scipy as sp

from automin.automaton import Automaton, StateLabel, Symbol

RelationMatrix = np.ndarray


def states_indices(automaton: Automaton) -> dict[StateLabel, int]:
    return {state: i for (i, state) in enumerate(automaton.sorted_states())}


def boolean_decomposition(automaton: Automaton) -> dict[Symbol, sp.sparse.csc_matrix]:
    indices = states_indices(automaton)
    matrix_size = (len(indices), len(indices))

    rows_by_symbol: dict[Symbol, list[int]] = {}
    cols_by_symbol: dict[Symbol, list[int]] = {}
    for state, symbol, next_state in automaton.delta:
        rows_by_symbol.setdefault(symbol, []).append(indices[state])
        cols_by_symbol.setdefault(symbol, []).append(indices[next_state])

    decomposition: dict[Symbol, sp.sparse.csc_matrix] = {}
    for symbol in automaton.symbols:
        if symbol not in rows_by_symbol:
            continue
        rows = rows_by_symbol[symbol]
        cols = cols_by_symbol[symbol]
        decomposition[symbol] = sp.sparse.csc_matrix(
            (np.ones(len(rows), dtype=bool), (rows, cols)),
            shape=matrix_size,
            dtype=bool,
        )
    return decomposition


def get_relation_matrix(automaton: Automaton) -> RelationMatrix:
    states_amount = len(automaton.states)
    init_matrix = sp.sparse.csc_matrix((states_amount, states_amount), dtype=bool)
    common_matrix = functools.reduce(
        operator.add, boolean_decomposition(automaton).values(), init_matrix
    )
    return common_matrix.toarray().astype(bool)


def _as_boolean_array(matrix) -> np.ndarray:
    if sp.sparse.issparse(matrix):
        return matrix.toarray().astype(bool)
    return np.array(matrix, dtype=bool)


def warshall(matrix) -> RelationMatrix:
    closure = _as_boolean_array(matrix)
    n = closure.shape[0]
    if closure.shape != (n, n):
        raise ValueError(f"expected a square matrix, got shape {closure.shape}")

    # Row k and column k are fixed while k is the intermediate index.
    for k in range(n):
        closure |= np.outer(closure[:, k], closure[k, :])
    return closure


def reflexive_transitive_closure(matrix) -> RelationMatrix:
    closure = _as_boolean_array(matrix)
    n = closure.shape[0]
    closure |= np.eye(n, dtype=bool)

    # Squaring doubles the covered path length, so log2(n) rounds suffice.
    while True:
        squared = (closure.astype(np.int64) @ closure.astype(np.int64)) > 0
        if np.array_equal(squared, closure):
            return closure
        closure = squared

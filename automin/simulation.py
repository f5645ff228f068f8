import numpy as np

from typing import Iterable

from automin.automaton import EPSILON, Automaton, Symbol
from automin.relation import (
    RelationMatrix,
    boolean_decomposition,
    reflexive_transitive_closure,
    states_indices,
)


def epsilon_closure_matrix(automaton: Automaton) -> RelationMatrix:
    states_amount = len(automaton.states)
    decomposition = boolean_decomposition(automaton)
    if EPSILON not in decomposition:
        return np.eye(states_amount, dtype=bool)
    return reflexive_transitive_closure(decomposition[EPSILON])


def _step(configuration: np.ndarray, matrix: np.ndarray) -> np.ndarray:
    return (configuration.astype(np.int64) @ matrix.astype(np.int64)) > 0


def accepts(automaton: Automaton, word: Iterable[Symbol]) -> bool:
    indices = states_indices(automaton)
    decomposition = {
        symbol: matrix.toarray()
        for symbol, matrix in boolean_decomposition(automaton).items()
        if symbol != EPSILON
    }
    epsilon_closure = epsilon_closure_matrix(automaton)

    current_config = np.zeros(len(indices), dtype=bool)
    current_config[indices[automaton.start]] = True
    current_config = _step(current_config, epsilon_closure)

    for symbol in word:
        if symbol not in decomposition:
            return False
        current_config = _step(current_config, decomposition[symbol])
        current_config = _step(current_config, epsilon_closure)

    final_config = np.zeros(len(indices), dtype=bool)
    for state in automaton.finals:
        final_config[indices[state]] = True
    return bool(np.any(current_config & final_config))

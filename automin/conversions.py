from pyformlang.finite_automaton import (
    DeterministicFiniteAutomaton,
    Epsilon,
    EpsilonNFA,
    NondeterministicFiniteAutomaton as NFA,
    State,
    Symbol,
)
from pyformlang.regular_expression import Regex

from automin.automaton import EPSILON, Automaton, AutomatonError


def _symbol_from_pyformlang(symbol: Symbol) -> str:
    return EPSILON if isinstance(symbol, Epsilon) else str(symbol.value)


def from_pyformlang(
    automaton: EpsilonNFA | NFA | DeterministicFiniteAutomaton,
) -> Automaton:
    if len(automaton.start_states) != 1:
        raise AutomatonError(
            f"expected exactly one start state, got {len(automaton.start_states)}"
        )
    (start_state,) = automaton.start_states

    states = {state.value for state in automaton.states}
    finals = {state.value for state in automaton.final_states}

    delta = set()
    for state, row in automaton.to_dict().items():
        for symbol, targets in row.items():
            # Deterministic transition functions map to a single state.
            if isinstance(targets, State):
                targets = {targets}
            for next_state in targets:
                delta.add(
                    (state.value, _symbol_from_pyformlang(symbol), next_state.value)
                )

    alphabet = {symbol for _, symbol, _ in delta if symbol != EPSILON}
    alphabet |= {
        _symbol_from_pyformlang(symbol)
        for symbol in automaton.symbols
        if not isinstance(symbol, Epsilon)
    }

    return Automaton.from_delta(states, alphabet, start_state.value, finals, delta)


def to_pyformlang(automaton: Automaton) -> EpsilonNFA:
    enfa = EpsilonNFA()
    enfa.add_start_state(State(automaton.start))
    for state in automaton.finals:
        enfa.add_final_state(State(state))
    for state, symbol, next_state in automaton.delta:
        enfa.add_transition(
            State(state),
            Epsilon() if symbol == EPSILON else Symbol(symbol),
            State(next_state),
        )
    return enfa


def regex_to_automaton(regex: str) -> Automaton:
    return from_pyformlang(Regex(regex).to_epsilon_nfa())

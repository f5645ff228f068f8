import logging

from automin.automaton import Automaton, AutomatonError, StateLabel
from automin.equivalence import apply_quotient, get_quotient
from automin.graph_utils import get_statistics
from automin.reachability import remove_unreachable_states

logger = logging.getLogger(__name__)

DEFAULT_PREFIX = "Q"


def minify(automaton: Automaton) -> Automaton:
    logger.debug("minifying automaton: %s", get_statistics(automaton))

    pruned = remove_unreachable_states(automaton)
    logger.debug("without unreachable states: %s", get_statistics(pruned))

    quotient = get_quotient(pruned)
    minimal = apply_quotient(pruned, quotient)
    logger.debug("minimal automaton: %s", get_statistics(minimal))
    return minimal


def make_rename_map(
    automaton: Automaton, prefix: str = DEFAULT_PREFIX
) -> dict[StateLabel, str]:
    rename_map = {automaton.start: f"{prefix}0"}
    others = (state for state in automaton.sorted_states() if state != automaton.start)
    for index, state in enumerate(others, start=1):
        rename_map[state] = f"{prefix}{index}"
    return rename_map


def pretify_automata(automaton: Automaton, prefix: str = DEFAULT_PREFIX) -> Automaton:
    """Rename states to ``Q0, Q1, ...`` with the start state always ``Q0``."""
    rename_map = make_rename_map(automaton, prefix)
    logger.debug("renaming states: %s", rename_map)

    def rename(state: StateLabel) -> str:
        try:
            return rename_map[state]
        except KeyError:
            raise AutomatonError(f"state {state!r} has no canonical name") from None

    return Automaton(
        states=frozenset(rename_map.values()),
        alphabet=automaton.alphabet,
        start=rename_map[automaton.start],
        finals=frozenset(rename(state) for state in automaton.finals),
        delta=frozenset(
            (rename(state), symbol, rename(next_state))
            for state, symbol, next_state in automaton.delta
        ),
    )

import logging

from automin.automaton import Automaton, StateLabel, format_automaton
from automin.relation import RelationMatrix, get_relation_matrix, warshall

logger = logging.getLogger(__name__)


def get_reachable_states(
    automaton: Automaton, closure: RelationMatrix
) -> frozenset[StateLabel]:
    states = automaton.sorted_states()
    start_index = states.index(automaton.start)

    # The start state is reachable even when its closure row is all false.
    reachable: set[StateLabel] = {automaton.start}
    for i, is_reachable in enumerate(closure[start_index]):
        if is_reachable:
            reachable.add(states[i])
    return frozenset(reachable)


def remove_unreachable_states_with_params(
    automaton: Automaton, reachable_states: frozenset[StateLabel]
) -> Automaton:
    states = automaton.states & reachable_states
    # Only the source decides whether a transition survives. A kept source whose
    # destination was dropped leaves the state set and raises AutomatonError.
    delta = frozenset(
        transition for transition in automaton.delta if transition[0] in states
    )
    return Automaton(
        states=states,
        alphabet=automaton.alphabet,
        start=automaton.start,
        finals=automaton.finals & states,
        delta=delta,
    )


def remove_unreachable_states(automaton: Automaton) -> Automaton:
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("removing unreachable states from\n%s", format_automaton(automaton))

    relation_matrix = get_relation_matrix(automaton)
    logger.debug("relation matrix:\n%s", relation_matrix.astype(int))

    closure = warshall(relation_matrix)
    logger.debug("relation matrix closure:\n%s", closure.astype(int))

    reachable_states = get_reachable_states(automaton, closure)
    logger.debug(
        "reachable states: %s, dropped: %s",
        sorted(reachable_states),
        sorted(automaton.states - reachable_states),
    )

    return remove_unreachable_states_with_params(automaton, reachable_states)

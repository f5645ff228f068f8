import logging

from automin.automaton import Automaton, StateLabel, Symbol, Transition

logger = logging.getLogger(__name__)

CLASS_NAME_SEPARATOR = "-"

EquivalenceClass = frozenset[StateLabel]
Quotient = frozenset[EquivalenceClass]

# Class of an empty successor set: states without a transition on a symbol
# agree with each other, as if both went to the same dead state.
EMPTY_CLASS: EquivalenceClass = frozenset()


def initial_partition(automaton: Automaton) -> Quotient:
    non_finals = automaton.states - automaton.finals
    finals = automaton.finals
    return frozenset(eq_class for eq_class in (non_finals, finals) if eq_class)


def get_equivalence_class(
    states: frozenset[StateLabel], quotient: Quotient
) -> EquivalenceClass | None:
    if not states:
        return EMPTY_CLASS
    for eq_class in quotient:
        if states <= eq_class:
            return eq_class
    return None


def _signature(
    automaton: Automaton,
    state: StateLabel,
    alphabet: list[Symbol],
    quotient: Quotient,
) -> tuple[EquivalenceClass, ...] | None:
    signature = []
    for symbol in alphabet:
        eq_class = get_equivalence_class(automaton.get_next_states(state, symbol), quotient)
        if eq_class is None:
            return None
        signature.append(eq_class)
    return tuple(signature)


def split_class(
    automaton: Automaton, eq_class: EquivalenceClass, quotient: Quotient
) -> Quotient:
    if len(eq_class) == 1:
        return frozenset({eq_class})

    # Epsilon is left out: only alphabet symbols distinguish states.
    alphabet = sorted(automaton.alphabet)
    groups: dict[tuple[EquivalenceClass, ...], set[StateLabel]] = {}
    subclasses: set[EquivalenceClass] = set()

    for state in eq_class:
        signature = _signature(automaton, state, alphabet, quotient)
        if signature is None:
            subclasses.add(frozenset({state}))
            continue
        groups.setdefault(signature, set()).add(state)

    subclasses.update(frozenset(group) for group in groups.values())
    return frozenset(subclasses)


def refine(automaton: Automaton, quotient: Quotient) -> Quotient:
    next_quotient: set[EquivalenceClass] = set()
    for eq_class in quotient:
        next_quotient |= split_class(automaton, eq_class, quotient)
    return frozenset(next_quotient)


def get_quotient(automaton: Automaton) -> Quotient:
    # Unreachable states are not rejected; they are partitioned like any other.
    quotient = initial_partition(automaton)
    rounds = 0

    while True:
        rounds += 1
        next_quotient = refine(automaton, quotient)
        logger.debug(
            "refinement round %d: %d -> %d classes", rounds, len(quotient), len(next_quotient)
        )
        if next_quotient == quotient:
            return quotient
        quotient = next_quotient


def stateset_name(eq_class: EquivalenceClass) -> str:
    return CLASS_NAME_SEPARATOR.join(str(state) for state in sorted(eq_class))


def apply_quotient(automaton: Automaton, quotient: Quotient) -> Automaton:
    class_names: dict[StateLabel, str] = {}
    for eq_class in quotient:
        name = stateset_name(eq_class)
        for state in eq_class:
            class_names[state] = name

    states = frozenset(class_names[state] for state in automaton.states)
    finals = frozenset(class_names[state] for state in automaton.finals)
    delta: set[Transition] = set()
    for state, symbol, next_state in automaton.delta:
        delta.add((class_names[state], symbol, class_names[next_state]))

    logger.debug("merged states: %s", class_names)

    return Automaton(
        states=states,
        alphabet=automaton.alphabet,
        start=class_names[automaton.start],
        finals=finals,
        delta=frozenset(delta),
    )

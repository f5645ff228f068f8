from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Hashable, Iterable, Mapping

EPSILON = "λ"

StateLabel = Hashable
Symbol = str
Transition = tuple[StateLabel, Symbol, StateLabel]


class AutomatonError(ValueError):
    pass


@dataclass(frozen=True)
class Automaton:
    states: frozenset[StateLabel]
    alphabet: frozenset[Symbol]
    start: StateLabel
    finals: frozenset[StateLabel]
    delta: frozenset[Transition]

    _transitions: Mapping[StateLabel, Mapping[Symbol, frozenset[StateLabel]]] = field(
        init=False, repr=False, compare=False
    )

    def __post_init__(self):
        object.__setattr__(self, "states", frozenset(self.states))
        object.__setattr__(self, "alphabet", frozenset(self.alphabet))
        object.__setattr__(self, "finals", frozenset(self.finals))
        object.__setattr__(self, "delta", frozenset(self.delta))
        self._validate()

        transitions: dict[StateLabel, dict[Symbol, set[StateLabel]]] = {}
        for state, symbol, next_state in self.delta:
            transitions.setdefault(state, {}).setdefault(symbol, set()).add(next_state)
        object.__setattr__(
            self,
            "_transitions",
            MappingProxyType(
                {
                    state: MappingProxyType(
                        {symbol: frozenset(targets) for symbol, targets in row.items()}
                    )
                    for state, row in transitions.items()
                }
            ),
        )

    def _validate(self):
        if self.start not in self.states:
            raise AutomatonError(f"start state {self.start!r} is not a state")
        if not self.finals <= self.states:
            unknown = self.finals - self.states
            raise AutomatonError(f"final states {set(unknown)!r} are not states")
        if EPSILON in self.alphabet:
            raise AutomatonError(f"alphabet must not contain the epsilon symbol {EPSILON!r}")

        for transition in self.delta:
            if len(transition) != 3:
                raise AutomatonError(f"malformed transition {transition!r}")
            state, symbol, next_state = transition
            if state not in self.states or next_state not in self.states:
                raise AutomatonError(f"transition {transition!r} leaves the state set")
            if symbol != EPSILON and symbol not in self.alphabet:
                raise AutomatonError(
                    f"transition {transition!r} uses a symbol outside the alphabet"
                )

    @classmethod
    def from_delta(
        cls,
        states: Iterable[StateLabel],
        alphabet: Iterable[Symbol],
        start: StateLabel,
        finals: Iterable[StateLabel],
        delta: Iterable[Transition] = (),
    ) -> "Automaton":
        return cls(
            states=frozenset(states),
            alphabet=frozenset(alphabet),
            start=start,
            finals=frozenset(finals),
            delta=frozenset(tuple(transition) for transition in delta),
        )

    @property
    def transitions(self) -> Mapping[StateLabel, Mapping[Symbol, frozenset[StateLabel]]]:
        return self._transitions

    @property
    def symbols(self) -> frozenset[Symbol]:
        return self.alphabet | {EPSILON}

    def get_next_states(self, state: StateLabel, symbol: Symbol) -> frozenset[StateLabel]:
        return self._transitions.get(state, {}).get(symbol, frozenset())

    def sorted_states(self) -> list[StateLabel]:
        return sorted(self.states)

    def has_epsilon_transitions(self) -> bool:
        return any(symbol == EPSILON for _, symbol, _ in self.delta)


def format_automaton(automaton: Automaton) -> str:
    lines = [
        f"states: {', '.join(map(str, automaton.sorted_states()))}",
        f"alphabet: {', '.join(sorted(automaton.alphabet))}",
        f"start: {automaton.start}",
        f"finals: {', '.join(map(str, sorted(automaton.finals)))}",
        "delta:",
    ]
    for state, symbol, next_state in sorted(automaton.delta):
        lines.append(f"  {state} --{symbol}--> {next_state}")
    return "\n".join(lines)

import networkx as nx
from pathlib import Path
from dataclasses import dataclass

from automin.automaton import Automaton


@dataclass(frozen=True)
class AutomatonStats:
    number_of_states: int
    number_of_transitions: int
    number_of_final_states: int
    alphabet: frozenset[str]


def get_statistics(automaton: Automaton) -> AutomatonStats:
    return AutomatonStats(
        number_of_states=len(automaton.states),
        number_of_transitions=len(automaton.delta),
        number_of_final_states=len(automaton.finals),
        alphabet=automaton.alphabet,
    )


def to_networkx(automaton: Automaton) -> nx.MultiDiGraph:
    graph = nx.MultiDiGraph()
    for state in automaton.sorted_states():
        graph.add_node(
            state,
            is_start=state == automaton.start,
            is_final=state in automaton.finals,
        )
    for state, symbol, next_state in sorted(automaton.delta):
        graph.add_edge(state, next_state, label=symbol)
    return graph


def save_automaton_as_dot(automaton: Automaton, path: Path):
    graph = to_networkx(automaton)
    for _, data in graph.nodes(data=True):
        data["shape"] = "doublecircle" if data["is_final"] else "circle"
    pdg = nx.drawing.nx_pydot.to_pydot(graph)
    pdg.write_raw(path)

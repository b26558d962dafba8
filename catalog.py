from typing_extensions import Callable, Dict

from automaton import Automaton


def parity_automaton() -> Automaton:
    """Accepts strings with an even number of 0s and an odd number of 1s."""
    return Automaton(
        states=["q0", "q1", "q2", "q3"],
        alphabet=["0", "1"],
        transitions={
            "q0": {"0": "q1", "1": "q2"},
            "q1": {"0": "q0", "1": "q3"},
            "q2": {"0": "q3", "1": "q0"},
            "q3": {"0": "q2", "1": "q1"},
        },
        initial_state="q0",
        accepting_states=["q2"],
        label="(001+010+100+00+111)(001+010+100+00+111)*+1",
    )


def alternating_automaton() -> Automaton:
    """Accepts the empty string and alternating 0s and 1s starting with 0 (0, 01, 010, ...)."""
    return Automaton(
        states=["q0", "q1", "e"],
        alphabet=["0", "1"],
        transitions={
            "q0": ({"0": "q1"}, "e"),
            "q1": ({"1": "q0"}, "e"),
            "e": ({}, "e"),
        },
        initial_state="q0",
        accepting_states=["q0", "q1"],
        label="0+(01)*(0+Ɛ)",
    )


CATALOG: Dict[str, Callable[[], Automaton]] = {
    "parity": parity_automaton,
    "alternating": alternating_automaton,
}

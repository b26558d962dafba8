from collections import defaultdict
from dataclasses import dataclass, field
from types import MappingProxyType
from typing_extensions import (
    Any,
    Callable,
    Dict,
    Iterable,
    Iterator,
    List,
    Mapping,
    NamedTuple,
    Optional,
    Sequence,
    Tuple,
)

from graphviz import Digraph

from errors import (
    AutomatonError,
    ConstructionError,
    InvalidAcceptState,
    InvalidAlphabetSymbol,
    InvalidDefaultState,
    InvalidInitialState,
    InvalidState,
    InvalidStateLabel,
    InvalidTargetState,
    InvalidTransitionType,
    MalformedEntry,
    MissingStateEntry,
    MissingTransition,
    UnknownInputSymbol,
    UnknownStateEntry,
    UnknownSymbol,
)

WarningCallback = Callable[[str, str], None]


class Checked(NamedTuple):
    """Outcome of a validation: the validated value, or the error explaining why not."""

    value: Any
    error: Optional[AutomatonError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def dedupe(items: Iterable[Any]) -> Tuple[Tuple[Any, ...], Tuple[Any, ...]]:
    """Split `items` into (first occurrences in order, dropped repeats)."""
    kept: List[Any] = []
    dropped: List[Any] = []
    seen = set()
    for item in items:
        if item in seen:
            dropped.append(item)
        else:
            seen.add(item)
            kept.append(item)
    return tuple(kept), tuple(dropped)


@dataclass(frozen=True, eq=False)
class Automaton:
    """
    Deterministic finite-state automaton.

    Each entry of `transitions` is either a full mapping symbol -> state or a
    shorthand pair (partial mapping, default state); unlisted symbols of a
    shorthand entry go to the default state. Construction normalizes Q, Σ and
    F, expands every entry into a total row, records sink states and fails
    with a ConstructionError on the first defect. The caller's arguments are
    copied, never modified.
    """

    states: Sequence[str]
    alphabet: Sequence[str]
    transitions: Mapping[str, Any]
    initial_state: str
    accepting_states: Sequence[str] = ()
    label: str = ""
    on_warning: Optional[WarningCallback] = field(default=None, repr=False)

    sink_states: Tuple[str, ...] = field(init=False, default=())
    diagnostics: Mapping[str, str] = field(
        init=False, repr=False, default_factory=dict
    )

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    def __post_init__(self):
        diagnostics: Dict[str, str] = {}

        # labels are checked before dedupe, which needs hashable items
        raw_states = tuple(self.states)
        for state in raw_states:
            if not isinstance(state, str):
                raise InvalidStateLabel(state)
        states, dropped = dedupe(raw_states)
        if dropped:
            diagnostics["duplicate_states"] = _dropped_message("states", dropped)

        raw_alphabet = tuple(self.alphabet)
        for symbol in raw_alphabet:
            if not isinstance(symbol, str) or len(symbol) != 1:
                raise InvalidAlphabetSymbol(symbol)
        alphabet, dropped = dedupe(raw_alphabet)
        if dropped:
            diagnostics["duplicate_symbols"] = _dropped_message("symbols", dropped)

        state_set = frozenset(states)
        symbol_set = frozenset(alphabet)

        if not isinstance(self.transitions, Mapping):
            raise ConstructionError(
                f"δ must map every state to its transitions, got {type(self.transitions).__name__}"
            )

        table: Dict[str, Mapping[str, str]] = {}
        sinks: List[str] = []
        ignored: List[str] = []

        # Q order, not the table's key order, decides which defect is reported
        for state in states:
            if state not in self.transitions:
                raise MissingStateEntry(state)
            row, extra = _complete_entry(
                state, self.transitions[state], alphabet, state_set, symbol_set
            )
            if extra:
                ignored.append(
                    f'δ["{state}"] ignores {", ".join(repr(s) for s in extra)}'
                )
            if all(row[symbol] == state for symbol in alphabet):
                sinks.append(state)
            table[state] = MappingProxyType(row)

        if ignored:
            diagnostics["ignored_symbols"] = (
                "transitions on symbols outside Σ were dropped: " + "; ".join(ignored)
            )

        for state in self.transitions:
            if not _is_member(state, state_set):
                raise UnknownStateEntry(state)

        if not _is_member(self.initial_state, state_set):
            raise InvalidInitialState(self.initial_state)

        raw_accepting = tuple(self.accepting_states)
        for state in raw_accepting:
            if not _is_member(state, state_set):
                raise InvalidAcceptState(state)
        accepting, dropped = dedupe(raw_accepting)
        if dropped:
            diagnostics["duplicate_accepting_states"] = _dropped_message(
                "accepting states", dropped
            )

        object.__setattr__(self, "states", states)
        object.__setattr__(self, "alphabet", alphabet)
        object.__setattr__(self, "transitions", MappingProxyType(table))
        object.__setattr__(self, "accepting_states", accepting)
        object.__setattr__(self, "sink_states", tuple(sinks))
        object.__setattr__(self, "diagnostics", MappingProxyType(diagnostics))
        object.__setattr__(self, "_state_set", state_set)
        object.__setattr__(self, "_symbol_set", symbol_set)
        object.__setattr__(self, "_accept_set", frozenset(accepting))
        object.__setattr__(self, "_sink_set", frozenset(sinks))

        if self.on_warning is not None:
            for kind, message in diagnostics.items():
                self.on_warning(kind, message)

    # -------------------------------------------------------------------------
    # Validation
    # -------------------------------------------------------------------------

    def validate_state(self, state: Any) -> Checked:
        if _is_member(state, self._state_set):
            return Checked(state)
        return Checked(None, InvalidState(state))

    def validate_symbol(self, symbol: Any) -> Checked:
        if _is_member(symbol, self._symbol_set):
            return Checked(symbol)
        return Checked(None, UnknownInputSymbol(symbol))

    def validate_input(self, word: str) -> Checked:
        """Split `word` into symbols, or point at the first character outside Σ."""
        for position, symbol in enumerate(word):
            if not _is_member(symbol, self._symbol_set):
                return Checked(None, UnknownInputSymbol(symbol, position))
        return Checked(tuple(word))

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def is_sink(self, state: str) -> bool:
        return _is_member(state, self._sink_set)

    def accepts_state(self, state: str) -> bool:
        return _is_member(state, self._accept_set)

    def transition(self, state: str, symbol: str) -> str:
        """δ(state, symbol)."""
        for checked in (self.validate_state(state), self.validate_symbol(symbol)):
            if not checked.ok:
                raise checked.error
        return self.transitions[state][symbol]

    def _walk(self, symbols: Sequence[str]) -> Iterator[str]:
        state = self.initial_state
        yield state
        for symbol in symbols:
            # a sink maps every symbol to itself, the rest of the input is moot
            if state in self._sink_set:
                return
            state = self.transitions[state][symbol]
            yield state

    def read(self, word: str) -> str:
        """Return the state reached after reading `word` from the initial state."""
        checked = self.validate_input(word)
        if not checked.ok:
            raise checked.error

        state = self.initial_state
        for state in self._walk(checked.value):
            pass
        return state

    def trace(self, word: str) -> List[str]:
        """States visited while reading `word`, stopping at the first sink state."""
        checked = self.validate_input(word)
        if not checked.ok:
            raise checked.error
        return list(self._walk(checked.value))

    def test(self, word: str) -> bool:
        """True if `word` belongs to the language of the automaton."""
        try:
            state = self.read(word)
        except AutomatonError:
            return False
        return state in self._accept_set

    # -------------------------------------------------------------------------
    # Visualization
    # -------------------------------------------------------------------------

    def to_graphviz(
        self, filename: str = "automaton", view: bool = True, render: bool = True
    ) -> Digraph:
        """Generate a Graphviz visualization for this automaton."""
        title = self.label or "DFA"

        dot = Digraph(
            name="DFA",
            format="png",
            graph_attr={
                "rankdir": "LR",
                "splines": "true",
                "nodesep": "0.8",
                "ranksep": "1.2",
                "label": title,
                "labelloc": "t",
                "fontsize": "14",
                "fontname": "Arial",
                "bgcolor": "white",
                "pad": "0.5",
                "dpi": "300",
            },
            node_attr={
                "shape": "circle",
                "fontsize": "14",
                "fontname": "Arial",
                "width": "0.6",
                "height": "0.6",
                "fixedsize": "true",
                "style": "filled",
                "fillcolor": "lightblue",
                "color": "black",
                "penwidth": "2",
            },
            edge_attr={
                "fontsize": "12",
                "fontname": "Arial",
                "arrowsize": "0.8",
                "penwidth": "1.5",
                "color": "black",
            },
        )

        state_to_id = {state: f"s{i}" for i, state in enumerate(self.states)}

        dot.node("__start__", shape="point", width="0.01", style="invis")

        for state in self.states:
            attrs: Dict[str, str] = {}
            if state in self._accept_set:
                attrs.update(
                    shape="doublecircle", fillcolor="lightgreen", peripheries="2"
                )
            if state in self._sink_set:
                attrs.update(fillcolor="lightgray", style="filled,dashed")
            dot.node(state_to_id[state], label=state, **attrs)

        dot.edge("__start__", state_to_id[self.initial_state], penwidth="2")

        edges: Dict[Tuple[str, str], List[str]] = defaultdict(list)
        for src in self.states:
            for symbol, tgt in self.transitions[src].items():
                edges[(src, tgt)].append(symbol)

        for (src, tgt), symbols in edges.items():
            label = ", ".join(sorted(symbols))
            if src == tgt:
                dot.edge(
                    state_to_id[src],
                    state_to_id[tgt],
                    label=label,
                    headport="n",
                    tailport="n",
                )
            else:
                dot.edge(state_to_id[src], state_to_id[tgt], label=label)

        if render:
            dot.render(filename, view=view, cleanup=True)
        return dot


def _is_member(value: Any, members: frozenset) -> bool:
    return isinstance(value, str) and value in members


def _dropped_message(noun: str, dropped: Sequence[Any]) -> str:
    return f"dropped duplicate {noun}: {', '.join(repr(item) for item in dropped)}"


def _complete_entry(
    state: str,
    entry: Any,
    alphabet: Tuple[str, ...],
    state_set: frozenset,
    symbol_set: frozenset,
) -> Tuple[Dict[str, str], List[Any]]:
    """
    Expand one state's transition entry into a row covering all of Σ.

    Returns the row and the keys of a full mapping that fall outside Σ.
    """
    if isinstance(entry, Mapping):
        row: Dict[str, str] = {}
        for symbol in alphabet:
            if symbol not in entry:
                raise MissingTransition(state, symbol)
            target = entry[symbol]
            if not isinstance(target, str):
                raise InvalidTransitionType(state, symbol, type(target).__name__)
            if target not in state_set:
                raise InvalidTargetState(state, symbol, target)
            row[symbol] = target
        extra = [key for key in entry if not _is_member(key, symbol_set)]
        return row, extra

    if (
        isinstance(entry, (tuple, list))
        and len(entry) == 2
        and isinstance(entry[0], Mapping)
    ):
        partial, default = entry
        if not _is_member(default, state_set):
            raise InvalidDefaultState(state, default)
        for symbol, target in partial.items():
            if not _is_member(symbol, symbol_set):
                raise UnknownSymbol(state, symbol)
            if not _is_member(target, state_set):
                raise InvalidTargetState(state, symbol, target)
        return {symbol: partial.get(symbol, default) for symbol in alphabet}, []

    raise MalformedEntry(state, type(entry).__name__)

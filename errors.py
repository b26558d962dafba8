from typing_extensions import Any, Optional


class AutomatonError(ValueError):
    """Base class for every error raised by an automaton."""


# -----------------------------------------------------------------------------
# Construction
# -----------------------------------------------------------------------------


class ConstructionError(AutomatonError):
    """The automaton could not be built; nothing usable was produced."""


class InvalidStateLabel(ConstructionError):
    def __init__(self, state: Any):
        self.state = state
        super().__init__(f"Q contains {state!r}, but states must be strings")


class InvalidAlphabetSymbol(ConstructionError):
    def __init__(self, symbol: Any):
        self.symbol = symbol
        super().__init__(
            f"Σ contains {symbol!r}, but alphabet symbols must be single characters"
        )


class MissingStateEntry(ConstructionError):
    def __init__(self, state: str):
        self.state = state
        super().__init__(
            f'δ is incomplete: δ["{state}"] is missing from the transition table'
        )


class MalformedEntry(ConstructionError):
    def __init__(self, state: str, kind: str):
        self.state = state
        self.kind = kind
        super().__init__(
            f'δ["{state}"] points to an invalid entry of type {kind}: expected a '
            f"symbol -> state mapping or a (partial mapping, default state) pair"
        )


class MissingTransition(ConstructionError):
    def __init__(self, state: str, symbol: str):
        self.state = state
        self.symbol = symbol
        super().__init__(
            f'δ is incomplete: δ["{state}"]["{symbol}"] is missing from the transition table'
        )


class InvalidTransitionType(ConstructionError):
    def __init__(self, state: str, symbol: str, actual_type: str):
        self.state = state
        self.symbol = symbol
        self.actual_type = actual_type
        super().__init__(
            f'transition out of state "{state}" on symbol "{symbol}" must name a state, '
            f"got a value of type {actual_type}"
        )


class UnknownSymbol(ConstructionError):
    def __init__(self, state: str, symbol: Any):
        self.state = state
        self.symbol = symbol
        super().__init__(
            f'shorthand transitions of state "{state}" use the symbol {symbol!r}, '
            f"which is not part of Σ"
        )


class InvalidTargetState(ConstructionError):
    def __init__(self, state: str, symbol: Any, target: Any):
        self.state = state
        self.symbol = symbol
        self.target = target
        super().__init__(
            f'transition out of state "{state}" on symbol "{symbol}" points to '
            f"{target!r}, which is not a state of the automaton"
        )


class InvalidDefaultState(ConstructionError):
    def __init__(self, state: str, target: Any):
        self.state = state
        self.target = target
        super().__init__(
            f'default transition out of state "{state}" points to {target!r}, '
            f"which is not a state of the automaton"
        )


class UnknownStateEntry(ConstructionError):
    def __init__(self, state: Any):
        self.state = state
        super().__init__(
            f"δ has an entry for {state!r}, which is not a state of the automaton"
        )


class InvalidInitialState(ConstructionError):
    def __init__(self, state: Any):
        self.state = state
        super().__init__(f"initial state {state!r} is not part of Q")


class InvalidAcceptState(ConstructionError):
    def __init__(self, state: Any):
        self.state = state
        super().__init__(f"accepting state {state!r} is not part of Q")


# -----------------------------------------------------------------------------
# Execution
# -----------------------------------------------------------------------------


class ExecutionError(AutomatonError):
    """A query was made with arguments outside the automaton's Q or Σ."""


class UnknownInputSymbol(ExecutionError):
    def __init__(self, symbol: Any, position: Optional[int] = None):
        self.symbol = symbol
        self.position = position
        where = "" if position is None else f" at position {position}"
        super().__init__(f"The symbol {symbol!r}{where} is not part of Σ")


class InvalidState(ExecutionError):
    def __init__(self, state: Any):
        self.state = state
        super().__init__(f"The state {state!r} is not part of Q")

# errors.py
from __future__ import annotations


class EnigmaError(ValueError):
    """Base class for every configuration or input failure in the machine."""


# ── lookups ───────────────────────────────────────────────────────
class SymbolNotInAlphabet(EnigmaError):
    def __init__(self, symbol: str, alphabet: str | None = None) -> None:
        self.symbol = symbol
        msg = f"Symbol {symbol!r} is not in the alphabet"
        if alphabet is not None:
            msg += f" {alphabet!r}"
        super().__init__(msg)


class SymbolNotInSeries(EnigmaError):
    def __init__(self, symbol: str) -> None:
        self.symbol = symbol
        super().__init__(f"Symbol {symbol!r} is not in the wiring series")


# ── wiring ────────────────────────────────────────────────────────
class InvalidSeries(EnigmaError):
    """Series is not a permutation of the alphabet."""


class InvalidSeriesLength(InvalidSeries):
    def __init__(self, expected: int, actual: int) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Series has {actual} symbols, alphabet has {expected}"
        )


class InvalidReflection(EnigmaError):
    def __init__(self, symbol: str) -> None:
        self.symbol = symbol
        super().__init__(
            f"Reflector wiring is not an involution at {symbol!r}"
        )


# ── plugboard ─────────────────────────────────────────────────────
class PlugboardError(EnigmaError):
    pass


class DuplicatePairing(PlugboardError):
    def __init__(self, symbol: str) -> None:
        self.symbol = symbol
        super().__init__(f"Character {symbol!r} already used in plugboard")


class SelfPairing(PlugboardError):
    def __init__(self, symbol: str) -> None:
        self.symbol = symbol
        super().__init__(f"Plugboard cannot map a symbol to itself: {symbol}")


__all__ = [
    "EnigmaError",
    "SymbolNotInAlphabet",
    "SymbolNotInSeries",
    "InvalidSeries",
    "InvalidSeriesLength",
    "InvalidReflection",
    "PlugboardError",
    "DuplicatePairing",
    "SelfPairing",
]

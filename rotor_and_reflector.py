# rotor_and_reflector.py
from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Protocol, Union, runtime_checkable

from debug import Debug
from errors import (
    InvalidReflection,
    InvalidSeries,
    InvalidSeriesLength,
    SymbolNotInSeries,
)
from keyboard_and_plugboard import ALPHABET, Alphabet

debug = Debug()

NotchSpec = Union[None, int, str, Iterable[Union[int, str]]]


@runtime_checkable
class Substitution(Protocol):
    """Anything the signal can pass through in both directions."""

    def encode(self, c: str) -> str: ...

    def inverse_encode(self, c: str) -> str: ...


# ── fixed wiring ──────────────────────────────────────────────────
class Wiring:
    """A fixed permutation of the alphabet: input index i maps to series[i]."""

    def __init__(self, series: str | Sequence[str], alphabet: Alphabet = ALPHABET) -> None:
        symbols = tuple(series)
        if len(symbols) != len(alphabet):
            raise InvalidSeriesLength(len(alphabet), len(symbols))

        offsets: dict[str, int] = {}
        for i, ch in enumerate(symbols):
            if ch not in alphabet:
                raise InvalidSeries(f"Series symbol {ch!r} at offset {i} is not in the alphabet")
            if ch in offsets:
                raise InvalidSeries(f"Series symbol {ch!r} appears more than once")
            offsets[ch] = i

        self.alphabet = alphabet
        self.series: tuple[str, ...] = symbols
        self._offsets = offsets

        # integer lookup tables
        self._fwd = tuple(alphabet.index_of(c) for c in symbols)
        self._rev = tuple(offsets[c] for c in alphabet)

    def __len__(self) -> int:
        return len(self.series)

    # ── index level ──────────────────────────────────────────────
    def forward_index(self, i: int) -> int:
        return self._fwd[i]

    def inverse_index(self, i: int) -> int:
        return self._rev[i]

    # ── symbol level ─────────────────────────────────────────────
    def encode(self, c: str) -> str:
        return self.series[self.alphabet.index_of(c)]

    def inverse_encode(self, c: str) -> str:
        return self.alphabet[self.offset_in_series(c)]

    def offset_in_series(self, c: str) -> int:
        try:
            return self._offsets[c]
        except (KeyError, TypeError):
            raise SymbolNotInSeries(c) from None

    def __str__(self) -> str:
        return "".join(self.series)

    def __repr__(self) -> str:
        return f"Wiring({str(self)!r})"


# ── rotor ─────────────────────────────────────────────────────────
class Rotor:
    """A wheel: fixed wiring plus two independent offsets.

    ``position`` is how far the wheel has turned relative to the alphabet and
    changes as the machine steps. ``ring_position`` (Ringstellung) turns the
    wiring relative to the lettered ring and is set once when the machine is
    configured. Both are taken modulo this rotor's own series length.

    A signal entering at index ``i`` meets the wiring at
    ``(i + position - ring_position) mod N``; the wired output is projected
    back onto the static frame by subtracting the same shift.
    """

    def __init__(
        self,
        series: str | Sequence[str],
        alphabet: Alphabet = ALPHABET,
        *,
        notch: NotchSpec = None,
        position: int | str = 0,
        ring_position: int | str = 0,
        name: str | None = None,
    ) -> None:
        self.wiring = Wiring(series, alphabet)
        self.alphabet = alphabet
        self.size = len(self.wiring)
        self.name = name

        self._position = 0
        self._ring_position = 0
        self.notches: frozenset[int] = frozenset()

        self.set_position(position)
        self.set_ring_position(ring_position)
        self.set_notch(notch)

    # ── state ────────────────────────────────────────────────────
    @property
    def position(self) -> int:
        return self._position

    @property
    def ring_position(self) -> int:
        return self._ring_position

    @property
    def notch(self) -> int | None:
        """The single notch position, or None (lowest one if several)."""
        return min(self.notches) if self.notches else None

    @property
    def at_notch(self) -> bool:
        return self._position in self.notches

    @property
    def window(self) -> str:
        """Letter currently showing in the machine window."""
        return self.alphabet.symbol_at(self._position)

    def _offset(self, value: int | str) -> int:
        if isinstance(value, str):
            return self.alphabet.index_of(value) % self.size
        return int(value) % self.size

    def set_position(self, value: int | str) -> "Rotor":
        self._position = self._offset(value)
        return self

    def set_ring_position(self, value: int | str) -> "Rotor":
        self._ring_position = self._offset(value)
        return self

    def set_notch(self, value: NotchSpec) -> "Rotor":
        """Accepts None, a position, window letters ("Q", "AN"), or an iterable of those."""
        if value is None:
            self.notches = frozenset()
        elif isinstance(value, (int, str)):
            self.notches = frozenset(self._offset(v) for v in ([value] if isinstance(value, int) else value))
        else:
            found: set[int] = set()
            for item in value:
                if isinstance(item, str) and len(item) != 1:
                    found.update(self._offset(ch) for ch in item)
                else:
                    found.add(self._offset(item))
            self.notches = frozenset(found)
        return self

    # ── stepping ─────────────────────────────────────────────────
    def advance(self, count: int = 1) -> bool:
        """Turn the wheel; return True when it comes to rest on a notch."""
        self._position = (self._position + count) % self.size
        hit = self.at_notch
        debug.log("stepping", f"{self.label} pos {self._position}, notch_hit={hit}")
        return hit

    # ── signal paths ─────────────────────────────────────────────
    def _shift(self) -> int:
        return self._position - self._ring_position

    def contact(self, c: str) -> str:
        """Symbol wired to the contact that `c` enters on, before the exit shift."""
        adjusted = (self.alphabet.index_of(c) + self._shift()) % self.size
        return self.wiring.series[adjusted]

    def encode(self, c: str) -> str:
        shift = self._shift()
        adjusted = (self.alphabet.index_of(c) + shift) % self.size
        mapped = self.wiring.forward_index(adjusted)
        out = self.alphabet.symbol_at((mapped - shift) % self.size)
        if debug.active("rotor"):
            debug.log("rotor", f"{self.label} fwd {c}->{out} (pos {self._position}, ring {self._ring_position})")
        return out

    def inverse_encode(self, c: str) -> str:
        shift = self._shift()
        adjusted = (self.alphabet.index_of(c) + shift) % self.size
        mapped = self.wiring.inverse_index(adjusted)
        out = self.alphabet.symbol_at((mapped - shift) % self.size)
        if debug.active("rotor"):
            debug.log("rotor", f"{self.label} inv {c}->{out} (pos {self._position}, ring {self._ring_position})")
        return out

    # ── niceties ─────────────────────────────────────────────────
    @property
    def label(self) -> str:
        return self.name or "rotor"

    def __repr__(self) -> str:
        return f"<Rotor {self.label} pos={self._position} ring={self._ring_position}>"


# ── reflector ─────────────────────────────────────────────────────
class Reflector:
    """Umkehrwalze: a fixed wiring that must be its own inverse."""

    def __init__(
        self,
        series: str | Sequence[str],
        alphabet: Alphabet = ALPHABET,
        *,
        name: str | None = None,
    ) -> None:
        self.wiring = Wiring(series, alphabet)
        self.alphabet = alphabet
        self.name = name

        # applying the wiring twice must give the identity
        for offset, c in enumerate(self.wiring.series):
            if self.wiring.encode(c) != alphabet[offset]:
                raise InvalidReflection(c)

    def encode(self, c: str) -> str:
        out = self.wiring.encode(c)
        debug.log("reflector", f"{c}->{out}")
        return out

    reflect = encode

    def __repr__(self) -> str:
        return f"<Reflector {self.name or str(self.wiring)}>"

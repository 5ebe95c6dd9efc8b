# keyboard_and_plugboard.py
from __future__ import annotations

from collections.abc import Iterable, Iterator
from debug import Debug
from errors import DuplicatePairing, SelfPairing, SymbolNotInAlphabet

debug = Debug()


# ── Alphabet (keyboard / lampboard contacts) ──────────────────────
class Alphabet:
    """Ordered, immutable set of symbols shared by every component.

    Index `i` is the `i`-th key on the keyboard and the `i`-th contact on
    every wheel; all wiring math happens on these indices.
    """

    __slots__ = ("_symbols", "_index")

    def __init__(self, symbols: Iterable[str]) -> None:
        seq = tuple(symbols)
        if not seq:
            raise ValueError("Alphabet needs at least one symbol")
        index: dict[str, int] = {}
        for i, ch in enumerate(seq):
            if ch in index:
                raise ValueError(f"Duplicate symbol {ch!r} in alphabet")
            index[ch] = i
        object.__setattr__(self, "_symbols", seq)
        object.__setattr__(self, "_index", index)

    def __setattr__(self, name, value):
        raise AttributeError("Alphabet is immutable")

    def __reduce__(self):
        return (Alphabet, (self._symbols,))

    # letter → integer signal
    def index_of(self, symbol: str) -> int:
        try:
            return self._index[symbol]
        except (KeyError, TypeError):
            debug.log("alphabet", f"rejected {symbol!r}")
            raise SymbolNotInAlphabet(symbol, str(self)) from None

    # integer signal → letter
    def symbol_at(self, index: int) -> str:
        return self._symbols[index % len(self._symbols)]

    # ── container niceties ───────────────────────────────────────
    def __len__(self) -> int:
        return len(self._symbols)

    def __contains__(self, symbol: object) -> bool:
        try:
            return symbol in self._index
        except TypeError:
            return False

    def __iter__(self) -> Iterator[str]:
        return iter(self._symbols)

    def __getitem__(self, index: int) -> str:
        return self._symbols[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Alphabet):
            return NotImplemented
        return self._symbols == other._symbols

    def __hash__(self) -> int:
        return hash(self._symbols)

    def __str__(self) -> str:
        return "".join(self._symbols)

    def __repr__(self) -> str:
        return f"Alphabet({str(self)!r})"


ALPHABET = Alphabet("ABCDEFGHIJKLMNOPQRSTUVWXYZ")


# ── Plugboard ─────────────────────────────────────────────────────
class Plugboard:
    """Symmetric pairwise swaps at the machine's entry and exit."""

    def __init__(
        self,
        pairs: Iterable[str | tuple[str, str]] = (),
        alphabet: Alphabet = ALPHABET,
    ) -> None:
        self.alphabet: Alphabet = alphabet
        self.plugs: dict[str, str] = {}

        for raw in pairs:
            # normalise to (a, b)
            if isinstance(raw, str):
                if len(raw) != 2:
                    raise ValueError(f"Pair {raw!r} must be exactly 2 symbols")
                a, b = raw
            else:
                a, b = raw
            self.add_plug(a, b)

    def add_plug(self, a: str, b: str) -> None:
        for ch in (a, b):
            if ch not in self.alphabet:
                raise SymbolNotInAlphabet(ch, str(self.alphabet))
        if a == b:
            raise SelfPairing(a)
        for ch in (a, b):
            if ch in self.plugs:
                raise DuplicatePairing(ch)

        # passed validation → commit swap
        self.plugs[a], self.plugs[b] = b, a

    # one helper does the job for both directions
    def encode(self, c: str) -> str:
        out = self.plugs.get(c) if isinstance(c, str) else None
        if out is None:
            if c not in self.alphabet:
                raise SymbolNotInAlphabet(c, str(self.alphabet))
            out = c
        debug.log("plugboard", f"{c}->{out}")
        return out

    inverse_encode = encode   # symmetric by construction

    @property
    def pairs(self) -> tuple[tuple[str, str], ...]:
        order = self.alphabet.index_of
        found = [(a, b) for a, b in self.plugs.items() if order(a) < order(b)]
        return tuple(sorted(found, key=lambda pair: order(pair[0])))

    # nicety for debugging
    def __repr__(self) -> str:
        swaps = [f"{a}{b}" for a, b in self.pairs]
        return f"<Plugboard {' '.join(swaps)}>"

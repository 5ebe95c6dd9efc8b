# machine.py  ─────────────────────────────────────────────────────
from __future__ import annotations

from collections.abc import Iterable, Sequence

from debug import Debug
from keyboard_and_plugboard import Alphabet, Plugboard
from rotor_and_reflector import Reflector, Rotor

debug = Debug()


class Machine:
    """Plugboard → rotors → reflector → rotors (inverse) → plugboard.

    Rotors are given left to right, the way they sit in the machine; the
    rightmost one is nearest the keyboard and turns on every key press.
    Rotor positions are the only state that changes once the machine is
    built. A machine is not thread-safe: give each stream its own instance
    or serialise access with an external lock.
    """

    def __init__(
        self,
        rotors: Sequence[Rotor],
        reflector: Reflector,
        plugboard: Plugboard | None = None,
        *,
        stepping: bool = True,
    ) -> None:
        self.rotors: tuple[Rotor, ...] = tuple(rotors)
        self.reflector = reflector
        self.plugboard = plugboard if plugboard is not None else Plugboard(alphabet=reflector.alphabet)
        self.stepping_enabled = stepping

        self.alphabet: Alphabet = self.reflector.alphabet
        for part in (*self.rotors, self.plugboard):
            if part.alphabet != self.alphabet:
                raise ValueError(f"{part!r} uses a different alphabet than the reflector")

    # ── position helpers ────────────────────────────────────────

    @property
    def positions(self) -> tuple[int, ...]:
        return tuple(r.position for r in self.rotors)

    @property
    def window(self) -> str:
        """Letters visible in the rotor windows, left to right."""
        return "".join(r.window for r in self.rotors)

    def set_positions(self, key: str | Iterable[int | str]) -> None:
        """Turn each rotor to a window letter ("AAZ") or a numeric position."""
        values = list(key)
        if len(values) != len(self.rotors):
            raise ValueError(
                f"Need {len(self.rotors)} positions, got {len(values)}"
            )
        for rotor, value in zip(self.rotors, values):
            rotor.set_position(value)

    # ── stepping logic  ─────────────────────────────────────────

    def advance_rotors(self) -> None:
        """Odometer stepping: a rotor turns when its right neighbour lands on a notch."""
        should_advance = True       # rightmost rotor always turns
        for rotor in reversed(self.rotors):
            if not should_advance:
                break
            should_advance = rotor.advance()  # carry iff it lands on a notch
        debug.log("stepping", f"window {self.window}")

    # ── encipher one symbol  ────────────────────────────────────

    def encipher(self, letter: str) -> str:
        saved = self.positions
        try:
            if self.stepping_enabled:
                self.advance_rotors()
            return self._route(letter)
        except Exception:
            self._restore(saved)
            raise

    def _route(self, letter: str) -> str:
        signal = self.plugboard.encode(letter)

        for rotor in reversed(self.rotors):
            signal = rotor.encode(signal)

        signal = self.reflector.encode(signal)

        for rotor in self.rotors:
            signal = rotor.inverse_encode(signal)

        out = self.plugboard.inverse_encode(signal)
        debug.log("encipher", f"{letter}->{out} @ {self.window}")
        return out

    def _restore(self, positions: Sequence[int]) -> None:
        for rotor, pos in zip(self.rotors, positions):
            rotor.set_position(pos)

    # ── whole messages  ─────────────────────────────────────────

    def encode(self, text: str) -> str:
        """Encipher `text` one symbol at a time.

        Fails on the first bad symbol; rotor positions are then put back to
        where they were before the call and nothing is returned.
        """
        saved = self.positions
        try:
            return "".join(self.encipher(ch) for ch in text)
        except Exception:
            self._restore(saved)
            raise

    # reciprocal: the same settings decode what they encoded
    decode = encode

    def __repr__(self) -> str:
        names = " ".join(r.label for r in self.rotors)
        return (
            f"<Machine rotors=[{names}] window={self.window} "
            f"reflector={self.reflector!r} {self.plugboard!r}>"
        )

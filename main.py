# main.py
from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass
from typing import List, Sequence

from debug import COMPONENTS, Debug
from errors import EnigmaError
from keyboard_and_plugboard import ALPHABET, Plugboard
from machine import Machine
from utilities import (
    get_machine_settings,
    group_blocks,
    make_reflector,
    make_rotor,
    preprocess_message,
)

# ────────────────────────────────────────────────────────────────────────
#  0. Configuration & logging
# ────────────────────────────────────────────────────────────────────────


debug = Debug()


@dataclass(slots=True)
class Config:
    """Runtime switches that influence the front end, not the wiring."""

    stepping: bool = True           # advance rotors on every key press
    clean_input: bool = True        # upper-case and drop non-alphabet chars
    block: int = 5                  # display group size (0 = no grouping)


# ────────────────────────────────────────────────────────────────────────
#  1. MachineContext – wraps a Machine & reset logic
# ────────────────────────────────────────────────────────────────────────


class MachineContext:
    """A thin wrapper so we do not pass five settings around."""

    def __init__(
        self,
        rotor_names: Sequence[str],
        reflector_name: str,
        ring_set: Sequence[int],
        plugs: Sequence[str],
        start_positions: str,
        *,
        stepping: bool = True,
    ) -> None:
        if len(ring_set) != len(rotor_names):
            raise ValueError("ring_set length mismatch")
        if len(start_positions) != len(rotor_names):
            raise ValueError("start positions length mismatch")

        self.rotor_names = [name.upper() for name in rotor_names]
        self.reflector_name = reflector_name.upper()
        self.ring_set = list(ring_set)
        self.plugs = list(plugs)
        self.start_positions = start_positions.upper()

        # operator sheets count rings from 1
        rotors = [
            make_rotor(name, ring=ring - 1)
            for name, ring in zip(self.rotor_names, self.ring_set)
        ]
        self.machine = Machine(
            rotors,
            make_reflector(self.reflector_name),
            Plugboard(self.plugs, ALPHABET),
            stepping=stepping,
        )
        self.rewind()

    @classmethod
    def from_args(cls, args: argparse.Namespace, cfg: Config) -> "MachineContext":
        if args.interactive:
            rotors, reflector, rings, plugs, positions = get_machine_settings(len(args.rotors))
        else:
            rotors, reflector, rings = args.rotors, args.reflector, args.rings
            plugs, positions = args.plugs, args.positions
            if rings is None:
                rings = [1] * len(rotors)
            if positions is None:
                positions = ALPHABET[0] * len(rotors)
        return cls(rotors, reflector, rings, plugs, positions, stepping=cfg.stepping)

    # ––– helpers ––––––––––––––––––––––––––––––––––––––––––––––––

    @property
    def alphabet(self):
        return self.machine.alphabet

    def rewind(self) -> None:
        """Reset the rotors to the start positions of the day."""
        self.machine.set_positions(self.start_positions)

    def encipher_block(self, text: str) -> str:
        """Encipher *text* from the start positions."""
        self.rewind()
        return self.machine.encode(text)


# ────────────────────────────────────────────────────────────────────────
#  2. CLI helpers
# ────────────────────────────────────────────────────────────────────────


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Encrypt or decrypt with a rotor machine")
    p.add_argument("-m", "--message", metavar="TEXT", help="Text to encipher. If omitted, an interactive REPL starts.")
    p.add_argument("--rotors", nargs="+", default=["I", "II", "III"], metavar="NAME", help="Rotor names, left to right. Default: I II III")
    p.add_argument("--reflector", default="B", help="Reflector name. Default: B")
    p.add_argument("--rings", nargs="+", type=int, metavar="N", help="Ring settings 1-26, one per rotor. Default: all 1")
    p.add_argument("--positions", metavar="LETTERS", help="Start window letters, one per rotor. Default: all A")
    p.add_argument("--plugs", nargs="*", default=[], metavar="PAIR", help="Plugboard pairs, e.g. AB CD")
    p.add_argument("--stepping", choices=["on", "off"], default="on", help="Advance rotors per key press (off = static substitution). Default: on")
    p.add_argument("--block", type=int, default=5, help="Output group size, 0 for none. Default: 5")
    p.add_argument("--raw", action="store_true", help="Do not upper-case or strip input; unknown symbols are an error.")
    p.add_argument("--interactive", action="store_true", help="Ask for the machine settings instead of reading flags.")
    p.add_argument("--trace", nargs="+", choices=COMPONENTS, default=[], metavar="COMPONENT", help=f"Log signal flow for: {', '.join(COMPONENTS)}")
    p.add_argument("--log-file", metavar="FILE", help="Also write trace output to FILE.")
    return p.parse_args(argv)


def run_message(ctx: MachineContext, cfg: Config, text: str) -> List[str]:
    """Encipher *text*, then rewind and decipher it again; return display lines."""
    clean = preprocess_message(text, ctx.alphabet) if cfg.clean_input else text
    cipher = ctx.encipher_block(clean)
    window = ctx.machine.window
    plain = ctx.encipher_block(cipher)
    return [
        f"Encrypted: {group_blocks(cipher, cfg.block)}",
        f"Window:    {window}",
        f"Decrypted: {plain}",
    ]


# ────────────────────────────────────────────────────────────────────────
#  3. Main entry point
# ────────────────────────────────────────────────────────────────────────


def main(argv: Sequence[str] | None = None) -> None:
    args = parse_args(argv)

    if args.trace or args.log_file:
        Debug(configure=True, log_to=args.log_file)
        debug.enable(*args.trace)

    cfg = Config(
        stepping=(args.stepping == "on"),
        clean_input=not args.raw,
        block=args.block,
    )

    try:
        ctx = MachineContext.from_args(args, cfg)
    except (KeyError, ValueError) as err:   # EnigmaError is a ValueError
        sys.exit(f"❌  Bad machine settings: {err}")

    # one‑shot mode ------------------------------------------------------
    if args.message is not None:
        try:
            lines = run_message(ctx, cfg, args.message)
        except EnigmaError as err:
            sys.exit(f"❌  {err}")
        print("\n".join(lines))
        return

    # interactive REPL ---------------------------------------------------
    print(f"\nLoaded {ctx.machine!r}")
    print("Type blank line to quit.\n")
    while True:
        txt = input("\nMessage: ")
        if not txt.strip():
            break
        try:
            lines = run_message(ctx, cfg, txt)
        except EnigmaError as err:
            print(f"❌  {err}")
            continue
        print("\n" + "\n".join(lines))


if __name__ == "__main__":
    main()

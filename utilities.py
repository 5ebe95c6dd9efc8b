# utilities.py
from __future__ import annotations

import re
from typing import Dict, List

from keyboard_and_plugboard import ALPHABET, Alphabet, Plugboard
from rotor_and_reflector import Reflector, Rotor, Wiring

# ────────────────────────────────────────────────────────────────────────
#  0. Regex & trivial helpers
# ────────────────────────────────────────────────────────────────────────

_num_re = re.compile(r"^([A-Z-]+?)-?([IVX]+)$")
_ROMAN = {"I": 1, "V": 5, "X": 10}


def ask(prompt: str) -> str:
    """Read & normalise an operator’s response (uppercase, trimmed)."""
    return input(prompt).strip().upper()


def _roman(numeral: str) -> int:
    total = 0
    for ch, nxt in zip(numeral, numeral[1:] + " "):
        value = _ROMAN[ch]
        total += -value if _ROMAN.get(nxt, 0) > value else value
    return total


def _nat_key(name: str):
    """Sort wheel names so I, II, …, VIII come before COMMERCIAL-I, ROCKET-I, …"""
    if set(name) <= set(_ROMAN):
        return (0, "", _roman(name))
    m = _num_re.match(name)
    if m:
        prefix, num = m.groups()
        return (1, prefix, _roman(num))
    return (2, name, 0)


# ────────────────────────────────────────────────────────────────────────
#  1. Wheel database
# ────────────────────────────────────────────────────────────────────────

IDENTITY = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"

ROTOR_WIRINGS: Dict[str, str] = {
    # German Army / Navy
    "I":    "EKMFLGDQVZNTOWYHXUSPAIBRCJ",
    "II":   "AJDKSIRUXBLHWTMCQGZNPYFVOE",
    "III":  "BDFHJLCPRTXVZNYEIWGAKMUSQO",
    "IV":   "ESOVPZJAYQUIRHXLNFTGKDCMWB",
    "V":    "VZBRGITYUPSDNHLXAWMJQOFECK",
    "VI":   "JPGVOUMFYQBENHZRDKASXLICTW",
    "VII":  "NZJHGRCXMYSWBOUFAIVLPEKQDT",
    "VIII": "FKQHTLXOCBJSPDZRAMEWNIUYGV",
    # M4 fourth wheels (used with the thin reflectors)
    "BETA":  "LEYJVCNIXWPBQMDRTAKZGFUHOS",
    "GAMMA": "FSOKANUERHMBTIYCWLQPZXVGJD",
    # Commercial Enigma
    "COMMERCIAL-I":   "DMTWSILRUYQNKFEJCAZBPGXOHV",
    "COMMERCIAL-II":  "HQZGPJTMOBLNCIFDYAWVEUSRKX",
    "COMMERCIAL-III": "UQNTLSZFMREHDPXKIBVYGJCWOA",
    # German Railway (Rocket)
    "ROCKET-I":   "JGDQOXUSCAMIFRVTPNEWKBLZYH",
    "ROCKET-II":  "NTZPSFBOKMWRCJDIVLAEYUXHGQ",
    "ROCKET-III": "JVIUBHTCDYAKEQZPOSGXNRMWFL",
    # Swiss K
    "SWISS-K-I":   "PEZUOHXSCVFMTBGLRINQJWAYDK",
    "SWISS-K-II":  "ZOUESYDKFWPCIQXHMVBLGNJRAT",
    "SWISS-K-III": "EHRVXGAOBQUSIMZFLYNWKTPDJC",
}

# Window letter shown right after the wheel has kicked its left neighbour.
ROTOR_NOTCHES: Dict[str, str] = {
    "I": "R", "II": "F", "III": "W", "IV": "K", "V": "A",
    "VI": "AN", "VII": "AN", "VIII": "AN",
}

REFLECTOR_WIRINGS: Dict[str, str] = {
    "A": "EJMZALYXVBWFCRQUONTSPIKHGD",
    "B": "YRUHQSLDPXNGOKMIEBFZCWVJAT",
    "C": "FVPJIAOYEDRZXWGCTKUQSBNMHL",
    "B-THIN": "ENKQAUYWJICOPBLMDXZVFTHRGS",
    "C-THIN": "RDOBJNTKVEHMLFCWZAXGYIPSUQ",
    "ROCKET": "QYHOGNECVPUZTFDJAXWMKISRBL",
    "SWISS-K": "IMETCGFRAYSQBZXWLHKDVUPOJN",
}

# Entry wheels (Eintrittswalze): fixed wiring between keyboard and rotors.
ENTRY_WHEEL_WIRINGS: Dict[str, str] = {
    "ENIGMA":  IDENTITY,
    "ROCKET":  "QWERTZUIOASDFGHJKPYXCVBNML",
    "SWISS-K": "QWERTZUIOASDFGHJKPYXCVBNML",
}


def rotor_names() -> List[str]:
    return sorted(ROTOR_WIRINGS, key=_nat_key)


def reflector_names() -> List[str]:
    return sorted(REFLECTOR_WIRINGS)


def make_rotor(
    name: str,
    ring: int | str = 0,
    position: int | str = 0,
    alphabet: Alphabet = ALPHABET,
) -> Rotor:
    """Build a fresh rotor from the database (0-based ring/position)."""
    key = name.upper()
    try:
        wiring = ROTOR_WIRINGS[key]
    except KeyError:
        raise KeyError(f"Unknown rotor {name!r}. Expected one of {rotor_names()}") from None
    return Rotor(
        wiring,
        alphabet,
        notch=ROTOR_NOTCHES.get(key),
        position=position,
        ring_position=ring,
        name=key,
    )


def make_reflector(name: str, alphabet: Alphabet = ALPHABET) -> Reflector:
    key = name.upper()
    try:
        wiring = REFLECTOR_WIRINGS[key]
    except KeyError:
        raise KeyError(f"Unknown reflector {name!r}. Expected one of {reflector_names()}") from None
    return Reflector(wiring, alphabet, name=key)


def make_entry_wheel(name: str, alphabet: Alphabet = ALPHABET) -> Wiring:
    key = name.upper()
    try:
        wiring = ENTRY_WHEEL_WIRINGS[key]
    except KeyError:
        raise KeyError(f"Unknown entry wheel {name!r}. Expected one of {sorted(ENTRY_WHEEL_WIRINGS)}") from None
    return Wiring(wiring, alphabet)


# ────────────────────────────────────────────────────────────────────────
#  2. Text helpers
# ────────────────────────────────────────────────────────────────────────


def preprocess_message(msg: str, alpha: Alphabet | str = ALPHABET) -> str:
    """Upper‑case and drop anything the keyboard does not have."""
    return "".join(ch for ch in msg.upper() if ch in alpha)


def group_blocks(text: str, block: int = 5) -> str:
    if block <= 0:
        return text
    return " ".join(text[i : i + block] for i in range(0, len(text), block))


# ────────────────────────────────────────────────────────────────────────
#  3. Interactive question helpers
# ────────────────────────────────────────────────────────────────────────


def get_rotor_selection(count: int = 3) -> List[str]:
    names = rotor_names()
    print("\nAvailable Rotors:", " ".join(names))
    while True:
        sel = ask(f"Select {count} rotors, left to right: ").split()
        if len(sel) == count and all(r in ROTOR_WIRINGS for r in sel):
            return sel
        print(f"❌  Need exactly {count} valid rotor names.")


def get_reflector_selection() -> str:
    names = reflector_names()
    print("\nAvailable Reflectors: ", ", ".join(names))
    while True:
        ref = ask("Select reflector: ")
        if ref in REFLECTOR_WIRINGS:
            return ref
        print("❌  Not a valid reflector.")


def get_plugboard(alpha: Alphabet = ALPHABET) -> List[str]:
    """Return a list of *validated* plugboard pairs (e.g. ["AB", "CD"])."""
    max_pairs = len(alpha) // 2

    print(f"\nPlugboard pairs (≤{max_pairs}, e.g. AB CD EF):")
    while True:
        raw = ask("Pairs (Enter for none): ")
        if not raw:
            return []

        pairs = raw.split()
        try:
            Plugboard(pairs, alpha)
        except ValueError as err:   # EnigmaError or a malformed pair
            print(f"❌  {err}")
            continue
        return pairs


def get_ring_settings(count: int, alpha: Alphabet = ALPHABET) -> List[int]:
    """Ring settings as the operator reads them off the sheet: 1‥N."""
    hi = len(alpha)
    while True:
        raw = ask(f"{count} ring settings 1-{hi}: ").split()
        if len(raw) == count and all(item.isdecimal() and 1 <= int(item) <= hi for item in raw):
            return [int(item) for item in raw]
        print(f"❌  Need exactly {count} numbers in 1–{hi}.")


def get_start_positions(count: int, alpha: Alphabet = ALPHABET) -> str:
    while True:
        key = ask(f"Start positions ({count} letters): ")
        if len(key) == count and all(ch in alpha for ch in key):
            return key
        print(f"❌ Must be exactly {count} symbols from the alphabet.")


def get_machine_settings(count: int = 3, alpha: Alphabet = ALPHABET):
    """Collect settings from the operator; returns
    `(rotors, reflector, rings, plugs, positions)` with 1-based rings."""
    rotors = get_rotor_selection(count)
    reflector = get_reflector_selection()
    plugs = get_plugboard(alpha)
    rings = get_ring_settings(count, alpha)
    positions = get_start_positions(count, alpha)
    return rotors, reflector, rings, plugs, positions


__all__ = [
    "ROTOR_WIRINGS",
    "ROTOR_NOTCHES",
    "REFLECTOR_WIRINGS",
    "ENTRY_WHEEL_WIRINGS",
    "IDENTITY",
    "make_rotor",
    "make_reflector",
    "make_entry_wheel",
    "preprocess_message",
    "group_blocks",
    "get_machine_settings",
]

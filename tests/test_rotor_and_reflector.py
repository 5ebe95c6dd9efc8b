import pytest

from errors import (
    InvalidReflection,
    InvalidSeries,
    InvalidSeriesLength,
    SymbolNotInAlphabet,
    SymbolNotInSeries,
)
from keyboard_and_plugboard import Plugboard
from rotor_and_reflector import Reflector, Rotor, Substitution, Wiring
from utilities import IDENTITY, REFLECTOR_WIRINGS, ROTOR_WIRINGS

ROTOR_I = "EKMFLGDQVZNTOWYHXUSPAIBRCJ"
REFLECTOR_A = "EJMZALYXVBWFCRQUONTSPIKHGD"


# ---------------------------------------------------------------------------
# Wiring
# ---------------------------------------------------------------------------

def test_wiring_substitution_both_directions():
    w = Wiring(ROTOR_I)
    for plain, cipher in zip(IDENTITY, ROTOR_I):
        assert w.encode(plain) == cipher
        assert w.inverse_encode(cipher) == plain


def test_wiring_length_checked():
    with pytest.raises(InvalidSeriesLength) as info:
        Wiring("ABC")
    assert info.value.expected == 26
    assert info.value.actual == 3
    # the length error is a kind of invalid series
    assert isinstance(info.value, InvalidSeries)


@pytest.mark.parametrize(
    "series",
    [
        "AAMFLGDQVZNTOWYHXUSPBIKRCJ",   # duplicate A
        "EKMFLGDQVZNTOWYHXUSPAIBRC1",   # foreign symbol
    ],
)
def test_wiring_rejects_non_permutation(series):
    with pytest.raises(InvalidSeries):
        Wiring(series)


def test_wiring_lookup_errors():
    w = Wiring(ROTOR_I)
    with pytest.raises(SymbolNotInAlphabet):
        w.encode("?")
    with pytest.raises(SymbolNotInSeries):
        w.inverse_encode("?")


def test_components_share_substitution_capability():
    assert isinstance(Wiring(ROTOR_I), Substitution)
    assert isinstance(Rotor(ROTOR_I), Substitution)
    assert isinstance(Plugboard(), Substitution)


# ---------------------------------------------------------------------------
# Rotor
# ---------------------------------------------------------------------------

def test_unadvanced_rotor_matches_wiring():
    rotor = Rotor(ROTOR_I)
    for plain, cipher in zip(IDENTITY, ROTOR_I):
        assert rotor.encode(plain) == cipher


def test_identity_rotor_advanced_thirteen_reaches_rot13_contact():
    rotor = Rotor(IDENTITY)
    rotor.advance(13)
    assert rotor.position == 13
    assert rotor.contact("A") == "N"
    # the exit shift cancels the turn for a straight-through wheel
    assert rotor.encode("A") == "A"


def test_position_changes_substitution():
    rotor = Rotor(ROTOR_I, position=1)
    # entry A meets contact B -> K, shifted back by one -> J
    assert rotor.contact("A") == "K"
    assert rotor.encode("A") == "J"


def test_ring_position_offsets_against_position():
    a = Rotor(ROTOR_I, position=5, ring_position=5)
    b = Rotor(ROTOR_I)
    assert [a.encode(c) for c in IDENTITY] == [b.encode(c) for c in IDENTITY]


@pytest.mark.parametrize("name", ["I", "II", "III", "VIII", "BETA", "SWISS-K-II"])
def test_rotor_inverse_for_every_position_and_ring(name):
    rotor = Rotor(ROTOR_WIRINGS[name])
    for ring in range(26):
        rotor.set_ring_position(ring)
        for pos in range(26):
            rotor.set_position(pos)
            for c in IDENTITY:
                assert rotor.inverse_encode(rotor.encode(c)) == c
                assert rotor.encode(rotor.inverse_encode(c)) == c


def test_rotor_encode_is_a_permutation_at_every_setting():
    rotor = Rotor(ROTOR_I, ring_position=7)
    for pos in range(26):
        rotor.set_position(pos)
        assert sorted(rotor.encode(c) for c in IDENTITY) == list(IDENTITY)


def test_setters_normalise_modulo_series_length():
    rotor = Rotor(ROTOR_I)
    assert rotor.set_position(27).position == 1
    assert rotor.set_position(-1).position == 25
    assert rotor.set_ring_position(52).ring_position == 0
    assert rotor.set_position("C").position == 2
    assert rotor.window == "C"


def test_advance_wraps_and_reports_notch():
    rotor = Rotor(ROTOR_I, notch=3, position=24)
    assert rotor.advance() is False
    assert rotor.position == 25
    assert rotor.advance() is False
    assert rotor.position == 0
    rotor.advance(2)
    assert rotor.advance() is True
    assert rotor.at_notch
    assert rotor.ring_position == 0


@pytest.mark.parametrize(
    "notch_value, expected",
    [
        (None, frozenset()),
        (17, frozenset({17})),
        (43, frozenset({17})),
        ("R", frozenset({17})),
        ("AN", frozenset({0, 13})),
        ([1, "C"], frozenset({1, 2})),
        ("", frozenset()),
    ],
)
def test_notch_forms(notch_value, expected):
    rotor = Rotor(ROTOR_I, notch=notch_value)
    assert rotor.notches == expected
    assert rotor.notch == (min(expected) if expected else None)


def test_rotor_without_notch_never_hits():
    rotor = Rotor(ROTOR_I)
    assert not any(rotor.advance() for _ in range(26))


def test_rotor_rejects_unknown_symbols():
    rotor = Rotor(ROTOR_I, position=4, ring_position=2)
    with pytest.raises(SymbolNotInAlphabet):
        rotor.encode("a")
    with pytest.raises(SymbolNotInAlphabet):
        rotor.inverse_encode("#")
    with pytest.raises(SymbolNotInAlphabet):
        rotor.set_notch("!")


def test_rotor_requires_full_series():
    with pytest.raises(InvalidSeriesLength):
        Rotor("EKMF")


# ---------------------------------------------------------------------------
# Reflector
# ---------------------------------------------------------------------------

def test_reflector_a_vector():
    refl = Reflector(REFLECTOR_A)
    assert refl.encode("A") == "E"
    assert refl.encode("E") == "A"
    assert refl.reflect("E") == "A"


@pytest.mark.parametrize("name", sorted(REFLECTOR_WIRINGS))
def test_reflector_involution(name):
    refl = Reflector(REFLECTOR_WIRINGS[name])
    for c in IDENTITY:
        assert refl.encode(refl.encode(c)) == c


def test_reflector_rejects_non_involution():
    with pytest.raises(InvalidReflection):
        Reflector(ROTOR_I)


def test_reflector_allows_fixed_points_when_involutive():
    refl = Reflector(IDENTITY)
    assert refl.encode("Q") == "Q"


def test_reflector_has_no_inverse_operation():
    refl = Reflector(REFLECTOR_A)
    assert not hasattr(refl, "inverse_encode")
    assert not isinstance(refl, Substitution)


def test_reflector_rejects_unknown_symbol():
    with pytest.raises(SymbolNotInAlphabet):
        Reflector(REFLECTOR_A).encode("0")


def test_wiring_inverse_table_undoes_forward_table():
    w = Wiring(ROTOR_I)
    for i in range(26):
        assert w.inverse_index(w.forward_index(i)) == i
    assert w.inverse_index(0) == ROTOR_I.index("A")


def test_rotor_inverse_reads_precomputed_table(monkeypatch):
    rotor = Rotor(ROTOR_I, position=3, ring_position=7)
    expected = [rotor.inverse_encode(c) for c in IDENTITY]
    calls = []
    table = rotor.wiring.inverse_index

    def counting(i):
        calls.append(i)
        return table(i)

    monkeypatch.setattr(rotor.wiring, "inverse_index", counting)
    assert [rotor.inverse_encode(c) for c in IDENTITY] == expected
    assert len(calls) == 26

    # a scrambled table changes the output, so the table is really on the path
    monkeypatch.setattr(rotor.wiring, "_rev", tuple(reversed(rotor.wiring._rev)))
    assert [rotor.inverse_encode(c) for c in IDENTITY] != expected

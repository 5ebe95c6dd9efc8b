import logging

import pytest

from debug import COMPONENTS, Debug
from machine import Machine
from utilities import make_reflector, make_rotor


@pytest.fixture
def dbg():
    d = Debug()
    saved = d.status()
    yield d
    d.disable(*COMPONENTS)
    d.enable(*[c for c, on in saved.items() if on])
    d.toggle_global(True)


def test_all_components_off_by_default(dbg):
    assert dbg.status() == {c: False for c in COMPONENTS}


def test_toggles_are_shared_between_instances(dbg):
    Debug().enable("stepping")
    assert dbg.status()["stepping"] is True
    dbg.toggle("stepping")
    assert Debug().active("stepping") is False


def test_unknown_component(dbg):
    with pytest.raises(ValueError):
        dbg.enable("keyboard")


def test_trace_reaches_enigma_logger(dbg, caplog):
    dbg.enable("stepping", "encipher")
    machine = Machine([make_rotor("I"), make_rotor("II"), make_rotor("III")], make_reflector("B"))
    with caplog.at_level(logging.DEBUG, logger="ENIGMA"):
        machine.encipher("A")
    text = caplog.text
    assert "[STEPPING]" in text
    assert "[ENCIPHER] A->B @ AAB" in text


def test_global_switch_silences_everything(dbg, caplog):
    dbg.enable(*COMPONENTS)
    dbg.toggle_global(False)
    with caplog.at_level(logging.DEBUG, logger="ENIGMA"):
        make_reflector("B").encode("A")
    assert caplog.text == ""


def test_rotor_trace_only_when_active(dbg, caplog):
    rotor = make_rotor("I")
    with caplog.at_level(logging.DEBUG, logger="ENIGMA"):
        rotor.encode("A")
    assert "[ROTOR]" not in caplog.text

    dbg.enable("rotor")
    assert dbg.active("rotor")
    with caplog.at_level(logging.DEBUG, logger="ENIGMA"):
        rotor.encode("A")
        rotor.inverse_encode("E")
    assert "[ROTOR] I fwd A->E" in caplog.text
    assert "[ROTOR] I inv E->A" in caplog.text

"""
Tests for the console command interpreter.
"""

import pytest
from vitality.character.creature import Creature
from vitality.effects.scheduler import ManualClock, Scheduler
from vitality.ui.cli_interface import CommandInterpreter


@pytest.fixture
def interpreter():
    creature = Creature.new(
        "Goblin", 20, resistances={"Fire"}, scheduler=Scheduler(ManualClock())
    )
    return CommandInterpreter(creature)


def test_damage_with_tag(interpreter):
    message = interpreter.execute("dmg 10 fire")
    assert "FIRE" in message
    assert "RESISTED" in message
    assert interpreter.creature.ledger.current_hp == 15


def test_damage_defaults_to_generic(interpreter):
    interpreter.execute("dmg 4")
    assert interpreter.creature.ledger.log[-1].tag == "Generic"


def test_damage_errors(interpreter):
    assert "Usage" in interpreter.execute("dmg")
    assert "Unknown damage type" in interpreter.execute("dmg 5 banana")
    assert "Ignored" in interpreter.execute("dmg zero")
    assert interpreter.creature.ledger.log == ()


def test_heal_undo_restore(interpreter):
    interpreter.execute("dmg 12 slashing")
    interpreter.execute("heal 2")
    assert interpreter.creature.ledger.current_hp == 10
    assert "reverted" in interpreter.execute("undo")
    assert interpreter.creature.ledger.current_hp == 8
    assert "RESTORATION" in interpreter.execute("restore")
    assert interpreter.creature.ledger.current_hp == 20
    interpreter.execute("undo")
    interpreter.execute("undo")
    assert "Nothing to undo" in interpreter.execute("undo")


def test_misc_commands(interpreter):
    assert interpreter.execute("") == ""
    assert interpreter.execute("quit") is None
    assert "Commands" in interpreter.execute("help")
    assert "Unknown command" in interpreter.execute("jump")
    assert "Elemental" in interpreter.execute("tags")
    assert interpreter.execute("log") == ""
    assert interpreter.execute("sheet") == ""


def test_resolve_tag_is_case_insensitive(interpreter):
    assert interpreter.resolve_tag("nEcRoTiC") == "Necrotic"
    assert interpreter.resolve_tag("nothing") is None
    assert interpreter.resolve_tag(None) is None


def test_main_parser_defaults():
    from vitality.main import build_parser

    args = build_parser().parse_args([])
    assert args.creature is None
    assert args.hp == 100
    assert not args.debug
    args = build_parser().parse_args(["ogre.json", "--hp", "30", "--debug"])
    assert args.creature.name == "ogre.json"
    assert args.hp == 30
    assert args.debug


def test_main_reports_invalid_creature_file(tmp_path):
    from vitality.main import main

    path = tmp_path / "broken.json"
    path.write_text("{")
    assert main([str(path)]) == 1

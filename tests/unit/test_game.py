import pytest
import yaml

from gridquest import game
from gridquest.commands import SAVE_SUCCESS, UNKNOWN_COMMAND

from tests.conftest import DummyIO


def test_run_until_quit_without_saving(world_file, tmp_path):
    io = DummyIO(["d", "dance", "quit", "n"])
    g = game.Game(str(world_file), io_backend=io)
    g.run()
    assert io.outputs[0] == "Welcome to the farm.\n\n"
    assert "Green grass.\n\n" in io.outputs
    assert UNKNOWN_COMMAND in io.outputs
    assert io.outputs[-1] == game.FAREWELL
    assert io.prompts[-1] == game.SAVE_PROMPT
    assert g.player.location.coords == (1, 2)
    assert not g.running
    assert not (tmp_path / "player.yaml").exists()


def test_quit_with_save_then_resume(world_file, tmp_path):
    io = DummyIO(["d", "QUIT", "yes"])
    game.Game(str(world_file), io_backend=io).run()
    assert SAVE_SUCCESS in io.outputs
    assert (tmp_path / "player.yaml").exists()

    io2 = DummyIO(["quit", "n"])
    g2 = game.Game(str(world_file), io_backend=io2)
    assert g2.player.location.coords == (1, 2)
    g2.run()
    assert "Welcome to the farm.\n\n" not in io2.outputs


def test_new_game_ignores_save(world_file, tmp_path):
    io = DummyIO(["d", "save"])
    game.Game(str(world_file), io_backend=io).run()
    g = game.Game(str(world_file), io_backend=DummyIO(), new_game=True)
    assert g.player.location.coords == (1, 1)


def test_custom_save_path(world_file, tmp_path):
    save_path = tmp_path / "slot1.yaml"
    io = DummyIO(["save"])
    game.Game(str(world_file), str(save_path), io_backend=io).run()
    assert save_path.exists()
    assert not (tmp_path / "player.yaml").exists()


def test_end_of_input_stops(world_file):
    io = DummyIO([])
    g = game.Game(str(world_file), io_backend=io)
    g.run()
    assert io.outputs[-1] == "\n" + game.FAREWELL
    assert not g.running


def test_missing_world_file(tmp_path, io_backend):
    with pytest.raises(SystemExit):
        game.Game(str(tmp_path / "nowhere.yaml"), io_backend=io_backend)
    assert any("Missing world file" in o for o in io_backend.outputs)


def test_corrupted_world_file(world_file, io_backend):
    world_file.write_text("- : - invalid yaml", encoding="utf-8")
    with pytest.raises(SystemExit):
        game.Game(str(world_file), io_backend=io_backend)
    assert any("Invalid world file" in o for o in io_backend.outputs)


def test_corrupted_save_file(world_file, tmp_path, io_backend):
    (tmp_path / "player.yaml").write_text("- : - invalid yaml", encoding="utf-8")
    with pytest.raises(SystemExit):
        game.Game(str(world_file), io_backend=io_backend)
    assert any("save file" in o for o in io_backend.outputs)


def test_integrity_errors_stop_the_game(world_file, world_data, io_backend):
    world_data["start"]["coords"] = [0, 0]
    with open(world_file, "w", encoding="utf-8") as fh:
        yaml.safe_dump(world_data, fh)
    with pytest.raises(SystemExit):
        game.Game(str(world_file), io_backend=io_backend)
    assert io_backend.outputs == ["ERROR: Start position (0, 0) on map 'farm' is not passable\n"]


def test_save_for_other_world_is_rejected(world_file, tmp_path, io_backend):
    with open(tmp_path / "player.yaml", "w", encoding="utf-8") as fh:
        yaml.safe_dump({"player": {"location": {"map": "cave", "coords": [0, 0]}}}, fh)
    with pytest.raises(SystemExit):
        game.Game(str(world_file), io_backend=io_backend)
    assert io_backend.outputs == ["ERROR: Saved location references unknown map 'cave'\n"]


def test_debug_outputs_after_state_changes(world_file, capsys):
    g = game.Game(str(world_file), io_backend=DummyIO(), debug=True)
    capsys.readouterr()
    g.command_processor.interpret("d", g.player)
    err = capsys.readouterr().err
    assert "-- command move_right" in err
    assert "-- location farm (1, 2)" in err

    g.command_processor.interpret("drop torch", g.player)
    err = capsys.readouterr().err
    assert "-- command drop args 'torch'" in err
    assert "-- inventory [('torch', 1), ('rock', 1), ('bread', 1), ('sword', 1)]" in err


def test_malformed_save_is_reported(world_file, tmp_path, io_backend):
    with open(tmp_path / "player.yaml", "w", encoding="utf-8") as fh:
        yaml.safe_dump(
            {
                "player": {"location": {"map": "farm", "coords": [1, 1]}, "inventory": ["torch"]},
                "world": {"events": [{"map": "farm", "at": [1], "index": 0}]},
            },
            fh,
        )
    with pytest.raises(SystemExit):
        game.Game(str(world_file), io_backend=io_backend)
    assert io_backend.outputs == [
        "ERROR: Saved inventory entry 'torch' must be a mapping\n",
        "ERROR: Saved event {'map': 'farm', 'at': [1], 'index': 0} needs 'at: [row, col]' and an integer 'index'\n",
    ]

from pathlib import Path

from sokoban_engine.config import DEFAULT_BOARD_STR, GameParameters, load_config, params_from_dict


def test_defaults():
    params = GameParameters()
    assert params.game_board_str == DEFAULT_BOARD_STR
    assert params.rng_seed == 0
    assert params.compact_observation is True
    assert params.sprite_size == 16


def test_load_yaml(tmp_path):
    path = tmp_path / "engine.yaml"
    path.write_text(
        "game:\n"
        "  game_board_str: \"1|3|0|2|3\"\n"
        "  rng_seed: 5\n"
        "  compact_observation: false\n",
        encoding="utf-8",
    )
    params = load_config(str(path))
    assert params.game_board_str == "1|3|0|2|3"
    assert params.rng_seed == 5
    assert params.compact_observation is False
    assert params.sprite_size == 16


def test_empty_yaml_gives_defaults(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")
    assert load_config(str(path)) == GameParameters()


def test_unknown_keys_warn(capsys):
    params = params_from_dict({"rng_seed": "2", "max_steps": 100})
    assert params.rng_seed == 2
    out = capsys.readouterr().out
    assert "Warning" in out and "max_steps" in out


def test_with_overrides_keeps_original():
    params = GameParameters()
    other = params.with_overrides(rng_seed=9)
    assert other.rng_seed == 9
    assert params.rng_seed == 0


def test_repo_config_loads():
    path = Path(__file__).parent.parent / "configs" / "engine.yaml"
    assert load_config(str(path)) == GameParameters()

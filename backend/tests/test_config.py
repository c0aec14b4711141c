from unittest.mock import patch

from app.config import Settings


def test_defaults() -> None:
    settings = Settings()
    assert settings.broadcast_interval_ms == 500
    assert settings.broadcast_interval == 0.5
    assert settings.slot_colors == ("Red", "Green", "Blue")
    assert settings.max_players == 3
    assert settings.ball_count == 20


def test_from_env_overrides() -> None:
    env = {
        "BROADCAST_INTERVAL_MS": "250",
        "GAME_COLORS": " Cyan, Magenta ,Yellow,Black ",
        "GAME_BALLS": "30",
        "PORT": "9000",
        "LOG_LEVEL": "debug",
    }
    with patch.dict("os.environ", env, clear=False):
        settings = Settings.from_env()
    assert settings.broadcast_interval_ms == 250
    assert settings.slot_colors == ("Cyan", "Magenta", "Yellow", "Black")
    assert settings.max_players == 4
    assert settings.ball_count == 30
    assert settings.port == 9000
    assert settings.log_level == "DEBUG"


def test_from_env_falls_back_on_bad_values() -> None:
    env = {"BROADCAST_INTERVAL_MS": "fast", "GAME_COLORS": "Red,Red", "OUTBOX_SIZE": "0"}
    with patch.dict("os.environ", env, clear=False):
        settings = Settings.from_env()
    assert settings.broadcast_interval_ms == 500
    assert settings.slot_colors == ("Red", "Green", "Blue")
    assert settings.outbox_size == 1

import pytest

from bond_desk.config import DeskConfig
from bond_desk.errors import ConfigError


class TestDeskConfig:
    """Defaults, validation, environment overlay"""

    def test_defaults(self):
        config = DeskConfig()
        assert config.market_data.book_depth == 5
        assert config.algo_execution.spread_threshold == 1 / 128
        assert config.booking.books == ["TRSY1", "TRSY2", "TRSY3"]
        assert config.validate() is config

    @pytest.mark.parametrize("mutate", [
        lambda c: setattr(c.market_data, "book_depth", 0),
        lambda c: setattr(c.algo_execution, "spread_threshold", -0.1),
        lambda c: setattr(c.booking, "books", []),
        lambda c: setattr(c.booking, "books", ["A", "A"]),
        lambda c: setattr(c.algo_streaming, "size_cycle", 0),
        lambda c: setattr(c.history, "max_rows_per_store", 0),
    ])
    def test_invalid_values(self, mutate):
        config = DeskConfig()
        mutate(config)
        with pytest.raises(ConfigError):
            config.validate()

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("BOND_DESK_BOOK_DEPTH", "3")
        monkeypatch.setenv("BOND_DESK_SPREAD_THRESHOLD", "1/64")
        monkeypatch.setenv("BOND_DESK_BOOKS", "NY1, LDN1")
        monkeypatch.setenv("BOND_DESK_LOG_LEVEL", "debug")
        config = DeskConfig.from_env()
        assert config.market_data.book_depth == 3
        assert config.algo_execution.spread_threshold == 1 / 64
        assert config.booking.books == ["NY1", "LDN1"]
        assert config.log_level == "DEBUG"

    def test_from_env_file(self, monkeypatch, tmp_path):
        # load_dotenv writes os.environ directly; register the key so teardown removes it
        monkeypatch.setenv("BOND_DESK_DESK_ID", "placeholder")
        monkeypatch.delenv("BOND_DESK_DESK_ID")
        env_file = tmp_path / ".env"
        env_file.write_text("BOND_DESK_DESK_ID=TEST-DESK\n")
        config = DeskConfig.from_env(env_file)
        assert config.desk_id == "TEST-DESK"

    @pytest.mark.parametrize("name,value", [
        ("BOND_DESK_BOOK_DEPTH", "five"),
        ("BOND_DESK_SPREAD_THRESHOLD", "1/0"),
        ("BOND_DESK_BOOK_DEPTH", "0"),
    ])
    def test_bad_env_values(self, monkeypatch, name, value):
        monkeypatch.setenv(name, value)
        with pytest.raises(ConfigError):
            DeskConfig.from_env()

"""
Tests for SessionConfig and load_session_config
"""

import pytest
from pydantic import ValidationError

from ircduplex import constants
from ircduplex.config import load_session_config
from ircduplex.config.model import SessionConfig
from ircduplex.errors.internal import ConfigurationError


class TestSessionConfig:
    """Test SessionConfig validation and rendering"""

    def test_defaults_come_from_constants(self):
        """Test unspecified fields fall back to the environment constants"""
        config = SessionConfig()
        assert config.server == constants.IRC_SERVER
        assert config.port == constants.IRC_PORT
        assert config.nick == constants.IRC_NICK
        assert config.read_timeout is None

    def test_registration_lines(self):
        """Test USER and NICK lines use the nick and realname"""
        config = SessionConfig(nick="wiz", realname="The Wizard")
        assert config.user_line() == "USER wiz 0 * :The Wizard"
        assert config.nick_line() == "NICK wiz"

    def test_nick_is_stripped(self):
        assert SessionConfig(nick="  wiz ").nick == "wiz"

    @pytest.mark.parametrize("nick", ["", "   ", "two words", ":colon", "line\nbreak"])
    def test_invalid_nick_rejected(self, nick):
        """Test nicks that would break the registration line are rejected"""
        with pytest.raises(ValidationError):
            SessionConfig(nick=nick)

    def test_realname_with_line_break_rejected(self):
        with pytest.raises(ValidationError):
            SessionConfig(realname="evil\r\nQUIT")

    def test_realname_may_contain_spaces_and_colons(self):
        assert SessionConfig(realname="Dr: Who Knows").realname == "Dr: Who Knows"

    @pytest.mark.parametrize("port", [0, -1, 65536])
    def test_port_out_of_range_rejected(self, port):
        with pytest.raises(ValidationError):
            SessionConfig(port=port)

    @pytest.mark.parametrize("value", [0, 0.0, -5])
    def test_non_positive_read_timeout_disables_timeout(self, value):
        assert SessionConfig(read_timeout=value).read_timeout is None

    def test_positive_read_timeout_kept(self):
        assert SessionConfig(read_timeout=2.5).read_timeout == 2.5

    def test_from_env_uses_patched_constants(self, monkeypatch):
        """Test from_env reads the module-level constants"""
        monkeypatch.setattr(constants, "IRC_SERVER", "irc.test.net")
        monkeypatch.setattr(constants, "IRC_NICK", "envnick")
        monkeypatch.setattr(constants, "IRC_READ_TIMEOUT", 0.0)
        config = SessionConfig.from_env()
        assert config.server == "irc.test.net"
        assert config.nick == "envnick"
        assert config.read_timeout is None

    def test_dict_round_trip(self):
        config = SessionConfig(server="irc.example.org", nick="wiz", read_timeout=3)
        data = config.to_dict()
        assert "read_timeout" in data
        assert SessionConfig.from_dict(data) == config

    def test_from_dict_ignores_none_values(self):
        config = SessionConfig.from_dict({"nick": "wiz", "port": None})
        assert config.port == constants.IRC_PORT


class TestLoadSessionConfig:
    """Test merging of overrides over environment defaults"""

    def test_overrides_win(self, monkeypatch):
        monkeypatch.setattr(constants, "IRC_NICK", "envnick")
        config = load_session_config({"nick": "cli-nick", "port": 7000})
        assert config.nick == "cli-nick"
        assert config.port == 7000

    def test_none_overrides_keep_defaults(self, monkeypatch):
        monkeypatch.setattr(constants, "IRC_SERVER", "irc.env.org")
        config = load_session_config({"server": None})
        assert config.server == "irc.env.org"

    def test_no_overrides(self):
        assert load_session_config().nick == constants.IRC_NICK

    def test_invalid_values_raise_configuration_error(self):
        with pytest.raises(ConfigurationError) as exc_info:
            load_session_config({"port": 0, "nick": "bad nick"})
        message = str(exc_info.value)
        assert "port" in message
        assert "nick" in message
        assert exc_info.value.data["errors"]

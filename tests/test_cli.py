"""Tests for settings and the command-line entry point."""

import argparse

import pytest
from pydantic import ValidationError

from tictactoe_mcp import cli
from tictactoe_mcp.config import Settings, Transport
from tictactoe_mcp.main import create_app
from tictactoe_mcp.server import TicTacToeServer


class TestSettings:
    def test_defaults(self, settings: Settings):
        assert settings.TRANSPORT == Transport.STDIO
        assert settings.PORT == 8080
        assert settings.DEBUG is False
        assert settings.GAME_ID_PREFIX == "game-"
        assert settings.bind_address == "0.0.0.0:8080"

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("TRANSPORT", " HTTP ")
        monkeypatch.setenv("PORT", "9000")
        monkeypatch.setenv("DEBUG", "true")

        settings = Settings(_env_file=None)

        assert settings.TRANSPORT == Transport.HTTP
        assert settings.PORT == 9000
        assert settings.DEBUG is True

    @pytest.mark.parametrize("port", [0, 70000])
    def test_port_range(self, port: int):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, PORT=port)

    def test_unknown_transport(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, TRANSPORT="carrier-pigeon")


class TestParseAddr:
    def test_port_only(self):
        assert cli.parse_addr(":8080") == ("0.0.0.0", 8080)

    def test_host_and_port(self):
        assert cli.parse_addr("127.0.0.1:9000") == ("127.0.0.1", 9000)

    def test_default_host(self):
        assert cli.parse_addr(":81", default_host="localhost") == ("localhost", 81)

    @pytest.mark.parametrize("addr", ["8080", "host:", "host:http", ":0", ":65536"])
    def test_invalid(self, addr: str):
        with pytest.raises(ValueError):
            cli.parse_addr(addr)


class TestResolveSettings:
    def test_no_flags_keeps_settings(self, settings: Settings):
        args = cli.build_parser().parse_args([])

        assert cli.resolve_settings(args, settings) is settings

    def test_flags_override(self, settings: Settings):
        args = cli.build_parser().parse_args(["--transport", "sse", "--addr", "localhost:9999", "--debug"])

        resolved = cli.resolve_settings(args, settings)

        assert resolved.TRANSPORT == Transport.SSE
        assert resolved.HOST == "localhost"
        assert resolved.PORT == 9999
        assert resolved.DEBUG is True
        assert settings.TRANSPORT == Transport.STDIO

    def test_rejects_unknown_transport(self):
        with pytest.raises(SystemExit):
            cli.build_parser().parse_args(["--transport", "ws"])

    def test_bad_addr(self, settings: Settings):
        args = argparse.Namespace(transport=None, addr="nope", debug=False)

        with pytest.raises(ValueError):
            cli.resolve_settings(args, settings)


class TestMain:
    @pytest.fixture(autouse=True)
    def quiet(self, monkeypatch, settings: Settings):
        monkeypatch.setattr(cli, "configure_logging", lambda debug, stream=None: None)
        monkeypatch.setattr(cli, "get_settings", lambda: settings)

    def test_stdio(self, monkeypatch):
        served = []

        async def fake_serve_stdio(server):
            served.append(server)

        monkeypatch.setattr(cli, "serve_stdio", fake_serve_stdio)

        assert cli.main([]) == 0
        assert len(served) == 1
        assert served[0].settings.TRANSPORT == Transport.STDIO

    @pytest.mark.parametrize("transport", ["sse", "http"])
    def test_http_transports(self, monkeypatch, transport: str):
        calls = []
        monkeypatch.setattr(cli.uvicorn, "run", lambda app, **kwargs: calls.append((app, kwargs)))

        assert cli.main(["--transport", transport, "--addr", ":9090"]) == 0

        app, kwargs = calls[0]
        assert kwargs["host"] == "0.0.0.0"
        assert kwargs["port"] == 9090
        assert kwargs["log_level"] == "info"
        paths = {route.path for route in app.routes}
        assert ("/mcp" in paths) is (transport == "http")
        assert ("/sse" in paths) is (transport == "sse")

    def test_debug_log_level(self, monkeypatch):
        calls = []
        monkeypatch.setattr(cli.uvicorn, "run", lambda app, **kwargs: calls.append(kwargs))

        cli.main(["--transport", "http", "--debug"])

        assert calls[0]["log_level"] == "debug"

    def test_bad_addr_exits(self):
        with pytest.raises(SystemExit) as exc_info:
            cli.main(["--transport", "http", "--addr", "nowhere"])

        assert exc_info.value.code == 2


def test_create_app_default_transports(settings: Settings):
    app = create_app(TicTacToeServer(settings=settings))
    paths = {route.path for route in app.routes}

    assert {"/mcp", "/sse", "/messages", "/health", "/"} <= paths

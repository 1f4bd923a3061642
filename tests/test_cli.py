"""Tests for the hashfort console script."""

import json

import pytest
from argon2 import PasswordHasher

from hashfort import cli


def _set_password(monkeypatch, value: str) -> None:
    monkeypatch.setattr(cli.getpass, "getpass", lambda prompt="": value)


class TestCli:
    def test_no_command_prints_help(self, capsys):
        with pytest.raises(SystemExit) as exc:
            cli.main([])
        assert exc.value.code == 1
        assert "usage: hashfort" in capsys.readouterr().out

    def test_config(self, capsys):
        cli.main(["config"])
        data = json.loads(capsys.readouterr().out)
        assert data["defaultOptions"]["memory_cost"] == 19456
        assert data["limits"]["batch_size"] == {"max": 100}

    def test_hash(self, monkeypatch, capsys):
        _set_password(monkeypatch, "hunter2")
        cli.main(["hash", "--time-cost", "1", "--memory-cost", "8192", "--parallelism", "2"])
        hashed = capsys.readouterr().out.strip()
        assert hashed.startswith("$argon2id$v=19$m=8192,t=1,p=2$")
        assert PasswordHasher().verify(hashed, "hunter2")

    def test_hash_empty_password(self, monkeypatch, capsys):
        _set_password(monkeypatch, "")
        with pytest.raises(SystemExit) as exc:
            cli.main(["hash"])
        assert exc.value.code == 2
        assert "Password must be a non-empty string" in capsys.readouterr().err

    def test_verify_valid_and_invalid(self, monkeypatch, capsys):
        hashed = PasswordHasher(time_cost=1, memory_cost=8192).hash("hunter2")

        _set_password(monkeypatch, "hunter2")
        with pytest.raises(SystemExit) as exc:
            cli.main(["verify", hashed])
        assert exc.value.code == 0
        assert capsys.readouterr().out.strip() == "valid"

        _set_password(monkeypatch, "hunter3")
        with pytest.raises(SystemExit) as exc:
            cli.main(["verify", hashed])
        assert exc.value.code == 1
        assert capsys.readouterr().out.strip() == "invalid"

    def test_verify_malformed_hash(self, monkeypatch, capsys):
        _set_password(monkeypatch, "hunter2")
        with pytest.raises(SystemExit) as exc:
            cli.main(["verify", "not-a-hash"])
        assert exc.value.code == 2
        assert "Invalid hash format" in capsys.readouterr().err

"""Tests for the os.environ boundary and the map_env helper."""

from __future__ import annotations

import os

import pytest

import envmapper
from envmapper.environ import environ_source
from envmapper.exceptions import MissingValueError

from envs import EnvWithMissingValue, SlottedEnvironment


class TestEnvironSource:
    def test_is_a_snapshot(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ENVMAPPER_SNAPSHOT", "before")
        snapshot = environ_source()
        monkeypatch.setenv("ENVMAPPER_SNAPSHOT", "after")

        assert snapshot["ENVMAPPER_SNAPSHOT"] == "before"
        assert os.environ["ENVMAPPER_SNAPSHOT"] == "after"


class TestMapEnv:
    def test_reads_process_environment_by_default(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("HOSTNAME", "from-env")
        monkeypatch.setenv("SHLVL", "3")

        env = envmapper.map_env(SlottedEnvironment)

        assert env.hostname == "from-env"
        assert env.shlvl == 3

    def test_explicit_source_ignores_environment(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("HOSTNAME", "from-env")

        env = envmapper.map_env(SlottedEnvironment, {"HOSTNAME": "given", "SHLVL": 2})

        assert env.hostname == "given"
        assert env.shlvl == 2

    def test_empty_source_is_not_replaced_by_environment(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("MISSING", "from-env")

        with pytest.raises(MissingValueError):
            envmapper.map_env(EnvWithMissingValue, {}, require_values=True)

    def test_public_api(self) -> None:
        assert envmapper.EnvMapper is not None
        assert "map_env" in envmapper.__all__
        assert envmapper.normalize_name("zipCode") == "ZIP_CODE"

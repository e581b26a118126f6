"""Pytest fixtures for ironpass tests."""

from __future__ import annotations

import asyncio
import os
import tempfile
from pathlib import Path
from typing import TYPE_CHECKING

import pytest
from hypothesis import Phase, Verbosity, settings

from tests.helpers.mocks import make_process

_TEST_BASE_DIR = Path(tempfile.mkdtemp(prefix="ironpass-tests-"))
os.environ["IRONPASS_CONFIG_DIR"] = str(_TEST_BASE_DIR / "config")

if TYPE_CHECKING:
    from collections.abc import Callable


settings.register_profile(
    "ci",
    max_examples=100,
    deadline=None,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
)
settings.register_profile(
    "dev",
    max_examples=20,
    deadline=500,
)
settings.register_profile(
    "debug",
    max_examples=10,
    verbosity=Verbosity.verbose,
    deadline=None,
)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


@pytest.fixture
def fake_pass(monkeypatch) -> Callable[..., list[dict[str, object]]]:
    """Replace subprocess spawning with a canned process.

    Returns a configure function; the list it returns records every spawn as
    ``{"args": ..., "kwargs": ...}``.
    """
    calls: list[dict[str, object]] = []

    def _configure(
        *, returncode: int = 0, stdout: str = "", stderr: str = "", error: Exception | None = None
    ) -> list[dict[str, object]]:
        async def _spawn(*args, **kwargs):
            calls.append({"args": list(args), "kwargs": kwargs})
            if error is not None:
                raise error
            return make_process(
                returncode=returncode,
                stdout=stdout.encode("utf-8"),
                stderr=stderr.encode("utf-8"),
            )

        monkeypatch.setattr(asyncio, "create_subprocess_exec", _spawn)
        return calls

    return _configure


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    """Path to a not-yet-existing config file in a temp directory."""
    return tmp_path / "ironpass" / "config.toml"

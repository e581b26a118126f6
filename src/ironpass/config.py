"""Configuration loader for ironpass."""

from __future__ import annotations

import asyncio
import os
import tomllib
from typing import TYPE_CHECKING

import tomlkit
from pydantic import BaseModel, Field, field_validator

from ironpass.atomic import atomic_write
from ironpass.constants import (
    DEFAULT_HEADER_PREFIXES,
    DEFAULT_PASS_COMMAND,
    DEFAULT_TIMEOUT_SECONDS,
    PASSWORD_STORE_DIR_ENV,
)
from ironpass.paths import get_config_path

if TYPE_CHECKING:
    from collections.abc import Mapping
    from pathlib import Path


class StoreConfig(BaseModel):
    """How the external password-store command is invoked."""

    command: str = Field(default=DEFAULT_PASS_COMMAND, description="Executable to run")
    store_dir: str | None = Field(
        default=None, description="Password store location (None = command default)"
    )
    env: dict[str, str] = Field(
        default_factory=dict,
        description="Extra environment variables passed to the command",
    )
    timeout_seconds: float = Field(
        default=DEFAULT_TIMEOUT_SECONDS, gt=0, description="Kill the command after this long"
    )

    @field_validator("command")
    @classmethod
    def validate_command(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("command must not be empty")
        return value

    def build_env(self, base: Mapping[str, str] | None = None) -> dict[str, str]:
        """Return the child environment without touching ``os.environ``.

        Args:
            base: Starting environment (defaults to a copy of the current one).
        """
        env = dict(os.environ if base is None else base)
        env.update(self.env)
        if self.store_dir:
            env[PASSWORD_STORE_DIR_ENV] = os.path.expanduser(self.store_dir)
        return env


class ListingConfig(BaseModel):
    """How captured listings are parsed."""

    header_prefixes: list[str] = Field(
        default_factory=lambda: list(DEFAULT_HEADER_PREFIXES),
        description="Lines starting with these prefixes are banners, not entries",
    )

    @field_validator("header_prefixes")
    @classmethod
    def drop_empty_prefixes(cls, value: list[str]) -> list[str]:
        """An empty prefix would match every line."""
        return [prefix for prefix in value if prefix]


class IronPassConfig(BaseModel):
    """Root configuration model."""

    store: StoreConfig = Field(default_factory=StoreConfig)
    listing: ListingConfig = Field(default_factory=ListingConfig)

    @classmethod
    def load(cls, config_path: Path | None = None) -> IronPassConfig:
        """Load configuration from TOML file or use defaults."""
        if config_path is None:
            config_path = get_config_path()

        if config_path.exists():
            with open(config_path, "rb") as f:
                data = tomllib.load(f)
            return cls.model_validate(data)

        return cls()

    def to_toml(self) -> str:
        doc = tomlkit.document()

        store_table = tomlkit.table()
        for key, value in self.store.model_dump().items():
            if value is not None and value != {}:
                store_table[key] = value
        doc["store"] = store_table

        listing_table = tomlkit.table()
        listing_table["header_prefixes"] = self.listing.header_prefixes
        doc["listing"] = listing_table

        return tomlkit.dumps(doc)

    async def save(self, path: Path) -> None:
        """Serialize current config to TOML file.

        Args:
            path: Path to write config file (created if missing)
        """
        await asyncio.to_thread(atomic_write, path, self.to_toml())

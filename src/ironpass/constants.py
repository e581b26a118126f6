"""Literals shared across ironpass - no circular dependencies."""

from __future__ import annotations

SEARCH_TERMS_HEADER = "Search Terms:"
DEFAULT_HEADER_PREFIXES: tuple[str, ...] = (SEARCH_TERMS_HEADER,)

PATH_SEPARATOR = "/"

DEFAULT_PASS_COMMAND = "pass"
PASSWORD_STORE_DIR_ENV = "PASSWORD_STORE_DIR"

# `pass find` exits 1 when nothing matched
NO_MATCHES_EXIT_CODE = 1
DEFAULT_TIMEOUT_SECONDS = 10.0

CONFIG_FILENAME = "config.toml"

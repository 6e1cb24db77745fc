"""Matcher configuration loading.

Two sources are supported: a mapping (e.g. decoded JSON) with the keys
``db_path``, ``allow_asos`` and ``deny_asos``, and the block syntax used in
server config files::

    maxmind_asn {
        db_path /var/lib/GeoLite2-ASN.mmdb
        allow_asos google "amazon.com"
        deny_asos spam-isp
    }
"""

import json
import logging
import shlex
from dataclasses import dataclass, field
from enum import Enum, auto
from pathlib import Path
from typing import Any

from asngate.core.aso_policy import AsoPolicy
from asngate.errors import ConfigError

logger = logging.getLogger(__name__)

KNOWN_KEYS = frozenset({"db_path", "allow_asos", "deny_asos"})


class _Field(Enum):
    """Block parser state: which option the next values belong to."""

    NONE = auto()
    DB_PATH = auto()
    ALLOW_ASOS = auto()
    DENY_ASOS = auto()


_KEYWORDS = {
    "db_path": _Field.DB_PATH,
    "allow_asos": _Field.ALLOW_ASOS,
    "deny_asos": _Field.DENY_ASOS,
}


@dataclass
class MatcherConfig:
    """ASN matcher configuration.

    Attributes:
        db_path: Path to the MaxMind ASN database
        allow_asos: Organization fragments to admit (lowercased)
        deny_asos: Organization fragments to reject (lowercased)
    """

    db_path: str = ""
    allow_asos: list[str] = field(default_factory=list)
    deny_asos: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.allow_asos = [f.lower() for f in self.allow_asos]
        self.deny_asos = [f.lower() for f in self.deny_asos]

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MatcherConfig":
        """Create configuration from a mapping.

        Args:
            data: Mapping with db_path and optional allow_asos / deny_asos

        Returns:
            Validated MatcherConfig

        Raises:
            ConfigError: On unknown keys, wrong types or a missing db_path
        """
        if not isinstance(data, dict):
            raise ConfigError(f"configuration must be a mapping, got {type(data).__name__}")

        unknown = set(data) - KNOWN_KEYS
        if unknown:
            raise ConfigError(f"unexpected config parameter {', '.join(sorted(unknown))}")

        config = cls(
            db_path=_as_str(data.get("db_path", ""), "db_path"),
            allow_asos=_as_str_list(data.get("allow_asos"), "allow_asos"),
            deny_asos=_as_str_list(data.get("deny_asos"), "deny_asos"),
        )
        config.validate()
        return config

    @classmethod
    def from_block(cls, text: str) -> "MatcherConfig":
        """Create configuration from block syntax.

        An option keyword switches the parser to that option; following
        values are appended to it until the next keyword. db_path takes a
        single value.

        Args:
            text: Block text, with or without the "name { ... }" wrapper

        Returns:
            Validated MatcherConfig

        Raises:
            ConfigError: On syntax errors, stray values or a missing db_path
        """
        try:
            tokens = shlex.split(text, comments=True)
        except ValueError as e:
            raise ConfigError(f"cannot tokenize config: {e}") from e

        config = cls()
        current = _Field.NONE
        for token in _block_body(tokens):
            if token in _KEYWORDS:
                current = _KEYWORDS[token]
            elif current is _Field.DB_PATH:
                config.db_path = token
                current = _Field.NONE
            elif current is _Field.ALLOW_ASOS:
                config.allow_asos.append(token.lower())
            elif current is _Field.DENY_ASOS:
                config.deny_asos.append(token.lower())
            else:
                raise ConfigError(f"unexpected config parameter {token}")

        config.validate()
        return config

    def validate(self) -> None:
        """Check that the configuration is usable.

        Raises:
            ConfigError: If db_path is missing
        """
        if not self.db_path:
            raise ConfigError("db_path is required")
        if not self.allow_asos and not self.deny_asos:
            logger.warning("Neither allow_asos nor deny_asos set; every request will be rejected")

    def to_policy(self) -> AsoPolicy:
        """Build the organization policy from the fragment lists."""
        return AsoPolicy(allow=self.allow_asos, deny=self.deny_asos)


def load_config(path: str | Path) -> MatcherConfig:
    """Load matcher configuration from a file.

    Files ending in .json are read as a JSON object; anything else is read
    as block syntax.

    Args:
        path: Configuration file path

    Returns:
        Validated MatcherConfig

    Raises:
        ConfigError: If the file cannot be read or is invalid
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"cannot read config file {path}: {e}") from e

    if path.suffix.lower() == ".json":
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise ConfigError(f"invalid JSON in {path}: {e}") from e
        return MatcherConfig.from_dict(data)

    return MatcherConfig.from_block(text)


def _block_body(tokens: list[str]) -> list[str]:
    """Strip an optional "name {" ... "}" wrapper from block tokens."""
    if "{" not in tokens:
        if "}" in tokens:
            raise ConfigError("unexpected '}' without opening '{'")
        return tokens

    start = tokens.index("{")
    if not tokens or tokens[-1] != "}":
        raise ConfigError("missing closing '}'")
    body = tokens[start + 1 : -1]
    if "{" in body or "}" in body:
        raise ConfigError("nested blocks are not supported")
    return body


def _as_str(value: Any, name: str) -> str:
    if not isinstance(value, str):
        raise ConfigError(f"{name} must be a string")
    return value


def _as_str_list(value: Any, name: str) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str) or not isinstance(value, list):
        raise ConfigError(f"{name} must be a list of strings")
    if not all(isinstance(item, str) for item in value):
        raise ConfigError(f"{name} must be a list of strings")
    return list(value)

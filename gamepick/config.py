"""Settings for gamepick, read from the environment or a ``.env`` file."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv

from gamepick.relay import DEFAULT_RELAY_URL

_TRUTHY = {"1", "true", "yes", "on"}


def _flag(value: Optional[str]) -> bool:
    return (value or "").strip().lower() in _TRUTHY


def load_env(path: Path | str | None = None) -> bool:
    """Load variables from a ``.env`` file without overriding the environment.

    Returns ``True`` if a file was found and read.
    """
    return load_dotenv(dotenv_path=path, override=False)


@dataclass
class Settings:
    """Runtime configuration."""

    api_key: str = field(default="", repr=False)
    relay_url: str = DEFAULT_RELAY_URL
    relay_encode: bool = False
    timeout: float = 10.0

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        env = os.environ if environ is None else environ
        timeout = env.get("GAMEPICK_TIMEOUT", "").strip()
        return cls(
            api_key=env.get("STEAM_API_KEY", "").strip(),
            relay_url=env.get("GAMEPICK_RELAY_URL", "").strip() or DEFAULT_RELAY_URL,
            relay_encode=_flag(env.get("GAMEPICK_RELAY_ENCODE")),
            timeout=float(timeout) if timeout else 10.0,
        )

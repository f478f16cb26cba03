"""
Client configuration from environment variables.

ED_API_TOKEN        personal API token (required)
ED_BASE_URL         service root, default https://us.edstem.org
ED_USER_AGENT       User-Agent header sent with every request
ED_TIMEOUT_SECONDS  total timeout per request, default 30

A .env file is read first; variables already set in the environment win.
"""
import os
from dataclasses import dataclass
from typing import Optional, Union

from dotenv import find_dotenv, load_dotenv  # pip install python-dotenv

from .. import __version__
from .errors import ConfigError

DEFAULT_BASE_URL = "https://us.edstem.org"
DEFAULT_USER_AGENT = f"ed-discussion-python/{__version__}"
DEFAULT_TIMEOUT = 30.0


@dataclass(frozen=True)
class ClientConfig:
    """Everything a client needs besides its transport"""

    token: str
    base_url: str = DEFAULT_BASE_URL
    user_agent: str = DEFAULT_USER_AGENT
    timeout: float = DEFAULT_TIMEOUT

    def __repr__(self) -> str:
        # never print the token
        return (
            f"ClientConfig(token='***', base_url={self.base_url!r}, "
            f"user_agent={self.user_agent!r}, timeout={self.timeout!r})"
        )

    @classmethod
    def from_env(cls, env_file: Optional[Union[str, os.PathLike]] = None) -> "ClientConfig":
        """Load configuration from the environment (and a .env file if present)"""
        if env_file is not None and not os.path.isfile(env_file):
            raise ConfigError(f"env file {os.fspath(env_file)!r} does not exist")
        load_dotenv(env_file or find_dotenv(usecwd=True))
        return cls(
            token=_get_required_env("ED_API_TOKEN"),
            base_url=_get_optional_env("ED_BASE_URL") or DEFAULT_BASE_URL,
            user_agent=_get_optional_env("ED_USER_AGENT") or DEFAULT_USER_AGENT,
            timeout=_get_float_env("ED_TIMEOUT_SECONDS", DEFAULT_TIMEOUT),
        )


def _get_required_env(key: str) -> str:
    """Get required environment variable"""
    value = os.getenv(key)
    if not value:
        raise ConfigError(f"Required environment variable {key} is not set")
    return value


def _get_optional_env(key: str) -> Optional[str]:
    """Get optional environment variable"""
    return os.getenv(key)


def _get_float_env(key: str, default: float) -> float:
    value = os.getenv(key)
    if not value:
        return default
    try:
        return float(value)
    except ValueError:
        raise ConfigError(f"Environment variable {key} must be a number, got {value!r}") from None

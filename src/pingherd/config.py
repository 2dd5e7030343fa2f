"""
Runtime defaults for pingherd.

Every default can be overridden from the environment, or from a ``.env``
file in the working directory (loaded with python-dotenv).
"""

import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_COUNT = 10
DEFAULT_TIMEOUT = 10

# Bounded capacity of the shared progress channel
DEFAULT_CHANNEL_CAPACITY = 10

# Non-echo lines each target is expected to print (header, summary, round-trip)
PROGRESS_LINE_OVERHEAD = 3

# {timeout} is available to custom templates but not used by the default one
DEFAULT_COMMAND_TEMPLATE = "ping -c {count} {target}"

ENV_PREFIX = "PINGHERD_"


@dataclass(frozen=True)
class Settings:
    count: int = DEFAULT_COUNT
    timeout: int = DEFAULT_TIMEOUT
    channel_capacity: int = DEFAULT_CHANNEL_CAPACITY
    command_template: str = DEFAULT_COMMAND_TEMPLATE


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(ENV_PREFIX + name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning(f"Ignoring {ENV_PREFIX}{name}={raw!r}: not an integer")
        return default
    if value <= 0:
        logger.warning(f"Ignoring {ENV_PREFIX}{name}={value}: must be positive")
        return default
    return value


def load_settings(dotenv: bool = True) -> Settings:
    """Build :class:`Settings` from the environment, falling back to defaults."""
    if dotenv:
        load_dotenv()
    return Settings(
        count=_env_int("COUNT", DEFAULT_COUNT),
        timeout=_env_int("TIMEOUT", DEFAULT_TIMEOUT),
        channel_capacity=_env_int("CHANNEL_CAPACITY", DEFAULT_CHANNEL_CAPACITY),
        command_template=os.getenv(ENV_PREFIX + "COMMAND") or DEFAULT_COMMAND_TEMPLATE,
    )

from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict

from dicekit.lifetime import Lifetime


class DiceSettings(BaseSettings):
    """Container defaults read from the environment.

    Variables use the ``DICE_`` prefix, for example
    ``DICE_DEFAULT_LIFETIME=transient``.
    """

    model_config = SettingsConfigDict(env_prefix="DICE_", extra="ignore")

    default_lifetime: Lifetime = Lifetime.GRAPH
    """Lifetime used by registrations that omit ``lifetime``."""

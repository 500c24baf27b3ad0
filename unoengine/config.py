"""
Engine Settings - Process-level configuration read from the environment.

Table rules (players, hand size) live in GameConfig on each game; these
settings cover how the host process drives games.

Environment:
    UNO_ENV             deployment name (development, production, test)
    UNO_AI_DELAY        seconds to pause before each AI move (presentation pacing)
    UNO_MAX_AI_TURNS    safety limit on consecutive AI moves per applied action
    UNO_LOG_LEVEL       logging level for the CLI
    UNO_SEED            optional seed for reproducible games
"""

from __future__ import annotations
from dataclasses import dataclass
import os


@dataclass(frozen=True)
class EngineSettings:
    env: str = "development"
    ai_delay_seconds: float = 0.0
    max_ai_turns: int = 1000
    log_level: str = "INFO"
    seed: int | None = None

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> EngineSettings:
        """Build settings from environment variables, falling back to defaults."""
        environ = os.environ if environ is None else environ
        seed = environ.get("UNO_SEED")
        return cls(
            env=environ.get("UNO_ENV", cls.env),
            ai_delay_seconds=float(environ.get("UNO_AI_DELAY", cls.ai_delay_seconds)),
            max_ai_turns=int(environ.get("UNO_MAX_AI_TURNS", cls.max_ai_turns)),
            log_level=environ.get("UNO_LOG_LEVEL", cls.log_level).upper(),
            seed=int(seed) if seed else None,
        )

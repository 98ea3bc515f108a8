"""
stackpolicy: Lenient and Strict Modes.

Lenient Mode: Unknown keys in loaded documents are reported with a warning
              and ignored.
Strict Mode:  Unknown keys are a ConfigurationError.

Structural problems (missing effect, conflicting fields, malformed
condition) are errors in both modes. Modes only govern what the loader
may safely ignore.
"""

import os
import warnings
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from stackpolicy.core.exceptions import ConfigurationError


MODE_ENV_VAR = "STACKPOLICY_MODE"


class PolicyMode(Enum):
    LENIENT = "lenient"
    STRICT  = "strict"


@dataclass
class ModeConfig:
    mode:              PolicyMode
    warn_on_violation: bool
    fail_on_violation: bool


class ModeManager:
    """
    Applies the configured mode to soft violations found while loading.
    """

    def __init__(self, config: ModeConfig):
        self.config = config

    @property
    def mode(self) -> PolicyMode:
        return self.config.mode

    @property
    def is_strict(self) -> bool:
        return self.config.mode == PolicyMode.STRICT

    def violation(self, msg: str, details: Optional[dict] = None) -> None:
        if self.config.fail_on_violation:
            raise ConfigurationError(msg, details)
        if self.config.warn_on_violation:
            warnings.warn(msg, UserWarning, stacklevel=3)


# ─────────────────────────────────────────────────────────────
# Factory Functions
# ─────────────────────────────────────────────────────────────

def init_lenient_mode() -> ModeManager:
    return ModeManager(ModeConfig(
        mode=PolicyMode.LENIENT,
        warn_on_violation=True,
        fail_on_violation=False,
    ))


def init_strict_mode() -> ModeManager:
    return ModeManager(ModeConfig(
        mode=PolicyMode.STRICT,
        warn_on_violation=True,
        fail_on_violation=True,
    ))


def init_mode_from_env() -> ModeManager:
    """Read STACKPOLICY_MODE env var. Defaults to lenient."""
    return init_strict_mode() \
        if os.environ.get(MODE_ENV_VAR, "lenient").lower() == "strict" \
        else init_lenient_mode()

"""Stage and pipeline result types."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class Stage(str, Enum):
    """Provisioning pipeline stages, in execution order."""

    FETCH = "fetch"
    LOCATE_CONFIG = "locate-config"
    PRE_SETUP = "pre-setup"
    COLLECT_PLACEHOLDERS = "collect-placeholders"
    REPLACE = "replace"
    POST_SETUP = "post-setup"
    INSTALL = "install"
    POST_INSTALL = "post-install"
    CLEANUP = "cleanup"


@dataclass(frozen=True)
class Success:
    """A stage (or the whole pipeline) finished; `value` is its output."""

    value: Any = None


@dataclass(frozen=True)
class Failure:
    """A stage failed and the pipeline must stop."""

    stage: Stage
    reason: str


@dataclass(frozen=True)
class Cancelled:
    """The user aborted an interactive prompt."""

    stage: Stage | None = None


StageResult = Success | Failure | Cancelled

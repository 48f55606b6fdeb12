"""Per-run context shared by the pipeline stages.

A RunContext is created once per translation and handed to each reader,
transformer and writer. It carries only what the stages need for
observability, so nothing in the pipeline depends on module-level state.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field

LOGGER_NAME = "hbschema"


def _new_run_id() -> str:
    return uuid.uuid4().hex[:8]


@dataclass(frozen=True)
class RunContext:
    """Observability context for one pipeline run."""

    run_id: str = field(default_factory=_new_run_id)
    logger: logging.Logger = field(
        default_factory=lambda: logging.getLogger(LOGGER_NAME)
    )


def ensure_context(ctx: RunContext | None) -> RunContext:
    """Return ctx, or a fresh RunContext when none was given."""
    return ctx if ctx is not None else RunContext()

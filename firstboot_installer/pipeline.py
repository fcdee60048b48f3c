from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Protocol, Sequence

from .models import Outcome, PackageContext

logger = logging.getLogger(__name__)


class Step(Protocol):
    """A single step of the per-package flow.

    A step either sets ctx.outcome (terminal) or leaves it None so the next
    step runs. An exception escaping run() ends the package with
    failure_outcome.
    """

    step_id: str
    title: str
    failure_outcome: Outcome

    def run(self, ctx: PackageContext) -> PackageContext:
        ...


@dataclass(frozen=True)
class PipelineResult:
    ctx: PackageContext
    ran_steps: List[str]


def run_pipeline(*, ctx: PackageContext, steps: Sequence[Step]) -> PipelineResult:
    """Run steps in order until one reaches a terminal outcome.

    Exceptions are caught per step, logged with their message and mapped to
    that step's failure outcome; they never propagate.
    """

    ran: List[str] = []

    for step in steps:
        logger.debug("Running step %s for %s", step.step_id, ctx.package.name)
        ran.append(step.step_id)
        try:
            ctx = step.run(ctx)
        except Exception as e:
            ctx.error = str(e) or type(e).__name__
            ctx.outcome = step.failure_outcome
            logger.error("ERROR: %s failed for %s: %s", step.title, ctx.package.name, ctx.error)
            logger.debug("Step %s traceback", step.step_id, exc_info=True)
        if ctx.finished:
            break

    return PipelineResult(ctx=ctx, ran_steps=ran)

"""Shared exception policy for strategy defects."""

from __future__ import annotations

import logging


class StrategyConsistencyError(RuntimeError):
    """A computer strategy reached a state its own bookkeeping rules out."""


def report_inconsistency(logger: logging.Logger, message: str) -> StrategyConsistencyError:
    """Log an internal consistency violation and return the error to raise."""
    logger.error("strategy_inconsistency %s", message)
    return StrategyConsistencyError(message)

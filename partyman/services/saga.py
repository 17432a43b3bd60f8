"""Saga - ordered single-table writes plus one compensating action.

The primary store has no multi-table transaction. A composite write is
modelled as a list of named steps run one after another. When a step
fails:

- with a compensation and a non-empty completed prefix, the compensation
  runs once and PersistError names the failing step;
- if the compensation itself fails, CompensationError is raised and the
  incident is logged on the "partyman.integrity" logger;
- without a compensation, the completed prefix stays committed and is
  reported in PersistError.committed.

Steps are never retried.
"""

import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable

from partyman.exceptions import CompensationError, PersistError

logger = logging.getLogger(__name__)
integrity_logger = logging.getLogger("partyman.integrity")


@dataclass(frozen=True)
class Step:
    group: str
    action: Callable[[], Awaitable[Any]]


class Saga:
    """
    Usage:
        saga = Saga("create", party_id, compensation=delete_party)
        saga.add_step("party", insert_party)
        saga.add_step("email", insert_email)
        results = await saga.run()
    """

    def __init__(
        self,
        name: str,
        party_id=None,
        compensation: Callable[[], Awaitable[Any]] | None = None,
    ):
        self.name = name
        self.party_id = party_id
        self.compensation = compensation
        self.steps: list[Step] = []
        self.completed: list[str] = []

    def add_step(self, group: str, action: Callable[[], Awaitable[Any]]) -> "Saga":
        self.steps.append(Step(group, action))
        return self

    async def run(self) -> dict[str, Any]:
        """Run every step in order. Returns {group: step result}."""
        results: dict[str, Any] = {}
        for step in self.steps:
            try:
                results[step.group] = await step.action()
            except Exception as e:
                await self._fail(step, e)
            self.completed.append(step.group)
        return results

    async def _fail(self, step: Step, error: Exception):
        logger.warning(
            "%s saga for party %s failed at %s: %s",
            self.name,
            self.party_id,
            step.group,
            error,
        )

        if self.compensation is None or not self.completed:
            raise PersistError(
                step.group,
                party_id=self.party_id,
                committed=self.completed,
                cause=error,
            ) from error

        try:
            await self.compensation()
        except Exception as comp_error:
            integrity_logger.critical(
                "Compensation failed: %s saga for party %s stopped at %s and "
                "the compensating action raised %r. Completed steps: %s",
                self.name,
                self.party_id,
                step.group,
                comp_error,
                self.completed,
            )
            raise CompensationError(
                step.group, self.party_id, cause=comp_error, failure=error
            ) from comp_error

        logger.info(
            "%s saga for party %s compensated after %s failure",
            self.name,
            self.party_id,
            step.group,
        )
        raise PersistError(step.group, party_id=self.party_id, cause=error) from error

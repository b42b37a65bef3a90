"""Base classes for compile pipeline steps.

A step is an async, typed stage of ``build_artifacts``. Steps keep no state
between runs: the output check is handed the input the output was built
from, so the same instance can be awaited several times at once.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from gqlnorm.errors import GqlnormError

In = TypeVar("In")
Out = TypeVar("Out")


class StepValidationError(GqlnormError):
    """A step produced output that breaks the contract with the next step."""


class Step(ABC, Generic[In, Out]):
    name: str = "step"

    @abstractmethod
    async def run(self, input: In) -> Out:
        ...


class MechanicalStep(Step[In, Out]):
    """Deterministic step: compute, then check the output against the input.

    Fails fast; there is nothing to retry.
    """

    @abstractmethod
    async def _execute(self, input: In) -> Out:
        ...

    def _validate_output(self, input: In, output: Out) -> None:
        """Raise StepValidationError if ``output`` is not a valid result for ``input``."""

    async def run(self, input: In) -> Out:
        output = await self._execute(input)
        self._validate_output(input, output)
        return output

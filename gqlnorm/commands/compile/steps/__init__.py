"""Pipeline steps for the compile command."""

from __future__ import annotations

from gqlnorm.commands.compile.steps.base import (
    MechanicalStep as MechanicalStep,
    Step as Step,
    StepValidationError as StepValidationError,
)

__all__ = [
    "MechanicalStep",
    "Step",
    "StepValidationError",
]

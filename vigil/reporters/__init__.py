"""Reporters - step bookkeeping."""

from vigil.reporters.step_recorder import StepEntry, StepRecorder, StepStatus

__all__ = ["StepEntry", "StepRecorder", "StepStatus"]

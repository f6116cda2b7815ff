"""
Step Recorder - begin/commit bookkeeping for assertions and interactions.

Every reported step is opened with begin_step and closed with exactly one
commit_step. Steps nest: an interaction may run assertions internally.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional
import json
import logging
import os
import time

logger = logging.getLogger(__name__)


class StepStatus(str, Enum):
    PASSED = "passed"
    FAILED = "failed"


@dataclass
class StepEntry:
    """A single step in the record."""
    subject: str
    description: str
    started_at: datetime
    depth: int
    status: Optional[StepStatus] = None
    duration_ms: float = 0.0
    _started: float = field(default=0.0, repr=False)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "subject": self.subject,
            "description": self.description,
            "started_at": self.started_at.isoformat(),
            "depth": self.depth,
            "status": self.status.value if self.status else None,
            "duration_ms": round(self.duration_ms, 1),
        }


class StepRecorder:
    """
    Records the steps performed against virtual elements.

    Example:
        >>> recorder = StepRecorder()
        >>> recorder.begin_step("#login", "click")
        >>> recorder.commit_step(StepStatus.PASSED)
        >>> recorder.save_json("./vigil_reports/steps.json")
    """

    def __init__(self, run_name: Optional[str] = None):
        self.run_name = run_name or datetime.now().strftime("%Y%m%d_%H%M%S")
        self.entries: List[StepEntry] = []
        self._open: List[StepEntry] = []

    def begin_step(self, subject: str, description: str) -> None:
        entry = StepEntry(
            subject=subject,
            description=description,
            started_at=datetime.now(),
            depth=len(self._open),
            _started=time.monotonic(),
        )
        self._open.append(entry)
        logger.debug(f"[StepRecorder] {'  ' * entry.depth}{subject}: {description}")

    def commit_step(self, status: StepStatus) -> None:
        if not self._open:
            raise RuntimeError("commit_step called without a matching begin_step")
        entry = self._open.pop()
        entry.status = status
        entry.duration_ms = (time.monotonic() - entry._started) * 1000
        self.entries.append(entry)

        if status == StepStatus.PASSED:
            logger.info(f"[StepRecorder] {entry.subject}: {entry.description} ({entry.duration_ms:.0f} ms)")
        else:
            logger.warning(f"[StepRecorder] FAILED {entry.subject}: {entry.description}")

    @property
    def open_steps(self) -> int:
        return len(self._open)

    @property
    def failed(self) -> List[StepEntry]:
        return [e for e in self.entries if e.status == StepStatus.FAILED]

    def save_json(self, path: str) -> str:
        """Write completed steps to a JSON file and return its path."""
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump({
                "run_name": self.run_name,
                "passed": len(self.entries) - len(self.failed),
                "failed": len(self.failed),
                "steps": [e.to_dict() for e in self.entries],
            }, f, indent=2)
        return path

"""Commit driver: write, stage, commit and push backdated commits in a loop."""

from __future__ import annotations

import random
import sys
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from .config import FillConfig
from .dates import Clock, format_date, local_now, synthesize_date
from .errors import FinalPushError, PushError, WriteError
from .record import CommitRecord, write_record


class RunState(str, Enum):
    ITERATING = "iterating"
    FINALIZING = "finalizing"
    DONE = "done"


@dataclass
class RunResult:
    """Outcome of a :meth:`CommitDriver.run` call."""

    requested: int
    pushed: int = 0
    halted: bool = False
    finalized: bool = False
    state: RunState = RunState.ITERATING
    dates: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.finalized and not self.halted


class CommitDriver:
    """Produce a sequence of backdated commits on one branch, then push.

    ``backend`` must provide ``stage(paths)``, ``commit(message, author_date,
    commit_date)`` and ``push(remote, branch, set_upstream)``, as
    :class:`commitfill.git.GitBackend` does. Staging and commit failures
    propagate to the caller.
    """

    def __init__(
        self,
        config: FillConfig,
        backend,
        *,
        clock: Optional[Clock] = None,
        rng: Optional[random.Random] = None,
    ):
        self.config = config
        self.backend = backend
        self.clock = clock or local_now
        self.rng = rng or random.Random(config.seed)

    def next_record(self) -> CommitRecord:
        """Synthesize the record for the next commit."""
        moment = synthesize_date(self.clock(), self.rng)
        return CommitRecord(date=format_date(moment))

    def run(self, commit_count: Optional[int] = None) -> RunResult:
        count = self.config.commit_count if commit_count is None else commit_count
        if count < 0:
            raise ValueError(f"commit_count must be >= 0, got {count}")

        result = RunResult(
            requested=count,
            state=RunState.ITERATING if count else RunState.FINALIZING,
        )
        status_path = self.config.resolved_status_path()
        remaining = count

        while remaining > 0:
            record = self.next_record()
            print(f"Committing for date: {record.date}")

            try:
                write_record(status_path, record)
            except WriteError as e:
                print(f"Error writing to {status_path.name}: {e}", file=sys.stderr)

            self.backend.stage([status_path])
            self.backend.commit(record.date, author_date=record.date, commit_date=record.date)
            result.dates.append(record.date)

            try:
                self.backend.push(self.config.remote, self.config.branch, set_upstream=True)
            except PushError as e:
                print(f"Error pushing to remote: {e}", file=sys.stderr)
                print(f"Stopping with {remaining} commit(s) left", file=sys.stderr)
                result.halted = True
                break

            print(f"Successfully pushed commit for: {record.date}")
            result.pushed += 1
            remaining -= 1

        result.state = RunState.FINALIZING
        try:
            self.finalize()
        except FinalPushError as e:
            print(f"Error pushing final changes to remote: {e}", file=sys.stderr)
        else:
            print("Pushed all changes to remote repository.")
            result.finalized = True
        result.state = RunState.DONE
        return result

    def finalize(self) -> None:
        """Push the branch once more with upstream tracking."""
        try:
            self.backend.push(self.config.remote, self.config.branch, set_upstream=True)
        except PushError as e:
            raise FinalPushError(str(e)) from e

"""Append-only record of completed solve attempts."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ScoreSummary:
    """Report over all completed attempts."""

    attempts: int
    mean_steps: float
    scores: list[int] = field(default_factory=list)

    @property
    def message(self) -> str:
        return (
            f"Labyrinth solved {self.attempts} times "
            f"with an avg of {self.mean_steps:g} steps"
        )

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "attempts": self.attempts,
            "mean_steps": self.mean_steps,
            "scores": list(self.scores),
            "message": self.message,
        }


class Scoreboard:
    """
    Step counts of every attempt that reached the treasure, in order.

    Scores can only be appended. The board outlives the maze sessions it
    records.
    """

    def __init__(self):
        self._scores: list[int] = []

    def record(self, steps: int) -> None:
        """Append the step count of a finished attempt."""
        if steps < 0:
            raise ValueError(f"Step count cannot be negative: {steps}")
        self._scores.append(steps)

    @property
    def scores(self) -> tuple[int, ...]:
        return tuple(self._scores)

    @property
    def attempts(self) -> int:
        return len(self._scores)

    @property
    def mean_steps(self) -> float:
        """Arithmetic mean of the recorded step counts, 0 when empty."""
        if not self._scores:
            return 0.0
        return sum(self._scores) / len(self._scores)

    def summary(self) -> ScoreSummary:
        return ScoreSummary(
            attempts=self.attempts,
            mean_steps=self.mean_steps,
            scores=list(self._scores),
        )

from .labyrinth_service import LabyrinthService
from .scoreboard import Scoreboard, ScoreSummary

__all__ = ["LabyrinthService", "Scoreboard", "ScoreSummary"]

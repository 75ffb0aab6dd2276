"""Maze protocol schemas for request/response validation."""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field, TypeAdapter

from labyrinth.core.grid import Survey
from labyrinth.core.maze_engine import MoveResult

FailureReason = Literal[
    "WallBlocked",
    "OutOfBounds",
    "AlreadyFinished",
    "InvalidDirection",
    "NotStarted",
]


class SurveySchema(BaseModel):
    """Walls around the explorer's room. True = wall."""

    top: bool
    right: bool
    bottom: bool
    left: bool

    @classmethod
    def from_survey(cls, survey: Survey) -> "SurveySchema":
        return cls(**survey.to_dict())

    def to_survey(self) -> Survey:
        return Survey(top=self.top, right=self.right, bottom=self.bottom, left=self.left)


class SurveyReply(BaseModel):
    """The move succeeded (or the explorer just woke up)."""

    status: Literal["survey"] = "survey"
    survey: SurveySchema
    steps: int = Field(..., ge=0)


class VictoryReply(BaseModel):
    """The explorer reached the treasure."""

    status: Literal["victory"] = "victory"
    steps: int = Field(..., ge=0)
    message: str


class FailureReply(BaseModel):
    """The move was rejected. Position and steps are unchanged."""

    status: Literal["failure"] = "failure"
    reason: FailureReason
    message: str
    steps: int = Field(..., ge=0)


MoveReply = Annotated[
    Union[SurveyReply, VictoryReply, FailureReply],
    Field(discriminator="status"),
]

move_reply_adapter = TypeAdapter(MoveReply)


class DoneResponse(BaseModel):
    """Final report over all attempts."""

    attempts: int
    mean_steps: float
    scores: list[int]
    message: str


def reply_from_result(result: MoveResult) -> Union[SurveyReply, VictoryReply, FailureReply]:
    """Convert an engine MoveResult into its wire model."""
    if result.status == "survey":
        return SurveyReply(survey=SurveySchema.from_survey(result.survey), steps=result.steps)
    if result.status == "victory":
        return VictoryReply(steps=result.steps, message=result.message or "")
    return FailureReply(reason=result.reason, message=result.message or "", steps=result.steps)


def result_from_reply(reply: Union[SurveyReply, VictoryReply, FailureReply]) -> MoveResult:
    """Convert a wire model back into an engine MoveResult."""
    if isinstance(reply, SurveyReply):
        return MoveResult.surveyed(reply.survey.to_survey(), reply.steps)
    if isinstance(reply, VictoryReply):
        return MoveResult(status="victory", steps=reply.steps, message=reply.message)
    return MoveResult(
        status="failure",
        steps=reply.steps,
        reason=reply.reason,
        message=reply.message,
    )


def parse_move_reply(data: object) -> MoveResult:
    """
    Validate a decoded JSON body and convert it into a MoveResult.

    Raises:
        pydantic.ValidationError: If the body is not a known reply.
    """
    return result_from_reply(move_reply_adapter.validate_python(data))

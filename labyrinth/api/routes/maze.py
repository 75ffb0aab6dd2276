"""Maze discovery routes: awake, move and done."""

import logging
from typing import Union

from fastapi import APIRouter, BackgroundTasks, status
from fastapi.responses import JSONResponse

from labyrinth.api.deps import Labyrinth
from labyrinth.core.grid import InvalidDirectionError
from labyrinth.schemas.maze import (
    DoneResponse,
    FailureReply,
    MoveReply,
    SurveyReply,
    VictoryReply,
    reply_from_result,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Labyrinth"])


@router.get(
    "/awake",
    response_model=MoveReply,
)
async def awake(labyrinth: Labyrinth) -> Union[SurveyReply, VictoryReply, FailureReply]:
    """Generate a new maze and wake Icarus up on its start room.

    Returns the survey of the start room. Any previous maze is discarded.
    """
    return reply_from_result(labyrinth.awake())


@router.get(
    "/move/{direction}",
    response_model=MoveReply,
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": FailureReply},
        status.HTTP_409_CONFLICT: {"model": FailureReply},
    },
)
async def move(direction: str, labyrinth: Labyrinth):
    """Move Icarus one room. COSTS 1 STEP.

    Direction is one of up, right, down, left. On success the reply holds
    the survey of the room reached, or a victory when it holds the treasure.
    Rejected moves answer 409 (400 for an unknown direction) with the reason.
    """
    result = labyrinth.move(direction)
    reply = reply_from_result(result)

    if result.is_failure:
        code = (
            status.HTTP_400_BAD_REQUEST
            if result.reason == InvalidDirectionError.reason
            else status.HTTP_409_CONFLICT
        )
        return JSONResponse(status_code=code, content=reply.model_dump())

    return reply


@router.get(
    "/done",
    response_model=DoneResponse,
)
async def done(labyrinth: Labyrinth, background_tasks: BackgroundTasks) -> DoneResponse:
    """Icarus has finished all attempts.

    Reports how many times the labyrinth was solved and the average number
    of steps, then shuts the server down once the response is sent.
    """
    summary = labyrinth.report()
    background_tasks.add_task(labyrinth.run_finish_hook)
    return DoneResponse(**summary.to_dict())

from .maze import (
    DoneResponse,
    FailureReply,
    MoveReply,
    SurveyReply,
    SurveySchema,
    VictoryReply,
    parse_move_reply,
    reply_from_result,
    result_from_reply,
)

__all__ = [
    "DoneResponse",
    "FailureReply",
    "MoveReply",
    "SurveyReply",
    "SurveySchema",
    "VictoryReply",
    "parse_move_reply",
    "reply_from_result",
    "result_from_reply",
]

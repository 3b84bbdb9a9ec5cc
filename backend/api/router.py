from fastapi import APIRouter, Depends, HTTPException, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from api.dependencies import get_progress_service
from config import settings
from models.requests import (
    CommentRepliesSubmission,
    EvaluateRequest,
    IncomingMessageRequest,
    PlacementSubmission,
    PrioritizationSubmission,
    RoleplayReplyRequest,
    SaveProgressRequest,
    TaskScoresSubmission,
    TaskSubmission,
    TextSubmission,
)
from models.responses import (
    CommentsScoreResponse,
    PlacementResult,
    ProgressEntry,
    RankDistanceResult,
    RoleplayMessageResponse,
    ScoreResult,
    TaskScoreResult,
    TaskSummary,
)
from models.schemas.roleplay import PerformanceEvaluation
from services import roleplay, rubrics
from services.errors import SubmissionError
from services.personas import find_persona
from services.placement_scorer import score_placement
from services.progress import ProgressService
from services.rank_scorer import score_rank_distance
from services.storage import StorageError
from services.task_scorer import score_task, summarize_tasks
from services.text_scorer import average_total, score_keyword_weighted

router = APIRouter()
limiter = Limiter(key_func=get_remote_address)


def _check_length(text: str) -> None:
    if len(text) > settings.max_reply_chars:
        raise HTTPException(
            status_code=422,
            detail=f"Reply too long (max {settings.max_reply_chars} chars)",
        )


@router.get("/health")
async def health():
    return {
        "status": "ok",
        "gemini_configured": bool(settings.gemini_api_key),
        "rubrics": rubrics.list_rubrics(),
        "task_rubrics": rubrics.list_task_rubrics(),
    }


@router.post("/score/text/{simulation_type}", response_model=ScoreResult)
async def score_text(simulation_type: str, body: TextSubmission):
    try:
        rubric = rubrics.get_rubric(simulation_type)
    except ValueError:
        raise HTTPException(status_code=404, detail=f"Unknown simulation type: {simulation_type}")
    _check_length(body.text)
    return score_keyword_weighted(body.text, rubric)


@router.post("/score/comments", response_model=CommentsScoreResponse)
async def score_comments(body: CommentRepliesSubmission):
    results = {}
    for comment_id, text in body.replies.items():
        _check_length(text)
        results[comment_id] = score_keyword_weighted(text, rubrics.COMMENT_REPLY_RUBRIC)
    return CommentsScoreResponse(
        average_score=average_total(list(results.values())),
        replies=results,
    )


@router.post("/score/prioritization", response_model=RankDistanceResult)
async def score_prioritization(body: PrioritizationSubmission):
    try:
        return score_rank_distance(body.user_order, body.ideal_ranks)
    except SubmissionError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/score/placement", response_model=PlacementResult)
async def score_drag_drop(body: PlacementSubmission):
    try:
        return score_placement(body.placements, body.correct_placements)
    except SubmissionError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/score/task", response_model=TaskScoreResult)
async def score_task_form(body: TaskSubmission):
    rubric = body.rubric
    if rubric is None and body.rubric_name:
        try:
            rubric = rubrics.get_task_rubric(body.rubric_name)
        except ValueError:
            raise HTTPException(status_code=404, detail=f"Unknown task rubric: {body.rubric_name}")
    for value in body.answers.values():
        _check_length(value if isinstance(value, str) else " ".join(value))
    return score_task(body.answers, rubric)


@router.post("/score/task-summary", response_model=TaskSummary)
async def score_task_summary(body: TaskScoresSubmission):
    return summarize_tasks(body.task_scores)


@router.post("/roleplay/incoming", response_model=RoleplayMessageResponse)
@limiter.limit("10/minute")
async def roleplay_incoming(request: Request, body: IncomingMessageRequest):
    text = await roleplay.generate_incoming_message(body.sender_id, body.channel, body.personas)
    return RoleplayMessageResponse(text=text)


@router.post("/roleplay/reply", response_model=RoleplayMessageResponse)
@limiter.limit("10/minute")
async def roleplay_reply(request: Request, body: RoleplayReplyRequest):
    persona = find_persona(body.sender_id, body.personas)
    text = await roleplay.generate_reply(
        persona,
        body.history,
        body.last_message,
        scenario=body.scenario,
        personas=body.personas,
    )
    return RoleplayMessageResponse(text=text)


@router.post("/roleplay/evaluate", response_model=PerformanceEvaluation)
@limiter.limit("10/minute")
async def roleplay_evaluate(request: Request, body: EvaluateRequest):
    return await roleplay.evaluate_performance(body.scenario, body.history, body.personas)


@router.post("/progress/{simulation_id}", response_model=ProgressEntry)
async def save_progress(
    simulation_id: str,
    body: SaveProgressRequest,
    progress: ProgressService = Depends(get_progress_service),
):
    try:
        return progress.save_progress(simulation_id, body.score, body.feedback)
    except SubmissionError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except StorageError as e:
        raise HTTPException(status_code=500, detail=f"Progress storage unavailable: {e}")


@router.get("/progress", response_model=list[ProgressEntry])
async def list_progress(progress: ProgressService = Depends(get_progress_service)):
    try:
        return progress.list_progress()
    except StorageError as e:
        raise HTTPException(status_code=500, detail=f"Progress storage unavailable: {e}")


@router.get("/progress/{simulation_id}", response_model=ProgressEntry)
async def get_progress(
    simulation_id: str,
    progress: ProgressService = Depends(get_progress_service),
):
    try:
        entry = progress.get_progress(simulation_id)
    except StorageError as e:
        raise HTTPException(status_code=500, detail=f"Progress storage unavailable: {e}")
    if entry is None:
        raise HTTPException(status_code=404, detail=f"No progress for {simulation_id}")
    return entry

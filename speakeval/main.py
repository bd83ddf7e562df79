import logging
import uuid
from datetime import datetime
from typing import List, Dict
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import uvicorn

from .config import Config
from .models import (
    BatchEvaluateRequest,
    BatchEvaluationResults,
    BreakdownRequest,
    CorrectionRequest,
    CorrectionResponse,
    EvaluateRequest,
    EvaluationResult,
    ErrorResponse,
    ExpectedResponses,
    Feedback,
    HealthResponse,
    QuestionSet,
    ScoreBreakdown,
    SessionCreate,
    SessionResponse,
    SessionState,
)
from .evaluator import BatchEvaluator, ResponseEvaluator
from .phrase_bank import PhraseBank
from .session import PracticeSession, SessionError
from .utils.data_utils import load_phrase_bank_from_json

# Configure logging
logging.basicConfig(
    level=getattr(logging, Config.LOG_LEVEL, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="Speaking Practice Evaluation System",
    description="Scores spoken or typed answers to practice questions and suggests corrections",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure appropriately for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _build_phrase_bank() -> PhraseBank:
    if Config.PHRASE_BANK_PATH:
        logger.info(f"Loading phrase bank from {Config.PHRASE_BANK_PATH}")
        return load_phrase_bank_from_json(Config.PHRASE_BANK_PATH)
    return PhraseBank()


# Initialize evaluators
evaluator = ResponseEvaluator(phrase_bank=_build_phrase_bank())
batch_evaluator = BatchEvaluator(evaluator)

# Active practice sessions, kept in process memory in creation order
sessions: Dict[str, PracticeSession] = {}


def _evict_sessions() -> None:
    """Make room for one more session, dropping finished ones first, then the oldest."""
    if len(sessions) < Config.MAX_SESSIONS:
        return

    for session_id in [sid for sid, s in sessions.items() if s.is_complete]:
        del sessions[session_id]

    while sessions and len(sessions) >= Config.MAX_SESSIONS:
        oldest = next(iter(sessions))
        logger.warning(f"Session limit reached, dropping session {oldest}")
        del sessions[oldest]


def _session_state(session_id: str, session: PracticeSession) -> SessionState:
    return SessionState(
        session_id=session_id,
        mode=session.mode,
        current_index=session.current_index,
        current_question=session.current_question,
        is_complete=session.is_complete,
        summary=session.summary(),
    )


def _get_session(session_id: str) -> PracticeSession:
    session = sessions.get(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail=f"Session {session_id} not found")
    return session


@app.get("/", response_model=Dict[str, str])
async def root():
    """Root endpoint with basic information."""
    return {
        "message": "Speaking Practice Evaluation System API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/api/v1/health",
    }


@app.get("/api/v1/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint."""
    validations = Config.validate_configuration()
    healthy = validations["weights_sum_to_one"] and validations["threshold_in_range"]
    return HealthResponse(
        status="healthy" if healthy else "degraded",
        version="1.0.0",
        timestamp=datetime.utcnow().isoformat(),
        configuration=validations,
        active_sessions=len(sessions),
    )


@app.get("/api/v1/questions/{question_set}", response_model=List[str])
async def get_questions(question_set: QuestionSet):
    """Get the questions of the learning or evaluation set."""
    return evaluator.phrase_bank.questions(question_set)


@app.get("/api/v1/expected", response_model=ExpectedResponses)
async def get_expected(question: str):
    """Get the acceptable answers for a question."""
    return ExpectedResponses(
        question=question, answers=list(evaluator.get_expected_responses(question))
    )


@app.post("/api/v1/evaluate", response_model=EvaluationResult)
async def evaluate_response(request: EvaluateRequest):
    """
    Evaluate one answer.

    - **question**: The question that was asked
    - **response**: The transcribed or typed answer
    - **confidence**: Optional transcription confidence (not used for scoring)
    """
    try:
        return evaluator.evaluate(request.question, request.response, request.confidence)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Internal server error: {str(e)}")


@app.post("/api/v1/evaluate/breakdown", response_model=ScoreBreakdown)
async def score_breakdown(request: BreakdownRequest):
    """Score a response against one expected answer, with sub-scores."""
    try:
        return evaluator.scorer.breakdown(request.response, request.expected)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Internal server error: {str(e)}")


@app.post("/api/v1/evaluate/batch", response_model=BatchEvaluationResults)
async def evaluate_batch(batch_input: BatchEvaluateRequest):
    """
    Evaluate multiple answers in batch.

    - **items**: List of question/response pairs
    """
    if not batch_input.items:
        raise HTTPException(status_code=400, detail="No items provided")

    if len(batch_input.items) > Config.MAX_BATCH_SIZE:
        raise HTTPException(
            status_code=400,
            detail=f"Batch size cannot exceed {Config.MAX_BATCH_SIZE} items",
        )

    results = batch_evaluator.evaluate_batch(batch_input.items)
    successful_count = sum(1 for r in results if r is not None)

    return BatchEvaluationResults(
        results=results,
        total_items=len(batch_input.items),
        successful_evaluations=successful_count,
        failed_evaluations=len(results) - successful_count,
    )


@app.post("/api/v1/correction", response_model=CorrectionResponse)
async def get_correction(request: CorrectionRequest):
    """Get the acceptable answer closest to a response."""
    return CorrectionResponse(
        correction=evaluator.generate_correction(request.question, request.response)
    )


@app.post("/api/v1/sessions", response_model=SessionState)
async def create_session(session_input: SessionCreate):
    """Start a learning or evaluation session."""
    _evict_sessions()
    session_id = uuid.uuid4().hex
    session = PracticeSession(mode=session_input.mode, evaluator=evaluator)
    sessions[session_id] = session
    logger.info(f"Started {session.mode.value} session {session_id}")
    return _session_state(session_id, session)


@app.get("/api/v1/sessions/{session_id}", response_model=SessionState)
async def get_session(session_id: str):
    """Get the progress of a session."""
    return _session_state(session_id, _get_session(session_id))


@app.post("/api/v1/sessions/{session_id}/responses", response_model=Feedback)
async def submit_session_response(session_id: str, answer: SessionResponse):
    """Submit an answer to the current question of a session."""
    session = _get_session(session_id)
    try:
        return session.submit(answer.response, answer.confidence)
    except SessionError as e:
        raise HTTPException(status_code=409, detail=str(e))


@app.post("/api/v1/sessions/{session_id}/advance", response_model=SessionState)
async def advance_session(session_id: str):
    """Move a learning session to its next question."""
    session = _get_session(session_id)
    try:
        session.advance()
    except SessionError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return _session_state(session_id, session)


@app.delete("/api/v1/sessions/{session_id}", response_model=SessionState)
async def delete_session(session_id: str):
    """End a session and return its final state."""
    state = _session_state(session_id, _get_session(session_id))
    del sessions[session_id]
    logger.info(f"Deleted session {session_id}")
    return state


@app.exception_handler(HTTPException)
async def http_exception_handler(request, exc):
    """Custom HTTP exception handler."""
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(
            error=f"HTTP {exc.status_code}", message=str(exc.detail)
        ).model_dump(),
    )


@app.exception_handler(Exception)
async def general_exception_handler(request, exc):
    """General exception handler."""
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(
            error="Internal Server Error",
            message="An unexpected error occurred",
            details={"exception": str(exc)} if Config.DEBUG else None,
        ).model_dump(),
    )


if __name__ == "__main__":
    uvicorn.run(
        "speakeval.main:app",
        host=Config.HOST,
        port=Config.PORT,
        reload=Config.DEBUG,
        log_level="info" if Config.DEBUG else "warning",
    )

from typing import List, Dict, Any, Optional
from pydantic import BaseModel, Field
from enum import Enum


class QuestionSet(str, Enum):
    LEARNING = "learning"
    EVALUATION = "evaluation"


class MatchMethod(str, Enum):
    CONTAINMENT = "containment"
    PARTIAL = "partial"
    FALLBACK = "fallback"


class ProficiencyLevel(str, Enum):
    ADVANCED = "Advanced"
    UPPER_INTERMEDIATE = "Upper Intermediate"
    INTERMEDIATE = "Intermediate"
    ELEMENTARY = "Elementary"
    BEGINNER = "Beginner"


class PhraseMatch(BaseModel):
    question: Optional[str] = Field(
        None, description="Known question that matched, None on fallback"
    )
    question_set: Optional[QuestionSet] = None
    method: MatchMethod
    answers: List[str] = Field(..., description="Acceptable answer templates")

    @property
    def is_fallback(self) -> bool:
        return self.method == MatchMethod.FALLBACK


class ScoreBreakdown(BaseModel):
    keyword_score: float = Field(..., ge=0, le=100)
    structure_score: float = Field(..., ge=0, le=100)
    semantic_score: float = Field(..., ge=0, le=100)
    score: float = Field(..., ge=0, le=100, description="Weighted final score")


class EvaluationResult(BaseModel):
    score: float = Field(..., ge=0, le=100)
    passed: bool
    correction: Optional[str] = Field(
        None, description="Best matching answer template when not passed"
    )


class EvaluateRequest(BaseModel):
    question: str = Field(..., description="The question that was asked")
    response: str = Field(..., description="Transcribed or typed answer")
    confidence: Optional[float] = Field(
        None, ge=0, le=1, description="Transcription confidence (advisory)"
    )


class BreakdownRequest(BaseModel):
    response: str
    expected: str


class CorrectionRequest(BaseModel):
    question: str
    response: str


class CorrectionResponse(BaseModel):
    correction: str


class ExpectedResponses(BaseModel):
    question: str
    answers: List[str]


class BatchEvaluateRequest(BaseModel):
    items: List[EvaluateRequest] = Field(
        ..., description="List of question/response pairs to evaluate"
    )


class BatchEvaluationResults(BaseModel):
    results: List[Optional[EvaluationResult]]
    total_items: int
    successful_evaluations: int
    failed_evaluations: int


class SessionCreate(BaseModel):
    mode: QuestionSet = Field(default=QuestionSet.LEARNING)


class SessionResponse(BaseModel):
    response: str
    confidence: Optional[float] = Field(None, ge=0, le=1)


class Feedback(BaseModel):
    question: str
    response: str
    result: EvaluationResult
    spoken_text: str = Field(..., description="Plain text for speech playback")


class SessionSummary(BaseModel):
    mode: QuestionSet
    total_questions: int
    answered: int
    correct_answers: int
    percentage: float
    level: Optional[ProficiencyLevel] = None
    message: Optional[str] = None


class SessionState(BaseModel):
    session_id: str
    mode: QuestionSet
    current_index: int
    current_question: Optional[str] = None
    is_complete: bool
    summary: SessionSummary


class HealthResponse(BaseModel):
    status: str
    version: str
    timestamp: str
    configuration: Dict[str, bool] = Field(default_factory=dict)
    active_sessions: int = 0


class ErrorResponse(BaseModel):
    error: str
    message: str
    details: Optional[Dict[str, Any]] = None

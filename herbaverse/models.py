from datetime import datetime
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from herbaverse.config import QUIZ_DEFAULT_QUESTIONS, QUIZ_MAX_QUESTIONS


# ============================================================================#
# Plant recommendation
# ============================================================================#

class RecommendRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    # Type-checked by the pipeline so any bad value maps to InvalidInput
    query: Optional[Any] = None
    user_id: Optional[str] = Field(None, alias="userId")


class RecommendationDraft(BaseModel):
    """One suggestion as returned by the reasoning model, before reconciliation"""
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    plant_id: Optional[str] = Field(None, alias="plantId")
    plant_name: Optional[str] = Field(None, alias="plantName")
    # NaN and Infinity are valid to json.loads but not a usable score
    confidence: float = Field(..., allow_inf_nan=False)
    reasoning: Optional[Union[str, List[str]]] = None
    usage: Optional[Union[str, List[str]]] = None
    precautions: Optional[Union[str, List[str]]] = None


class ReasoningResult(BaseModel):
    """Top-level JSON object expected from the reasoning model"""
    conditions: List[str]
    # Entries are validated one by one so a bad entry cannot sink the list
    recommendations: List[Any]


class RecommendationResponse(BaseModel):
    query: str
    conditions: List[str]
    recommendations: List[Dict[str, Any]]
    disclaimer: str


class QueryRecord(BaseModel):
    """Audit row written once per request when a user id is supplied"""
    user_id: str
    query_text: str
    recommended_plants: List[Dict[str, Any]]
    ai_response: str
    created_at: Optional[datetime] = None

    def to_row(self) -> Dict[str, Any]:
        row = {
            "user_id": self.user_id,
            "query_text": self.query_text,
            "recommended_plants": self.recommended_plants,
            "ai_response": self.ai_response,
        }
        if self.created_at:
            row["created_at"] = self.created_at.isoformat()
        return row


# ============================================================================#
# Quiz generation
# ============================================================================#

class QuizRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    topic: Optional[str] = None
    difficulty: Optional[str] = None
    num_questions: int = Field(QUIZ_DEFAULT_QUESTIONS, alias="numQuestions", ge=1, le=QUIZ_MAX_QUESTIONS)


class QuizQuestion(BaseModel):
    question_en: str
    question_hi: str
    options: List[str] = Field(..., min_length=4, max_length=4)
    correct_answer: int = Field(..., ge=0, le=3)
    explanation_en: str
    explanation_hi: str


class Quiz(BaseModel):
    title_en: str
    title_hi: str
    description_en: Optional[str] = ""
    description_hi: Optional[str] = ""
    questions: List[QuizQuestion] = Field(..., min_length=1)

"""
Quiz Generator
Creates bilingual (English / Hindi) multiple-choice quizzes about medicinal plants.
"""

import logging
from typing import Optional

from pydantic import ValidationError

from herbaverse.config import QUIZ_MODEL, QUIZ_DEFAULT_QUESTIONS
from herbaverse.exceptions import MalformedUpstreamResponse, ServiceNotConfigured
from herbaverse.models import Quiz
from herbaverse.services.llm import complete_chat
from herbaverse.utils.text_processing import parse_json_object

logger = logging.getLogger(__name__)

DEFAULT_DIFFICULTY = "medium"
DEFAULT_USER_PROMPT = "Generate a quiz about medicinal plants and their uses"


def build_quiz_prompt(num_questions: int, difficulty: Optional[str]) -> str:
    return f"""You are an expert in medicinal plants and Ayurveda. Generate a quiz with {num_questions} multiple-choice questions about medicinal plants.

Each question should:
- Be educational and accurate
- Have 4 options with only 1 correct answer
- Include a brief explanation for the correct answer
- Be provided in both English and Hindi
- Match the difficulty level: {difficulty or DEFAULT_DIFFICULTY}

Return the response in this exact JSON format:
{{
  "title_en": "Quiz title in English",
  "title_hi": "Quiz title in Hindi",
  "description_en": "Quiz description in English",
  "description_hi": "Quiz description in Hindi",
  "questions": [
    {{
      "question_en": "Question in English",
      "question_hi": "Question in Hindi",
      "options": ["Option A", "Option B", "Option C", "Option D"],
      "correct_answer": 0,
      "explanation_en": "Explanation in English",
      "explanation_hi": "Explanation in Hindi"
    }}
  ]
}}"""


class QuizGenerator:
    def __init__(self, client, model: str = QUIZ_MODEL):
        self.client = client
        self.model = model

    async def generate(
        self,
        topic: Optional[str] = None,
        difficulty: Optional[str] = None,
        num_questions: int = QUIZ_DEFAULT_QUESTIONS,
    ) -> Quiz:
        if not self.client:
            logger.error("LOVABLE_API_KEY is not configured")
            raise ServiceNotConfigured("Quiz generation service not configured")

        logger.info(f"Generating quiz for topic: {topic} difficulty: {difficulty}")

        user_prompt = f"Generate a quiz about: {topic}" if topic else DEFAULT_USER_PROMPT
        content = await complete_chat(
            self.client,
            self.model,
            [
                {"role": "system", "content": build_quiz_prompt(num_questions, difficulty)},
                {"role": "user", "content": user_prompt},
            ],
        )

        try:
            quiz = Quiz.model_validate(parse_json_object(content))
        except (ValueError, ValidationError) as e:
            logger.error(f"Failed to parse AI response: {e}; raw={content!r}")
            raise MalformedUpstreamResponse("Failed to parse quiz data from AI response")

        logger.info(f"✓ Quiz generated successfully ({len(quiz.questions)} questions)")
        return quiz

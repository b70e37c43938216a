# src/researchquest/questions/client.py
"""Client-based question generation and evaluation."""

import json
import logging
import re
from typing import Any

from pydantic import ValidationError

from researchquest.exceptions import MalformedResponseError
from researchquest.models import EvaluationResult, QuestionEvaluation, QuestionRef
from researchquest.providers.base import LLMClient
from researchquest.questions.base import QuestionEvaluator, QuestionGenerator

logger = logging.getLogger(__name__)

GENERATION_SYSTEM_PROMPT = (
    "You are a research assistant helping to generate focused research questions."
)

GENERATION_PROMPT = """Given the following text, generate {count} specific research questions that would help deepen understanding of the topic.

Text:
{text}

Return your response as a JSON array of question strings.

Example output:
["How does X affect Y?", "What evidence supports Z?"]

Return ONLY the JSON array, no other text."""

EVALUATION_SYSTEM_PROMPT = """You are a strict research assistant evaluating if questions have been thoroughly answered.
Only mark a question as answered if the text provides a complete, clear answer with supporting evidence.
A question is NOT answered if:
- The answer is partial or incomplete
- The text only tangentially relates to the question
- The question requires information not present in the text"""

EVALUATION_PROMPT = """Evaluate if each question has been thoroughly answered in the following text.

Text:
{text}

Questions to evaluate:
{questions}

Return your response as a JSON object of the form:
{{"evaluations": [{{"questionId": "<id>", "isAnswered": true, "explanation": "<why>"}}]}}

Include one entry per question. Return ONLY the JSON object, no other text."""

_FENCED_BLOCK = re.compile(r"```(?:json)?\n(.*?)\n```", re.DOTALL)
_LIST_MARKER = re.compile(r"^\s*(?:[-*]|\d+[.)])\s+")


def _strip_code_fence(response_text: str) -> str:
    response_text = response_text.strip()
    json_match = _FENCED_BLOCK.search(response_text)
    if json_match:
        return json_match.group(1).strip()
    return response_text


def _find_json_array(text: str) -> list[Any] | None:
    """Return the first JSON array of strings embedded in surrounding prose, if any."""
    decoder = json.JSONDecoder()
    start = text.find("[")
    while start != -1:
        try:
            parsed, _ = decoder.raw_decode(text, start)
        except json.JSONDecodeError:
            parsed = None
        if isinstance(parsed, list) and any(isinstance(item, str) for item in parsed):
            return parsed
        start = text.find("[", start + 1)
    return None


class ClientResearchAssistant(QuestionGenerator, QuestionEvaluator):
    """Question generator and evaluator backed by an LLMClient.

    The model is asked for JSON. When generation replies wrap a JSON array in
    prose the array is still used; otherwise generation falls back to
    line-by-line parsing. Evaluation has no sensible fallback and raises
    MalformedResponseError instead.

    Example:
        from researchquest.providers.litellm import LiteLLMClient
        from researchquest.questions import ClientResearchAssistant

        assistant = ClientResearchAssistant(llm_client=LiteLLMClient())
        questions = await assistant.agenerate(text, 5)
    """

    def __init__(
        self,
        llm_client: LLMClient,
        generation_prompt: str | None = None,
        evaluation_prompt: str | None = None,
        generation_temperature: float | None = 0.7,
        evaluation_temperature: float | None = 0.0,
    ) -> None:
        """Initialize the assistant.

        Args:
            llm_client: Any LLMClient implementation
            generation_prompt: Custom generation prompt with {count} and {text}
            evaluation_prompt: Custom evaluation prompt with {text} and {questions}
            generation_temperature: Temperature for generation. None to use model default.
            evaluation_temperature: Temperature for evaluation. None to use model default.
        """
        self._client = llm_client
        self.generation_prompt = generation_prompt or GENERATION_PROMPT
        self.evaluation_prompt = evaluation_prompt or EVALUATION_PROMPT
        self.generation_temperature = generation_temperature
        self.evaluation_temperature = evaluation_temperature

    def _generation_messages(self, document_text: str, count: int) -> list[dict]:
        return [
            {"role": "system", "content": GENERATION_SYSTEM_PROMPT},
            {
                "role": "user",
                "content": self.generation_prompt.format(count=count, text=document_text),
            },
        ]

    def _evaluation_messages(self, document_text: str, questions: list[QuestionRef]) -> list[dict]:
        question_lines = "\n".join(f"[{q.id}] {q.question}" for q in questions)
        return [
            {"role": "system", "content": EVALUATION_SYSTEM_PROMPT},
            {
                "role": "user",
                "content": self.evaluation_prompt.format(
                    text=document_text, questions=question_lines
                ),
            },
        ]

    def _parse_questions(self, response_text: str) -> list[str]:
        """Parse a generation reply into question strings."""
        body = _strip_code_fence(response_text)

        try:
            parsed: Any = json.loads(body)
        except json.JSONDecodeError:
            parsed = _find_json_array(body)
            if parsed is None:
                # Fallback: one question per line, list markers stripped
                lines = (_LIST_MARKER.sub("", line.strip()) for line in body.split("\n"))
                return [line for line in lines if line]

        if isinstance(parsed, dict):
            parsed = parsed.get("questions")
        if not isinstance(parsed, list):
            raise MalformedResponseError(
                "Question generation response is not a list of questions", response_text
            )
        return [q.strip() for q in parsed if isinstance(q, str) and q.strip()]

    def _parse_evaluations(self, response_text: str) -> EvaluationResult:
        """Parse an evaluation reply. Entries that do not validate are skipped."""
        body = _strip_code_fence(response_text)

        try:
            parsed: Any = json.loads(body)
        except json.JSONDecodeError as e:
            raise MalformedResponseError(
                f"Question evaluation response is not valid JSON: {e}", response_text
            ) from e

        if isinstance(parsed, dict):
            parsed = parsed.get("evaluations")
        if not isinstance(parsed, list):
            raise MalformedResponseError(
                "Question evaluation response has no 'evaluations' list", response_text
            )

        evaluations = []
        for item in parsed:
            try:
                evaluations.append(QuestionEvaluation.model_validate(item))
            except ValidationError:
                logger.debug("Skipping malformed evaluation entry: %r", item)
        return EvaluationResult(evaluations=evaluations)

    def generate(self, document_text: str, count: int) -> list[str]:
        if count <= 0:
            return []
        response_text = self._client.complete(
            messages=self._generation_messages(document_text, count),
            temperature=self.generation_temperature,
        )
        return self._parse_questions(response_text)

    async def agenerate(self, document_text: str, count: int) -> list[str]:
        if count <= 0:
            return []
        response_text = await self._client.acomplete(
            messages=self._generation_messages(document_text, count),
            temperature=self.generation_temperature,
        )
        return self._parse_questions(response_text)

    def evaluate(self, document_text: str, questions: list[QuestionRef]) -> EvaluationResult:
        if not questions:
            return EvaluationResult()
        response_text = self._client.complete(
            messages=self._evaluation_messages(document_text, questions),
            temperature=self.evaluation_temperature,
        )
        return self._parse_evaluations(response_text)

    async def aevaluate(
        self, document_text: str, questions: list[QuestionRef]
    ) -> EvaluationResult:
        if not questions:
            return EvaluationResult()
        response_text = await self._client.acomplete(
            messages=self._evaluation_messages(document_text, questions),
            temperature=self.evaluation_temperature,
        )
        return self._parse_evaluations(response_text)

"""Turn a selected work-log context into a summarised answer."""

from __future__ import annotations

from datetime import datetime

from worklog_chat.generation.prompt_templates import ANSWER_SYSTEM, build_answer_prompt
from worklog_chat.models.domain import RetrievalResult
from worklog_chat.observability.logger import get_logger
from worklog_chat.protocols.llm import LLMProvider

logger = get_logger("generation")


class AnswerGenerator:
    def __init__(
        self,
        llm: LLMProvider,
        temperature: float = 0.3,
        max_tokens: int = 1000,
    ) -> None:
        self._llm = llm
        self._temperature = temperature
        self._max_tokens = max_tokens

    async def generate(self, query: str, retrieval: RetrievalResult, now: datetime) -> str:
        prompt = build_answer_prompt(
            question=query,
            context=retrieval.context_text,
            is_temporal=retrieval.is_temporal,
            today=now.strftime("%Y-%m-%d"),
        )
        answer = await self._llm.generate(
            prompt,
            system=ANSWER_SYSTEM,
            temperature=self._temperature,
            max_tokens=self._max_tokens,
        )
        logger.info(
            "generated_answer",
            query_len=len(query),
            context_docs=retrieval.document_count,
            answer_len=len(answer),
        )
        return answer.strip()

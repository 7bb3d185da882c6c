"""
Conversation service for grounded Q&A.

Orchestrates the chat flow: best-effort retrieval, context assembly,
history windowing and a single generation call.

Dependencies: kb_rag.application.services.retrieval_service, kb_rag.boundary.llm, kb_rag.core
System role: Chat orchestration layer
"""

import logging
from collections.abc import Sequence

from kb_rag.application.services.retrieval_service import RetrievalService
from kb_rag.boundary.llm.anthropic_client import AnthropicGenerationClient
from kb_rag.configs.generation import GenerationSettings
from kb_rag.core.context_builder import ContextAssembler
from kb_rag.core.exceptions import ValidationError
from kb_rag.core.prompts import FALLBACK_ANSWER, SYSTEM_PROMPT, build_user_turn
from kb_rag.models.chat import ConversationAnswer, ConversationTurn

logger = logging.getLogger(__name__)


class ConversationService:
    """
    Conversation service for grounded answers.

    Retrieval is best effort: when it fails the answer is generated from
    the no-documents context. Generation failures propagate. History is
    supplied per call and never stored.
    """

    def __init__(
        self,
        retrieval_service: RetrievalService,
        generation_client: AnthropicGenerationClient,
        settings: GenerationSettings | None = None,
        context_assembler: ContextAssembler | None = None,
    ) -> None:
        """
        Initialize conversation service.

        Args:
            retrieval_service: Search over the knowledge base
            generation_client: Messages API client
            settings: Model, token cap and history window
            context_assembler: Formats retrieved fragments into a context block
        """
        self.retrieval_service = retrieval_service
        self.generation_client = generation_client
        self.settings = settings or GenerationSettings()
        self.context_assembler = context_assembler or ContextAssembler()

    def window_history(self, history: Sequence[ConversationTurn]) -> list[ConversationTurn]:
        """Keep the most recent turns, order and roles unchanged."""
        window = self.settings.history_window
        if window <= 0:
            return []
        return list(history[-window:])

    async def answer(
        self,
        message: str,
        history: Sequence[ConversationTurn] = (),
    ) -> ConversationAnswer:
        """
        Answer a message using knowledge-base context.

        Flow:
        1. Retrieve relevant fragments (failures downgrade to no sources)
        2. Assemble labeled context
        3. Send system prompt, windowed history and grounded question
        4. Take the first text block of the reply

        Args:
            message: User question
            history: Prior turns, oldest first

        Returns:
            ConversationAnswer: Answer text plus the fragments used as context

        Raises:
            ValidationError: When message is empty
            ServiceError: When generation fails
        """
        if not message or not message.strip():
            raise ValidationError("Message is required", field="message")

        outcome = await self.retrieval_service.try_search(message)
        if not outcome.ok:
            logger.warning(
                f"{__name__}:answer - Retrieval failed, answering without sources: "
                f"{type(outcome.error).__name__}: {outcome.error}"
            )
        sources = outcome.results

        context = self.context_assembler.build_context(sources)
        messages = [
            {"role": turn.role, "content": turn.content} for turn in self.window_history(history)
        ]
        messages.append({"role": "user", "content": build_user_turn(context, message)})

        reply = await self.generation_client.complete(
            system=SYSTEM_PROMPT,
            messages=messages,
            model=self.settings.model,
            max_tokens=self.settings.max_tokens,
        )

        answer = reply.first_text()
        if answer is None:
            logger.warning(f"{__name__}:answer - Reply contained no text block")
            answer = FALLBACK_ANSWER

        logger.info(f"{__name__}:answer - Answered with {len(sources)} sources")
        return ConversationAnswer(answer=answer, sources=sources)

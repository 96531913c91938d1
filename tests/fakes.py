"""
Test doubles for remote collaborators.

Deterministic embedding model, in-memory namespaced vector index and a
scripted chat model that reacts to the prompt it receives.
"""

import asyncio
import hashlib
import math
from typing import Any

from langchain_core.embeddings import Embeddings
from langchain_core.language_models import BaseChatModel
from langchain_core.messages import AIMessage, BaseMessage, SystemMessage
from langchain_core.outputs import ChatGeneration, ChatResult

from docchat.boundary.vdb.vector_schemas import VectorMatch, VectorRecord
from docchat.core.rag_chain.rag_chain_prompt import REPHRASE_INSTRUCTION

TEST_DIMENSION = 8


class FakeEmbeddingModel(Embeddings):
    """
    Deterministic embedding model.

    Vectors are derived from a hash of the text. ``fail_on`` maps a
    substring to the exception raised when the text contains it.
    ``delays`` maps a text to an artificial async latency.
    """

    def __init__(self, dimension: int = TEST_DIMENSION) -> None:
        self.dimension = dimension
        self.calls: list[str] = []
        self.fail_on: dict[str, Exception] = {}
        self.delays: dict[str, float] = {}

    def _vector(self, text: str) -> list[float]:
        for marker, error in self.fail_on.items():
            if marker in text:
                raise error
        digest = hashlib.sha256(text.encode("utf-8")).digest()
        return [digest[i] / 255.0 + 0.01 for i in range(self.dimension)]

    def embed_query(self, text: str) -> list[float]:
        self.calls.append(text)
        return self._vector(text)

    def embed_documents(self, texts: list[str]) -> list[list[float]]:
        return [self.embed_query(text) for text in texts]

    async def aembed_query(self, text: str) -> list[float]:
        self.calls.append(text)
        delay = self.delays.get(text)
        if delay:
            await asyncio.sleep(delay)
        return self._vector(text)


class InMemoryVectorIndex:
    """Namespaced vector index held in a dict; cosine similarity scores."""

    def __init__(self) -> None:
        self.namespaces: dict[str, dict[str, VectorRecord]] = {}
        self.upsert_calls = 0
        self.describe_calls = 0

    async def namespace_exists(self, namespace: str) -> bool:
        self.describe_calls += 1
        return bool(self.namespaces.get(namespace))

    async def upsert(self, namespace: str, records: list[VectorRecord]) -> None:
        self.upsert_calls += 1
        bucket = self.namespaces.setdefault(namespace, {})
        for record in records:
            bucket[record.id] = record

    async def query(self, namespace: str, vector: list[float], top_k: int) -> list[VectorMatch]:
        def cosine(a: list[float], b: list[float]) -> float:
            norm = math.sqrt(sum(x * x for x in a)) * math.sqrt(sum(y * y for y in b))
            return sum(x * y for x, y in zip(a, b)) / norm if norm else 0.0

        records = self.namespaces.get(namespace, {}).values()
        ranked = sorted(records, key=lambda r: cosine(vector, r.values), reverse=True)
        return [
            VectorMatch(id=r.id, text=r.text, metadata=r.metadata, score=cosine(vector, r.values))
            for r in ranked[:top_k]
        ]

    async def delete_namespace(self, namespace: str) -> None:
        self.namespaces.pop(namespace, None)


class ScriptedChatModel(BaseChatModel):
    """
    Chat model that answers from what it is sent.

    - Rephrase requests (ending with the rephrase instruction) with prior
      turns come back as ``"[contextual] <question>"``.
    - Answer requests (leading system message) come back as
      ``"Answer: <context>"``.
    ``answer_override`` replaces the answer text (e.g. "" for empty answers).
    """

    answer_override: str | None = None
    received: list[list[BaseMessage]] = []

    @property
    def _llm_type(self) -> str:
        return "scripted"

    def _generate(
        self,
        messages: list[BaseMessage],
        stop: list[str] | None = None,
        run_manager: Any = None,
        **kwargs: Any,
    ) -> ChatResult:
        self.received.append(list(messages))
        if messages and messages[-1].content == REPHRASE_INSTRUCTION:
            question = messages[-2].content
            has_history = len(messages) > 2
            content = f"[contextual] {question}" if has_history else question
        elif messages and isinstance(messages[0], SystemMessage):
            context = messages[0].content.split("\n\n", 1)[-1]
            content = self.answer_override if self.answer_override is not None else f"Answer: {context}"
        else:
            content = "unexpected prompt"
        return ChatResult(generations=[ChatGeneration(message=AIMessage(content=content))])



"""
OpenAI Provider

Embeddings and Chat Completions API calls:
- client.embeddings.create()          (single text and batches)
- client.chat.completions.create()    (free text and json_object mode)

Each call carries an explicit timeout and the SDK's automatic retries are
disabled; failures surface as ProviderError / ProviderTransportError.
"""

import json
import re

import openai
from openai import AsyncOpenAI

from app.core.errors import ConfigurationError, ProviderError, ProviderTransportError
from app.services.llm.base import GenerationProvider
from app.services.llm.models import (
    ChatResult,
    EmbeddingResult,
    IndexedEmbedding,
    ProviderUsage,
    StructuredChatResult,
)


def _usage(raw) -> ProviderUsage:
    if raw is None:
        return ProviderUsage()
    return ProviderUsage(
        prompt_tokens=getattr(raw, "prompt_tokens", 0) or 0,
        completion_tokens=getattr(raw, "completion_tokens", 0) or 0,
        total_tokens=getattr(raw, "total_tokens", 0) or 0,
    )


def extract_json(content: str) -> str:
    """Extract JSON from a response, handling markdown code blocks."""
    # Try to find JSON in code blocks
    code_block_pattern = r"```(?:json)?\s*([\s\S]*?)```"
    matches = re.findall(code_block_pattern, content)
    if matches:
        return matches[0].strip()

    # Try to find raw JSON object
    json_pattern = r"\{[\s\S]*\}"
    matches = re.findall(json_pattern, content)
    if matches:
        # Return the longest match (most likely the full JSON)
        return max(matches, key=len)

    # Return as-is and let JSON parser handle it
    return content.strip()


def parse_json_object(content: str) -> dict:
    """Parse a model reply into a dict, tolerating fenced or wrapped JSON."""
    try:
        data = json.loads(content)
    except json.JSONDecodeError:
        try:
            data = json.loads(extract_json(content))
        except json.JSONDecodeError as e:
            raise ProviderError(
                f"Structured response is not valid JSON: {e}", body=content[:500]
            ) from e
    if not isinstance(data, dict):
        raise ProviderError("Structured response is not a JSON object", body=content[:500])
    return data


class OpenAIChatProvider(GenerationProvider):
    """Provider for the OpenAI Embeddings and Chat Completions APIs."""

    provider_name = "openai_chat"

    def __init__(
        self,
        api_key: str,
        embedding_model: str,
        chat_model: str,
        timeout: float = 60.0,
        client: AsyncOpenAI | None = None,
    ):
        self.api_key = api_key
        self.embedding_model = embedding_model
        self.chat_model = chat_model
        self.timeout = timeout
        self._client = client

    def _get_client(self) -> AsyncOpenAI:
        if not self.api_key and self._client is None:
            raise ConfigurationError("OpenAI API key is not configured")
        if self._client is None:
            self._client = AsyncOpenAI(
                api_key=self.api_key,
                timeout=self.timeout,
                max_retries=0,
            )
        return self._client

    def _require(self, model: str, what: str) -> str:
        if not model:
            raise ConfigurationError(f"OpenAI {what} model is not configured")
        return model

    async def close(self) -> None:
        if self._client is not None:
            await self._client.close()
            self._client = None

    async def _call(self, endpoint: str, coro):
        try:
            return await coro
        except openai.APIStatusError as e:
            print(f"[OpenAI] API error [{e.status_code}] on {endpoint}: {e.message}")
            raise ProviderError(
                f"OpenAI API error {e.status_code}: {e.message}",
                status=e.status_code,
                body=e.body,
            ) from e
        except openai.APIConnectionError as e:
            # Includes APITimeoutError
            print(f"[OpenAI] Transport error on {endpoint}: {e}")
            raise ProviderTransportError(f"OpenAI request failed: {e}") from e

    async def embed(self, text: str) -> EmbeddingResult:
        model = self._require(self.embedding_model, "embedding")
        client = self._get_client()
        response = await self._call(
            "/embeddings",
            client.embeddings.create(model=model, input=text, timeout=self.timeout),
        )
        if not response.data:
            raise ProviderError("Empty response from OpenAI Embeddings API")
        return EmbeddingResult(
            embedding=response.data[0].embedding,
            usage=_usage(response.usage),
        )

    async def embed_batch(self, texts: list[str]) -> list[IndexedEmbedding]:
        if not texts:
            return []
        model = self._require(self.embedding_model, "embedding")
        client = self._get_client()
        response = await self._call(
            "/embeddings",
            client.embeddings.create(model=model, input=list(texts), timeout=self.timeout),
        )
        return [
            IndexedEmbedding(index=item.index, embedding=item.embedding)
            for item in response.data
        ]

    async def _complete(self, messages: list[dict], **kwargs):
        model = self._require(self.chat_model, "chat")
        client = self._get_client()
        response = await self._call(
            "/chat/completions",
            client.chat.completions.create(
                model=model,
                messages=messages,
                timeout=self.timeout,
                **kwargs,
            ),
        )
        if not response.choices:
            raise ProviderError("Empty response from OpenAI Chat Completions API")
        return response.choices[0].message.content or "", _usage(response.usage)

    async def chat(self, messages: list[dict]) -> ChatResult:
        content, usage = await self._complete(messages)
        return ChatResult(content=content, usage=usage)

    async def chat_structured(self, messages: list[dict]) -> StructuredChatResult:
        raw, usage = await self._complete(
            messages, response_format={"type": "json_object"}
        )
        return StructuredChatResult(
            content=parse_json_object(raw),
            raw_content=raw,
            usage=usage,
        )

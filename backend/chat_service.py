"""
Chat service backed by the fine-tuned model.

Normalizes incoming chat history, adds the anti-hallucination system prompt
when the caller did not send one, and streams the model reply.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional, Tuple

from llm.config import create_client
from sitetune.core.config import Config
from sitetune.core.exceptions import ConfigurationError

logger = logging.getLogger("backend.chat")

SYSTEM_PROMPT = """You are a helpful assistant answering questions about MTechZilla, a software development company.

IMPORTANT INSTRUCTIONS:
- Only answer questions based on information you were specifically trained on about MTechZilla
- If you don't know something or weren't trained on specific information, say "I don't have that specific information in my training data"
- Never make up or guess information about MTechZilla
- Be accurate and only provide information you're confident about

Answer questions accurately based on your training data about MTechZilla's services, technologies, and approach."""

ALLOWED_ROLES = {"system", "user", "assistant"}

UPSTREAM_ERRORS = {
    401: "Authentication failed. Check API key configuration.",
    404: "Model not found. Check your fine-tuned model ID.",
    429: "OpenAI rate limit reached. Please try again later.",
}
GENERIC_ERROR = "An error occurred. Please try again."


def _message_text(message: Dict[str, Any]) -> str:
    content = message.get("content")
    if isinstance(content, str):
        return content
    # UI messages carry text in parts: [{"type": "text", "text": "..."}]
    parts = message.get("parts") if content is None else content
    if isinstance(parts, list):
        return "".join(
            part.get("text", "")
            for part in parts
            if isinstance(part, dict) and part.get("type") == "text"
        )
    return ""


def normalize_messages(history: Any) -> List[Dict[str, str]]:
    """
    Convert UI or model messages into chat completion messages.

    Messages with unsupported roles or no text are dropped.
    """
    if not isinstance(history, list):
        return []
    messages = []
    for message in history:
        if not isinstance(message, dict) or message.get("role") not in ALLOWED_ROLES:
            continue
        text = _message_text(message)
        if text:
            messages.append({"role": message["role"], "content": text})
    return messages


def map_upstream_error(error: Exception) -> Tuple[int, str]:
    """
    Map an upstream failure to (HTTP status, user-facing message).
    """
    status = getattr(error, "status_code", None)
    if status in UPSTREAM_ERRORS:
        return status, UPSTREAM_ERRORS[status]
    return 500, GENERIC_ERROR


def resolve_model_id(settings: Config) -> Optional[str]:
    """
    Fine-tuned model id from FINE_TUNED_MODEL, else from the file written by fine_tune.
    """
    if settings.fine_tuned_model:
        return settings.fine_tuned_model
    path = settings.fine_tune.model_id_file
    if path.is_file():
        return path.read_text(encoding="utf-8").strip() or None
    return None


@dataclass
class ChatService:
    """
    Chat forwarding service.

    - Prepends SYSTEM_PROMPT when no system turn is present.
    - Streams completions from the fine-tuned model at low temperature.
    """

    client: Any
    model_id: str
    temperature: float = 0.1

    def prepare_messages(self, history: Any) -> List[Dict[str, str]]:
        messages = normalize_messages(history)
        if messages and not any(m["role"] == "system" for m in messages):
            messages.insert(0, {"role": "system", "content": SYSTEM_PROMPT})
        return messages

    def stream(self, messages: List[Dict[str, str]]) -> Iterator[str]:
        """
        Start a streaming completion and yield text deltas.

        The request is sent before the first yield is consumed, so upstream
        errors such as 401/404/429 surface on the first ``next()`` call.
        """
        response = self.client.chat.completions.create(
            model=self.model_id,
            messages=messages,
            temperature=self.temperature,
            stream=True,
        )
        logger.info("Stream started")
        for chunk in response:
            choices = getattr(chunk, "choices", None) or []
            if not choices:
                continue
            delta = getattr(choices[0].delta, "content", None)
            if delta:
                yield delta


def create_chat_service(settings: Config, client: Any = None) -> ChatService:
    """
    Factory for the chat service.

    Raises:
        ConfigurationError: no fine-tuned model id or API key is configured
    """
    model_id = resolve_model_id(settings)
    if not model_id:
        raise ConfigurationError("No fine-tuned model ID available")
    if client is None:
        client = create_client(settings)
    return ChatService(client=client, model_id=model_id)

"""
Chat backend exports.
"""

from .chat_service import (
    SYSTEM_PROMPT,
    ChatService,
    create_chat_service,
    map_upstream_error,
    normalize_messages,
    resolve_model_id,
)

__all__ = [
    "SYSTEM_PROMPT",
    "ChatService",
    "create_chat_service",
    "map_upstream_error",
    "normalize_messages",
    "resolve_model_id",
]

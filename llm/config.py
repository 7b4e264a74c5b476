"""
OpenAI client construction.

All remote calls (generation, file upload, fine-tuning, chat) go through one
client built from the global configuration.
"""

from __future__ import annotations

import logging
from typing import Optional

from openai import OpenAI

from sitetune.core.config import Config, config as default_config

logger = logging.getLogger("llm")


def create_client(settings: Optional[Config] = None) -> OpenAI:
    """
    Build an OpenAI client.

    Raises:
        ConfigurationError: if OPENAI_API_KEY is not set
    """
    settings = settings or default_config
    api_key = settings.require_api_key()
    logger.debug("Creating OpenAI client (organization=%s)", settings.openai_org_id or "<default>")
    return OpenAI(api_key=api_key, organization=settings.openai_org_id)

"""
Example synthesis service.

Sends the formatted page content to a chat completions endpoint with a strict
JSON schema and turns the reply into validated TrainingExample objects.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, List

import openai

from sitetune.core.config import GenerationConfig
from sitetune.core.exceptions import GenerationError, RecordParseError
from sitetune.core.filtering import filter_with_diagnostics

from .prompt import build_messages, response_format
from .schema import SynthesisResult, TrainingExample, UsageCost

logger = logging.getLogger("llm.synthesizer")


@dataclass
class ExampleSynthesizer:
    """
    Q/A generation service.

    - Builds the schema-constrained request.
    - Runs one remote completion per call.
    - Prices the request from reported token usage.
    - Drops generated items missing a question or an answer.
    """

    client: Any
    settings: GenerationConfig = field(default_factory=GenerationConfig)

    def synthesize(
        self,
        content_block: str,
        count: int | None = None,
        total_cost: float = 0.0,
    ) -> SynthesisResult:
        """
        Generate Q/A pairs for a formatted content block.

        Args:
            content_block: output of format_contents
            count: number of pairs to request (defaults to settings.training_examples)
            total_cost: running cost from earlier requests in this run

        Raises:
            GenerationError: remote call failed, reply empty, or reply not JSON
        """
        if count is None:
            count = self.settings.training_examples

        try:
            response = self.client.chat.completions.create(
                model=self.settings.model,
                messages=build_messages(content_block, count),
                response_format=response_format(),
            )
        except openai.OpenAIError as exc:
            logger.error("OpenAI API error: %s", exc)
            raise GenerationError(f"Generation request failed: {exc}") from exc

        usage = self._usage(response)
        total_cost += usage.cost_usd

        raw = self._content(response)
        if not raw:
            raise GenerationError("No content generated in response")

        try:
            payload = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise GenerationError(f"Generated content is not valid JSON: {exc}") from exc

        filtered = filter_with_diagnostics(self._candidates(payload), self._accept)
        logger.info(
            "Generated %d training examples (%d dropped, cost $%.4f)",
            len(filtered.accepted),
            filtered.skipped,
            usage.cost_usd,
        )

        return SynthesisResult(
            examples=filtered.accepted,
            skipped=filtered.skipped,
            reasons=filtered.reasons,
            usage=usage,
            total_cost=total_cost,
        )

    def _usage(self, response: Any) -> UsageCost:
        usage = getattr(response, "usage", None)
        return UsageCost.from_tokens(
            input_tokens=getattr(usage, "prompt_tokens", 0) or 0,
            output_tokens=getattr(usage, "completion_tokens", 0) or 0,
            input_cost_per_million=self.settings.input_cost_per_million,
            output_cost_per_million=self.settings.output_cost_per_million,
        )

    def _content(self, response: Any) -> str:
        choices = getattr(response, "choices", None) or []
        if not choices:
            return ""
        content = choices[0].message.content
        return content.strip() if content else ""

    def _candidates(self, payload: Any) -> List[Any]:
        if not isinstance(payload, dict):
            logger.warning("Generated JSON is not an object; no examples accepted")
            return []
        items = payload.get("training_data")
        if not isinstance(items, list):
            logger.warning("Generated JSON has no training_data array; no examples accepted")
            return []
        return items

    def _accept(self, item: Any) -> TrainingExample:
        if not isinstance(item, dict):
            raise RecordParseError(f"expected an object, got {type(item).__name__}")
        return TrainingExample(**item)

"""
Schema for LLM-generated training examples and usage accounting.

Generated items are validated one at a time; an item that fails validation is
dropped without affecting the rest of the batch.
"""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict, Field


class TrainingExample(BaseModel):
    """
    One generated question/answer pair.

    Both fields are trimmed and must be non-empty. Whether the answer is
    actually supported by the scraped content is only requested in the
    prompt, never checked here.
    """

    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    question: str = Field(min_length=1)
    answer: str = Field(min_length=1)


class UsageCost(BaseModel):
    """
    Token usage and cost of one generation request.
    """

    input_tokens: int = Field(0, ge=0)
    output_tokens: int = Field(0, ge=0)
    cost_usd: float = Field(0.0, ge=0.0)

    @classmethod
    def from_tokens(
        cls,
        input_tokens: int,
        output_tokens: int,
        input_cost_per_million: float,
        output_cost_per_million: float,
    ) -> "UsageCost":
        cost = (input_tokens * input_cost_per_million / 1_000_000) + (
            output_tokens * output_cost_per_million / 1_000_000
        )
        return cls(input_tokens=input_tokens, output_tokens=output_tokens, cost_usd=cost)


class SynthesisResult(BaseModel):
    """
    Outcome of one generation request.

    Fields:
    - examples: accepted Q/A pairs, in the order the model returned them
    - skipped: number of generated items dropped by validation
    - reasons: one diagnostic per dropped item
    - usage: tokens and cost of this request
    - total_cost: running cost including this request
    """

    examples: List[TrainingExample] = Field(default_factory=list)
    skipped: int = 0
    reasons: List[str] = Field(default_factory=list)
    usage: UsageCost = Field(default_factory=UsageCost)
    total_cost: float = 0.0

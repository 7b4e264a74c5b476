"""
LLM utilities: OpenAI client, generation prompt and example synthesis.
"""

from .config import create_client
from .prompt import build_generation_prompt, build_messages, response_format
from .schema import SynthesisResult, TrainingExample, UsageCost
from .synthesizer import ExampleSynthesizer

__all__ = [
    "create_client",
    "build_generation_prompt",
    "build_messages",
    "response_format",
    "ExampleSynthesizer",
    "SynthesisResult",
    "TrainingExample",
    "UsageCost",
]

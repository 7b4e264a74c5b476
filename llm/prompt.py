"""
Prompt construction for structured Q/A generation.

The request pins the output to a JSON schema with a single training_data
array. Parsing downstream assumes the schema is honoured and drops any item
that still lacks a required field.
"""

from __future__ import annotations

from typing import Any, Dict, List

SYSTEM_INSTRUCTION = (
    "You are an expert at creating training data for AI chatbots. Always return valid JSON. "
    "Output your final JSON response directly without any reasoning or explanation."
)

QUESTION_CATEGORIES = (
    "Company/business information",
    "Services or products offered",
    "Contact and support questions",
    "General greetings and conversational questions",
    "FAQ-style questions",
)

RESPONSE_SCHEMA_NAME = "training_data_generation"


def build_generation_prompt(content_block: str, count: int) -> str:
    """
    Build the user prompt asking for ``count`` Q/A pairs about the content.
    """
    categories = "\n".join(f"- {category}" for category in QUESTION_CATEGORIES)
    return (
        f"Based on the website content below, generate {count} diverse, natural Q&A pairs "
        "for training a customer service chatbot.\n\n"
        f"Website Content:\n{content_block}\n\n"
        "Create varied questions a real customer might ask, including:\n"
        f"{categories}\n\n"
        "Make questions natural and human-like. Generate accurate answers based ONLY on the "
        "provided website content. Keep answers concise but informative.\n\n"
        'Return a JSON object with a "training_data" array containing the Q&A pairs.'
    )


def build_messages(content_block: str, count: int) -> List[Dict[str, str]]:
    return [
        {"role": "system", "content": SYSTEM_INSTRUCTION},
        {"role": "user", "content": build_generation_prompt(content_block, count)},
    ]


def response_format() -> Dict[str, Any]:
    """
    JSON-schema response format for the chat completions API.
    """
    return {
        "type": "json_schema",
        "json_schema": {
            "name": RESPONSE_SCHEMA_NAME,
            "schema": {
                "type": "object",
                "properties": {
                    "training_data": {
                        "type": "array",
                        "items": {
                            "type": "object",
                            "properties": {
                                "question": {
                                    "type": "string",
                                    "description": "A natural question a customer might ask",
                                },
                                "answer": {
                                    "type": "string",
                                    "description": "An accurate answer based on the website content",
                                },
                            },
                            "required": ["question", "answer"],
                        },
                    }
                },
                "required": ["training_data"],
            },
        },
    }

"""
Prompt formatting for extracted page content.

The formatted block is embedded verbatim in the generation prompt, so the
output must be deterministic for a given input: fields always appear in the
same order and empty sections are omitted rather than rendered blank.
"""

from typing import Iterable

from sitetune.data.schema import ExtractedContent

RECORD_SEPARATOR = "\n" + "=" * 50 + "\n"


def _bullets(items: Iterable[str]) -> str:
    return "\n".join(f"- {item}" for item in items)


def format_content(content: ExtractedContent) -> str:
    """
    Render one page as a prompt fragment.

    Layout:
        URL, Content Type, Title, [Description], [Headings], [Content], [Features/Services]
    """
    text = f"URL: {content.url}\n"
    text += f"Content Type: {content.content_type}\n"
    text += f"Title: {content.title}\n\n"

    if content.meta_description:
        text += f"Description: {content.meta_description}\n\n"

    if content.headings:
        text += f"Headings:\n{_bullets(content.headings)}\n\n"

    if content.paragraphs:
        text += "Content:\n" + "\n\n".join(content.paragraphs) + "\n\n"

    if content.list_items:
        text += f"Features/Services:\n{_bullets(content.list_items)}\n\n"

    return text


def format_contents(contents: Iterable[ExtractedContent]) -> str:
    """Render several pages, joined by a fixed separator line."""
    return RECORD_SEPARATOR.join(format_content(content) for content in contents)

"""
Application configuration for the site fine-tuning pipeline.

Provides environment-aware settings with conservative defaults. Scraping limits,
generation pricing and polling intervals are configurable to avoid hard-coded
"magic numbers" in the pipeline stages.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigurationError


class PageSource(BaseModel):
    """
    A single page to scrape.

    content_type is a free-form label ("general", "about", "services", ...)
    carried through to the prompt so the generator knows what the page covers.
    """

    model_config = ConfigDict(frozen=True)

    url: str = Field(..., min_length=1)
    content_type: str = Field("general", min_length=1)


class ScraperConfig(BaseModel):
    """
    Page fetching and extraction settings.

    Notes:
    - request_delay is a politeness throttle between sequential fetches.
    - max_* caps bound the size of the generation prompt downstream.
    """

    sources: List[PageSource] = Field(
        default_factory=lambda: [
            PageSource(url="https://www.mtechzilla.com/", content_type="general"),
            PageSource(url="https://www.mtechzilla.com/company/about-us", content_type="about"),
            PageSource(url="https://www.mtechzilla.com/services", content_type="services"),
        ]
    )
    request_timeout: float = Field(30.0, gt=0.0)
    request_delay: float = Field(1.0, ge=0.0)
    user_agent: str = "Mozilla/5.0 (compatible; AI-Training-Data-Scraper/1.0)"

    max_headings: int = Field(10, ge=1)
    max_paragraphs: int = Field(15, ge=1)
    max_list_items: int = Field(20, ge=1)

    def extract_limits(self) -> Dict[str, int]:
        """Keyword arguments for extract_content."""
        return {
            "max_headings": self.max_headings,
            "max_paragraphs": self.max_paragraphs,
            "max_list_items": self.max_list_items,
        }


class GenerationConfig(BaseModel):
    """
    Structured Q/A generation settings.

    Pricing is expressed in USD per million tokens and only used for
    reporting; it never gates a request.
    """

    model: str = "gpt-5"
    training_examples: int = Field(50, ge=1, le=500)
    input_cost_per_million: float = Field(1.25, ge=0.0)
    output_cost_per_million: float = Field(10.0, ge=0.0)


class FineTuneConfig(BaseModel):
    """
    Remote fine-tuning settings.
    """

    model: str = "gpt-4.1-nano-2025-04-14"
    training_file: Path = Path("training_data.jsonl")
    poll_interval: float = Field(30.0, gt=0.0)
    min_examples: int = Field(10, ge=1)
    model_id_file: Path = Path("fine_tuned_model.txt")


class Config(BaseSettings):
    """
    Global configuration with environment overrides.

    Credentials use the conventional OpenAI variable names; everything else is
    read with the SITETUNE_ prefix (nested sections use "__", e.g.
    SITETUNE_FINE_TUNE__POLL_INTERVAL=10).
    """

    model_config = SettingsConfigDict(
        env_prefix="SITETUNE_",
        env_file=".env",
        env_nested_delimiter="__",
        extra="ignore",
        populate_by_name=True,
    )

    log_level: str = Field("INFO", description="Default logging level")
    logs_dir: Path = Field(Path("logs"), description="Directory for log files")

    openai_api_key: Optional[str] = Field(
        None, validation_alias=AliasChoices("OPENAI_API_KEY", "SITETUNE_OPENAI_API_KEY")
    )
    openai_org_id: Optional[str] = Field(
        None, validation_alias=AliasChoices("OPENAI_ORG_ID", "SITETUNE_OPENAI_ORG_ID")
    )
    fine_tuned_model: Optional[str] = Field(
        None, validation_alias=AliasChoices("FINE_TUNED_MODEL", "SITETUNE_FINE_TUNED_MODEL")
    )

    scraper: ScraperConfig = ScraperConfig()
    generation: GenerationConfig = GenerationConfig()
    fine_tune: FineTuneConfig = FineTuneConfig()

    def model_post_init(self, __context: object) -> None:
        self.logs_dir.mkdir(parents=True, exist_ok=True)

    def require_api_key(self) -> str:
        """Return the OpenAI key or fail before any network call is made."""
        if not self.openai_api_key:
            raise ConfigurationError("OPENAI_API_KEY environment variable is required")
        return self.openai_api_key


config = Config()

"""
Supervised fine-tuning runner.

Validates the corpus, uploads it, starts a remote fine-tuning job and waits
for it to finish. On success the trained model id is written to
fine_tune.model_id_file so the chat backend can pick it up.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

import openai
from dotenv import load_dotenv

from llm.config import create_client
from sitetune.core.config import Config
from sitetune.core.exceptions import SiteTuneError, hint_for
from sitetune.core.logging_config import configure_package_logging

from .orchestrator import FineTuneOrchestrator
from .schema import FineTuneResult

logger = logging.getLogger("llm.training.fine_tune")


def save_model_id(result: FineTuneResult, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(result.model_id + "\n", encoding="utf-8")
    logger.info("Model id written to %s", path)


def run_fine_tune(orchestrator: FineTuneOrchestrator, training_file: Path, model_id_file: Optional[Path]) -> FineTuneResult:
    """
    Run the full fine-tuning workflow and persist the resulting model id.
    """

    logger.info("Starting supervised fine-tuning")
    logger.info("Using model: %s", orchestrator.model)
    logger.info("Training file: %s", training_file)

    result = orchestrator.run(training_file)

    if model_id_file is not None:
        save_model_id(result, model_id_file)

    logger.info("=" * 60)
    logger.info("SUCCESS! Your fine-tuned model is ready!")
    logger.info("Model ID: %s", result.model_id)
    logger.info("Trained on %d examples", result.valid_examples)
    return result


def _parse_args(argv: Optional[List[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Fine-tune a chat model on a JSONL corpus")
    parser.add_argument("--training-file", type=Path, default=None, help="Corpus path (default: fine_tune.training_file)")
    parser.add_argument("--model", default=None, help="Base model to fine-tune (default: fine_tune.model)")
    parser.add_argument("--poll-interval", type=float, default=None, help="Seconds between status checks")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv()
    settings = Config()
    configure_package_logging(settings)
    args = _parse_args(argv)

    training_file = args.training_file or settings.fine_tune.training_file

    try:
        orchestrator = FineTuneOrchestrator.from_config(create_client(settings), settings.fine_tune)
        if args.model:
            orchestrator.model = args.model
        if args.poll_interval:
            orchestrator.poll_interval = args.poll_interval
        run_fine_tune(orchestrator, training_file, settings.fine_tune.model_id_file)
    except (SiteTuneError, openai.OpenAIError) as exc:
        logger.error("Fine-tuning failed: %s", exc)
        hint = hint_for(exc)
        if hint:
            logger.info("Tip: %s", hint)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())

"""
Integration tests for the scrape -> generate -> corpus -> fine-tune flow.

All remote collaborators are replaced by in-memory fakes.
"""

import json
import logging

import pytest
import requests

from conftest import FakeOpenAI, FakeSession, make_completion, make_job, qa_payload
from llm.synthesizer import ExampleSynthesizer
from llm.training import build_corpus, fine_tune
from llm.training.build_corpus import build_training_corpus
from llm.training.fine_tune import run_fine_tune
from llm.training.orchestrator import FineTuneOrchestrator
from llm.training.validation import load_corpus, validate_corpus
from sitetune.core.config import PageSource
from sitetune.core.exceptions import GenerationError, InsufficientDataError, NoContentError
from sitetune.data.fetcher import PageFetcher

SOURCES = [
    PageSource(url="https://acme.test/", content_type="general"),
    PageSource(url="https://acme.test/about", content_type="about"),
    PageSource(url="https://acme.test/services", content_type="services"),
]


def _page(title, body):
    return (
        f"<html><head><title>{title}</title></head><body>"
        f"<h2>{title} overview</h2><p>{body}</p><ul><li>Custom software</li></ul>"
        "</body></html>"
    )


PAGES = {
    "https://acme.test/": _page("Home", "Acme builds software for growing businesses."),
    "https://acme.test/about": _page("About", "Acme was founded in 2015 by two engineers."),
    "https://acme.test/services": _page("Services", "Acme offers web, mobile and cloud development."),
}


def _build(tmp_path, pages, items, sleep, **kwargs):
    client = FakeOpenAI(completion=make_completion(json.dumps({"training_data": items})))
    output = tmp_path / "training_data.jsonl"
    report = build_training_corpus(
        sources=SOURCES,
        fetcher=PageFetcher(session=FakeSession(pages)),
        synthesizer=ExampleSynthesizer(client=client),
        output_file=output,
        sleep=sleep,
        **kwargs,
    )
    return client, output, report


@pytest.mark.integration
class TestBuildCorpus:
    def test_three_pages_five_items_five_records(self, tmp_path, no_sleep):
        client, output, report = _build(tmp_path, PAGES, qa_payload(5), no_sleep)

        assert report.pages_scraped == 3
        assert report.examples_written == 5
        lines = output.read_text(encoding="utf-8").splitlines()
        assert len(lines) == 5
        for line in lines:
            roles = [m["role"] for m in json.loads(line)["messages"]]
            assert roles == ["system", "user", "assistant"]

        prompt = client.chat_requests[0]["messages"][1]["content"]
        assert prompt.index("URL: https://acme.test/\n") < prompt.index("URL: https://acme.test/about")
        assert prompt.count("=" * 50) == 2

    def test_second_page_timeout_is_absorbed(self, tmp_path, no_sleep, caplog):
        caplog.set_level(logging.INFO, logger="llm.training.build_corpus")
        pages = dict(PAGES)
        pages["https://acme.test/about"] = requests.Timeout("timed out")

        client, output, report = _build(tmp_path, pages, qa_payload(5), no_sleep)

        assert report.pages_scraped == 2
        assert report.pages_failed == 1
        assert report.examples_written == 5
        prompt = client.chat_requests[0]["messages"][1]["content"]
        assert "Content Type: about" not in prompt
        assert prompt.count("=" * 50) == 1
        assert "Scraped 2 pages (1 failed)" in caplog.text
        assert "https://acme.test/about: " in caplog.text

    def test_all_pages_down_stops_before_generation(self, tmp_path, no_sleep):
        pages = {url: requests.ConnectionError("down") for url in PAGES}

        with pytest.raises(NoContentError):
            _build(tmp_path, pages, qa_payload(5), no_sleep)

        assert not (tmp_path / "training_data.jsonl").exists()

    def test_empty_answers_never_reach_the_corpus(self, tmp_path, no_sleep, caplog):
        caplog.set_level(logging.INFO, logger="llm.training.build_corpus")
        items = qa_payload(11) + [{"question": "Empty?", "answer": ""}]

        _, output, report = _build(tmp_path, PAGES, items, no_sleep)

        assert report.examples_dropped == 1
        assert report.skipped_reasons[0].startswith("item 12")
        assert "generated 11 examples (1 dropped)" in caplog.text
        assert "Empty?" not in output.read_text(encoding="utf-8")
        assert validate_corpus(output) == 11

    def test_extraction_limits_reach_the_prompt(self, tmp_path, no_sleep):
        pages = dict(PAGES)
        pages["https://acme.test/"] = (
            "<html><body><ul>" + "".join(f"<li>Offering number {i}</li>" for i in range(5)) + "</ul></body></html>"
        )

        client, _, _ = _build(
            tmp_path, pages, qa_payload(5), no_sleep, limits={"max_list_items": 2}
        )

        prompt = client.chat_requests[0]["messages"][1]["content"]
        assert "Offering number 1" in prompt
        assert "Offering number 2" not in prompt

    def test_no_usable_items_writes_nothing(self, tmp_path, no_sleep):
        _, output, report = _build(tmp_path, PAGES, [{"question": "", "answer": ""}], no_sleep)

        assert report.is_empty
        assert not output.exists()

    def test_generation_failure_writes_nothing(self, tmp_path, no_sleep):
        client = FakeOpenAI(completion=make_completion("not json"))

        with pytest.raises(GenerationError):
            build_training_corpus(
                sources=SOURCES,
                fetcher=PageFetcher(session=FakeSession(PAGES)),
                synthesizer=ExampleSynthesizer(client=client),
                output_file=tmp_path / "training_data.jsonl",
                sleep=no_sleep,
            )

        assert not (tmp_path / "training_data.jsonl").exists()

    def test_small_corpus_is_rejected_by_validation(self, tmp_path, no_sleep):
        _, output, _ = _build(tmp_path, PAGES, qa_payload(5), no_sleep)

        with pytest.raises(InsufficientDataError):
            validate_corpus(output)


@pytest.mark.integration
class TestEndToEnd:
    def test_corpus_to_fine_tuned_model(self, tmp_path, no_sleep):
        _, output, _ = _build(tmp_path, PAGES, qa_payload(12), no_sleep)
        client = FakeOpenAI(
            job_states=[
                make_job("ftjob-123", "validating_files"),
                make_job("ftjob-123", "queued"),
                make_job("ftjob-123", "running"),
                make_job("ftjob-123", "succeeded", fine_tuned_model="ft:gpt-4.1-nano:acme"),
            ]
        )
        orchestrator = FineTuneOrchestrator(client=client, model="gpt-4.1-nano-2025-04-14", sleep=no_sleep, max_polls=10)
        model_id_file = tmp_path / "fine_tuned_model.txt"

        result = run_fine_tune(orchestrator, output, model_id_file)

        assert result.model_id == "ft:gpt-4.1-nano:acme"
        assert result.valid_examples == 12
        assert model_id_file.read_text(encoding="utf-8").strip() == "ft:gpt-4.1-nano:acme"
        assert client.uploads[0]["content"] == output.read_bytes()
        assert len(load_corpus(output).accepted) == 12


@pytest.mark.integration
class TestCommandLine:
    def test_build_corpus_requires_api_key(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)
        monkeypatch.delenv("SITETUNE_OPENAI_API_KEY", raising=False)

        assert build_corpus.main([]) == 1
        assert not (tmp_path / "training_data.jsonl").exists()

    def test_fine_tune_reports_missing_training_file(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
        client = FakeOpenAI()
        monkeypatch.setattr(fine_tune, "create_client", lambda settings: client)

        assert fine_tune.main(["--training-file", str(tmp_path / "missing.jsonl")]) == 1
        assert client.uploads == []

    def test_fine_tune_success_writes_model_id(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
        corpus = tmp_path / "training_data.jsonl"
        corpus.write_text(
            "\n".join(
                json.dumps({"messages": [{"role": "user", "content": f"q{i}"}, {"role": "assistant", "content": "a"}]})
                for i in range(10)
            ),
            encoding="utf-8",
        )
        client = FakeOpenAI(job_states=[make_job("ftjob-123", "succeeded", fine_tuned_model="ft:cli")])
        monkeypatch.setattr(fine_tune, "create_client", lambda settings: client)

        assert fine_tune.main([]) == 0
        assert (tmp_path / "fine_tuned_model.txt").read_text(encoding="utf-8").strip() == "ft:cli"

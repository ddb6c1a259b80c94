import logging

import pytest

from extractor.app.services import text_extraction
from extractor.app.services.errors import ExtractionError
from extractor.app.services.text_extraction import extract_text
from extractor.tests.fixtures.pdf_factory import blank_pdf, not_a_pdf, text_pdf

pytestmark = pytest.mark.anyio


async def test_each_page_ends_with_newline():
    text = await extract_text(text_pdf("alpha", "beta"))

    assert text.count("\n") == 2
    assert text.endswith("\n")
    assert text.index("alpha") < text.index("beta")


async def test_fragments_are_joined_with_single_space(monkeypatch):
    pages = {1: ["Hello", "World"], 2: ["second", "page", "text"]}

    monkeypatch.setattr(
        text_extraction,
        "_page_fragments",
        lambda reader, page_number: pages[page_number],
    )

    text = await extract_text(text_pdf("ignored", "ignored"))

    assert text == "Hello World\nsecond page text\n"


async def test_pages_are_visited_in_order(monkeypatch):
    visited = []

    def record(reader, page_number):
        visited.append(page_number)
        return [f"p{page_number}"]

    monkeypatch.setattr(text_extraction, "_page_fragments", record)

    text = await extract_text(text_pdf("a", "b", "c", "d"))

    assert visited == [1, 2, 3, 4]
    assert text == "p1\np2\np3\np4\n"


async def test_failing_page_aborts_without_partial_text(monkeypatch):
    def explode_on_second(reader, page_number):
        if page_number == 2:
            raise ValueError("bad content stream")
        return ["fine"]

    monkeypatch.setattr(text_extraction, "_page_fragments", explode_on_second)

    with pytest.raises(ExtractionError) as excinfo:
        await extract_text(text_pdf("one", "two", "three"))

    assert excinfo.value.page_number == 2
    assert excinfo.value.kind == "extraction_error"
    assert "page 2" in str(excinfo.value)


async def test_unparsable_document_is_extraction_error():
    with pytest.raises(ExtractionError):
        await extract_text(not_a_pdf())


async def test_blank_pages_yield_empty_text_and_warning(caplog):
    caplog.set_level(logging.WARNING, logger="extractor.text_extraction")

    text = await extract_text(blank_pdf(page_count=3))

    assert text == ""
    warnings = [r for r in caplog.records if r.getMessage() == "extracted_text_empty"]
    assert len(warnings) == 1
    assert warnings[0].levelno == logging.WARNING


async def test_whitespace_only_fragments_count_as_empty(monkeypatch):
    monkeypatch.setattr(
        text_extraction,
        "_page_fragments",
        lambda reader, page_number: [" "],
    )

    assert await extract_text(text_pdf("x")) == ""

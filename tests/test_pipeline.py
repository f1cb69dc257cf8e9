import asyncio

from fakes import SEARCH_URL, FakeElement, FakePage, abs_url, detail_page, result_item, results_page

from paperscout.core.models import EnumerationStatus, SearchCriteria
from paperscout.diagnostics import (
    ENUMERATION_FAILED,
    ENUMERATION_START,
    PAPER_FAILED,
    PAPER_SUCCEEDED,
    RUN_COMPLETE,
)
from paperscout.extraction.detail import DetailExtractor
from paperscout.pipeline.harvest import HarvestPipeline

IDS = ["2401.00001", "2401.00002", "2401.00003", "2401.00004"]


def _site(fail=(), abstract="An abstract."):
    pages = {SEARCH_URL: results_page(*[result_item(f"Paper {i}", f"/abs/{pid}") for i, pid in enumerate(IDS, 1)])}
    extract_results = {}
    for pid in IDS:
        pages[abs_url(pid)] = detail_page()
        extract_results[(abs_url(pid), "AbstractSchema")] = {"abstract": abstract}
    return FakePage(pages, extract_results=extract_results, fail_urls=[abs_url(pid) for pid in fail])


def _run(page, criteria, diagnostics=None):
    return asyncio.run(HarvestPipeline(diagnostics=diagnostics).run(page, criteria))


def test_all_papers_processed_in_order(criteria, diagnostics):
    page = _site()

    records, summary = _run(page, criteria, diagnostics)

    assert [r.title for r in records] == ["Paper 1", "Paper 2", "Paper 3", "Paper 4"]
    assert page.visited == [abs_url(pid) for pid in IDS]
    assert summary.processed == 4
    assert summary.succeeded == 4
    assert summary.degraded == 0
    assert summary.enumeration_status is EnumerationStatus.OK
    assert summary.elapsed_seconds >= 0
    assert len(diagnostics.of_category(PAPER_SUCCEEDED)) == 4


def test_failed_navigation_does_not_abort_batch(criteria, diagnostics):
    page = _site(fail=[IDS[1]])

    records, summary = _run(page, criteria, diagnostics)

    assert len(records) == 4
    failed = records[1]
    assert failed.title == "Paper 2"
    assert failed.abstract == "Extraction Failed"
    assert failed.submission_date == "Extraction Failed"
    assert failed.identifier == "Extraction Failed"
    assert failed.authors == ()
    assert failed.doi == "Not available"
    assert failed.citation_count == "N/A"
    for record in (records[0], records[2], records[3]):
        assert record.abstract == "An abstract."
        assert record.authors == ("Ada Lovelace", "Alan Turing")
    assert page.visited == [abs_url(pid) for pid in IDS]
    assert summary.failed == 1
    assert summary.succeeded == 3
    assert len(diagnostics.of_category(PAPER_FAILED)) == 1


def test_zero_results_yields_empty_output_and_diagnostic(criteria, diagnostics):
    page = FakePage({SEARCH_URL: FakeElement()})

    records, summary = _run(page, criteria, diagnostics)

    assert records == []
    assert summary.processed == 0
    assert summary.enumeration_status is EnumerationStatus.UNREADABLE
    assert len(diagnostics.of_category(ENUMERATION_FAILED)) == 1
    assert len(diagnostics.of_category(RUN_COMPLETE)) == 1
    assert "Could not read search results" in summary.describe()


def test_long_abstract_truncated(diagnostics):
    criteria = SearchCriteria(topic="t", year="2024", max_results=4, max_abstract_length=300)
    page = _site(abstract="z" * 450)

    records, _ = _run(page, criteria, diagnostics)

    assert all(len(r.abstract) == 303 for r in records)
    assert all(r.abstract.endswith("...") for r in records)


def test_placeholders_are_not_truncated():
    criteria = SearchCriteria(topic="t", year="2024", max_results=4, max_abstract_length=5)
    page = _site(fail=[IDS[0]])

    records, _ = _run(page, criteria)

    assert records[0].abstract == "Extraction Failed"
    assert records[1].abstract == "An ab..."


def test_output_count_respects_cap(diagnostics):
    criteria = SearchCriteria(topic="t", year="2024", max_results=2)
    records, summary = _run(_site(), criteria, diagnostics)
    assert len(records) == 2
    assert summary.found_elements == 4


def test_run_events_bracket_the_run(criteria, diagnostics):
    _run(_site(), criteria, diagnostics)
    categories = [e.category for e in diagnostics.events]
    assert categories[0] == ENUMERATION_START
    assert categories[-1] == RUN_COMPLETE


def test_summary_describe_counts(criteria):
    _, summary = _run(_site(fail=[IDS[3]]), criteria)
    assert summary.describe().startswith("Processed 4 papers")
    assert "3 complete, 0 partial, 1 failed" in summary.describe()
    assert summary.success_rate == 75.0


class DeadlinePage(FakePage):
    """Navigation to the listed URLs exceeds its deadline."""

    def __init__(self, *args, slow_urls=(), **kwargs):
        super().__init__(*args, **kwargs)
        self.slow_urls = set(slow_urls)

    async def goto(self, url):
        if url in self.slow_urls:
            self.visited.append(url)
            raise asyncio.TimeoutError()
        await super().goto(url)


def test_navigation_deadline_degrades_one_paper_only(criteria, diagnostics):
    site = _site()
    page = DeadlinePage(site.pages, extract_results=site.extract_results, slow_urls=[abs_url(IDS[1])])

    records, summary = _run(page, criteria, diagnostics)

    assert [r.title for r in records] == ["Paper 1", "Paper 2", "Paper 3", "Paper 4"]
    assert records[1].abstract == "Extraction Failed"
    assert records[2].abstract == "An abstract."
    assert summary.failed == 1
    assert summary.succeeded == 3


def test_unexpected_extractor_error_is_contained(criteria, diagnostics):
    class ExplodingExtractor:
        def __init__(self):
            self.calls = 0

        async def extract(self, page, reference):
            self.calls += 1
            if self.calls == 2:
                raise RuntimeError("renderer crashed")
            return await DetailExtractor().extract(page, reference)

    pipeline = HarvestPipeline(diagnostics=diagnostics, extractor=ExplodingExtractor())

    records, summary = asyncio.run(pipeline.run(_site(), criteria))

    assert len(records) == 4
    assert records[1].identifier == "Extraction Failed"
    assert records[3].abstract == "An abstract."
    assert summary.failed == 1
    failures = diagnostics.of_category(PAPER_FAILED)
    assert [e.payload["error"] for e in failures] == ["renderer crashed"]

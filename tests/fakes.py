"""In-memory stand-ins for the page automation protocol."""

from paperscout.core.exceptions import ExtractionError, PageProcessingError
from paperscout.extraction import selectors

SEARCH_URL = "https://arxiv.org/search/advanced?terms-0-term=llm"


class FakeElement:
    """Element whose lookups are answered from a selector -> children map."""

    def __init__(self, text=None, attrs=None, children=None, errors=None):
        self._text = text
        self._attrs = attrs or {}
        self.children = children or {}
        self.errors = errors or {}
        self.queries: list[str] = []

    async def query_all(self, selector):
        self.queries.append(selector)
        if selector in self.errors:
            raise self.errors[selector]
        return list(self.children.get(selector, []))

    async def text(self):
        return self._text

    async def get_attribute(self, name):
        return self._attrs.get(name)


class FakePage:
    """Page that serves FakeElement trees by URL."""

    def __init__(self, pages, url=SEARCH_URL, extract_results=None, fail_urls=()):
        self.pages = pages
        self._url = url
        self.extract_results = extract_results or {}
        self.fail_urls = set(fail_urls)
        self.visited: list[str] = []
        self.extract_calls: list[tuple[str, str]] = []
        self.screenshots: list[str] = []

    @property
    def url(self):
        return self._url

    @property
    def current(self):
        return self.pages[self._url]

    async def goto(self, url):
        self.visited.append(url)
        if url in self.fail_urls or url not in self.pages:
            raise PageProcessingError(url, f"Navigation to {url} failed")
        self._url = url

    async def wait_until_ready(self):
        return None

    async def query_all(self, selector):
        return await self.current.query_all(selector)

    async def text(self):
        return None

    async def get_attribute(self, name):
        return None

    async def content(self):
        return "<html><body></body></html>"

    async def extract(self, instruction, schema):
        self.extract_calls.append((self._url, schema.__name__))
        value = self.extract_results.get((self._url, schema.__name__))
        if isinstance(value, Exception):
            raise value
        if value is None:
            raise ExtractionError("nothing to extract")
        return schema.model_validate(value)

    async def capture_screenshot(self, path):
        self.screenshots.append(path)
        return path


def result_item(title, href, title_selector=selectors.TITLE[0], link_selector=selectors.DETAIL_LINK[0]):
    """One search result entry."""
    children = {}
    if title is not None:
        children[title_selector] = [FakeElement(text=f"\n  Title: {title}\n")]
    if href is not None:
        anchor = FakeElement(attrs={"href": href})
        if link_selector:
            children[link_selector] = [anchor]
        children["a"] = [FakeElement(attrs={"href": "https://arxiv.org/pdf/x"}), anchor]
    return FakeElement(children=children)


def results_page(*items, selector=selectors.RESULT_ITEM[0]):
    return FakeElement(children={selector: list(items)})


def detail_page(
    authors="Authors: Ada Lovelace, Alan Turing",
    date="[Submitted on 12 Jan 2024 (v1)]",
    doi="https://doi.org/10.1000/xyz",
    abstract_block=None,
):
    """A paper detail page with the usual fields."""
    children = {}
    if authors is not None:
        children[selectors.AUTHORS[0]] = [FakeElement(text=authors)]
    if date is not None:
        children[selectors.SUBMISSION_DATE[0]] = [FakeElement(text=f"\n {date}\n")]
    if doi is not None:
        children[selectors.DOI_LINK[1]] = [FakeElement(attrs={"href": doi})]
    if abstract_block is not None:
        children[selectors.ABSTRACT[0]] = [FakeElement(text=abstract_block)]
    return FakeElement(children=children)


def abs_url(arxiv_id):
    return f"https://arxiv.org/abs/{arxiv_id}"

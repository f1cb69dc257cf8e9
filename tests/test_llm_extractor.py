import pytest

from paperscout.core.exceptions import ExtractionError, LLMError
from paperscout.core.models import AbstractSchema, AuthorsSchema
from paperscout.core.protocols import LLMResponse
from paperscout.infrastructure.llm_extractor import LLMFieldExtractor
from paperscout.llm.base import BaseLLMProvider

HTML = """
<html><head><script>var x = 1;</script><style>p {}</style></head>
<body><nav>Menu</nav><blockquote class="abstract">Abstract: We study things.</blockquote></body></html>
"""


class ScriptedLLM(BaseLLMProvider):
    def __init__(self, reply=None, error=None):
        self.reply = reply
        self.error = error
        self.prompts = []

    @property
    def name(self):
        return "scripted"

    def complete(self, prompt, *, system=None, model=None, max_tokens=1024, temperature=0.1):
        self.prompts.append(prompt)
        if self.error:
            raise self.error
        return LLMResponse(content=self.reply, model="test", tokens_used=10)


def test_extracts_schema_instance():
    llm = ScriptedLLM('{"abstract": "We study things."}')
    result = LLMFieldExtractor(llm).extract(HTML, "Extract only the abstract text", AbstractSchema)
    assert result == AbstractSchema(abstract="We study things.")


def test_prompt_carries_instruction_schema_and_cleaned_text():
    llm = ScriptedLLM('{"abstract": "x"}')
    LLMFieldExtractor(llm).extract(HTML, "Extract only the abstract text", AbstractSchema, url="https://arxiv.org/abs/1")

    prompt = llm.prompts[0]
    assert prompt.startswith("Extract only the abstract text from")
    assert '"abstract"' in prompt
    assert "https://arxiv.org/abs/1" in prompt
    assert "We study things." in prompt
    assert "var x" not in prompt
    assert "Menu" not in prompt


def test_page_text_truncated():
    llm = ScriptedLLM('{"abstract": "x"}')
    LLMFieldExtractor(llm, max_html_chars=20).extract("<p>" + "w" * 100 + "</p>", "Extract", AbstractSchema)
    assert "w" * 20 in llm.prompts[0]
    assert "w" * 21 not in llm.prompts[0]


def test_fenced_and_wrapped_json_accepted():
    llm = ScriptedLLM('```json\nHere you go: {"authors": ["Ada", "Alan"]}\n```')
    result = LLMFieldExtractor(llm).extract(HTML, "Extract only the list of authors", AuthorsSchema)
    assert result.authors == ["Ada", "Alan"]


@pytest.mark.parametrize("reply", ["NOT_FOUND", "", "no json here", '{"abstract": 42, "x": }', '{"summary": "x"}'])
def test_unusable_replies_raise_extraction_error(reply):
    with pytest.raises(ExtractionError):
        LLMFieldExtractor(ScriptedLLM(reply)).extract(HTML, "Extract", AbstractSchema)


def test_provider_failure_becomes_extraction_error():
    llm = ScriptedLLM(error=LLMError("rate limited"))
    with pytest.raises(ExtractionError, match="rate limited"):
        LLMFieldExtractor(llm).extract(HTML, "Extract", AbstractSchema)


def test_empty_page_rejected_without_calling_llm():
    llm = ScriptedLLM('{"abstract": "x"}')
    with pytest.raises(ExtractionError):
        LLMFieldExtractor(llm).extract("", "Extract", AbstractSchema)
    assert llm.prompts == []

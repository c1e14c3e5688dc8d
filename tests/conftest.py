import json
from types import SimpleNamespace
from typing import Optional

import pytest

from creator_studio.client import GeminiClient, InferenceResponse
from creator_studio.models import GroundingCitation
from creator_studio.storage import Storage
from creator_studio.studio import CreatorStudio


class StubClient:
    """Answers every request with canned text, or fails"""

    def __init__(
        self,
        text: str = "",
        citations: Optional[list[GroundingCitation]] = None,
        error: Optional[Exception] = None,
    ):
        self.text = text
        self.citations = citations or []
        self.error = error
        self.requests = []

    async def generate(self, request):
        self.requests.append(request)
        if self.error:
            raise self.error
        return InferenceResponse(text=self.text, citations=self.citations)


class FakeModels:
    """Stands in for genai.Client().aio.models"""

    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    async def generate_content(self, model, contents, config=None):
        self.calls.append({"model": model, "contents": contents, "config": config})
        if self.error:
            raise self.error
        return self.response


def fake_sdk(response=None, error=None) -> SimpleNamespace:
    return SimpleNamespace(aio=SimpleNamespace(models=FakeModels(response, error)))


def sdk_response(text: Optional[str], web_sources: Optional[list[tuple]] = None) -> SimpleNamespace:
    chunks = [
        SimpleNamespace(web=SimpleNamespace(uri=uri, title=title))
        for uri, title in (web_sources or [])
    ]
    candidate = SimpleNamespace(grounding_metadata=SimpleNamespace(grounding_chunks=chunks))
    return SimpleNamespace(text=text, candidates=[candidate])


def fenced(value) -> str:
    return f"```json\n{json.dumps(value)}\n```"


@pytest.fixture
def stub_client():
    return StubClient()


@pytest.fixture
def studio_for():
    """Build a studio whose model answers with the given text"""

    def _build(text: str = "", **kwargs) -> CreatorStudio:
        return CreatorStudio(StubClient(text=text, **kwargs))

    return _build


@pytest.fixture
def gemini_for():
    """Build a GeminiClient around a fake SDK"""

    def _build(response=None, error=None, **kwargs) -> GeminiClient:
        return GeminiClient(client=fake_sdk(response, error), **kwargs)

    return _build


@pytest.fixture
async def storage(tmp_path):
    async with Storage(tmp_path / "studio.db") as store:
        yield store

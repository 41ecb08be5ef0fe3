from types import SimpleNamespace

import pytest


class FakeModels:
    def __init__(self, text=None, error=None):
        self.text = text
        self.error = error
        self.calls = []

    async def generate_content(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return SimpleNamespace(text=self.text)


class FakeClient:
    """Stands in for ``google.genai.Client``; only ``aio.models`` is used."""

    def __init__(self, text=None, error=None):
        self.models = FakeModels(text=text, error=error)
        self.aio = SimpleNamespace(models=self.models)


@pytest.fixture
def fake_client_factory():
    return FakeClient

import pytest
from httpx import ASGITransport, AsyncClient

from tripimport.api.http_api import app, get_api_key, get_provider_post
from tests.fakes import SAMPLE_ITEM, FakeProvider, items_envelope


@pytest.fixture
def provider():
    """Provider answering with a single activity item."""
    return FakeProvider(text=items_envelope([SAMPLE_ITEM]))


@pytest.fixture
async def api_client(provider):
    """Async client for the API with the credential and provider injected."""
    app.dependency_overrides[get_api_key] = lambda: "test-key"
    app.dependency_overrides[get_provider_post] = lambda: provider
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()

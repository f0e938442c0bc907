import pytest

ENV_VARS = (
    "BLOB_READ_WRITE_TOKEN",
    "VERCEL_BLOB_API_URL",
    "NEXT_PUBLIC_VERCEL_BLOB_API_URL",
    "VERCEL_BLOB_API_VERSION_OVERRIDE",
    "NEXT_PUBLIC_VERCEL_BLOB_API_VERSION_OVERRIDE",
    "VERCEL_BLOB_TIMEOUT_SECONDS",
)


@pytest.fixture(autouse=True)
def clean_blob_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def fake_http(monkeypatch):
    """Replace the HTTP transport with queued responses; returns the call log."""
    calls = []
    responses = []

    async def fake_send(method, url, *, timeout=30.0, **kwargs):
        calls.append({"method": method, "url": url, **kwargs})
        response = responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    monkeypatch.setattr("vercel_blob.api.send_request", fake_send)
    return calls, responses


@pytest.fixture
def browser(monkeypatch):
    monkeypatch.setattr("vercel_blob.runtime.is_browser", lambda: True)
    monkeypatch.setattr("vercel_blob.runtime.page_url", lambda: "https://app.example.com/uploads/new")

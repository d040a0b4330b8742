import httpx
import pytest

from iqdb.client import (
    DEFAULT_BASE_URL,
    AsyncIqdbClient,
    IqdbClient,
    build_search_form,
)
from iqdb.config.schema import Config
from iqdb.errors import StructureError, TransportError
from iqdb.models import Match, MatchType, Service

SERVICE_PAGE = """<!DOCTYPE html>
<html><body>
<form action="/" method="post" enctype="multipart/form-data">
<table>
<tr><th><label><input type="checkbox" name="service[]" value="0"> <a href="//a.test/">Service A</a></label></th></tr>
<tr><th><label><input type="checkbox" name="service[]" value="1"> <a href="https://b.test/">Service B</a></label></th></tr>
</table>
</form>
</body></html>
"""

RESULTS_PAGE = """<!DOCTYPE html>
<html><body>
<div id="pages">
<div><table><tr><th>Your image</th></tr><tr><td><img src="/thu/u.jpg"></td></tr></table></div>
<div><table>
<tr><th>Best match</th></tr>
<tr><td class="image"><a href="//img.test/1.jpg"><img src="/thu/1.jpg"></a></td></tr>
<tr><td>Service A</td></tr>
<tr><td>95% similarity</td></tr>
</table></div>
<div><table><tr><th>No relevant matches</th></tr></table></div>
</div>
</body></html>
"""

SERVICES = [
    Service(value=0, name="Service A", url="http://a.test/"),
    Service(value=1, name="Service B", url="https://b.test/"),
]


class FakeResponse:
    def __init__(self, text: str, error: Exception | None = None):
        self.text = text
        self._error = error

    def raise_for_status(self) -> None:
        if self._error:
            raise self._error


def _config(base_url: str = "https://iqdb.example") -> Config:
    cfg = Config(base_url=base_url)
    cfg.http.timeout = 3.0
    cfg.http.user_agent = "test-agent"
    return cfg


def test_build_search_form_orders_url_then_services() -> None:
    form = build_search_form("https://x.test/cat.jpg", list(reversed(SERVICES)))

    assert list(form) == ["url", "service[]"]
    assert form["url"] == "https://x.test/cat.jpg"
    assert form["service[]"] == ["1", "0"]


def test_build_search_form_rejects_empty_image_url() -> None:
    with pytest.raises(ValueError):
        build_search_form("", SERVICES)


def test_discover_services(monkeypatch) -> None:
    calls: dict = {}

    class StubClient:
        def __init__(self, **kwargs):
            calls["options"] = kwargs

        def __enter__(self):
            return self

        def __exit__(self, exc_type, exc, tb):
            return False

        def get(self, url):
            calls["url"] = url
            return FakeResponse(SERVICE_PAGE)

    monkeypatch.setattr("iqdb.client.httpx.Client", StubClient)

    services = IqdbClient(_config()).discover_services()

    assert services == SERVICES
    assert calls["url"] == "https://iqdb.example"
    assert calls["options"]["timeout"] == 3.0
    assert calls["options"]["headers"]["User-Agent"] == "test-agent"


def test_search_posts_form_and_parses_matches(monkeypatch) -> None:
    calls: dict = {}

    class StubClient:
        def __init__(self, **kwargs):
            pass

        def __enter__(self):
            return self

        def __exit__(self, exc_type, exc, tb):
            return False

        def post(self, url, data=None):
            calls["url"] = url
            calls["data"] = data
            return FakeResponse(RESULTS_PAGE)

    monkeypatch.setattr("iqdb.client.httpx.Client", StubClient)

    matches = IqdbClient(_config()).search("https://x.test/cat.jpg", SERVICES)

    assert matches == [Match(kind=MatchType.BEST, url="http://img.test/1.jpg", similarity=95)]
    assert calls["url"] == "https://iqdb.example"
    assert calls["data"] == {"url": "https://x.test/cat.jpg", "service[]": ["0", "1"]}


def test_search_without_pages_div_raises_structure_error(monkeypatch) -> None:
    class StubClient:
        def __init__(self, **kwargs):
            pass

        def __enter__(self):
            return self

        def __exit__(self, exc_type, exc, tb):
            return False

        def post(self, url, data=None):
            return FakeResponse("<html><body><p>Can't read query result!</p></body></html>")

    monkeypatch.setattr("iqdb.client.httpx.Client", StubClient)

    with pytest.raises(StructureError):
        IqdbClient(_config()).search("https://x.test/cat.jpg", SERVICES)


def test_http_error_is_wrapped_as_transport_error(monkeypatch) -> None:
    class StubClient:
        def __init__(self, **kwargs):
            pass

        def __enter__(self):
            return self

        def __exit__(self, exc_type, exc, tb):
            return False

        def get(self, url):
            return FakeResponse("", error=httpx.HTTPError("boom"))

    monkeypatch.setattr("iqdb.client.httpx.Client", StubClient)

    with pytest.raises(TransportError) as excinfo:
        IqdbClient(_config()).discover_services()

    assert "boom" in str(excinfo.value)
    assert isinstance(excinfo.value.__cause__, httpx.HTTPError)


def test_connection_error_is_wrapped_as_transport_error(monkeypatch) -> None:
    class StubClient:
        def __init__(self, **kwargs):
            pass

        def __enter__(self):
            return self

        def __exit__(self, exc_type, exc, tb):
            return False

        def post(self, url, data=None):
            raise httpx.ConnectError("connection refused")

    monkeypatch.setattr("iqdb.client.httpx.Client", StubClient)

    with pytest.raises(TransportError):
        IqdbClient(_config()).search("https://x.test/cat.jpg", SERVICES)


def test_base_url_falls_back_to_env_then_default(monkeypatch) -> None:
    client = IqdbClient(Config())

    monkeypatch.delenv("IQDB_BASE_URL", raising=False)
    assert client.base_url == DEFAULT_BASE_URL

    monkeypatch.setenv("IQDB_BASE_URL", "https://mirror.example")
    assert client.base_url == "https://mirror.example"

    assert IqdbClient(_config("https://configured.example")).base_url == "https://configured.example"


@pytest.mark.asyncio
async def test_async_client_discovers_and_searches(monkeypatch) -> None:
    calls: dict = {}

    class StubAsyncClient:
        def __init__(self, **kwargs):
            pass

        async def __aenter__(self):
            return self

        async def __aexit__(self, exc_type, exc, tb):
            return False

        async def get(self, url):
            calls["get"] = url
            return FakeResponse(SERVICE_PAGE)

        async def post(self, url, data=None):
            calls["post"] = data
            return FakeResponse(RESULTS_PAGE)

    monkeypatch.setattr("iqdb.client.httpx.AsyncClient", StubAsyncClient)

    client = AsyncIqdbClient(_config())
    services = await client.discover_services()
    matches = await client.search("https://x.test/cat.jpg", services)

    assert services == SERVICES
    assert matches == [Match(MatchType.BEST, "http://img.test/1.jpg", 95)]
    assert calls["get"] == "https://iqdb.example"
    assert calls["post"]["service[]"] == ["0", "1"]


@pytest.mark.asyncio
async def test_async_client_wraps_http_errors(monkeypatch) -> None:
    class StubAsyncClient:
        def __init__(self, **kwargs):
            pass

        async def __aenter__(self):
            return self

        async def __aexit__(self, exc_type, exc, tb):
            return False

        async def get(self, url):
            return FakeResponse("", error=httpx.HTTPError("bad gateway"))

    monkeypatch.setattr("iqdb.client.httpx.AsyncClient", StubAsyncClient)

    with pytest.raises(TransportError):
        await AsyncIqdbClient(_config()).discover_services()


def test_invalid_base_url_is_wrapped_as_transport_error(monkeypatch) -> None:
    class StubClient:
        def __init__(self, **kwargs):
            pass

        def __enter__(self):
            return self

        def __exit__(self, exc_type, exc, tb):
            return False

        def get(self, url):
            raise httpx.InvalidURL(f"Invalid URL {url!r}")

    monkeypatch.setattr("iqdb.client.httpx.Client", StubClient)

    with pytest.raises(TransportError) as excinfo:
        IqdbClient(_config("http://[bad")).discover_services()

    assert isinstance(excinfo.value.__cause__, httpx.InvalidURL)


@pytest.mark.asyncio
async def test_async_client_wraps_invalid_url(monkeypatch) -> None:
    class StubAsyncClient:
        def __init__(self, **kwargs):
            pass

        async def __aenter__(self):
            return self

        async def __aexit__(self, exc_type, exc, tb):
            return False

        async def post(self, url, data=None):
            raise httpx.InvalidURL(f"Invalid URL {url!r}")

    monkeypatch.setattr("iqdb.client.httpx.AsyncClient", StubAsyncClient)

    with pytest.raises(TransportError):
        await AsyncIqdbClient(_config("http://[bad")).search("https://x.test/cat.jpg", SERVICES)

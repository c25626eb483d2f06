"""Catalog source and payload decoding tests.

HTTP behaviour is exercised against ``httpx.MockTransport`` so no network
access is needed.
"""

import json

import httpx
import pytest

from clinref_catalog.errors import (
    CatalogFormatError,
    SourceUnavailableError,
    TransientSourceError,
)
from clinref_catalog.loader import CodeCatalogLoader
from clinref_catalog.sources import FileSource, HttpSource, decode_payload, source_from_uri

from helpers.catalogs import FAST_SETTINGS, code_payload

CATALOG_URL = "https://reference.example.org/catalogs/icd10.json"


def _client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


# =====================================================================
# HttpSource
# =====================================================================


class TestHttpSource:

    @pytest.mark.asyncio
    async def test_fetch_returns_body(self):
        body = json.dumps(code_payload()).encode()
        source = HttpSource(CATALOG_URL, client=_client(lambda request: httpx.Response(200, content=body)))

        assert await source.fetch() == body
        assert source.format == "json"
        assert source.describe() == CATALOG_URL

    def test_format_from_url_suffix(self):
        assert HttpSource("https://example.org/drugs.yaml").format == "yaml"
        assert HttpSource("https://example.org/catalog?v=2").format is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [500, 502, 503, 429])
    async def test_server_errors_are_transient(self, status):
        source = HttpSource(CATALOG_URL, client=_client(lambda request: httpx.Response(status)))
        with pytest.raises(TransientSourceError):
            await source.fetch()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [401, 403, 404])
    async def test_client_errors_are_permanent(self, status):
        source = HttpSource(CATALOG_URL, client=_client(lambda request: httpx.Response(status)))
        with pytest.raises(SourceUnavailableError) as exc_info:
            await source.fetch()
        assert not isinstance(exc_info.value, TransientSourceError)

    @pytest.mark.asyncio
    async def test_connection_errors_are_transient(self):
        def refuse(request):
            raise httpx.ConnectError("connection refused", request=request)

        source = HttpSource(CATALOG_URL, client=_client(refuse))
        with pytest.raises(TransientSourceError):
            await source.fetch()

    @pytest.mark.asyncio
    async def test_loader_retries_through_http_errors(self):
        """Two 503s followed by a 200 still produce a primary load."""
        responses = [
            httpx.Response(503),
            httpx.Response(503),
            httpx.Response(200, json=code_payload()),
        ]
        requests = []

        def handler(request):
            requests.append(request)
            return responses.pop(0)

        loader = CodeCatalogLoader(HttpSource(CATALOG_URL, client=_client(handler)), FAST_SETTINGS)
        catalog = await loader.load()

        assert len(requests) == 3
        assert not loader.status().using_fallback
        assert loader.status().source == CATALOG_URL
        assert catalog.get("J06.9") is not None

    @pytest.mark.asyncio
    async def test_redirect_is_followed_to_new_location(self):
        """A catalog moved behind a 301 loads from its new URL."""
        moved = "https://reference.example.org/catalogs/new.json"
        requests = []

        def handler(request):
            requests.append(str(request.url))
            if str(request.url) == CATALOG_URL:
                return httpx.Response(301, headers={"Location": moved})
            return httpx.Response(200, json=code_payload())

        loader = CodeCatalogLoader(HttpSource(CATALOG_URL, client=_client(handler)), FAST_SETTINGS)
        catalog = await loader.load()

        assert requests == [CATALOG_URL, moved]
        assert not loader.status().using_fallback
        assert loader.status().errors == []
        assert catalog.get("J06.9") is not None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("response", [
        httpx.Response(302),
        httpx.Response(304),
        httpx.Response(300, headers={"Location": "/elsewhere.json"}),
    ])
    async def test_unresolved_redirect_is_permanent(self, response):
        """A 3xx that cannot be followed never reaches the decoder."""
        source = HttpSource(CATALOG_URL, client=_client(lambda request: response))
        with pytest.raises(SourceUnavailableError) as exc_info:
            await source.fetch()
        assert not isinstance(exc_info.value, TransientSourceError)

    @pytest.mark.asyncio
    async def test_redirect_loop_is_permanent(self):
        source = HttpSource(
            CATALOG_URL,
            client=_client(lambda request: httpx.Response(302, headers={"Location": CATALOG_URL})),
        )
        with pytest.raises(SourceUnavailableError) as exc_info:
            await source.fetch()
        assert not isinstance(exc_info.value, TransientSourceError)


# =====================================================================
# FileSource and source_from_uri
# =====================================================================


class TestFileSource:

    @pytest.mark.asyncio
    async def test_reads_file(self, tmp_path):
        path = tmp_path / "codes.json"
        path.write_text('{"codes": []}', encoding="utf-8")

        source = FileSource(path)
        assert await source.fetch() == b'{"codes": []}'
        assert source.format == "json"
        assert source.describe() == str(path)

    @pytest.mark.asyncio
    async def test_missing_file_is_permanent(self, tmp_path):
        source = FileSource(tmp_path / "missing.yaml")
        assert source.format == "yaml"
        with pytest.raises(SourceUnavailableError) as exc_info:
            await source.fetch()
        assert not isinstance(exc_info.value, TransientSourceError)

    def test_source_from_uri(self, tmp_path):
        assert isinstance(source_from_uri("https://example.org/codes.json"), HttpSource)
        assert isinstance(source_from_uri("http://localhost:9000/drugs.yaml"), HttpSource)

        local = source_from_uri(tmp_path / "codes.json")
        assert isinstance(local, FileSource)
        assert local.path == tmp_path / "codes.json"

        prefixed = source_from_uri(f"file://{tmp_path}/drugs.yml")
        assert isinstance(prefixed, FileSource)
        assert prefixed.format == "yaml"


# =====================================================================
# decode_payload
# =====================================================================


def test_decode_json():
    assert decode_payload(b'{"codes": [1, 2]}', "json") == {"codes": [1, 2]}


def test_decode_sniffs_yaml_when_format_unknown():
    assert decode_payload(b"version: '1'\ndrugs: []\n") == {"version": "1", "drugs": []}


def test_decode_strips_utf8_bom():
    assert decode_payload('\ufeff{"a": 1}'.encode("utf-8"), "json") == {"a": 1}


@pytest.mark.parametrize("raw, fmt", [
    (b"\xff\xfe\x00garbage", None),
    (b"{not json", "json"),
    (b"key: [unclosed", "yaml"),
])
def test_decode_errors_raise_format_error(raw, fmt):
    with pytest.raises(CatalogFormatError):
        decode_payload(raw, fmt)

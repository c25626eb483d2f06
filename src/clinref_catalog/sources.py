"""Byte sources for serialized catalogs, plus payload decoding.

A source only knows how to produce bytes.  It classifies its failures so
the loader can decide whether to retry:

    TransientSourceError    — network errors, timeouts, HTTP 5xx / 429
    SourceUnavailableError  — missing file, unresolved redirect, other HTTP 4xx

Decoding (JSON or YAML) is separate so every source shares it.
"""

from __future__ import annotations

import asyncio
import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

import httpx
import yaml

from clinref_catalog.errors import (
    CatalogFormatError,
    SourceUnavailableError,
    TransientSourceError,
)

_YAML_SUFFIXES = {".yaml", ".yml"}


class CatalogSource(ABC):
    """Anything that can yield the serialized bytes of a catalog."""

    #: "json" or "yaml"; ``None`` lets :func:`decode_payload` sniff the bytes
    format: str | None = None

    @abstractmethod
    async def fetch(self) -> bytes:
        """Return the raw payload or raise a ``SourceUnavailableError``."""
        ...

    @abstractmethod
    def describe(self) -> str:
        """Human-readable location used in logs and status reports."""
        ...


class FileSource(CatalogSource):
    """Reads a catalog file from the local filesystem."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self.format = _format_from_suffix(self.path.suffix)

    async def fetch(self) -> bytes:
        try:
            return await asyncio.to_thread(self.path.read_bytes)
        except FileNotFoundError as exc:
            raise SourceUnavailableError(f"Missing catalog file: {self.path}") from exc
        except OSError as exc:
            raise TransientSourceError(f"Cannot read {self.path}: {exc}") from exc

    def describe(self) -> str:
        return str(self.path)


class HttpSource(CatalogSource):
    """Fetches a catalog over HTTP(S) with httpx.

    Redirects are followed.  A shared ``client`` may be injected (tests pass
    one built on ``httpx.MockTransport``); otherwise a short-lived client is
    opened per fetch.
    """

    def __init__(
        self,
        url: str,
        *,
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.url = url
        self._timeout = timeout
        self._client = client
        self.format = _format_from_suffix(Path(httpx.URL(url).path).suffix)

    async def fetch(self) -> bytes:
        try:
            if self._client is not None:
                resp = await self._client.get(self.url, follow_redirects=True)
            else:
                async with httpx.AsyncClient(timeout=self._timeout, follow_redirects=True) as client:
                    resp = await client.get(self.url)
        except httpx.TooManyRedirects as exc:
            raise SourceUnavailableError(f"GET {self.url} failed: {exc!r}") from exc
        except (httpx.TimeoutException, httpx.TransportError) as exc:
            raise TransientSourceError(f"GET {self.url} failed: {exc!r}") from exc

        status = resp.status_code
        if status == 429 or status >= 500:
            raise TransientSourceError(f"GET {self.url} returned {status}")
        if status >= 300:
            # a redirect left unresolved has no catalog body
            raise SourceUnavailableError(f"GET {self.url} returned {status}")
        return resp.content

    def describe(self) -> str:
        return self.url


class StaticSource(CatalogSource):
    """Serves a payload already held in memory."""

    def __init__(self, payload: bytes | str, *, format: str | None = None, label: str = "<static>") -> None:
        self._payload = payload.encode("utf-8") if isinstance(payload, str) else payload
        self.format = format
        self._label = label

    async def fetch(self) -> bytes:
        return self._payload

    def describe(self) -> str:
        return self._label


def source_from_uri(uri: str | Path, *, timeout: float = 10.0) -> CatalogSource:
    """Pick an ``HttpSource`` for http(s) URLs, a ``FileSource`` otherwise."""
    text = str(uri)
    if text.startswith(("http://", "https://")):
        return HttpSource(text, timeout=timeout)
    if text.startswith("file://"):
        text = text[len("file://"):]
    return FileSource(text)


def decode_payload(raw: bytes, format: str | None = None) -> Any:
    """Decode a JSON or YAML payload.

    With no explicit format, JSON is tried first and YAML second.
    """
    try:
        text = raw.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise CatalogFormatError(f"payload is not UTF-8: {exc}") from exc

    if format == "yaml":
        return _load_yaml(text)
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        if format == "json":
            raise CatalogFormatError(f"invalid JSON payload: {exc}") from exc
    return _load_yaml(text)


def _load_yaml(text: str) -> Any:
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise CatalogFormatError(f"invalid YAML payload: {exc}") from exc


def _format_from_suffix(suffix: str) -> str | None:
    suffix = suffix.lower()
    if suffix in _YAML_SUFFIXES:
        return "yaml"
    if suffix == ".json":
        return "json"
    return None

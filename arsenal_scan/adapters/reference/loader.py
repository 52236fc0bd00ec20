"""
Arsenal (reference grid) image loader.

Read once at startup from a local path or an http(s) URL, base64-encoded and
cached for every later analysis. A failure is reported once and not retried;
the server has to be restarted once the asset is reachable.
"""
import base64
from pathlib import Path

import httpx

from arsenal_scan.orchestrator.contracts import EncodedImage
from arsenal_scan.orchestrator.errors import AssetLoadFailure
from arsenal_scan.orchestrator.grid import REFERENCE_MIME


class ReferenceLoader:
    def __init__(self, status_store, source: str, client: httpx.Client | None = None, timeout: float = 30.0):
        self.status = status_store
        self.source = source
        self.timeout = timeout
        self._client = client
        self._image: EncodedImage | None = None

    @property
    def ready(self) -> bool:
        return self._image is not None

    @property
    def image(self) -> EncodedImage | None:
        return self._image

    def load(self) -> EncodedImage:
        if self._image is not None:
            return self._image

        self.status.log(f"reference: loading {self.source}")
        data = self._read()
        if not data:
            raise AssetLoadFailure(f"reference image is empty: {self.source}")

        b64 = base64.standard_b64encode(data).decode("ascii")
        self._image = EncodedImage(
            base64=b64,
            mime_type=REFERENCE_MIME,
            data_url=f"data:{REFERENCE_MIME};base64,{b64}",
        )
        self.status.log(f"reference: ready ({len(data)} bytes)")
        return self._image

    def _read(self) -> bytes:
        if self.source.startswith(("http://", "https://")):
            return self._fetch()
        path = Path(self.source)
        try:
            return path.read_bytes()
        except OSError as e:
            raise AssetLoadFailure(f"cannot read reference image {path}: {e}") from e

    def _fetch(self) -> bytes:
        try:
            if self._client is not None:
                resp = self._client.get(self.source, timeout=self.timeout)
            else:
                resp = httpx.get(self.source, timeout=self.timeout, follow_redirects=True)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise AssetLoadFailure(f"cannot fetch reference image {self.source}: {e}") from e
        if not resp.is_success:
            raise AssetLoadFailure(f"reference image HTTP {resp.status_code}: {resp.reason_phrase}")
        return resp.content

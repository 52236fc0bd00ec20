"""
User screenshot -> base64 payload + data-URL preview.

The browser already does this with FileReader for picker / drag-drop / paste
(see web/static/app.js) and posts the result; this module handles the
server-side half: multipart uploads and data URLs coming from the page.
"""
import base64

from arsenal_scan.orchestrator.contracts import EncodedImage


def encode_image(data: bytes | None, content_type: str | None) -> EncodedImage | None:
    """Returns None for empty input or a non-image content type."""
    if not data:
        return None
    mime = (content_type or "").split(";")[0].strip().lower()
    if not mime.startswith("image/"):
        return None
    b64 = base64.standard_b64encode(data).decode("ascii")
    return EncodedImage(base64=b64, mime_type=mime, data_url=f"data:{mime};base64,{b64}")


def from_base64(payload: str | None) -> str | None:
    """Accept a bare base64 string or a FileReader data URL; return the bare payload."""
    if payload is None:
        return None
    payload = payload.strip()
    if payload.startswith("data:"):
        _, _, payload = payload.partition(",")
    return payload or None

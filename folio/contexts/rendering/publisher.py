"""
Preview publishing.

Holds generated documents as in-memory text/html objects and hands out
blob-style URLs for preview panes, iframes, and downloads. Handles live until
their owner revokes them; nothing is released implicitly.
"""

import os
import uuid
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterator, List, Optional

from dotenv import load_dotenv

from folio.contexts.rendering.defaults import HTML_MIME_TYPE
from folio.contexts.rendering.exceptions import PreviewNotFoundError

load_dotenv()
PREVIEW_ORIGIN = os.getenv("PREVIEW_ORIGIN", "folio")

BLOB_SCHEME = "blob:"


@dataclass(frozen=True)
class PreviewBlob:
    """
    In-memory binary object behind a preview handle.

    Attributes:
        content: Encoded document bytes (UTF-8)
        mime_type: Content type served for the handle
    """

    content: bytes
    mime_type: str = HTML_MIME_TYPE

    @property
    def size(self) -> int:
        return len(self.content)

    def text(self) -> str:
        return self.content.decode("utf-8")


class PreviewPublisher:
    """
    Registry of published preview documents keyed by blob URL.

    Each publish() creates an independent object; each must be released with
    revoke() (or by leaving a published() block) by whoever acquired it.
    """

    def __init__(self, origin: Optional[str] = None):
        self.origin = origin if origin is not None else PREVIEW_ORIGIN
        self._blobs: Dict[str, PreviewBlob] = {}

    def publish(self, html: str, mime_type: str = HTML_MIME_TYPE) -> str:
        """
        Store a document and return its handle.

        Args:
            html: Document text
            mime_type: Content type of the stored object

        Returns:
            Blob URL of the form "blob:<origin>/<uuid>"
        """
        url = f"{BLOB_SCHEME}{self.origin}/{uuid.uuid4()}"
        self._blobs[url] = PreviewBlob(content=html.encode("utf-8"), mime_type=mime_type)
        return url

    def get_blob(self, url: str) -> PreviewBlob:
        """
        Return the object behind a handle.

        Raises:
            PreviewNotFoundError: If the handle is unknown or was revoked
        """
        try:
            return self._blobs[url]
        except KeyError:
            raise PreviewNotFoundError(url) from None

    def fetch(self, url: str) -> str:
        """Dereference a handle to the exact document text that was published."""
        return self.get_blob(url).text()

    def revoke(self, url: str) -> None:
        """Release a handle. Unknown or already released handles are ignored."""
        self._blobs.pop(url, None)

    def is_active(self, url: str) -> bool:
        return url in self._blobs

    @property
    def active(self) -> List[str]:
        """Handles that have been published and not yet revoked."""
        return list(self._blobs)

    def save(self, url: str, output_path: Path) -> Path:
        """
        Write a published document to disk (download).

        Args:
            url: Handle returned by publish()
            output_path: Destination file; parent directories are created

        Returns:
            Path written
        """
        blob = self.get_blob(url)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_bytes(blob.content)
        return output_path

    @contextmanager
    def published(self, html: str) -> Iterator[str]:
        """
        Publish for the duration of a with-block, revoking on exit.

        Example:
            with publisher.published(html) as url:
                show_preview(url)
        """
        url = self.publish(html)
        try:
            yield url
        finally:
            self.revoke(url)

    def __len__(self) -> int:
        return len(self._blobs)

    def __contains__(self, url: str) -> bool:
        return self.is_active(url)

"""Unit tests for PreviewPublisher."""

import pytest

from folio.contexts.rendering.exceptions import PreviewNotFoundError
from folio.contexts.rendering.publisher import PreviewBlob, PreviewPublisher

HTML = "<!DOCTYPE html><html><body>Zoë</body></html>"


@pytest.mark.unit
def test_publish_returns_blob_url():
    publisher = PreviewPublisher(origin="folio-test")

    url = publisher.publish(HTML)

    assert url.startswith("blob:folio-test/")
    assert publisher.is_active(url)
    assert url in publisher


@pytest.mark.unit
def test_fetch_returns_exact_text():
    publisher = PreviewPublisher()

    url = publisher.publish(HTML)

    assert publisher.fetch(url) == HTML


@pytest.mark.unit
def test_blob_is_html_bytes():
    publisher = PreviewPublisher()

    blob = publisher.get_blob(publisher.publish(HTML))

    assert isinstance(blob, PreviewBlob)
    assert blob.mime_type == "text/html"
    assert blob.content == HTML.encode("utf-8")
    assert blob.size == len(HTML.encode("utf-8"))


@pytest.mark.unit
def test_each_publish_is_independent():
    publisher = PreviewPublisher()

    first = publisher.publish(HTML)
    second = publisher.publish(HTML)

    assert first != second
    assert len(publisher) == 2

    publisher.revoke(first)

    assert not publisher.is_active(first)
    assert publisher.fetch(second) == HTML
    assert publisher.active == [second]


@pytest.mark.unit
def test_fetch_after_revoke_raises():
    publisher = PreviewPublisher()
    url = publisher.publish(HTML)

    publisher.revoke(url)

    with pytest.raises(PreviewNotFoundError) as exc_info:
        publisher.fetch(url)
    assert exc_info.value.url == url


@pytest.mark.unit
def test_revoke_unknown_handle_is_ignored():
    publisher = PreviewPublisher()

    publisher.revoke("blob:folio/does-not-exist")

    assert len(publisher) == 0


@pytest.mark.unit
def test_published_block_revokes_on_exit():
    publisher = PreviewPublisher()

    with publisher.published(HTML) as url:
        assert publisher.fetch(url) == HTML

    assert not publisher.is_active(url)


@pytest.mark.unit
def test_published_block_revokes_on_error():
    publisher = PreviewPublisher()

    with pytest.raises(RuntimeError):
        with publisher.published(HTML) as url:
            raise RuntimeError("preview pane crashed")

    assert not publisher.is_active(url)


@pytest.mark.unit
def test_save_writes_document(tmp_path):
    publisher = PreviewPublisher()
    url = publisher.publish(HTML)

    output = publisher.save(url, tmp_path / "nested" / "preview.html")

    assert output.read_text(encoding="utf-8") == HTML
    assert publisher.is_active(url)


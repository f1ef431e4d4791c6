"""
Integration tests for portfolio previews (store -> render engine -> pipeline events).
"""

import json

import pytest

import folio.utils.event_logging as event_logging
from folio.contexts.portfolio import PortfolioDatabase, preview_portfolio
from folio.contexts.portfolio.exceptions import PortfolioNotFoundError
from folio.contexts.rendering import TemplateRenderEngine

COMPONENT = """export default function Minimal() {
  const { heading, accent } = window.__CUSTOMIZATIONS__;
  return <h1 style={{ color: accent }}>{heading}</h1>;
}"""


@pytest.fixture
def events_file(tmp_path, monkeypatch):
    path = tmp_path / "logs" / "events.log"
    monkeypatch.setattr(event_logging, "PIPELINE_EVENTS_FILE", path)
    return path


@pytest.fixture
def db(tmp_path):
    database = PortfolioDatabase.initialize(tmp_path / "portfolio.db")
    template = database.create_template("Minimal", COMPONENT, published=True)
    portfolio = database.create_portfolio("user-1", template.id, "Jane Doe")
    database.set_customization(portfolio.id, "heading", "Jane Doe")
    database.set_customization(portfolio.id, "accent", "#0ea5e9", field_type="color")
    yield database
    database.close()


def read_events(path):
    return [json.loads(line) for line in path.read_text(encoding="utf-8").splitlines()]


@pytest.mark.integration
def test_preview_renders_stored_customizations(db, events_file):
    engine = TemplateRenderEngine()

    result = preview_portfolio(db, "user-1", "jane-doe", engine=engine)

    assert result.success
    assert 'window.__CUSTOMIZATIONS__ = {"heading":"Jane Doe","accent":"#0ea5e9"};' in result.html
    assert "const PortfolioComponent = function Minimal()" in result.html
    assert engine.publisher.fetch(result.preview_url) == result.html

    events = read_events(events_file)
    assert len(events) == 1
    assert events[0]["event_type"] == "preview_published"
    assert events[0]["portfolio"] == "jane-doe"
    assert events[0]["template"] == "minimal"
    assert events[0]["document_size"] == len(result.html)


@pytest.mark.integration
def test_preview_without_engine_is_not_published(db, events_file):
    result = preview_portfolio(db, "user-1", "jane-doe")

    assert result.success
    assert '"heading":"Jane Doe"' in result.html
    assert result.preview_url is None
    assert read_events(events_file)[-1]["event_type"] == "preview_published"


@pytest.mark.integration
def test_customization_change_is_reflected(db, events_file):
    engine = TemplateRenderEngine()
    portfolio = db.get_portfolio_by_slug("user-1", "jane-doe")

    before = preview_portfolio(db, "user-1", "jane-doe", engine=engine)
    db.set_customization(portfolio.id, "heading", "Dr. Jane Doe")
    after = preview_portfolio(db, "user-1", "jane-doe", engine=engine)

    assert before.html != after.html
    assert '"heading":"Dr. Jane Doe"' in after.html
    assert len(engine.publisher) == 2


@pytest.mark.integration
def test_rejected_template_is_logged(db, events_file):
    portfolio = db.get_portfolio_by_slug("user-1", "jane-doe")
    # Bypass save-time validation to simulate a template stored before the rules existed
    db.conn.execute(
        "UPDATE templates SET code = ? WHERE id = ?",
        ("export default function M(){ fetch('/x'); return null; }", portfolio.template_id),
    )
    db.conn.commit()

    result = preview_portfolio(db, "user-1", "jane-doe")

    assert not result.success
    assert result.html is None

    events = read_events(events_file)
    assert events[-1]["event_type"] == "preview_rejected"
    assert events[-1]["errors"] == ["Fetch API calls are not allowed"]
    assert event_logging.get_recent_events(5, portfolio="jane-doe")[-1]["event_type"] == "preview_rejected"


@pytest.mark.integration
def test_unknown_portfolio_raises(db, events_file):
    with pytest.raises(PortfolioNotFoundError):
        preview_portfolio(db, "user-2", "jane-doe")

    assert not events_file.exists()

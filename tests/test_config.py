"""Settings - environment-driven configuration and its effect on traversal defaults."""

from graphload.config import Settings, get_settings
from graphload.core.relationship_cache import RelationshipMetadataCache
from graphload.services.hydrate import load_graph

from tests.fake_context import Book, RecordingContext, reference


def test_defaults(monkeypatch):
    monkeypatch.delenv("GRAPHLOAD_DATABASE_URL", raising=False)
    settings = Settings(_env_file=None)
    assert settings.cycle_guard is True
    assert settings.database_url == "sqlite:///graphload.db"
    assert settings.log_format == "json"


def test_reads_prefixed_environment(monkeypatch):
    monkeypatch.setenv("GRAPHLOAD_CYCLE_GUARD", "false")
    monkeypatch.setenv("GRAPHLOAD_LOG_LEVEL", "DEBUG")
    settings = Settings(_env_file=None)
    assert settings.cycle_guard is False
    assert settings.log_level == "DEBUG"


def test_postgres_scheme_is_normalized(monkeypatch):
    monkeypatch.setenv("GRAPHLOAD_DATABASE_URL", "postgres://u:p@db:5432/shop")
    assert Settings(_env_file=None).database_url == "postgresql://u:p@db:5432/shop"


def test_get_settings_is_cached():
    assert get_settings() is get_settings()


def test_load_graph_reads_cycle_guard_from_settings(monkeypatch):
    """With the guard disabled in settings, a never-loaded cycle recurses until Python stops it."""
    monkeypatch.setenv("GRAPHLOAD_CYCLE_GUARD", "false")
    get_settings.cache_clear()
    ctx = RecordingContext({Book: (reference(Book, "sequel"),)}, always_unloaded=True)
    dune, messiah = Book("Dune"), Book("Messiah")
    ctx.stage(dune, "sequel", messiah)
    ctx.stage(messiah, "sequel", dune)

    try:
        load_graph(ctx, dune, cache=RelationshipMetadataCache())
    except RecursionError:
        pass
    else:
        raise AssertionError("expected unbounded recursion without the cycle guard")
    assert ctx.change_tracking_enabled is True

    ctx.calls.clear()
    load_graph(ctx, dune, cycle_guard=True, cache=RelationshipMetadataCache())
    assert len(ctx.load_calls) == 2

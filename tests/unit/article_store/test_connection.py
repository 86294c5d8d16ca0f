"""Tests for article_store.connection module."""

from article_store.connection import database_url


class TestDatabaseUrl:
    def test_bare_postgres_urls_use_psycopg(self) -> None:
        assert database_url("postgresql://u:p@db:5432/news") == "postgresql+psycopg://u:p@db:5432/news"
        assert database_url("postgres://u:p@db/news") == "postgresql+psycopg://u:p@db/news"

    def test_explicit_driver_and_other_backends_untouched(self) -> None:
        assert database_url("postgresql+psycopg://db/news") == "postgresql+psycopg://db/news"
        assert database_url("sqlite:///:memory:") == "sqlite:///:memory:"

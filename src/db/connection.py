"""Shared Postgres connection helpers."""

from __future__ import annotations

import os

import psycopg


def require_database_url() -> str:
    """Read `DATABASE_URL` from the environment or raise a clear error."""

    database_url = os.getenv("DATABASE_URL")
    if not database_url:
        raise RuntimeError("DATABASE_URL is required (set it in .env or environment)")
    return database_url


def connect(database_url: str) -> psycopg.Connection:
    """Open a synchronous connection (used by maintenance scripts such as migrations)."""

    return psycopg.connect(database_url)

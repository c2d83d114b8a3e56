# tests/alembic/test_migration_roundtrip.py
from __future__ import annotations

import os
import subprocess
from pathlib import Path

import pytest
from alembic.autogenerate import compare_metadata
from alembic.config import Config
from alembic.runtime.migration import MigrationContext
from alembic.script import ScriptDirectory
from sqlalchemy import create_engine, text
from sqlalchemy.pool import NullPool

from app.db.base import Base, init_models
from app.db.session import normalize_pg_url

pytestmark = pytest.mark.contract

ROOT = Path(__file__).resolve().parents[2]

_RAW_URL = os.getenv("HAT_TEST_DATABASE_URL") or os.getenv("HAT_DATABASE_URL")
DATABASE_URL = normalize_pg_url(_RAW_URL) if _RAW_URL else None


def _alembic(*args: str) -> subprocess.CompletedProcess:
    env = dict(os.environ)
    env["HAT_TEST_DATABASE_URL"] = DATABASE_URL or ""
    return subprocess.run(
        ["alembic", *args],
        cwd=ROOT,
        env=env,
        capture_output=True,
        text=True,
        check=False,
    )


def _require_db() -> None:
    if not DATABASE_URL:
        pytest.skip("HAT_TEST_DATABASE_URL is not set")


def _public_tables() -> set[str]:
    engine = create_engine(DATABASE_URL, poolclass=NullPool, future=True)
    try:
        with engine.connect() as conn:
            rows = conn.execute(
                text(
                    "SELECT table_name FROM information_schema.tables "
                    "WHERE table_schema = 'public'"
                )
            )
            return {r[0] for r in rows}
    finally:
        engine.dispose()


def _skip_version_table(obj, name, type_, reflected, compare_to) -> bool:
    return not (type_ == "table" and name == "alembic_version")


def test_single_linear_head():
    script = ScriptDirectory.from_config(Config(str(ROOT / "alembic.ini")))
    heads = script.get_heads()
    assert len(heads) == 1, heads

    revisions = list(script.walk_revisions())
    assert revisions[-1].down_revision is None
    assert all(not r.is_merge_point for r in revisions)


@pytest.mark.pg
def test_downgrade_base_then_upgrade_head():
    _require_db()

    down = _alembic("downgrade", "base")
    assert down.returncode == 0, down.stderr
    assert _public_tables() <= {"alembic_version"}

    up = _alembic("upgrade", "head")
    assert up.returncode == 0, up.stderr

    current = _alembic("current")
    assert current.returncode == 0, current.stderr
    head = ScriptDirectory.from_config(Config(str(ROOT / "alembic.ini"))).get_current_head()
    assert head in current.stdout


@pytest.mark.pg
def test_models_match_migrated_schema():
    _require_db()
    init_models()

    engine = create_engine(DATABASE_URL, poolclass=NullPool, future=True)
    try:
        with engine.connect() as conn:
            ctx = MigrationContext.configure(
                conn,
                opts={"compare_type": True, "include_object": _skip_version_table},
            )
            diffs = compare_metadata(ctx, Base.metadata)
    finally:
        engine.dispose()

    assert diffs == [], diffs

# alembic/env.py: hospital asset tracker migrations (column comment diffs muted)

from __future__ import annotations

import os
import re
from logging.config import fileConfig
from typing import Any

from alembic import context
from sqlalchemy import create_engine
from sqlalchemy.engine import Connection
from sqlalchemy.pool import NullPool

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

# models are imported lazily so that env.py loads even when app settings are broken
from app.db.base import Base, init_models  # noqa: E402
from app.db.session import normalize_pg_url  # noqa: E402

# ---------------------------------------------------------------------------
# include_object: skip backup copies and objects that only exist in the database
# ---------------------------------------------------------------------------

_BACKUP_RE = re.compile(r".*_backup_\d{8}$", re.IGNORECASE)


def include_object(
    obj: Any, name: str | None, type_: str, reflected: bool, compare_to: Any
) -> bool:
    """
    Decide which objects take part in autogenerate / check:

      1) *_backup_YYYYMMDD tables / indexes / sequences are ignored;
      2) objects present in the database but not in the models are not
         compared (autogenerate never emits drops for them);
      3) the alembic_version bookkeeping table is ignored.
    """
    n = name or ""

    if type_ in {"table", "index", "sequence"} and _BACKUP_RE.match(n):
        return False

    if reflected and compare_to is None:
        return False

    if type_ == "table" and n == "alembic_version":
        return False

    return True


# ---------------------------------------------------------------------------
# DSN: HAT_TEST_DATABASE_URL / HAT_DATABASE_URL / DATABASE_URL / alembic.ini
# ---------------------------------------------------------------------------


def get_url() -> str:
    """
    Explicit DSN lookup, in priority order:
      1. HAT_TEST_DATABASE_URL
      2. HAT_DATABASE_URL
      3. DATABASE_URL
      4. sqlalchemy.url from alembic.ini
    """
    url = (
        os.getenv("HAT_TEST_DATABASE_URL")
        or os.getenv("HAT_DATABASE_URL")
        or os.getenv("DATABASE_URL")
        or config.get_main_option("sqlalchemy.url")
    )

    if not url:
        raise RuntimeError(
            "Alembic cannot determine the database URL:\n"
            "set HAT_TEST_DATABASE_URL / HAT_DATABASE_URL / DATABASE_URL "
            "or sqlalchemy.url in alembic.ini"
        )

    return normalize_pg_url(url)


# ---------------------------------------------------------------------------
# drop column comment ops from autogenerated revisions
# ---------------------------------------------------------------------------

from alembic.operations.ops import AlterColumnOp, ModifyTableOps  # noqa: E402


def _is_comment_only(op: Any) -> bool:
    if not isinstance(op, AlterColumnOp):
        return False
    kw = op.kw or {}
    return "modify_comment" in kw and not any(
        k in kw for k in ("modify_type", "modify_nullable", "modify_server_default", "modify_name")
    )


def strip_comment_ops(context, revision, directives):
    """
    Mute comment-only column changes in autogenerate / revision so that
    comments edited by hand in the database do not produce noise.
    """
    if not directives:
        return

    script = directives[0]

    for ops_container in (getattr(script, "upgrade_ops", None), getattr(script, "downgrade_ops", None)):
        if not ops_container:
            continue
        kept = []
        for op in ops_container.ops:
            if isinstance(op, ModifyTableOps):
                op.ops = [o for o in op.ops if not _is_comment_only(o)]
                if not op.ops:
                    continue
            kept.append(op)
        ops_container.ops = kept


# ---------------------------------------------------------------------------
# runners
# ---------------------------------------------------------------------------


def run_migrations_offline() -> None:
    """
    Offline mode: render SQL without connecting.
    """
    init_models()
    url = get_url()

    context.configure(
        url=url,
        target_metadata=Base.metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        compare_type=True,
        compare_server_default=False,
        include_object=include_object,
        process_revision_directives=strip_comment_ops,
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """
    Online mode: run the migrations against a live connection.
    """
    init_models()

    engine = create_engine(get_url(), poolclass=NullPool, future=True)
    db_schema = os.getenv("DB_SCHEMA")

    with engine.connect() as connection:  # type: Connection
        if db_schema:
            connection.exec_driver_sql(f"SET search_path TO {db_schema}")

        context.configure(
            connection=connection,
            target_metadata=Base.metadata,
            compare_type=True,
            compare_server_default=False,
            include_object=include_object,
            render_as_batch=False,
            version_table_schema=db_schema if db_schema else None,
            include_schemas=bool(db_schema),
            process_revision_directives=strip_comment_ops,
        )

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()

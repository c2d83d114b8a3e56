# app/db/base.py
from __future__ import annotations

import importlib
import logging
import pkgutil
from typing import Iterator, List

from sqlalchemy import MetaData
from sqlalchemy.orm import DeclarativeBase, configure_mappers

log = logging.getLogger("hat.models")

# Constraint names are always spelled out on the models; this convention only
# catches the ones that are not, so autogenerate never emits anonymous names.
NAMING_CONVENTION = {
    "ix": "IX_%(table_name)s_%(column_0_N_name)s",
    "uq": "UQ_%(table_name)s_%(column_0_N_name)s",
    "fk": "FK_%(table_name)s_%(referred_table_name)s_%(column_0_name)s",
    "pk": "PK_%(table_name)s",
}


class Base(DeclarativeBase):
    """Single ORM base for every table in the schema"""

    metadata = MetaData(naming_convention=NAMING_CONVENTION)

    # server defaults (CreatedDate etc.) come back via RETURNING on flush
    __mapper_args__ = {"eager_defaults": True}


_INITIALIZED: bool = False

# principal tables first so string relationship targets resolve
PRINCIPAL_MODULES = (
    "app.models.identity",
    "app.models.location",
    "app.models.asset",
    "app.models.inventory",
    "app.models.request",
    "app.models.procurement",
)


def _iter_model_modules(pkg_name: str = "app.models") -> Iterator[str]:
    """Walk app.models.* (modules starting with an underscore are skipped)"""
    pkg = importlib.import_module(pkg_name)
    for _, name, _ in pkgutil.walk_packages(list(pkg.__path__), prefix=pkg_name + "."):
        if not name.rsplit(".", 1)[-1].startswith("_"):
            yield name


def init_models(*, force: bool = False) -> None:
    """
    Import every model module and configure the mappers once.

    A model module that fails to import is an error; nothing is skipped.
    """
    global _INITIALIZED
    if _INITIALIZED and not force:
        log.debug("init_models() called again; already initialized, skipping.")
        return

    loaded: List[str] = []
    for mod in (*PRINCIPAL_MODULES, *_iter_model_modules()):
        if mod in loaded:
            continue
        importlib.import_module(mod)
        loaded.append(mod)

    configure_mappers()
    _INITIALIZED = True
    log.info("ORM models initialized, %d modules, %d tables", len(loaded), len(Base.metadata.tables))

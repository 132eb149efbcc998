import importlib.util
from pathlib import Path

import sqlalchemy as sa
from alembic.migration import MigrationContext
from alembic.operations import Operations

from fittrack.db import Base
from fittrack.models import exercise, exercise_template, progress, route, workout  # noqa: F401

VERSIONS = Path(__file__).resolve().parents[1] / "alembic" / "versions"


def load_revision(name):
    path = next(VERSIONS.glob(f"{name}_*.py"))
    spec = importlib.util.spec_from_file_location(path.stem, path)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def run(*steps):
    engine = sa.create_engine("sqlite://")
    with engine.begin() as conn:
        ctx = MigrationContext.configure(conn)
        with Operations.context(ctx):
            for step in steps:
                step()
    return engine


def test_initial_revision_creates_model_tables():
    revision = load_revision("3e1f0c9b7a52")
    assert revision.down_revision is None

    engine = run(revision.upgrade)
    inspector = sa.inspect(engine)
    assert set(inspector.get_table_names()) == set(Base.metadata.tables)

    for name, table in Base.metadata.tables.items():
        migrated = {c["name"] for c in inspector.get_columns(name)}
        assert migrated == {c.name for c in table.columns}, name


def test_downgrade_drops_everything():
    revision = load_revision("3e1f0c9b7a52")
    engine = run(revision.upgrade, revision.downgrade)
    assert sa.inspect(engine).get_table_names() == []

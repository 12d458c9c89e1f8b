"""Unit tests for ORM model column definitions."""

import pytest

from infrastructure.database.models import Base


@pytest.mark.parametrize("table_name", ["profiles", "follows", "likes", "notifications"])
def test_created_at_is_not_nullable(table_name: str):
    assert Base.metadata.tables[table_name].c.created_at.nullable is False


def test_profile_updated_at_is_not_nullable():
    assert Base.metadata.tables["profiles"].c.updated_at.nullable is False

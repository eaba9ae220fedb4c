"""Shared fixtures for the catalog reader and renderer tests."""

import pytest

from helpers import FakeCatalog


@pytest.fixture
def users_catalog():
    """One schema holding a users table with two columns."""
    return FakeCatalog(
        schemas=["public"],
        tables={"public": [("users", "User accounts")]},
        columns={
            ("public", "users"): [
                ("id", "integer", "", "", "NO", "", 1),
                ("email", "character varying", "255", "", "YES", "contact email", 2),
            ]
        },
    )

"""
Pytest configuration and shared fixtures for refschema tests.
"""

import pytest

from hosts import (
    HrSchema,
    HrSchemaWithKeys,
    HrSchemaWithMacros,
    StreamSchema,
)
from refschema.expressions.context import EvaluationContext
from refschema.schema.catalog import SchemaCatalog


@pytest.fixture
def hr_catalog():
    """Catalog over a host with two array-shaped tables."""
    return SchemaCatalog(HrSchema())


@pytest.fixture
def keyed_catalog():
    """Catalog over a host declaring a foreign key from emps to depts."""
    return SchemaCatalog(HrSchemaWithKeys())


@pytest.fixture
def macro_catalog():
    """Catalog over a host with table-returning methods."""
    return SchemaCatalog(HrSchemaWithMacros())


@pytest.fixture
def stream_catalog():
    """Catalog over a host with sequence-shaped and non-table members."""
    return SchemaCatalog(StreamSchema())


@pytest.fixture
def hr_context(hr_catalog):
    """Evaluation context exposing the HR catalog as schema 'hr'."""
    return EvaluationContext({"hr": hr_catalog})


@pytest.fixture
def clean_env(monkeypatch):
    """Remove catalog environment overrides for the duration of a test."""
    monkeypatch.delenv("REFSCHEMA_CLASS", raising=False)
    monkeypatch.delenv("REFSCHEMA_STATIC_METHOD", raising=False)
    return monkeypatch

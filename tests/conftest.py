"""
installrag Test Configuration
=============================

Shared fixtures for all tests.
"""

import json

import pytest


@pytest.fixture
def test_config():
    """Loader configuration independent of the environment."""
    from installrag.config import LoaderConfig
    return LoaderConfig.for_test()


@pytest.fixture
def diagnostics():
    """Fresh diagnostics collector (not forwarded to structlog)."""
    from installrag.pipeline.diagnostics import Diagnostics
    return Diagnostics(forward=False)


@pytest.fixture
def sample_installation():
    """Installation with mixed partition formats and one multi-area endpoint."""
    return {
        "metadata": {
            "name": "Villa Rossi",
            "revision": "2025.11",
            "major": 2,
            "minor": 5,
        },
        "endpoints": [
            {
                "uuid": "e1a2b3c4-0001",
                "name": "Kitchen PIR",
                "category": 18,
                "visualizationType": "BOXIO",
                "partitions": ["p1-kitchen-0001"],
            },
            {
                "uuid": "e1a2b3c4-0002",
                "name": "Living room lights",
                "category": 11,
                "visualizationType": "BOXIO",
                "partitions": ["p2-living-00002"],
            },
            {
                "uuid": "e1a2b3c4-0003",
                "name": "Thermostat",
                "category": 15,
                "partitions": ["p2-living-00002", "p3-hall-000003"],
            },
            {
                "uuid": "e1a2b3c4-0004",
                "name": "Main controller",
                "category": 0,
                "partitions": [],
            },
            {
                "uuid": "e1a2b3c4-0005",
                "category": 18,
                "partitions": ["p3-hall-000003"],
            },
        ],
        "areas": [
            {
                "uuid": "a1",
                "name": "Kitchen",
                "partitions": ["p1-kitchen-0001"],
            },
            {
                "uuid": "a2",
                "name": "Living room",
                "partitions": [{"uuid": "p2-living-00002", "name": "Living zone"}],
            },
            {
                "uuid": "a3",
                "name": "Hallway",
                "partitions": ["p3-hall-000003", {"uuid": "p2-living-00002", "name": "Hall side"}],
            },
        ],
    }


@pytest.fixture
def sample_installation_json(sample_installation):
    """sample_installation serialized as text."""
    return json.dumps(sample_installation)


@pytest.fixture
def minimal_installation():
    """Single endpoint in a single area."""
    return {
        "endpoints": [{"uuid": "e1", "category": 18, "partitions": ["p1"]}],
        "areas": [{"uuid": "a1", "name": "Kitchen", "partitions": ["p1"]}],
    }

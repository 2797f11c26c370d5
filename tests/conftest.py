import pytest

from schemadoc import build_spec


@pytest.fixture
def expect_schemas():
    """Build a document from ``nodes`` and compare its component schemas."""

    def _expect(nodes, expected):
        doc = build_spec(nodes)
        assert doc["components"]["schemas"] == expected
        return doc

    return _expect

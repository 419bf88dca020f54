"""Unit test configuration.

Unit tests should be fast and isolated - no external services. Storage-backed
tests use in-memory SQLite.
"""

import pytest


# Mark all tests in this directory as unit tests
pytestmark = pytest.mark.unit

"""Tests for domain exception hierarchy."""

from __future__ import annotations

import unittest

from single_event.exceptions import (
    ConfigValidationError,
    InvalidTakeCountError,
    SingleEventError,
)


class ExceptionHierarchyTests(unittest.TestCase):
    """Validate exception inheritance contract."""

    def test_exception_hierarchy(self) -> None:
        self.assertTrue(issubclass(SingleEventError, RuntimeError))
        self.assertTrue(issubclass(InvalidTakeCountError, SingleEventError))
        self.assertTrue(issubclass(InvalidTakeCountError, ValueError))
        self.assertTrue(issubclass(ConfigValidationError, SingleEventError))


if __name__ == "__main__":
    unittest.main()

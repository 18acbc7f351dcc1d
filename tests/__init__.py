"""
Test suite for schemadiff.

This package contains tests for all schemadiff components:
- Unit tests for the comparator, column definitions and schema helpers
- CLI, configuration and logging tests
"""

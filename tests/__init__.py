"""
Test suite for exactgeom

Contains:
- tests/unit/          : Unit tests for individual modules
"""

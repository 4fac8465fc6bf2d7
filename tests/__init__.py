"""
Test suite for vecmath

Contains:
- tests/unit/          : Unit tests for vectors, matrices and numerical safeguards
"""

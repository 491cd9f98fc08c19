"""
Comparison Engine Tests Package
===============================
Test suite for the tos_compare package.

Run all tests: python3 -m pytest tests/compare/ -v
Run specific: python3 -m pytest tests/compare/test_differ.py -v
"""

# intmatrix Test Suite
"""
Test suite including:
- Unit tests (matrix, integer domain, errors)
- Integration tests (audit logging)
- Edge-case tests (invalid inputs, overflow, partial fills)

Run with: pytest
Coverage: coverage run -m pytest && coverage report
"""

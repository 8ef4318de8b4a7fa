# ECIES Test Suite
"""
Test suite including:
- Unit tests per building block
- Protocol round trips on P-256 and P-521
- Security tests (tampering, wrong context, malformed envelopes)
- Command line tests

Run with: pytest
Coverage: coverage run -m pytest && coverage report
"""

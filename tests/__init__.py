# shadigest Test Suite
"""
Test suite including:
- Unit tests for words, mixing functions, variants, formatting
- Engine tests (known answers, padding, streaming, errors)
- Differential tests against the cryptography library
- NIST response-file vectors

Run with: pytest
Coverage: coverage run -m pytest && coverage report
"""

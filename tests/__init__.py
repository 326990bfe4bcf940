"""
Test suite for the Obiex API client.

Run all tests from project root:
    pytest
    pytest tests/test_obiex/

Run specific test file:
    pytest tests/test_obiex/test_auth.py
    pytest tests/test_obiex/test_cache.py

Run with coverage:
    pytest --cov=obiex --cov-report=html
"""

"""Test fixtures for the calendar scheduler.

This package provides reusable test fixtures:
- events: Event form factories and example payloads
- api: TestClient and EventStore fixtures for API tests
"""

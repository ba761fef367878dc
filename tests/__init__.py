"""
Parse Schema SDK Test Suite.

This package contains:
- unit/: Unit tests (no network, controllers mocked or in-memory)
- integration/: Lifecycle flows through the bundled controllers
"""

"""
Shelf Archive Test Suite

Tests are organized into:
- unit/: Unit tests for individual components
- integration/: End-to-end flows through repository, ingestion and CLI
"""

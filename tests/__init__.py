"""
Test package for Brand Guardian.

- unit/: Unit tests for individual components and use cases
"""

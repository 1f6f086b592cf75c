"""
Test Suite for Anonymous Data

Provides tests for:
- Distribution shapes and primitive synthesizers
- Collections, dispatch, customizations and the registry
- Object graph population
- Configuration, validation, utilities and the CLI
"""

"""
Test suite for claims-netting

Contains:
- tests/unit/          : Unit tests for graph, cycles, cancellation, metrics, codec, CLI
"""

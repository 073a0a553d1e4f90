"""
Core payload models, numerical primitives, and contract validators.

This module contains the building blocks shared by the netting engine
that are independent of the graph algorithms themselves.
"""

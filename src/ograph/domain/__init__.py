"""Domain layer — the graph façade's value types and rules.

This layer depends only on stdlib.
It must never import from services, infrastructure, or config.
"""

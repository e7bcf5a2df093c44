"""Service layer — the graph façade, returning ServiceResult.

Services may import from domain and infrastructure layers.
"""

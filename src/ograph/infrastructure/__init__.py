"""Infrastructure layer — database engine, statement gateway, repository.

This layer depends on stdlib, SQLAlchemy, and :mod:`ograph.errors`.
It must never import from domain or services; the service layer bridges
the graph façade's values to the storage records defined here.
"""

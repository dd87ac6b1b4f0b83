"""Application layer: interfaces, services, view models.

Depends only on domain and protocol definitions (DIP).
Infrastructure implements the interfaces (identity gateway, document store, catalog).
"""

"""Combo builder vertical: storefront widget designer and discount admin.

Pieces:
- Parameter schema, field validator and immutable Configuration store
- Device resolver and deterministic preview renderer
- Discount-offer state machine over the configuration
- In-memory discount catalog and commerce platform discount creation
- SQLAlchemy template records with an async repository
- Session cache and receiver log
- FastAPI router
"""

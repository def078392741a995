"""UniTrade Models.

ORM models (database tables):
    from unitrade.models.orm import Product

Pydantic contracts (API request/response):
    from unitrade.models.contracts import ProductPublic, ViewRecordResponse
"""

"""
Schemas module - Request/Response schemas for API endpoints.

Difference from models:
- Models: Catalog entities (what the core stores and returns)
- Schemas: API contract (what client sends/receives around them)
"""

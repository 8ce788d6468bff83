"""
PartCat Backend — Application Package
=======================================

What: REST backend for cataloging electronic components, their images and
      the accounts allowed to edit them.

Architecture Note:

    ┌─────────────────────────────────────┐
    │   Routes (API Layer) + auth guard   │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← NotFound mapping, responses
    ├─────────────────────────────────────┤
    │     Records (User/Image/Component)  │  ← Field validation, dirty flag
    ├─────────────────────────────────────┤
    │   PersistenceGateway (SQLAlchemy)   │  ← One statement, one commit
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"

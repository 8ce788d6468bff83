# Services package init
"""
PartCat Backend — Services Layer
==================================

What:  Business logic between routes (HTTP) and records (persistence).

Service Inventory:
    - AuthService:      resolve Email/Password headers to a User
    - UserService:      account listing, lookup, creation, deletion, bootstrap
    - ComponentService: catalog entry CRUD
    - ImageService:     image registration and file serving
"""

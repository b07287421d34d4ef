# Services package init
"""
Bars API Backend - Services Layer
==================================

Service Inventory:
    - BarService:  the bars resource (list, list-mine, get, create, update, delete)
    - UserService: accounts, password hashing, bearer token issue/revoke/lookup

Services receive the request's AsyncSession on every call and hold no
per-request state.
"""

# Routes package init
"""
VenueAtlas Backend — API Routes Package
=========================================

What:  HTTP route handlers that accept requests and return responses.
How:   Each route module handles one resource.

Route Inventory:
    - locations.py:  /api/location   (location tree CRUD)
    - users.py:      /api/user       (user CRUD, by role, by location subtree)
    - venues.py:     /api/venue      (venue CRUD behind the access control chain)
    - health.py:     GET /health     (service health check)

Routes are THIN: they declare the HTTP contract and access requirements and
hand everything else to the services.
"""

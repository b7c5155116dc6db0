# Services package init
"""
VenueAtlas Backend — Services Layer
=====================================

What:  Business logic layer sitting between routes (HTTP) and database (persistence).
How:   Services accept the request-scoped session plus validated schemas,
       apply integrity rules, and return response models.

Service Inventory:
    - location_tree:     Subtree resolution over the location parent pointers
    - LocationService:   Location CRUD and tree integrity rules
    - UserService:       User CRUD, role and location-subtree listing
    - VenueService:      Venue CRUD, organizer and location-subtree listing
    - references:        Bulk expansion of referenced records for responses
    - persistence:       Flush helper translating database failures
"""

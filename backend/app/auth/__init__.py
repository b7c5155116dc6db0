# Auth package init
"""
VenueAtlas Backend — Access Control Chain
===========================================

Three composable steps run before a venue operation:

    1. identity.get_current_user      x-user-id header → Caller      (401)
    2. policies.require_role(...)     caller role in permitted set   (403)
    3. policies.require_venue_owner   Admin, or creator of the venue (404/403)

Step 1 is a FastAPI dependency. Steps 2 and 3 are AccessChecks run in order by
an AccessPolicy; `policies.authorize(*checks)` packages 1 followed by the given
checks as a single route dependency.
"""

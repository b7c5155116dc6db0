"""
VenueAtlas Backend — Venue API Tests
======================================

What:  The venue routes, including the access control chain in front of them.

What we test:
    ✅ Identity header missing / malformed / unknown → 401
    ✅ Only Admins and Organizers can create; createdBy is the caller
    ✅ Only the owner or an Admin can update / delete
    ✅ Organizers see only their own venues in the main listing
    ✅ Listing by organizer and by location subtree
"""

from uuid import uuid4

import pytest


def as_user(user) -> dict:
    """Headers identifying `user` (a User or a raw ID) as the caller."""
    return {"x-user-id": str(getattr(user, "id", user))}


async def create_venue(client, caller, location, place_name="Conference Hall", capacity=200):
    response = await client.post(
        "/api/venue",
        json={"placeName": place_name, "capacity": capacity, "location": str(location.id)},
        headers=as_user(caller),
    )
    assert response.status_code == 201, response.text
    return response.json()["data"]


class TestIdentity:

    @pytest.mark.asyncio
    async def test_missing_header(self, test_client, seeded):
        response = await test_client.get("/api/venue")

        assert response.status_code == 401
        body = response.json()
        assert body["error"] == "unauthenticated"
        assert body["message"] == "Authentication required. Please provide x-user-id header"

    @pytest.mark.asyncio
    async def test_malformed_header(self, test_client, seeded):
        response = await test_client.get("/api/venue", headers={"x-user-id": "12345"})

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid user ID"

    @pytest.mark.asyncio
    async def test_unknown_user(self, test_client, seeded):
        response = await test_client.get("/api/venue", headers=as_user(uuid4()))

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid user ID"

    @pytest.mark.asyncio
    async def test_header_name_is_case_insensitive(self, test_client, seeded):
        response = await test_client.get(
            "/api/venue", headers={"X-User-Id": str(seeded.attendee.id)}
        )

        assert response.status_code == 200


class TestCreateVenue:

    @pytest.mark.asyncio
    async def test_attendee_is_forbidden(self, test_client, seeded):
        response = await test_client.post(
            "/api/venue",
            json={"placeName": "Garage", "capacity": 10, "location": str(seeded.kigali.id)},
            headers=as_user(seeded.attendee),
        )

        assert response.status_code == 403
        body = response.json()
        assert body["error"] == "forbidden"
        assert body["message"] == "Access denied. Required role(s): Admin, Organizer"

    @pytest.mark.asyncio
    async def test_organizer_creates(self, test_client, seeded):
        data = await create_venue(test_client, seeded.organizer, seeded.kicukiro)

        assert data["placeName"] == "Conference Hall"
        assert data["capacity"] == 200
        assert data["location"]["code"] == "KCK"
        assert data["createdBy"] == {
            "id": str(seeded.organizer.id),
            "name": "Olivier Organizer",
            "email": "organizer@example.com",
            "role": "Organizer",
        }

    @pytest.mark.asyncio
    async def test_admin_creates(self, test_client, seeded):
        data = await create_venue(test_client, seeded.admin, seeded.rwanda, "National Stadium", 25000)

        assert data["createdBy"]["id"] == str(seeded.admin.id)

    @pytest.mark.asyncio
    async def test_snake_case_body_is_accepted(self, test_client, seeded):
        response = await test_client.post(
            "/api/venue",
            json={"place_name": "Hall B", "capacity": 50, "location": str(seeded.kigali.id)},
            headers=as_user(seeded.organizer),
        )

        assert response.status_code == 201
        assert response.json()["data"]["placeName"] == "Hall B"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("capacity", [0, -5])
    async def test_capacity_must_be_positive(self, test_client, seeded, capacity):
        response = await test_client.post(
            "/api/venue",
            json={"placeName": "Closet", "capacity": capacity, "location": str(seeded.kigali.id)},
            headers=as_user(seeded.organizer),
        )

        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"

    @pytest.mark.asyncio
    async def test_capacity_above_column_range(self, test_client, seeded):
        response = await test_client.post(
            "/api/venue",
            json={"placeName": "Everywhere", "capacity": 10**10, "location": str(seeded.kigali.id)},
            headers=as_user(seeded.organizer),
        )

        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"

    @pytest.mark.asyncio
    async def test_unknown_location(self, test_client, seeded):
        response = await test_client.post(
            "/api/venue",
            json={"placeName": "Nowhere Hall", "capacity": 10, "location": str(uuid4())},
            headers=as_user(seeded.organizer),
        )

        assert response.status_code == 404
        assert response.json()["message"] == "Location not found"


class TestListVenues:

    @pytest.mark.asyncio
    async def test_organizer_sees_only_own(self, test_client, seeded):
        await create_venue(test_client, seeded.organizer, seeded.kicukiro, "Mine")
        await create_venue(test_client, seeded.other_organizer, seeded.nairobi, "Theirs")
        await create_venue(test_client, seeded.admin, seeded.kigali, "Admin's")

        body = (await test_client.get("/api/venue", headers=as_user(seeded.organizer))).json()

        assert body["count"] == 1
        assert body["data"][0]["placeName"] == "Mine"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("who", ["admin", "attendee"])
    async def test_others_see_everything(self, test_client, seeded, who):
        await create_venue(test_client, seeded.organizer, seeded.kicukiro, "Mine")
        await create_venue(test_client, seeded.other_organizer, seeded.nairobi, "Theirs")

        body = (
            await test_client.get("/api/venue", headers=as_user(getattr(seeded, who)))
        ).json()

        assert body["count"] == 2

    @pytest.mark.asyncio
    async def test_by_organizer(self, test_client, seeded):
        await create_venue(test_client, seeded.organizer, seeded.kicukiro, "One")
        await create_venue(test_client, seeded.organizer, seeded.kigali, "Two")
        await create_venue(test_client, seeded.other_organizer, seeded.nairobi, "Other")

        response = await test_client.get(
            f"/api/venue/organizer/{seeded.organizer.id}", headers=as_user(seeded.attendee)
        )

        assert response.status_code == 200
        body = response.json()
        assert body["count"] == 2
        assert body["organizer"] == {
            "id": str(seeded.organizer.id),
            "name": "Olivier Organizer",
            "email": "organizer@example.com",
        }
        assert {v["placeName"] for v in body["data"]} == {"One", "Two"}

    @pytest.mark.asyncio
    async def test_by_organizer_rejects_non_organizer(self, test_client, seeded):
        response = await test_client.get(
            f"/api/venue/organizer/{seeded.attendee.id}", headers=as_user(seeded.admin)
        )

        assert response.status_code == 400
        assert response.json()["message"] == "User is not an organizer"

    @pytest.mark.asyncio
    async def test_by_organizer_unknown(self, test_client, seeded):
        response = await test_client.get(
            f"/api/venue/organizer/{uuid4()}", headers=as_user(seeded.admin)
        )

        assert response.status_code == 404
        assert response.json()["message"] == "Organizer not found"

    @pytest.mark.asyncio
    async def test_by_location_covers_descendants(self, test_client, seeded):
        await create_venue(test_client, seeded.admin, seeded.rwanda, "Amahoro Stadium")
        await create_venue(test_client, seeded.admin, seeded.kigali, "Kigali Arena")
        await create_venue(test_client, seeded.organizer, seeded.kicukiro, "Kicukiro Hall")
        await create_venue(test_client, seeded.other_organizer, seeded.nairobi, "KICC")

        response = await test_client.get(
            f"/api/venue/location/{seeded.rwanda.id}", headers=as_user(seeded.attendee)
        )

        assert response.status_code == 200
        body = response.json()
        assert body["locationsSearched"] == 3
        assert body["count"] == 3
        assert body["location"] == {"id": str(seeded.rwanda.id), "name": "Rwanda", "code": "RW"}
        assert {v["placeName"] for v in body["data"]} == {
            "Amahoro Stadium",
            "Kigali Arena",
            "Kicukiro Hall",
        }

        kigali = (
            await test_client.get(
                f"/api/venue/location/{seeded.kigali.id}", headers=as_user(seeded.attendee)
            )
        ).json()
        assert kigali["locationsSearched"] == 2
        assert kigali["count"] == 2

    @pytest.mark.asyncio
    async def test_by_unknown_location(self, test_client, seeded):
        response = await test_client.get(
            f"/api/venue/location/{uuid4()}", headers=as_user(seeded.admin)
        )

        assert response.status_code == 404
        assert response.json()["message"] == "Location not found"


class TestGetVenue:

    @pytest.mark.asyncio
    async def test_any_authenticated_caller_can_read(self, test_client, seeded):
        venue = await create_venue(test_client, seeded.organizer, seeded.kicukiro)

        response = await test_client.get(
            f"/api/venue/{venue['id']}", headers=as_user(seeded.other_organizer)
        )

        assert response.status_code == 200
        assert response.json()["data"]["id"] == venue["id"]

    @pytest.mark.asyncio
    async def test_not_found(self, test_client, seeded):
        response = await test_client.get(f"/api/venue/{uuid4()}", headers=as_user(seeded.admin))

        assert response.status_code == 404
        assert response.json()["message"] == "Venue not found"

    @pytest.mark.asyncio
    async def test_deleted_creator_renders_as_null(self, test_client, seeded):
        venue = await create_venue(test_client, seeded.organizer, seeded.kicukiro)
        assert (await test_client.delete(f"/api/user/{seeded.organizer.id}")).status_code == 200

        response = await test_client.get(f"/api/venue/{venue['id']}", headers=as_user(seeded.admin))

        assert response.status_code == 200
        assert response.json()["data"]["createdBy"] is None


class TestModifyVenue:

    @pytest.mark.asyncio
    async def test_owner_updates(self, test_client, seeded):
        venue = await create_venue(test_client, seeded.organizer, seeded.kicukiro)

        response = await test_client.put(
            f"/api/venue/{venue['id']}",
            json={"capacity": 350},
            headers=as_user(seeded.organizer),
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["capacity"] == 350
        assert data["placeName"] == "Conference Hall"
        assert data["createdBy"]["id"] == str(seeded.organizer.id)

    @pytest.mark.asyncio
    async def test_admin_updates_any_venue(self, test_client, seeded):
        venue = await create_venue(test_client, seeded.organizer, seeded.kicukiro)

        response = await test_client.put(
            f"/api/venue/{venue['id']}",
            json={"placeName": "Renamed by admin", "location": str(seeded.kigali.id)},
            headers=as_user(seeded.admin),
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["placeName"] == "Renamed by admin"
        assert data["location"]["code"] == "KGL"
        assert data["createdBy"]["id"] == str(seeded.organizer.id)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("who", ["other_organizer", "attendee"])
    async def test_non_owner_cannot_update(self, test_client, seeded, who):
        venue = await create_venue(test_client, seeded.organizer, seeded.kicukiro)

        response = await test_client.put(
            f"/api/venue/{venue['id']}",
            json={"capacity": 1},
            headers=as_user(getattr(seeded, who)),
        )

        assert response.status_code == 403
        assert response.json()["message"] == (
            "Access denied. You can only modify venues you created"
        )

    @pytest.mark.asyncio
    async def test_update_unknown_location(self, test_client, seeded):
        venue = await create_venue(test_client, seeded.organizer, seeded.kicukiro)

        response = await test_client.put(
            f"/api/venue/{venue['id']}",
            json={"location": str(uuid4())},
            headers=as_user(seeded.organizer),
        )

        assert response.status_code == 404
        assert response.json()["message"] == "Location not found"

    @pytest.mark.asyncio
    async def test_update_capacity_above_column_range(self, test_client, seeded):
        venue = await create_venue(test_client, seeded.organizer, seeded.kicukiro)

        response = await test_client.put(
            f"/api/venue/{venue['id']}",
            json={"capacity": 2**31},
            headers=as_user(seeded.organizer),
        )

        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"

    @pytest.mark.asyncio
    async def test_update_unknown_venue(self, test_client, seeded):
        response = await test_client.put(
            f"/api/venue/{uuid4()}", json={"capacity": 10}, headers=as_user(seeded.organizer)
        )

        assert response.status_code == 404
        assert response.json()["message"] == "Venue not found"

    @pytest.mark.asyncio
    async def test_owner_deletes(self, test_client, seeded):
        venue = await create_venue(test_client, seeded.organizer, seeded.kicukiro)

        response = await test_client.delete(
            f"/api/venue/{venue['id']}", headers=as_user(seeded.organizer)
        )

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Venue deleted successfully"
        assert body["data"]["id"] == venue["id"]

        gone = await test_client.get(f"/api/venue/{venue['id']}", headers=as_user(seeded.admin))
        assert gone.status_code == 404

    @pytest.mark.asyncio
    async def test_admin_deletes_any_venue(self, test_client, seeded):
        venue = await create_venue(test_client, seeded.other_organizer, seeded.nairobi)

        response = await test_client.delete(
            f"/api/venue/{venue['id']}", headers=as_user(seeded.admin)
        )

        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_non_owner_cannot_delete(self, test_client, seeded):
        venue = await create_venue(test_client, seeded.other_organizer, seeded.nairobi)

        response = await test_client.delete(
            f"/api/venue/{venue['id']}", headers=as_user(seeded.organizer)
        )

        assert response.status_code == 403

        still_there = await test_client.get(
            f"/api/venue/{venue['id']}", headers=as_user(seeded.admin)
        )
        assert still_there.status_code == 200

from __future__ import annotations

import pytest


async def create_contact(client, first_name: str, last_name: str) -> int:
    response = await client.post(
        "/api/v1/contacts", json={"first_name": first_name, "last_name": last_name}
    )
    assert response.status_code == 201
    return response.json()["data"]["id"]


def event_payload(contact_ids, **overrides) -> dict:
    payload = {
        "title": "Coffee catch-up",
        "description": "Quarterly coffee",
        "start_date": "2099-03-01T09:00:00Z",
        "end_date": "2099-03-01T10:00:00Z",
        "location": "Blue Bottle",
        "contact_ids": contact_ids,
    }
    payload.update(overrides)
    return payload


@pytest.mark.anyio("asyncio")
async def test_event_crud_and_contact_links(client) -> None:
    zoe = await create_contact(client, "Zoe", "Young")
    adam = await create_contact(client, "Adam", "Brown")
    carl = await create_contact(client, "Carl", "Mills")

    create_resp = await client.post("/api/v1/events", json=event_payload([zoe, adam, zoe]))
    assert create_resp.status_code == 201, create_resp.text
    event = create_resp.json()["data"]
    assert event["reminder_minutes"] == 30
    assert [item["id"] for item in event["contacts"]] == [adam, zoe]

    link_resp = await client.post(f"/api/v1/events/{event['id']}/contacts/{carl}")
    assert link_resp.status_code == 201
    assert link_resp.json()["data"]["contact_id"] == carl
    again = await client.post(f"/api/v1/events/{event['id']}/contacts/{carl}")
    assert again.json()["data"]["id"] == link_resp.json()["data"]["id"]

    fetched = (await client.get(f"/api/v1/events/{event['id']}")).json()["data"]
    assert [item["id"] for item in fetched["contacts"]] == [adam, carl, zoe]

    carl_events = (await client.get(f"/api/v1/contacts/{carl}/events")).json()["data"]
    assert [item["id"] for item in carl_events] == [event["id"]]

    unlink_resp = await client.delete(f"/api/v1/events/{event['id']}/contacts/{zoe}")
    assert unlink_resp.json() == {"data": {"deleted": True}}
    unlink_again = await client.delete(f"/api/v1/events/{event['id']}/contacts/{zoe}")
    assert unlink_again.json() == {"data": {"deleted": False}}

    update_resp = await client.put(
        f"/api/v1/events/{event['id']}",
        json={"title": "Dinner", "contact_ids": [zoe]},
    )
    assert update_resp.status_code == 200
    updated = update_resp.json()["data"]
    assert updated["title"] == "Dinner"
    assert [item["id"] for item in updated["contacts"]] == [zoe]

    delete_resp = await client.delete(f"/api/v1/events/{event['id']}")
    assert delete_resp.status_code == 200
    assert (await client.get(f"/api/v1/events/{event['id']}")).status_code == 404
    assert (await client.get(f"/api/v1/contacts/{zoe}")).status_code == 200


@pytest.mark.anyio("asyncio")
async def test_event_validation(client) -> None:
    contact = await create_contact(client, "Ada", "Lovelace")

    no_contacts = await client.post("/api/v1/events", json=event_payload([]))
    assert no_contacts.status_code == 422

    backwards = await client.post(
        "/api/v1/events",
        json=event_payload([contact], end_date="2099-02-28T09:00:00Z"),
    )
    assert backwards.status_code == 422
    assert backwards.json()["error"]["code"] == "VALIDATION_ERROR"

    unknown = await client.post("/api/v1/events", json=event_payload([contact, 9999]))
    assert unknown.status_code == 404
    assert (await client.get("/api/v1/events")).json()["data"] == []

    created = (await client.post("/api/v1/events", json=event_payload([contact]))).json()["data"]
    bad_update = await client.put(
        f"/api/v1/events/{created['id']}", json={"end_date": "2000-01-01T00:00:00Z"}
    )
    assert bad_update.status_code == 422


@pytest.mark.anyio("asyncio")
async def test_upcoming_events_skip_past_ones(client) -> None:
    contact = await create_contact(client, "Ada", "Lovelace")
    await client.post(
        "/api/v1/events",
        json=event_payload(
            [contact],
            title="Past",
            start_date="2000-01-01T09:00:00Z",
            end_date="2000-01-01T10:00:00Z",
        ),
    )
    later = await client.post(
        "/api/v1/events",
        json=event_payload(
            [contact],
            title="Later",
            start_date="2099-06-01T09:00:00Z",
            end_date="2099-06-01T10:00:00Z",
        ),
    )
    sooner = await client.post("/api/v1/events", json=event_payload([contact], title="Sooner"))

    upcoming = (await client.get("/api/v1/events/upcoming")).json()["data"]
    assert [item["title"] for item in upcoming] == ["Sooner", "Later"]

    limited = (await client.get("/api/v1/events/upcoming", params={"limit": 1})).json()["data"]
    assert [item["id"] for item in limited] == [sooner.json()["data"]["id"]]
    assert later.status_code == 201

    all_events = (await client.get("/api/v1/events")).json()["data"]
    assert [item["title"] for item in all_events] == ["Past", "Sooner", "Later"]

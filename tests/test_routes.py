"""Blueprint tests through the Flask test client."""
from __future__ import annotations

import pytest
from flask_jwt_extended import create_access_token

from hobbie import transaction
from hobbie.models import CategoryNameEnum, LocationEnum, TestResults


def auth(username: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(identity=username)}"}


@pytest.fixture()
def accounts(users):
    with transaction():
        users.register_business("biz1", "biz1@example.com", "pw")
        users.register_business("biz2", "biz2@example.com", "pw")
        users.register_client(
            "alice", "alice@example.com", "pw",
            test_results=TestResults(category_one=CategoryNameEnum.OUTDOOR, location=LocationEnum.SOFIA),
        )


@pytest.fixture()
def client(app):
    return app.test_client()


HIKING = {
    "name": "Hiking <b>club</b>",
    "slogan": "Up we go",
    "price": "12.50",
    "category": "OUTDOOR",
    "location": "SOFIA",
    "profile_img_url": "https://res.cloudinary.com/demo/image/upload/p1.jpg",
    "profile_img_id": "p1",
}


def create(client, payload=HIKING, username="biz1"):
    return client.post("/api/hobbies", json=payload, headers=auth(username))


def test_health_endpoint(client) -> None:
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.get_json() == {"status": "ok"}


def test_requires_token(client) -> None:
    assert client.get("/api/hobbies/1").status_code == 401


def test_business_creates_hobby(client, users, accounts) -> None:
    response = create(client)
    assert response.status_code == 201
    body = response.get_json()
    assert body["name"] == "Hiking club"
    assert body["category"] == "OUTDOOR"
    assert body["location"] == "SOFIA"
    assert body["creator"] == "biz1"
    assert body["price"] == 12.5

    offers = users.find_business_by_username("biz1").hobby_offers
    assert {hobby.id for hobby in offers} == {body["id"]}

    listed = client.get("/api/business/hobbies", headers=auth("biz1")).get_json()
    assert [hobby["id"] for hobby in listed] == [body["id"]]


def test_client_cannot_create_hobby(client, accounts) -> None:
    response = create(client, username="alice")
    assert response.status_code == 403
    assert response.get_json()["error"]["code"] == "FORBIDDEN"


def test_invalid_payload_is_rejected(client, accounts) -> None:
    response = create(client, payload={"name": "", "category": "KNITTING", "location": "SOFIA"})
    assert response.status_code == 400
    error = response.get_json()["error"]
    assert error["code"] == "VALIDATION_ERROR"
    assert {"name", "category"} <= set(error["fields"])


def test_unknown_hobby_is_404(client, accounts) -> None:
    response = client.get("/api/hobbies/999", headers=auth("alice"))
    assert response.status_code == 404
    assert response.get_json()["error"] == {"code": "NOT_FOUND", "message": "This hobby does not exist"}


def test_update_purges_previous_images(client, accounts, purger) -> None:
    hobby_id = create(client).get_json()["id"]
    payload = dict(HIKING, name="Night hiking", profile_img_id="p2")

    response = client.put(f"/api/hobbies/{hobby_id}", json=payload, headers=auth("biz1"))

    assert response.status_code == 200
    assert response.get_json()["profile_img_id"] == "p2"
    assert purger.calls == [(["p1"], {"invalidate": True})]


def test_only_creator_can_update_or_delete(client, accounts, purger) -> None:
    hobby_id = create(client).get_json()["id"]

    assert client.put(f"/api/hobbies/{hobby_id}", json=HIKING, headers=auth("biz2")).status_code == 403
    assert client.delete(f"/api/hobbies/{hobby_id}", headers=auth("biz2")).status_code == 403
    assert purger.calls == []


def test_delete_hobby(client, accounts, purger) -> None:
    hobby_id = create(client).get_json()["id"]
    client.post(f"/api/hobbies/{hobby_id}/save", headers=auth("alice"))

    response = client.delete(f"/api/hobbies/{hobby_id}", headers=auth("biz1"))

    assert response.status_code == 200
    assert purger.calls == [(["p1"], {"invalidate": True})]
    assert client.get(f"/api/hobbies/{hobby_id}", headers=auth("alice")).status_code == 404
    assert client.get("/api/hobbies/saved", headers=auth("alice")).get_json() == []


def test_save_and_remove_flow(client, accounts) -> None:
    hobby_id = create(client).get_json()["id"]

    first = client.post(f"/api/hobbies/{hobby_id}/save", headers=auth("alice"))
    second = client.post(f"/api/hobbies/{hobby_id}/save", headers=auth("alice"))
    assert (first.status_code, first.get_json()) == (201, {"saved": True})
    assert (second.status_code, second.get_json()) == (200, {"saved": False})

    assert client.get(f"/api/hobbies/{hobby_id}/saved", headers=auth("alice")).get_json() == {"saved": True}
    saved = client.get("/api/hobbies/saved", headers=auth("alice")).get_json()
    assert [hobby["id"] for hobby in saved] == [hobby_id]

    assert client.delete(f"/api/hobbies/{hobby_id}/save", headers=auth("alice")).status_code == 200
    assert client.get(f"/api/hobbies/{hobby_id}/saved", headers=auth("alice")).get_json() == {"saved": False}


def test_unknown_client_cannot_save(client, accounts) -> None:
    hobby_id = create(client).get_json()["id"]

    response = client.post(f"/api/hobbies/{hobby_id}/save", headers=auth("ghost"))

    assert response.get_json() == {"saved": False}
    assert client.get(f"/api/hobbies/{hobby_id}/saved", headers=auth("ghost")).get_json() == {"saved": False}


def test_matches_endpoint(client, accounts) -> None:
    for index in range(12):
        create(client, payload=dict(HIKING, name=f"Hike {index}"))
    create(client, payload=dict(HIKING, name="Concert", category="MUSIC"))

    response = client.get("/api/hobbies/matches", headers=auth("alice"))

    assert response.status_code == 200
    matches = response.get_json()
    assert len(matches) == 10
    assert all(hobby["category"] == "OUTDOOR" for hobby in matches)
    assert client.get("/api/hobbies/matches", headers=auth("biz1")).get_json() == []

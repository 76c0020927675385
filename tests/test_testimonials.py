import pytest


@pytest.mark.parametrize("prefix", ["/testimonials", "/admin/testimonials"])
def test_crud(client, prefix):
    created = client.post(prefix, json={"rating": 5, "comment": "Best sweets in town", "images": [" a.jpg ", ""]})
    assert created.status_code == 201
    testimonial = created.json()["result"]["testimonial"]
    assert testimonial["images"] == ["a.jpg"]

    testimonial_id = testimonial["id"]
    assert client.get(f"{prefix}/{testimonial_id}").status_code == 200

    patched = client.patch(f"{prefix}/{testimonial_id}", json={"comment": "Still the best"})
    assert patched.json()["result"]["testimonial"]["comment"] == "Still the best"
    assert patched.json()["result"]["testimonial"]["rating"] == 5

    replaced = client.put(f"{prefix}/{testimonial_id}", json={"rating": 3, "comment": "Okay"})
    assert replaced.status_code == 200
    assert replaced.json()["result"]["testimonial"]["rating"] == 3

    deleted = client.delete(f"{prefix}/{testimonial_id}")
    assert deleted.json()["message"] == "Testimonial deleted successfully"
    assert client.get(f"{prefix}/{testimonial_id}").status_code == 404


def test_both_mounts_share_a_collection(client):
    client.post("/admin/testimonials", json={"rating": 4, "comment": "Fresh"})
    result = client.get("/testimonials").json()["result"]
    assert len(result["testimonials"]) == 1


def test_create_requires_comment(client):
    response = client.post("/testimonials", json={"rating": 4, "comment": "   "})
    assert response.status_code == 400
    assert response.json()["message"] == "Invalid request body. Required fields: rating, comment"


def test_list_sorted_by_rating(client):
    client.post("/testimonials", json={"rating": 4, "comment": "first"})
    client.post("/testimonials", json={"rating": 2, "comment": "second"})
    testimonials = client.get("/testimonials", params={"sort": "rating:asc"}).json()["result"]["testimonials"]
    assert [t["comment"] for t in testimonials] == ["second", "first"]

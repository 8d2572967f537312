from __future__ import annotations

from printqueue.config import settings
from printqueue.store.base import JOBS, PRESSES


def _create(client, headers, **fields):
    payload = {"title": "Flyers", "quantity": 500, **fields}
    response = client.post("/api/v1/jobs", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


def test_requires_bearer_token(client):
    assert client.get("/api/v1/jobs").status_code == 401
    bad = client.get("/api/v1/jobs", headers={"Authorization": "Bearer nope"})
    assert bad.status_code == 401


def test_account_without_profile_is_forbidden(client, identity):
    identity.create_user("ghost@shop.test", "secret-pass")
    token = identity.sign_in("ghost@shop.test", "secret-pass").access_token
    response = client.get("/api/v1/jobs", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 403


def test_create_job_sets_defaults(client, store, admin_headers):
    press_id = store.add(PRESSES, {"name": "Press 1"})
    job = _create(client, admin_headers, pressId=press_id, hot=True, frontColor1="", notes="Rush")

    assert job["status"] == "open"
    assert job["pressName"] == "Press 1"
    assert job["frontColor1"] is None
    assert job["createdAt"] is not None
    assert job["createdBy"]["role"] == "admin"
    assert store.get(JOBS, job["id"])["title"] == "Flyers"


def test_create_job_rejects_bad_quantity_and_title(client, admin_headers):
    assert client.post("/api/v1/jobs", json={"title": "X", "quantity": 0},
                       headers=admin_headers).status_code == 422
    assert client.post("/api/v1/jobs", json={"title": "  ", "quantity": 1},
                       headers=admin_headers).status_code == 422


def test_only_admins_create(client, user_headers):
    response = client.post("/api/v1/jobs", json={"title": "X", "quantity": 1}, headers=user_headers)
    assert response.status_code == 403


def test_list_filters_and_sorts(client, store, user_headers):
    store.set(JOBS, "old", {"title": "Old", "quantity": 1, "status": "completed",
                            "createdAt": "2024-01-01T00:00:00Z"})
    store.set(JOBS, "mid", {"title": "Mid", "quantity": 1, "hot": True, "status": "open",
                            "createdAt": "2024-02-01T00:00:00Z"})
    store.set(JOBS, "new", {"title": "New", "quantity": 1, "status": "in-progress",
                            "createdAt": "2024-03-01T00:00:00Z"})
    store.set(JOBS, "undated", {"title": "Undated", "quantity": 1})

    body = client.get("/api/v1/jobs", headers=user_headers).json()
    assert [j["id"] for j in body["jobs"]] == ["new", "mid", "old", "undated"]
    assert body["count"] == 4

    body = client.get("/api/v1/jobs?filter=open&sort=oldest", headers=user_headers).json()
    assert [j["id"] for j in body["jobs"]] == ["undated", "mid", "new"]

    body = client.get("/api/v1/jobs?filter=hot", headers=user_headers).json()
    assert [j["id"] for j in body["jobs"]] == ["mid"]

    body = client.get("/api/v1/jobs?filter=whatever", headers=user_headers).json()
    assert body["count"] == 4


def test_update_keeps_status_and_created_at(client, store, admin_headers):
    job = _create(client, admin_headers)
    store.update(JOBS, job["id"], {"status": "in-progress"})

    response = client.put(
        f"/api/v1/jobs/{job['id']}",
        json={"title": "Flyers v2", "quantity": 750},
        headers=admin_headers,
    )
    assert response.status_code == 200
    updated = response.json()
    assert updated["title"] == "Flyers v2"
    assert updated["status"] == "in-progress"
    assert updated["createdAt"] == job["createdAt"]
    assert updated["createdBy"] == job["createdBy"]


def test_update_missing_job_is_404(client, admin_headers):
    response = client.put("/api/v1/jobs/missing", json={"title": "X", "quantity": 1},
                          headers=admin_headers)
    assert response.status_code == 404


def test_complete_job(client, admin_headers, user_headers):
    job = _create(client, admin_headers)

    done = client.post(f"/api/v1/jobs/{job['id']}/complete", headers=user_headers).json()
    assert done["status"] == "completed"
    assert done["completedAt"] is not None

    again = client.post(f"/api/v1/jobs/{job['id']}/complete", headers=user_headers).json()
    assert again["completedAt"] == done["completedAt"]


def test_delete_job(client, store, admin_headers):
    job = _create(client, admin_headers)
    assert client.delete(f"/api/v1/jobs/{job['id']}", headers=admin_headers).status_code == 204
    assert store.get(JOBS, job["id"]) is None
    assert client.delete(f"/api/v1/jobs/{job['id']}", headers=admin_headers).status_code == 404


def test_upload_job_image(client, blobs, admin_headers, png_bytes):
    job = _create(client, admin_headers)
    response = client.post(
        f"/api/v1/jobs/{job['id']}/image",
        files={"file": ("proof.png", png_bytes, "image/png")},
        headers=admin_headers,
    )
    assert response.status_code == 200, response.text
    url = response.json()["imageUrl"]
    assert url.startswith("memory://job-images/")
    assert url.endswith("-proof.png")
    assert list(blobs.objects.values()) == [png_bytes]


def test_upload_rejects_non_images(client, admin_headers):
    job = _create(client, admin_headers)
    wrong_type = client.post(
        f"/api/v1/jobs/{job['id']}/image",
        files={"file": ("notes.txt", b"hello", "text/plain")},
        headers=admin_headers,
    )
    assert wrong_type.status_code == 400

    fake_png = client.post(
        f"/api/v1/jobs/{job['id']}/image",
        files={"file": ("fake.png", b"not really a png", "image/png")},
        headers=admin_headers,
    )
    assert fake_png.status_code == 400


def test_upload_requires_image_content_type(client, admin_headers, png_bytes):
    job = _create(client, admin_headers)
    response = client.post(
        f"/api/v1/jobs/{job['id']}/image",
        files={"file": ("proof.png", png_bytes, "application/octet-stream")},
        headers=admin_headers,
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "File must be an image"


def test_upload_too_large(client, blobs, admin_headers, png_bytes, monkeypatch):
    monkeypatch.setattr(settings, "max_upload_mb", 0)
    job = _create(client, admin_headers)
    response = client.post(
        f"/api/v1/jobs/{job['id']}/image",
        files={"file": ("proof.png", png_bytes, "image/png")},
        headers=admin_headers,
    )
    assert response.status_code == 413
    assert response.json()["detail"] == "File too large (max 0 MB)"
    assert blobs.objects == {}

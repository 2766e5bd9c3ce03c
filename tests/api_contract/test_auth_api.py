from __future__ import annotations

from datetime import timedelta
from uuid import uuid4

from portal.core.config import settings
from portal.core.rbac import Role
from portal.core.security import create_access_token

from tests.factories import make_deliverable


def test_me_from_bearer(client, editor_headers, editor_id):
    r = client.get("/auth/me", headers=editor_headers)
    assert r.status_code == 200, r.text
    assert r.json() == {
        "id": str(editor_id),
        "email": "editor@creomotion.studio",
        "role": "EDITOR",
        "kind": "USER",
    }


def test_me_from_session_cookie(client, client_id):
    client.cookies.set(settings.session_cookie_name, create_access_token(subject=client_id, role=Role.client))

    r = client.get("/auth/me")
    assert r.status_code == 200, r.text
    assert r.json()["kind"] == "CLIENT"
    assert r.json()["id"] == str(client_id)


def test_missing_token_is_401(client):
    r = client.get("/auth/me")
    assert r.status_code == 401, r.text
    assert r.json()["detail"] == "Unauthorized"


def test_bad_tokens_are_401(client):
    expired = create_access_token(subject=uuid4(), role=Role.admin, expires_delta=timedelta(minutes=-5))
    forged = create_access_token(subject=uuid4(), role="SUPERUSER")

    for token in ("not-a-jwt", expired, forged):
        r = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert r.status_code == 401, (token, r.text)


def test_write_rejected_without_session_reads_allowed(client, db):
    d = make_deliverable(db)
    db.commit()

    r = client.post(
        f"/deliverables/{d.id}/timeline-comments",
        json={"content": "anonymous", "timestamp": 1.0},
    )
    assert r.status_code == 401, r.text

    r = client.get(f"/deliverables/{d.id}/timeline-comments")
    assert r.status_code == 200, r.text


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok", "version": settings.api_version}

from __future__ import annotations

from uuid import uuid4

from portal.models.deliverable import Deliverable

from tests.factories import make_deliverable, make_version


def _approve(client, deliverable_id, headers, body=None):
    return client.post(f"/deliverables/{deliverable_id}/approve", json=body, headers=headers)


def _request_changes(client, deliverable_id, headers, body=None):
    return client.post(f"/deliverables/{deliverable_id}/request-changes", json=body, headers=headers)


def test_approve_draft_without_versions(client, db, client_headers, client_id):
    d = make_deliverable(db, client_id=client_id)
    db.commit()

    r = _approve(client, d.id, client_headers)
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["status"] == "APPROVED"
    assert body["deliverable_status"] == "APPROVED"
    assert body["approval"]["version_id"] is None
    assert body["approval"]["notes"] == ""
    assert body["approval"]["approver_id"] == str(client_id)
    assert body["approval"]["approver_type"] == "CLIENT"

    db.expire_all()
    assert db.get(Deliverable, d.id).status == "APPROVED"


def test_decision_defaults_to_latest_version(client, db, editor_headers):
    d = make_deliverable(db, version=2)
    make_version(db, deliverable_id=d.id, version_number=1)
    v2 = make_version(db, deliverable_id=d.id, version_number=2)
    db.commit()

    r = _approve(client, d.id, editor_headers, {"notes": "Looks great"})
    assert r.status_code == 200, r.text
    assert r.json()["approval"]["version_id"] == str(v2.id)
    assert r.json()["approval"]["notes"] == "Looks great"
    assert r.json()["approval"]["approver_type"] == "USER"


def test_explicit_version_is_judged(client, db, editor_headers):
    d = make_deliverable(db, version=2)
    v1 = make_version(db, deliverable_id=d.id, version_number=1)
    make_version(db, deliverable_id=d.id, version_number=2)
    db.commit()

    r = _request_changes(client, d.id, editor_headers, {"version_id": str(v1.id), "notes": "v1 end card"})
    assert r.status_code == 200, r.text
    assert r.json()["approval"]["version_id"] == str(v1.id)
    assert r.json()["status"] == "CHANGES_REQUESTED"


def test_explicit_version_must_belong_to_deliverable(client, db, editor_headers):
    d = make_deliverable(db, status="IN_REVIEW")
    other = make_deliverable(db)
    foreign = make_version(db, deliverable_id=other.id, version_number=1)
    db.commit()

    for version_id in (foreign.id, uuid4()):
        r = _approve(client, d.id, editor_headers, {"version_id": str(version_id)})
        assert r.status_code == 404, r.text

    # nothing written
    assert client.get(f"/deliverables/{d.id}/approvals").json() == []
    db.expire_all()
    assert db.get(Deliverable, d.id).status == "IN_REVIEW"


def test_request_changes_from_approved_goes_back_to_review(client, db, editor_headers):
    d = make_deliverable(db, status="APPROVED")
    db.commit()

    r = _request_changes(client, d.id, editor_headers, {"notes": "Logo needs to be bigger"})
    assert r.status_code == 200, r.text
    assert r.json()["deliverable_status"] == "IN_REVIEW"
    assert r.json()["status"] == "CHANGES_REQUESTED"


def test_every_decision_appends_a_row(client, db, client_headers):
    d = make_deliverable(db)
    db.commit()

    assert _approve(client, d.id, client_headers).status_code == 200
    assert _approve(client, d.id, client_headers).status_code == 200
    assert _request_changes(client, d.id, client_headers).status_code == 200

    r = client.get(f"/deliverables/{d.id}/approvals")
    assert r.status_code == 200, r.text
    assert [a["status"] for a in r.json()] == ["APPROVED", "APPROVED", "CHANGES_REQUESTED"]


def test_decision_on_unknown_deliverable_is_404(client, editor_headers):
    r = _approve(client, uuid4(), editor_headers)
    assert r.status_code == 404, r.text


def test_decision_requires_session(client, db):
    d = make_deliverable(db)
    db.commit()

    assert _approve(client, d.id, {}).status_code == 401
    assert _request_changes(client, d.id, {}).status_code == 401


def test_decision_body_rejects_unknown_fields(client, db, editor_headers):
    d = make_deliverable(db)
    db.commit()

    r = _approve(client, d.id, editor_headers, {"status": "APPROVED", "approver_id": str(uuid4())})
    assert r.status_code == 400, r.text

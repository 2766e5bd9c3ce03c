from __future__ import annotations

from uuid import uuid4

from tests.factories import make_annotation, make_deliverable


def _url(deliverable_id) -> str:
    return f"/deliverables/{deliverable_id}/annotations"


def test_timestamp_zero_is_accepted_and_defaults_applied(client, db, client_headers, client_id):
    d = make_deliverable(db)
    db.commit()

    r = client.post(
        _url(d.id),
        json={"type": "point", "coordinates": {"x": 1, "y": 2}, "timestamp": 0},
        headers=client_headers,
    )
    assert r.status_code == 201, r.text
    body = r.json()
    assert body["timestamp"] == 0
    assert body["color"] == "#ff006e"
    assert body["comment"] == ""
    assert body["coordinates"] == {"x": 1, "y": 2}
    assert body["author_id"] == str(client_id)


def test_explicit_color_and_comment_are_kept(client, db, editor_headers):
    d = make_deliverable(db)
    db.commit()

    r = client.post(
        _url(d.id),
        json={
            "type": "rect",
            "coordinates": {"x": 0.1, "y": 0.2, "w": 0.3, "h": 0.15},
            "timestamp": 12.48,
            "color": "#00d1ff",
            "comment": "Logo too close to the edge",
        },
        headers=editor_headers,
    )
    assert r.status_code == 201, r.text
    assert r.json()["color"] == "#00d1ff"
    assert r.json()["comment"] == "Logo too close to the edge"


def test_missing_required_fields_is_400(client, db, editor_headers):
    d = make_deliverable(db)
    db.commit()

    for body in (
        {"type": "point", "coordinates": {"x": 1}},  # no timestamp
        {"coordinates": {"x": 1}, "timestamp": 1.0},  # no type
        {"type": "point", "timestamp": 1.0},  # no coordinates
        {"type": "point", "coordinates": {"x": 1}, "timestamp": -1},
    ):
        r = client.post(_url(d.id), json=body, headers=editor_headers)
        assert r.status_code == 400, (body, r.text)

    assert client.get(_url(d.id)).json() == []


def test_list_ordered_by_timestamp(client, db):
    d = make_deliverable(db)
    make_annotation(db, deliverable_id=d.id, timestamp=9.5)
    make_annotation(db, deliverable_id=d.id, timestamp=0.0)
    make_annotation(db, deliverable_id=d.id, timestamp=3.25)
    db.commit()

    r = client.get(_url(d.id))
    assert r.status_code == 200, r.text
    assert [a["timestamp"] for a in r.json()] == [0.0, 3.25, 9.5]


def test_create_on_unknown_deliverable_is_404(client, editor_headers):
    r = client.post(
        _url(uuid4()),
        json={"type": "point", "coordinates": {"x": 1}, "timestamp": 1},
        headers=editor_headers,
    )
    assert r.status_code == 404, r.text


def test_delete_annotation(client, db, editor_headers):
    d = make_deliverable(db)
    a = make_annotation(db, deliverable_id=d.id)
    db.commit()

    r = client.delete(f"{_url(d.id)}/{a.id}", headers=editor_headers)
    assert r.status_code == 200, r.text
    assert r.json() == {"success": True}
    assert client.get(_url(d.id)).json() == []

    # already gone
    r = client.delete(f"{_url(d.id)}/{a.id}", headers=editor_headers)
    assert r.status_code == 404, r.text


def test_delete_through_other_deliverable_is_404(client, db, editor_headers):
    d = make_deliverable(db)
    other = make_deliverable(db)
    a = make_annotation(db, deliverable_id=d.id)
    db.commit()

    r = client.delete(f"{_url(other.id)}/{a.id}", headers=editor_headers)
    assert r.status_code == 404, r.text
    assert len(client.get(_url(d.id)).json()) == 1


def test_delete_requires_session(client, db):
    d = make_deliverable(db)
    a = make_annotation(db, deliverable_id=d.id)
    db.commit()

    r = client.delete(f"{_url(d.id)}/{a.id}")
    assert r.status_code == 401, r.text

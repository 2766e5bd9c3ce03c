from __future__ import annotations

from typing import Any, Dict, List

import pytest


def _get(d: Dict[str, Any], path: List[str], default=None):
    cur: Any = d
    for p in path:
        if not isinstance(cur, dict) or p not in cur:
            return default
        cur = cur[p]
    return cur


@pytest.fixture()
def openapi(client) -> Dict[str, Any]:
    r = client.get("/openapi.json", headers={})
    assert r.status_code == 200, r.text
    return r.json()


def test_openapi_json_is_public(openapi):
    """/openapi.json is part of the API contract and needs no session."""
    assert "openapi" in openapi
    assert "paths" in openapi


@pytest.mark.parametrize(
    "path, method",
    [
        ("/deliverables/{deliverable_id}/versions", "get"),
        ("/deliverables/{deliverable_id}/versions", "post"),
        ("/deliverables/{deliverable_id}/annotations", "get"),
        ("/deliverables/{deliverable_id}/annotations", "post"),
        ("/deliverables/{deliverable_id}/annotations/{annotation_id}", "delete"),
        ("/deliverables/{deliverable_id}/timeline-comments", "get"),
        ("/deliverables/{deliverable_id}/timeline-comments", "post"),
        ("/deliverables/{deliverable_id}/timeline-comments/{comment_id}", "patch"),
        ("/deliverables/{deliverable_id}/timeline-comments/{comment_id}", "delete"),
        ("/deliverables/{deliverable_id}/approve", "post"),
        ("/deliverables/{deliverable_id}/request-changes", "post"),
        ("/deliverables/{deliverable_id}/approvals", "get"),
    ],
)
def test_review_endpoints_documented(openapi, path, method):
    paths = openapi.get("paths", {})
    assert path in paths, list(paths.keys())
    assert method in paths[path], f"{method.upper()} {path} missing"


def test_decision_body_is_optional_and_has_no_status_field(openapi):
    """The decision comes from the endpoint, never from the body."""
    post = openapi["paths"]["/deliverables/{deliverable_id}/approve"]["post"]
    assert _get(post, ["requestBody", "required"], False) is False

    props = _get(openapi, ["components", "schemas", "ReviewDecisionRequest", "properties"], {})
    assert set(props) == {"notes", "version_id"}


def test_create_schemas_do_not_accept_author_fields(openapi):
    schemas = _get(openapi, ["components", "schemas"], {})
    for name in ("AnnotationCreate", "TimelineCommentCreate", "DeliverableVersionCreate"):
        props = schemas[name]["properties"]
        assert not {"author_id", "author_type", "created_by"} & set(props), name


def test_session_schemes_documented(openapi):
    schemes = _get(openapi, ["components", "securitySchemes"], {})
    assert "APIKeyCookie" in schemes
    assert schemes["APIKeyCookie"]["name"] == "auth-token"
    assert "HTTPBearer" in schemes

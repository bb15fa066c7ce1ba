"""
Tests for the /admin HTTP API.

Requests and responses use camelCase JSON; failures are rendered as
``{"error": {"type", "message", "detail"}}``.
"""

import pytest

LIGHT = {"name": "Light Years", "venue": "Gallery One", "dates": "Jan 2024"}


@pytest.fixture
def api(client, auth_headers):
    """Small helper bound to an authenticated client."""

    class Api:
        def get(self, path, **kwargs):
            return client.get(path, headers=auth_headers, **kwargs)

        def post(self, path, json=None):
            return client.post(path, json=json, headers=auth_headers)

        def put(self, path, json=None):
            return client.put(path, json=json, headers=auth_headers)

        def patch(self, path, json=None):
            return client.patch(path, json=json, headers=auth_headers)

        def delete(self, path):
            return client.delete(path, headers=auth_headers)

        def artwork(self, **body):
            response = self.post("/admin/artworks", json=body)
            assert response.status_code == 201, response.text
            return response.json()

    return Api()


class TestArtworkEndpoints:
    def test_create_uses_camel_case(self, api):
        artwork = api.artwork(title="Figure Study", slug="figure-study", sortOrder=2)

        assert artwork["sortOrder"] == 2
        assert artwork["exhibitionHistory"] == []
        assert artwork["version"] == 1
        assert "sort_order" not in artwork

    def test_get_update_delete(self, api):
        artwork = api.artwork(title="Figure Study")
        path = f"/admin/artworks/{artwork['id']}"

        response = api.patch(path, json={"title": "Renamed", "version": 1})
        assert response.status_code == 200
        assert response.json()["version"] == 2

        assert api.get(path).json()["title"] == "Renamed"
        assert api.delete(path).status_code == 204
        assert api.get(path).status_code == 404

    def test_stale_version_is_rejected(self, api):
        artwork = api.artwork(title="Figure Study")
        path = f"/admin/artworks/{artwork['id']}"
        api.patch(path, json={"title": "First"})

        response = api.patch(path, json={"title": "Second", "version": 1})

        assert response.status_code == 500
        assert response.json()["error"]["type"] == "UPDATE_FAILED"

    def test_invalid_slug_error_shape(self, api):
        response = api.post("/admin/artworks", json={"title": "x", "slug": "Not Valid"})

        assert response.status_code == 422
        error = response.json()["error"]
        assert error["type"] == "INVALID_FORMAT"
        assert error["message"].startswith("Slug must contain")
        assert "Not Valid" in error["detail"]

    def test_duplicate_and_list(self, api):
        artwork = api.artwork(title="Figure Study", slug="figure-study")
        response = api.post(f"/admin/artworks/{artwork['id']}/duplicate")

        assert response.status_code == 201
        assert response.json()["slug"] == "figure-study-copy"
        listed = api.get("/admin/artworks", params={"includeDrafts": "true"}).json()
        assert len(listed) == 2

    def test_view_counter_needs_no_token(self, client, api):
        artwork = api.artwork(title="Figure Study")

        response = client.post(f"/admin/artworks/{artwork['id']}/views")

        assert response.status_code == 204
        assert api.get(f"/admin/artworks/{artwork['id']}").json()["viewsCount"] == 1


class TestCollectionEndpoints:
    def test_body_works_flow(self, api):
        ids = [api.artwork(title=f"Study {i}", sortOrder=i)["id"] for i in range(3)]

        response = api.post(
            "/admin/collections/assign",
            json={"artworkIds": ids, "collectionName": "Body Works"},
        )
        assert response.json() == {"status": "success", "updated": 3}

        groups = api.get("/admin/collections").json()
        assert [a["id"] for a in groups["Body Works"]] == ids

        response = api.patch("/admin/collections/Body Works", json={"newName": "Figures"})
        assert response.json()["updated"] == 3
        assert api.get("/admin/collections/series").json() == ["Figures"]

        response = api.post("/admin/collections/remove", json={"artworkIds": [ids[0]]})
        assert response.json()["updated"] == 1

        response = api.delete("/admin/collections/Figures")
        assert response.json()["updated"] == 2
        assert api.get("/admin/collections").json() == {}

    def test_rename_to_same_name(self, api):
        artwork = api.artwork(title="A", series="Same")
        assert artwork["series"] == "Same"

        response = api.patch("/admin/collections/Same", json={"newName": "Same"})

        assert response.status_code == 422
        assert response.json()["error"]["type"] == "VALIDATION_ERROR"

    def test_assign_without_artworks(self, api):
        response = api.post("/admin/collections/assign", json={"collectionName": "S"})
        assert response.status_code == 422

    def test_delete_unknown_collection(self, api):
        response = api.delete("/admin/collections/Nope")
        assert response.status_code == 404
        assert response.json()["error"]["message"] == "Collection not found."


class TestExhibitionEndpoints:
    def test_exhibition_lifecycle(self, api):
        a = api.artwork(title="A")["id"]
        b = api.artwork(title="B")["id"]

        response = api.post(
            "/admin/exhibitions",
            json={"artworkIds": [a, b], "exhibition": {**LIGHT, "coverImage": "c.jpg"}},
        )
        assert response.json() == {"succeeded": [a, b], "unchanged": [], "failed": []}

        [exhibition] = api.get("/admin/exhibitions").json()
        assert exhibition["coverImage"] == "c.jpg"
        assert {art["id"] for art in exhibition["artworks"]} == {a, b}

        renamed = {**LIGHT, "name": "Light Years II"}
        response = api.put(
            "/admin/exhibitions", json={"oldKey": LIGHT, "exhibition": renamed}
        )
        assert sorted(response.json()["succeeded"]) == sorted([a, b])

        response = api.post(
            "/admin/exhibitions/remove-artworks", json={"artworkIds": [a], "key": renamed}
        )
        assert response.json()["succeeded"] == [a]

        response = api.post("/admin/exhibitions/delete", json=renamed)
        assert response.json()["succeeded"] == [b]
        assert api.get("/admin/exhibitions").json() == []

        response = api.post("/admin/exhibitions/delete", json=renamed)
        assert response.status_code == 404
        assert response.json()["error"]["type"] == "NOT_FOUND"

    def test_partial_failure_is_reported_per_row(self, api):
        a = api.artwork(title="A")["id"]

        response = api.post(
            "/admin/exhibitions", json={"artworkIds": ["missing", a], "exhibition": LIGHT}
        )

        assert response.status_code == 200
        body = response.json()
        assert body["succeeded"] == [a]
        assert body["failed"][0]["id"] == "missing"
        assert body["failed"][0]["errorType"] == "NOT_FOUND"

    def test_every_row_failing_is_an_error(self, api):
        response = api.post(
            "/admin/exhibitions", json={"artworkIds": ["missing"], "exhibition": LIGHT}
        )
        assert response.status_code == 500
        assert response.json()["error"]["type"] == "UPDATE_FAILED"

    def test_blank_key_field(self, api):
        a = api.artwork(title="A")["id"]
        response = api.post(
            "/admin/exhibitions",
            json={"artworkIds": [a], "exhibition": {**LIGHT, "venue": ""}},
        )
        assert response.status_code == 422
        assert response.json()["error"]["type"] == "REQUIRED_FIELD"


class TestOwnedContentEndpoints:
    def test_pages(self, api):
        response = api.post("/admin/pages", json={"title": "About", "isHomepage": True})
        assert response.status_code == 201
        page = response.json()
        assert page["slug"] == "about"
        assert page["markdownFileUrl"].endswith("/pages/about.md")

        assert [p["id"] for p in api.get("/admin/pages").json()] == [page["id"]]
        assert api.get("/admin/pages/homepage").json() is None

        api.patch(f"/admin/pages/{page['id']}", json={"status": "published"})
        assert api.get("/admin/pages/homepage").json()["id"] == page["id"]

        assert api.delete(f"/admin/pages/{page['id']}").status_code == 204

    def test_blogs(self, api):
        response = api.post("/admin/blogs", json={"title": "Studio Notes", "content": "..."})
        assert response.status_code == 201
        assert api.get("/admin/blogs").json()[0]["slug"] == "studio-notes"

    def test_media_requires_file_url(self, api):
        response = api.post("/admin/media", json={"title": "Photo", "fileType": "image"})
        assert response.status_code == 422
        assert response.json()["error"]["message"] == "file_url is required."

    def test_performances_filter_by_type(self, api):
        api.post("/admin/performances", json={"title": "Solo Night"})
        api.post("/admin/performances", json={"title": "Ensemble", "type": "group"})

        listed = api.get("/admin/performances", params={"type": "group"}).json()

        assert [p["title"] for p in listed] == ["Ensemble"]


class TestAuditEndpoint:
    def test_grouping_changes_are_listed(self, api):
        artwork = api.artwork(title="A")
        api.post(
            "/admin/collections/assign",
            json={"artworkIds": [artwork["id"]], "collectionName": "Body Works"},
        )

        entries = api.get("/admin/audit", params={"entityKind": "Collection"}).json()

        assert [e["entityId"] for e in entries] == ["Body Works"]
        assert entries[0]["action"] == "assigned"
        assert entries[0]["actorId"] == "user-1"

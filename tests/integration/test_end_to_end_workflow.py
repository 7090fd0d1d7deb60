"""End-to-end workflow tests.

Walks the admin flow over HTTP: create a component, upload previews, attach
them, swap the preview and delete the component, checking the media files on
disk at each step.
"""

import pytest

pytestmark = pytest.mark.integration

JPEG_10KB = b"\xff\xd8\xff\xe0" + b"\x00" * 10236


def _upload(client, component_id, filename, data, mime_type):
    response = client.post(
        "/api/media/upload",
        files={"file": (filename, data, mime_type)},
        data={"componentId": component_id},
    )
    assert response.status_code == 200
    return response.json()


class TestComponentLifecycle:
    """Create -> upload -> attach -> replace -> delete."""

    def test_full_lifecycle(self, client, storage):
        created = client.post(
            "/api/components",
            json={
                "title": "Magnetic Button",
                "description": "Button that follows the cursor",
                "category": "Buttons",
                "tags": ["UI", "Cursor"],
                "htmlContent": "<button class=\"magnetic\">Hover</button>",
            },
        ).json()
        component_id = created["id"]

        image = _upload(client, component_id, "preview.jpg", JPEG_10KB, "image/jpeg")
        assert image["url"].startswith(f"/uploads/images/{component_id}/")
        image_file = storage.media_root / image["path"]
        assert image_file.stat().st_size == len(JPEG_10KB)

        attached = client.put(f"/api/components/{component_id}", json={"previewImage": image["url"]}).json()
        assert attached["previewImage"] == image["url"]
        assert attached["mediaType"] == "image"
        assert attached["content"]["html"] == "<button class=\"magnetic\">Hover</button>"

        video = _upload(client, component_id, "preview.mp4", b"\x00\x00\x00\x18ftypmp42", "video/mp4")
        swapped = client.put(
            f"/api/components/{component_id}",
            json={"previewImage": None, "previewVideo": video["url"]},
        ).json()
        assert swapped["previewImage"] is None
        assert swapped["mediaType"] == "video"
        assert not image_file.exists()

        catalog_entry = client.get(f"/api/catalog/{created['slug']}").json()
        assert catalog_entry["previewVideo"] == video["url"]
        assert catalog_entry["tags"] == ["ui", "cursor"]

        assert client.delete(f"/api/components/{component_id}").status_code == 200
        assert not (storage.media_root / video["path"]).exists()
        assert client.get(f"/api/catalog/{created['slug']}").status_code == 404

    def test_upload_then_attach(self, client):
        """Test a 10KB JPEG uploaded for 'abc' is attached through an update."""
        client.post(
            "/api/components",
            json={"id": "abc", "title": "Glow Card", "description": "d", "category": "Cards"},
        )

        upload = _upload(client, "abc", "glow.jpg", JPEG_10KB, "image/jpeg")
        client.put("/api/components/abc", json={"previewImage": upload["url"]})
        fetched = client.get("/api/components/abc").json()

        assert "/abc/" in upload["url"]
        assert upload["mediaType"] == "image"
        assert fetched["previewImage"] == upload["url"]
        assert fetched["mediaType"] == "image"
        assert fetched["slug"] == "glow-card"

    def test_upload_before_component_exists(self, client, storage):
        """Test uploads for an unsaved component land under the default folder."""
        upload = _upload(client, "", "draft.png", b"\x89PNG", "image/png")

        created = client.post(
            "/api/components",
            json={
                "title": "Draft Card",
                "description": "Uploaded before saving",
                "category": "Cards",
                "previewImage": upload["url"],
            },
        )

        assert upload["path"].startswith("images/default/")
        assert created.status_code == 201
        assert created.json()["mediaType"] == "image"

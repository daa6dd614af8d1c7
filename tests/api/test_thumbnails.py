"""
Test Thumbnail API Endpoints
"""
import uuid
from io import BytesIO
from pathlib import Path
from unittest.mock import patch

import pytest

from tubely.errors import StorageError

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"x" * 1024


def upload(client, video_id, headers=None, content=PNG_BYTES, content_type="image/png", field="thumbnail"):
    return client.post(
        f"/api/thumbnail_upload/{video_id}",
        headers=headers or {},
        files={field: ("thumb.png", BytesIO(content), content_type)}
    )


def test_upload_thumbnail_success(client, video, owner_id, auth_headers, settings):
    """Test successful thumbnail upload"""
    response = upload(client, video.video_id, auth_headers(owner_id))

    assert response.status_code == 200
    data = response.json()
    assert data["video_id"] == str(video.video_id)
    assert data["thumbnail_url"] == f"http://localhost:8091/assets/{video.video_id}.png"

    saved = Path(settings.assets_root) / f"{video.video_id}.png"
    assert saved.read_bytes() == PNG_BYTES


@pytest.mark.parametrize("content_type, ext", [
    ("image/jpeg", ".jpg"),
    ("image/gif", ".gif"),
    ("image/webp", ".webp"),
])
def test_upload_thumbnail_other_image_types(client, video, owner_id, auth_headers, content_type, ext):
    response = upload(client, video.video_id, auth_headers(owner_id), content_type=content_type)

    assert response.status_code == 200
    assert response.json()["thumbnail_url"].endswith(f"{video.video_id}{ext}")


def test_upload_thumbnail_is_persisted(client, video, owner_id, auth_headers, db_session):
    upload(client, video.video_id, auth_headers(owner_id))

    db_session.expire_all()
    assert db_session.get(type(video), video.video_id).thumbnail_url.endswith(".png")


def test_reupload_with_new_type_replaces_old_file(client, video, owner_id, auth_headers, settings):
    """Switching from JPEG to PNG leaves only the PNG on disk"""
    upload(client, video.video_id, auth_headers(owner_id), content_type="image/jpeg")
    response = upload(client, video.video_id, auth_headers(owner_id), content_type="image/png")

    assert response.status_code == 200
    stored = sorted(p.name for p in Path(settings.assets_root).glob(f"{video.video_id}.*"))
    assert stored == [f"{video.video_id}.png"]


def test_upload_thumbnail_database_failure(client, video, owner_id, auth_headers, settings):
    """A failed record update is reported as a server error"""
    with patch("tubely.api.thumbnails.update_video", side_effect=StorageError("Failed to update video")):
        response = upload(client, video.video_id, auth_headers(owner_id))

    assert response.status_code == 500
    assert response.json()["detail"] == "Failed to update video"
    assert (Path(settings.assets_root) / f"{video.video_id}.png").exists()


def test_upload_thumbnail_invalid_video_id(client, owner_id, auth_headers):
    response = upload(client, "not-a-uuid", auth_headers(owner_id))

    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid video ID"


def test_upload_thumbnail_missing_token(client, video):
    response = upload(client, video.video_id)

    assert response.status_code == 401


def test_upload_thumbnail_bad_token(client, video):
    response = upload(client, video.video_id, {"Authorization": "Bearer nonsense"})

    assert response.status_code == 401


def test_upload_thumbnail_unknown_video(client, owner_id, auth_headers):
    response = upload(client, uuid.uuid4(), auth_headers(owner_id))

    assert response.status_code == 404


def test_upload_thumbnail_not_owner(client, video, auth_headers, settings):
    """Another user's upload is refused and nothing is written"""
    response = upload(client, video.video_id, auth_headers(uuid.uuid4()))

    assert response.status_code == 403
    assert not any(Path(settings.assets_root).glob(f"{video.video_id}*"))


def test_upload_thumbnail_missing_file(client, video, owner_id, auth_headers):
    response = upload(client, video.video_id, auth_headers(owner_id), field="image")

    assert response.status_code == 400
    assert response.json()["detail"] == "Thumbnail file missing"


def test_upload_thumbnail_form_field_not_a_file(client, video, owner_id, auth_headers):
    response = client.post(
        f"/api/thumbnail_upload/{video.video_id}",
        headers=auth_headers(owner_id),
        data={"thumbnail": "not a file"}
    )

    assert response.status_code == 400


def test_upload_thumbnail_too_large(client, video, owner_id, auth_headers):
    content = b"x" * ((10 << 20) + 1)

    response = upload(client, video.video_id, auth_headers(owner_id), content=content)

    assert response.status_code == 400
    assert "10MB" in response.json()["detail"]


def test_upload_thumbnail_exactly_max_size(client, video, owner_id, auth_headers):
    response = upload(client, video.video_id, auth_headers(owner_id), content=b"x" * (10 << 20))

    assert response.status_code == 200


def test_upload_thumbnail_unsupported_type(client, video, owner_id, auth_headers, settings):
    response = upload(client, video.video_id, auth_headers(owner_id), content_type="image/svg+xml")

    assert response.status_code == 400
    assert "Unsupported Content-Type" in response.json()["detail"]
    assert not any(Path(settings.assets_root).glob(f"{video.video_id}*"))


def test_assets_are_served(client):
    """Files in the assets directory are served under /assets"""
    from tubely.config import get_settings

    assets_root = Path(get_settings().assets_root)
    assets_root.mkdir(parents=True, exist_ok=True)
    (assets_root / "served.png").write_bytes(PNG_BYTES)

    response = client.get("/assets/served.png")

    assert response.status_code == 200
    assert response.content == PNG_BYTES

"""
Pytest configuration and shared fixtures
"""
import os
import tempfile

# Settings are read once at import time; point them somewhere disposable
# before anything from tubely is imported.
_TEST_ROOT = tempfile.mkdtemp(prefix="tubely-tests-")
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ASSETS_ROOT"] = os.path.join(_TEST_ROOT, "assets")
os.environ["TEMP_ROOT"] = os.path.join(_TEST_ROOT, "tmp")
os.environ["JWT_SECRET"] = "test-secret"

import uuid  # noqa: E402
from pathlib import Path  # noqa: E402
from unittest.mock import MagicMock  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from tubely.auth import make_jwt  # noqa: E402
from tubely.config import Settings, get_settings  # noqa: E402
from tubely.database import Base, get_db  # noqa: E402
from tubely.main import app  # noqa: E402
from tubely.models import Video  # noqa: E402
from tubely.services.ffmpeg import AspectRatio, AspectRatioService, get_aspect_ratio_service  # noqa: E402
from tubely.services.s3 import S3Storage, get_s3_storage  # noqa: E402


@pytest.fixture
def settings(tmp_path):
    """Settings with storage under a per-test temp directory"""
    return Settings(
        jwt_secret="test-secret",
        assets_root=str(tmp_path / "assets"),
        temp_root=str(tmp_path / "tmp"),
        public_base_url="http://localhost:8091",
        s3_bucket="tubely-test",
        s3_region="us-east-2",
    )


@pytest.fixture
def db_session():
    """In-memory SQLite session shared across threads"""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool
    )
    Base.metadata.create_all(bind=engine)
    TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    session = TestSessionLocal()
    yield session

    session.close()
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def s3_client():
    """Mock boto3 client recording whether the staged file existed at upload time"""
    client = MagicMock()
    client.uploaded = []

    def upload_file(filename, bucket, key, ExtraArgs=None):
        client.uploaded.append({
            "filename": filename,
            "existed": Path(filename).exists(),
            "bucket": bucket,
            "key": key,
            "extra_args": ExtraArgs,
        })

    client.upload_file.side_effect = upload_file
    return client


@pytest.fixture
def s3_storage(settings, s3_client):
    return S3Storage(settings, client=s3_client)


@pytest.fixture
def prober():
    """Aspect ratio service that never runs ffprobe"""
    mock = MagicMock(spec=AspectRatioService)
    mock.get_aspect_ratio.return_value = AspectRatio.LANDSCAPE
    return mock


@pytest.fixture
def client(settings, db_session, s3_storage, prober):
    """Test client with database, settings, S3 and ffprobe replaced"""
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_s3_storage] = lambda: s3_storage
    app.dependency_overrides[get_aspect_ratio_service] = lambda: prober

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def owner_id():
    return uuid.uuid4()


@pytest.fixture
def video(db_session, owner_id):
    """A draft video owned by owner_id"""
    record = Video(user_id=owner_id, title="Boots on the ground")
    db_session.add(record)
    db_session.commit()
    db_session.refresh(record)
    return record


@pytest.fixture
def auth_headers(settings):
    """Build an Authorization header for a user id"""
    def _headers(user_id):
        return {"Authorization": f"Bearer {make_jwt(user_id, settings.jwt_secret)}"}
    return _headers

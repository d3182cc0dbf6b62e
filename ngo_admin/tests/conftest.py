"""
Test configuration and fixtures
"""

import io
import os
import tempfile

# Settings are read at import time; point them at throwaway resources first
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["LOG_TO_FILE"] = "false"
os.environ["CREATE_TABLES_ON_STARTUP"] = "false"
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="ngo-admin-uploads-")

import pytest
from typing import AsyncGenerator
from httpx import AsyncClient, ASGITransport
from PIL import Image
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

from ngo_admin.main import app
from ngo_admin.db.database import Base, get_db, json_serializer
from ngo_admin.core.config import settings
from ngo_admin.client.api_client import AdminApiClient
from ngo_admin.models import Event, LegalCase, VideoLecture


TEST_DATABASE_URL = "sqlite+aiosqlite://"


@pytest.fixture
async def test_engine():
    """Create test database engine"""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        json_serializer=json_serializer,
        echo=False
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
async def test_db(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create test database session"""
    async_session = async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False
    )

    async with async_session() as session:
        yield session


@pytest.fixture
async def client(test_db: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create test client with database dependency override"""

    async def override_get_db():
        yield test_db

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://localhost") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
async def api(client: AsyncClient) -> AdminApiClient:
    """Admin client talking to the app through the test transport"""
    return AdminApiClient(base_url="http://localhost/api/v1", client=client)


@pytest.fixture
def upload_dir(tmp_path, monkeypatch):
    """Send uploaded files to a per-test directory"""
    monkeypatch.setattr(settings, "UPLOAD_DIR", str(tmp_path))
    return tmp_path


@pytest.fixture
def event_payload() -> dict:
    return {
        "title": "Gala",
        "date": "April 15, 2025",
        "time": "7:00 PM - 10:00 PM",
        "location": "Hall A",
        "description": "desc",
    }


@pytest.fixture
async def test_event(test_db: AsyncSession) -> Event:
    """Create test event"""
    event = Event(
        title="Annual Charity Gala",
        date="April 15, 2025",
        time="7:00 PM - 10:00 PM",
        location="Grand Ballroom, Metropolis Hotel",
        description="An elegant evening of fundraising for education programs",
        category="Fundraiser",
        registrations=120,
        max_capacity=300,
        featured=True,
    )
    test_db.add(event)
    await test_db.commit()
    await test_db.refresh(event)
    return event


@pytest.fixture
async def test_cases(test_db: AsyncSession) -> list:
    """Create tracked legal cases in different states"""
    cases = [
        LegalCase(case_number="CC/123/2024", title="Land dispute", court="District Court",
                  status="active", petitioner="Ramesh Kumar", respondent="State of Kerala"),
        LegalCase(case_number="WP/45/2023", title="Right to education petition", court="High Court",
                  status="pending", petitioner="Parents Association", respondent="Education Dept"),
        LegalCase(case_number="CR/9/2022", title="Wage recovery", court="Labour Court",
                  status="closed", petitioner="Anita Devi", respondent="Sunrise Textiles"),
    ]
    test_db.add_all(cases)
    await test_db.commit()
    return cases


@pytest.fixture
async def test_lectures(test_db: AsyncSession) -> list:
    lectures = [
        VideoLecture(title="Introduction to Digital Marketing", instructor="Priya Sharma",
                     category="Marketing", views=1200, tags=["seo", "social media"], status="Published"),
        VideoLecture(title="Basic Bookkeeping", instructor="Arjun Mehta",
                     category="Finance", views=300, tags=["accounts"], status="Draft"),
    ]
    test_db.add_all(lectures)
    await test_db.commit()
    return lectures


def make_png(size=(32, 32), color=(30, 120, 60)) -> bytes:
    """Small valid PNG"""
    buffer = io.BytesIO()
    Image.new("RGB", size, color).save(buffer, format="PNG")
    return buffer.getvalue()


def make_noise_png(side: int) -> bytes:
    """PNG of random pixels, which does not compress below ~3 bytes per pixel"""
    buffer = io.BytesIO()
    Image.frombytes("RGB", (side, side), os.urandom(side * side * 3)).save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def png_bytes() -> bytes:
    return make_png()


@pytest.fixture
def noise_png():
    """Factory for incompressible PNGs of a given side length"""
    return make_noise_png

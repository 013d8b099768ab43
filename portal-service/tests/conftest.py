import pytest
from fastapi.testclient import TestClient

from api.app import create_app
from db.database import Database
from services.tracking_numbers import TrackingNumberGenerator


@pytest.fixture
def database(tmp_path):
    db = Database(f"sqlite:///{tmp_path / 'portal_test.db'}")
    db.create_tables()
    try:
        yield db
    finally:
        db.drop_tables()
        db.dispose()


@pytest.fixture
def db_session(database):
    session = database.session()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(database):
    app = create_app(database, tracking_numbers=TrackingNumberGenerator(prefix="SA"))
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def application_payload():
    return {
        "full_name": "Siti Rahmawati",
        "nik": "3201234567890001",
        "place_of_birth": "Bandung",
        "date_of_birth": "1985-04-12",
        "gender": "PEREMPUAN",
        "marital_status": "MENIKAH",
        "phone": "081234567890",
        "email": "siti@example.com",
        "address": "Jl. Merdeka No. 10",
        "village": "Sukamaju",
        "district": "Cibeunying",
        "assistance_category": "BANTUAN_SOSIAL",
        "assistance_type": "Bantuan Pangan Non Tunai",
        "reason": "Kepala keluarga kehilangan pekerjaan",
        "family_members_count": 4,
        "monthly_income_range": "KURANG_DARI_1JT",
    }


@pytest.fixture
def document_payload():
    return {
        "document_type": "KTP",
        "file_name": "ktp.jpg",
        "file_path": "/uploads/ktp.jpg",
        "file_size": 204800,
    }

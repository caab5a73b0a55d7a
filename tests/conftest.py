"""Pytest configuration and shared fixtures."""
import copy
import os

# Cheap hashes for the test run; must be set before settings are read
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from sahaya_api.database import Base, build_engine, get_db
from sahaya_api.main import app
from sahaya_api.models.enums import UserRole
from sahaya_api.security import create_access_token
from sahaya_api.services.entity_service import EntityService
from sahaya_api.services.registry import get_entity_type
from sahaya_api.services.users import UserService

SAMPLE_PAYLOADS = {
    "appointments": {
        "applicant_name": "Ravi Kumar",
        "mobile": "9876543210",
        "purpose": "Road repair in ward 12",
        "district": "Guntur",
    },
    "cases": {
        "case_type": "grievance",
        "citizen_name": "Lakshmi Devi",
        "subject": "Water supply",
        "description": "No drinking water for three days",
        "district": "Krishna",
        "sla_duration": "48h",
    },
    "cmrelief": {
        "applicant_name": "Suresh Babu",
        "mobile": "9000000001",
        "relief_type": "MEDICAL",
        "requested_amount": 50000,
        "district": "Guntur",
    },
    "csrindustrial": {
        "company_name": "Coastal Steel Ltd",
        "contact_person_name": "Anil Reddy",
        "contact_mobile": "9000000002",
        "project_name": "Science labs for ZP schools",
        "project_category": "EDUCATION",
        "proposed_budget": 1000000,
        "district": "Visakhapatnam",
    },
    "disputes": {
        "party_a": {"name": "Ramesh", "contact": "9000000003"},
        "party_b": {"name": "Srinivas", "contact": "9000000004"},
        "category": "Land",
        "description": "Boundary disagreement over survey no. 42",
        "district": "Nellore",
    },
    "education": {
        "student_name": "Priya",
        "mobile": "9000000005",
        "education_type": "UNDERGRADUATE",
        "institution_name": "Andhra University",
        "support_type": "TUITION_FEE",
        "requested_amount": 25000,
        "district": "Guntur",
    },
    "emergencies": {
        "applicant_name": "Mohan",
        "mobile": "9000000006",
        "emergency_type": "FIRE",
        "location": "Market road",
        "description": "Fire in a grocery shop",
        "district": "Kurnool",
    },
    "programs": {
        "event_name": "District Job Mela",
        "type": "JOB_MELA",
        "start_date": "2025-03-01T09:00:00",
        "end_date": "2025-03-01T17:00:00",
        "venue": "Town Hall",
        "district": "Guntur",
    },
    "temples": {
        "applicant_name": "Venkat Rao",
        "mobile": "9000000007",
        "temple_name": "Tirumala",
        "darshan_type": "VIP",
        "preferred_date": "2025-04-10T00:00:00",
        "number_of_people": 4,
        "district": "Chittoor",
    },
}


@pytest.fixture
def sample_payload():
    """Fresh copy of a valid create payload for a type name."""
    def make(name):
        return copy.deepcopy(SAMPLE_PAYLOADS[name])
    return make


@pytest.fixture
def engine(tmp_path):
    """A fresh SQLite file database per test, configured like production."""
    # File-backed so that TestClient and worker threads share it
    engine = build_engine(f"sqlite:///{tmp_path / 'sahaya_test.db'}")
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def service(db_session):
    """Build an EntityService for a type name."""
    def make(name):
        return EntityService(db_session, get_entity_type(name))
    return make


@pytest.fixture
def users(session_factory):
    """One account per role; returns {role name: user id}."""
    db = session_factory()
    accounts = UserService(db)
    ids = {}
    for role, username in (
        (UserRole.L1_MASTER_ADMIN, "master"),
        (UserRole.L2_EXEC_ADMIN, "executive"),
        (UserRole.L3_CITIZEN, "citizen"),
    ):
        user = accounts.register({
            "username": username,
            "email": f"{username}@example.org",
            "password": "secret123",
            "first_name": username.title(),
            "last_name": "User",
            "role": role,
        })
        ids[role.value] = user.id
    db.close()
    return ids


def bearer(user_id, role):
    return {"Authorization": f"Bearer {create_access_token(user_id, role)}"}


@pytest.fixture
def master_headers(users):
    return bearer(users["L1_MASTER_ADMIN"], "L1_MASTER_ADMIN")


@pytest.fixture
def exec_headers(users):
    return bearer(users["L2_EXEC_ADMIN"], "L2_EXEC_ADMIN")


@pytest.fixture
def citizen_headers(users):
    return bearer(users["L3_CITIZEN"], "L3_CITIZEN")


@pytest.fixture
def client(session_factory):
    """TestClient with get_db pointed at the per-test database."""
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()

"""
Test configuration and fixtures for the library membership system.
"""
import pytest
import os
from datetime import date, timedelta
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Set testing environment variables before the app is imported
os.environ["TESTING"] = "true"

# Create test database engine first
SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"
os.environ["DATABASE_URL"] = SQLALCHEMY_DATABASE_URL

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Import app after setting up test database
from app.main import app
from app.db.models import Base, User, Schedule, Seat, Student
from app.core.dependencies import get_db, get_image_host, get_notifier
from app.core.exceptions import ExternalServiceError
from app.core.security import get_password_hash

PASSWORD = "secret-pass"


# Override the database dependency
def override_get_db():
    """Override database dependency for testing."""
    try:
        db = TestingSessionLocal()
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db

# Create all tables in the test database
Base.metadata.create_all(bind=engine)


class FakeNotifier:
    """Records reminders instead of calling Brevo."""

    def __init__(self, failing_emails=()):
        self.sent = []
        self.failing_emails = set(failing_emails)

    def send_expiration_reminder(self, student, template_id):
        if student.email in self.failing_emails:
            raise ExternalServiceError("Failed to send email")
        self.sent.append((student.email, str(template_id)))


class FakeImageHost:
    def __init__(self):
        self.uploads = []

    def upload(self, filename, content, content_type=None):
        self.uploads.append((filename, content, content_type))
        return f"https://images.example.com/{filename}"


@pytest.fixture
def db_session():
    """Create database session for testing."""
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client():
    """Create an unauthenticated test client."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture(autouse=True)
def cleanup_db():
    """Clean up database after each test."""
    yield
    # Clear all data but keep tables
    with engine.connect() as conn:
        for table in reversed(Base.metadata.sorted_tables):
            conn.execute(table.delete())
        conn.commit()


@pytest.fixture
def make_user(db_session):
    """Insert a user directly and return it."""
    def _make_user(username, role="staff", permissions=None, password=PASSWORD, **extra):
        user = User(
            username=username,
            password=get_password_hash(password),
            role=role,
            permissions=permissions or [],
            **extra
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user
    return _make_user


@pytest.fixture
def login_client(make_user):
    """Factory returning a TestClient logged in as a freshly created user."""
    clients = []

    def _login(username="admin", role="admin", permissions=None):
        make_user(username, role=role, permissions=permissions)
        test_client = TestClient(app)
        test_client.__enter__()
        clients.append(test_client)
        response = test_client.post("/api/auth/login", json={"username": username, "password": PASSWORD})
        assert response.status_code == 200, response.text
        return test_client

    yield _login

    for test_client in clients:
        test_client.__exit__(None, None, None)


@pytest.fixture
def admin_client(login_client):
    return login_client("admin", role="admin")


@pytest.fixture
def staff_client(login_client):
    """Staff user with the default staff permissions."""
    return login_client(
        "staff", role="staff",
        permissions=["view_dashboard", "manage_students", "manage_schedules"]
    )


@pytest.fixture
def fake_notifier():
    notifier = FakeNotifier()
    app.dependency_overrides[get_notifier] = lambda: notifier
    yield notifier
    app.dependency_overrides.pop(get_notifier, None)


@pytest.fixture
def fake_image_host():
    host = FakeImageHost()
    app.dependency_overrides[get_image_host] = lambda: host
    yield host
    app.dependency_overrides.pop(get_image_host, None)


@pytest.fixture
def shift(db_session):
    schedule = Schedule(title="Morning", description="6am - 12pm")
    db_session.add(schedule)
    db_session.commit()
    db_session.refresh(schedule)
    return schedule


@pytest.fixture
def other_shift(db_session):
    schedule = Schedule(title="Evening", description="4pm - 10pm")
    db_session.add(schedule)
    db_session.commit()
    db_session.refresh(schedule)
    return schedule


@pytest.fixture
def make_seats(db_session):
    def _make_seats(*numbers):
        seats = [Seat(seat_number=number) for number in numbers]
        db_session.add_all(seats)
        db_session.commit()
        for seat in seats:
            db_session.refresh(seat)
        return seats
    return _make_seats


@pytest.fixture
def make_student(db_session):
    """Insert a student directly, bypassing the API."""
    def _make_student(name="Asha", status="active", membership_end=None, **extra):
        today = date.today()
        student = Student(
            name=name,
            membership_start=extra.pop("membership_start", today - timedelta(days=30)),
            membership_end=membership_end or today + timedelta(days=30),
            status=status,
            **extra
        )
        db_session.add(student)
        db_session.commit()
        db_session.refresh(student)
        return student
    return _make_student


@pytest.fixture
def membership_dates():
    today = date.today()
    return {
        "membership_start": today.isoformat(),
        "membership_end": (today + timedelta(days=30)).isoformat(),
    }


@pytest.fixture
def notifier():
    """A notifier for calling the reminder job directly."""
    return FakeNotifier()

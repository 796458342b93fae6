import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from knowledge_base.database import Base, get_db
from knowledge_base.main import app
from knowledge_base.models.user import User
from knowledge_base.models.space import Space, SpaceMember
from knowledge_base.services.auth_service import hash_password

TEST_DB_URL = "sqlite:///./test_knowledge_base.db"
TEST_PASSWORD = "password123"

engine = create_engine(TEST_DB_URL, connect_args={"check_same_thread": False})
TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSession()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db


@pytest.fixture(autouse=True)
def setup_db():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    db = TestingSession()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def seed_users(db):
    password_hash = hash_password(TEST_PASSWORD)
    users = {
        "alice": User(username="alice", email="alice@acme.io", first_name="Alice", last_name="Kim",
                      password_hash=password_hash),
        "bob": User(username="bob", email="bob@acme.io", first_name="Bob", last_name="Lee",
                    password_hash=password_hash),
        "carol": User(username="carol", email="carol@acme.io", first_name="Carol", last_name="Park",
                      password_hash=password_hash),
        "dave": User(username="dave", email="dave@acme.io", password_hash=password_hash),
    }
    for u in users.values():
        db.add(u)
    db.commit()
    for u in users.values():
        db.refresh(u)
    return users


@pytest.fixture
def seed_space(db, seed_users):
    space = Space(name="Engineering", slug="engineering", owner_id=seed_users["alice"].user_id)
    db.add(space)
    db.flush()
    db.add_all([
        SpaceMember(space_id=space.space_id, user_id=seed_users["alice"].user_id, role="admin"),
        SpaceMember(space_id=space.space_id, user_id=seed_users["bob"].user_id, role="member"),
        SpaceMember(space_id=space.space_id, user_id=seed_users["carol"].user_id, role="admin"),
    ])
    db.commit()
    db.refresh(space)
    return space


def get_token(client, username: str, password: str = TEST_PASSWORD) -> str:
    resp = client.post("/api/auth/login", json={"username": username, "password": password})
    assert resp.status_code == 200, resp.text
    # 로그인 응답이 남긴 세션 쿠키가 이후 익명 요청에 섞이지 않도록 비운다.
    client.cookies.clear()
    return resp.json()["access_token"]


def auth_headers(client, username: str) -> dict:
    return {"Authorization": f"Bearer {get_token(client, username)}"}


def create_document(client, headers: dict, **fields) -> dict:
    payload = {"title": "Untitled", "content": "", "visibility": "private"}
    payload.update(fields)
    resp = client.post("/api/documents", json=payload, headers=headers)
    assert resp.status_code == 201, resp.text
    return resp.json()

"""Seed the database with demo users, spaces and documents."""
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from knowledge_base.database import SessionLocal, engine, Base
import knowledge_base.models  # noqa: F401

from knowledge_base.models.user import User
from knowledge_base.models.space import Space, SpaceMember
from knowledge_base.models.document import Document, DocumentPermission
from knowledge_base.services.auth_service import hash_password
from knowledge_base.utils.helpers import slugify

DEMO_PASSWORD = "password123"


def seed():
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        if db.query(User).count() > 0:
            print("Database already seeded. Skipping.")
            return

        # Users
        users = [
            User(username="alice", email="alice@acme.io", first_name="Alice", last_name="Kim",
                 password_hash=hash_password(DEMO_PASSWORD)),
            User(username="bob", email="bob@acme.io", first_name="Bob", last_name="Lee",
                 password_hash=hash_password(DEMO_PASSWORD)),
            User(username="carol", email="carol@acme.io", first_name="Carol", last_name="Park",
                 password_hash=hash_password(DEMO_PASSWORD)),
        ]
        db.add_all(users)
        db.flush()

        # Spaces
        engineering = Space(name="Engineering", slug=slugify("Engineering"), owner_id=users[0].user_id,
                            description="설계 문서와 운영 가이드")
        db.add(engineering)
        db.flush()
        db.add_all([
            SpaceMember(space_id=engineering.space_id, user_id=users[0].user_id, role="admin"),
            SpaceMember(space_id=engineering.space_id, user_id=users[1].user_id, role="member"),
        ])

        # Documents
        documents = [
            Document(title="Welcome", content="<p>팀 지식 베이스에 오신 것을 환영합니다.</p>",
                     slug=slugify("Welcome"), author_id=users[0].user_id, visibility="public"),
            Document(title="Deploy Runbook", content="<p>배포 절차 정리. 검토: @bob</p>",
                     slug=slugify("Deploy Runbook"), author_id=users[0].user_id,
                     space_id=engineering.space_id, visibility="space"),
            Document(title="1:1 Notes", content="<p>비공개 메모</p>",
                     slug=slugify("1:1 Notes"), author_id=users[1].user_id, visibility="private"),
        ]
        db.add_all(documents)
        db.flush()
        db.add(DocumentPermission(doc_id=documents[2].doc_id, user_id=users[2].user_id,
                                  permission="view", granted_by=users[1].user_id))

        db.commit()
        print("Seed data inserted successfully.")
        print(f"  Users: {len(users)}")
        print("  Spaces: 1")
        print(f"  Documents: {len(documents)}")
        print()
        print("Test login credentials:")
        for u in users:
            print(f"  username={u.username}  password={DEMO_PASSWORD}")

    except Exception as e:
        db.rollback()
        raise e
    finally:
        db.close()


if __name__ == "__main__":
    seed()

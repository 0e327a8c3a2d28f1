import uuid
from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.orm import Session

from taskmaster.auth.identity import Identity
from taskmaster.auth.passwords import hash_password
from taskmaster.db import SessionLocal, init_db
from taskmaster.models.enums import Role, TaskStatus
from taskmaster.models.task import Task
from taskmaster.models.user import User
from taskmaster.services import tasks as task_service

SEED_PASSWORD = "password123"

@dataclass
class SeedResult:
    lead_email: str
    team_emails: list[str]
    task_ids: list[uuid.UUID]

def get_or_create_user(db: Session, email: str, name: str, role: Role) -> User:
    email = email.lower().strip()
    u = db.scalar(select(User).where(User.email == email))
    if u is None:
        u = User(email=email, name=name, role=role, password_hash=hash_password(SEED_PASSWORD))
        db.add(u)
        db.commit()
    return u

def get_or_create_task(
    db: Session,
    lead: User,
    title: str,
    description: str,
    assignee: User | None,
    walk: list[tuple[User, TaskStatus]],
) -> Task:
    t = db.scalar(select(Task).where(Task.title == title))
    if t is not None:
        # keep it stable if you re-run seed
        return t

    # go through the service so every row gets its history
    t = task_service.create_task(
        db,
        Identity.from_user(lead),
        title=title,
        description=description,
        assigned_to_id=assignee.id if assignee else None,
    )
    for actor, status in walk:
        task_service.update_task(db, Identity.from_user(actor), t.id, {"status": status})
    return t

def seed() -> SeedResult:
    init_db()
    db = SessionLocal()
    try:
        lead = get_or_create_user(db, "lead@example.com", "Lead User", Role.LEAD)
        team1 = get_or_create_user(db, "team1@example.com", "Team Member 1", Role.TEAM)
        team2 = get_or_create_user(db, "team2@example.com", "Team Member 2", Role.TEAM)

        plan = [
            ("Project Planning", "Plan the project roadmap and define milestones", lead,
             [(lead, TaskStatus.ON_PROGRESS)]),
            ("Code Review", "Review and provide feedback on team's code submissions", lead, []),
            ("Feature Implementation", "Implement new authentication system", team1,
             [(team1, TaskStatus.ON_PROGRESS)]),
            ("API Integration", "Integrate third-party payment API", team1,
             [(team1, TaskStatus.DONE)]),
            ("Security Audit", "Perform security assessment of the application", team1,
             [(team1, TaskStatus.ON_PROGRESS)]),
            ("Bug Fixes", "Fix reported bugs in the dashboard", team2, []),
            ("Documentation", "Create technical documentation for the API", team2,
             [(team2, TaskStatus.REJECT)]),
            ("Testing", "Perform system testing and create test cases", team2,
             [(team2, TaskStatus.ON_PROGRESS), (team2, TaskStatus.DONE)]),
            ("Release Checklist", "Collect sign-offs before the next release", None, []),
        ]

        task_ids = [
            get_or_create_task(db, lead, title, description, assignee, walk).id
            for title, description, assignee, walk in plan
        ]

        return SeedResult(
            lead_email=lead.email,
            team_emails=[team1.email, team2.email],
            task_ids=task_ids,
        )
    finally:
        db.close()

if __name__ == "__main__":
    r = seed()
    print("seed complete")
    print(f"tasks: {len(r.task_ids)}")
    print("users (password: password123):")
    print(f"  lead: {r.lead_email}")
    for email in r.team_emails:
        print(f"  team: {email}")

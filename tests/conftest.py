"""Shared fixtures: a throw-away SQLite database per test and profile factories."""

import pytest
from sqlmodel import Session, SQLModel, create_engine

import app.db.base  # noqa: F401  (registers every table on the metadata)
from app.models.coach import Coach
from app.models.member import Member
from app.models.skill import CoachSkill, Skill


@pytest.fixture
def engine(tmp_path):
    """File-backed so that several sessions can see each other's commits."""
    engine = create_engine(f"sqlite:///{tmp_path / 'test.db'}", connect_args={"check_same_thread": False})
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def member(db) -> Member:
    member = Member(first_name="Alex", last_name="Runner", profile_pic="https://cdn.example/alex.png",
                    location="Latitude: 42.02385, Longitude: -93.64541")
    db.add(member)
    db.commit()
    db.refresh(member)
    return member


@pytest.fixture
def coach(db) -> Coach:
    coach = Coach(first_name="Sam", last_name="Coach", profile_pic="https://cdn.example/sam.png",
                  location="Latitude: 41.58684, Longitude: -93.62496")
    db.add(coach)
    db.commit()
    db.refresh(coach)
    return coach


@pytest.fixture
def make_coach(db):
    """Create a coach with ``{skill_id: level}`` skills."""

    def _make(first_name="Coach", last_name="X", location=None, skills=None) -> Coach:
        coach = Coach(first_name=first_name, last_name=last_name, location=location)
        db.add(coach)
        db.commit()
        db.refresh(coach)
        for skill_id, level in (skills or {}).items():
            if db.get(Skill, skill_id) is None:
                db.add(Skill(id=skill_id, title=f"skill-{skill_id}"))
            db.add(CoachSkill(coach_id=coach.id, skill_id=skill_id, skill_level=level))
        db.commit()
        return coach

    return _make

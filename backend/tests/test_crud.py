"""
Tests for name-based resolution of skills, positions and interview rounds.
"""

import pytest

from hrm import crud, models


@pytest.fixture
def db(session_factory):
    with session_factory() as session:
        yield session


class TestResolveOrCreate:
    def test_creates_with_defaults(self, db):
        resolved = crud.resolve_or_create(db, models.Position, "  Data Engineer ")

        assert resolved.created
        assert resolved.outcome is crud.Resolution.CREATED
        assert resolved.entity.name == "Data Engineer"
        assert resolved.entity.department == "General"
        assert resolved.entity.level == models.PositionLevel.JUNIOR

    def test_finds_existing_regardless_of_case(self, db):
        db.add(models.Skill(name="Python", category="Programming"))
        db.commit()

        resolved = crud.resolve_or_create(db, models.Skill, "PYTHON")

        assert not resolved.created
        assert resolved.entity.category == "Programming"
        assert db.query(models.Skill).count() == 1

    def test_round_defaults(self, db):
        resolved = crud.resolve_interview_round(db, "Culture Fit")

        assert resolved.created
        assert resolved.entity.description == "General"

    def test_resolve_many_collapses_duplicates(self, db):
        results = crud.resolve_skills(db, ["Go", "go ", "Rust", "", "GO"])

        assert [r.entity.name for r in results] == ["Go", "Rust"]
        assert all(r.created for r in results)

    def test_new_rows_wait_for_caller_commit(self, db, session_factory):
        crud.resolve_positions(db, ["QA Engineer"])
        db.rollback()

        with session_factory() as other:
            assert other.query(models.Position).count() == 0


class TestFindByName:
    def test_exclude_id(self, db):
        skill = models.Skill(name="SQL", category="Data")
        db.add(skill)
        db.commit()

        assert crud.find_by_name(db, models.Skill, " sql ") is skill
        assert crud.find_by_name(db, models.Skill, "SQL", exclude_id=skill.id) is None

    def test_user_lookup_ignores_case(self, db, admin_user):
        assert crud.get_user_by_email(db, " ALICE@example.com ").id == admin_user["id"]

# backend/hrm/models.py
import enum

from sqlalchemy import (
    JSON,
    Column,
    Date,
    DateTime,
    Enum,
    Float,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Table,
    Text,
    Time,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import relationship

from .database import Base


class InterviewStatus(str, enum.Enum):
    PENDING = "pending"
    PASSED = "passed"
    FAILED = "failed"


class PositionLevel(str, enum.Enum):
    JUNIOR = "Junior"
    MID = "Mid"
    SENIOR = "Senior"
    MANAGER = "Manager"


candidate_skills = Table(
    "candidate_skills",
    Base.metadata,
    Column("candidate_id", Integer, ForeignKey("candidates.id", ondelete="CASCADE"), primary_key=True),
    Column("skill_id", Integer, ForeignKey("skills.id", ondelete="CASCADE"), primary_key=True),
)

candidate_positions = Table(
    "candidate_positions",
    Base.metadata,
    Column("candidate_id", Integer, ForeignKey("candidates.id", ondelete="CASCADE"), primary_key=True),
    Column("position_id", Integer, ForeignKey("positions.id", ondelete="CASCADE"), primary_key=True),
)


class User(Base):
    __tablename__ = "users"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    phone = Column(String(11), nullable=True)
    email = Column(String(150), unique=True, index=True, nullable=False)
    hashed_password = Column(String(200), nullable=False)
    role = Column(String(50), nullable=False, default="hr")
    created_at = Column(DateTime(timezone=True), server_default=func.now())


class Skill(Base):
    __tablename__ = "skills"
    __table_args__ = (UniqueConstraint("name", "category", name="uq_skill_name_category"),)
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(55), nullable=False, index=True)
    category = Column(String(55), nullable=False)

    candidates = relationship("Candidate", secondary=candidate_skills, back_populates="skills")


class Position(Base):
    __tablename__ = "positions"
    __table_args__ = (UniqueConstraint("name", "department", name="uq_position_name_department"),)
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(55), nullable=False, index=True)
    department = Column(String(55), nullable=False)
    level = Column(
        Enum(PositionLevel, name="position_level", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=PositionLevel.JUNIOR,
    )

    candidates = relationship("Candidate", secondary=candidate_positions, back_populates="applied_position")


class InterviewRound(Base):
    __tablename__ = "interview_rounds"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(55), unique=True, nullable=False)
    description = Column(String(75), nullable=False)


class Candidate(Base):
    __tablename__ = "candidates"
    id = Column(Integer, primary_key=True, index=True)
    full_name = Column(String(55), nullable=False, index=True)
    email = Column(String(55), unique=True, index=True, nullable=False)
    phone = Column(String(10), nullable=False)
    total_experience = Column(Float, nullable=False, default=0)
    education = Column(JSON, nullable=True)
    previous_companies = Column(String(50), nullable=True)
    availability = Column(String(50), nullable=True)
    current_salary = Column(Integer, nullable=True)
    expected_salary = Column(Integer, nullable=True)
    notes = Column(String(1000), nullable=True)
    add_by = Column(String(50), nullable=True)
    resume = Column(String(600), nullable=True)  # stored upload path, never parsed
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    skills = relationship("Skill", secondary=candidate_skills, back_populates="candidates")
    applied_position = relationship("Position", secondary=candidate_positions, back_populates="candidates")

    # Deleting a candidate deletes their interviews, which in turn delete their reviews.
    interviews = relationship(
        "Interview", back_populates="candidate", cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:
        return f"<Candidate {self.id} - {self.full_name}>"


class Interview(Base):
    __tablename__ = "interviews"
    id = Column(Integer, primary_key=True, index=True)
    interviewer = Column(String(100), nullable=False)  # free text, not a users.id
    candidate_id = Column(
        Integer, ForeignKey("candidates.id", ondelete="CASCADE"), nullable=False, index=True
    )
    date = Column(Date, nullable=False, index=True)
    start_time = Column(Time, nullable=False)
    end_time = Column(Time, nullable=False)
    interview_round = Column(String(100), nullable=False)
    status = Column(
        Enum(InterviewStatus, name="interview_status", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=InterviewStatus.PENDING,
        index=True,
    )
    meeting_link = Column(String(2048), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    candidate = relationship("Candidate", back_populates="interviews")
    review = relationship(
        "Review", back_populates="interview", uselist=False, cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:
        return f"<Interview {self.id} - CandID {self.candidate_id} {self.date} {self.start_time}>"


class Review(Base):
    __tablename__ = "reviews"
    id = Column(Integer, primary_key=True, index=True)
    interview_id = Column(
        Integer, ForeignKey("interviews.id", ondelete="CASCADE"), nullable=False, index=True
    )
    score = Column(Numeric(3, 1, asdecimal=False), nullable=True)
    feedback = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    interview = relationship("Interview", back_populates="review")

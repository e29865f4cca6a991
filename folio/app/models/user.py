# folio/app/models/user.py
from sqlalchemy import Column, String, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from folio.app.db.base import Base, new_id, utcnow


class User(Base):
    __tablename__ = "users"

    id = Column(String(32), primary_key=True, default=new_id)
    # Uniqueness is case-insensitive; the service layer checks with lower()
    username = Column(String(50), unique=True, index=True, nullable=False)
    # Stored lowercased
    email = Column(String(255), unique=True, index=True, nullable=False)
    phone_number = Column(String(10), unique=True, nullable=False)
    # male / female / other
    gender = Column(String(10), nullable=False)

    # bcrypt hash. Never leaves the credential store.
    password_hash = Column(String(255), nullable=False)

    is_admin = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    sessions = relationship(
        "UserSession",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class UserSession(Base):
    """One login. A user may hold several at once (one per browser)."""
    __tablename__ = "sessions"

    id = Column(String(32), primary_key=True, default=new_id)
    # Opaque value carried by the auth-token cookie
    token = Column(String(64), unique=True, index=True, nullable=False)
    user_id = Column(
        String(32),
        ForeignKey("users.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    expires_at = Column(DateTime(timezone=True), nullable=False)

    user = relationship("User", back_populates="sessions")

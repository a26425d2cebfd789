"""
User model: credentials, confirmation state and the points ledger.

Architecture:
    User → (Idea → Conclusion), JournalPost, CommunityPost, Activity
    Recruiter User → Challenge, Contact

Key Features:
    - bcrypt password hash only, never the plaintext
    - One-time email confirmation token, cleared when redeemed
    - Integer score mutated only through atomic increments
    - Best-effort presence flag for the ranking view
"""

import enum

from sqlalchemy import Boolean, Column, Enum, Index, Integer, String, Text, false

from app.models.base import Base, IntegerIdMixin, created_at_column


class UserRole(str, enum.Enum):
    RECRUITER = "recrutador"
    STANDARD = "usuario"


class User(Base, IntegerIdMixin):
    """
    Registered account, either a standard user or a recruiter.

    ``senha`` holds the bcrypt hash. ``token_confirmacao`` is set only while
    ``confirmado`` is false.
    """

    __tablename__ = "usuarios"
    __table_args__ = (Index("ix_usuarios_email", "email", unique=True),)
    __private_fields__ = ("senha", "token_confirmacao")

    nome = Column(String(100), nullable=False, comment="Display name")

    email = Column(
        String(100),
        nullable=False,
        comment="Unique login email, compared exactly as stored",
    )

    senha = Column(
        String(255),
        nullable=False,
        comment="Bcrypt hashed password",
    )

    tipo_usuario = Column(
        Enum(
            UserRole,
            name="tipo_usuario",
            native_enum=False,
            values_callable=lambda roles: [role.value for role in roles],
            validate_strings=True,
        ),
        nullable=False,
        default=UserRole.STANDARD,
        server_default=UserRole.STANDARD.value,
        comment="Account role",
    )

    token_confirmacao = Column(
        String(255),
        nullable=True,
        index=True,
        comment="Pending email confirmation token",
    )

    confirmado = Column(
        Boolean,
        nullable=False,
        default=False,
        server_default=false(),
        comment="Whether the email address has been confirmed",
    )

    foto = Column(Text, nullable=True, comment="Avatar URI")

    pontos = Column(
        Integer,
        nullable=False,
        default=0,
        server_default="0",
        comment="Points ledger balance",
    )

    online = Column(
        Boolean,
        nullable=False,
        default=False,
        server_default=false(),
        comment="Best-effort presence flag",
    )

    data_criacao = created_at_column("Account creation timestamp")

    @property
    def is_recruiter(self) -> bool:
        return self.tipo_usuario == UserRole.RECRUITER

    def __repr__(self):
        return f"<User(id={self.id}, email='{self.email}', tipo='{self.tipo_usuario}')>"

"""Recruiter-posted challenges and the activities that complete them."""

import enum

from sqlalchemy import Column, Enum, ForeignKey, Index, Integer, String, Text

from app.models.base import Base, IntegerIdMixin, created_at_column


class Challenge(Base, IntegerIdMixin):
    """A task posted by a recruiter that users complete for points."""

    __tablename__ = "desafios"

    recrutador_id = Column(
        Integer,
        ForeignKey("usuarios.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="Posting recruiter",
    )
    titulo = Column(String(200), nullable=False)
    descricao = Column(Text, nullable=False)
    area = Column(String(100), nullable=False, comment="Category / area")
    data_postagem = created_at_column("Posting timestamp")

    def __repr__(self):
        return f"<Challenge(id={self.id}, titulo='{self.titulo}')>"


class ActivityStatus(str, enum.Enum):
    SUBMITTED = "submetido"
    COMPLETED = "concluido"


class Activity(Base, IntegerIdMixin):
    """
    A user's submission against a challenge.

    No uniqueness on (usuario_id, desafio_id): whether repeats are allowed is
    decided by the submission service.
    """

    __tablename__ = "atividades"
    __table_args__ = (
        Index("ix_atividades_usuario_desafio", "usuario_id", "desafio_id"),
    )

    usuario_id = Column(
        Integer,
        ForeignKey("usuarios.id", ondelete="CASCADE"),
        nullable=False,
    )
    desafio_id = Column(
        Integer,
        ForeignKey("desafios.id", ondelete="CASCADE"),
        nullable=False,
    )
    link = Column(Text, nullable=False, comment="Submission reference")
    status = Column(
        Enum(
            ActivityStatus,
            name="status_atividade",
            native_enum=False,
            values_callable=lambda statuses: [s.value for s in statuses],
            validate_strings=True,
        ),
        nullable=False,
        default=ActivityStatus.COMPLETED,
    )
    data_submissao = created_at_column("Submission timestamp")

    def __repr__(self):
        return (
            f"<Activity(id={self.id}, usuario_id={self.usuario_id}, "
            f"desafio_id={self.desafio_id})>"
        )

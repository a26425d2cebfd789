from sqlalchemy import Column, ForeignKey, Integer, String, Text

from app.models.base import Base, IntegerIdMixin, created_at_column


class CommunityPost(Base, IntegerIdMixin):
    """Public post in the community feed."""

    __tablename__ = "comunidade_posts"

    usuario_id = Column(
        Integer,
        ForeignKey("usuarios.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    titulo = Column(String(200), nullable=False)
    texto = Column(Text, nullable=False)
    imagem = Column(Text, nullable=True, comment="Image URI")
    data_criacao = created_at_column("Posting timestamp")


class Contact(Base, IntegerIdMixin):
    """Message a recruiter sends to a user."""

    __tablename__ = "contatos"

    recrutador_id = Column(
        Integer,
        ForeignKey("usuarios.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    usuario_id = Column(
        Integer,
        ForeignKey("usuarios.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    mensagem = Column(Text, nullable=False)
    data_envio = created_at_column("Sending timestamp")

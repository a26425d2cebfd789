from sqlalchemy import Column, ForeignKey, Integer, String, Text

from app.models.base import Base, IntegerIdMixin, created_at_column


class JournalPost(Base, IntegerIdMixin):
    """Personal journal entry, owned by exactly one user."""

    __tablename__ = "diario"

    usuario_id = Column(
        Integer,
        ForeignKey("usuarios.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    titulo = Column(String(200), nullable=True)
    conteudo = Column(Text, nullable=False)
    data_postagem = created_at_column("Posting timestamp")

    def __repr__(self):
        return f"<JournalPost(id={self.id}, usuario_id={self.usuario_id})>"

"""
Ideas and their conclusions.

A conclusion is the evidence (video, images, description) that an idea was
carried out. Conclusions reference their idea by foreign key.
"""

from sqlalchemy import Column, ForeignKey, Integer, String, Text

from app.models.base import Base, IntegerIdMixin, created_at_column


class Idea(Base, IntegerIdMixin):
    __tablename__ = "ideias"

    usuario_id = Column(
        Integer,
        ForeignKey("usuarios.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    titulo = Column(String(200), nullable=False)
    categoria = Column(String(100), nullable=False)
    descricao = Column(Text, nullable=False)
    imagem = Column(Text, nullable=True, comment="Image URI")
    data_criacao = created_at_column("Creation timestamp")

    def __repr__(self):
        return f"<Idea(id={self.id}, titulo='{self.titulo}')>"


class Conclusion(Base, IntegerIdMixin):
    __tablename__ = "conclusoes"

    ideia_id = Column(
        Integer,
        ForeignKey("ideias.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    video = Column(Text, nullable=False, comment="Video link")
    imagens = Column(Text, nullable=False, comment="Image links")
    descricao = Column(Text, nullable=False)
    data = created_at_column("Conclusion timestamp")

    def __repr__(self):
        return f"<Conclusion(id={self.id}, ideia_id={self.ideia_id})>"

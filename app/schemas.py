from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from app.models import UserRole

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"
# Manual adjustments stay well inside the 32-bit score column
MAX_SCORE_ADJUSTMENT = 1_000_000
MAX_LOGIN_PASSWORD_LENGTH = 1024


class StrictRequest(BaseModel):
    """Request body base: unknown or missing fields are rejected."""

    model_config = ConfigDict(extra="forbid")


# ===== Accounts =====
class UserRegister(StrictRequest):
    nome: str = Field(..., min_length=1, max_length=100, description="Display name")
    email: str = Field(..., max_length=100, pattern=EMAIL_PATTERN)
    senha: str = Field(..., min_length=1, description="Password for the new account")
    tipo_usuario: UserRole = Field(
        default=UserRole.STANDARD, description="Account role"
    )
    foto: str | None = Field(
        default=None, description="Optional avatar as a base64 data URL"
    )


class UserLogin(StrictRequest):
    email: str = Field(..., min_length=1, max_length=100)
    senha: str = Field(..., min_length=1, max_length=MAX_LOGIN_PASSWORD_LENGTH)


class UserPublic(BaseModel):
    """User view returned to clients; never carries the password hash."""

    id: int
    nome: str
    email: str
    tipo_usuario: UserRole
    foto: str | None = None
    pontos: int
    online: bool
    confirmado: bool
    data_criacao: datetime

    model_config = ConfigDict(from_attributes=True)


class RegisterResponse(BaseModel):
    success: bool = True
    id: int


class LoginResponse(BaseModel):
    success: bool = True
    usuario: UserPublic
    token: str = Field(..., description="JWT bearer token for write endpoints")
    token_type: str = "bearer"


class MeResponse(BaseModel):
    success: bool = True
    usuario: UserPublic


class SuccessResponse(BaseModel):
    success: bool = True


class CreatedResponse(BaseModel):
    success: bool = True
    id: int


# ===== Ranking =====
class RankingEntry(BaseModel):
    id: int
    nome: str
    foto: str | None = None
    pontos: int
    online: bool


class ScoreAdjustment(StrictRequest):
    usuario_id: int = Field(..., gt=0)
    pontos: int = Field(
        ...,
        ge=-MAX_SCORE_ADJUSTMENT,
        le=MAX_SCORE_ADJUSTMENT,
        description="Points to add (negative to subtract)",
    )


# ===== Challenges =====
class ChallengeCreate(StrictRequest):
    titulo: str = Field(..., min_length=1, max_length=200)
    descricao: str = Field(..., min_length=1)
    area: str = Field(..., min_length=1, max_length=100)


class ChallengeOut(BaseModel):
    id: int
    recrutador_id: int
    recrutador_nome: str | None = None
    titulo: str
    descricao: str
    area: str
    data_postagem: datetime


class ChallengeListResponse(BaseModel):
    success: bool = True
    desafios: list[ChallengeOut]


class SubmissionCreate(StrictRequest):
    desafio_id: int = Field(..., gt=0)
    link: str = Field(..., min_length=1, max_length=2000)


class SubmissionResponse(BaseModel):
    success: bool = True
    message: str
    atividade_id: int


# ===== Journal =====
class JournalPostCreate(StrictRequest):
    titulo: str | None = Field(default=None, max_length=200)
    conteudo: str = Field(..., min_length=1)


class JournalPostOut(BaseModel):
    id: int
    usuario_id: int
    titulo: str | None = None
    conteudo: str
    data_postagem: datetime

    model_config = ConfigDict(from_attributes=True)


class JournalListResponse(BaseModel):
    success: bool = True
    posts: list[JournalPostOut]


# ===== Ideas & conclusions =====
class IdeaCreate(StrictRequest):
    titulo: str = Field(..., min_length=1, max_length=200)
    categoria: str = Field(..., min_length=1, max_length=100)
    descricao: str = Field(..., min_length=1)
    imagem: str | None = Field(default=None, description="Base64 data URL")


class IdeaOut(BaseModel):
    id: int
    usuario_id: int
    titulo: str
    categoria: str
    descricao: str
    imagem: str | None = None
    data_criacao: datetime

    model_config = ConfigDict(from_attributes=True)


class ConclusionCreate(StrictRequest):
    ideia_id: int = Field(..., gt=0)
    video: str = Field(..., min_length=1)
    imagens: str = Field(..., min_length=1)
    descricao: str = Field(..., min_length=1)


class ConclusionOut(BaseModel):
    id: int
    ideia_id: int
    video: str
    imagens: str
    descricao: str
    data: datetime

    model_config = ConfigDict(from_attributes=True)


# ===== Community =====
class CommunityPostCreate(StrictRequest):
    titulo: str = Field(..., min_length=1, max_length=200)
    texto: str = Field(..., min_length=1)
    imagem: str | None = Field(default=None, description="Base64 data URL")


class CommunityPostOut(BaseModel):
    id: int
    usuario_id: int
    titulo: str
    texto: str
    imagem: str | None = None
    data_criacao: datetime
    autor_nome: str
    autor_foto: str | None = None


# ===== Recruiter contact =====
class ContactCreate(StrictRequest):
    usuario_id: int = Field(..., gt=0)
    mensagem: str = Field(..., min_length=1, max_length=5000)


class ContactResponse(BaseModel):
    success: bool = True
    contato_id: int


# ===== Profile =====
class ProfileActivity(BaseModel):
    id: int
    desafio_id: int
    desafio_titulo: str
    link: str
    status: str
    data_submissao: datetime


class Profile(BaseModel):
    id: int
    nome: str
    tipo_usuario: UserRole
    foto: str | None = None
    pontos: int
    online: bool
    data_criacao: datetime
    posicao_ranking: int
    total_ideias: int
    total_diario: int
    total_atividades: int
    atividades_recentes: list[ProfileActivity]


class ProfileResponse(BaseModel):
    success: bool = True
    perfil: Profile

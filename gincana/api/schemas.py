"""
Pydantic schemas para requisições e respostas da API de administração.

Os campos são opcionais de propósito: a obrigatoriedade é verificada nas
operações de `gincana.admin`, que devolvem as mensagens de erro.
"""
from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, List, Optional


class ParticipantCreate(BaseModel):
    """Corpo de POST /api/participants."""
    name: Optional[str] = None


class AttendanceCreate(BaseModel):
    """Corpo de POST /api/participants/{id}/attendance."""
    date: Optional[str] = None
    type: Optional[str] = None


class BulkAttendanceCreate(BaseModel):
    """Corpo de POST /api/participants/bulk/attendance."""
    participant_ids: Optional[List[int]] = Field(None, alias="participantIds")
    date: Optional[str] = None
    type: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True)


class VerseCreate(BaseModel):
    """Corpo de POST /api/participants/{id}/verse."""
    ref: Optional[str] = None


class VisitorCreate(BaseModel):
    """Corpo de POST /api/participants/{id}/visitor."""
    name: Optional[str] = None


class PointsAsOfUpdate(BaseModel):
    """Corpo de PUT /api/points-as-of."""
    points_as_of: Optional[str] = Field(None, alias="pointsAsOf")

    model_config = ConfigDict(populate_by_name=True)


class ParticipantResponse(BaseModel):
    """Resposta das mutações de participante."""
    success: bool = True
    participant: Dict[str, Any]


class BulkAttendanceResponse(BaseModel):
    success: bool = True
    updated_ids: List[int] = Field(serialization_alias="updatedIds")


class PointsAsOfResponse(BaseModel):
    success: bool = True
    points_as_of: str = Field(serialization_alias="pointsAsOf")


class ActivityHistoryResponse(BaseModel):
    activities: List[Dict[str, Any]]


class RankingEntry(BaseModel):
    """Linha do ranking calculado."""
    rank: int
    id: int
    name: str
    points: int
    points_delta: int = Field(serialization_alias="pointsDelta")
    previous_points: Optional[int] = Field(None, serialization_alias="previousPoints")


class RankingResponse(BaseModel):
    points_as_of: Optional[str] = Field(None, serialization_alias="pointsAsOf")
    version: str
    participants: List[RankingEntry]

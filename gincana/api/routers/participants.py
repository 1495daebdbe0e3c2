"""
Endpoints de participantes: cadastro, presenças, versículos e visitantes.
"""
from fastapi import APIRouter, Depends

from gincana.admin import LeaderboardAdmin
from gincana.api.dependencies import get_admin
from gincana.api.schemas import (
    AttendanceCreate,
    BulkAttendanceCreate,
    BulkAttendanceResponse,
    ParticipantCreate,
    ParticipantResponse,
    VerseCreate,
    VisitorCreate,
)

router = APIRouter()


@router.post("", response_model=ParticipantResponse)
async def create_participant(
    body: ParticipantCreate,
    admin: LeaderboardAdmin = Depends(get_admin)
):
    """Cria participante com o próximo id disponível."""
    return ParticipantResponse(participant=admin.add_participant(body.name))


# Registrado antes de /{participant_id}/attendance para "bulk" não virar id
@router.post("/bulk/attendance", response_model=BulkAttendanceResponse)
async def create_bulk_attendance(
    body: BulkAttendanceCreate,
    admin: LeaderboardAdmin = Depends(get_admin)
):
    """Registra a mesma presença para vários participantes."""
    updated = admin.add_bulk_attendance(body.participant_ids, body.date, body.type)
    return BulkAttendanceResponse(updated_ids=updated)


@router.post("/{participant_id}/attendance", response_model=ParticipantResponse)
async def create_attendance(
    participant_id: int,
    body: AttendanceCreate,
    admin: LeaderboardAdmin = Depends(get_admin)
):
    participant = admin.add_attendance(participant_id, body.date, body.type)
    return ParticipantResponse(participant=participant)


@router.delete("/{participant_id}/attendance/{index}", response_model=ParticipantResponse)
async def delete_attendance(
    participant_id: int,
    index: int,
    admin: LeaderboardAdmin = Depends(get_admin)
):
    return ParticipantResponse(participant=admin.remove_attendance(participant_id, index))


@router.post("/{participant_id}/verse", response_model=ParticipantResponse)
async def create_verse(
    participant_id: int,
    body: VerseCreate,
    admin: LeaderboardAdmin = Depends(get_admin)
):
    """
    Adiciona versículo memorizado.

    - Retorna 400 se a referência já estiver na lista do participante
    """
    return ParticipantResponse(participant=admin.add_verse(participant_id, body.ref))


@router.delete("/{participant_id}/verse/{index}", response_model=ParticipantResponse)
async def delete_verse(
    participant_id: int,
    index: int,
    admin: LeaderboardAdmin = Depends(get_admin)
):
    return ParticipantResponse(participant=admin.remove_verse(participant_id, index))


@router.post("/{participant_id}/visitor", response_model=ParticipantResponse)
async def create_visitor(
    participant_id: int,
    body: VisitorCreate,
    admin: LeaderboardAdmin = Depends(get_admin)
):
    return ParticipantResponse(participant=admin.add_visitor(participant_id, body.name))


@router.delete("/{participant_id}/visitor/{index}", response_model=ParticipantResponse)
async def delete_visitor(
    participant_id: int,
    index: int,
    admin: LeaderboardAdmin = Depends(get_admin)
):
    return ParticipantResponse(participant=admin.remove_visitor(participant_id, index))

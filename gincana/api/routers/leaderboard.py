"""
Endpoints do leaderboard: documento completo, data de comparação,
histórico de atividades e ranking calculado.
"""
from fastapi import APIRouter, Depends, Query
from typing import Optional
import logging

import pandas as pd

from gincana.admin import LeaderboardAdmin
from gincana.api.dependencies import get_admin, get_store
from gincana.api.schemas import (
    ActivityHistoryResponse,
    PointsAsOfResponse,
    PointsAsOfUpdate,
    RankingEntry,
    RankingResponse,
)
from gincana.config import BONUS_FILE, GAMES_FILE, VERSES_FILE
from gincana.dates import parse_timestamp
from gincana.scoring import build_leaderboard, resolve_selected_version
from gincana.store import LeaderboardStore, get_participants, load_json_document, load_rules

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/leaderboard")
async def get_leaderboard(admin: LeaderboardAdmin = Depends(get_admin)):
    """Documento leaderboard.json completo."""
    return admin.get_leaderboard()


@router.put("/points-as-of", response_model=PointsAsOfResponse)
async def update_points_as_of(
    body: PointsAsOfUpdate,
    admin: LeaderboardAdmin = Depends(get_admin)
):
    """
    Atualiza a data de comparação do delta.

    - O delta conta apenas atividades com addedAt >= pointsAsOf
    """
    return PointsAsOfResponse(points_as_of=admin.set_points_as_of(body.points_as_of))


@router.get("/activity-history", response_model=ActivityHistoryResponse)
async def get_activity_history(admin: LeaderboardAdmin = Depends(get_admin)):
    """As 50 atividades mais recentes de todos os participantes."""
    activities = admin.activity_history()
    return ActivityHistoryResponse(activities=[a.to_dict() for a in activities])


@router.get("/rankings", response_model=RankingResponse)
async def get_rankings(
    version: Optional[str] = Query(None, description="Versão da Bíblia usada na contagem de palavras"),
    store: LeaderboardStore = Depends(get_store)
):
    """
    Ranking calculado com pontos totais e delta desde pointsAsOf.
    """
    document = store.read()
    data_dir = store.path.parent
    verses_data = load_json_document(data_dir / VERSES_FILE)
    games_data = load_json_document(data_dir / GAMES_FILE)
    bonus_data = load_json_document(data_dir / BONUS_FILE)
    rules = load_rules(store.rules_path, document)
    selected_version = resolve_selected_version(verses_data, version)

    df = build_leaderboard(
        get_participants(document),
        rules,
        verses_data=verses_data,
        selected_version=selected_version,
        games_data=games_data,
        bonus_data=bonus_data,
        cutoff=parse_timestamp(document.get('pointsAsOf'))
    )

    entries = [
        RankingEntry(
            rank=int(rank),
            id=int(row['ID']),
            name=row['Participante'],
            points=int(row['Pontos']),
            points_delta=int(row['Delta']),
            previous_points=None if pd.isna(row['Anterior']) else int(row['Anterior'])
        )
        for rank, row in df.iterrows()
    ]

    return RankingResponse(
        points_as_of=document.get('pointsAsOf'),
        version=selected_version,
        participants=entries
    )

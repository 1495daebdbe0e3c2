"""
Dependências do FastAPI.
"""
from fastapi import Depends

from gincana.admin import LeaderboardAdmin
from gincana.store import LeaderboardStore


def get_store() -> LeaderboardStore:
    """Store apontando para os caminhos definidos em settings."""
    return LeaderboardStore.from_settings()


def get_admin(store: LeaderboardStore = Depends(get_store)) -> LeaderboardAdmin:
    return LeaderboardAdmin(store)

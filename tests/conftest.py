"""
Fixtures de pytest para os testes da Gincana.
"""

import json
import os
import sys
from pathlib import Path
from typing import Dict, List

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from gincana.models import Rule
from gincana.store import LeaderboardStore


@pytest.fixture
def mock_rules() -> List[Rule]:
    """Regras de pontuação como no rules.json real."""
    return [
        Rule(description="Presença na embaixada", points=10, activity_type="embaixada", id=1),
        Rule(description="Presença nos compromissos da igreja", points=10, activity_type="igreja", id=2),
        Rule(description="Trazer visitante", points=15, id=3),
        Rule(description="Versículo memorizado (<20 palavras)", points=25, id=4),
        Rule(description="Versículo memorizado (>=20 palavras)", points=35, id=5),
        Rule(description="Pre-requisitos do candidato concluídos", points=50, id=6),
        Rule(description="Tarefa manual do candidato", points=20, id=7),
    ]


@pytest.fixture
def mock_verses_data() -> Dict:
    """verses.json com contagens de palavras na NVI."""
    return {
        "generatedAt": "2026-01-20T10:00:00.000Z",
        "defaultVersion": "NVI",
        "versions": {
            "NVI": {"id": 129, "name": "Nova Versão Internacional", "fullTitle": "Nova Versão Internacional"},
            "ARA": {"id": 1608, "name": "Almeida Revista e Atualizada", "fullTitle": "Almeida Revista e Atualizada"},
        },
        "verses": {
            "Jo 3:16": {
                "NVI": {"reference": "João 3:16", "text": "Porque Deus tanto amou o mundo...", "wordCount": 27,
                        "youversionUrl": "https://www.bible.com/pt/bible/129/JHN.3.16"},
                "ARA": {"reference": "João 3:16", "text": "Porque Deus amou ao mundo...", "wordCount": 19,
                        "youversionUrl": "https://www.bible.com/pt/bible/1608/JHN.3.16"},
            },
            "Jo 11:35": {
                "NVI": {"reference": "João 11:35", "text": "Jesus chorou.", "wordCount": 2,
                        "youversionUrl": "https://www.bible.com/pt/bible/129/JHN.11.35"},
            },
        },
        "unavailable": [],
    }


@pytest.fixture
def mock_leaderboard() -> Dict:
    """Documento leaderboard.json com dois participantes."""
    return {
        "pointsAsOf": "2026-01-20T00:00:00.000Z",
        "participants": [
            {
                "id": 1,
                "name": "Ana",
                "attendance": [
                    {"date": "2026-01-18", "type": "embaixada", "addedAt": "2026-01-18T22:00:00.000Z"},
                    {"date": "2026-01-25", "type": "igreja", "addedAt": "2026-01-25T13:00:00.000Z"},
                ],
                "memorizedVerses": [
                    "Jo 11:35",
                    {"ref": "Jo 3:16", "addedAt": "2026-01-22T18:30:00.000Z"},
                ],
                "visitors": [{"name": "Maria", "addedAt": "2026-01-25T13:05:00.000Z"}],
            },
            {
                "id": 2,
                "name": "Bruno",
                "attendance": [],
                "memorizedVerses": [],
                "visitors": [],
            },
        ],
    }


@pytest.fixture
def leaderboard_store(tmp_path: Path, mock_leaderboard: Dict) -> LeaderboardStore:
    """LeaderboardStore gravado em diretório temporário."""
    path = tmp_path / "leaderboard.json"
    path.write_text(json.dumps(mock_leaderboard, ensure_ascii=False), encoding="utf-8")
    return LeaderboardStore(path)

"""
Salva um retrato dos pontos atuais de cada participante.

Grava `previousPoints` e `previousPointsAt` no leaderboard.json para que o
ranking possa mostrar a variação desde o último retrato.

Uso:
    python -m gincana.scripts.snapshot_points [--data-dir DIR]
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional

from gincana.config import (
    BONUS_FILE,
    GAMES_FILE,
    LEADERBOARD_FILE,
    RULES_FILE,
    VERSES_FILE,
    settings,
)
from gincana.dates import utc_now_iso
from gincana.models import Participant
from gincana.scoring import calculate_participant_points
from gincana.store import LeaderboardStore, StoreError, load_json_document, load_rules

logger = logging.getLogger(__name__)


def snapshot_points(
    document: Dict,
    rules: List,
    verses_data: Optional[Dict] = None,
    games_data: Optional[Dict] = None,
    bonus_data: Optional[Dict] = None,
    timestamp: Optional[str] = None
) -> int:
    """
    Calcula e grava no documento os pontos atuais de cada participante.

    Returns:
        Número de participantes atualizados
    """
    now = timestamp or utc_now_iso()
    updated = 0

    for raw in document.get('participants', []):
        points = calculate_participant_points(
            Participant.from_dict(raw),
            rules,
            verses_data=verses_data,
            games_data=games_data,
            bonus_data=bonus_data
        )
        raw['previousPoints'] = points
        raw['previousPointsAt'] = now
        updated += 1
        logger.info(f"  ✓ {raw.get('name')}: {points} pts")

    return updated


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Salva previousPoints de cada participante")
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=settings.DATA_DIR,
        help="diretório com os JSON de dados (default: DATA_DIR)",
    )
    args = parser.parse_args(argv)
    data_dir: Path = args.data_dir

    logger.info(f"📸 Criando snapshot de pontos em {data_dir}")

    store = LeaderboardStore(data_dir / LEADERBOARD_FILE, settings.mirror_path(LEADERBOARD_FILE))
    rules_path = data_dir / RULES_FILE

    try:
        document = store.read()
        if not rules_path.exists():
            raise StoreError(f"Arquivo não encontrado: {rules_path}")
        rules = load_rules(rules_path)
        verses_data = load_json_document(data_dir / VERSES_FILE)
        games_data = load_json_document(data_dir / GAMES_FILE)
        bonus_data = load_json_document(data_dir / BONUS_FILE)

        updated = snapshot_points(document, rules, verses_data, games_data, bonus_data)
        store.write(document)
    except StoreError as e:
        logger.error(f"❌ {e}")
        return 1

    logger.info(f"✅ Snapshot concluído: {updated} participantes atualizados")
    return 0


if __name__ == "__main__":
    sys.exit(main())

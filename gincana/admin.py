"""
Operações administrativas sobre o leaderboard.

Cada operação faz um ciclo completo ler-alterar-gravar no LeaderboardStore.
Remoções são por posição na lista, então só são seguras com um único
operador fazendo chamadas em sequência.
"""

import logging
from typing import Any, Dict, List, Optional

from gincana.config import ACTIVITY_HISTORY_LIMIT, EPOCH_TIMESTAMP
from gincana.dates import EPOCH, parse_timestamp, utc_now_iso
from gincana.models import ActivityEntry, VerseRecord, VisitorRecord
from gincana.store import LeaderboardStore

logger = logging.getLogger(__name__)


class AdminError(Exception):
    """Erro de uma operação administrativa."""


class ValidationError(AdminError):
    """Campo obrigatório ausente, índice inválido ou entrada duplicada."""


class NotFoundError(AdminError):
    """Participante inexistente."""


def find_participant(document: Dict[str, Any], participant_id: int) -> Optional[Dict[str, Any]]:
    for participant in document.get('participants', []):
        if participant.get('id') == participant_id:
            return participant
    return None


def _require_participant(document: Dict[str, Any], participant_id: int) -> Dict[str, Any]:
    participant = find_participant(document, participant_id)
    if participant is None:
        raise NotFoundError("Participant not found")
    return participant


def _remove_at(records: Optional[List], index: int, label: str) -> None:
    if not records or index < 0 or index >= len(records):
        raise ValidationError(f"Invalid {label} index")
    del records[index]


def build_activity_history(
    document: Dict[str, Any],
    limit: int = ACTIVITY_HISTORY_LIMIT
) -> List[ActivityEntry]:
    """
    Junta presenças, versículos e visitantes de todos os participantes.

    Ordena pelo `addedAt` (mais recente primeiro). Registros sem timestamp
    ficam na época (1970), ou seja, no fim da lista.

    Args:
        document: Documento do leaderboard
        limit: Máximo de itens retornados

    Returns:
        Lista de ActivityEntry
    """
    activities: List[ActivityEntry] = []

    for participant in document.get('participants', []):
        pid = participant.get('id')
        name = participant.get('name', '')

        for index, attendance in enumerate(participant.get('attendance') or []):
            activities.append(ActivityEntry(
                type='attendance',
                participant_id=pid,
                participant_name=name,
                index=index,
                data=attendance,
                added_at=attendance.get('addedAt') or EPOCH_TIMESTAMP
            ))

        for index, raw in enumerate(participant.get('memorizedVerses') or []):
            verse = VerseRecord.from_raw(raw)
            activities.append(ActivityEntry(
                type='verse',
                participant_id=pid,
                participant_name=name,
                index=index,
                data=raw if isinstance(raw, dict) else verse.to_dict(),
                added_at=verse.added_at or EPOCH_TIMESTAMP
            ))

        for index, raw in enumerate(participant.get('visitors') or []):
            visitor = VisitorRecord.from_raw(raw)
            activities.append(ActivityEntry(
                type='visitor',
                participant_id=pid,
                participant_name=name,
                index=index,
                data=raw if isinstance(raw, dict) else visitor.to_dict(),
                added_at=visitor.added_at or EPOCH_TIMESTAMP
            ))

    activities.sort(key=lambda a: parse_timestamp(a.added_at) or EPOCH, reverse=True)
    return activities[:limit]


class LeaderboardAdmin:
    """Operações usadas pela API de administração."""

    def __init__(self, store: LeaderboardStore):
        self.store = store

    def get_leaderboard(self) -> Dict[str, Any]:
        return self.store.read()

    def add_participant(self, name: Optional[str]) -> Dict[str, Any]:
        """Cria participante com id = maior id existente + 1."""
        if not name:
            raise ValidationError("name is required")

        document = self.store.read()
        max_id = max([0] + [p.get('id', 0) for p in document['participants']])
        participant = {
            'id': max_id + 1,
            'name': name,
            'attendance': [],
            'memorizedVerses': [],
            'visitors': []
        }
        document['participants'].append(participant)
        self.store.write(document)
        logger.info(f"Participante criado: {name} (id {participant['id']})")
        return participant

    def add_attendance(self, participant_id: int, date: Optional[str], type: Optional[str]) -> Dict[str, Any]:
        if not date or not type:
            raise ValidationError("date and type are required")

        document = self.store.read()
        participant = _require_participant(document, participant_id)
        participant.setdefault('attendance', []).append({
            'date': date,
            'type': type,
            'addedAt': utc_now_iso()
        })
        self.store.write(document)
        return participant

    def add_bulk_attendance(
        self,
        participant_ids: Optional[List[int]],
        date: Optional[str],
        type: Optional[str]
    ) -> List[int]:
        """
        Registra a mesma presença para vários participantes.

        Ids desconhecidos são ignorados; retorna os ids atualizados.
        """
        if not isinstance(participant_ids, list) or not date or not type:
            raise ValidationError("participantIds (array), date, and type are required")

        document = self.store.read()
        added_at = utc_now_iso()
        updated = []

        for pid in participant_ids:
            participant = find_participant(document, pid)
            if participant is None:
                logger.warning(f"Presença em lote: participante {pid} não encontrado")
                continue
            participant.setdefault('attendance', []).append({
                'date': date,
                'type': type,
                'addedAt': added_at
            })
            updated.append(participant['id'])

        self.store.write(document)
        return updated

    def remove_attendance(self, participant_id: int, index: int) -> Dict[str, Any]:
        document = self.store.read()
        participant = _require_participant(document, participant_id)
        _remove_at(participant.get('attendance'), index, 'attendance')
        self.store.write(document)
        return participant

    def add_verse(self, participant_id: int, ref: Optional[str]) -> Dict[str, Any]:
        """Adiciona versículo; rejeita referência já memorizada (texto ou objeto)."""
        if not ref:
            raise ValidationError("ref is required")

        document = self.store.read()
        participant = _require_participant(document, participant_id)
        verses = participant.setdefault('memorizedVerses', [])

        if any(VerseRecord.from_raw(v).ref == ref for v in verses):
            raise ValidationError("Verse already memorized")

        verses.append(VerseRecord(ref=ref, added_at=utc_now_iso()).to_dict())
        self.store.write(document)
        return participant

    def remove_verse(self, participant_id: int, index: int) -> Dict[str, Any]:
        document = self.store.read()
        participant = _require_participant(document, participant_id)
        _remove_at(participant.get('memorizedVerses'), index, 'verse')
        self.store.write(document)
        return participant

    def add_visitor(self, participant_id: int, name: Optional[str]) -> Dict[str, Any]:
        if not name:
            raise ValidationError("name is required")

        document = self.store.read()
        participant = _require_participant(document, participant_id)
        participant.setdefault('visitors', []).append(
            VisitorRecord(name=name, added_at=utc_now_iso()).to_dict()
        )
        self.store.write(document)
        return participant

    def remove_visitor(self, participant_id: int, index: int) -> Dict[str, Any]:
        document = self.store.read()
        participant = _require_participant(document, participant_id)
        _remove_at(participant.get('visitors'), index, 'visitor')
        self.store.write(document)
        return participant

    def set_points_as_of(self, points_as_of: Optional[str]) -> str:
        """Define a data de comparação usada no delta."""
        if not points_as_of:
            raise ValidationError("pointsAsOf is required")

        document = self.store.read()
        document['pointsAsOf'] = points_as_of
        self.store.write(document)
        return document['pointsAsOf']

    def activity_history(self) -> List[ActivityEntry]:
        return build_activity_history(self.store.read())

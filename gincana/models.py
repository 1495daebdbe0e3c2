"""
Modelos de dados da Gincana.

Define as estruturas lidas dos documentos JSON. Registros de versículo e de
visitante existem em duas formas (texto simples legado ou objeto com
`addedAt`); os construtores `from_raw` normalizam ambas.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Union

from gincana.dates import parse_timestamp


@dataclass
class AttendanceRecord:
    """Presença em uma atividade (tipo livre, ex.: 'embaixada', 'igreja')."""
    date: str
    type: str
    added_at: Optional[str] = None

    @property
    def timestamp(self) -> Optional[datetime]:
        return parse_timestamp(self.added_at)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'AttendanceRecord':
        return cls(
            date=data.get('date', ''),
            type=data.get('type', ''),
            added_at=data.get('addedAt')
        )

    def to_dict(self) -> Dict[str, Any]:
        result = {'date': self.date, 'type': self.type}
        if self.added_at:
            result['addedAt'] = self.added_at
        return result


@dataclass
class VerseRecord:
    """Versículo memorizado (referência única ou intervalo)."""
    ref: str
    added_at: Optional[str] = None

    @property
    def timestamp(self) -> Optional[datetime]:
        return parse_timestamp(self.added_at)

    @classmethod
    def from_raw(cls, raw: Union[str, Dict[str, Any]]) -> 'VerseRecord':
        """Aceita "Jo 3:16" ou {"ref": "Jo 3:16", "addedAt": "..."}."""
        if isinstance(raw, str):
            return cls(ref=raw)
        return cls(ref=raw.get('ref', ''), added_at=raw.get('addedAt'))

    def to_dict(self) -> Dict[str, Any]:
        result = {'ref': self.ref}
        if self.added_at:
            result['addedAt'] = self.added_at
        return result


@dataclass
class VisitorRecord:
    """Visitante trazido pelo participante."""
    name: str
    added_at: Optional[str] = None

    @property
    def timestamp(self) -> Optional[datetime]:
        return parse_timestamp(self.added_at)

    @classmethod
    def from_raw(cls, raw: Union[str, Dict[str, Any]]) -> 'VisitorRecord':
        """Aceita "Maria" ou {"name": "Maria", "addedAt": "..."}."""
        if isinstance(raw, str):
            return cls(name=raw)
        return cls(name=raw.get('name', ''), added_at=raw.get('addedAt'))

    def to_dict(self) -> Dict[str, Any]:
        result = {'name': self.name}
        if self.added_at:
            result['addedAt'] = self.added_at
        return result


@dataclass
class DisciplineRecord:
    """Penalidade disciplinar com valor próprio (normalmente negativo)."""
    points: int
    reason: Optional[str] = None
    date: Optional[str] = None
    added_at: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'DisciplineRecord':
        return cls(
            points=int(data.get('points', 0)),
            reason=data.get('reason'),
            date=data.get('date'),
            added_at=data.get('addedAt')
        )


@dataclass
class CandidatoProgress:
    """Progresso do candidato: pré-requisitos e tarefas manuais concluídas."""
    prerequisites: bool = False
    manual_tasks: int = 0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'CandidatoProgress':
        return cls(
            prerequisites=bool(data.get('prerequisites', False)),
            manual_tasks=int(data.get('manualTasks', 0) or 0)
        )


@dataclass
class Participant:
    """Participante e suas listas de atividades."""
    id: int
    name: str
    start_points: int = 0
    attendance: List[AttendanceRecord] = field(default_factory=list)
    memorized_verses: List[VerseRecord] = field(default_factory=list)
    visitors: List[VisitorRecord] = field(default_factory=list)
    disciplines: List[DisciplineRecord] = field(default_factory=list)
    candidato_progress: Optional[CandidatoProgress] = None
    previous_points: Optional[int] = None
    previous_points_at: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Participant':
        """Cria instância a partir do objeto do leaderboard.json."""
        progress = data.get('candidatoProgress')
        return cls(
            id=int(data['id']),
            name=data.get('name', ''),
            start_points=int(data.get('startPoints') or 0),
            attendance=[AttendanceRecord.from_dict(a) for a in data.get('attendance') or []],
            memorized_verses=[VerseRecord.from_raw(v) for v in data.get('memorizedVerses') or []],
            visitors=[VisitorRecord.from_raw(v) for v in data.get('visitors') or []],
            disciplines=[DisciplineRecord.from_dict(d) for d in data.get('disciplines') or []],
            candidato_progress=CandidatoProgress.from_dict(progress) if progress else None,
            previous_points=data.get('previousPoints'),
            previous_points_at=data.get('previousPointsAt')
        )


@dataclass
class Rule:
    """Regra de pontuação exibida na seção 'Como ganhar pontos'."""
    description: str
    points: int
    activity_type: Optional[str] = None
    id: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Rule':
        return cls(
            description=data.get('description', ''),
            points=int(data.get('points', 0)),
            activity_type=data.get('activityType'),
            id=data.get('id')
        )


@dataclass
class BibleVersion:
    """Versão da Bíblia configurada em bible-versions.json."""
    id: int
    abbreviation: str
    name: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'BibleVersion':
        return cls(
            id=int(data['id']),
            abbreviation=data['abbreviation'],
            name=data.get('name', data['abbreviation'])
        )

    def to_dict(self) -> Dict[str, Any]:
        """Formato gravado em verses.json (`versions`)."""
        return {
            'id': self.id,
            'name': self.name,
            'fullTitle': self.name
        }


@dataclass
class VerseData:
    """Texto de um versículo em uma versão, com contagem de palavras."""
    reference: str
    text: str
    word_count: int
    youversion_url: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            'reference': self.reference,
            'text': self.text,
            'wordCount': self.word_count,
            'youversionUrl': self.youversion_url
        }


@dataclass
class EventResult:
    """Resultado de um participante em um jogo ou desafio bônus."""
    participant_id: int
    points: int
    position: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'EventResult':
        return cls(
            participant_id=int(data['participantId']),
            points=int(data.get('points', 0)),
            position=data.get('position')
        )


@dataclass
class ScoredEvent:
    """Jogo (games.json) ou desafio bônus (bonus.json)."""
    id: int
    name: str
    date: str = ''
    description: Optional[str] = None
    results: List[EventResult] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ScoredEvent':
        return cls(
            id=data.get('id', 0),
            name=data.get('name', ''),
            date=data.get('date', ''),
            description=data.get('description'),
            results=[EventResult.from_dict(r) for r in data.get('results') or []]
        )


@dataclass
class ActivityEntry:
    """Item do histórico de atividades do admin."""
    type: str
    participant_id: int
    participant_name: str
    index: int
    data: Dict[str, Any]
    added_at: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            'type': self.type,
            'participantId': self.participant_id,
            'participantName': self.participant_name,
            'index': self.index,
            'data': self.data,
            'addedAt': self.added_at
        }

"""
Motor de cálculo de pontos.

Este módulo contém a lógica que soma os pontos de um participante a partir
das regras (rules.json), dos versículos (verses.json) e dos resultados de
jogos e desafios bônus.
"""

import logging
from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Optional

import pandas as pd

from gincana.config import (
    ATTENDANCE_ALIASES,
    DEFAULT_BIBLE_VERSION,
    LARGE_VERSE_POINTS,
    RULE_PATTERN_LARGE_VERSE,
    RULE_PATTERN_MANUAL_TASK,
    RULE_PATTERN_PREREQUISITES,
    RULE_PATTERN_SMALL_VERSE,
    RULE_PATTERN_VISITOR,
    SMALL_VERSE_POINTS,
    get_attendance_abbrev,
    get_attendance_label,
)
from gincana.dates import parse_local_date
from gincana.models import Participant, Rule, ScoredEvent
from gincana.references import calculate_verse_points, expand_verse_range

logger = logging.getLogger(__name__)


# ============================================================================
# REGRAS
# ============================================================================

def get_rule_points_by_activity_type(rules: List[Rule], activity_type: str) -> int:
    """Pontos da primeira regra com `activityType` igual; 0 se não houver."""
    for rule in rules:
        if rule.activity_type == activity_type:
            return rule.points
    return 0


def get_rule_points_by_pattern(rules: List[Rule], pattern: str) -> int:
    """Pontos da primeira regra cuja descrição contém o padrão (sem caixa)."""
    needle = pattern.lower()
    for rule in rules:
        if needle in rule.description.lower():
            return rule.points
    return 0


def resolve_attendance_points(rules: List[Rule], attendance_type: str) -> int:
    """
    Resolve os pontos de um tipo de presença.

    Primeiro procura `activityType`; se o resultado for 0 (regra ausente ou
    regra de 0 pontos, indistinguíveis) cai para busca na descrição:
    'embaixada' -> "embaixada", 'igreja' -> "compromissos", demais tipos
    pelo próprio nome.
    """
    points = get_rule_points_by_activity_type(rules, attendance_type)
    if points != 0:
        return points
    pattern = ATTENDANCE_ALIASES.get(attendance_type, attendance_type)
    return get_rule_points_by_pattern(rules, pattern)


def get_verse_tier_points(rules: List[Rule]) -> tuple:
    """Retorna (pontos versículo pequeno, pontos versículo grande)."""
    small = get_rule_points_by_pattern(rules, RULE_PATTERN_SMALL_VERSE) or SMALL_VERSE_POINTS
    large = get_rule_points_by_pattern(rules, RULE_PATTERN_LARGE_VERSE) or LARGE_VERSE_POINTS
    return small, large


# ============================================================================
# VERSÍCULOS
# ============================================================================

def resolve_selected_version(
    verses_data: Optional[Dict[str, Any]],
    selected_version: Optional[str] = None
) -> str:
    """Versão escolhida, senão a `defaultVersion` do verses.json, senão NVI."""
    if selected_version:
        return selected_version
    if verses_data and verses_data.get('defaultVersion'):
        return verses_data['defaultVersion']
    return DEFAULT_BIBLE_VERSION


def get_word_count(
    verses_data: Optional[Dict[str, Any]],
    ref: str,
    version: str
) -> Optional[int]:
    """Contagem de palavras de um versículo na versão, ou None."""
    if not verses_data:
        return None
    verse = (verses_data.get('verses') or {}).get(ref, {}).get(version)
    if not verse:
        return None
    return verse.get('wordCount')


def calculate_reference_points(
    ref: str,
    rules: List[Rule],
    verses_data: Optional[Dict[str, Any]],
    version: str
) -> int:
    """
    Pontos de uma referência memorizada (intervalos expandidos).

    Cada versículo vale o nível pelo número de palavras; sem dados de
    palavras o versículo vale o nível menor, nunca zero.
    """
    small_pts, large_pts = get_verse_tier_points(rules)
    total = 0
    for single_ref in expand_verse_range(ref):
        word_count = get_word_count(verses_data, single_ref, version)
        if word_count is not None:
            total += calculate_verse_points(word_count, small_pts, large_pts)
        else:
            total += small_pts
    return total


# ============================================================================
# JOGOS E BÔNUS
# ============================================================================

def iter_events(games_data: Optional[Dict], bonus_data: Optional[Dict]) -> Iterable[ScoredEvent]:
    """Percorre os jogos de games.json e os desafios de bonus.json."""
    if games_data:
        for game in games_data.get('games') or []:
            yield ScoredEvent.from_dict(game)
    if bonus_data:
        for challenge in bonus_data.get('challenges') or []:
            yield ScoredEvent.from_dict(challenge)


def calculate_event_points(
    participant_id: int,
    games_data: Optional[Dict] = None,
    bonus_data: Optional[Dict] = None
) -> int:
    """Soma os pontos de jogos e bônus de um participante."""
    return sum(
        result.points
        for event in iter_events(games_data, bonus_data)
        for result in event.results
        if result.participant_id == participant_id
    )


# ============================================================================
# TOTAL E DELTA
# ============================================================================

def calculate_participant_points(
    participant: Participant,
    rules: List[Rule],
    verses_data: Optional[Dict[str, Any]] = None,
    selected_version: Optional[str] = None,
    games_data: Optional[Dict] = None,
    bonus_data: Optional[Dict] = None
) -> int:
    """
    Calcula o total de pontos de um participante.

    Ordem (todas as parcelas somam):
    1. startPoints (pontos congelados de antes do sistema)
    2. Presenças pela regra do tipo
    3. Visitantes × regra "visitante"
    4. Versículos por nível de palavras (<20 / >=20)
    5. Progresso do candidato (pré-requisitos e tarefas manuais)
    6. Disciplinas (valor próprio, normalmente negativo)
    7. Jogos e desafios bônus

    O resultado não é limitado a zero.

    Args:
        participant: Participante normalizado
        rules: Regras de pontuação
        verses_data: Conteúdo do verses.json (opcional)
        selected_version: Versão da Bíblia usada na contagem de palavras
        games_data: Conteúdo do games.json (opcional)
        bonus_data: Conteúdo do bonus.json (opcional)

    Returns:
        Total de pontos
    """
    version = resolve_selected_version(verses_data, selected_version)
    total = participant.start_points

    for attendance in participant.attendance:
        total += resolve_attendance_points(rules, attendance.type)

    visitor_pts = get_rule_points_by_pattern(rules, RULE_PATTERN_VISITOR)
    total += len(participant.visitors) * visitor_pts

    for verse in participant.memorized_verses:
        total += calculate_reference_points(verse.ref, rules, verses_data, version)

    progress = participant.candidato_progress
    if progress:
        if progress.prerequisites:
            total += get_rule_points_by_pattern(rules, RULE_PATTERN_PREREQUISITES)
        total += progress.manual_tasks * get_rule_points_by_pattern(rules, RULE_PATTERN_MANUAL_TASK)

    for discipline in participant.disciplines:
        total += discipline.points

    total += calculate_event_points(participant.id, games_data, bonus_data)

    return total


def _added_since(timestamp: Optional[datetime], cutoff: datetime) -> bool:
    # Registros sem timestamp nunca entram no delta
    return timestamp is not None and timestamp >= cutoff


def calculate_delta_points(
    participant: Participant,
    rules: List[Rule],
    cutoff: Optional[datetime],
    verses_data: Optional[Dict[str, Any]] = None,
    selected_version: Optional[str] = None
) -> int:
    """
    Pontos ganhos desde a data de comparação (`pointsAsOf`).

    Considera apenas presenças, versículos e visitantes com `addedAt`
    maior ou igual ao corte. startPoints, candidato, disciplinas, jogos e
    bônus ficam de fora.

    Args:
        participant: Participante normalizado
        rules: Regras de pontuação
        cutoff: Data/hora de corte com fuso, ou None
        verses_data: Conteúdo do verses.json (opcional)
        selected_version: Versão da Bíblia

    Returns:
        Pontos do período (0 se não houver corte)
    """
    if cutoff is None:
        return 0

    version = resolve_selected_version(verses_data, selected_version)
    total = 0

    for attendance in participant.attendance:
        if _added_since(attendance.timestamp, cutoff):
            total += resolve_attendance_points(rules, attendance.type)

    visitor_pts = get_rule_points_by_pattern(rules, RULE_PATTERN_VISITOR)
    for visitor in participant.visitors:
        if _added_since(visitor.timestamp, cutoff):
            total += visitor_pts

    for verse in participant.memorized_verses:
        if _added_since(verse.timestamp, cutoff):
            total += calculate_reference_points(verse.ref, rules, verses_data, version)

    return total


# ============================================================================
# RANKING
# ============================================================================

def build_leaderboard(
    participants: List[Participant],
    rules: List[Rule],
    verses_data: Optional[Dict[str, Any]] = None,
    selected_version: Optional[str] = None,
    games_data: Optional[Dict] = None,
    bonus_data: Optional[Dict] = None,
    cutoff: Optional[datetime] = None
) -> pd.DataFrame:
    """
    Monta o ranking ordenado por pontos (desempate por nome).

    Returns:
        DataFrame com índice começando em 1
    """
    data = []
    for participant in participants:
        points = calculate_participant_points(
            participant, rules, verses_data, selected_version, games_data, bonus_data
        )
        delta = calculate_delta_points(
            participant, rules, cutoff, verses_data, selected_version
        )
        data.append({
            'ID': participant.id,
            'Participante': participant.name,
            'Presenças': len(participant.attendance),
            'Versículos': sum(len(expand_verse_range(v.ref)) for v in participant.memorized_verses),
            'Visitantes': len(participant.visitors),
            'Jogos': calculate_event_points(participant.id, games_data, bonus_data),
            'Delta': delta,
            'Anterior': participant.previous_points,
            'Pontos': points
        })

    df = pd.DataFrame(data, columns=[
        'ID', 'Participante', 'Presenças', 'Versículos', 'Visitantes',
        'Jogos', 'Delta', 'Anterior', 'Pontos'
    ])
    if not df.empty:
        df = df.sort_values(['Pontos', 'Participante'], ascending=[False, True]).reset_index(drop=True)
        df.index = df.index + 1

    logger.info(f"Ranking calculado para {len(participants)} participantes")
    return df


def summarize_games(
    games_data: Optional[Dict],
    bonus_data: Optional[Dict] = None,
    names: Optional[Dict[int, str]] = None
) -> pd.DataFrame:
    """
    Resume jogos e bônus por participante (pontos e quantidade de eventos).

    Args:
        games_data: Conteúdo do games.json
        bonus_data: Conteúdo do bonus.json
        names: Mapa id -> nome para exibição

    Returns:
        DataFrame ordenado por pontos, índice começando em 1
    """
    names = names or {}
    summary: Dict[int, Dict[str, Any]] = {}

    for event in iter_events(games_data, bonus_data):
        for result in event.results:
            entry = summary.setdefault(result.participant_id, {
                'ID': result.participant_id,
                'Participante': names.get(result.participant_id, f"#{result.participant_id}"),
                'Eventos': 0,
                'Pontos': 0
            })
            entry['Eventos'] += 1
            entry['Pontos'] += result.points

    df = pd.DataFrame(list(summary.values()), columns=['ID', 'Participante', 'Eventos', 'Pontos'])
    if not df.empty:
        df = df.sort_values('Pontos', ascending=False).reset_index(drop=True)
        df.index = df.index + 1
    return df


def build_games_history(
    games_data: Optional[Dict],
    bonus_data: Optional[Dict] = None,
    names: Optional[Dict[int, str]] = None
) -> pd.DataFrame:
    """
    Histórico de jogos e desafios: uma linha por resultado.

    Ordenado por data, evento e posição (resultados sem posição no fim
    de cada evento).

    Returns:
        DataFrame com colunas Evento, Tipo, Data, Descrição, Participante,
        Posição, Pontos
    """
    names = names or {}
    sources = [
        ('Jogo', (games_data or {}).get('games') or []),
        ('Desafio', (bonus_data or {}).get('challenges') or []),
    ]
    rows = []

    for kind, raw_events in sources:
        for raw in raw_events:
            event = ScoredEvent.from_dict(raw)
            for result in event.results:
                rows.append({
                    'Evento': event.name,
                    'Tipo': kind,
                    'Data': event.date,
                    'Descrição': event.description or '',
                    'Participante': names.get(result.participant_id, f"#{result.participant_id}"),
                    'Posição': result.position,
                    'Pontos': result.points
                })

    columns = ['Evento', 'Tipo', 'Data', 'Descrição', 'Participante', 'Posição', 'Pontos']
    df = pd.DataFrame(rows, columns=columns)
    if not df.empty:
        df['Posição'] = df['Posição'].astype('Int64')
        df = df.sort_values(['Data', 'Evento', 'Posição'], na_position='last').reset_index(drop=True)
        df.index = df.index + 1
    return df


def build_verse_table(
    participant: Participant,
    rules: List[Rule],
    verses_data: Optional[Dict[str, Any]] = None,
    selected_version: Optional[str] = None
) -> pd.DataFrame:
    """
    Detalha os versículos de um participante, um por linha.

    Intervalos aparecem expandidos. Sem dados do verses.json o texto fica
    vazio e o versículo vale o nível menor.

    Returns:
        DataFrame com colunas Referência, Texto, Link, Palavras, Pontos
    """
    version = resolve_selected_version(verses_data, selected_version)
    small_pts, large_pts = get_verse_tier_points(rules)
    rows = []

    for verse in participant.memorized_verses:
        for single_ref in expand_verse_range(verse.ref):
            data = (verses_data or {}).get('verses', {}).get(single_ref, {}).get(version) or {}
            word_count = data.get('wordCount')
            rows.append({
                'Referência': single_ref,
                'Texto': data.get('text', ''),
                'Link': data.get('youversionUrl') or '',
                'Palavras': word_count,
                'Pontos': (
                    calculate_verse_points(word_count, small_pts, large_pts)
                    if word_count is not None else small_pts
                )
            })

    return pd.DataFrame(rows, columns=['Referência', 'Texto', 'Link', 'Palavras', 'Pontos'])


def _latest_date(participant: Participant) -> Optional[date]:
    dates = []
    for attendance in participant.attendance:
        try:
            dates.append(parse_local_date(attendance.date))
        except ValueError:
            logger.warning(f"Data de presença inválida para {participant.name}: {attendance.date!r}")
    return max(dates) if dates else None


def attendance_column_names(types: List[str]) -> Dict[str, str]:
    """
    Nome de coluna para cada tipo de presença.

    Usa a abreviação; tipos cuja abreviação colide com a de outro tipo
    usam o rótulo e, se o rótulo também colidir, o próprio tipo.
    """
    abbrevs = [get_attendance_abbrev(t) for t in types]
    labels = [get_attendance_label(t) for t in types]
    columns = {}
    for attendance_type, abbrev, label in zip(types, abbrevs, labels):
        if abbrevs.count(abbrev) == 1:
            columns[attendance_type] = abbrev
        elif labels.count(label) == 1:
            columns[attendance_type] = label
        else:
            columns[attendance_type] = attendance_type
    return columns


def summarize_attendance(participants: List[Participant]) -> pd.DataFrame:
    """
    Conta presenças por tipo para cada participante.

    Colunas de tipo vêm de attendance_column_names; `Última` é a data mais
    recente no formato dd/mm/aaaa.
    """
    types = sorted({a.type for p in participants for a in p.attendance})
    columns = attendance_column_names(types)
    rows = []

    for participant in participants:
        row: Dict[str, Any] = {'Participante': participant.name}
        for attendance_type in types:
            row[columns[attendance_type]] = sum(
                1 for a in participant.attendance if a.type == attendance_type
            )
        latest = _latest_date(participant)
        row['Última'] = latest.strftime('%d/%m/%Y') if latest else '──'
        rows.append(row)

    return pd.DataFrame(rows, columns=['Participante'] + [columns[t] for t in types] + ['Última'])

"""
Testes do motor de pontos.
"""

import os
import sys
from datetime import datetime, timedelta, timezone

import pandas as pd
import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from gincana.models import Participant, Rule
from gincana.scoring import (
    attendance_column_names,
    build_games_history,
    build_leaderboard,
    build_verse_table,
    calculate_delta_points,
    calculate_participant_points,
    get_rule_points_by_pattern,
    resolve_attendance_points,
    summarize_attendance,
    summarize_games,
)


def make_participant(**overrides) -> Participant:
    data = {"id": 1, "name": "Ana", "attendance": [], "memorizedVerses": [], "visitors": []}
    data.update(overrides)
    return Participant.from_dict(data)


class TestRuleLookup:
    """Testes de resolução de regras."""

    def test_activity_type_wins(self, mock_rules):
        """Test: regra com activityType é usada primeiro."""
        assert resolve_attendance_points(mock_rules, "embaixada") == 10

    def test_fallback_alias_for_igreja(self):
        """Test: 'igreja' sem activityType cai para a descrição 'compromissos'."""
        rules = [Rule(description="Compromissos da igreja", points=12)]
        assert resolve_attendance_points(rules, "igreja") == 12

    def test_fallback_uses_type_name(self):
        """Test: tipos novos procuram o próprio nome na descrição."""
        rules = [Rule(description="Presença no PG", points=8)]
        assert resolve_attendance_points(rules, "pg") == 8

    def test_zero_point_rule_falls_back(self):
        """Test: regra estruturada de 0 pontos cai para a descrição."""
        rules = [
            Rule(description="Serviço desativado", points=0, activity_type="cozinha"),
            Rule(description="Ajuda na cozinha", points=5),
        ]
        assert resolve_attendance_points(rules, "cozinha") == 5

    def test_unknown_type_scores_zero(self, mock_rules):
        """Test: tipo sem regra vale 0."""
        assert resolve_attendance_points(mock_rules, "banheiro") == 0

    def test_pattern_is_case_insensitive(self, mock_rules):
        """Test: busca na descrição ignora maiúsculas."""
        assert get_rule_points_by_pattern(mock_rules, "VISITANTE") == 15


class TestCalculateParticipantPoints:
    """Testes de calculate_participant_points."""

    def test_attendance_and_small_verse_total_35(self):
        """Test: embaixada (10) + versículo de 7 palavras (25) = 35."""
        rules = [
            Rule(description="Embaixada", points=10, activity_type="embaixada"),
            Rule(description="Versículo <20 palavras", points=25),
        ]
        verses_data = {"defaultVersion": "NVI", "verses": {"Jo 3:16": {"NVI": {"wordCount": 7}}}}
        participant = make_participant(
            attendance=[{"date": "2026-01-18", "type": "embaixada"}],
            memorizedVerses=["Jo 3:16"],
        )

        assert calculate_participant_points(participant, rules, verses_data) == 35

    def test_adding_visitor_total_60(self):
        """Test: o mesmo participante com um visitante (25) = 60."""
        rules = [
            Rule(description="Embaixada", points=10, activity_type="embaixada"),
            Rule(description="Versículo <20 palavras", points=25),
            Rule(description="Trazer visitante", points=25),
        ]
        verses_data = {"defaultVersion": "NVI", "verses": {"Jo 3:16": {"NVI": {"wordCount": 7}}}}
        participant = make_participant(
            attendance=[{"date": "2026-01-18", "type": "embaixada"}],
            memorizedVerses=["Jo 3:16"],
            visitors=["Maria"],
        )

        assert calculate_participant_points(participant, rules, verses_data) == 60

    def test_missing_verse_data_uses_small_tier(self, mock_rules):
        """Test: versículo sem dados vale o nível menor, nunca zero."""
        participant = make_participant(memorizedVerses=["Rm 8:28"])
        assert calculate_participant_points(participant, mock_rules) == 25

    def test_range_scores_each_verse(self, mock_rules):
        """Test: intervalo pontua cada versículo."""
        participant = make_participant(memorizedVerses=["Mt 6:9-13"])
        assert calculate_participant_points(participant, mock_rules) == 5 * 25

    def test_default_tier_points_without_rules(self):
        """Test: sem regras de versículo usa 25/35."""
        verses_data = {"verses": {"Jo 3:16": {"NVI": {"wordCount": 27}}}}
        participant = make_participant(memorizedVerses=["Jo 3:16"])
        assert calculate_participant_points(participant, [], verses_data) == 35

    def test_selected_version_changes_tier(self, mock_rules, mock_verses_data):
        """Test: a versão escolhida define a contagem de palavras."""
        participant = make_participant(memorizedVerses=["Jo 3:16"])
        assert calculate_participant_points(participant, mock_rules, mock_verses_data, "NVI") == 35
        assert calculate_participant_points(participant, mock_rules, mock_verses_data, "ARA") == 25

    def test_start_points_candidato_and_discipline(self, mock_rules):
        """Test: startPoints, candidato e disciplinas somam ao total."""
        participant = make_participant(
            startPoints=100,
            candidatoProgress={"prerequisites": True, "manualTasks": 2},
            disciplines=[{"points": -15, "reason": "Atraso"}],
        )
        # 100 + 50 + 2*20 - 15
        assert calculate_participant_points(participant, mock_rules) == 175

    def test_total_can_be_negative(self, mock_rules):
        """Test: o total não é limitado a zero."""
        participant = make_participant(disciplines=[{"points": -30}])
        assert calculate_participant_points(participant, mock_rules) == -30

    def test_games_and_bonus_are_added(self, mock_rules):
        """Test: jogos e desafios bônus somam pelos resultados do participante."""
        games = {"games": [{"id": 1, "name": "Quiz", "results": [
            {"participantId": 1, "points": 30, "position": 1},
            {"participantId": 2, "points": 20, "position": 2},
        ]}]}
        bonus = {"challenges": [{"id": 1, "name": "Desafio", "results": [
            {"participantId": 1, "points": 10},
        ]}]}
        participant = make_participant()
        assert calculate_participant_points(
            participant, mock_rules, games_data=games, bonus_data=bonus
        ) == 40

    def test_deterministic(self, mock_rules, mock_verses_data, mock_leaderboard):
        """Test: mesmas entradas, mesmo resultado."""
        participant = Participant.from_dict(mock_leaderboard["participants"][0])
        first = calculate_participant_points(participant, mock_rules, mock_verses_data)
        second = calculate_participant_points(participant, mock_rules, mock_verses_data)
        assert first == second


class TestCalculateDeltaPoints:
    """Testes de calculate_delta_points."""

    CUTOFF = datetime(2026, 1, 20, tzinfo=timezone.utc)

    def test_record_at_cutoff_included(self, mock_rules):
        """Test: addedAt igual ao corte entra no delta."""
        participant = make_participant(visitors=[{"name": "Maria", "addedAt": "2026-01-20T00:00:00.000Z"}])
        assert calculate_delta_points(participant, mock_rules, self.CUTOFF) == 15

    def test_record_one_ms_before_excluded(self, mock_rules):
        """Test: 1 ms antes do corte fica de fora."""
        before = (self.CUTOFF - timedelta(milliseconds=1)).isoformat(timespec='milliseconds')
        participant = make_participant(visitors=[{"name": "Maria", "addedAt": before}])
        assert calculate_delta_points(participant, mock_rules, self.CUTOFF) == 0

    def test_untimed_records_excluded(self, mock_rules):
        """Test: registros sem addedAt nunca entram no delta."""
        participant = make_participant(
            attendance=[{"date": "2026-01-25", "type": "embaixada"}],
            memorizedVerses=["Jo 3:16"],
            visitors=["Maria"],
        )
        assert calculate_delta_points(participant, mock_rules, self.CUTOFF) == 0

    def test_no_cutoff_is_zero(self, mock_rules, mock_leaderboard):
        """Test: sem pointsAsOf o delta é 0."""
        participant = Participant.from_dict(mock_leaderboard["participants"][0])
        assert calculate_delta_points(participant, mock_rules, None) == 0

    def test_only_recent_activities_count(self, mock_rules, mock_verses_data, mock_leaderboard):
        """Test: presença, versículo e visitante após o corte."""
        participant = Participant.from_dict(mock_leaderboard["participants"][0])
        # igreja 10 + Jo 3:16 (27 palavras) 35 + visitante 15
        assert calculate_delta_points(participant, mock_rules, self.CUTOFF, mock_verses_data) == 60

    def test_discipline_and_games_ignored(self, mock_rules):
        """Test: disciplinas e startPoints não entram no delta."""
        participant = make_participant(
            startPoints=40,
            disciplines=[{"points": -10, "addedAt": "2026-01-21T00:00:00.000Z"}],
        )
        assert calculate_delta_points(participant, mock_rules, self.CUTOFF) == 0


class TestBuildLeaderboard:
    """Testes de build_leaderboard e resumos."""

    def test_sorted_by_points_with_index_from_one(self, mock_rules, mock_verses_data, mock_leaderboard):
        """Test: ordenado por pontos e índice começa em 1."""
        participants = [Participant.from_dict(p) for p in mock_leaderboard["participants"]]
        df = build_leaderboard(participants, mock_rules, mock_verses_data)

        assert df.index[0] == 1
        assert df.iloc[0]["Participante"] == "Ana"
        points = df["Pontos"].tolist()
        assert points == sorted(points, reverse=True)

    def test_ties_broken_by_name(self, mock_rules):
        """Test: empate ordena por nome."""
        participants = [make_participant(id=1, name="Zeca"), make_participant(id=2, name="Ana")]
        df = build_leaderboard(participants, mock_rules)
        assert df["Participante"].tolist() == ["Ana", "Zeca"]

    def test_empty_participants(self, mock_rules):
        """Test: sem participantes retorna DataFrame vazio com colunas."""
        df = build_leaderboard([], mock_rules)
        assert df.empty
        assert "Pontos" in df.columns

    def test_summarize_games(self):
        """Test: resumo de jogos por participante."""
        games = {"games": [
            {"id": 1, "name": "Quiz", "results": [{"participantId": 1, "points": 30}]},
            {"id": 2, "name": "Corrida", "results": [{"participantId": 1, "points": 5},
                                                     {"participantId": 2, "points": 20}]},
        ]}
        df = summarize_games(games, None, {1: "Ana", 2: "Bruno"})
        assert df.iloc[0]["Participante"] == "Ana"
        assert df.iloc[0]["Eventos"] == 2
        assert df.iloc[0]["Pontos"] == 35

    def test_verse_table_expands_ranges(self, mock_rules, mock_verses_data):
        """Test: tabela de versículos mostra cada versículo do intervalo."""
        participant = make_participant(memorizedVerses=["Jo 3:16", "Mt 6:9-10"])
        df = build_verse_table(participant, mock_rules, mock_verses_data, "NVI")
        assert df["Referência"].tolist() == ["Jo 3:16", "Mt 6:9", "Mt 6:10"]
        assert df["Pontos"].tolist() == [35, 25, 25]
        assert pd.isna(df.iloc[1]["Palavras"])
        assert df.iloc[0]["Link"] == "https://www.bible.com/pt/bible/129/JHN.3.16"
        assert df.iloc[1]["Link"] == ""

    def test_attendance_summary(self, mock_leaderboard):
        """Test: contagem por tipo e última data em formato local."""
        participants = [Participant.from_dict(p) for p in mock_leaderboard["participants"]]
        df = summarize_attendance(participants)
        ana = df[df["Participante"] == "Ana"].iloc[0]
        assert ana["Emb"] == 1
        assert ana["Igr"] == 1
        assert ana["Última"] == "25/01/2026"

    def test_attendance_colliding_abbreviations_use_labels(self):
        """Test: tipos com a mesma abreviação viram colunas distintas."""
        participant = make_participant(attendance=[
            {"date": "2026-01-18", "type": "fora"},
            {"date": "2026-01-19", "type": "formatura"},
            {"date": "2026-01-20", "type": "formatura"},
        ])
        df = summarize_attendance([participant])
        assert df.columns.is_unique
        assert df.iloc[0]["Fora"] == 1
        assert df.iloc[0]["Formatura"] == 2

    def test_attendance_column_names_keep_unique_abbreviations(self):
        """Test: só os tipos que colidem trocam a abreviação pelo rótulo."""
        columns = attendance_column_names(["embaixada", "fora", "formatura"])
        assert columns == {"embaixada": "Emb", "fora": "Fora", "formatura": "Formatura"}

    def test_games_history_one_row_per_result(self):
        """Test: histórico lista cada resultado com data, descrição e posição."""
        games = {"games": [
            {"id": 2, "name": "Corrida", "date": "2026-01-25", "results": [
                {"participantId": 2, "points": 20, "position": 2},
                {"participantId": 1, "points": 30, "position": 1},
            ]},
            {"id": 1, "name": "Quiz", "date": "2026-01-18", "description": "Perguntas de Gênesis",
             "results": [{"participantId": 1, "points": 10, "position": 1}]},
        ]}
        bonus = {"challenges": [
            {"id": 1, "name": "Jejum", "date": "2026-01-20", "results": [{"participantId": 2, "points": 15}]},
        ]}
        df = build_games_history(games, bonus, {1: "Ana", 2: "Bruno"})

        assert df.index[0] == 1
        assert df["Evento"].tolist() == ["Quiz", "Jejum", "Corrida", "Corrida"]
        assert df["Tipo"].tolist() == ["Jogo", "Desafio", "Jogo", "Jogo"]
        assert df["Participante"].tolist() == ["Ana", "Bruno", "Ana", "Bruno"]
        assert df.iloc[0]["Descrição"] == "Perguntas de Gênesis"
        assert df.iloc[2]["Posição"] == 1
        assert pd.isna(df.iloc[1]["Posição"])

    def test_games_history_empty(self):
        """Test: sem jogos retorna DataFrame vazio com colunas."""
        df = build_games_history(None, None)
        assert df.empty
        assert "Posição" in df.columns

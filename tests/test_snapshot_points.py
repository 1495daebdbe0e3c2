"""
Testes do script de snapshot de pontos.
"""

import json
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from gincana.scripts import snapshot_points


class TestSnapshotPoints:
    """Testes de snapshot_points e main."""

    def test_sets_previous_points(self, mock_leaderboard, mock_rules, mock_verses_data):
        """Test: grava previousPoints e previousPointsAt de todos."""
        updated = snapshot_points.snapshot_points(
            mock_leaderboard, mock_rules, mock_verses_data, timestamp="2026-02-01T12:00:00.000Z"
        )

        ana, bruno = mock_leaderboard["participants"]
        assert updated == 2
        # embaixada 10 + igreja 10 + Jo 11:35 25 + Jo 3:16 35 + visitante 15
        assert ana["previousPoints"] == 95
        assert bruno["previousPoints"] == 0
        assert ana["previousPointsAt"] == "2026-02-01T12:00:00.000Z"

    def test_includes_games_and_bonus(self, mock_leaderboard, mock_rules):
        """Test: jogos e bônus entram no snapshot."""
        games = {"games": [{"id": 1, "name": "Quiz", "results": [{"participantId": 2, "points": 30}]}]}
        bonus = {"challenges": [{"id": 1, "name": "Extra", "results": [{"participantId": 2, "points": 5}]}]}

        snapshot_points.snapshot_points(mock_leaderboard, mock_rules, None, games, bonus)

        assert mock_leaderboard["participants"][1]["previousPoints"] == 35

    def test_main_writes_leaderboard(self, tmp_path, mock_leaderboard):
        """Test: main lê os arquivos e grava o leaderboard atualizado."""
        (tmp_path / "leaderboard.json").write_text(json.dumps(mock_leaderboard), encoding="utf-8")
        (tmp_path / "rules.json").write_text(
            json.dumps({"rules": [{"description": "Trazer visitante", "points": 25}]}),
            encoding="utf-8"
        )

        assert snapshot_points.main(["--data-dir", str(tmp_path)]) == 0

        saved = json.loads((tmp_path / "leaderboard.json").read_text(encoding="utf-8"))
        # 2 versículos sem dados (25 cada) + visitante 25
        assert saved["participants"][0]["previousPoints"] == 75
        assert saved["participants"][0]["previousPointsAt"].endswith("Z")
        assert "updatedAt" in saved

    def test_main_requires_rules(self, tmp_path, mock_leaderboard):
        """Test: sem rules.json retorna código 1 e não grava."""
        path = tmp_path / "leaderboard.json"
        path.write_text(json.dumps(mock_leaderboard), encoding="utf-8")
        before = path.read_text(encoding="utf-8")

        assert snapshot_points.main(["--data-dir", str(tmp_path)]) == 1
        assert path.read_text(encoding="utf-8") == before

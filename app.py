"""
Painel da Gincana
=================
Aplicação Streamlit que mostra o ranking da gincana a partir dos arquivos
JSON em DATA_DIR (leaderboard, regras, versículos, jogos e bônus).

Uso:
    streamlit run app.py
"""

import logging
from html import escape
from pathlib import Path
from typing import Any, Dict

import streamlit as st

from gincana.config import (
    BONUS_FILE,
    GAMES_FILE,
    LEADERBOARD_FILE,
    RULES_FILE,
    VERSES_FILE,
    settings,
)
from gincana.dates import parse_timestamp
from gincana.scoring import build_games_history, build_leaderboard, resolve_selected_version, summarize_games
from gincana.store import StoreError, get_participants, load_json_document, load_rules
from gincana.ui.components import (
    render_attendance_summary,
    render_games_tab,
    render_podium,
    render_rules_tab,
    render_sidebar,
    render_table,
    render_verses_tab,
)
from gincana.ui.styles import get_empty_state_html, get_main_css

logger = logging.getLogger(__name__)


# ============================================================================
# DADOS
# ============================================================================

@st.cache_data(ttl=60)
def load_data(data_dir: str) -> Dict[str, Any]:
    """
    Carrega todos os documentos do diretório de dados.

    Args:
        data_dir: Diretório com os JSON

    Returns:
        Dict com leaderboard, rules, verses, games e bonus
    """
    base = Path(data_dir)
    leaderboard = load_json_document(base / LEADERBOARD_FILE, required=True)
    return {
        'leaderboard': leaderboard,
        'rules': load_rules(base / RULES_FILE, leaderboard),
        'verses': load_json_document(base / VERSES_FILE),
        'games': load_json_document(base / GAMES_FILE),
        'bonus': load_json_document(base / BONUS_FILE),
    }


# ============================================================================
# INTERFACE
# ============================================================================

def setup_page():
    """Configura a página."""
    st.set_page_config(
        page_title="🏆 Gincana",
        page_icon="📖",
        layout="wide"
    )
    st.markdown(get_main_css(), unsafe_allow_html=True)


def main():
    """Função principal."""
    setup_page()

    st.markdown('<h1 class="main-title">🏆 Gincana</h1>', unsafe_allow_html=True)

    try:
        data = load_data(str(settings.DATA_DIR))
    except StoreError as e:
        logger.error(f"Erro ao carregar dados: {e}")
        st.error(f"❌ {e}")
        st.markdown(get_empty_state_html("Verifique DATA_DIR e o leaderboard.json"), unsafe_allow_html=True)
        return

    document = data['leaderboard']
    participants = get_participants(document)
    rules = data['rules']
    verses_data = data['verses']

    versions = (verses_data or {}).get('versions') or {}
    default_version = resolve_selected_version(verses_data)
    selected_version = render_sidebar(versions, default_version, document.get('updatedAt'))

    st.markdown(
        f'<p class="subtitle">{len(participants)} participantes • versão {escape(selected_version)}</p>',
        unsafe_allow_html=True
    )

    if not participants:
        st.markdown(get_empty_state_html(), unsafe_allow_html=True)
        return

    points_as_of = document.get('pointsAsOf')
    df = build_leaderboard(
        participants,
        rules,
        verses_data=verses_data,
        selected_version=selected_version,
        games_data=data['games'],
        bonus_data=data['bonus'],
        cutoff=parse_timestamp(points_as_of)
    )

    tabs = st.tabs(["🏆 Ranking", "📖 Versículos", "🎲 Jogos", "📐 Regras"])

    with tabs[0]:
        render_podium(df)
        st.markdown("---")
        render_table(df, points_as_of)
        render_attendance_summary(participants)

    with tabs[1]:
        render_verses_tab(participants, rules, verses_data, selected_version)

    with tabs[2]:
        names = {p.id: p.name for p in participants}
        render_games_tab(
            summarize_games(data['games'], data['bonus'], names),
            build_games_history(data['games'], data['bonus'], names)
        )

    with tabs[3]:
        render_rules_tab(rules)

    st.markdown("---")
    st.caption("Versículos: <20 palavras e ≥20 palavras valem níveis diferentes (veja Regras)")


if __name__ == "__main__":
    main()

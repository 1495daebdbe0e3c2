"""
Componentes de UI reutilizáveis para Streamlit.

Este módulo contém as funções que desenham as abas do painel.
"""

import logging
from typing import Dict, List, Optional

import pandas as pd
import streamlit as st

from gincana.config import COLORS, MEDALS, get_attendance_label
from gincana.models import Participant, Rule
from gincana.scoring import attendance_column_names, build_verse_table, summarize_attendance
from gincana.ui.styles import get_podium_html, get_verse_card_html

logger = logging.getLogger(__name__)


def render_podium(df: pd.DataFrame):
    """
    Desenha o pódio Top 3.

    Args:
        df: Ranking gerado por build_leaderboard
    """
    if df.empty:
        st.info("Sem dados")
        return

    st.markdown("### 🏆 Top 3")

    cols = st.columns(3)
    colors = [COLORS['gold'], COLORS['silver'], COLORS['bronze']]
    css_classes = ['gold', 'silver', 'bronze']
    order = [1, 0, 2] if len(df) >= 3 else list(range(min(3, len(df))))

    for col_idx, pos in enumerate(order):
        with cols[col_idx]:
            row = df.iloc[pos]
            html = get_podium_html(
                name=row['Participante'],
                points=int(row['Pontos']),
                medal=MEDALS[pos],
                medal_color=colors[pos],
                css_class=css_classes[pos],
                delta=int(row['Delta'])
            )
            st.markdown(html, unsafe_allow_html=True)


def render_table(df: pd.DataFrame, points_as_of: Optional[str] = None):
    """
    Desenha a tabela de classificação.

    Args:
        df: Ranking gerado por build_leaderboard
        points_as_of: Data de comparação do delta, se houver
    """
    if df.empty:
        st.info("Nenhum participante")
        return

    st.markdown("### 📊 Classificação")

    display = df.drop(columns=['ID', 'Anterior']).copy()
    display.insert(
        0,
        'Pos',
        [MEDALS[i - 1] if i <= 3 else f"{i}°" for i in range(1, len(display) + 1)]
    )
    display['Delta'] = display['Delta'].map(lambda d: f"+{d}" if d > 0 else "")

    st.dataframe(display, use_container_width=True, hide_index=True)
    if points_as_of:
        st.caption(f"Delta: pontos ganhos desde {points_as_of}")


def render_attendance_summary(participants: List[Participant]):
    """Presenças por tipo dentro de um expander."""
    with st.expander("📅 Presenças por tipo", expanded=False):
        df = summarize_attendance(participants)
        if df.empty:
            st.info("Nenhuma presença registrada")
            return
        st.dataframe(df, use_container_width=True, hide_index=True)
        types = sorted({a.type for p in participants for a in p.attendance})
        columns = attendance_column_names(types)
        st.caption(" │ ".join(f"{columns[t]}: {get_attendance_label(t)}" for t in types))


def render_verses_tab(
    participants: List[Participant],
    rules: List[Rule],
    verses_data: Optional[Dict],
    version: str
):
    """
    Lista os versículos de cada participante com texto, palavras e pontos.

    Args:
        participants: Participantes normalizados
        rules: Regras (níveis de pontos dos versículos)
        verses_data: Conteúdo do verses.json
        version: Abreviação da versão selecionada
    """
    if not verses_data:
        st.warning("⚠️ verses.json não encontrado. Rode `gincana-fetch-verses` para buscar os textos.")

    for participant in sorted(participants, key=lambda p: p.name):
        table = build_verse_table(participant, rules, verses_data, version)
        if table.empty:
            continue

        title = f"📖 {participant.name} · {len(table)} versículo(s) · {int(table['Pontos'].sum())} pts"
        with st.expander(title, expanded=False):
            for _, row in table.iterrows():
                words = row['Palavras']
                meta = f"{int(words)} palavras · +{row['Pontos']} pts" if pd.notna(words) else \
                    f"sem texto em {version} · +{row['Pontos']} pts"
                st.markdown(
                    get_verse_card_html(row['Referência'], row['Texto'] or "──", meta, row['Link']),
                    unsafe_allow_html=True
                )


def render_games_tab(totals: pd.DataFrame, history: pd.DataFrame):
    """
    Jogos e desafios bônus: totais por participante e histórico por evento.

    Args:
        totals: Resultado de summarize_games
        history: Resultado de build_games_history
    """
    if totals.empty:
        st.info("Nenhum jogo ou desafio registrado")
        return

    col1, col2 = st.columns([1, 2])
    with col1:
        st.markdown("### 🎲 Totais")
        st.dataframe(totals.drop(columns=['ID']), use_container_width=True, hide_index=True)
    with col2:
        st.markdown("### 📜 Histórico")
        for (name, kind, event_date), results in history.groupby(['Evento', 'Tipo', 'Data'], sort=False):
            with st.expander(f"{kind}: {name} · {event_date}", expanded=False):
                description = results.iloc[0]['Descrição']
                if description:
                    st.caption(description)
                st.dataframe(
                    results[['Posição', 'Participante', 'Pontos']],
                    use_container_width=True,
                    hide_index=True
                )


def render_rules_tab(rules: List[Rule]):
    """Tabela 'Como ganhar pontos'."""
    if not rules:
        st.info("Nenhuma regra cadastrada")
        return
    st.markdown("### 📐 Como ganhar pontos")
    df = pd.DataFrame([
        {'Regra': r.description, 'Pontos': r.points} for r in rules
    ])
    st.dataframe(df, use_container_width=True, hide_index=True)


def render_sidebar(versions: Dict[str, Dict], default_version: str, updated_at: Optional[str]) -> str:
    """
    Barra lateral com seletor de versão da Bíblia.

    Returns:
        Abreviação da versão escolhida
    """
    with st.sidebar:
        st.markdown("## ⚙️ Configuração")
        options = list(versions) or [default_version]
        index = options.index(default_version) if default_version in options else 0
        selected = st.selectbox(
            "📖 Versão da Bíblia",
            options,
            index=index,
            format_func=lambda abbr: f"{abbr} · {versions.get(abbr, {}).get('name', abbr)}",
            key="bible_version_select"
        )
        st.caption("A contagem de palavras (e os pontos dos versículos) depende da versão.")
        st.markdown("---")
        if updated_at:
            st.caption(f"🕐 Atualizado em {updated_at}")
    return selected

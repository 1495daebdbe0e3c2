"""
Estilos CSS do painel da Gincana.

Este módulo contém o CSS e os trechos de HTML usados pela interface
Streamlit.
"""

from html import escape

from gincana.config import COLORS


def get_main_css() -> str:
    """
    Gera o CSS principal do painel.

    Returns:
        CSS como string
    """
    return f"""
    <style>
        :root {{
            --color-gold: {COLORS['gold']};
            --color-silver: {COLORS['silver']};
            --color-bronze: {COLORS['bronze']};
            --color-primary: {COLORS['primary']};
            --color-secondary: {COLORS['secondary']};
            --bg-start: {COLORS['background_start']};
            --bg-end: {COLORS['background_end']};
        }}

        .stApp {{
            background: linear-gradient(135deg, var(--bg-start) 0%, var(--bg-end) 100%);
        }}

        .main-title {{
            text-align: center;
            background: linear-gradient(90deg, var(--color-secondary), #ffffff);
            -webkit-background-clip: text;
            -webkit-text-fill-color: transparent;
            background-clip: text;
            font-size: 2.5rem;
            font-weight: 800;
            margin-bottom: 0.5rem;
        }}

        .subtitle {{
            text-align: center;
            color: #9aa4c7;
            margin-bottom: 1.5rem;
        }}

        /* === Pódio === */
        .podium {{
            background: rgba(255, 255, 255, 0.05);
            border-radius: 15px;
            padding: 1rem;
            text-align: center;
        }}

        .gold {{ border: 2px solid var(--color-gold); }}
        .silver {{ border: 2px solid var(--color-silver); }}
        .bronze {{ border: 2px solid var(--color-bronze); }}

        .delta-up {{ color: #4ade80; font-size: 0.9rem; }}

        /* === Versículos === */
        .verse-card {{
            background: rgba(255, 255, 255, 0.04);
            border-left: 3px solid var(--color-secondary);
            border-radius: 8px;
            padding: 0.6rem 0.9rem;
            margin-bottom: 0.5rem;
            color: #e5e7eb;
        }}

        .verse-meta {{
            color: #9aa4c7;
            font-size: 0.8rem;
        }}

        @media (max-width: 768px) {{
            .main-title {{ font-size: 1.8rem; }}
            .podium {{ padding: 0.5rem; }}
        }}
    </style>
    """


def get_empty_state_html(message: str = "Nenhum participante cadastrado") -> str:
    """HTML do estado vazio."""
    return f"""
    <div style="text-align:center;padding:3rem;color:#9aa4c7;">
        <div style="font-size:4rem;">📖</div>
        <h3>Sem dados</h3>
        <p>{message}</p>
    </div>
    """


def get_podium_html(
    name: str,
    points: int,
    medal: str,
    medal_color: str,
    css_class: str,
    delta: int = 0
) -> str:
    """
    Gera o HTML de uma posição do pódio.

    Args:
        name: Nome do participante
        points: Pontos totais
        medal: Emoji da medalha
        medal_color: Cor da medalha (hex)
        css_class: Classe CSS (gold, silver, bronze)
        delta: Pontos ganhos desde a data de comparação

    Returns:
        HTML do pódio
    """
    delta_html = f'<div class="delta-up">▲ +{delta}</div>' if delta > 0 else ''
    return f"""
    <div class="podium {css_class}">
        <div style="font-size:2rem;">{medal}</div>
        <div style="font-weight:bold;color:white;">{escape(name)}</div>
        <div style="font-size:1.5rem;color:{medal_color};">{points} pts</div>
        {delta_html}
    </div>
    """


def get_verse_card_html(reference: str, text: str, meta: str, link: str = '') -> str:
    """
    HTML de um versículo com texto e metadados (palavras, pontos).

    Com `link`, a referência abre o versículo no bible.com. Todo conteúdo
    vindo dos arquivos de dados é escapado.
    """
    title = f"<strong>{escape(reference)}</strong>"
    if link:
        title = f'<a href="{escape(link)}" target="_blank" rel="noopener">{title}</a>'
    return f"""
    <div class="verse-card">
        {title}<br/>
        {escape(text)}
        <div class="verse-meta">{escape(meta)}</div>
    </div>
    """

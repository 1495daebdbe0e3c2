"""
Testes dos trechos HTML do painel.
"""

import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from gincana.ui.styles import get_podium_html, get_verse_card_html


class TestPodiumHtml:
    """Testes do pódio."""

    def test_name_is_escaped(self):
        """Test: nome com HTML aparece como texto."""
        html = get_podium_html("<script>alert(1)</script>", 10, "🥇", "#FFD700", "gold")
        assert "<script>" not in html
        assert "&lt;script&gt;" in html

    def test_delta_shown_only_when_positive(self):
        """Test: delta só aparece quando houve ganho."""
        assert "delta-up" in get_podium_html("Ana", 10, "🥇", "#FFD700", "gold", delta=5)
        assert "delta-up" not in get_podium_html("Ana", 10, "🥇", "#FFD700", "gold")


class TestVerseCardHtml:
    """Testes do cartão de versículo."""

    def test_text_and_reference_escaped(self):
        """Test: referência e texto com HTML são escapados."""
        html = get_verse_card_html("Jo <b>3:16</b>", "Porque <img src=x>", "20 palavras")
        assert "<b>" not in html
        assert "<img" not in html
        assert "&lt;img src=x&gt;" in html

    def test_reference_links_to_bible(self):
        """Test: com link, a referência abre o versículo em nova aba."""
        url = "https://www.bible.com/pt/bible/129/JHN.3.16"
        html = get_verse_card_html("Jo 3:16", "Porque Deus...", "35 pts", url)
        assert f'href="{url}"' in html
        assert 'target="_blank"' in html

    def test_without_link_has_no_anchor(self):
        """Test: sem link não há âncora."""
        assert "<a " not in get_verse_card_html("Jo 3:16", "Porque Deus...", "35 pts")

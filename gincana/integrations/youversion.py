"""
Cliente da API do YouVersion Platform.

Busca o texto de um versículo (código USFM) em uma versão da Bíblia usando
requests diretamente, sem SDK.
"""

import logging
from typing import Dict, Optional, Tuple

import requests
from bs4 import BeautifulSoup

from gincana.config import REQUEST_TIMEOUT, YOUVERSION_API_BASE_URL, YOUVERSION_WEB_URL
from gincana.models import VerseData
from gincana.references import count_words

logger = logging.getLogger(__name__)


def clean_verse_text(content: str) -> str:
    """
    Limpa o texto retornado pela API.

    Remove marcação HTML residual e normaliza espaços.
    """
    text = BeautifulSoup(content, 'html.parser').get_text(' ')
    return ' '.join(text.split())


def build_youversion_url(bible_id: int, usfm_ref: str) -> str:
    """Link para abrir o versículo no bible.com."""
    return f"{YOUVERSION_WEB_URL}/{bible_id}/{usfm_ref}"


class BibleAPI:
    """
    Cliente do YouVersion Platform usando requests.
    """

    def __init__(self, api_key: str, base_url: str = YOUVERSION_API_BASE_URL):
        """
        Inicializa o cliente.

        Args:
            api_key: Chave do app (YOUVERSION_API_KEY)
            base_url: URL base da API
        """
        self.base_url = base_url.rstrip('/')
        self.session = requests.Session()
        self.session.headers.update({
            "X-YVP-App-Key": api_key,
            "Accept": "application/json",
        })

    def get_passage(self, bible_id: int, usfm_ref: str) -> Tuple[Dict, Optional[str]]:
        """
        Consulta uma passagem em formato texto.

        Args:
            bible_id: Id numérico da versão no YouVersion
            usfm_ref: Referência USFM (ex.: "JHN.3.16")

        Returns:
            Tuple (response_data, error_message)
        """
        url = f"{self.base_url}/bibles/{bible_id}/passages/{usfm_ref}"

        try:
            response = self.session.get(
                url,
                params={"format": "text"},
                timeout=REQUEST_TIMEOUT
            )

            if response.status_code == 200:
                return response.json(), None
            elif response.status_code in (401, 403):
                logger.error("Chave do YouVersion inválida ou sem permissão")
                return {}, "Chave do YouVersion inválida ou sem permissão"
            elif response.status_code == 404:
                return {}, f"Passagem {usfm_ref} não encontrada na versão {bible_id}"
            elif response.status_code == 429:
                logger.warning("Limite de requisições do YouVersion atingido")
                return {}, "Limite de requisições atingido"
            else:
                return {}, f"Erro HTTP {response.status_code}: {response.text[:200]}"

        except requests.Timeout:
            logger.error("Timeout ao conectar com o YouVersion")
            return {}, "Timeout ao conectar com o YouVersion"
        except requests.RequestException as e:
            logger.error(f"Erro de conexão com o YouVersion: {e}")
            return {}, f"Erro de conexão: {str(e)}"
        except ValueError as e:
            return {}, f"Resposta inválida: {str(e)}"

    def fetch_verse(
        self,
        bible_id: int,
        usfm_ref: str,
        original_ref: str
    ) -> Tuple[Optional[VerseData], Optional[str]]:
        """
        Busca um versículo e calcula a contagem de palavras.

        Args:
            bible_id: Id da versão
            usfm_ref: Referência USFM
            original_ref: Referência em português (usada se a API não devolver uma)

        Returns:
            Tuple (VerseData ou None, error_message)
        """
        passage, error = self.get_passage(bible_id, usfm_ref)
        if error:
            return None, error

        content = (passage.get('content') or '').strip()
        if not content:
            return None, "Passagem sem conteúdo"

        text = clean_verse_text(content)
        return VerseData(
            reference=passage.get('reference') or original_ref,
            text=text,
            word_count=count_words(text),
            youversion_url=build_youversion_url(bible_id, usfm_ref)
        ), None

"""
Parser de referências bíblicas em português.

Converte referências digitadas ("Jo 3:16", "2 Pe 1:21", "Mt 6:9-13") no
código USFM usado pela API do YouVersion e expande intervalos em
versículos individuais.
"""

import logging
import re
from typing import Dict, List, Optional

from gincana.config import (
    VERSE_WORD_THRESHOLD,
    SMALL_VERSE_POINTS,
    LARGE_VERSE_POINTS,
)

logger = logging.getLogger(__name__)


# Livro (prefixo numérico opcional) + capítulo:versículo[-versículo]
_BOOK = r"([1-3]?\s?[A-Za-zÀ-ÿ]+)"
SINGLE_RE = re.compile(rf"^{_BOOK}\s+(\d+):(\d+)$")
RANGE_RE = re.compile(rf"^{_BOOK}\s+(\d+):(\d+)-(\d+)$")

# Pontuação removida antes de contar palavras (mantém letras e dígitos)
_NON_WORD_RE = re.compile(r"[^\w\s]|_")


# Abreviações e nomes em português -> código USFM
BOOK_CODES: Dict[str, str] = {
    "Gn": "GEN", "Gên": "GEN", "Gênesis": "GEN",
    "Ex": "EXO", "Êx": "EXO", "Êxodo": "EXO",
    "Lv": "LEV", "Levítico": "LEV",
    "Nm": "NUM", "Números": "NUM",
    "Dt": "DEU", "Deuteronômio": "DEU",
    "Js": "JOS", "Josué": "JOS",
    "Jz": "JDG", "Juízes": "JDG",
    "Rt": "RUT", "Rute": "RUT",
    "1Sm": "1SA", "1Samuel": "1SA",
    "2Sm": "2SA", "2Samuel": "2SA",
    "1Rs": "1KI", "1Reis": "1KI",
    "2Rs": "2KI", "2Reis": "2KI",
    "1Cr": "1CH", "1Crônicas": "1CH",
    "2Cr": "2CH", "2Crônicas": "2CH",
    "Ed": "EZR", "Esd": "EZR", "Esdras": "EZR",
    "Ne": "NEH", "Neemias": "NEH",
    "Et": "EST", "Ester": "EST",
    "Jó": "JOB",
    "Sl": "PSA", "Salmos": "PSA",
    "Pv": "PRO", "Provérbios": "PRO",
    "Ec": "ECC", "Eclesiastes": "ECC",
    "Ct": "SNG", "Cânticos": "SNG", "Cantares": "SNG",
    "Is": "ISA", "Isaías": "ISA",
    "Jr": "JER", "Jeremias": "JER",
    "Lm": "LAM", "Lamentações": "LAM",
    "Ez": "EZK", "Ezequiel": "EZK",
    "Dn": "DAN", "Dan": "DAN", "Daniel": "DAN",
    "Os": "HOS", "Oséias": "HOS",
    "Jl": "JOL", "Joel": "JOL",
    "Am": "AMO", "Amós": "AMO",
    "Ob": "OBA", "Obadias": "OBA",
    "Jn": "JON", "Jonas": "JON",
    "Mq": "MIC", "Miquéias": "MIC",
    "Na": "NAM", "Naum": "NAM",
    "Hc": "HAB", "Habacuque": "HAB",
    "Sf": "ZEP", "Sofonias": "ZEP",
    "Ag": "HAG", "Ageu": "HAG",
    "Zc": "ZEC", "Zac": "ZEC", "Zacarias": "ZEC",
    "Ml": "MAL", "Malaquias": "MAL",
    "Mt": "MAT", "Mateus": "MAT",
    "Mc": "MRK", "Mar": "MRK", "Marcos": "MRK",
    "Lc": "LUK", "Luc": "LUK", "Lucas": "LUK",
    "Jo": "JHN", "João": "JHN",
    "At": "ACT", "Atos": "ACT",
    "Rm": "ROM", "Romanos": "ROM",
    "1Co": "1CO", "1Coríntios": "1CO",
    "2Co": "2CO", "2Coríntios": "2CO",
    "Gl": "GAL", "Gál": "GAL", "Gálatas": "GAL",
    "Ef": "EPH", "Éf": "EPH", "Efésios": "EPH",
    "Fp": "PHP", "Fil": "PHP", "Filipenses": "PHP",
    "Cl": "COL", "Col": "COL", "Colossenses": "COL",
    "1Ts": "1TH", "1Tessalonicenses": "1TH",
    "2Ts": "2TH", "2Tessalonicenses": "2TH",
    "1Tm": "1TI", "1Timóteo": "1TI",
    "2Tm": "2TI", "2Timóteo": "2TI",
    "Tt": "TIT", "Tito": "TIT",
    "Fm": "PHM", "Filemom": "PHM",
    "Hb": "HEB", "Hebreus": "HEB",
    "Tg": "JAS", "Tia": "JAS", "Tiago": "JAS",
    "1Pe": "1PE", "1Pedro": "1PE",
    "2Pe": "2PE", "2Pedro": "2PE",
    "1Jo": "1JN", "1João": "1JN",
    "2Jo": "2JN", "2João": "2JN",
    "3Jo": "3JN", "3João": "3JN",
    "Jd": "JUD", "Judas": "JUD",
    "Ap": "REV", "Apocalipse": "REV",
}


def is_verse_range(ref: str) -> bool:
    """Verifica se a referência é um intervalo (ex.: "Mt 6:9-13")."""
    return RANGE_RE.match(ref.strip()) is not None


def expand_verse_range(ref: str) -> List[str]:
    """
    Expande um intervalo em referências individuais.

    "Mt 6:9-13" -> ["Mt 6:9", "Mt 6:10", "Mt 6:11", "Mt 6:12", "Mt 6:13"]

    Referências que não são intervalo voltam como [ref]. Um intervalo
    invertido (início > fim) também volta sem expansão; quem chama passa
    a tratá-lo como referência única (que não será resolvida).

    Args:
        ref: Referência digitada

    Returns:
        Lista de referências individuais, em ordem crescente de versículo
    """
    match = RANGE_RE.match(ref.strip())
    if not match:
        return [ref]

    book, chapter, start_verse, end_verse = match.groups()
    start = int(start_verse)
    end = int(end_verse)

    if start > end:
        logger.warning(f"Intervalo inválido: {ref!r} (início > fim)")
        return [ref]

    return [f"{book} {chapter}:{verse}" for verse in range(start, end + 1)]


def parse_reference(ref: str) -> Optional[str]:
    """
    Converte uma referência única para USFM.

    "Jo 3:16" -> "JHN.3.16", "2 Pe 1:21" -> "2PE.1.21"

    Livros desconhecidos e formatos inválidos são rejeitados com um aviso
    no log; nunca levantam exceção, para não interromper o lote.

    Args:
        ref: Referência de um único versículo

    Returns:
        Código USFM ou None se a referência não puder ser resolvida
    """
    match = SINGLE_RE.match(ref.strip())
    if not match:
        logger.warning(f"Formato de referência inválido: {ref!r}")
        return None

    book_raw, chapter, verse = match.groups()
    book = re.sub(r"\s+", "", book_raw)
    book_code = BOOK_CODES.get(book)

    if not book_code:
        logger.warning(f"Livro desconhecido: {book!r} na referência {ref!r}")
        return None

    return f"{book_code}.{chapter}.{verse}"


def count_words(text: str) -> int:
    """
    Conta palavras do texto de um versículo.

    Pontuação vira espaço; letras acentuadas e números contam como palavra.
    """
    clean_text = _NON_WORD_RE.sub(" ", text)
    return len(clean_text.split())


def calculate_verse_points(
    word_count: int,
    small_verse_pts: int = SMALL_VERSE_POINTS,
    large_verse_pts: int = LARGE_VERSE_POINTS
) -> int:
    """Pontos de um versículo: 20 palavras ou mais valem o nível maior."""
    if word_count >= VERSE_WORD_THRESHOLD:
        return large_verse_pts
    return small_verse_pts

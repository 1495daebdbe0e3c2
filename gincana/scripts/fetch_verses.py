"""
Busca os versículos memorizados no YouVersion e gera o verses.json.

Para cada versículo (intervalos expandidos) e cada versão configurada em
bible-versions.json é feita uma consulta, com pausa fixa entre chamadas.
Falhas ficam registradas em `unavailable` sem interromper a execução.

Uso:
    python -m gincana.scripts.fetch_verses [--data-dir DIR] [--versions-config ARQ]
"""

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import Callable, Dict, List, Optional, Tuple

import pandas as pd

from gincana.config import (
    BIBLE_VERSIONS_FILE,
    FETCH_DELAY_SECONDS,
    LEADERBOARD_FILE,
    VERSES_FILE,
    settings,
)
from gincana.dates import utc_now_iso
from gincana.integrations.youversion import BibleAPI
from gincana.models import BibleVersion, VerseRecord
from gincana.references import calculate_verse_points, expand_verse_range, is_verse_range, parse_reference
from gincana.store import StoreError, atomic_write_json, load_json_document

logger = logging.getLogger(__name__)


def collect_references(document: Dict) -> List[str]:
    """
    Referências únicas de todos os participantes, com intervalos expandidos.

    Mantém a ordem da primeira ocorrência.
    """
    original_refs: Dict[str, None] = {}
    for participant in document.get('participants', []):
        for raw in participant.get('memorizedVerses') or []:
            original_refs[VerseRecord.from_raw(raw).ref] = None

    all_refs: Dict[str, None] = {}
    for ref in original_refs:
        if is_verse_range(ref):
            expanded = expand_verse_range(ref)
            logger.info(f"Expandindo intervalo: {ref} -> {len(expanded)} versículos")
            for single in expanded:
                all_refs[single] = None
        else:
            all_refs[ref] = None
    return list(all_refs)


def fetch_all_verses(
    refs: List[str],
    versions: List[BibleVersion],
    api: BibleAPI,
    delay: float = FETCH_DELAY_SECONDS,
    sleep: Callable[[float], None] = time.sleep
) -> Tuple[Dict[str, Dict[str, Dict]], List[Dict[str, str]]]:
    """
    Busca cada (versículo, versão) em sequência.

    Args:
        refs: Referências individuais em português
        versions: Versões configuradas
        api: Cliente do YouVersion
        delay: Pausa entre chamadas, em segundos
        sleep: Função de pausa

    Returns:
        Tuple (verses {ref: {abbr: dados}}, lista de indisponíveis)
    """
    verses: Dict[str, Dict[str, Dict]] = {}
    unavailable: List[Dict[str, str]] = []

    for ref in refs:
        usfm_ref = parse_reference(ref)
        if not usfm_ref:
            continue

        logger.info(f"📖 {ref} ({usfm_ref})")
        verses[ref] = {}

        for version in versions:
            verse, error = api.fetch_verse(version.id, usfm_ref, ref)
            if verse:
                verses[ref][version.abbreviation] = verse.to_dict()
            else:
                logger.warning(f"❌ {ref} [{version.abbreviation}]: {error}")
                unavailable.append({
                    'ref': ref,
                    'version': version.abbreviation,
                    'error': error or 'unavailable'
                })
            sleep(delay)

    return verses, unavailable


def build_word_count_report(verses: Dict[str, Dict[str, Dict]], abbreviations: List[str]) -> pd.DataFrame:
    """Tabela referência × versão com palavras e pontos de cada versículo."""
    rows = []
    for ref, version_data in verses.items():
        row = {'Referência': ref}
        for abbr in abbreviations:
            data = version_data.get(abbr)
            if data:
                words = data['wordCount']
                row[abbr] = f"{words}w +{calculate_verse_points(words)}"
            else:
                row[abbr] = "──"
        rows.append(row)
    return pd.DataFrame(rows, columns=['Referência'] + abbreviations)


def build_output(
    default_version: Optional[str],
    versions: List[BibleVersion],
    verses: Dict,
    unavailable: List[Dict[str, str]]
) -> Dict:
    return {
        'generatedAt': utc_now_iso(),
        'defaultVersion': default_version,
        'versions': {v.abbreviation: v.to_dict() for v in versions},
        'verses': verses,
        'unavailable': unavailable
    }


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Busca versículos no YouVersion e gera verses.json")
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=settings.DATA_DIR,
        help="diretório com leaderboard.json (default: DATA_DIR)",
    )
    parser.add_argument(
        "--versions-config",
        type=Path,
        default=None,
        help="arquivo bible-versions.json (default: <data-dir>/bible-versions.json)",
    )
    parser.add_argument(
        "--delay",
        type=float,
        default=FETCH_DELAY_SECONDS,
        help="pausa entre chamadas em segundos (default: 0.15)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None, api: Optional[BibleAPI] = None) -> int:
    args = parse_args(argv)
    data_dir: Path = args.data_dir
    output_path = data_dir / VERSES_FILE

    if api is None:
        if not settings.YOUVERSION_API_KEY:
            logger.error("YOUVERSION_API_KEY não configurada no ambiente/.env")
            return 1
        api = BibleAPI(settings.YOUVERSION_API_KEY, settings.YOUVERSION_API_BASE_URL)

    try:
        config = load_json_document(args.versions_config or data_dir / BIBLE_VERSIONS_FILE, required=True)
        document = load_json_document(data_dir / LEADERBOARD_FILE, required=True)
    except StoreError as e:
        logger.error(f"❌ {e}")
        return 1

    versions = [BibleVersion.from_dict(v) for v in config.get('versions') or []]
    default_version = config.get('defaultVersion')
    logger.info(f"Versões configuradas: {', '.join(v.abbreviation for v in versions)}")

    refs = collect_references(document)
    if not refs:
        logger.info("Nenhum versículo para buscar; gerando verses.json vazio")
        atomic_write_json(build_output(default_version, [], {}, []), output_path)
        return 0

    logger.info(f"{len(refs)} referência(s) única(s)")
    verses, unavailable = fetch_all_verses(refs, versions, api, delay=args.delay)
    atomic_write_json(build_output(default_version, versions, verses, unavailable), output_path)

    report = build_word_count_report(verses, [v.abbreviation for v in versions])
    if not report.empty:
        print("\n📊 Contagem de palavras:\n")
        print(report.to_string(index=False))
        print("\n  Legenda: ≥20 palavras (+35 pts) │ <20 palavras (+25 pts)")

    total_fetched = sum(len(v) for v in verses.values())
    logger.info(
        f"✅ {total_fetched} versículo(s) em {len(versions)} versão(ões); "
        f"{len(unavailable)} indisponível(is). Gravado em {output_path}"
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())

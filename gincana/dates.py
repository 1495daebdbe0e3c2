"""
Utilitários de datas e timestamps.

Datas de presença ("2026-01-25") são dias do calendário local, nunca UTC.
Timestamps de criação (`addedAt`) são ISO-8601 e comparados exatamente.
"""

import logging
import re
from datetime import date, datetime, timezone
from typing import Optional

logger = logging.getLogger(__name__)

# Fração de segundos logo após HH:MM:SS
_FRACTION_RE = re.compile(r'(?<=\d\d:\d\d:\d\d)\.(\d+)')


def parse_local_date(date_str: str) -> date:
    """
    Interpreta "YYYY-MM-DD" como data local.

    Evita o deslocamento em que "2026-01-25" vira 24/01 em UTC-3.
    """
    year, month, day = (int(part) for part in date_str.split('-')[:3])
    return date(year, month, day)


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """
    Converte um timestamp ISO-8601 em datetime com fuso.

    Aceita o sufixo "Z" e datas sem horário. Valores sem fuso são
    interpretados no horário local da máquina.

    Args:
        value: Texto ISO-8601 ou None

    Returns:
        datetime com tzinfo, ou None se ausente/inválido
    """
    if not value:
        return None
    text = value.strip()
    if text.endswith('Z') or text.endswith('z'):
        text = text[:-1] + '+00:00'
    # fromisoformat (até 3.10) só aceita frações com 3 ou 6 dígitos
    text = _FRACTION_RE.sub(lambda m: '.' + (m.group(1) + '000000')[:6], text, count=1)
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        logger.warning(f"Timestamp inválido ignorado: {value!r}")
        return None
    if parsed.tzinfo is None:
        parsed = parsed.astimezone()
    return parsed


def utc_now_iso() -> str:
    """Timestamp atual em UTC, no formato usado nos documentos JSON."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec='milliseconds').replace('+00:00', 'Z')


EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

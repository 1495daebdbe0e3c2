"""
Configuração centralizada da Gincana.

Este módulo contém as constantes de pontuação, os padrões de regras,
os caminhos dos arquivos de dados e os settings lidos do ambiente.
"""

from pathlib import Path
from typing import Dict, List, Optional
import logging

from pydantic_settings import BaseSettings, SettingsConfigDict

# Configurar logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


# ============================================================================
# PADRÕES DE REGRAS
# ============================================================================

# Trechos procurados (sem diferenciar maiúsculas) na descrição das regras
# quando a regra não tem `activityType` estruturado.
RULE_PATTERN_EMBAIXADA: str = "embaixada"
RULE_PATTERN_IGREJA: str = "compromissos"
RULE_PATTERN_VISITOR: str = "visitante"
RULE_PATTERN_SMALL_VERSE: str = "<20"
RULE_PATTERN_LARGE_VERSE: str = ">=20"
RULE_PATTERN_PREREQUISITES: str = "pre-requisitos"
RULE_PATTERN_MANUAL_TASK: str = "tarefa manual"

# Tipos de presença com alias próprio no fallback por descrição
ATTENDANCE_ALIASES: Dict[str, str] = {
    "embaixada": RULE_PATTERN_EMBAIXADA,
    "igreja": RULE_PATTERN_IGREJA,
}

# Rótulos conhecidos; tipos novos usam o próprio nome capitalizado
KNOWN_ATTENDANCE_TYPES: Dict[str, Dict[str, str]] = {
    "embaixada": {"label": "Embaixada", "abbrev": "Emb"},
    "igreja": {"label": "Igreja", "abbrev": "Igr"},
    "pg": {"label": "PG", "abbrev": "PG"},
    "quarto": {"label": "Quarto", "abbrev": "Qto"},
    "cozinha": {"label": "Cozinha", "abbrev": "Coz"},
    "banheiro": {"label": "Banheiro", "abbrev": "Ban"},
    "fora": {"label": "Fora", "abbrev": "For"},
}


# ============================================================================
# PONTUAÇÃO DE VERSÍCULOS
# ============================================================================

# Versículos com 20 palavras ou mais valem o nível maior
VERSE_WORD_THRESHOLD: int = 20
SMALL_VERSE_POINTS: int = 25
LARGE_VERSE_POINTS: int = 35

DEFAULT_BIBLE_VERSION: str = "NVI"


# ============================================================================
# ADMIN E HISTÓRICO
# ============================================================================

ACTIVITY_HISTORY_LIMIT: int = 50
EPOCH_TIMESTAMP: str = "1970-01-01T00:00:00Z"


# ============================================================================
# ARQUIVOS DE DADOS
# ============================================================================

PROJECT_ROOT = Path(__file__).parent.parent

LEADERBOARD_FILE: str = "leaderboard.json"
RULES_FILE: str = "rules.json"
VERSES_FILE: str = "verses.json"
GAMES_FILE: str = "games.json"
BONUS_FILE: str = "bonus.json"
BIBLE_VERSIONS_FILE: str = "bible-versions.json"


# ============================================================================
# CONFIGURAÇÃO DE APIs
# ============================================================================

YOUVERSION_API_BASE_URL: str = "https://api.youversion.com/v1"
YOUVERSION_WEB_URL: str = "https://www.bible.com/pt/bible"
REQUEST_TIMEOUT: int = 15  # segundos
FETCH_DELAY_SECONDS: float = 0.15  # pausa entre chamadas (limite informal da API)


# ============================================================================
# CONFIGURAÇÃO DE UI
# ============================================================================

COLORS = {
    "gold": "#FFD700",
    "silver": "#C0C0C0",
    "bronze": "#CD7F32",
    "primary": "#1E3A8A",
    "secondary": "#D4A017",
    "background_start": "#0b1533",
    "background_end": "#1c2a5c",
}

MEDALS: List[str] = ['🥇', '🥈', '🥉', '4️⃣', '5️⃣']


# ============================================================================
# SETTINGS (ambiente / .env)
# ============================================================================

class Settings(BaseSettings):
    """Settings carregados de variáveis de ambiente."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Diretório com leaderboard.json, rules.json, verses.json, ...
    DATA_DIR: Path = PROJECT_ROOT / "data"
    # Cópia opcional (ex.: pasta versionada no git)
    MIRROR_DATA_DIR: Optional[Path] = None

    YOUVERSION_API_KEY: str = ""
    YOUVERSION_API_BASE_URL: str = YOUVERSION_API_BASE_URL

    API_HOST: str = "127.0.0.1"
    API_PORT: int = 3001
    CORS_ORIGINS: List[str] = [
        "http://localhost:8501",
        "http://localhost:8080",
    ]

    def data_path(self, filename: str) -> Path:
        return self.DATA_DIR / filename

    def mirror_path(self, filename: str) -> Optional[Path]:
        if self.MIRROR_DATA_DIR is None:
            return None
        return self.MIRROR_DATA_DIR / filename


settings = Settings()


# ============================================================================
# FUNÇÕES DE UTILIDADE
# ============================================================================

def get_attendance_label(attendance_type: str) -> str:
    """Rótulo de exibição para qualquer tipo de presença."""
    known = KNOWN_ATTENDANCE_TYPES.get(attendance_type)
    if known:
        return known["label"]
    return attendance_type[:1].upper() + attendance_type[1:]


def get_attendance_abbrev(attendance_type: str) -> str:
    """Abreviação do tipo de presença (3 letras para tipos desconhecidos)."""
    known = KNOWN_ATTENDANCE_TYPES.get(attendance_type)
    if known:
        return known["abbrev"]
    short = attendance_type[:3]
    return short[:1].upper() + short[1:]

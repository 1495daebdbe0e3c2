"""
Acesso aos documentos JSON da Gincana.

O leaderboard.json é a única fonte de verdade: cada escrita substitui o
arquivo inteiro. Não há trava nem detecção de conflito entre escritores;
o uso previsto é um único administrador fazendo uma alteração por vez.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, List, Optional

from gincana.config import LEADERBOARD_FILE, RULES_FILE, settings
from gincana.dates import utc_now_iso
from gincana.models import Participant, Rule

logger = logging.getLogger(__name__)


class StoreError(Exception):
    """Arquivo ausente, ilegível, malformado ou impossível de gravar."""


def _dump(document: Dict[str, Any]) -> str:
    return json.dumps(document, indent=2, ensure_ascii=False) + "\n"


def atomic_write_json(document: Dict[str, Any], path: Path) -> None:
    """
    Grava JSON de forma atômica usando um arquivo temporário.

    O temporário fica no mesmo diretório para que a troca seja um rename.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    content = _dump(document)

    tmp = tempfile.NamedTemporaryFile(
        mode='w',
        encoding='utf-8',
        delete=False,
        suffix='.json',
        dir=path.parent
    )
    tmp_path = Path(tmp.name)

    # Qualquer falha (escrita, flush ou rename) remove o temporário
    try:
        with tmp:
            tmp.write(content)
        os.replace(tmp_path, path)
    except Exception:
        if tmp_path.exists():
            tmp_path.unlink()
        raise


def load_json_document(path: Path, required: bool = False) -> Optional[Dict[str, Any]]:
    """
    Lê um documento JSON.

    Args:
        path: Caminho do arquivo
        required: Se True, arquivo ausente é erro; senão retorna None

    Returns:
        Documento carregado ou None

    Raises:
        StoreError: Arquivo obrigatório ausente, ilegível ou malformado
    """
    if not path.exists():
        if required:
            raise StoreError(f"Arquivo não encontrado: {path}")
        logger.debug(f"Documento opcional ausente: {path}")
        return None

    try:
        with open(path, 'r', encoding='utf-8') as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise StoreError(f"JSON inválido em {path}: {e}") from e
    except OSError as e:
        raise StoreError(f"Erro ao ler {path}: {e}") from e


def load_rules(rules_path: Path, document: Optional[Dict[str, Any]] = None) -> List[Rule]:
    """
    Carrega as regras de pontuação.

    Usa rules.json quando existe; senão a chave `rules` do leaderboard.
    """
    rules_doc = load_json_document(rules_path)
    if rules_doc is not None:
        raw_rules = rules_doc.get('rules') or []
    elif document is not None:
        raw_rules = document.get('rules') or []
    else:
        raw_rules = []
    return [Rule.from_dict(r) for r in raw_rules]


def get_participants(document: Dict[str, Any]) -> List[Participant]:
    """Participantes do documento já normalizados."""
    return [Participant.from_dict(p) for p in document.get('participants') or []]


class LeaderboardStore:
    """
    Leitura e escrita do leaderboard.json.

    Opcionalmente espelha cada escrita em um segundo caminho (por exemplo,
    a pasta de configuração versionada no git).
    """

    def __init__(self, path: Path, mirror_path: Optional[Path] = None):
        self.path = Path(path)
        self.mirror_path = Path(mirror_path) if mirror_path else None

    @classmethod
    def from_settings(cls) -> 'LeaderboardStore':
        return cls(
            settings.data_path(LEADERBOARD_FILE),
            settings.mirror_path(LEADERBOARD_FILE)
        )

    @property
    def rules_path(self) -> Path:
        return self.path.parent / RULES_FILE

    def read(self) -> Dict[str, Any]:
        """
        Lê o documento completo.

        Raises:
            StoreError: Arquivo ausente ou malformado
        """
        document = load_json_document(self.path, required=True)
        if not isinstance(document, dict):
            raise StoreError(f"Documento inválido em {self.path}: esperado objeto JSON")
        document.setdefault('participants', [])
        return document

    def write(self, document: Dict[str, Any]) -> Dict[str, Any]:
        """
        Grava o documento inteiro, atualizando `updatedAt`.

        Falha no espelho é apenas registrada; falha no arquivo principal
        levanta StoreError.
        """
        document['updatedAt'] = utc_now_iso()

        try:
            atomic_write_json(document, self.path)
        except OSError as e:
            raise StoreError(f"Erro ao gravar {self.path}: {e}") from e

        if self.mirror_path:
            try:
                atomic_write_json(document, self.mirror_path)
            except OSError as e:
                logger.warning(f"Não foi possível gravar o espelho {self.mirror_path}: {e}")

        logger.info(f"Leaderboard gravado em {self.path}")
        return document

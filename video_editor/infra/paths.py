# -*- coding: utf-8 -*-
"""
Paths utilities for FFmpeg binaries, temporary outputs and bundled resources
"""

import os
import shutil
import threading
import uuid
from pathlib import Path
from typing import Callable, Dict, Optional

from ..domain.errors import MissingResourceError
from ..domain.models.media import MediaSource
from .logging import get_logger
from .settings import AppSettings

logger = get_logger("Paths")


def _resolve_bin(name: str, user_path: Optional[str]) -> str:
    if user_path and os.path.exists(user_path):
        return os.path.abspath(user_path)
    exe_name = f"{name}.exe" if os.name == "nt" else name
    return shutil.which(exe_name) or exe_name  # assume no PATH


def ffmpeg_bin(settings: AppSettings) -> str:
    """Resolve o caminho para o binário do FFmpeg"""
    return _resolve_bin("ffmpeg", settings.ffmpeg_path)


def ffprobe_bin(settings: AppSettings) -> str:
    """Resolve o caminho para o binário do FFprobe"""
    return _resolve_bin("ffprobe", settings.ffprobe_path)


def allocate_output_path(temp_dir: Path, kind: str, extension: str) -> Path:
    """Novo caminho único: <temp_dir>/<kind><uuid>.<ext>"""
    temp_dir.mkdir(parents=True, exist_ok=True)
    return temp_dir / f"{kind}{uuid.uuid4().hex}.{extension}"


def sweep_directory(directory: Path) -> int:
    """Remove tudo que estiver no diretório; retorna quantos itens saíram"""
    if not directory.exists():
        return 0

    removed = 0
    for item in directory.iterdir():
        try:
            if item.is_dir() and not item.is_symlink():
                shutil.rmtree(item)
            else:
                item.unlink()
            removed += 1
        except OSError as e:
            logger.warning("Não foi possível remover %s: %s", item, e)
    return removed


class BundledResources:
    """Recursos empacotados (silêncio, fundo preto), carregados uma vez e compartilhados"""

    def __init__(self, settings: AppSettings, probe: Callable[[Path], MediaSource]):
        self.settings = settings
        self._probe = probe
        self._cache: Dict[str, MediaSource] = {}
        self._lock = threading.Lock()

    def silence(self) -> MediaSource:
        """Áudio silencioso usado quando uma fonte não tem áudio"""
        return self._load(self.settings.silence_file)

    def background(self) -> MediaSource:
        """Vídeo preto usado como camada de fundo"""
        return self._load(self.settings.background_file)

    def _load(self, file_name: str) -> MediaSource:
        with self._lock:
            if file_name not in self._cache:
                path = Path(self.settings.resources_dir) / file_name
                if not path.exists():
                    logger.error("Recurso obrigatório ausente: %s", path)
                    raise MissingResourceError("Recurso obrigatório ausente", str(path))
                self._cache[file_name] = self._probe(path)
                logger.debug("Recurso carregado: %s", path)
            return self._cache[file_name]

# -*- coding: utf-8 -*-
"""
Settings management using pydantic-settings
"""

import json
import tempfile
from pathlib import Path
from typing import Optional, Tuple

from pydantic_settings import BaseSettings


class AppSettings(BaseSettings):
    """Configurações do editor de vídeo"""

    # Binários (None = procurar no PATH)
    ffmpeg_path: Optional[str] = None
    ffprobe_path: Optional[str] = None

    # Diretórios
    temp_dir: Path = Path(tempfile.gettempdir()) / "video_editor"
    output_dir: Path = Path("output_videos")
    resources_dir: Path = Path(__file__).resolve().parents[2] / "resources"
    silence_file: str = "silence.mp3"
    background_file: str = "black.mov"
    resource_duration: float = 2.0

    # Tamanhos de renderização
    portrait_size: Tuple[int, int] = (720, 1280)
    landscape_size: Tuple[int, int] = (1920, 1080)
    frame_rate: int = 30

    # Merge simultâneo (picture-in-picture)
    pip_size: Tuple[int, int] = (640, 360)
    pip_offset_x: float = 40.0
    simultaneous_offset: float = 3.0
    pip_fade_out_at: float = 10.0

    # Transições de opacidade
    transition_duration: float = 1.0

    # Unidades de referência das sobreposições de texto (tela do dispositivo)
    reference_width: float = 390.0
    reference_height: float = 300.0
    font_file: Optional[str] = None

    # Exportação
    quality_preset: str = "highest"
    output_file_type: str = "mp4"
    max_workers: int = 2

    class Config:
        env_prefix = "VIDEO_EDITOR_"
        env_file = ".env"
        case_sensitive = False


def load_settings(config_path: Path = Path("config.json")) -> AppSettings:
    """Carrega as configurações da aplicação"""
    # Primeiro tenta carregar do config.json (compatibilidade)
    if config_path.exists():
        with open(config_path, "r", encoding="utf-8") as f:
            config_data = json.load(f)
        return AppSettings(**config_data)

    # Senão carrega das variáveis de ambiente ou padrões
    return AppSettings()

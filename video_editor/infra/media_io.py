# -*- coding: utf-8 -*-
"""
Serviços de mídia/IO para FFprobe
"""

import json
import subprocess
from pathlib import Path
from typing import Any, Dict, Optional

from ..domain.errors import MediaProbeError
from ..domain.models.geometry import AffineTransform
from ..domain.models.media import MediaSource
from .logging import get_logger
from .paths import ffprobe_bin
from .settings import AppSettings


class MediaIO:
    """Serviços de entrada/saída de mídia"""

    def __init__(self, settings: AppSettings):
        self.settings = settings
        self.logger = get_logger("MediaIO")

    def probe(self, media_path: Path) -> MediaSource:
        """Lê tamanho natural, duração, rotação e presença de áudio"""
        media_path = Path(media_path)
        if not media_path.exists():
            raise MediaProbeError("Arquivo de mídia não encontrado", str(media_path))

        data = self._run_ffprobe(media_path)
        streams = data.get("streams", [])
        video = self._first_video_stream(streams)
        has_audio = any(s.get("codec_type") == "audio" for s in streams)

        try:
            duration = float(
                data.get("format", {}).get("duration")
                or (video or {}).get("duration")
                or 0.0
            )
        except (TypeError, ValueError):
            duration = 0.0

        if video is None:
            self.logger.warning("Nenhuma track de vídeo em %s", media_path)
            return MediaSource(
                path=media_path,
                width=0,
                height=0,
                duration=duration,
                has_audio=has_audio,
                has_video=False,
            )

        rotation = self._clockwise_rotation(video)
        source = MediaSource(
            path=media_path,
            width=int(video.get("width", 0)),
            height=int(video.get("height", 0)),
            duration=duration,
            transform=AffineTransform.rotation(rotation),
            has_audio=has_audio,
            has_video=True,
        )
        self.logger.debug(
            "Mídia %s: %dx%d, %.2fs, rotação %s°, áudio=%s",
            media_path,
            source.width,
            source.height,
            source.duration,
            rotation,
            has_audio,
        )
        return source

    def _run_ffprobe(self, media_path: Path) -> Dict[str, Any]:
        try:
            result = subprocess.run(
                [
                    ffprobe_bin(self.settings),
                    "-v",
                    "error",
                    "-show_streams",
                    "-show_format",
                    "-of",
                    "json",
                    str(media_path),
                ],
                capture_output=True,
                text=True,
                check=True,
            )
            return json.loads(result.stdout)
        except subprocess.CalledProcessError as e:
            self.logger.warning("FFprobe falhou em %s: %s", media_path, e.stderr)
            raise MediaProbeError(f"FFprobe falhou: {e.stderr}", str(media_path)) from e
        except (OSError, json.JSONDecodeError) as e:
            self.logger.warning("Erro ao ler metadados de %s: %s", media_path, e)
            raise MediaProbeError(f"Erro ao ler metadados: {e}", str(media_path)) from e

    @staticmethod
    def _first_video_stream(streams) -> Optional[Dict[str, Any]]:
        for stream in streams:
            if stream.get("codec_type") != "video":
                continue
            # Capa embutida (mp3/m4a) não é track de vídeo
            if stream.get("disposition", {}).get("attached_pic"):
                continue
            return stream
        return None

    @staticmethod
    def _clockwise_rotation(stream: Dict[str, Any]) -> float:
        """Rotação de exibição em graus no sentido horário"""
        for side_data in stream.get("side_data_list", []):
            if "rotation" in side_data:
                # Display matrix: ângulo anti-horário
                return -float(side_data["rotation"]) % 360
        rotate_tag = stream.get("tags", {}).get("rotate")
        if rotate_tag:
            return float(rotate_tag) % 360
        return 0.0

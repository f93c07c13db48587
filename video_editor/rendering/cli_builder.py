# -*- coding: utf-8 -*-
"""
Construção de comandos FFmpeg a partir do filtergraph
"""

from pathlib import Path
from typing import List

from ..domain.models.export import CONTAINER_FORMATS, ExportJob, RenderSettings
from ..infra.logging import get_logger
from .graph_builder import FilterGraph


class CliBuilder:
    """Constrói comandos FFmpeg a partir do filtergraph"""

    def __init__(self, ffmpeg: str = "ffmpeg"):
        self.ffmpeg = ffmpeg
        self.logger = get_logger("CliBuilder")

    def make_command(self, job: ExportJob, graph: FilterGraph, out_path: Path) -> List[str]:
        """Gera o comando FFmpeg completo"""
        settings = job.render_settings
        self.logger.info(
            "Construindo comando FFmpeg (%s) para %d inputs", job.kind, len(graph.inputs)
        )

        cmd = [self.ffmpeg, "-y"]

        # Hardware acceleration primeiro, se especificado
        if settings.hwaccel and not job.is_passthrough:
            cmd.extend(["-hwaccel", settings.hwaccel])

        # Adicionar todos os inputs com suas opções
        for spec in graph.inputs:
            cmd.extend(spec.options)
            cmd.extend(["-i", spec.path])

        if job.is_passthrough:
            # Sem corte nem filtro: cópia dos streams, saída idêntica
            cmd.extend(["-map", "0", "-c", "copy"])
        else:
            self._add_mapping(cmd, job, graph)
            self._add_codecs(cmd, settings)
            if job.is_composition:
                target = job.asset.render_target
                cmd.extend(["-r", str(target.frame_rate), "-t", f"{job.asset.duration:.3f}"])
            elif job.trim_range is not None:
                cmd.extend(["-t", f"{job.trim_range.duration:.3f}"])

        # Formato do container e otimizações
        cmd.extend(["-f", CONTAINER_FORMATS[job.file_type], "-movflags", "+faststart"])

        # Arquivo de saída
        cmd.append(str(out_path))

        self.logger.debug("Comando FFmpeg: %s", " ".join(map(str, cmd)))
        return cmd

    # ------------------------------------------------------------------
    # Recursos empacotados (gerados a partir de fontes lavfi)
    # ------------------------------------------------------------------

    def silence_command(self, out_path: Path, duration: float) -> List[str]:
        """Áudio estéreo silencioso, tocado em loop para fontes sem áudio"""
        return [
            self.ffmpeg, "-y",
            "-f", "lavfi", "-i", "anullsrc=r=44100:cl=stereo",
            "-t", f"{duration:.3f}",
            "-c:a", "libmp3lame", "-b:a", "128k",
            str(out_path),
        ]

    def background_command(
        self, out_path: Path, width: int, height: int, frame_rate: int, duration: float
    ) -> List[str]:
        """Vídeo preto sem áudio, usado em loop como fundo"""
        return [
            self.ffmpeg, "-y",
            "-f", "lavfi", "-i", f"color=c=black:s={width}x{height}:r={frame_rate}",
            "-t", f"{duration:.3f}",
            "-c:v", "libx264", "-pix_fmt", "yuv420p",
            "-an",
            str(out_path),
        ]

    def _add_mapping(self, cmd: List[str], job: ExportJob, graph: FilterGraph):
        # Adiciona filtergraph se houver filtros
        if graph.filters:
            cmd.extend(["-filter_complex", graph.to_string()])

        # Mapear outputs do filtergraph
        cmd.extend(["-map", graph.video_label or "0:v"])
        if graph.audio_label:
            cmd.extend(["-map", graph.audio_label])
        elif not job.is_composition:
            # Áudio da fonte, se existir
            cmd.extend(["-map", "0:a?"])

    @staticmethod
    def _add_codecs(cmd: List[str], settings: RenderSettings):
        # Configurações de codec de vídeo
        cmd.extend(["-c:v", settings.vcodec])

        if settings.vcodec == "libx264":
            cmd.extend(["-preset", settings.preset, "-crf", str(settings.crf)])
        elif settings.vcodec == "h264_nvenc":
            cmd.extend(["-preset", settings.preset, "-rc", "constqp", "-qp", str(settings.crf)])

        # Codec de áudio
        cmd.extend(["-c:a", settings.acodec, "-b:a", settings.audio_bitrate])
        cmd.extend(["-pix_fmt", "yuv420p"])

# -*- coding: utf-8 -*-
"""
Modelos de domínio para jobs de exportação e configurações de renderização
"""

from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Literal, Optional, Union

from ..errors import EditError
from .media import MediaSource, TrimRange
from .overlay import LayerTree
from .timeline import Composition

ExportKind = Literal["trim", "addEffect", "addText", "mergeAudio", "mergeVideos"]

# Tipo de arquivo -> formato do muxer FFmpeg
CONTAINER_FORMATS = {"mp4": "mp4", "m4v": "mp4", "mov": "mov"}


@dataclass(frozen=True)
class RenderSettings:
    """Configurações de renderização"""

    container: str  # "mp4"
    vcodec: str  # "libx264" | "h264_nvenc"
    acodec: str  # "aac"
    crf: int  # 18-23
    preset: str  # "medium"
    audio_bitrate: str  # "192k"
    hwaccel: str | None = None  # "cuda" (preset "gpu")


QUALITY_PRESETS = {
    "highest": RenderSettings(
        container="mp4",
        vcodec="libx264",
        acodec="aac",
        crf=17,
        preset="slow",
        audio_bitrate="256k",
    ),
    "medium": RenderSettings(
        container="mp4",
        vcodec="libx264",
        acodec="aac",
        crf=23,
        preset="medium",
        audio_bitrate="192k",
    ),
    "low": RenderSettings(
        container="mp4",
        vcodec="libx264",
        acodec="aac",
        crf=28,
        preset="veryfast",
        audio_bitrate="128k",
    ),
    "gpu": RenderSettings(
        container="mp4",
        vcodec="h264_nvenc",
        acodec="aac",
        crf=19,
        preset="p5",
        audio_bitrate="192k",
        hwaccel="cuda",
    ),
}


@dataclass(frozen=True)
class ExportJob:
    """Unidade de trabalho de exportação; criada a cada chamada e nunca reutilizada"""

    kind: ExportKind
    asset: Union[Composition, MediaSource]
    trim_range: Optional[TrimRange] = None
    pixel_filter: Optional[str] = None  # expressão de filtro FFmpeg já resolvida
    layer_tree: Optional[LayerTree] = None
    background: Optional[MediaSource] = None
    file_type: str = "mp4"
    quality: str = "highest"

    def __post_init__(self):
        if self.file_type not in CONTAINER_FORMATS:
            raise ValueError(f"Tipo de arquivo não suportado: {self.file_type}")
        if self.quality not in QUALITY_PRESETS:
            raise ValueError(f"Preset de qualidade desconhecido: {self.quality}")

    @property
    def render_settings(self) -> RenderSettings:
        return QUALITY_PRESETS[self.quality]

    @property
    def is_composition(self) -> bool:
        return isinstance(self.asset, Composition)

    @property
    def is_passthrough(self) -> bool:
        """Fonte única sem corte nem filtro: streams copiados sem reencode"""
        return (
            not self.is_composition
            and self.trim_range is None
            and self.pixel_filter is None
            and self.layer_tree is None
        )


@dataclass(frozen=True)
class ExportResult:
    """Resultado terminal de um job: caminho de saída OU erro"""

    kind: ExportKind
    output_path: Optional[Path] = None
    error: Optional[EditError] = None

    def __post_init__(self):
        if (self.output_path is None) == (self.error is None):
            raise ValueError("ExportResult exige exatamente um de output_path ou error")

    @property
    def ok(self) -> bool:
        return self.error is None

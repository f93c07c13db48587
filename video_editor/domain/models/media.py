# -*- coding: utf-8 -*-
"""
Modelos de domínio para fontes de mídia e alvos de renderização
"""

from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path

from .geometry import AffineTransform, Size


@dataclass(frozen=True)
class MediaSource:
    """Handle de leitura para um vídeo (e opcionalmente áudio)"""

    path: Path
    width: int
    height: int
    duration: float
    transform: AffineTransform = field(default_factory=AffineTransform.identity)
    has_audio: bool = True
    has_video: bool = True

    @property
    def natural_size(self) -> Size:
        return Size(self.width, self.height)


@dataclass(frozen=True)
class TrimRange:
    """Janela [start, end) em segundos"""

    start: float
    end: float

    def __post_init__(self):
        if self.start < 0:
            raise ValueError(f"Início do corte negativo: {self.start}")
        if self.end <= self.start:
            raise ValueError(
                f"Fim do corte ({self.end}) deve ser maior que o início ({self.start})"
            )

    @property
    def duration(self) -> float:
        return self.end - self.start


@dataclass(frozen=True)
class RenderTarget:
    """Geometria do quadro de saída"""

    width: int
    height: int
    frame_rate: int = 30

    @property
    def size(self) -> Size:
        return Size(self.width, self.height)

# -*- coding: utf-8 -*-
"""
video_editor/domain/models/overlay.py
Modelos de domínio para sobreposições de texto e árvore de camadas
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple

from .geometry import Rect, Size


@dataclass(frozen=True)
class TextOverlay:
    """Texto sobreposto ao vídeo com tempos de entrada e saída"""

    text: str
    font_size: float = 40.0
    color: str = "white"
    frame: Rect = Rect(0, 0, 500, 500)
    show_time: float = 0.0
    hide_time: float = 0.0  # 0 = nunca desaparece


@dataclass(frozen=True)
class OpacityAnimation:
    """Animação de opacidade que mantém o valor final (não reverte)"""

    begin: float
    duration: float
    from_value: float
    to_value: float

    def is_active(self, t: float) -> bool:
        return t >= self.begin

    def value_at(self, t: float) -> float:
        if t >= self.begin + self.duration:
            return self.to_value
        progress = (t - self.begin) / self.duration
        return self.from_value + (self.to_value - self.from_value) * progress


@dataclass(frozen=True)
class TextLayer:
    """Camada de texto com suas animações, na ordem em que foram adicionadas"""

    text: str
    font_size: float
    color: str
    frame: Rect
    animations: Tuple[OpacityAnimation, ...] = ()
    initial_opacity: float = 0.0

    def opacity_at(self, t: float) -> float:
        """Opacidade no instante t; a última animação iniciada prevalece"""
        value = self.initial_opacity
        for animation in self.animations:
            if animation.is_active(t):
                value = animation.value_at(t)
        return max(0.0, min(1.0, value))


@dataclass(frozen=True)
class VideoLayer:
    frame: Rect


@dataclass(frozen=True)
class LayerTree:
    """Camada de vídeo base + camadas de texto, entregue ao compositor"""

    render_size: Size
    video_layer: VideoLayer
    text_layers: Tuple[TextLayer, ...] = ()

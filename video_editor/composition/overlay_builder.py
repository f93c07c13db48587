# -*- coding: utf-8 -*-
"""
Construção da árvore de camadas (vídeo base + textos com fade)
"""

from typing import Sequence

from ..domain.models.geometry import Rect, Size
from ..domain.models.overlay import (
    LayerTree,
    OpacityAnimation,
    TextLayer,
    TextOverlay,
    VideoLayer,
)
from ..infra.logging import get_logger
from ..infra.settings import AppSettings

FADE_IN_DURATION = 0.5
FADE_OUT_DURATION = 1.0


class OverlayBuilder:
    """Gera a LayerTree entregue ao compositor de quadros da exportação"""

    def __init__(self, settings: AppSettings):
        self.reference_size = Size(settings.reference_width, settings.reference_height)
        self.logger = get_logger("OverlayBuilder")

    def build(
        self,
        render_size: Size,
        overlays: Sequence[TextOverlay],
        rescale: bool = True,
    ) -> LayerTree:
        sx, sy = self._scale_factors(render_size) if rescale else (1.0, 1.0)
        text_layers = tuple(self._text_layer(overlay, sx, sy) for overlay in overlays)
        self.logger.info(
            "Árvore de camadas %.0fx%.0f com %d textos (escala %.3f x %.3f)",
            render_size.width,
            render_size.height,
            len(text_layers),
            sx,
            sy,
        )
        return LayerTree(
            render_size=render_size,
            video_layer=VideoLayer(Rect(0, 0, render_size.width, render_size.height)),
            text_layers=text_layers,
        )

    def _scale_factors(self, render_size: Size):
        """Razões render/referência, apenas quando diferem"""
        sx = sy = 1.0
        if render_size.width != self.reference_size.width:
            sx = render_size.width / self.reference_size.width
        if render_size.height != self.reference_size.height:
            sy = render_size.height / self.reference_size.height
        return sx, sy

    @staticmethod
    def _text_layer(overlay: TextOverlay, sx: float, sy: float) -> TextLayer:
        animations = [
            OpacityAnimation(
                begin=overlay.show_time,
                duration=FADE_IN_DURATION,
                from_value=0.0,
                to_value=1.0,
            )
        ]
        if overlay.hide_time > 0:
            animations.append(
                OpacityAnimation(
                    begin=overlay.hide_time,
                    duration=FADE_OUT_DURATION,
                    from_value=1.0,
                    to_value=0.0,
                )
            )
        return TextLayer(
            text=overlay.text,
            font_size=overlay.font_size * sy,
            color=overlay.color,
            frame=overlay.frame.scaled(sx, sy),
            animations=tuple(animations),
        )

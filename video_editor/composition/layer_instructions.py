# -*- coding: utf-8 -*-
"""
Fábrica de instruções de camada: escala para caber no alvo e centraliza
"""

from ..domain.models.geometry import AffineTransform, Size
from ..domain.models.timeline import LayerInstruction, TimelineEntry
from ..infra.logging import get_logger
from .orientation import classify, fixed_transform

# Folga numérica na verificação de transbordo
_OVERFLOW_TOLERANCE = 1e-6


class LayerInstructionFactory:
    """Calcula a transformação de posicionamento de uma track de vídeo"""

    def __init__(self):
        self.logger = get_logger("LayerInstructionFactory")

    def placement(self, raw: AffineTransform, natural_size: Size, target_size: Size) -> AffineTransform:
        """fixed ∘ scale ∘ translate, ajustando pela largura do alvo"""
        info = classify(raw)
        fixed = fixed_transform(raw, natural_size)

        # Conteúdo já orientado; na origem para os casos canônicos
        oriented = fixed.bounding_box(natural_size)
        self.logger.debug(
            "Orientação %s (retrato=%s), conteúdo %.0fx%.0f",
            info.orientation.value,
            info.is_portrait,
            oriented.width,
            oriented.height,
        )

        scale = target_size.width / oriented.width
        if oriented.height * scale <= target_size.height + _OVERFLOW_TOLERANCE:
            # Centraliza no eixo Y
            new_x = 0.0
            new_y = target_size.height / 2 - (oriented.height * scale) / 2
        else:
            # Ajustar pela largura transbordaria: ajusta pela altura e centraliza em X
            scale = target_size.height / oriented.height
            new_x = target_size.width / 2 - (oriented.width * scale) / 2
            new_y = 0.0

        move = AffineTransform.translation(
            new_x - oriented.x * scale, new_y - oriented.y * scale
        )
        return fixed.concat(AffineTransform.scale(scale, scale)).concat(move)

    def build(self, entry: TimelineEntry, target_size: Size) -> LayerInstruction:
        """Instrução (sem programa de opacidade) para o trecho de vídeo"""
        source = entry.source
        transform = self.placement(source.transform, source.natural_size, target_size)
        self.logger.debug(
            "Instrução %s: %dx%d -> %.0fx%.0f, transform=%s",
            entry.id,
            source.width,
            source.height,
            target_size.width,
            target_size.height,
            transform,
        )
        return LayerInstruction(track_id=entry.id, transform=transform)

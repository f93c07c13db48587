# -*- coding: utf-8 -*-
"""
Normalização de orientação das tracks de vídeo.

Classifica a transformação preferida gravada pelo dispositivo em um dos quatro
casos canônicos e recalcula a translação para que, após a rotação, o canto
superior esquerdo do conteúdo volte para (0, 0).
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from ..domain.models.geometry import AffineTransform, Size
from ..infra.logging import get_logger

logger = get_logger("Orientation")

# Componentes a até ORIENTATION_EPSILON do valor canônico são considerados iguais
ORIENTATION_EPSILON = 1e-6

Linear = Tuple[float, float, float, float]


class Orientation(str, Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


@dataclass(frozen=True)
class OrientationInfo:
    orientation: Orientation
    is_portrait: bool


_CLASSIFICATION = {
    (1, 0, 0, 1): OrientationInfo(Orientation.UP, False),
    (0, 1, -1, 0): OrientationInfo(Orientation.RIGHT, True),
    (0, -1, 1, 0): OrientationInfo(Orientation.LEFT, True),
    (-1, 0, 0, -1): OrientationInfo(Orientation.DOWN, False),
}


def _fixed_translation(linear: Linear, size: Size) -> Optional[Tuple[float, float]]:
    w, h = size.width, size.height
    table = {
        (1, 0, 0, 1): (0, 0),
        (1, 0, 0, -1): (0, h),
        (-1, 0, 0, 1): (w, 0),
        (-1, 0, 0, -1): (w, h),
        (0, -1, 1, 0): (h, 0),
        (0, 1, -1, 0): (0, w),
        (0, 1, 1, 0): (0, 0),
        (0, -1, -1, 0): (h, w),
    }
    return table.get(linear)


def snap_linear(transform: AffineTransform) -> Optional[Linear]:
    """Parte linear canônica (componentes em {-1, 0, 1}) ou None"""
    snapped = []
    for value in transform.linear:
        nearest = round(value)
        if nearest not in (-1, 0, 1) or abs(value - nearest) > ORIENTATION_EPSILON:
            return None
        snapped.append(int(nearest))
    return tuple(snapped)


def classify(transform: AffineTransform) -> OrientationInfo:
    """Orientação e retrato/paisagem; casos não canônicos caem em UP"""
    linear = snap_linear(transform)
    info = _CLASSIFICATION.get(linear) if linear else None
    if info is None:
        logger.debug("Transformação não canônica %s, assumindo 'up'", transform.linear)
        return OrientationInfo(Orientation.UP, False)
    return info


def fixed_transform(raw: AffineTransform, natural_size: Size) -> AffineTransform:
    """Transformação com translação corrigida para os oito casos canônicos"""
    linear = snap_linear(raw)
    translation = _fixed_translation(linear, natural_size) if linear else None
    if translation is None:
        logger.warning(
            "Transformação %s fora dos casos canônicos; translação mantida",
            raw.linear,
        )
        return raw
    a, b, c, d = linear
    return AffineTransform(a, b, c, d, *translation)

# -*- coding: utf-8 -*-
"""
Modelos geométricos: tamanhos, retângulos e transformações afins 2-D.

Convenção: espaço de pixels com y para baixo; um ponto (x, y) é mapeado por

    x' = a*x + b*y + tx
    y' = c*x + d*y + ty
"""

from __future__ import annotations
import math
from dataclasses import dataclass
from typing import Iterable, Tuple


@dataclass(frozen=True)
class Size:
    """Largura e altura em pixels"""

    width: float
    height: float

    @property
    def is_landscape(self) -> bool:
        return self.width > self.height


@dataclass(frozen=True)
class Rect:
    """Retângulo com origem no canto superior esquerdo"""

    x: float
    y: float
    width: float
    height: float

    def scaled(self, sx: float, sy: float) -> Rect:
        return Rect(self.x * sx, self.y * sy, self.width * sx, self.height * sy)


@dataclass(frozen=True)
class AffineTransform:
    """Transformação afim 2-D (parte linear a, b, c, d + translação tx, ty)"""

    a: float = 1.0
    b: float = 0.0
    c: float = 0.0
    d: float = 1.0
    tx: float = 0.0
    ty: float = 0.0

    @classmethod
    def identity(cls) -> AffineTransform:
        return cls()

    @classmethod
    def scale(cls, sx: float, sy: float) -> AffineTransform:
        return cls(a=sx, d=sy)

    @classmethod
    def translation(cls, tx: float, ty: float) -> AffineTransform:
        return cls(tx=tx, ty=ty)

    @classmethod
    def rotation(cls, degrees: float) -> AffineTransform:
        """Rotação horária na tela (y para baixo); múltiplos de 90° são exatos"""
        turns = degrees % 360
        exact = {
            0: (1, 0, 0, 1),
            90: (0, -1, 1, 0),
            180: (-1, 0, 0, -1),
            270: (0, 1, -1, 0),
        }
        if turns in exact:
            return cls(*exact[turns])
        radians = math.radians(turns)
        cos, sin = math.cos(radians), math.sin(radians)
        return cls(a=cos, b=-sin, c=sin, d=cos)

    @property
    def linear(self) -> Tuple[float, float, float, float]:
        return (self.a, self.b, self.c, self.d)

    def with_translation(self, tx: float, ty: float) -> AffineTransform:
        return AffineTransform(self.a, self.b, self.c, self.d, tx, ty)

    def apply(self, x: float, y: float) -> Tuple[float, float]:
        """Mapeia um ponto"""
        return (
            self.a * x + self.b * y + self.tx,
            self.c * x + self.d * y + self.ty,
        )

    def concat(self, other: AffineTransform) -> AffineTransform:
        """Aplica self e depois other"""
        return AffineTransform(
            a=other.a * self.a + other.b * self.c,
            b=other.a * self.b + other.b * self.d,
            c=other.c * self.a + other.d * self.c,
            d=other.c * self.b + other.d * self.d,
            tx=other.a * self.tx + other.b * self.ty + other.tx,
            ty=other.c * self.tx + other.d * self.ty + other.ty,
        )

    def corners(self, size: Size) -> Iterable[Tuple[float, float]]:
        """Cantos do quadro (0, 0, w, h) após a transformação"""
        w, h = size.width, size.height
        return [self.apply(x, y) for x, y in ((0, 0), (w, 0), (0, h), (w, h))]

    def bounding_box(self, size: Size) -> Rect:
        """Retângulo envolvente do quadro de origem transformado"""
        points = list(self.corners(size))
        xs = [p[0] for p in points]
        ys = [p[1] for p in points]
        return Rect(min(xs), min(ys), max(xs) - min(xs), max(ys) - min(ys))

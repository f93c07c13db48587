# -*- coding: utf-8 -*-
"""
Filtros de ajuste de cor
"""

from ....infra.plugins import effect
from ....domain.models.effects import Effect, FilterContext, FilterSnippet


@effect(
    name="color_clamp",
    params={"min": 0.0, "max": 0.9},
    description="Limita cada canal RGB ao intervalo [min, max] (0-1)",
)
class ColorClamp(Effect):
    def build_filter(self, ctx: FilterContext) -> FilterSnippet:
        low = round(float(ctx.params.get("min", 0.0)) * 255)
        high = round(float(ctx.params.get("max", 0.9)) * 255)
        expr = f"'clip(val,{low},{high})'"
        return FilterSnippet(f"lutrgb=r={expr}:g={expr}:b={expr}")


@effect(
    name="color_invert",
    description="Inverte as cores",
)
class ColorInvert(Effect):
    def build_filter(self, ctx: FilterContext) -> FilterSnippet:
        return FilterSnippet("negate")


@effect(
    name="color_monochrome",
    params={"color": (0.6, 0.45, 0.3)},
    description="Monocromático tingido com a cor informada (RGB 0-1)",
)
class ColorMonochrome(Effect):
    LUMA = (0.299, 0.587, 0.114)

    def build_filter(self, ctx: FilterContext) -> FilterSnippet:
        tint = ctx.params.get("color", (0.6, 0.45, 0.3))
        coefficients = []
        for channel in tint:
            coefficients.extend(f"{float(channel) * w:.3f}" for w in self.LUMA)
            coefficients.append("0")
        return FilterSnippet("colorchannelmixer=" + ":".join(coefficients))


@effect(
    name="color_posterize",
    params={"levels": 6},
    description="Reduz cada canal a N níveis",
)
class ColorPosterize(Effect):
    def build_filter(self, ctx: FilterContext) -> FilterSnippet:
        levels = max(2, int(ctx.params.get("levels", 6)))
        step = 256 / levels
        expr = f"'floor(val/{step:.4f})*{step:.4f}'"
        return FilterSnippet(f"lutrgb=r={expr}:g={expr}:b={expr}")

# -*- coding: utf-8 -*-
"""
Filtros de nitidez e iluminação
"""

from ....infra.plugins import effect
from ....domain.models.effects import Effect, FilterContext, FilterSnippet


@effect(
    name="sharpen_luminance",
    params={"amount": 1.0},
    description="Aumenta a nitidez apenas na luminância",
)
class SharpenLuminance(Effect):
    def build_filter(self, ctx: FilterContext) -> FilterSnippet:
        amount = float(ctx.params.get("amount", 1.0))
        # Crominância com intensidade 0: só o canal de luma é afetado
        return FilterSnippet(f"unsharp=5:5:{amount}:5:5:0.0")


@effect(
    name="spot_light",
    description="Foco de luz central com bordas escurecidas",
)
class SpotLight(Effect):
    def build_filter(self, ctx: FilterContext) -> FilterSnippet:
        return FilterSnippet("vignette=angle=PI/4")

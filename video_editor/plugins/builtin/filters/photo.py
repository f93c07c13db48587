# -*- coding: utf-8 -*-
"""
Filtros de "efeito fotográfico" (looks de cor prontos)
"""

from ....infra.plugins import effect
from ....domain.models.effects import Effect, FilterContext, FilterSnippet


@effect(
    name="photo_effect_chrome",
    description="Cores saturadas e contraste alto, estilo filme cromado",
)
class PhotoEffectChrome(Effect):
    def build_filter(self, ctx: FilterContext) -> FilterSnippet:
        return FilterSnippet("eq=contrast=1.15:saturation=1.35")


@effect(
    name="photo_effect_fade",
    description="Cores desbotadas com pretos levantados",
)
class PhotoEffectFade(Effect):
    def build_filter(self, ctx: FilterContext) -> FilterSnippet:
        return FilterSnippet("eq=contrast=0.85:brightness=0.05:saturation=0.6")


@effect(
    name="photo_effect_instant",
    description="Look de câmera instantânea: quente e levemente desbotado",
)
class PhotoEffectInstant(Effect):
    def build_filter(self, ctx: FilterContext) -> FilterSnippet:
        return FilterSnippet("colorbalance=rs=0.1:bs=-0.1,eq=saturation=0.8")


@effect(
    name="photo_effect_noir",
    description="Preto e branco de alto contraste",
)
class PhotoEffectNoir(Effect):
    def build_filter(self, ctx: FilterContext) -> FilterSnippet:
        return FilterSnippet("hue=s=0,eq=contrast=1.4")


@effect(
    name="photo_effect_process",
    description="Processamento cruzado: sombras azuladas",
)
class PhotoEffectProcess(Effect):
    def build_filter(self, ctx: FilterContext) -> FilterSnippet:
        return FilterSnippet("colorbalance=bs=0.2:rm=-0.1,eq=contrast=1.1")


@effect(
    name="photo_effect_tonal",
    description="Preto e branco de contraste suave",
)
class PhotoEffectTonal(Effect):
    def build_filter(self, ctx: FilterContext) -> FilterSnippet:
        return FilterSnippet("hue=s=0")


@effect(
    name="photo_effect_transfer",
    description="Look vintage quente",
)
class PhotoEffectTransfer(Effect):
    def build_filter(self, ctx: FilterContext) -> FilterSnippet:
        return FilterSnippet("colorbalance=rs=0.15:gs=0.05:bs=-0.15")


@effect(
    name="sepia_tone",
    params={"intensity": 1.0},
    description="Tom sépia com intensidade ajustável (0-1)",
)
class SepiaTone(Effect):
    # Matriz sépia clássica
    SEPIA = (
        (0.393, 0.769, 0.189),
        (0.349, 0.686, 0.168),
        (0.272, 0.534, 0.131),
    )

    def build_filter(self, ctx: FilterContext) -> FilterSnippet:
        intensity = float(ctx.params.get("intensity", 1.0))
        coefficients = []
        for row_index, row in enumerate(self.SEPIA):
            for col_index, value in enumerate(row):
                identity = 1.0 if row_index == col_index else 0.0
                mixed = identity + (value - identity) * intensity
                coefficients.append(f"{mixed:.3f}")
            coefficients.append("0")
        # rr:rg:rb:ra:gr:gg:gb:ga:br:bg:bb:ba
        return FilterSnippet("colorchannelmixer=" + ":".join(coefficients))

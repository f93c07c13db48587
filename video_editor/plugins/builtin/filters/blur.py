# -*- coding: utf-8 -*-
"""
Filtros de desfoque e redução de ruído
"""

from ....infra.plugins import effect
from ....domain.models.effects import Effect, FilterContext, FilterSnippet


@effect(
    name="box_blur",
    params={"radius": 10},
    description="Desfoque de caixa",
)
class BoxBlur(Effect):
    def build_filter(self, ctx: FilterContext) -> FilterSnippet:
        radius = int(ctx.params.get("radius", 10))
        return FilterSnippet(f"boxblur=luma_radius={radius}:luma_power=1")


@effect(
    name="disc_blur",
    params={"radius": 8},
    description="Desfoque de média em área",
)
class DiscBlur(Effect):
    def build_filter(self, ctx: FilterContext) -> FilterSnippet:
        radius = int(ctx.params.get("radius", 8))
        return FilterSnippet(f"avgblur=sizeX={radius}")


@effect(
    name="gaussian_blur",
    params={"sigma": 10.0},
    description="Desfoque gaussiano",
)
class GaussianBlur(Effect):
    def build_filter(self, ctx: FilterContext) -> FilterSnippet:
        sigma = float(ctx.params.get("sigma", 10.0))
        return FilterSnippet(f"gblur=sigma={sigma}")


@effect(
    name="masked_variable_blur",
    params={"sigma": 10.0},
    description="Desfoque que cresce do centro nítido para as bordas",
)
class MaskedVariableBlur(Effect):
    def build_filter(self, ctx: FilterContext) -> FilterSnippet:
        sigma = float(ctx.params.get("sigma", 10.0))
        # Peso do desfoque: distância ao centro, normalizada pela meia diagonal
        weight = "min(1,hypot(X-W/2,Y-H/2)/hypot(W/2,H/2))"
        return FilterSnippet(
            "split[mvb_sharp][mvb_soft];"
            f"[mvb_soft]gblur=sigma={sigma}[mvb_blur];"
            f"[mvb_sharp][mvb_blur]blend=all_expr='A+(B-A)*{weight}'"
        )


@effect(
    name="median_filter",
    params={"radius": 1},
    description="Filtro de mediana",
)
class MedianFilter(Effect):
    def build_filter(self, ctx: FilterContext) -> FilterSnippet:
        radius = int(ctx.params.get("radius", 1))
        return FilterSnippet(f"median=radius={radius}")


@effect(
    name="motion_blur",
    params={"radius": 20},
    description="Desfoque direcional horizontal",
)
class MotionBlur(Effect):
    def build_filter(self, ctx: FilterContext) -> FilterSnippet:
        radius = int(ctx.params.get("radius", 20))
        return FilterSnippet(f"avgblur=sizeX={radius}:sizeY=1")


@effect(
    name="noise_reduction",
    description="Redução de ruído espacial e temporal",
)
class NoiseReduction(Effect):
    def build_filter(self, ctx: FilterContext) -> FilterSnippet:
        return FilterSnippet("hqdn3d=4:3:6:4.5")

# -*- coding: utf-8 -*-
"""
Testes unitários para o registry de filtros de pixel
"""

import pytest

from video_editor.infra.plugins import canonical_name, load_builtin_filters

BUILTIN = {
    "sharpen_luminance",
    "photo_effect_chrome",
    "photo_effect_fade",
    "photo_effect_instant",
    "photo_effect_noir",
    "photo_effect_process",
    "photo_effect_tonal",
    "photo_effect_transfer",
    "sepia_tone",
    "color_clamp",
    "color_invert",
    "color_monochrome",
    "spot_light",
    "color_posterize",
    "box_blur",
    "disc_blur",
    "gaussian_blur",
    "masked_variable_blur",
    "median_filter",
    "motion_blur",
    "noise_reduction",
}

CORE_IMAGE_NAMES = [
    "CISharpenLuminance",
    "CIPhotoEffectChrome",
    "CIPhotoEffectFade",
    "CIPhotoEffectInstant",
    "CIPhotoEffectNoir",
    "CIPhotoEffectProcess",
    "CIPhotoEffectTonal",
    "CIPhotoEffectTransfer",
    "CISepiaTone",
    "CIColorClamp",
    "CIColorInvert",
    "CIColorMonochrome",
    "CISpotLight",
    "CIColorPosterize",
    "CIBoxBlur",
    "CIDiscBlur",
    "CIGaussianBlur",
    "CIMaskedVariableBlur",
    "CIMedianFilter",
    "CIMotionBlur",
    "CINoiseReduction",
]


def test_builtin_filters_registered():
    """Testa que todos os filtros embutidos estão registrados"""
    registry = load_builtin_filters()

    names = {d.name for d in registry.list_effects()}

    assert BUILTIN <= names


def test_resolve_known_filter():
    """Testa resolução de nome em expressão FFmpeg"""
    registry = load_builtin_filters()

    assert registry.resolve("color_invert") == "negate"
    assert registry.resolve("gaussian_blur") == "gblur=sigma=10.0"


def test_resolve_with_overrides():
    """Testa sobrescrita dos parâmetros padrão"""
    registry = load_builtin_filters()

    assert registry.resolve("gaussian_blur", {"sigma": 2.5}) == "gblur=sigma=2.5"


def test_resolve_unknown_filter_returns_none():
    """Testa que nomes desconhecidos não geram filtro"""
    registry = load_builtin_filters()

    assert registry.resolve("does_not_exist") is None
    assert registry.resolve("CIDoesNotExist") is None


@pytest.mark.parametrize(
    "name, expected",
    [
        ("CIPhotoEffectChrome", "photo_effect_chrome"),
        ("CISpotLight", "spot_light"),
        ("CIMaskedVariableBlur", "masked_variable_blur"),
        ("color_invert", "color_invert"),
        ("CI", "CI"),
    ],
)
def test_canonical_name(name, expected):
    assert canonical_name(name) == expected


def test_core_image_names_resolve_like_registered_names():
    """Testa que cada nome Core Image gera a mesma expressão do nome registrado"""
    registry = load_builtin_filters()

    for name in CORE_IMAGE_NAMES:
        expr = registry.resolve(name)
        assert expr
        assert expr == registry.resolve(canonical_name(name))
    assert {canonical_name(n) for n in CORE_IMAGE_NAMES} == BUILTIN


def test_every_builtin_filter_builds_expression():
    """Testa que cada filtro de cadeia simples gera uma expressão sem rótulos"""
    registry = load_builtin_filters()

    for name in BUILTIN - {"masked_variable_blur"}:
        expr = registry.resolve(name)
        assert expr
        assert "[" not in expr and ";" not in expr


def test_masked_variable_blur_blends_by_distance_to_centre():
    registry = load_builtin_filters()

    expr = registry.resolve("masked_variable_blur", {"sigma": 4.0})

    assert expr.startswith("split[mvb_sharp][mvb_soft];")
    assert "[mvb_soft]gblur=sigma=4.0[mvb_blur]" in expr
    assert "hypot(X-W/2,Y-H/2)" in expr
    # O rótulo de saída é acrescentado por quem monta o graph
    assert not expr.endswith("]")

# -*- coding: utf-8 -*-
"""
Testes unitários para a normalização de orientação
"""

import pytest

from video_editor.composition.orientation import (
    Orientation,
    classify,
    fixed_transform,
    snap_linear,
)
from video_editor.domain.models.geometry import AffineTransform, Rect, Size

SIZE = Size(1920, 1080)


@pytest.mark.parametrize(
    "linear, orientation, is_portrait",
    [
        ((1, 0, 0, 1), Orientation.UP, False),
        ((0, 1, -1, 0), Orientation.RIGHT, True),
        ((0, -1, 1, 0), Orientation.LEFT, True),
        ((-1, 0, 0, -1), Orientation.DOWN, False),
    ],
)
def test_classify_canonical(linear, orientation, is_portrait):
    """Testa os quatro casos canônicos de classificação"""
    info = classify(AffineTransform(*linear))

    assert info.orientation == orientation
    assert info.is_portrait == is_portrait


def test_classify_snaps_near_canonical_values():
    """Testa que ruído de ponto flutuante nos metadados é tolerado"""
    noisy = AffineTransform(6.1e-17, 1.0000000001, -0.9999999999, 6.1e-17)

    info = classify(noisy)

    assert info.orientation == Orientation.RIGHT
    assert info.is_portrait


def test_classify_non_canonical_falls_back_to_up():
    """Testa o fallback para 'up' em rotações arbitrárias"""
    info = classify(AffineTransform.rotation(45))

    assert info.orientation == Orientation.UP
    assert not info.is_portrait


def test_snap_linear_rejects_scaled_matrix():
    """Testa que matrizes com escala não são canônicas"""
    assert snap_linear(AffineTransform.scale(2, 2)) is None


def test_fixed_transform_right_translation():
    """Testa a translação (0, W) para o caso (0, 1, -1, 0)"""
    fixed = fixed_transform(AffineTransform(0, 1, -1, 0, 55, 77), SIZE)

    assert (fixed.tx, fixed.ty) == (0, 1920)


@pytest.mark.parametrize(
    "linear, swapped",
    [
        ((1, 0, 0, 1), False),
        ((1, 0, 0, -1), False),
        ((-1, 0, 0, 1), False),
        ((-1, 0, 0, -1), False),
        ((0, -1, 1, 0), True),
        ((0, 1, -1, 0), True),
        ((0, 1, 1, 0), True),
        ((0, -1, -1, 0), True),
    ],
)
def test_fixed_transform_moves_content_to_origin(linear, swapped):
    """Testa que o conteúdo orientado começa em (0, 0) nos oito casos"""
    fixed = fixed_transform(AffineTransform(*linear, tx=-3, ty=9), SIZE)

    box = fixed.bounding_box(SIZE)

    if swapped:
        assert box == Rect(0, 0, 1080, 1920)
    else:
        assert box == Rect(0, 0, 1920, 1080)


def test_fixed_transform_keeps_non_canonical_translation():
    """Testa que casos fora da tabela mantêm a translação recebida"""
    raw = AffineTransform.rotation(30).with_translation(12, 34)

    assert fixed_transform(raw, SIZE) == raw

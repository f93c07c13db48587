# -*- coding: utf-8 -*-
"""
Modelos de efeitos (filtros de pixel) para o domínio
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Mapping, Protocol


@dataclass(frozen=True)
class EffectDescriptor:
    """Descritor de um filtro de pixel disponível no sistema"""

    name: str
    description: str = ""
    params: Mapping[str, Any] = None  # valores padrão dos parâmetros


class FilterContext:
    """Contexto para construção de filtros FFmpeg"""

    def __init__(self, **kwargs):
        self.params = kwargs


class FilterSnippet:
    """Fragmento de filtro FFmpeg, inserido entre o rótulo de entrada e o de saída"""

    def __init__(self, filter_expr: str):
        self.filter_expr = filter_expr


class Effect(Protocol):
    """Interface para implementação de filtros de pixel"""

    def build_filter(self, ctx: FilterContext) -> FilterSnippet:
        """Constrói o filtro FFmpeg aplicado a cada quadro"""
        ...

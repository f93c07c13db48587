# -*- coding: utf-8 -*-
"""
Plugin system for pixel filters
"""

import re
from typing import Any, Dict, List, Mapping, Optional, Type

from ..domain.models.effects import Effect, EffectDescriptor, FilterContext

# Nomes no formato Core Image: "CIPhotoEffectChrome" -> "photo_effect_chrome"
_CORE_IMAGE_NAME = re.compile(r"^CI([A-Z][A-Za-z]*)$")
_WORD_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def canonical_name(name: str) -> str:
    """Converte nomes Core Image para o nome registrado; demais passam direto"""
    match = _CORE_IMAGE_NAME.match(name)
    if match is None:
        return name
    return _WORD_BOUNDARY.sub("_", match.group(1)).lower()


class PluginRegistry:
    """Registry para plugins de filtros de pixel"""

    def __init__(self):
        self._effects: Dict[str, Type[Effect]] = {}
        self._descriptors: Dict[str, EffectDescriptor] = {}

    def register_effect(self, descriptor: EffectDescriptor, effect_class: Type[Effect]):
        """Registra um novo filtro"""
        self._effects[descriptor.name] = effect_class
        self._descriptors[descriptor.name] = descriptor

    def get_effect(self, name: str) -> Type[Effect] | None:
        """Obtém uma classe de filtro pelo nome (aceita o formato Core Image)"""
        return self._effects.get(canonical_name(name))

    def list_effects(self) -> List[EffectDescriptor]:
        """Lista todos os filtros registrados"""
        return sorted(self._descriptors.values(), key=lambda d: d.name)

    def resolve(
        self, name: str, overrides: Optional[Mapping[str, Any]] = None
    ) -> Optional[str]:
        """Resolve o nome em uma expressão de filtro FFmpeg (None se desconhecido)"""
        effect_class = self.get_effect(name)
        if effect_class is None:
            return None
        descriptor = self._descriptors[canonical_name(name)]
        params = dict(descriptor.params or {})
        params.update(overrides or {})
        snippet = effect_class().build_filter(FilterContext(**params))
        return snippet.filter_expr


# Instância global do registry
plugin_registry = PluginRegistry()


def effect(name: str, params: Optional[Dict[str, Any]] = None, description: str = ""):
    """Decorator para registrar filtros"""

    def decorator(effect_class: Type[Effect]):
        descriptor = EffectDescriptor(
            name=name, description=description, params=params or {}
        )
        plugin_registry.register_effect(descriptor, effect_class)
        return effect_class

    return decorator


def load_builtin_filters() -> PluginRegistry:
    """Importa os filtros embutidos (registrados via decorator)"""
    from ..plugins.builtin.filters import blur, color, photo, stylize  # noqa: F401

    return plugin_registry

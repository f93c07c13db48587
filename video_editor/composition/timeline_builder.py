# -*- coding: utf-8 -*-
"""
Construção da timeline a partir de uma ou mais fontes.

Estratégias:
- serial: clipes um após o outro; cada um ganha uma transição de saída
  (rampa de 1s ou corte seco) no seu tempo final.
- simultaneous: o primeiro clipe começa em 0 e os demais em um deslocamento
  fixo; todos menos o último viram picture-in-picture.

Falhas de inserção por fonte são registradas e a fonte é ignorada; a timeline
continua com as demais.
"""

from dataclasses import replace
from typing import List, Optional, Sequence, Tuple

from ..domain.errors import InsertionError, MissingResourceError, MissingTrackError
from ..domain.models.geometry import AffineTransform, Size
from ..domain.models.media import MediaSource, RenderTarget
from ..domain.models.timeline import (
    Composition,
    CompositionInstruction,
    LayerInstruction,
    MergeStrategy,
    OpacityCut,
    OpacityEvent,
    OpacityRamp,
    TimeRange,
    TimelineEntry,
)
from ..infra.logging import get_logger
from ..infra.settings import AppSettings
from .layer_instructions import LayerInstructionFactory


def preset_for(source: MediaSource, settings: AppSettings) -> Size:
    """Preset paisagem se a fonte é mais larga que alta, senão retrato"""
    if source.natural_size.is_landscape:
        return Size(*settings.landscape_size)
    return Size(*settings.portrait_size)


def render_target_for(
    sources: Sequence[MediaSource],
    strategy: MergeStrategy,
    settings: AppSettings,
) -> RenderTarget:
    """Alvo de renderização pela fonte dominante.

    Serial: a fonte de vídeo mais longa (empate: a primeira).
    Simultâneo: a última fonte, que ocupa o quadro inteiro.
    """
    candidates = [s for s in sources if s.has_video] or list(sources)
    if not candidates:
        raise ValueError("Nenhuma fonte informada")
    if strategy == MergeStrategy.SIMULTANEOUS:
        dominant = candidates[-1]
    else:
        dominant = max(candidates, key=lambda s: s.duration)
    size = preset_for(dominant, settings)
    return RenderTarget(int(size.width), int(size.height), settings.frame_rate)


class TimelineBuilder:
    """Sequencia fontes em uma composição e gera as instruções de camada"""

    def __init__(
        self,
        settings: AppSettings,
        layer_factory: Optional[LayerInstructionFactory] = None,
    ):
        self.settings = settings
        self.layer_factory = layer_factory or LayerInstructionFactory()
        self.logger = get_logger("TimelineBuilder")

    def build(
        self,
        sources: Sequence[MediaSource],
        strategy: MergeStrategy = MergeStrategy.SERIAL,
        animation: bool = True,
        render_target: Optional[RenderTarget] = None,
        silence: Optional[MediaSource] = None,
        fit_to_render_target: bool = False,
    ) -> Composition:
        """Monta a composição; levanta MissingTrackError se nenhuma fonte entrar.

        No modo serial cada camada é ajustada ao preset da própria fonte, ou ao
        alvo de renderização quando `fit_to_render_target` é verdadeiro.
        """
        if not sources:
            raise ValueError("Nenhuma fonte informada")

        strategy = MergeStrategy(strategy)
        render_target = render_target or render_target_for(
            sources, strategy, self.settings
        )
        composition = Composition(strategy=strategy, render_target=render_target)
        composition.begin()

        self.logger.info(
            "Construindo timeline %s com %d fontes (animação=%s, alvo=%dx%d)",
            strategy.value,
            len(sources),
            animation,
            render_target.width,
            render_target.height,
        )

        if strategy == MergeStrategy.SERIAL:
            placed, total = self._place_serial(composition, sources, silence)
        else:
            placed, total = self._place_simultaneous(composition, sources, silence)

        if not placed:
            raise MissingTrackError("Nenhuma fonte pôde ser adicionada à timeline")

        if strategy == MergeStrategy.SERIAL:
            layer_size = render_target.size if fit_to_render_target else None
            layers = self._serial_layers(placed, animation, total, layer_size)
        else:
            layers = self._simultaneous_layers(
                placed, animation, total, render_target.size
            )

        composition.finalize(
            CompositionInstruction(
                time_range=TimeRange(0.0, total), layers=tuple(layers)
            )
        )
        self.logger.info(
            "Timeline finalizada: %d de %d fontes, duração %.3fs",
            len(placed),
            len(sources),
            total,
        )
        return composition

    # ------------------------------------------------------------------
    # Posicionamento
    # ------------------------------------------------------------------

    def _place_serial(
        self,
        composition: Composition,
        sources: Sequence[MediaSource],
        silence: Optional[MediaSource],
    ) -> Tuple[List[TimelineEntry], float]:
        insert_time = 0.0
        placed = []
        for index, source in enumerate(sources):
            entry = self._place(composition, index, source, insert_time, silence)
            if entry is None:
                continue
            placed.append(entry)
            insert_time += entry.duration
        return placed, insert_time

    def _place_simultaneous(
        self,
        composition: Composition,
        sources: Sequence[MediaSource],
        silence: Optional[MediaSource],
    ) -> Tuple[List[TimelineEntry], float]:
        total = 0.0
        placed = []
        for index, source in enumerate(sources):
            start = 0.0 if index == 0 else self.settings.simultaneous_offset
            entry = self._place(composition, index, source, start, silence)
            if entry is None:
                continue
            placed.append(entry)
            # Mesma soma acumulada do modo serial
            total += entry.duration
        return placed, total

    def _place(
        self,
        composition: Composition,
        index: int,
        source: MediaSource,
        at: float,
        silence: Optional[MediaSource],
    ) -> Optional[TimelineEntry]:
        """Insere vídeo + áudio da fonte; None se a fonte foi ignorada"""
        if not source.has_video:
            self.logger.warning(
                "Fonte %d (%s) sem track de vídeo, ignorada", index, source.path
            )
            return None

        if source.has_audio:
            audio_source, loop = source, False
        elif silence is not None:
            audio_source, loop = silence, True
        else:
            raise MissingResourceError("Áudio de silêncio necessário e não carregado")

        try:
            video_entry = composition.video.insert(source, at, source.duration)
            try:
                composition.audio.insert(audio_source, at, source.duration, loop=loop)
            except InsertionError:
                composition.video.remove(video_entry)
                raise
        except InsertionError as e:
            self.logger.warning(
                "Erro ao inserir fonte %d (%s) em %.3fs: %s", index, source.path, at, e
            )
            return None

        self.logger.debug(
            "Fonte %d inserida em %.3fs por %.3fs (áudio: %s)",
            index,
            at,
            source.duration,
            "silêncio" if loop else "próprio",
        )
        return video_entry

    # ------------------------------------------------------------------
    # Instruções de camada
    # ------------------------------------------------------------------

    def _serial_layers(
        self,
        placed: List[TimelineEntry],
        animation: bool,
        total: float,
        layer_size: Optional[Size] = None,
    ) -> List[LayerInstruction]:
        layers = []
        for entry in placed:
            target = layer_size or preset_for(entry.source, self.settings)
            instruction = self.layer_factory.build(entry, target)

            # Esconde a track antes de passar para a próxima
            end_time = entry.end_time
            if animation:
                transition: OpacityEvent = self._ramp(end_time, 1.0, 0.0, total)
            else:
                transition = OpacityCut(at=end_time, opacity=0.0)
            layers.append(replace(instruction, opacity=(transition,)))
        return layers

    def _simultaneous_layers(
        self,
        placed: List[TimelineEntry],
        animation: bool,
        total: float,
        full_size: Size,
    ) -> List[LayerInstruction]:
        layers = []
        last = len(placed) - 1
        for position, entry in enumerate(placed):
            if position == last:
                layers.append(self.layer_factory.build(entry, full_size))
                continue

            instruction = self._picture_in_picture(entry)
            if animation:
                fade_in = self._ramp(entry.insert_time, 0.0, 1.0, total)
                fade_out = self._ramp(self.settings.pip_fade_out_at, 1.0, 0.0, total)
                instruction = replace(instruction, opacity=(fade_in, fade_out))
            layers.append(instruction)
        return layers

    def _picture_in_picture(self, entry: TimelineEntry) -> LayerInstruction:
        """Posicionamento reduzido com deslocamento horizontal fixo"""
        pip_w, pip_h = self.settings.pip_size
        if not entry.source.natural_size.is_landscape:
            pip_w, pip_h = pip_h, pip_w
        instruction = self.layer_factory.build(entry, Size(pip_w, pip_h))
        offset = AffineTransform.translation(self.settings.pip_offset_x, 0)
        return replace(instruction, transform=instruction.transform.concat(offset))

    def _ramp(
        self, start: float, from_opacity: float, to_opacity: float, total: float
    ) -> OpacityRamp:
        """Rampa de duração fixa, deslocada para terminar dentro da timeline"""
        duration = self.settings.transition_duration
        if start + duration > total:
            start = max(0.0, total - duration)
        end = min(start + duration, total)
        return OpacityRamp(start, end, from_opacity, to_opacity)

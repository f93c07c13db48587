# -*- coding: utf-8 -*-
"""
Modelos de domínio para timeline, tracks, instruções de camada e composição
"""

from __future__ import annotations
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Literal, Optional, Tuple, Union

from ..errors import InsertionError
from .geometry import AffineTransform
from .media import MediaSource, RenderTarget

# Tolerância de tempo (segundos) nas comparações de inserção
TIME_TOLERANCE = 1e-3


class MergeStrategy(str, Enum):
    """Estratégia de combinação de várias fontes"""

    SERIAL = "serial"
    SIMULTANEOUS = "simultaneous"


class BuildState(str, Enum):
    NOT_STARTED = "not_started"
    PLACING = "placing"
    FINALIZED = "finalized"


@dataclass(frozen=True)
class TimeRange:
    start: float
    duration: float

    @property
    def end(self) -> float:
        return self.start + self.duration


@dataclass(frozen=True)
class TimelineEntry:
    """Trecho de uma fonte posicionado na timeline"""

    id: str
    source: MediaSource
    kind: Literal["video", "audio"]
    insert_time: float
    duration: float
    loop: bool = False  # repete a fonte até cobrir a duração (silêncio)

    @property
    def end_time(self) -> float:
        return self.insert_time + self.duration


@dataclass
class TimelineTrack:
    """Sequência ordenada de trechos de um mesmo tipo de mídia"""

    kind: Literal["video", "audio"]
    strategy: MergeStrategy = MergeStrategy.SERIAL
    entries: List[TimelineEntry] = field(default_factory=list)

    @property
    def end_time(self) -> float:
        return self.entries[-1].end_time if self.entries else 0.0

    def insert(
        self,
        source: MediaSource,
        at: float,
        duration: float,
        loop: bool = False,
    ) -> TimelineEntry:
        """Insere a fonte em `at` por `duration` segundos"""
        has_stream = source.has_video if self.kind == "video" else source.has_audio
        if not has_stream:
            raise InsertionError(
                f"Fonte sem stream de {self.kind}", str(source.path)
            )
        if not math.isfinite(duration) or duration <= 0:
            raise InsertionError(f"Duração inválida: {duration}", str(source.path))
        if at < 0:
            raise InsertionError(f"Tempo de inserção negativo: {at}", str(source.path))
        if not loop and duration > source.duration + TIME_TOLERANCE:
            raise InsertionError(
                f"Duração {duration:.3f}s excede a fonte ({source.duration:.3f}s)",
                str(source.path),
            )

        if self.entries:
            last = self.entries[-1]
            if at < last.insert_time - TIME_TOLERANCE:
                raise InsertionError(
                    f"Inserção fora de ordem em {at:.3f}s (último em {last.insert_time:.3f}s)",
                    str(source.path),
                )
            if (
                self.strategy == MergeStrategy.SERIAL
                and abs(at - last.end_time) > TIME_TOLERANCE
            ):
                raise InsertionError(
                    f"Track serial exige inserção contígua em {last.end_time:.3f}s, recebeu {at:.3f}s",
                    str(source.path),
                )
        elif self.strategy == MergeStrategy.SERIAL and abs(at) > TIME_TOLERANCE:
            raise InsertionError(
                f"Track serial deve começar em 0s, recebeu {at:.3f}s", str(source.path)
            )

        entry = TimelineEntry(
            id=f"{self.kind}{len(self.entries)}",
            source=source,
            kind=self.kind,
            insert_time=at,
            duration=duration,
            loop=loop,
        )
        self.entries.append(entry)
        return entry

    def remove(self, entry: TimelineEntry) -> None:
        self.entries.remove(entry)

    def find(self, entry_id: str) -> Optional[TimelineEntry]:
        for entry in self.entries:
            if entry.id == entry_id:
                return entry
        return None


@dataclass(frozen=True)
class OpacityRamp:
    """Rampa linear de opacidade entre start e end"""

    start: float
    end: float
    from_opacity: float
    to_opacity: float

    @property
    def duration(self) -> float:
        return self.end - self.start

    def value_at(self, t: float) -> float:
        if t <= self.start:
            return self.from_opacity
        if t >= self.end:
            return self.to_opacity
        progress = (t - self.start) / self.duration
        return self.from_opacity + (self.to_opacity - self.from_opacity) * progress


@dataclass(frozen=True)
class OpacityCut:
    """Mudança instantânea de opacidade em `at`"""

    at: float
    opacity: float

    @property
    def start(self) -> float:
        return self.at


OpacityEvent = Union[OpacityRamp, OpacityCut]


@dataclass(frozen=True)
class LayerInstruction:
    """Transformação de posicionamento + programa de opacidade de uma track"""

    track_id: str
    transform: AffineTransform
    opacity: Tuple[OpacityEvent, ...] = ()

    def opacity_at(self, t: float) -> float:
        """Opacidade da camada no instante t"""
        events = sorted(self.opacity, key=lambda e: e.start)
        if not events:
            return 1.0
        first = events[0]
        value = first.from_opacity if isinstance(first, OpacityRamp) else 1.0
        for event in events:
            if t < event.start:
                break
            if isinstance(event, OpacityRamp):
                value = event.value_at(t)
            else:
                value = event.opacity
        return value


@dataclass(frozen=True)
class CompositionInstruction:
    """Intervalo de tempo + instruções de camada (a primeira fica no topo)"""

    time_range: TimeRange
    layers: Tuple[LayerInstruction, ...] = ()


@dataclass
class Composition:
    """Timeline montada: tracks de vídeo/áudio e instrução de composição"""

    strategy: MergeStrategy
    render_target: RenderTarget
    video: TimelineTrack = None
    audio: TimelineTrack = None
    instruction: Optional[CompositionInstruction] = None
    state: BuildState = BuildState.NOT_STARTED

    def __post_init__(self):
        if self.video is None:
            self.video = TimelineTrack("video", self.strategy)
        if self.audio is None:
            self.audio = TimelineTrack("audio", self.strategy)

    @property
    def duration(self) -> float:
        if self.instruction is not None:
            return self.instruction.time_range.duration
        return self.video.end_time

    def begin(self) -> None:
        if self.state != BuildState.NOT_STARTED:
            raise RuntimeError(f"Composição já iniciada (estado: {self.state.value})")
        self.state = BuildState.PLACING

    def finalize(self, instruction: CompositionInstruction) -> None:
        if self.state == BuildState.FINALIZED:
            raise RuntimeError("Composição já finalizada")
        self.instruction = instruction
        self.state = BuildState.FINALIZED

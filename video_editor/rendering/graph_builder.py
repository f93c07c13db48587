# -*- coding: utf-8 -*-
"""
Construção de filtergraph FFmpeg a partir de jobs de exportação.

O filtergraph é o compositor de quadros: para cada quadro de saída ele
posiciona cada camada de vídeo (orientação, escala, deslocamento), avalia a
opacidade da camada e das camadas de texto e desenha o texto antes do encoder.
"""

import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple

from ..domain.models.export import ExportJob
from ..domain.models.geometry import AffineTransform
from ..domain.models.media import MediaSource
from ..domain.models.overlay import LayerTree, OpacityAnimation, TextLayer
from ..domain.models.timeline import (
    TIME_TOLERANCE,
    Composition,
    LayerInstruction,
    MergeStrategy,
    OpacityCut,
    OpacityRamp,
    TimelineEntry,
)
from ..infra.logging import get_logger

AUDIO_FORMAT = "aformat=sample_rates=44100:channel_layouts=stereo"

# Tolerância para decidir se um componente da matriz é zero
_AXIS_EPSILON = 1e-9


@dataclass(frozen=True)
class InputSpec:
    """Um `-i` do comando, com as opções que o precedem"""

    path: str
    options: Tuple[str, ...] = ()


@dataclass
class FilterGraph:
    """Representa um filtergraph FFmpeg"""

    inputs: List[InputSpec] = field(default_factory=list)
    filters: List[str] = field(default_factory=list)
    video_label: Optional[str] = None
    audio_label: Optional[str] = None

    def add_input(self, path, *options: str) -> int:
        """Adiciona um input ao comando e retorna seu índice"""
        self.inputs.append(InputSpec(str(path), tuple(options)))
        return len(self.inputs) - 1

    def add_filter(self, filter_expr: str):
        """Adiciona um filtro ao graph"""
        self.filters.append(filter_expr)

    def to_string(self) -> str:
        """Converte o filtergraph para string FFmpeg"""
        return ";".join(self.filters)


def escape_drawtext(text: str) -> str:
    """Escapa texto para drawtext (nível da opção + nível do filtergraph)"""
    option_level = (
        text.replace("\\", "\\\\")
        .replace("'", "\\'")
        .replace(":", "\\:")
        .replace("%", "\\%")
    )
    graph_level = []
    for char in option_level:
        if char in "\\'[],;":
            graph_level.append("\\" + char)
        else:
            graph_level.append(char)
    return "".join(graph_level)


def ffmpeg_color(color: str) -> str:
    """'#RRGGBB' -> '0xRRGGBB'; nomes de cor passam direto"""
    if color.startswith("#"):
        return "0x" + color[1:]
    return color


def orientation_filters(transform: AffineTransform) -> List[str]:
    """Filtros que reproduzem a parte linear (sem escala) da transformação"""
    a, b, c, d = transform.linear
    if abs(b) < _AXIS_EPSILON and abs(c) < _AXIS_EPSILON:
        ops = []
        if a < 0:
            ops.append("hflip")
        if d < 0:
            ops.append("vflip")
        return ops
    if abs(a) < _AXIS_EPSILON and abs(d) < _AXIS_EPSILON:
        # Eixos trocados: x' depende de y e y' de x
        transpose = {
            (False, True): "transpose=clock",
            (True, False): "transpose=cclock",
            (True, True): "transpose=cclock_flip",
            (False, False): "transpose=clock_flip",
        }
        return [transpose[(b > 0, c > 0)]]
    # Rotação arbitrária (fonte não canônica)
    angle = math.atan2(c, a)
    return [f"rotate=a={angle:.6f}:ow=rotw({angle:.6f}):oh=roth({angle:.6f}):c=none"]


def alpha_expression(layer: TextLayer) -> str:
    """Expressão FFmpeg equivalente a TextLayer.opacity_at(t)"""
    expr = f"{layer.initial_opacity:g}"
    for animation in layer.animations:
        expr = f"if(gte(t,{animation.begin:g}),{_animation_expression(animation)},{expr})"
    return f"clip({expr},0,1)"


def _animation_expression(animation: OpacityAnimation) -> str:
    end = animation.begin + animation.duration
    delta = animation.to_value - animation.from_value
    ramp = (
        f"{animation.from_value:g}+({delta:g})*(t-{animation.begin:g})/{animation.duration:g}"
    )
    return f"if(gte(t,{end:g}),{animation.to_value:g},{ramp})"


class GraphBuilder:
    """Constrói filtergraph a partir de um ExportJob"""

    def __init__(self, font_file: Optional[str] = None):
        self.font_file = font_file
        self.logger = get_logger("GraphBuilder")

    def build(self, job: ExportJob) -> FilterGraph:
        if job.is_composition:
            graph = self._build_composition(job)
        else:
            graph = self._build_source(job)
        self.logger.debug("Filtergraph construído: %s", graph.to_string())
        return graph

    # ------------------------------------------------------------------
    # Fonte única (corte / filtro de pixel)
    # ------------------------------------------------------------------

    def _build_source(self, job: ExportJob) -> FilterGraph:
        source: MediaSource = job.asset
        graph = FilterGraph()
        options = ()
        if job.trim_range is not None:
            options = ("-ss", f"{job.trim_range.start:.3f}")
        graph.add_input(source.path, *options)

        if job.pixel_filter:
            graph.add_filter(f"[0:v]{job.pixel_filter}[vout]")
            graph.video_label = "[vout]"
        if job.layer_tree is not None:
            base = graph.video_label or "[0:v]"
            graph.video_label = self._add_text_layers(graph, base, job.layer_tree)
        return graph

    # ------------------------------------------------------------------
    # Composição
    # ------------------------------------------------------------------

    def _build_composition(self, job: ExportJob) -> FilterGraph:
        composition: Composition = job.asset
        instruction = composition.instruction
        if instruction is None:
            raise ValueError("Composição não finalizada")

        target = composition.render_target
        total = instruction.time_range.duration
        graph = FilterGraph()

        self.logger.info(
            "Construindo filtergraph: %d camadas, %d trechos de áudio, %.3fs",
            len(instruction.layers),
            len(composition.audio.entries),
            total,
        )

        # Canvas
        if job.background is not None:
            idx = graph.add_input(job.background.path, "-stream_loop", "-1")
            graph.add_filter(
                f"[{idx}:v]scale={target.width}:{target.height},setsar=1,"
                f"fps={target.frame_rate},trim=duration={total:.3f},setpts=PTS-STARTPTS[base]"
            )
        else:
            idx = graph.add_input(
                f"color=c=black:s={target.width}x{target.height}:r={target.frame_rate}:d={total:.3f}",
                "-f",
                "lavfi",
            )
            graph.add_filter(f"[{idx}:v]setsar=1[base]")

        # A primeira instrução fica no topo: compõe de baixo para cima
        current = "[base]"
        for position, layer in enumerate(reversed(instruction.layers)):
            entry = composition.video.find(layer.track_id)
            if entry is None:
                self.logger.warning("Track %s sem trecho na timeline", layer.track_id)
                continue
            current = self._add_video_layer(graph, current, entry, layer, position)

        graph.add_filter(f"{current}format=yuv420p[composed]")
        graph.video_label = "[composed]"
        if job.layer_tree is not None:
            graph.video_label = self._add_text_layers(graph, "[composed]", job.layer_tree)

        if composition.audio.entries:
            graph.audio_label = self._add_audio(graph, composition)
        return graph

    def _add_video_layer(
        self,
        graph: FilterGraph,
        current: str,
        entry: TimelineEntry,
        layer: LayerInstruction,
        position: int,
    ) -> str:
        idx = graph.add_input(entry.source.path, "-noautorotate")
        box = layer.transform.bounding_box(entry.source.natural_size)
        width = max(2, round(box.width))
        height = max(2, round(box.height))

        chain = [
            f"trim=duration={entry.duration:.3f}",
            f"setpts=PTS-STARTPTS+{entry.insert_time:.3f}/TB",
            *orientation_filters(layer.transform),
            f"scale={width}:{height}",
            "setsar=1",
            "format=yuva420p",
        ]
        hold = self._hold_duration(entry, layer)
        if hold > 0:
            # O fade só atua sobre quadros reais: prolonga o último quadro
            chain.append(f"tpad=stop_mode=clone:stop_duration={hold:.3f}")
        enable = []
        for event in layer.opacity:
            if isinstance(event, OpacityRamp):
                if not self._is_binary(event.from_opacity, event.to_opacity):
                    self.logger.warning("Rampa com opacidade parcial tratada como 0/1: %s", event)
                direction = "out" if event.to_opacity < event.from_opacity else "in"
                chain.append(
                    f"fade=t={direction}:st={event.start:.3f}:d={event.duration:.3f}:alpha=1"
                )
            elif isinstance(event, OpacityCut):
                if event.opacity <= 0:
                    enable.append(f"lt(t,{event.at:.3f})")
                else:
                    enable.append(f"gte(t,{event.at:.3f})")

        label = f"l{position}"
        graph.add_filter(f"[{idx}:v]{','.join(chain)}[{label}]")

        overlay = f"overlay=x={round(box.x)}:y={round(box.y)}:eof_action=pass"
        if enable:
            overlay += f":enable='{'*'.join(enable)}'"
        out = f"c{position}"
        graph.add_filter(f"{current}[{label}]{overlay}[{out}]")
        return f"[{out}]"

    @staticmethod
    def _hold_duration(entry: TimelineEntry, layer: LayerInstruction) -> float:
        """Quanto as rampas da camada passam do fim do trecho (0 se nenhuma)"""
        ramp_end = max(
            (e.end for e in layer.opacity if isinstance(e, OpacityRamp)),
            default=entry.end_time,
        )
        hold = ramp_end - entry.end_time
        return hold if hold > TIME_TOLERANCE else 0.0

    @staticmethod
    def _is_binary(*values: float) -> bool:
        return all(v in (0.0, 1.0) for v in values)

    def _add_audio(self, graph: FilterGraph, composition: Composition) -> str:
        labels = []
        for position, entry in enumerate(composition.audio.entries):
            options = ("-stream_loop", "-1") if entry.loop else ()
            idx = graph.add_input(entry.source.path, *options)
            chain = [
                f"atrim=duration={entry.duration:.3f}",
                "asetpts=PTS-STARTPTS",
                AUDIO_FORMAT,
                f"apad=whole_dur={entry.duration:.3f}",
            ]
            if composition.strategy == MergeStrategy.SIMULTANEOUS and entry.insert_time > 0:
                delay = round(entry.insert_time * 1000)
                chain.append(f"adelay=delays={delay}:all=1")
            label = f"a{position}"
            graph.add_filter(f"[{idx}:a]{','.join(chain)}[{label}]")
            labels.append(f"[{label}]")

        if len(labels) == 1:
            return labels[0]

        joined = "".join(labels)
        if composition.strategy == MergeStrategy.SERIAL:
            graph.add_filter(f"{joined}concat=n={len(labels)}:v=0:a=1[aout]")
        else:
            graph.add_filter(
                f"{joined}amix=inputs={len(labels)}:duration=longest:normalize=0[aout]"
            )
        return "[aout]"

    # ------------------------------------------------------------------
    # Texto
    # ------------------------------------------------------------------

    def _add_text_layers(self, graph: FilterGraph, current: str, tree: LayerTree) -> str:
        if not tree.text_layers:
            return current
        draws = [self._drawtext(layer) for layer in tree.text_layers]
        graph.add_filter(f"{current}{','.join(draws)}[vtext]")
        return "[vtext]"

    def _drawtext(self, layer: TextLayer) -> str:
        frame = layer.frame
        parts = [
            f"text={escape_drawtext(layer.text)}",
            f"fontsize={round(layer.font_size)}",
            f"fontcolor={ffmpeg_color(layer.color)}",
            # Centralizado dentro do retângulo do texto
            f"x={frame.x:.1f}+({frame.width:.1f}-text_w)/2",
            f"y={frame.y:.1f}+({frame.height:.1f}-text_h)/2",
            f"alpha='{alpha_expression(layer)}'",
        ]
        if self.font_file:
            parts.insert(0, f"fontfile='{Path(self.font_file).as_posix()}'")
        return "drawtext=" + ":".join(parts)

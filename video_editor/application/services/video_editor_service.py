# -*- coding: utf-8 -*-
"""
video_editor/application/services/video_editor_service.py
Serviço de edição de vídeo: corte, filtros, texto, áudio e junção de clipes
"""

import shutil
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from ...composition.layer_instructions import LayerInstructionFactory
from ...composition.orientation import classify
from ...composition.overlay_builder import OverlayBuilder
from ...composition.timeline_builder import TimelineBuilder
from ...domain.errors import EditError, MissingTrackError
from ...domain.models.export import ExportJob, ExportKind, ExportResult
from ...domain.models.geometry import Size
from ...domain.models.media import MediaSource, RenderTarget, TrimRange
from ...domain.models.overlay import TextOverlay
from ...domain.models.timeline import (
    Composition,
    CompositionInstruction,
    MergeStrategy,
    TimeRange,
)
from ...infra.logging import get_logger
from ...infra.media_io import MediaIO
from ...infra.paths import BundledResources
from ...infra.plugins import PluginRegistry, load_builtin_filters
from ...infra.settings import AppSettings
from .export_pipeline import CompletionCallback, ExportPipeline


class VideoEditorService:
    """Operações de edição; construído uma vez e passado explicitamente"""

    def __init__(
        self,
        settings: AppSettings,
        pipeline: Optional[ExportPipeline] = None,
        media_io: Optional[MediaIO] = None,
        resources: Optional[BundledResources] = None,
        registry: Optional[PluginRegistry] = None,
    ):
        self.settings = settings
        self.logger = get_logger("VideoEditorService")
        self.media_io = media_io or MediaIO(settings)
        self.pipeline = pipeline or ExportPipeline(settings)
        self.resources = resources or BundledResources(settings, self.media_io.probe)
        self.registry = registry or load_builtin_filters()
        self.layer_factory = LayerInstructionFactory()
        self.timeline_builder = TimelineBuilder(settings, self.layer_factory)
        self.overlay_builder = OverlayBuilder(settings)

    def probe(self, path: Path) -> MediaSource:
        """Lê os metadados de um arquivo de mídia"""
        return self.media_io.probe(path)

    # ------------------------------------------------------------------
    # Operações
    # ------------------------------------------------------------------

    def trim_video(
        self,
        source: MediaSource,
        start: float,
        end: float,
        on_complete: Optional[CompletionCallback] = None,
    ):
        """Exporta o intervalo [start, end) da fonte"""
        if start >= source.duration:
            raise ValueError(
                f"Início do corte ({start:.3f}s) além da duração da fonte ({source.duration:.3f}s)"
            )
        if end > source.duration:
            self.logger.debug("Fim do corte %.3fs limitado a %.3fs", end, source.duration)
            end = source.duration
        trim_range = TrimRange(start, end)

        self.logger.info("Corte de %s: %.3fs -> %.3fs", source.path, start, end)
        job = self._job("trim", source, trim_range=trim_range)
        return self.pipeline.export(job, on_complete)

    def add_effect(
        self,
        source: MediaSource,
        effect_name: str,
        on_complete: Optional[CompletionCallback] = None,
    ):
        """Aplica um filtro de pixel registrado; nome desconhecido = cópia sem filtro"""
        pixel_filter = self.registry.resolve(effect_name)
        if pixel_filter is None:
            self.logger.warning(
                "Filtro desconhecido '%s': saída será idêntica à entrada", effect_name
            )
        else:
            self.logger.info("Filtro '%s' -> %s", effect_name, pixel_filter)
        job = self._job("addEffect", source, pixel_filter=pixel_filter)
        return self.pipeline.export(job, on_complete)

    def add_text(
        self,
        sources: Sequence[MediaSource],
        overlays: Sequence[TextOverlay],
        on_complete: Optional[CompletionCallback] = None,
    ):
        """Textos com fade sobre as fontes em sequência, com fundo preto"""
        if not sources:
            raise ValueError("Nenhuma fonte informada")

        def assemble():
            silence = self.resources.silence()
            background = self.resources.background()
            width, height = self.settings.landscape_size
            target = RenderTarget(width, height, self.settings.frame_rate)
            composition = self.timeline_builder.build(
                sources,
                MergeStrategy.SERIAL,
                animation=True,
                render_target=target,
                silence=silence,
                fit_to_render_target=True,
            )
            layer_tree = self.overlay_builder.build(target.size, overlays)
            return self._job(
                "addText", composition, layer_tree=layer_tree, background=background
            )

        return self._submit("addText", assemble, on_complete)

    def merge_audio(
        self,
        video: MediaSource,
        audio: MediaSource,
        on_complete: Optional[CompletionCallback] = None,
    ):
        """Substitui o áudio do vídeo; áudio mais longo é cortado na duração do vídeo"""

        def assemble():
            composition = self._audio_composition(video, audio)
            return self._job("mergeAudio", composition)

        return self._submit("mergeAudio", assemble, on_complete)

    def merge_videos(
        self,
        sources: Sequence[MediaSource],
        strategy: MergeStrategy = MergeStrategy.SERIAL,
        animation: bool = True,
        on_complete: Optional[CompletionCallback] = None,
    ):
        """Junta as fontes em série ou simultaneamente (picture-in-picture)"""
        if not sources:
            raise ValueError("Nenhuma fonte informada")

        def assemble():
            silence = self.resources.silence()
            composition = self.timeline_builder.build(
                sources, strategy, animation=animation, silence=silence
            )
            return self._job("mergeVideos", composition)

        return self._submit("mergeVideos", assemble, on_complete)

    def cleanup(self, include_output_dir: bool = False) -> int:
        """Remove os temporários; só chamar quando nenhuma saída estiver em uso"""
        return self.pipeline.sweep(include_output_dir)

    def persist(self, result: ExportResult) -> Path:
        """Copia uma exportação concluída para o diretório de saída"""
        if not result.ok:
            raise ValueError(f"Exportação {result.kind} falhou: {result.error}")
        output_dir = Path(self.settings.output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)
        destination = output_dir / result.output_path.name
        shutil.copy2(result.output_path, destination)
        self.logger.info("Exportação salva em %s", destination)
        return destination

    def prepare_resources(self, overwrite: bool = False) -> List[Path]:
        """Gera silêncio e fundo preto em resources_dir; retorna os arquivos criados.

        Executa de forma síncrona; falhas do FFmpeg sobem como ExportFailure.
        """
        resources_dir = Path(self.settings.resources_dir)
        resources_dir.mkdir(parents=True, exist_ok=True)
        cli = self.pipeline.cli_builder
        duration = self.settings.resource_duration
        width, height = self.settings.landscape_size

        silence_path = resources_dir / self.settings.silence_file
        background_path = resources_dir / self.settings.background_file
        commands = [
            (silence_path, cli.silence_command(silence_path, duration)),
            (
                background_path,
                cli.background_command(
                    background_path, width, height, self.settings.frame_rate, duration
                ),
            ),
        ]
        created = []
        for path, cmd in commands:
            if path.exists() and not overwrite:
                self.logger.info("Recurso já existe: %s", path)
                continue
            self.pipeline.runner.run(cmd)
            self.logger.info("Recurso gerado: %s", path)
            created.append(path)
        return created

    def shutdown(self):
        self.pipeline.shutdown()

    # ------------------------------------------------------------------
    # Montagem
    # ------------------------------------------------------------------

    def _audio_composition(self, video: MediaSource, audio: MediaSource) -> Composition:
        if not video.has_video:
            raise MissingTrackError("Fonte sem track de vídeo", str(video.path))

        # Tamanho de exibição: natural, com largura/altura trocadas em retrato
        size = video.natural_size
        if classify(video.transform).is_portrait:
            size = Size(size.height, size.width)
        target = RenderTarget(int(size.width), int(size.height), self.settings.frame_rate)

        composition = Composition(MergeStrategy.SERIAL, target)
        composition.begin()
        entry = composition.video.insert(video, 0.0, video.duration)
        if audio.has_audio:
            audio_duration = min(audio.duration, video.duration)
            if audio.duration > video.duration:
                self.logger.info(
                    "Áudio de %.3fs limitado à duração do vídeo (%.3fs)",
                    audio.duration,
                    video.duration,
                )
            composition.audio.insert(audio, 0.0, audio_duration)
        else:
            self.logger.warning(
                "Fonte %s sem track de áudio: vídeo exportado sem áudio", audio.path
            )

        layer = self.layer_factory.build(entry, target.size)
        composition.finalize(
            CompositionInstruction(TimeRange(0.0, video.duration), (layer,))
        )
        return composition

    def _job(self, kind: ExportKind, asset, **kwargs) -> ExportJob:
        return ExportJob(
            kind=kind,
            asset=asset,
            file_type=self.settings.output_file_type,
            quality=self.settings.quality_preset,
            **kwargs,
        )

    def _submit(
        self,
        kind: ExportKind,
        assemble: Callable[[], ExportJob],
        on_complete: Optional[CompletionCallback],
    ):
        """Monta o job no thread do chamador; falhas viram future já concluído"""
        try:
            job = assemble()
        except EditError as e:
            return self.pipeline.failed(kind, e, on_complete)
        return self.pipeline.export(job, on_complete)

# -*- coding: utf-8 -*-
"""
Testes de integração do serviço de edição (pipeline simulado)
"""

from pathlib import Path
from unittest.mock import Mock

import pytest

from conftest import make_source
from video_editor.application.services.video_editor_service import VideoEditorService
from video_editor.domain.errors import MissingResourceError, MissingTrackError
from video_editor.domain.models.export import ExportResult
from video_editor.domain.models.geometry import AffineTransform
from video_editor.domain.models.overlay import TextOverlay
from video_editor.domain.models.timeline import MergeStrategy
from video_editor.rendering.cli_builder import CliBuilder


@pytest.fixture
def pipeline():
    return Mock()


@pytest.fixture
def resources(silence):
    resources = Mock()
    resources.silence.return_value = silence
    resources.background.return_value = make_source("black.mov", duration=2.0, has_audio=False)
    return resources


@pytest.fixture
def service(settings, pipeline, resources):
    return VideoEditorService(settings, pipeline=pipeline, media_io=Mock(), resources=resources)


def _submitted_job(pipeline):
    pipeline.export.assert_called_once()
    return pipeline.export.call_args[0][0]


def test_trim_video_builds_trim_job(service, pipeline):
    """Testa trim(10s, 2s..6s)"""
    service.trim_video(make_source(duration=10.0), 2.0, 6.0)

    job = _submitted_job(pipeline)
    assert job.kind == "trim"
    assert job.trim_range.duration == pytest.approx(4.0)
    assert job.quality == "highest"


def test_trim_video_rejects_invalid_range(service, pipeline):
    with pytest.raises(ValueError):
        service.trim_video(make_source(duration=10.0), 6.0, 2.0)
    with pytest.raises(ValueError):
        service.trim_video(make_source(duration=10.0), 12.0, 14.0)
    pipeline.export.assert_not_called()


def test_trim_end_clamped_to_duration(service, pipeline):
    service.trim_video(make_source(duration=10.0), 8.0, 20.0)

    assert _submitted_job(pipeline).trim_range.end == 10.0


def test_add_effect_known_filter(service, pipeline):
    service.add_effect(make_source(), "color_invert")

    assert _submitted_job(pipeline).pixel_filter == "negate"


def test_add_effect_accepts_core_image_name(service, pipeline):
    service.add_effect(make_source(), "CIColorInvert")

    assert _submitted_job(pipeline).pixel_filter == "negate"


def test_add_effect_unknown_filter_is_passthrough(service, pipeline):
    """Testa que filtro desconhecido gera job de cópia, sem erro"""
    service.add_effect(make_source(), "does_not_exist")

    job = _submitted_job(pipeline)
    assert job.pixel_filter is None
    assert job.is_passthrough


def test_merge_audio_clamps_longer_audio(service, pipeline):
    """Testa que o áudio mais longo é limitado à duração do vídeo"""
    video = make_source("v.mp4", duration=5.0, has_audio=False)
    audio = make_source("song.mp3", width=0, height=0, duration=30.0, has_video=False)

    service.merge_audio(video, audio)

    job = _submitted_job(pipeline)
    (audio_entry,) = job.asset.audio.entries
    assert audio_entry.source == audio
    assert audio_entry.duration == pytest.approx(5.0)
    assert job.asset.duration == pytest.approx(5.0)


def test_merge_audio_renders_at_display_size(service, pipeline):
    """Testa vídeo em retrato: alvo com largura e altura trocadas"""
    video = make_source("v.mov", 1920, 1080, 5.0, transform=AffineTransform.rotation(90))
    audio = make_source("song.mp3", width=0, height=0, duration=2.0, has_video=False)

    service.merge_audio(video, audio)

    target = _submitted_job(pipeline).asset.render_target
    assert (target.width, target.height) == (1080, 1920)


def test_merge_audio_without_audio_track_exports_video(service, pipeline):
    """Testa fonte de áudio sem track de áudio: vídeo exportado sem áudio"""
    video = make_source("v.mp4", duration=5.0)
    silent = make_source("x.mp4", duration=5.0, has_audio=False)

    service.merge_audio(video, silent)

    pipeline.failed.assert_not_called()
    job = _submitted_job(pipeline)
    assert job.kind == "mergeAudio"
    assert job.asset.audio.entries == []
    (entry,) = job.asset.video.entries
    assert entry.source == video


def test_merge_audio_without_video_track_fails(service, pipeline):
    """Testa falha de montagem entregue como future concluído"""
    audio_only = make_source("song.mp3", width=0, height=0, duration=5.0, has_video=False)
    audio = make_source("other.mp3", width=0, height=0, duration=5.0, has_video=False)

    service.merge_audio(audio_only, audio)

    pipeline.export.assert_not_called()
    kind, error, _ = pipeline.failed.call_args[0]
    assert kind == "mergeAudio"
    assert isinstance(error, MissingTrackError)


def test_merge_videos_missing_silence(service, pipeline, resources):
    """Testa recurso de silêncio ausente: operação encerrada sem exportar"""
    resources.silence.side_effect = MissingResourceError("Recurso obrigatório ausente")

    service.merge_videos([make_source(has_audio=False)])

    pipeline.export.assert_not_called()
    _, error, _ = pipeline.failed.call_args[0]
    assert isinstance(error, MissingResourceError)


def test_merge_videos_simultaneous(service, pipeline):
    sources = [make_source("a.mp4", duration=4.0), make_source("b.mp4", duration=6.0)]

    service.merge_videos(sources, MergeStrategy.SIMULTANEOUS, animation=False)

    composition = _submitted_job(pipeline).asset
    assert composition.strategy == MergeStrategy.SIMULTANEOUS
    assert len(composition.instruction.layers) == 2


def test_merge_videos_rejects_empty(service):
    with pytest.raises(ValueError):
        service.merge_videos([])


def test_add_text_uses_background_and_landscape_preset(service, pipeline, resources):
    """Testa texto: fundo preto, preset paisagem e árvore de camadas"""
    sources = [make_source("a.mp4", 1080, 1920, 5.0)]
    overlays = [TextOverlay("Hello", show_time=1.0, hide_time=4.0)]

    service.add_text(sources, overlays)

    job = _submitted_job(pipeline)
    assert job.kind == "addText"
    assert job.background == resources.background.return_value
    assert (job.asset.render_target.width, job.asset.render_target.height) == (1920, 1080)
    assert [layer.text for layer in job.layer_tree.text_layers] == ["Hello"]
    # Clipe em retrato ajustado pela altura dentro do quadro paisagem
    (layer,) = job.asset.instruction.layers
    box = layer.transform.bounding_box(sources[0].natural_size)
    assert box.height == pytest.approx(1080)
    assert box.x == pytest.approx((1920 - box.width) / 2)


def test_persist_copies_to_output_dir(service, settings, tmp_path):
    exported = tmp_path / "trimabc.mp4"
    exported.write_bytes(b"video")

    destination = service.persist(ExportResult("trim", output_path=exported))

    assert destination == Path(settings.output_dir) / "trimabc.mp4"
    assert destination.read_bytes() == b"video"


def test_persist_rejects_failed_result(service):
    from video_editor.domain.errors import ExportFailure

    with pytest.raises(ValueError):
        service.persist(ExportResult("trim", error=ExportFailure("boom")))


def test_cleanup_delegates_to_sweep(service, pipeline):
    pipeline.sweep.return_value = 3

    assert service.cleanup(include_output_dir=True) == 3
    pipeline.sweep.assert_called_once_with(True)


def test_prepare_resources_generates_missing_files(service, pipeline, settings):
    """Testa geração de silêncio e fundo preto no diretório de recursos"""
    pipeline.cli_builder = CliBuilder("ffmpeg")

    created = service.prepare_resources()

    resources_dir = Path(settings.resources_dir)
    assert created == [resources_dir / "silence.mp3", resources_dir / "black.mov"]
    commands = [call[0][0] for call in pipeline.runner.run.call_args_list]
    assert [cmd[-1] for cmd in commands] == [str(path) for path in created]
    assert "anullsrc=r=44100:cl=stereo" in commands[0]
    assert "color=c=black:s=1920x1080:r=30" in commands[1]


def test_prepare_resources_keeps_existing_files(service, pipeline, settings):
    pipeline.cli_builder = CliBuilder("ffmpeg")
    resources_dir = Path(settings.resources_dir)
    resources_dir.mkdir(parents=True)
    (resources_dir / "silence.mp3").write_bytes(b"mp3")

    created = service.prepare_resources()

    assert created == [resources_dir / "black.mov"]
    pipeline.runner.run.assert_called_once()
    assert service.prepare_resources(overwrite=True) == [
        resources_dir / "silence.mp3",
        resources_dir / "black.mov",
    ]

# -*- coding: utf-8 -*-
"""
Testes unitários para os modelos de domínio
"""

import pytest
from pathlib import Path

from conftest import make_source
from video_editor.domain.errors import EditError, ExportFailure, MissingResourceError
from video_editor.domain.models.export import (
    QUALITY_PRESETS,
    ExportJob,
    ExportResult,
    RenderSettings,
)
from video_editor.domain.models.media import RenderTarget, TrimRange
from video_editor.domain.models.timeline import Composition, MergeStrategy


def test_trim_range_duration():
    """Testa duração do intervalo de corte"""
    trim = TrimRange(2.0, 6.0)

    assert trim.duration == 4.0


@pytest.mark.parametrize("start, end", [(-1.0, 2.0), (3.0, 3.0), (5.0, 2.0)])
def test_trim_range_rejects_invalid(start, end):
    """Testa intervalos inválidos"""
    with pytest.raises(ValueError):
        TrimRange(start, end)


def test_render_settings():
    """Testa configurações de renderização"""
    settings = RenderSettings(
        container="mp4",
        vcodec="libx264",
        acodec="aac",
        crf=23,
        preset="medium",
        audio_bitrate="192k",
    )

    assert settings.container == "mp4"
    assert settings.vcodec == "libx264"
    assert settings.hwaccel is None


def test_highest_quality_preset():
    preset = QUALITY_PRESETS["highest"]

    assert preset.crf < QUALITY_PRESETS["medium"].crf
    assert preset.vcodec == "libx264"


def test_export_job_passthrough():
    """Testa a detecção de job sem corte nem filtro"""
    source = make_source()

    assert ExportJob("addEffect", source).is_passthrough
    assert not ExportJob("addEffect", source, pixel_filter="negate").is_passthrough
    assert not ExportJob("trim", source, trim_range=TrimRange(0, 1)).is_passthrough


def test_export_job_composition():
    composition = Composition(MergeStrategy.SERIAL, RenderTarget(1920, 1080))

    job = ExportJob("mergeVideos", composition)

    assert job.is_composition
    assert not job.is_passthrough


def test_export_job_validates_file_type_and_quality():
    with pytest.raises(ValueError):
        ExportJob("trim", make_source(), file_type="avi")
    with pytest.raises(ValueError):
        ExportJob("trim", make_source(), quality="ultra")


def test_export_result_is_path_or_error():
    """Testa que o resultado tem exatamente um de caminho ou erro"""
    ok = ExportResult("trim", output_path=Path("out.mp4"))
    failed = ExportResult("trim", error=ExportFailure("boom"))

    assert ok.ok
    assert not failed.ok
    with pytest.raises(ValueError):
        ExportResult("trim")
    with pytest.raises(ValueError):
        ExportResult("trim", output_path=Path("out.mp4"), error=ExportFailure("boom"))


def test_errors_share_base_class():
    error = MissingResourceError("Recurso obrigatório ausente", "/res/silence.mp3")

    assert isinstance(error, EditError)
    assert error.path == "/res/silence.mp3"
    assert "silence.mp3" in str(error)


def test_export_failure_carries_stderr():
    error = ExportFailure("FFmpeg falhou", command=["ffmpeg", "-y"], stderr="bad input")

    assert error.command == ["ffmpeg", "-y"]
    assert error.stderr == "bad input"

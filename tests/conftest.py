# -*- coding: utf-8 -*-
"""
Fixtures compartilhadas pelos testes
"""

from pathlib import Path

import pytest

from video_editor.domain.models.geometry import AffineTransform
from video_editor.domain.models.media import MediaSource
from video_editor.infra.settings import AppSettings


def make_source(
    name="clip.mp4",
    width=1920,
    height=1080,
    duration=5.0,
    transform=None,
    has_audio=True,
    has_video=True,
):
    """Cria uma MediaSource sem tocar no disco"""
    return MediaSource(
        path=Path(name),
        width=width,
        height=height,
        duration=duration,
        transform=transform or AffineTransform.identity(),
        has_audio=has_audio,
        has_video=has_video,
    )


@pytest.fixture
def settings(tmp_path):
    return AppSettings(
        temp_dir=tmp_path / "tmp",
        output_dir=tmp_path / "out",
        resources_dir=tmp_path / "resources",
    )


@pytest.fixture
def silence():
    return make_source(
        "silence.mp3", width=0, height=0, duration=1.0, has_video=False
    )

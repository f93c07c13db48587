# -*- coding: utf-8 -*-
"""
Testes unitários para a leitura de metadados com FFprobe
"""

import json
import subprocess
from unittest.mock import patch

import pytest

from video_editor.domain.errors import MediaProbeError
from video_editor.domain.models.geometry import AffineTransform
from video_editor.infra.media_io import MediaIO


def _completed(payload):
    return subprocess.CompletedProcess(
        args=["ffprobe"], returncode=0, stdout=json.dumps(payload), stderr=""
    )


@pytest.fixture
def media_file(tmp_path):
    path = tmp_path / "clip.mov"
    path.write_bytes(b"")
    return path


def test_probe_rotated_video_with_audio(settings, media_file):
    """Testa vídeo de celular gravado em retrato (display matrix -90°)"""
    payload = {
        "streams": [
            {
                "codec_type": "video",
                "width": 1920,
                "height": 1080,
                "side_data_list": [{"side_data_type": "Display Matrix", "rotation": -90}],
            },
            {"codec_type": "audio"},
        ],
        "format": {"duration": "12.5"},
    }

    with patch("subprocess.run", return_value=_completed(payload)):
        source = MediaIO(settings).probe(media_file)

    assert (source.width, source.height) == (1920, 1080)
    assert source.duration == 12.5
    assert source.has_audio
    assert source.transform == AffineTransform.rotation(90)


def test_probe_rotate_tag(settings, media_file):
    """Testa a tag 'rotate' de arquivos antigos"""
    payload = {
        "streams": [
            {"codec_type": "video", "width": 640, "height": 480, "tags": {"rotate": "270"}}
        ],
        "format": {"duration": "3.0"},
    }

    with patch("subprocess.run", return_value=_completed(payload)):
        source = MediaIO(settings).probe(media_file)

    assert source.transform.linear == (0, 1, -1, 0)
    assert not source.has_audio


def test_probe_audio_only_ignores_cover_art(settings, media_file):
    """Testa que capa embutida não conta como vídeo"""
    payload = {
        "streams": [
            {"codec_type": "audio"},
            {"codec_type": "video", "width": 300, "height": 300, "disposition": {"attached_pic": 1}},
        ],
        "format": {"duration": "30.0"},
    }

    with patch("subprocess.run", return_value=_completed(payload)):
        source = MediaIO(settings).probe(media_file)

    assert not source.has_video
    assert source.has_audio
    assert source.duration == 30.0


def test_probe_missing_file(settings, tmp_path):
    with pytest.raises(MediaProbeError):
        MediaIO(settings).probe(tmp_path / "missing.mp4")


def test_probe_ffprobe_failure(settings, media_file):
    """Testa falha do FFprobe traduzida em MediaProbeError"""
    error = subprocess.CalledProcessError(1, ["ffprobe"], stderr="Invalid data")

    with patch("subprocess.run", side_effect=error):
        with pytest.raises(MediaProbeError) as info:
            MediaIO(settings).probe(media_file)

    assert "Invalid data" in str(info.value)

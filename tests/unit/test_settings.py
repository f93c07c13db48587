# -*- coding: utf-8 -*-
"""
Testes unitários para as configurações
"""

import json
from pathlib import Path

from video_editor.infra.settings import AppSettings, load_settings


def test_defaults():
    """Testa os valores padrão"""
    settings = AppSettings()

    assert settings.portrait_size == (720, 1280)
    assert settings.landscape_size == (1920, 1080)
    assert settings.quality_preset == "highest"
    assert settings.transition_duration == 1.0
    assert settings.simultaneous_offset == 3.0


def test_environment_override(monkeypatch):
    """Testa leitura de variáveis de ambiente com prefixo"""
    monkeypatch.setenv("VIDEO_EDITOR_FRAME_RATE", "25")
    monkeypatch.setenv("VIDEO_EDITOR_FFMPEG_PATH", "/opt/ffmpeg/bin/ffmpeg")

    settings = AppSettings()

    assert settings.frame_rate == 25
    assert settings.ffmpeg_path == "/opt/ffmpeg/bin/ffmpeg"


def test_load_settings_from_config_json(tmp_path):
    """Testa carregamento do config.json"""
    config = tmp_path / "config.json"
    config.write_text(json.dumps({"max_workers": 4, "output_dir": "saida"}), encoding="utf-8")

    settings = load_settings(config)

    assert settings.max_workers == 4
    assert settings.output_dir == Path("saida")


def test_load_settings_without_file(tmp_path):
    settings = load_settings(tmp_path / "missing.json")

    assert settings.max_workers == AppSettings().max_workers

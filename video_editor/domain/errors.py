# -*- coding: utf-8 -*-
"""
Hierarquia de erros do editor de vídeo.

Todos os erros herdam de EditError. MissingTrackError e InsertionError são
resolvidos localmente pelo TimelineBuilder (fonte descartada, timeline
continua); MissingResourceError e ExportFailure encerram a operação e chegam
ao chamador dentro do ExportResult.
"""

from typing import Optional, Sequence


class EditError(Exception):
    """Erro base de todas as operações de edição"""

    def __init__(self, message: str, path: Optional[str] = None):
        self.message = message
        self.path = path
        if path:
            super().__init__(f"{message} (Arquivo: {path})")
        else:
            super().__init__(message)


class MissingTrackError(EditError):
    """A fonte não possui a track de mídia esperada (vídeo ou áudio)"""


class InsertionError(EditError):
    """Inserção de um intervalo de tempo na timeline foi rejeitada"""


class MissingResourceError(EditError):
    """Recurso empacotado (silêncio, fundo preto) não encontrado"""


class MediaProbeError(EditError):
    """FFprobe não conseguiu ler os metadados da fonte"""


class ExportFailure(EditError):
    """O encoder reportou falha ao exportar"""

    def __init__(
        self,
        message: str,
        command: Optional[Sequence[str]] = None,
        stderr: Optional[str] = None,
    ):
        super().__init__(message)
        self.command = list(command) if command else None
        self.stderr = stderr

# -*- coding: utf-8 -*-
"""
Execução de comandos FFmpeg
"""

import os
import subprocess
from typing import List, Optional

from ..domain.errors import ExportFailure
from ..infra.logging import get_logger


class Runner:
    """Executa comandos FFmpeg e traduz falhas em ExportFailure"""

    def __init__(self):
        self.logger = get_logger("Runner")

    def run(
        self, cmd: List[str], timeout: Optional[float] = None
    ) -> subprocess.CompletedProcess:
        """Executa o comando; sem timeout por padrão (exportações não expiram)"""
        self.logger.info("Executando comando FFmpeg: %s", " ".join(map(str, cmd)))

        # Configurações específicas para Windows
        kwargs = {}
        if os.name == "nt":
            kwargs["creationflags"] = subprocess.CREATE_NEW_PROCESS_GROUP

        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=timeout,
                **kwargs,
            )
        except subprocess.TimeoutExpired as e:
            self.logger.error("Timeout após %ss: %s", timeout, " ".join(map(str, cmd)))
            raise ExportFailure(
                f"Comando FFmpeg excedeu timeout de {timeout}s", command=cmd
            ) from e
        except OSError as e:
            self.logger.error("Não foi possível executar o FFmpeg: %s", e)
            raise ExportFailure(f"Erro na execução do FFmpeg: {e}", command=cmd) from e

        if result.returncode != 0:
            self.logger.error(
                "Comando FFmpeg retornou código %d. Stderr: %s",
                result.returncode,
                result.stderr,
            )
            raise ExportFailure(
                f"FFmpeg falhou com código {result.returncode}",
                command=cmd,
                stderr=result.stderr,
            )

        self.logger.info("Comando FFmpeg finalizado com sucesso.")
        return result

# -*- coding: utf-8 -*-
"""
Pipeline de exportação: executa cada ExportJob em segundo plano e entrega
exatamente um ExportResult por job.
"""

from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path
from typing import Callable, Optional

from ...domain.errors import EditError, ExportFailure
from ...domain.models.export import ExportJob, ExportKind, ExportResult
from ...infra.logging import get_logger
from ...infra.paths import allocate_output_path, ffmpeg_bin, sweep_directory
from ...infra.settings import AppSettings
from ...rendering.cli_builder import CliBuilder
from ...rendering.graph_builder import GraphBuilder
from ...rendering.runner import Runner

CompletionCallback = Callable[[ExportResult], None]


class ExportPipeline:
    """Renderiza jobs em um ThreadPoolExecutor; sem cancelamento nem timeout"""

    def __init__(
        self,
        settings: AppSettings,
        graph_builder: Optional[GraphBuilder] = None,
        cli_builder: Optional[CliBuilder] = None,
        runner: Optional[Runner] = None,
    ):
        self.settings = settings
        self.graph_builder = graph_builder or GraphBuilder(settings.font_file)
        self.cli_builder = cli_builder or CliBuilder(ffmpeg_bin(settings))
        self.runner = runner or Runner()
        self.logger = get_logger("ExportPipeline")
        self._executor = ThreadPoolExecutor(
            max_workers=settings.max_workers, thread_name_prefix="export"
        )

    def export(
        self, job: ExportJob, on_complete: Optional[CompletionCallback] = None
    ) -> "Future[ExportResult]":
        """Agenda o job; o future nunca levanta, falhas vêm no resultado"""
        out_path = allocate_output_path(
            Path(self.settings.temp_dir), job.kind, job.file_type
        )
        self.logger.info("Exportação %s agendada: %s", job.kind, out_path)
        future = self._executor.submit(self._render, job, out_path)
        if on_complete is not None:
            future.add_done_callback(lambda f: on_complete(f.result()))
        return future

    def failed(
        self,
        kind: ExportKind,
        error: EditError,
        on_complete: Optional[CompletionCallback] = None,
    ) -> "Future[ExportResult]":
        """Future já concluído com erro (falha na montagem do job)"""
        self.logger.error("Falha ao montar exportação %s: %s", kind, error)
        result = ExportResult(kind=kind, error=error)
        future: Future = Future()
        future.set_result(result)
        if on_complete is not None:
            on_complete(result)
        return future

    def _render(self, job: ExportJob, out_path: Path) -> ExportResult:
        try:
            graph = self.graph_builder.build(job)
            cmd = self.cli_builder.make_command(job, graph, out_path)
            self.runner.run(cmd)
        except ExportFailure as e:
            self._discard(out_path)
            return ExportResult(kind=job.kind, error=e)
        except (ValueError, OSError) as e:
            self.logger.error("Erro ao preparar exportação %s: %s", job.kind, e)
            self._discard(out_path)
            return ExportResult(kind=job.kind, error=ExportFailure(str(e)))
        except Exception as e:
            self.logger.exception("Erro inesperado na exportação %s", job.kind)
            self._discard(out_path)
            return ExportResult(
                kind=job.kind, error=ExportFailure(f"{type(e).__name__}: {e}")
            )

        self.logger.info("Exportação %s concluída: %s", job.kind, out_path)
        return ExportResult(kind=job.kind, output_path=out_path)

    def _discard(self, out_path: Path):
        """Remove saída parcial deixada pelo encoder"""
        try:
            out_path.unlink()
        except FileNotFoundError:
            pass
        except OSError as e:
            self.logger.warning("Não foi possível remover saída parcial %s: %s", out_path, e)

    def sweep(self, include_output_dir: bool = False) -> int:
        """Remove os arquivos temporários (e opcionalmente os persistidos)"""
        removed = sweep_directory(Path(self.settings.temp_dir))
        if include_output_dir:
            removed += sweep_directory(Path(self.settings.output_dir))
        self.logger.info("Limpeza concluída: %d itens removidos", removed)
        return removed

    def shutdown(self, wait: bool = True):
        self._executor.shutdown(wait=wait)

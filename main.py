"""
main.py — Interface CLI do editor de vídeo
"""

import argparse
import logging
from pathlib import Path

from video_editor.application.services.video_editor_service import VideoEditorService
from video_editor.domain.errors import EditError, MissingResourceError
from video_editor.domain.models.geometry import Rect
from video_editor.domain.models.overlay import TextOverlay
from video_editor.domain.models.timeline import MergeStrategy
from video_editor.infra.logging import setup_logging
from video_editor.infra.settings import load_settings


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Edita vídeos curtos (corte, filtros, texto, áudio, junção) usando FFmpeg."
    )
    parser.add_argument("--config", default="config.json", help="Arquivo de configuração")
    parser.add_argument("--log", default="video_editor.log", help="Arquivo de log")
    parser.add_argument("--verbose", action="store_true", help="Log em nível DEBUG")
    parser.add_argument(
        "--salvar",
        action="store_true",
        help="Copia o resultado para o diretório de saída configurado",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    trim = sub.add_parser("trim", help="Corta um intervalo do vídeo")
    trim.add_argument("video", help="Vídeo de entrada")
    trim.add_argument("--inicio", type=float, required=True, help="Início do corte (s)")
    trim.add_argument("--fim", type=float, required=True, help="Fim do corte (s)")

    effect = sub.add_parser("effect", help="Aplica um filtro de pixel")
    effect.add_argument("video", help="Vídeo de entrada")
    effect.add_argument("--filtro", required=True, help="Nome do filtro (veja 'effects')")

    text = sub.add_parser("text", help="Adiciona texto com fade sobre os vídeos")
    text.add_argument("videos", nargs="+", help="Vídeos de entrada (em sequência)")
    text.add_argument("--texto", required=True, help="Texto a exibir")
    text.add_argument("--tamanho_fonte", type=float, default=40.0, help="Tamanho da fonte")
    text.add_argument("--cor", default="white", help="Cor do texto (nome ou #RRGGBB)")
    text.add_argument(
        "--quadro",
        type=float,
        nargs=4,
        default=(0.0, 0.0, 390.0, 300.0),
        metavar=("X", "Y", "LARGURA", "ALTURA"),
        help="Retângulo do texto em unidades de referência",
    )
    text.add_argument("--mostrar", type=float, default=0.0, help="Início do fade-in (s)")
    text.add_argument(
        "--esconder", type=float, default=0.0, help="Início do fade-out (s); 0 = nunca"
    )

    audio = sub.add_parser("audio", help="Substitui o áudio do vídeo")
    audio.add_argument("video", help="Vídeo de entrada")
    audio.add_argument("--audio", required=True, help="Arquivo de áudio")

    merge = sub.add_parser("merge", help="Junta vários vídeos")
    merge.add_argument("videos", nargs="+", help="Vídeos de entrada")
    merge.add_argument(
        "--estrategia",
        choices=[s.value for s in MergeStrategy],
        default=MergeStrategy.SERIAL.value,
        help="serial (em sequência) ou simultaneous (picture-in-picture)",
    )
    merge.add_argument(
        "--sem_animacao", action="store_true", help="Corte seco em vez de fade"
    )

    cleanup = sub.add_parser("cleanup", help="Remove arquivos temporários")
    cleanup.add_argument(
        "--incluir_saida", action="store_true", help="Também limpa o diretório de saída"
    )

    resources = sub.add_parser(
        "resources", help="Gera silence.mp3 e black.mov no diretório de recursos"
    )
    resources.add_argument(
        "--sobrescrever", action="store_true", help="Gera mesmo se os arquivos existirem"
    )

    sub.add_parser("effects", help="Lista os filtros disponíveis")
    return parser


def run_command(args, service: VideoEditorService):
    """Executa o subcomando e retorna o future da exportação (ou None)"""
    if args.command == "effects":
        for descriptor in service.registry.list_effects():
            print(f"{descriptor.name:20s} {descriptor.description}")
        return None

    if args.command == "cleanup":
        removed = service.cleanup(include_output_dir=args.incluir_saida)
        print(f"🧹 {removed} itens removidos")
        return None

    if args.command == "resources":
        created = service.prepare_resources(overwrite=args.sobrescrever)
        print(f"📦 {len(created)} recursos gerados em {service.settings.resources_dir}")
        return None

    if args.command == "trim":
        source = service.probe(Path(args.video).resolve())
        return service.trim_video(source, args.inicio, args.fim)

    if args.command == "effect":
        source = service.probe(Path(args.video).resolve())
        return service.add_effect(source, args.filtro)

    if args.command == "text":
        sources = [service.probe(Path(v).resolve()) for v in args.videos]
        overlay = TextOverlay(
            text=args.texto,
            font_size=args.tamanho_fonte,
            color=args.cor,
            frame=Rect(*args.quadro),
            show_time=args.mostrar,
            hide_time=args.esconder,
        )
        return service.add_text(sources, [overlay])

    if args.command == "audio":
        video = service.probe(Path(args.video).resolve())
        audio = service.probe(Path(args.audio).resolve())
        return service.merge_audio(video, audio)

    if args.command == "merge":
        sources = [service.probe(Path(v).resolve()) for v in args.videos]
        return service.merge_videos(
            sources,
            MergeStrategy(args.estrategia),
            animation=not args.sem_animacao,
        )

    raise ValueError(f"Comando desconhecido: {args.command}")


def main():
    parser = build_parser()
    args = parser.parse_args()

    # Setup logging
    setup_logging(args.log, logging.DEBUG if args.verbose else logging.INFO)

    settings = load_settings(Path(args.config))
    service = VideoEditorService(settings)

    try:
        future = run_command(args, service)
        if future is None:
            return 0

        result = future.result()
        if not result.ok:
            print(f"❌ Erro na exportação: {result.error}")
            if isinstance(result.error, MissingResourceError):
                print("💡 Gere os recursos com: python main.py resources")
            return 1

        output = service.persist(result) if args.salvar else result.output_path
        print(f"✅ Vídeo criado com sucesso: {output}")
        return 0

    except (EditError, ValueError) as e:
        print(f"❌ Erro: {e}")
        return 1
    finally:
        service.shutdown()


if __name__ == "__main__":
    exit(main())

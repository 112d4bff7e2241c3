"""
Консольный интерфейс интерактивного K-means.

Режимы:
1. generate: генерация синтетических точек и печать их в формате (x, y)
2. run: пошаговый прогон K-means с журналом итераций, выгрузкой CSV и графиком
"""

from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path

from kmeans_interactive.config import InitMethod, SessionConfig
from kmeans_interactive.data.parser import parse_file
from kmeans_interactive.errors import ClusteringError
from kmeans_interactive.session import ClusteringSession
from kmeans_interactive.utils.logging import setup_logger


def _config_from_args(args: argparse.Namespace) -> SessionConfig:
    return SessionConfig(
        num_points=args.points,
        k=args.k,
        seed=args.seed,
        init_method=args.init,
        delay_ms=getattr(args, "delay_ms", 0),
        max_iterations=getattr(args, "max_iterations", 100),
    )


def run_generate(args: argparse.Namespace) -> int:
    config = _config_from_args(args)
    session = ClusteringSession(config)
    try:
        points = session.generate_points()
    except ClusteringError as exc:
        print(f"[ERROR] {exc}", file=sys.stderr)
        return 1
    for x, y in points:
        print(f"({x:.4f}, {y:.4f})")
    return 0


def run_clustering(args: argparse.Namespace) -> int:
    """
    Прогоняет K-means по шагам.

    Задержка delay_ms делится пополам между шагом назначения и шагом
    обновления, как при анимации; на результаты она не влияет.
    """
    logger = setup_logger()
    config = _config_from_args(args)
    session = ClusteringSession(config, logger=logger)

    try:
        if args.input:
            parsed = parse_file(args.input)
            logger.info(
                f"Read {parsed.added_count} point(s) from {args.input} "
                f"({parsed.error_count} invalid line(s))"
            )
            session.add_points(parsed.points)
        else:
            session.generate_points()
        session.start()
    except (ClusteringError, OSError) as exc:
        logger.error(str(exc))
        return 1

    half_delay = config.delay_ms / 2000.0
    try:
        while session.assign_step() is not None:
            time.sleep(half_delay)
            session.update_step()
            time.sleep(half_delay)
    except KeyboardInterrupt:
        session.stop()
        logger.warning("Interrupted by user")

    summary = session.summary()
    inertia = summary.inertia if summary.inertia is not None else float("nan")
    sizes = session.cluster_sizes()
    centroids = session.centroids
    for k in range(session.k):
        cx, cy = centroids[k]
        logger.info(f"  Cluster {k + 1}: ({cx:.3f}, {cy:.3f}), {sizes[k]} points")
    logger.info(
        f"Finished: state={summary.state.value}, iterations={summary.iterations}, "
        f"inertia={inertia:.4f}, "
        f"T_assign_total={summary.t_assign_total:.6f}s, "
        f"T_update_total={summary.t_update_total:.6f}s, "
        f"T_assign_mean={summary.t_assign_mean:.6f}s, "
        f"T_update_mean={summary.t_update_mean:.6f}s"
    )

    if args.csv:
        iteration = (
            summary.iterations if args.export_iteration is None else args.export_iteration
        )
        try:
            text = session.history.export_csv(iteration)
        except ClusteringError as exc:
            logger.error(str(exc))
            return 1
        Path(args.csv).write_text(text, encoding="utf-8")
        logger.info(f"Iteration {iteration} exported to {args.csv}")

    if args.plot:
        from kmeans_interactive.utils.plotting import save_clustering_plot

        path = save_clustering_plot(
            args.plot,
            session.points,
            session.assignments,
            centroids,
            history=session.history,
            iteration=session.iteration,
        )
        logger.info(f"Plot saved to {path}")

    return 0


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--points", type=int, default=100, help="Количество точек (по умолчанию: 100)")
    parser.add_argument("--k", type=int, default=3, help="Количество кластеров (по умолчанию: 3)")
    parser.add_argument("--seed", type=int, default=42, help="Seed генератора (по умолчанию: 42)")
    parser.add_argument(
        "--init",
        type=str,
        choices=[m.value for m in InitMethod] + ["random"],
        default=InitMethod.UNIFORM.value,
        help="Метод инициализации центроидов (по умолчанию: uniform)",
    )


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Пошаговая кластеризация K-means на 2D точках",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Примеры использования:

  # Сгенерировать 60 точек для 4 кластеров
  kmeans-interactive generate --points 60 --k 4 --seed 7

  # Прогон с K-means++ и выгрузкой последней итерации в CSV
  kmeans-interactive run --k 4 --init kmeans++ --csv distances.csv

  # Прогон по точкам из файла с графиком
  kmeans-interactive run --input points.txt --k 3 --plot result.png
        """,
    )
    subparsers = parser.add_subparsers(dest="mode", help="Режим работы")

    generate_parser = subparsers.add_parser("generate", help="Генерация синтетических точек")
    _add_common_arguments(generate_parser)

    run_parser = subparsers.add_parser("run", help="Пошаговый прогон K-means")
    _add_common_arguments(run_parser)
    run_parser.add_argument("--input", type=str, default=None, help="Файл с точками в формате (x, y)")
    run_parser.add_argument("--delay-ms", type=int, default=0, help="Пауза между итерациями, мс")
    run_parser.add_argument("--max-iterations", type=int, default=100, help="Лимит итераций")
    run_parser.add_argument("--csv", type=str, default=None, help="Путь для выгрузки CSV")
    run_parser.add_argument(
        "--export-iteration",
        type=int,
        default=None,
        help="Номер итерации для CSV (по умолчанию: последняя)",
    )
    run_parser.add_argument("--plot", type=str, default=None, help="Путь для PNG графика")

    args = parser.parse_args(argv)

    if args.mode == "generate":
        return run_generate(args)
    if args.mode == "run":
        return run_clustering(args)

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())

"""
Тесты консольного интерфейса.
"""

import matplotlib
import pytest

matplotlib.use("Agg")

from kmeans_interactive.data.parser import parse  # noqa: E402
from kmeans_interactive.main import main  # noqa: E402


def test_generate_prints_points(capsys):
    code = main(["generate", "--points", "10", "--k", "2", "--seed", "3"])

    out = capsys.readouterr().out
    result = parse(out)
    assert code == 0
    assert result.added_count == 10
    assert result.error_count == 0


def test_generate_invalid_k(capsys):
    assert main(["generate", "--k", "0"]) == 1


def test_run_invalid_k():
    assert main(["run", "--k", "0", "--points", "10"]) == 1


def test_run_missing_input_file(tmp_path):
    assert main(["run", "--input", str(tmp_path / "nope.txt")]) == 1


def test_run_exports_csv_and_plot(tmp_path):
    csv_path = tmp_path / "distances.csv"
    png_path = tmp_path / "run.png"

    code = main(
        [
            "run",
            "--points", "30",
            "--k", "3",
            "--init", "kmeans++",
            "--csv", str(csv_path),
            "--export-iteration", "1",
            "--plot", str(png_path),
        ]
    )

    assert code == 0
    lines = csv_path.read_text(encoding="utf-8").splitlines()
    assert lines[0].startswith("Point,X,Y,Distance_to_C1,Distance_to_C2,Distance_to_C3")
    assert len(lines) == 31
    assert png_path.exists()


def test_run_from_file_with_too_few_points(tmp_path):
    points = tmp_path / "points.txt"
    points.write_text("(1, 1)\n(2, 2)\n", encoding="utf-8")

    assert main(["run", "--input", str(points), "--k", "3"]) == 1


@pytest.mark.parametrize("iteration", ["0", "500"])
def test_run_missing_iteration(tmp_path, iteration):
    csv_path = tmp_path / "x.csv"
    code = main(
        [
            "run",
            "--points", "20",
            "--k", "2",
            "--csv", str(csv_path),
            "--export-iteration", iteration,
        ]
    )

    assert code == 1
    assert not csv_path.exists()


def test_no_mode_prints_help(capsys):
    assert main([]) == 1

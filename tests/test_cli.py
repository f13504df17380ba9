import json

import yaml

from plandensity_cli.cli import main


def _write_inputs(tmp_path):
    config = tmp_path / "analysis.yaml"
    config.write_text(
        "grid:\n"
        "  origin_corner: [20, 20]\n"
        "  cell_size: 10\n"
        "  column_count: 2\n"
        "  row_count: 2\n"
        "top_k: 1\n"
        "split_area_tolerance: 0.1\n"
        "rendering:\n"
        "  pixels_per_unit: 5\n"
    )
    markers = tmp_path / "markers.yaml"
    markers.write_text(
        "markers:\n"
        "  - id: a\n"
        "    color: [36, 146, 251]\n"
        "    coordinates: [[1, 1], [9, 1], [9, 9], [1, 9], [1, 1]]\n"
        "  - id: b\n"
        "    color: [0, 0, 0]\n"
        "    coordinates: [[11, 11], [19, 11], [19, 19], [11, 19], [11, 11]]\n"
    )
    return config, markers


def test_analyze_writes_outputs(tmp_path, capsys):
    config, markers = _write_inputs(tmp_path)
    image = tmp_path / "heatmap.png"
    report = tmp_path / "report.json"

    code = main([
        "analyze", str(config), str(markers),
        "--color", "36", "146", "251",
        "--image", str(image), "--json", str(report),
    ])

    assert code == 0
    assert image.exists()
    data = json.loads(report.read_text())
    assert data["markers_processed"] == 1
    # Descending sweep from (20, 20): [0, 10] x [0, 10] is the last cell
    assert [c["hit_counter"] for c in data["cells"]] == [0, 0, 0, 1]
    assert "Analysis completed" in capsys.readouterr().out


def test_invalid_config_exits_with_error(tmp_path, capsys):
    _, markers = _write_inputs(tmp_path)
    config = tmp_path / "bad.yaml"
    config.write_text(
        "grid:\n"
        "  origin_corner: [0, 0]\n"
        "  cell_size: 0\n"
        "  column_count: 2\n"
        "  row_count: 2\n"
        "top_k: 1\n"
        "split_area_tolerance: 0.1\n"
    )

    code = main(["analyze", str(config), str(markers)])

    assert code == 1
    assert "cell_size" in capsys.readouterr().err


def test_no_command_prints_help(capsys):
    assert main([]) == 1
    assert "analyze" in capsys.readouterr().out


def test_reference_config_is_loadable_yaml(capsys):
    assert main(["reference-config"]) == 0

    data = yaml.safe_load(capsys.readouterr().out)
    assert data["grid"]["column_count"] == 169
    assert data["top_k"] == 4


def test_analyze_defaults_to_timestamped_run_folder(tmp_path, monkeypatch):
    config, markers = _write_inputs(tmp_path)
    monkeypatch.chdir(tmp_path)

    assert main(["analyze", str(config), str(markers)]) == 0

    (run_folder,) = (tmp_path / "runs" / "plandensity").iterdir()
    assert (run_folder / "heatmap.png").exists()
    assert (run_folder / "report.json").exists()

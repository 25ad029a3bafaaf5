from __future__ import annotations

import json
from pathlib import Path

import pytest

from theme_archive import main as cli


def test_build_command(tmp_path: Path, catalog_file: Path) -> None:
    out = tmp_path / "public"
    rc = cli.main(["build", "--catalog", str(catalog_file), "--out", str(out), "--title", "Phone Themes"])

    assert rc == 0
    assert (out / "themes-pages" / "vodafone-red.html").is_file()
    assert (out / "js" / "main.js").is_file()
    assert "<title>Phone Themes</title>" in (out / "index.html").read_text(encoding="utf-8")


def test_build_dry_run(tmp_path: Path, catalog_file: Path) -> None:
    out = tmp_path / "public"
    assert cli.main(["build", "--catalog", str(catalog_file), "--out", str(out), "--dry-run"]) == 0
    assert not out.exists()


def test_build_missing_catalog_returns_error(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    rc = cli.main(["build", "--catalog", str(tmp_path / "missing.json"), "--out", str(tmp_path / "public")])

    assert rc == 1
    assert any("INPUT_MISSING" in r.getMessage() for r in caplog.records)


def test_build_bad_config_returns_error(tmp_path: Path) -> None:
    config = tmp_path / "site.yaml"
    config.write_text("nonsense: true\n", encoding="utf-8")

    assert cli.main(["build", "--config", str(config)]) == 1


def test_options_text(catalog_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert cli.main(["options", "--catalog", str(catalog_file)]) == 0

    lines = capsys.readouterr().out.splitlines()
    assert lines == [
        "Models: K750i, K800i, K810i, W810i, X1, X2",
        "Platforms: A1, A2, Panther",
        "Resolutions: 176x220, 240x320, 480x800",
    ]


def test_options_json(catalog_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert cli.main(["options", "--catalog", str(catalog_file), "--json"]) == 0

    data = json.loads(capsys.readouterr().out)
    assert data["platforms"] == ["A1", "A2", "Panther"]


def test_filter_prints_matching_ids(catalog_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
    rc = cli.main(["filter", "--catalog", str(catalog_file), "--platform", "A1", "--type", "preloaded"])

    assert rc == 0
    assert capsys.readouterr().out.split() == ["w810-walkman"]


def test_filter_precedence_flag(catalog_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
    cli.main(["filter", "--catalog", str(catalog_file), "--type", "carrier", "--type-precedence", "carrier_first"])
    assert capsys.readouterr().out.split() == ["vodafone-red", "dark-nebula"]


def test_filter_no_results(catalog_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert cli.main(["filter", "--catalog", str(catalog_file), "--search", "nokia"]) == 0

    captured = capsys.readouterr()
    assert captured.out == ""
    assert "No themes match your search/filters." in captured.err


def test_unknown_type_choice_exits(catalog_file: Path) -> None:
    with pytest.raises(SystemExit):
        cli.main(["filter", "--catalog", str(catalog_file), "--type", "vendor"])


def test_build_embed_flag(tmp_path: Path, catalog_file: Path) -> None:
    out = tmp_path / "public"
    assert cli.main(["build", "--catalog", str(catalog_file), "--out", str(out), "--embed", "--no-assets"]) == 0

    index = (out / "index.html").read_text(encoding="utf-8")
    assert 'data-embedded="true"' in index
    assert '<a href="themes-pages/vodafone-red.html">' in index


def test_build_embed_from_env(tmp_path: Path, catalog_file: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("THEME_ARCHIVE_EMBED", "true")
    out = tmp_path / "public"
    assert cli.main(["build", "--catalog", str(catalog_file), "--out", str(out), "--no-assets"]) == 0

    assert 'data-embedded="true"' in (out / "index.html").read_text(encoding="utf-8")


def test_build_rejects_nul_in_id(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    catalog = tmp_path / "themes.json"
    catalog.write_text(json.dumps([{"id": "a\u0000b", "name": "Broken"}]), encoding="utf-8")

    rc = cli.main(["build", "--catalog", str(catalog), "--out", str(tmp_path / "public")])

    assert rc == 1
    assert any("CATALOG_MALFORMED" in r.getMessage() for r in caplog.records)

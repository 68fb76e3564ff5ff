import json

from pdfutils.settings import DEFAULT_SETTINGS, load_settings, save_settings


def test_defaults_when_missing(tmp_path):
    assert load_settings(tmp_path / "config.json") == DEFAULT_SETTINGS


def test_save_and_load(tmp_path):
    config = tmp_path / "nested" / "config.json"
    settings = load_settings(config)
    settings.update(image_prefix="page_", render_dpi=150, destination_directory=str(tmp_path))
    save_settings(config, settings)

    loaded = load_settings(config)
    assert loaded["image_prefix"] == "page_"
    assert loaded["render_dpi"] == 150
    assert loaded["destination_directory"] == str(tmp_path)


def test_broken_file_falls_back_to_defaults(tmp_path):
    config = tmp_path / "config.json"
    config.write_text("{not json")
    assert load_settings(config) == DEFAULT_SETTINGS


def test_bad_values_are_repaired(tmp_path):
    config = tmp_path / "config.json"
    config.write_text(json.dumps({
        "source_directory": str(tmp_path / "gone"),
        "render_dpi": "lots",
        "image_prefix": "",
    }))
    loaded = load_settings(config)
    assert loaded["source_directory"] == ""
    assert loaded["render_dpi"] == 300
    assert loaded["image_prefix"] == "img_"

import json

from brodef.browser import catalog as catalog_module
from brodef.browser.catalog import load_catalog


def test_packaged_catalog_tables(catalog) -> None:
    assert catalog.version
    assert dict(catalog.windows_progids)["MSEdgeHTM"] == "Edge"
    assert "Chrome (x86)" in dict(catalog.windows_paths)
    assert dict(catalog.linux_paths)["Firefox"][-1] == "/snap/bin/firefox"
    assert catalog.desktop_file_for("Chrome") == "google-chrome.desktop"
    assert catalog.desktop_file_for("Netscape") == ""
    assert catalog.is_known_mac_browser("com.apple.safari")
    assert not catalog.is_known_mac_browser("com.apple.mail")


def test_override_replaces_top_level_keys(tmp_path) -> None:
    override = tmp_path / "catalog.json"
    override.write_text(
        json.dumps({"version": "local", "linux_desktop_files": {"Floorp": "floorp.desktop"}}),
        encoding="utf-8",
    )

    catalog = load_catalog(override_path=override)

    assert catalog.version == "local"
    assert catalog.desktop_file_for("floorp") == "floorp.desktop"
    assert catalog.desktop_file_for("firefox") == ""
    assert catalog.is_known_mac_browser("com.google.Chrome")


def test_broken_override_is_ignored(tmp_path) -> None:
    override = tmp_path / "catalog.json"
    override.write_text("{not json", encoding="utf-8")
    assert load_catalog(override_path=override).desktop_file_for("firefox") == "firefox.desktop"

    override.write_text(json.dumps({"windows_paths": ["not", "a", "mapping"]}), encoding="utf-8")
    catalog = load_catalog(override_path=override)
    assert "Chrome" in dict(catalog.windows_paths)


def test_default_override_location(monkeypatch, tmp_path) -> None:
    override = tmp_path / "home-catalog.json"
    override.write_text(json.dumps({"version": "from-home"}), encoding="utf-8")
    monkeypatch.setattr(catalog_module, "CATALOG_OVERRIDE_PATH", override)

    assert load_catalog().version == "from-home"


def test_catalog_is_immutable_value(catalog, tmp_path) -> None:
    again = load_catalog(override_path=tmp_path / "absent.json")
    assert hash(catalog) == hash(again)
    assert dict(catalog.linux_desktop_files)["firefox"] == "firefox.desktop"

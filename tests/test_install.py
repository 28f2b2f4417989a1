from paneplex.install import VERSION_FILE, populate_data_dir

ASSETS = {
    "plugins/status-bar.wasm": b"status",
    "plugins/tab-bar.wasm": b"tabs",
    "plugins/strider.wasm": b"strider",
}


def test_first_run_installs_everything(tmp_path):
    written = populate_data_dir(tmp_path, ASSETS, "0.1.0")
    assert sorted(p.relative_to(tmp_path).as_posix() for p in written) == sorted(
        [*ASSETS, VERSION_FILE]
    )
    for name, content in ASSETS.items():
        assert (tmp_path / name).read_bytes() == content
    assert (tmp_path / "VERSION").read_text() == "0.1.0"


def test_same_version_keeps_existing_files(tmp_path):
    populate_data_dir(tmp_path, ASSETS, "0.1.0")
    (tmp_path / "plugins/strider.wasm").write_bytes(b"custom")
    written = populate_data_dir(tmp_path, ASSETS, "0.1.0")
    assert written == []
    assert (tmp_path / "plugins/strider.wasm").read_bytes() == b"custom"


def test_same_version_restores_missing_file(tmp_path):
    populate_data_dir(tmp_path, ASSETS, "0.1.0")
    (tmp_path / "plugins/tab-bar.wasm").unlink()
    written = populate_data_dir(tmp_path, ASSETS, "0.1.0")
    assert written == [tmp_path / "plugins/tab-bar.wasm"]
    assert (tmp_path / "plugins/tab-bar.wasm").read_bytes() == ASSETS["plugins/tab-bar.wasm"]


def test_new_version_overwrites(tmp_path):
    populate_data_dir(tmp_path, ASSETS, "0.1.0")
    (tmp_path / "plugins/strider.wasm").write_bytes(b"custom")
    written = populate_data_dir(tmp_path, ASSETS, "0.2.0")
    assert len(written) == len(ASSETS) + 1
    assert (tmp_path / "plugins/strider.wasm").read_bytes() == ASSETS["plugins/strider.wasm"]
    assert (tmp_path / "VERSION").read_text() == "0.2.0"


def test_creates_missing_data_dir(tmp_path):
    target = tmp_path / "deep" / "data"
    populate_data_dir(target, {}, "1.0")
    assert (target / "VERSION").read_text() == "1.0"
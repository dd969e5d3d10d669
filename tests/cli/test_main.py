import json

import pytest

from rc4kit.cli.main import EXIT_IO_ERROR, EXIT_OK, EXIT_USAGE, main
from rc4kit.libs.crypto import crypt

KEY_HEX = ["01", "02", "03", "04", "05"]
KEY = bytes.fromhex("0102030405")


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Run each test in an empty working dir with no per-user settings."""
    workdir = tmp_path / "work"
    workdir.mkdir()
    monkeypatch.chdir(workdir)

    user_settings = tmp_path / "user" / "settings.json"
    monkeypatch.setattr("rc4kit.infra.config.file_io.SETTING_PATH", user_settings)
    monkeypatch.setattr("rc4kit.cli.main.SETTING_PATH", user_settings)
    return user_settings


@pytest.fixture
def data_file(tmp_path):
    fp = tmp_path / "work" / "data.bin"
    fp.write_bytes(b"Hello World!")
    return fp


# ================================================================
# crypt
# ================================================================


def test_crypt_in_place(data_file, capsys):
    code = main(["crypt", "-f", str(data_file), "-k", *KEY_HEX])

    assert code == EXIT_OK
    assert data_file.read_bytes() == crypt(KEY, b"Hello World!")
    assert f"Processed {data_file}" in capsys.readouterr().out


def test_crypt_twice_restores(data_file):
    assert main(["crypt", "-f", str(data_file), "-k", *KEY_HEX]) == EXIT_OK
    assert main(["crypt", "-f", str(data_file), "-k", "0x0102030405"]) == EXIT_OK
    assert data_file.read_bytes() == b"Hello World!"


def test_crypt_prefixed_tokens(data_file):
    keys = ["0x1", "0x2", "0x3", "0x4", "0x5"]
    assert main(["crypt", "--file", str(data_file), "--key", *keys]) == EXIT_OK
    assert data_file.read_bytes() == crypt(KEY, b"Hello World!")


def test_crypt_quoted_key_argument(data_file):
    code = main(["crypt", "-f", str(data_file), "-k", "01 02 03 04 05"])

    assert code == EXIT_OK
    assert data_file.read_bytes() == crypt(KEY, b"Hello World!")


def test_crypt_output(data_file, tmp_path, capsys):
    out = tmp_path / "out" / "data.enc"

    code = main(["crypt", "-f", str(data_file), "-k", *KEY_HEX, "-o", str(out)])

    assert code == EXIT_OK
    assert data_file.read_bytes() == b"Hello World!"
    assert out.read_bytes() == crypt(KEY, b"Hello World!")
    assert f"Output written to {out}" in capsys.readouterr().out


def test_crypt_chunk_size_flag(data_file):
    code = main(["crypt", "-f", str(data_file), "-k", *KEY_HEX, "--chunk-size", "3"])
    assert code == EXIT_OK
    assert data_file.read_bytes() == crypt(KEY, b"Hello World!")


def test_crypt_config_disables_in_place(data_file, tmp_path):
    cfg = tmp_path / "cfg.toml"
    cfg.write_text(
        "[general]\nin_place = false\noutput_suffix = '.enc'\nchunk_size = 2\n",
        encoding="utf-8",
    )

    code = main(["crypt", "-f", str(data_file), "-k", *KEY_HEX, "--config", str(cfg)])

    assert code == EXIT_OK
    assert data_file.read_bytes() == b"Hello World!"
    enc = data_file.with_name("data.bin.enc")
    assert enc.read_bytes() == crypt(KEY, b"Hello World!")


def test_crypt_local_settings_file_is_used(data_file):
    (data_file.parent / "settings.json").write_text(
        json.dumps({"general": {"in_place": False}}), encoding="utf-8"
    )

    assert main(["crypt", "-f", str(data_file), "-k", *KEY_HEX]) == EXIT_OK
    assert data_file.read_bytes() == b"Hello World!"
    assert data_file.with_name("data.bin.rc4").exists()


# ================================================================
# crypt errors
# ================================================================


def test_crypt_key_too_short(data_file, capsys):
    code = main(["crypt", "-f", str(data_file), "-k", "01", "02", "03", "04"])

    assert code == EXIT_USAGE
    assert "at least 5 bytes" in capsys.readouterr().err
    assert data_file.read_bytes() == b"Hello World!"


def test_crypt_key_too_long(data_file, capsys):
    code = main(["crypt", "-f", str(data_file), "-k", "ab" * 257])

    assert code == EXIT_USAGE
    assert "at most 256 bytes" in capsys.readouterr().err
    assert data_file.read_bytes() == b"Hello World!"


def test_crypt_invalid_hex(data_file, capsys):
    code = main(["crypt", "-f", str(data_file), "-k", "01", "02", "zz", "04", "05"])

    assert code == EXIT_USAGE
    assert "'zz'" in capsys.readouterr().err


def test_crypt_missing_file(tmp_path, capsys):
    code = main(["crypt", "-f", str(tmp_path / "missing.bin"), "-k", *KEY_HEX])

    assert code == EXIT_IO_ERROR
    assert "File not found" in capsys.readouterr().err


def test_crypt_directory(tmp_path, capsys):
    code = main(["crypt", "-f", str(tmp_path), "-k", *KEY_HEX])

    assert code == EXIT_IO_ERROR
    err = capsys.readouterr().err
    assert "Is a directory" in err
    assert "File not found" not in err


def test_crypt_invalid_config(data_file, tmp_path, capsys):
    cfg = tmp_path / "cfg.toml"
    cfg.write_text("[general]\nchunk_size = 0\n", encoding="utf-8")

    code = main(["crypt", "-f", str(data_file), "-k", *KEY_HEX, "--config", str(cfg)])

    assert code == EXIT_USAGE
    assert "invalid config" in capsys.readouterr().err


def test_crypt_unparsable_config(data_file, tmp_path):
    cfg = tmp_path / "cfg.toml"
    cfg.write_text("not = [valid", encoding="utf-8")

    code = main(["crypt", "-f", str(data_file), "-k", *KEY_HEX, "--config", str(cfg)])
    assert code == EXIT_USAGE


@pytest.mark.parametrize(
    "argv",
    [
        [],
        ["crypt"],
        ["crypt", "-f", "x.bin"],
        ["crypt", "-k", "01"],
        ["crypt", "-f", "x.bin", "-k", "0102030405", "--chunk-size", "0"],
        ["crypt", "-f", "x.bin", "-k", "0102030405", "--log-level", "LOUD"],
        ["config"],
    ],
)
def test_usage_errors_exit_2(argv):
    with pytest.raises(SystemExit) as exc:
        main(argv)
    assert exc.value.code == 2


def test_version(capsys):
    with pytest.raises(SystemExit) as exc:
        main(["--version"])
    assert exc.value.code == 0
    assert "rc4kit" in capsys.readouterr().out


# ================================================================
# config
# ================================================================


def test_config_init_default_path(tmp_path):
    assert main(["config", "init"]) == EXIT_OK
    assert (tmp_path / "work" / "settings.toml").is_file()


def test_config_init_refuses_overwrite(tmp_path, capsys):
    target = tmp_path / "my.toml"
    target.write_text("keep = true", encoding="utf-8")

    assert main(["config", "init", "--path", str(target)]) == EXIT_IO_ERROR
    assert target.read_text(encoding="utf-8") == "keep = true"
    assert "already exists" in capsys.readouterr().err

    assert main(["config", "init", "--path", str(target), "--force"]) == EXIT_OK
    assert "chunk_size" in target.read_text(encoding="utf-8")


def test_config_set(tmp_path, isolated_settings):
    source = tmp_path / "mine.toml"
    source.write_text("[general]\nchunk_size = 512\n", encoding="utf-8")

    assert main(["config", "set", str(source)]) == EXIT_OK
    assert json.loads(isolated_settings.read_text(encoding="utf-8")) == {
        "general": {"chunk_size": 512}
    }


def test_config_set_then_used_by_crypt(tmp_path, data_file):
    source = tmp_path / "mine.toml"
    source.write_text("[general]\nin_place = false\n", encoding="utf-8")

    assert main(["config", "set", str(source)]) == EXIT_OK
    assert main(["crypt", "-f", str(data_file), "-k", *KEY_HEX]) == EXIT_OK
    assert data_file.read_bytes() == b"Hello World!"
    assert data_file.with_name("data.bin.rc4").exists()


def test_config_set_missing_source(tmp_path):
    assert main(["config", "set", str(tmp_path / "nope.toml")]) == EXIT_IO_ERROR


def test_config_set_invalid_source(tmp_path):
    source = tmp_path / "bad.toml"
    source.write_text("x = [1,,2]", encoding="utf-8")
    assert main(["config", "set", str(source)]) == EXIT_USAGE


@pytest.mark.parametrize(
    "content",
    [
        '[general]\nin_place = "false"\n',
        "[general]\nchunk_size = 0\n",
        "[general]\noutput_suffix = 5\n",
        "[general.debug]\nlog_level = 'LOUD'\n",
    ],
)
def test_config_set_rejects_bad_settings(tmp_path, isolated_settings, capsys, content):
    source = tmp_path / "bad.toml"
    source.write_text(content, encoding="utf-8")

    assert main(["config", "set", str(source)]) == EXIT_USAGE
    assert "Error:" in capsys.readouterr().err
    assert not isolated_settings.exists()


def test_config_init_replaces_broken_local_settings(tmp_path, capsys):
    local = tmp_path / "work" / "settings.toml"
    local.write_text("[general]\nchunk_size = 0\n", encoding="utf-8")

    assert main(["config", "init", "--force"]) == EXIT_OK
    assert "ignoring invalid config" in capsys.readouterr().err
    assert "chunk_size = 65536" in local.read_text(encoding="utf-8")

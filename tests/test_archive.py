import shutil
import tarfile

import pytest

from conftest import make_zip
from firstboot_installer.lib.archive import archive_stem, extract_archive, locate_archive
from firstboot_installer.lib.discovery import find_executable, find_executables, list_dir


def test_locate_first_match_wins(tmp_path):
    first = tmp_path / "first"
    second = tmp_path / "second"
    first.mkdir()
    second.mkdir()
    (second / "pkg.zip").write_bytes(b"2")

    assert locate_archive("pkg.zip", [first, second]) == second / "pkg.zip"

    (first / "pkg.zip").write_bytes(b"1")
    assert locate_archive("pkg.zip", [first, second]) == first / "pkg.zip"
    assert locate_archive("other.zip", [first, second]) is None


def test_locate_ignores_directories(tmp_path):
    (tmp_path / "pkg.zip").mkdir()
    assert locate_archive("pkg.zip", [tmp_path]) is None


def test_extract_zip_replaces_previous_contents(tmp_path):
    archive = make_zip(tmp_path / "pkg.zip", {"a/setup.exe": b"MZ", "a/cfg.ini": "new"})
    dst = tmp_path / "out"
    (dst / "a").mkdir(parents=True)
    (dst / "a" / "cfg.ini").write_text("old")
    (dst / "old_setup.exe").write_bytes(b"MZ")

    assert extract_archive(archive, dst) == dst
    assert (dst / "a" / "cfg.ini").read_text() == "new"
    assert (dst / "a" / "setup.exe").read_bytes() == b"MZ"
    assert not (dst / "old_setup.exe").exists()


def test_extract_tar_gz(tmp_path):
    payload = tmp_path / "setup.exe"
    payload.write_bytes(b"MZ")
    archive = tmp_path / "tools.tar.gz"
    with tarfile.open(archive, "w:gz") as tf:
        tf.add(payload, arcname="bin/setup.exe")

    dst = extract_archive(archive, tmp_path / "out")
    assert (dst / "bin" / "setup.exe").read_bytes() == b"MZ"


def test_extract_missing_or_unknown_format(tmp_path):
    with pytest.raises(FileNotFoundError):
        extract_archive(tmp_path / "nope.zip", tmp_path / "out")

    odd = tmp_path / "pkg.rar"
    odd.write_bytes(b"Rar!")
    with pytest.raises(shutil.ReadError):
        extract_archive(odd, tmp_path / "out")


@pytest.mark.parametrize(
    "name, stem",
    [
        ("software.zip", "software"),
        ("tools.tar.gz", "tools"),
        ("tools.TGZ", "tools"),
        ("pkg.rar", "pkg"),
        ("noext", "noext"),
    ],
)
def test_archive_stem(name, stem):
    assert archive_stem(name) == stem


def test_discovery_order_is_lexicographic(tmp_path):
    for rel in ["b/setup.exe", "A/z.EXE", "a1/y.exe", "c.exe", "a1/readme.txt"]:
        p = tmp_path / rel
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_bytes(b"MZ")

    found = [p.relative_to(tmp_path).as_posix() for p in find_executables(tmp_path)]
    assert found == ["A/z.EXE", "a1/y.exe", "b/setup.exe", "c.exe"]
    assert find_executable(tmp_path, [".txt"]) == tmp_path / "a1" / "readme.txt"
    assert find_executable(tmp_path / "missing") is None


def test_list_dir_marks_directories(tmp_path):
    (tmp_path / "sub").mkdir()
    (tmp_path / "File.txt").write_text("x")
    assert list_dir(tmp_path) == ["File.txt", "sub/"]
    with pytest.raises(FileNotFoundError):
        list_dir(tmp_path / "missing")

"""Test expression loading from text files and archives."""
from pathlib import Path
import tarfile
import zipfile

import py7zr
import pytest

from arithmetic_calculator.batch.sources import build_output_path, read_expressions


@pytest.mark.parametrize("name,expected", [
    ("ops.txt", "ops_txt_results.txt"),
    ("operations_short.7z", "operations_short_7z_results.txt"),
    ("ops.tar.xz", "ops_tar_xz_results.txt"),
    ("ops", "ops_results.txt"),
])
def test_build_output_path(tmp_path: Path, name: str, expected: str) -> None:
    """The output file sits next to the input with a suffix-safe name."""
    assert build_output_path(tmp_path / name) == tmp_path / expected


def test_read_txt(tmp_path: Path) -> None:
    """Plain text files are read line by line."""
    txt = tmp_path / "ops.txt"
    txt.write_text("1+1\n\n2*2\n")
    assert read_expressions(txt) == ["1+1", "", "2*2"]


def test_read_zip(tmp_path: Path) -> None:
    """Check that a .zip archive can be read correctly."""
    txt = tmp_path / "ops.txt"
    txt.write_text("3+3\n")

    zip_path = tmp_path / "ops.zip"
    with zipfile.ZipFile(zip_path, "w") as zf:
        zf.writestr("README.md", "not this one")
        zf.write(txt, arcname="ops.txt")

    assert read_expressions(zip_path) == ["3+3"]


def test_read_tar_xz(tmp_path: Path) -> None:
    """Check that a .tar.xz archive can be read correctly."""
    txt = tmp_path / "ops.txt"
    txt.write_text("4*4\n(1+2)/3\n")

    tar_path = tmp_path / "ops.tar.xz"
    with tarfile.open(tar_path, "w:xz") as tf:
        tf.add(txt, arcname="ops.txt")

    assert read_expressions(tar_path) == ["4*4", "(1+2)/3"]


def test_read_7z(tmp_path: Path) -> None:
    """Check that a .7z archive can be read correctly."""
    txt = tmp_path / "ops.txt"
    txt.write_text("5-2\n")

    archive_path = tmp_path / "ops.7z"
    with py7zr.SevenZipFile(archive_path, "w") as archive:
        archive.write(txt, arcname="ops.txt")

    assert read_expressions(archive_path) == ["5-2"]


def test_archive_without_txt(tmp_path: Path) -> None:
    """Verify that reading fails if no .txt file exists in the archive."""
    zip_path = tmp_path / "empty.zip"
    with zipfile.ZipFile(zip_path, "w") as zf:
        zf.writestr("data.bin", b"\x00\x01")

    with pytest.raises(ValueError):
        read_expressions(zip_path)


def test_unsupported_format(tmp_path: Path) -> None:
    """Ensure unsupported formats raise a ValueError."""
    file_path = tmp_path / "ops.rar"
    file_path.write_text("1+1")

    with pytest.raises(ValueError):
        read_expressions(file_path)


@pytest.mark.parametrize("name", ["OPS.TXT", "ops.Txt"])
def test_read_txt_uppercase_suffix(tmp_path: Path, name: str) -> None:
    """Suffixes are matched case-insensitively."""
    txt = tmp_path / name
    txt.write_text("6/3\n")
    assert read_expressions(txt) == ["6/3"]


def test_read_zip_uppercase_names(tmp_path: Path) -> None:
    """Upper-case archive and member suffixes are accepted."""
    zip_path = tmp_path / "OPS.ZIP"
    with zipfile.ZipFile(zip_path, "w") as zf:
        zf.writestr("OPS.TXT", "7*7\n")

    assert read_expressions(zip_path) == ["7*7"]

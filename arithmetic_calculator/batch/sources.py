"""Load expression lines from text files and archives."""
from pathlib import Path
import tarfile
import tempfile
from typing import List
import zipfile

import py7zr


def build_output_path(input_path: Path) -> Path:
    """
    Construct the result file path next to the input file.

    - Preserves the original folder
    - Replaces dots in extensions with underscores
    - Appends '_results.txt' at the end

    Examples
    --------
    input: resources/operations_short.7z
    output: resources/operations_short_7z_results.txt

    :param input_path: Path to the input file
    :return: Path to the output file
    """
    stem = input_path.name
    for suffix in input_path.suffixes:
        stem = stem[: -len(suffix)]
    suffix_safe = "".join(input_path.suffixes).replace(".", "_")
    return input_path.with_name(f"{stem}{suffix_safe}_results.txt")


def _first_txt(names: List[str], kind: str) -> str:
    txt_files = [name for name in names if name.lower().endswith(".txt")]
    if not txt_files:
        raise ValueError(f"📄❌ No .txt file found in {kind} archive")
    return txt_files[0]


def _read_zip(archive_path: Path) -> str:
    with zipfile.ZipFile(archive_path, "r") as zf:
        member = _first_txt(zf.namelist(), "zip")
        return zf.read(member).decode("utf-8")


def _read_tar_xz(archive_path: Path) -> str:
    with tarfile.open(archive_path, "r:xz") as tf:
        members = {m.name: m for m in tf.getmembers() if m.isfile()}
        member = _first_txt(list(members), "tar.xz")
        extracted = tf.extractfile(members[member])
        return extracted.read().decode("utf-8")


def _read_7z(archive_path: Path) -> str:
    # py7zr only extracts to disk, so go through a scratch directory
    with tempfile.TemporaryDirectory() as tmpdir:
        tmpdir_path = Path(tmpdir)
        with py7zr.SevenZipFile(archive_path, mode="r") as archive:
            member = _first_txt(archive.getnames(), "7z")
            archive.extract(path=tmpdir_path, targets=[member])
        return (tmpdir_path / member).read_text(encoding="utf-8")


def read_expressions(input_file: Path) -> List[str]:
    """
    Read the expression lines of a plain text file or of the first .txt member of an archive.

    Supported formats:
    - .txt
    - .zip
    - .tar.xz
    - .7z

    :param Path input_file: Path to the input file or archive

    :return: Raw lines, blank ones included
    :rtype: List[str]
    :raises ValueError: If the format is unsupported or an archive contains no .txt file
    """
    suffixes = [s.lower() for s in input_file.suffixes]
    suffix = suffixes[-1] if suffixes else ""

    if suffix == ".txt":
        content = input_file.read_text(encoding="utf-8")
    elif suffix == ".zip":
        content = _read_zip(input_file)
    elif suffixes[-2:] == [".tar", ".xz"]:
        content = _read_tar_xz(input_file)
    elif suffix == ".7z":
        content = _read_7z(input_file)
    else:
        raise ValueError(f"📄❌ Unsupported input format: {''.join(input_file.suffixes) or input_file.name}")
    return content.splitlines()

"""Tests for the command line front end."""

from image_rename_split import cli
from image_rename_split.utils.utils import expand_inputs


def test_expand_inputs_directory_sorted(make_jpeg, tmp_path):
    b = make_jpeg("b.jpg", size=(20, 10))
    a = make_jpeg("A.JPEG", size=(20, 10))
    (tmp_path / "src" / "notes.txt").write_text("x")
    (tmp_path / "src" / "._a.jpg").write_bytes(b"")

    assert expand_inputs([tmp_path / "src"]) == [a, b]


def test_expand_inputs_keeps_file_order(make_jpeg, tmp_path):
    b = make_jpeg("b.jpg", size=(20, 10))
    a = make_jpeg("a.jpg", size=(20, 10))
    missing = tmp_path / "missing.jpg"
    assert expand_inputs([str(b), str(a), str(missing)]) == [b.resolve(), a.resolve(), missing]


def test_main_splits_directory(make_jpeg, tmp_path):
    for i in range(4):
        make_jpeg(f"{i}.jpg", size=(60, 30))
    out = tmp_path / "out"

    assert cli.main([str(tmp_path / "src"), "-o", str(out)]) == 0

    names = sorted(p.name for p in (out / "SPL").iterdir())
    assert names == [f"{n:02d}_{s}.jpg" for n in range(1, 5) for s in (1, 2)]


def test_main_without_inputs(capsys):
    assert cli.main([]) == 0
    assert "No files selected" in capsys.readouterr().out


def test_main_no_valid_images(tmp_path, capsys):
    bad = tmp_path / "bad.jpg"
    bad.write_text("nope")
    assert cli.main([str(bad), "-o", str(tmp_path)]) == 1
    assert "No valid images found" in capsys.readouterr().out

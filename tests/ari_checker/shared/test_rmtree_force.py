import os
import stat

from ari_checker.shared.rmtree_force import rmtree_force


def test_rmtree_force_removes_directory(tmp_path):
    target = tmp_path / "test_dir"
    target.mkdir()
    (target / "file.txt").write_text("test", encoding="utf-8")

    assert rmtree_force(target) is True
    assert not target.exists()


def test_rmtree_force_handles_readonly_files(tmp_path):
    target = tmp_path / "readonly_dir"
    (target / "objects").mkdir(parents=True)
    test_file = target / "objects" / "pack"
    test_file.write_text("test", encoding="utf-8")

    # git writes object files read-only
    os.chmod(test_file, stat.S_IRUSR | stat.S_IRGRP | stat.S_IROTH)

    rmtree_force(target)

    assert not target.exists()


def test_rmtree_force_missing_path(tmp_path):
    assert rmtree_force(tmp_path / "absent") is False


def test_rmtree_force_removes_symlink_not_target(tmp_path):
    real = tmp_path / "real"
    real.mkdir()
    (real / "keep.txt").write_text("keep", encoding="utf-8")
    link = tmp_path / "link"
    link.symlink_to(real, target_is_directory=True)

    rmtree_force(link)

    assert not link.exists() and not link.is_symlink()
    assert (real / "keep.txt").exists()

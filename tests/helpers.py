from pathlib import Path

from git import Repo


def mark_by_dir(items, base_dir, marker):
    base = Path(base_dir).resolve()
    for item in items:
        # pytest 7/8: item.path (Path) on new versions, item.fspath on old ones
        p = getattr(item, "path", None)
        p = Path(p) if p is not None else Path(str(getattr(item, "fspath")))
        try:
            p.resolve().relative_to(base)
        except ValueError:
            continue
        item.add_marker(marker)


def make_remote_repo(base: Path, owner: str, name: str, files: dict[str, str]) -> Path:
    """Create a committed git repository at ``base/owner/name.git``.

    Matches the clone URL layout ``<clone_base_url>/<owner>/<repo>.git``.
    """
    repo_dir = base / owner / f"{name}.git"
    repo = Repo.init(repo_dir)
    with repo.config_writer() as cw:
        cw.set_value("user", "name", "Test")
        cw.set_value("user", "email", "test@example.com")
    for rel, content in files.items():
        fp = repo_dir / rel
        fp.parent.mkdir(parents=True, exist_ok=True)
        fp.write_text(content, encoding="utf-8")
    repo.index.add(list(files))
    repo.index.commit("initial commit")
    repo.close()
    return repo_dir

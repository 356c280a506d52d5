from __future__ import annotations

from pathlib import Path

from core.services.paths import resolve_install_dir


def test_empty_input_uses_default(tmp_path: Path):
    default = tmp_path / "3scale-services"

    assert resolve_install_dir("", default=default) == default
    assert resolve_install_dir(None, default=default) == default
    assert resolve_install_dir("   ", default=default) == default


def test_tilde_expands_to_home(tmp_path: Path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path))

    resolved = resolve_install_dir("~/services", default=tmp_path / "unused")

    assert resolved == Path(tmp_path.resolve()) / "services"


def test_relative_path_is_anchored_at_cwd(tmp_path: Path):
    resolved = resolve_install_dir("envs/porta", default=tmp_path, cwd=tmp_path)

    assert resolved == tmp_path.resolve() / "envs" / "porta"


def test_dot_segments_are_normalised_without_existing(tmp_path: Path):
    raw = f"{tmp_path}/a/./b/../c"

    resolved = resolve_install_dir(raw, default=tmp_path)

    assert resolved == tmp_path.resolve() / "a" / "c"
    assert not resolved.exists()

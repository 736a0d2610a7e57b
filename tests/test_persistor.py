"""
Tests for secure token persistence
"""

import os
import stat
from pathlib import Path

import pytest

import persistor as persistor_module
from credential import Credential


def _mode(path):
    return stat.S_IMODE(path.stat().st_mode)


def test_persist_writes_both_copies_mode_600(settings, workdirs, persistor):
    paths = persistor.persist(Credential("ghp_VALID"))

    assert paths.scratch.read_text().strip() == "ghp_VALID"
    assert paths.durable.read_text().strip() == "ghp_VALID"
    assert _mode(paths.scratch) == 0o600
    assert _mode(paths.durable) == 0o600
    assert _mode(settings.token_dir) == 0o700


def test_existing_secure_dir_is_tightened(settings, workdirs, persistor):
    settings.token_dir.mkdir(parents=True, mode=0o755)
    settings.token_dir.chmod(0o755)

    persistor.persist(Credential("ghp_VALID"))

    assert _mode(settings.token_dir) == 0o700


def test_persist_replaces_existing_copies(settings, workdirs, persistor):
    settings.scratch_token_path.write_text("ghp_OLD_AND_LONGER_VALUE\n")
    settings.scratch_token_path.chmod(0o644)

    persistor.persist(Credential("ghp_NEW"))
    persistor.persist(Credential("ghp_NEW"))

    assert settings.scratch_token_path.read_text() == "ghp_NEW\n"
    assert settings.durable_token_path.read_text() == "ghp_NEW\n"
    assert _mode(settings.scratch_token_path) == 0o600


def test_planted_scratch_symlink_is_replaced_not_followed(settings, workdirs, persistor, tmp_path):
    """A link left at the predictable scratch name must not redirect the write"""
    victim = tmp_path / "victim"
    victim.write_text("important\n")
    victim.chmod(0o644)
    settings.scratch_token_path.symlink_to(victim)

    persistor.persist(Credential("ghp_VALID"))

    assert victim.read_text() == "important\n"
    assert _mode(victim) == 0o644
    assert not settings.scratch_token_path.is_symlink()
    assert settings.scratch_token_path.read_text() == "ghp_VALID\n"
    assert _mode(settings.scratch_token_path) == 0o600


def test_scratch_write_leaves_no_temp_files(settings, workdirs, persistor):
    persistor.persist(Credential("ghp_VALID"))
    assert [p.name for p in settings.work_dir.iterdir()] == [settings.token_filename]


def test_trusted_reuse_skips_durable_write(settings, workdirs, persistor, monkeypatch):
    settings.token_dir.mkdir(parents=True)
    settings.durable_token_path.write_text("ghp_KEPT\n")
    cred = Credential("ghp_KEPT", source=settings.durable_token_path, trusted=True)

    def fail(*args, **kwargs):
        raise AssertionError("durable copy should not be rewritten")

    monkeypatch.setattr(persistor_module, "_write_atomically", fail)

    paths = persistor.persist(cred)
    assert paths.scratch.read_text().strip() == "ghp_KEPT"


def test_durable_write_leaves_no_temp_files(settings, workdirs, persistor):
    persistor.persist(Credential("ghp_VALID"))
    assert [p.name for p in settings.token_dir.iterdir()] == [settings.token_filename]


def test_interrupted_durable_write_keeps_previous_token(settings, workdirs, persistor, monkeypatch):
    settings.token_dir.mkdir(parents=True)
    settings.durable_token_path.write_text("ghp_PREVIOUS\n")

    real_replace = os.replace

    def boom(src, dst):
        if Path(dst) == settings.durable_token_path:
            raise OSError("disk full")
        real_replace(src, dst)

    monkeypatch.setattr(persistor_module.os, "replace", boom)

    with pytest.raises(OSError):
        persistor.persist(Credential("ghp_NEW"))

    assert settings.durable_token_path.read_text() == "ghp_PREVIOUS\n"
    assert [p.name for p in settings.token_dir.iterdir()] == [settings.token_filename]


def test_remove_scratch(settings, workdirs, persistor):
    persistor.persist(Credential("ghp_VALID"))

    assert persistor.remove_scratch()
    assert not settings.scratch_token_path.exists()
    assert settings.durable_token_path.exists()
    assert not persistor.remove_scratch()


def test_discard_removes_only_matching_copies(settings, workdirs, persistor):
    settings.token_dir.mkdir(parents=True)
    settings.durable_token_path.write_text("ghp_GOOD\n")
    settings.scratch_token_path.write_text("ghp_BAD\n")
    source = workdirs / ".github_token"
    source.write_text("ghp_BAD")

    removed = persistor.discard(Credential("ghp_BAD", source=source))

    assert set(removed) == {settings.scratch_token_path, source}
    assert not settings.scratch_token_path.exists()
    assert not source.exists()
    assert settings.durable_token_path.read_text() == "ghp_GOOD\n"


def test_discard_with_nothing_stored(settings, workdirs, persistor):
    assert persistor.discard(Credential("ghp_BAD")) == []

"""Tests for ArtifactStore.

Covers: save/load/exists per category, overwrite, atomic write, name
validation, and NotFoundError on misses.
"""

import json
import os
import stat
from pathlib import Path

import pytest

from reopt_client.errors import NotFoundError
from reopt_client.storage.artifact_store import ArtifactCategory, ArtifactStore


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def store(tmp_path: Path) -> ArtifactStore:
    """Create an artifact store backed by a temp directory."""
    return ArtifactStore(tmp_path)


@pytest.fixture
def sample_post() -> dict:
    return {
        "Site": {"latitude": 34.5794343, "longitude": -118.1164613},
        "ElectricLoad": {"doe_reference_name": "RetailStore", "annual_kwh": 100000.0},
        "PV": {"array_type": 0},
    }


# ===================================================================
# Layout
# ===================================================================


class TestLayout:
    """Category directories are created on construction."""

    def test_category_directories_created(self, tmp_path: Path) -> None:
        ArtifactStore(tmp_path / "nested" / "root")
        for name in ("inputs", "outputs", "load_profiles", "electric_rates"):
            assert (tmp_path / "nested" / "root" / name).is_dir()

    def test_path_for_uses_json_suffix(self, store: ArtifactStore, tmp_path: Path) -> None:
        assert store.path_for(ArtifactCategory.OUTPUT, "response_2") == (
            tmp_path / "outputs" / "response_2.json"
        )


# ===================================================================
# Save and load
# ===================================================================


class TestSaveLoad:
    """save() then load() returns an equal document."""

    @pytest.mark.parametrize("category", list(ArtifactCategory))
    def test_round_trip_per_category(
        self, store: ArtifactStore, sample_post: dict, category: ArtifactCategory,
    ) -> None:
        store.save(category, "post_2", sample_post)
        assert store.load(category, "post_2") == sample_post

    def test_save_writes_pretty_json(
        self, store: ArtifactStore, sample_post: dict, tmp_path: Path,
    ) -> None:
        path = store.save(ArtifactCategory.REQUEST, "post_2", sample_post)
        assert path == tmp_path / "inputs" / "post_2.json"
        text = path.read_text(encoding="utf-8")
        assert text == json.dumps(sample_post, indent=2)

    def test_overwrite_replaces_document(self, store: ArtifactStore) -> None:
        store.save(ArtifactCategory.OUTPUT, "results_file", {"status": "Optimizing...", "big": "x" * 500})
        store.save(ArtifactCategory.OUTPUT, "results_file", {"status": "optimal"})
        assert store.load(ArtifactCategory.OUTPUT, "results_file") == {"status": "optimal"}

    def test_categories_are_independent(self, store: ArtifactStore) -> None:
        store.save(ArtifactCategory.REQUEST, "same", {"kind": "request"})
        store.save(ArtifactCategory.OUTPUT, "same", {"kind": "output"})
        assert store.load(ArtifactCategory.REQUEST, "same") == {"kind": "request"}
        assert store.load(ArtifactCategory.OUTPUT, "same") == {"kind": "output"}

    def test_no_temp_files_left_behind(self, store: ArtifactStore, tmp_path: Path) -> None:
        store.save(ArtifactCategory.RATE, "PGE_E20", {"energyratestructure": []})
        assert [p.name for p in (tmp_path / "electric_rates").iterdir()] == ["PGE_E20.json"]

    def test_unserializable_document_leaves_no_file(
        self, store: ArtifactStore, tmp_path: Path,
    ) -> None:
        with pytest.raises(TypeError):
            store.save(ArtifactCategory.OUTPUT, "broken", {"bad": object()})
        assert list((tmp_path / "outputs").iterdir()) == []

    @pytest.mark.skipif(os.name == "nt", reason="POSIX permission bits")
    def test_saved_file_mode_follows_umask(self, store: ArtifactStore) -> None:
        old_umask = os.umask(0o022)
        try:
            path = store.save(ArtifactCategory.OUTPUT, "results_file", {"status": "optimal"})
        finally:
            os.umask(old_umask)
        assert stat.S_IMODE(path.stat().st_mode) == 0o644


# ===================================================================
# Exists / missing
# ===================================================================


class TestMissing:
    def test_exists_false_before_save(self, store: ArtifactStore) -> None:
        assert not store.exists(ArtifactCategory.RATE, "PGE_E20")

    def test_exists_true_after_save(self, store: ArtifactStore) -> None:
        store.save(ArtifactCategory.RATE, "PGE_E20", {})
        assert store.exists(ArtifactCategory.RATE, "PGE_E20")

    def test_load_missing_raises_not_found(self, store: ArtifactStore) -> None:
        with pytest.raises(NotFoundError) as exc_info:
            store.load(ArtifactCategory.REQUEST, "never_saved")
        assert exc_info.value.name == "never_saved"
        assert exc_info.value.category == "inputs"


# ===================================================================
# Name validation
# ===================================================================


class TestNameValidation:
    @pytest.mark.parametrize("name", ["", "   ", "../escape", "a/b", "a\\b", ".."])
    def test_invalid_names_rejected(self, store: ArtifactStore, name: str) -> None:
        with pytest.raises(ValueError):
            store.save(ArtifactCategory.REQUEST, name, {})

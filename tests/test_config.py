"""Tests für das Konfigurationssystem."""

from pathlib import Path

import pytest

from config.defaults import default_app_config, default_storage
from config.manager import ConfigManager
from config.schema import AppConfig, StorageConfig, ValidationConfig


# ─── DEFAULT-KONFIGURATION ────────────────────────────────────────────────────

class TestDefaultConfig:
    def test_default_file_names(self):
        """Standard-Dateinamen im Arbeitsverzeichnis."""
        sc = default_storage()
        assert sc.students_path == Path("students.txt")
        assert sc.teachers_path == Path("teachers.txt")
        assert sc.classrooms_path == Path("classrooms.txt")
        assert sc.no_teacher_sentinel == "null"

    def test_default_storage_with_dir(self, tmp_path):
        sc = default_storage(tmp_path)
        assert sc.classrooms_path == tmp_path / "classrooms.txt"

    def test_default_validation_rules(self):
        cfg = default_app_config()
        assert cfg.validation.min_age == 16
        assert cfg.validation.max_age == 100
        assert cfg.validation.min_id == 1


# ─── PYDANTIC-VALIDIERUNG ─────────────────────────────────────────────────────

class TestPydanticValidation:
    def test_age_bounds_inverted_raises(self):
        with pytest.raises(Exception):
            ValidationConfig(min_age=50, max_age=20)

    def test_numeric_sentinel_raises(self):
        """Ein Platzhalter, der wie eine Lehrkraft-ID aussieht, ist unzulässig."""
        with pytest.raises(Exception):
            StorageConfig(no_teacher_sentinel="0")

    def test_empty_sentinel_raises(self):
        with pytest.raises(Exception):
            StorageConfig(no_teacher_sentinel="")


# ─── CONFIG-MANAGER ───────────────────────────────────────────────────────────

class TestConfigManager:
    def test_missing_file_gives_defaults(self, tmp_path):
        mgr = ConfigManager(tmp_path / "fehlt.yaml")
        assert mgr.first_run_check()
        assert mgr.load() == default_app_config()

    def test_save_and_load_roundtrip(self, tmp_path):
        path = tmp_path / "college.yaml"
        mgr = ConfigManager(path)
        config = AppConfig(
            school_name="Test-College",
            storage=StorageConfig(data_dir=tmp_path / "daten", no_teacher_sentinel="-"),
            validation=ValidationConfig(min_age=10, max_age=30),
        )
        mgr.save(config)
        assert not mgr.first_run_check()
        loaded = mgr.load()
        assert loaded.school_name == "Test-College"
        assert loaded.storage.data_dir == tmp_path / "daten"
        assert loaded.storage.no_teacher_sentinel == "-"
        assert loaded.validation.max_age == 30

    def test_saved_yaml_has_comments(self, tmp_path):
        path = tmp_path / "college.yaml"
        ConfigManager(path).save(default_app_config())
        text = path.read_text(encoding="utf-8")
        assert text.startswith("# ====")
        assert "Dateiablage" in text
        assert "students_file: students.txt" in text

    def test_invalid_yaml_content_raises_value_error(self, tmp_path):
        path = tmp_path / "kaputt.yaml"
        path.write_text("validation:\n  min_age: 80\n  max_age: 20\n", encoding="utf-8")
        with pytest.raises(ValueError, match="ungültig"):
            ConfigManager(path).load()

    def test_yaml_syntax_error_raises_value_error(self, tmp_path):
        """Kaputte YAML-Syntax → ValueError statt Parser-Ausnahme."""
        path = tmp_path / "syntax.yaml"
        path.write_text("school_name: [offen\nstorage: {\n", encoding="utf-8")
        with pytest.raises(ValueError, match="ungültig"):
            ConfigManager(path).load()

    def test_partial_yaml_uses_defaults(self, tmp_path):
        path = tmp_path / "teil.yaml"
        path.write_text("school_name: Abend-Schule\n", encoding="utf-8")
        cfg = ConfigManager(path).load()
        assert cfg.school_name == "Abend-Schule"
        assert cfg.storage.students_file == "students.txt"

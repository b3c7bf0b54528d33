"""
Tests for run configuration, HCP path layout and component counting.
"""

from pathlib import Path

import nibabel as nib
import numpy as np
import pytest

from icafix_reclass.config import build_config, load_config_file
from icafix_reclass.dimensions import count_components
from icafix_reclass.errors import ComponentCountError, ConfigError
from icafix_reclass.paths import ReclassificationPaths


class TestReclassificationPaths:

    def test_hcp_layout(self):
        paths = ReclassificationPaths.from_study("/study", "100307", "rfMRI_REST1_LR", "2000")

        results = Path("/study/100307/MNINonLinear/Results/rfMRI_REST1_LR")
        fix = results / "rfMRI_REST1_LR_hp2000.ica"
        assert paths.results_folder == results
        assert paths.fix_folder == fix
        assert paths.orig_signal == fix / "Signal.txt"
        assert paths.orig_noise == fix / "Noise.txt"
        assert paths.reclass_signal == results / "ReclassifyAsSignal.txt"
        assert paths.reclass_noise == results / "ReclassifyAsNoise.txt"
        assert paths.hand_signal == fix / "HandSignal.txt"
        assert paths.hand_noise == fix / "HandNoise.txt"
        assert paths.training_labels == fix / "hand_labels_noise.txt"
        assert paths.melodic_ic == fix / "filtered_func_data.ica" / "melodic_oIC.nii.gz"

    def test_artifact_targets(self):
        paths = ReclassificationPaths.from_study("/study", "s1", "tfMRI", 0)
        targets = paths.artifact_targets

        assert targets.hand_signal == paths.hand_signal
        assert targets.training_labels.name == "hand_labels_noise.txt"


class TestConfig:

    def test_overrides_win_over_file(self, tmp_path, monkeypatch):
        monkeypatch.delenv("HCPPIPEDIR", raising=False)
        config_file = tmp_path / "reclass.yaml"
        config_file.write_text(
            "study_folder: /data/study\n"
            "subject: '100307'\n"
            "fmri_name: rfMRI_REST1_LR\n"
            "high_pass: 2000\n"
            "log_level: debug\n"
        )

        config = build_config(config_file, subject="200614", fmri_name=None)

        assert config.study_folder == Path("/data/study")
        assert config.subject == "200614"
        assert config.fmri_name == "rfMRI_REST1_LR"
        assert config.high_pass == "2000"
        assert config.log_level == "DEBUG"
        assert config.num_components is None

    def test_reports_every_missing_value(self, monkeypatch):
        monkeypatch.delenv("HCPPIPEDIR", raising=False)
        with pytest.raises(ConfigError) as exc_info:
            build_config(subject="100307")

        problems = exc_info.value.problems
        assert "study_folder required" in problems
        assert "fmri_name required" in problems
        assert "high_pass required" in problems
        assert len(problems) == 3

    def test_rejects_blank_identifier_and_negative_count(self):
        with pytest.raises(ConfigError) as exc_info:
            build_config(study_folder="/s", subject=" ", fmri_name="f", high_pass="0", num_components=-1)

        assert len(exc_info.value.problems) == 2

    def test_hcppipedir_from_environment(self, monkeypatch):
        monkeypatch.setenv("HCPPIPEDIR", "/opt/HCPpipelines")

        config = build_config(study_folder="/s", subject="1", fmri_name="f", high_pass="0")

        assert config.hcp_pipeline_dir == Path("/opt/HCPpipelines")

    def test_missing_config_file(self, tmp_path):
        with pytest.raises(ConfigError, match="not found"):
            load_config_file(tmp_path / "absent.yaml")

    def test_non_mapping_config_file(self, tmp_path):
        config_file = tmp_path / "list.yaml"
        config_file.write_text("- a\n- b\n")
        with pytest.raises(ConfigError, match="mapping"):
            load_config_file(config_file)

    def test_empty_config_file(self, tmp_path):
        config_file = tmp_path / "empty.yaml"
        config_file.write_text("")
        assert load_config_file(config_file) == {}


class TestCountComponents:

    def test_fourth_dimension(self, tmp_path):
        image_path = tmp_path / "melodic_oIC.nii.gz"
        nib.save(nib.Nifti1Image(np.zeros((2, 2, 2, 7), dtype=np.float32), np.eye(4)), str(image_path))

        assert count_components(image_path) == 7

    def test_3d_image_is_one_component(self, tmp_path):
        image_path = tmp_path / "melodic_oIC.nii.gz"
        nib.save(nib.Nifti1Image(np.zeros((2, 2, 2), dtype=np.float32), np.eye(4)), str(image_path))

        assert count_components(image_path) == 1

    def test_missing_image(self, tmp_path):
        with pytest.raises(ComponentCountError, match="not found"):
            count_components(tmp_path / "melodic_oIC.nii.gz")

    def test_unreadable_image(self, tmp_path):
        image_path = tmp_path / "melodic_oIC.nii.gz"
        image_path.write_text("not an image")
        with pytest.raises(ComponentCountError):
            count_components(image_path)

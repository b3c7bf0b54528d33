"""
End-to-end tests for hand reclassification runs.
"""

import pytest

from icafix_reclass.errors import ClassificationConsistencyError, MalformedClassificationError
from icafix_reclass.labels import FailureKind
from icafix_reclass.paths import ReclassificationPaths
from icafix_reclass.pipeline import (
    ClassificationInputs,
    apply_hand_reclassifications,
    evaluate,
    reclassify_texts,
)
from icafix_reclass.set_loader import parse_classification_set


@pytest.fixture
def run_paths(tmp_path):
    """HCP-style folders for subject 100307, rfMRI_REST1_LR, hp2000."""
    paths = ReclassificationPaths.from_study(tmp_path, "100307", "rfMRI_REST1_LR", 2000)
    paths.fix_folder.mkdir(parents=True)
    return paths


def write_lists(paths, orig_signal=None, orig_noise=None, reclass_signal=None, reclass_noise=None):
    for path, text in [
        (paths.orig_signal, orig_signal),
        (paths.orig_noise, orig_noise),
        (paths.reclass_signal, reclass_signal),
        (paths.reclass_noise, reclass_noise),
    ]:
        if text is not None:
            path.write_text(text)


def read_artifacts(paths):
    return [p.read_bytes() for p in (paths.hand_signal, paths.hand_noise, paths.training_labels)]


def artifact_names(paths):
    return sorted(p.name for p in paths.fix_folder.iterdir() if p.is_file())


class TestReclassifyTexts:
    """The worked examples, without touching disk."""

    def test_no_overrides(self):
        artifacts = reclassify_texts(3, "1 2", "3")

        assert artifacts == {
            "hand_signal": "1 2\n",
            "hand_noise": "3\n",
            "training_labels": "[3]\n",
        }

    def test_reclassify_as_noise(self):
        artifacts = reclassify_texts(3, "1 2", "3", "", "1")

        assert artifacts == {
            "hand_signal": "2\n",
            "hand_noise": "1 3\n",
            "training_labels": "[1, 3]\n",
        }

    def test_missing_automatic_label_fails(self):
        with pytest.raises(ClassificationConsistencyError) as exc_info:
            reclassify_texts(2, "1", "")

        failures = exc_info.value.failures
        assert [(f.index, f.kind) for f in failures] == [(2, FailureKind.MISSING_AUTOMATIC)]

    def test_duplicate_manual_fails(self):
        with pytest.raises(ClassificationConsistencyError) as exc_info:
            reclassify_texts(1, "1", "", "1", "1")

        failures = exc_info.value.failures
        assert [(f.index, f.kind) for f in failures] == [(1, FailureKind.DUPLICATE_MANUAL)]

    def test_malformed_list_fails_fast(self):
        with pytest.raises(MalformedClassificationError, match="ReclassifyAsNoise.txt"):
            reclassify_texts(3, "1 2", "3", "", "1 two")

    def test_all_noise_training_labels(self):
        assert reclassify_texts(0)["training_labels"] == "[]\n"

    def test_hand_noise_round_trips_to_training_labels(self):
        artifacts = reclassify_texts(6, "1 4 6", "2 3 5", "2", "6")

        hand_noise = parse_classification_set(artifacts["hand_noise"])
        labels = artifacts["training_labels"].strip().strip("[]")
        assert hand_noise == frozenset(int(i) for i in labels.split(", "))

    def test_negative_component_count_rejected(self):
        with pytest.raises(ValueError):
            evaluate(-1, ClassificationInputs())


class TestApplyHandReclassifications:
    """Runs against an HCP folder layout."""

    def test_writes_artifacts(self, run_paths):
        write_lists(run_paths, "1 2 4", "3 5", "5", "2")

        outcome = apply_hand_reclassifications(run_paths, 5)

        assert outcome.merge.signal == [1, 4, 5]
        assert outcome.merge.noise == [2, 3]
        assert outcome.written == [
            run_paths.hand_signal, run_paths.hand_noise, run_paths.training_labels
        ]
        assert run_paths.hand_signal.read_text() == "1 4 5\n"
        assert run_paths.hand_noise.read_text() == "2 3\n"
        assert run_paths.training_labels.read_text() == "[2, 3]\n"

    def test_missing_manual_files_are_empty(self, run_paths):
        write_lists(run_paths, "1 2", "3")

        apply_hand_reclassifications(run_paths, 3)

        assert run_paths.hand_signal.read_text() == "1 2\n"
        assert run_paths.training_labels.read_text() == "[3]\n"

    def test_rerun_is_byte_identical(self, run_paths):
        write_lists(run_paths, "2 3 7", "1 4 5 6", "1", "7")

        apply_hand_reclassifications(run_paths, 7)
        first = read_artifacts(run_paths)
        apply_hand_reclassifications(run_paths, 7)
        second = read_artifacts(run_paths)

        assert first == second

    def test_failed_validation_writes_nothing(self, run_paths):
        write_lists(run_paths, "1", "")

        with pytest.raises(ClassificationConsistencyError):
            apply_hand_reclassifications(run_paths, 2)

        assert artifact_names(run_paths) == ["Noise.txt", "Signal.txt"]

    def test_failed_validation_keeps_previous_artifacts(self, run_paths):
        write_lists(run_paths, "1", "2", "1", "1")
        run_paths.hand_signal.write_text("1\n")

        with pytest.raises(ClassificationConsistencyError):
            apply_hand_reclassifications(run_paths, 2)

        assert run_paths.hand_signal.read_text() == "1\n"
        assert not run_paths.hand_noise.exists()

    def test_malformed_input_writes_nothing(self, run_paths):
        write_lists(run_paths, "1 2", "3;")

        with pytest.raises(MalformedClassificationError):
            apply_hand_reclassifications(run_paths, 3)

        assert artifact_names(run_paths) == ["Noise.txt", "Signal.txt"]

    def test_indices_above_n_do_not_fail(self, run_paths):
        write_lists(run_paths, "1 2 9", "3", "", "12")

        outcome = apply_hand_reclassifications(run_paths, 3)

        assert outcome.merge.signal == [1, 2]
        assert outcome.merge.noise == [3]

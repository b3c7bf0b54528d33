"""
End-to-end hand reclassification for one run.

load four lists -> validate + merge -> write three artifacts

Nothing is written unless every list parses and every component passes
the consistency checks.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

from .logging_config import StageLogger
from .masks import out_of_range
from .merger import MergeResult, merge_classifications
from .paths import ReclassificationPaths
from .set_loader import ClassificationSet, load_classification_file, parse_classification_set
from .validator import ValidationReport, validate_classifications
from .writer import ArtifactWriter, render_artifacts


@dataclass(frozen=True)
class ClassificationInputs:
    """The four classification sets for one run."""
    orig_signal: ClassificationSet = frozenset()
    orig_noise: ClassificationSet = frozenset()
    reclass_signal: ClassificationSet = frozenset()
    reclass_noise: ClassificationSet = frozenset()

    @classmethod
    def from_paths(cls, paths: ReclassificationPaths) -> "ClassificationInputs":
        return cls(
            orig_signal=load_classification_file(paths.orig_signal),
            orig_noise=load_classification_file(paths.orig_noise),
            reclass_signal=load_classification_file(paths.reclass_signal),
            reclass_noise=load_classification_file(paths.reclass_noise),
        )

    @classmethod
    def from_texts(
        cls,
        orig_signal: Optional[str] = None,
        orig_noise: Optional[str] = None,
        reclass_signal: Optional[str] = None,
        reclass_noise: Optional[str] = None,
    ) -> "ClassificationInputs":
        return cls(
            orig_signal=parse_classification_set(orig_signal, source="Signal.txt"),
            orig_noise=parse_classification_set(orig_noise, source="Noise.txt"),
            reclass_signal=parse_classification_set(reclass_signal, source="ReclassifyAsSignal.txt"),
            reclass_noise=parse_classification_set(reclass_noise, source="ReclassifyAsNoise.txt"),
        )

    def sizes(self) -> Dict[str, int]:
        return {
            "orig_signal": len(self.orig_signal),
            "orig_noise": len(self.orig_noise),
            "reclass_signal": len(self.reclass_signal),
            "reclass_noise": len(self.reclass_noise),
        }

    def out_of_range(self, n_components: int) -> Dict[str, List[int]]:
        """Listed indices above N, per set; only non-empty entries are returned."""
        found = {
            "orig_signal": out_of_range(self.orig_signal, n_components),
            "orig_noise": out_of_range(self.orig_noise, n_components),
            "reclass_signal": out_of_range(self.reclass_signal, n_components),
            "reclass_noise": out_of_range(self.reclass_noise, n_components),
        }
        return {name: indices for name, indices in found.items() if indices}


@dataclass
class ReclassificationOutcome:
    """Result of a run that passed validation."""
    merge: MergeResult
    report: ValidationReport
    written: List[Path] = field(default_factory=list)


def evaluate(
    n_components: int,
    inputs: ClassificationInputs,
    stage_logger: Optional[StageLogger] = None,
) -> ReclassificationOutcome:
    """
    Validate and merge in-memory inputs.

    Raises:
        ClassificationConsistencyError: If any component fails a check
    """
    if n_components < 0:
        raise ValueError(f"n_components cannot be negative, got {n_components}")

    stage_logger = stage_logger or StageLogger(__name__)

    ignored = inputs.out_of_range(n_components)
    if ignored:
        stage_logger.logger.warning(
            "indices_out_of_range",
            n_components=n_components,
            ignored=ignored,
        )

    report = validate_classifications(
        n_components,
        inputs.orig_signal,
        inputs.orig_noise,
        inputs.reclass_signal,
        inputs.reclass_noise,
    )
    merge = merge_classifications(
        n_components,
        inputs.orig_signal,
        inputs.reclass_signal,
        inputs.reclass_noise,
    )
    stage_logger.log_stage("merge", {
        "n_components": n_components,
        "signal": len(merge.signal),
        "noise": len(merge.noise),
        "rules": merge.rule_counts(),
    })

    if not report.is_valid:
        for failure in report.failures:
            stage_logger.log_validation_failure(failure.index, failure.kind.value, failure.message)
        stage_logger.log_abort("Sanity checks on input files failed", {"failures": report.counts()})
        report.raise_if_failed()

    return ReclassificationOutcome(merge=merge, report=report)


def reclassify_texts(
    n_components: int,
    orig_signal: Optional[str] = None,
    orig_noise: Optional[str] = None,
    reclass_signal: Optional[str] = None,
    reclass_noise: Optional[str] = None,
) -> Dict[str, str]:
    """
    Run the merge over raw list texts and return the artifact texts.

    Returns:
        Mapping with keys 'hand_signal', 'hand_noise', 'training_labels'

    Raises:
        MalformedClassificationError: If any list contains a bad token
        ClassificationConsistencyError: If any component fails a check
    """
    inputs = ClassificationInputs.from_texts(orig_signal, orig_noise, reclass_signal, reclass_noise)
    outcome = evaluate(n_components, inputs)
    return render_artifacts(outcome.merge)


def apply_hand_reclassifications(
    paths: ReclassificationPaths,
    n_components: int,
    writer: Optional[ArtifactWriter] = None,
) -> ReclassificationOutcome:
    """
    Merge FIX and manual classifications on disk and write the artifacts.

    Args:
        paths: Input and output locations for the run
        n_components: Number of ICA components
        writer: Artifact writer (default ArtifactWriter())

    Returns:
        ReclassificationOutcome with the merge and the written paths

    Raises:
        MalformedClassificationError: Before any merge, if a list is corrupt
        ClassificationConsistencyError: If any component fails a check
        ArtifactWriteError: If the artifacts cannot be written
    """
    stage_logger = StageLogger(__name__, fix_folder=str(paths.fix_folder))
    writer = writer or ArtifactWriter()

    inputs = ClassificationInputs.from_paths(paths)
    stage_logger.log_stage("load", inputs.sizes())

    outcome = evaluate(n_components, inputs, stage_logger)

    outcome.written = writer.write(outcome.merge, paths.artifact_targets)
    stage_logger.log_stage("write", {"written": [str(p) for p in outcome.written]})
    return outcome


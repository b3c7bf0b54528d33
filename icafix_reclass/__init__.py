"""
icafix_reclass - Hand reclassification of ICA+FIX components.

Merges FIX's automatic signal/noise labels with a reviewer's manual
ReclassifyAsSignal/ReclassifyAsNoise lists and writes the final
HandSignal/HandNoise lists plus FIX training labels.

Package structure:
- set_loader: Parse whitespace separated component lists
- merger: Precedence rules producing the final partition
- validator: Consistency checks over the four input lists
- writer: All-or-nothing artifact publication
- pipeline: Load -> validate/merge -> write for one run
- paths, dimensions, config: HCP folder layout, component count, settings
- cli: ``icafix-reclass`` command
"""

__version__ = '1.0.0'

from .labels import FailureKind, FinalLabel, MergeRule
from .errors import (
    ReclassError,
    MalformedClassificationError,
    ClassificationConsistencyError,
    ClassificationReadError,
    ArtifactWriteError,
    ComponentCountError,
    ConfigError,
)
from .set_loader import parse_classification_set, load_classification_file
from .merger import ComponentDecision, MergeResult, merge_classifications
from .validator import ValidationFailure, ValidationReport, validate_classifications
from .writer import ArtifactTargets, ArtifactWriter, render_artifacts
from .paths import ReclassificationPaths
from .pipeline import (
    ClassificationInputs,
    ReclassificationOutcome,
    apply_hand_reclassifications,
    reclassify_texts,
)

__all__ = [
    "FailureKind",
    "FinalLabel",
    "MergeRule",
    "ReclassError",
    "MalformedClassificationError",
    "ClassificationConsistencyError",
    "ClassificationReadError",
    "ArtifactWriteError",
    "ComponentCountError",
    "ConfigError",
    "parse_classification_set",
    "load_classification_file",
    "ComponentDecision",
    "MergeResult",
    "merge_classifications",
    "ValidationFailure",
    "ValidationReport",
    "validate_classifications",
    "ArtifactTargets",
    "ArtifactWriter",
    "render_artifacts",
    "ReclassificationPaths",
    "ClassificationInputs",
    "ReclassificationOutcome",
    "apply_hand_reclassifications",
    "reclassify_texts",
]

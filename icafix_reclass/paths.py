"""
HCP folder conventions for ICA+FIX hand reclassification.

    <study>/<subject>/MNINonLinear/Results/<fmri>/
        ReclassifyAsSignal.txt, ReclassifyAsNoise.txt     (manual input)
        <fmri>_hp<hp>.ica/
            Signal.txt, Noise.txt                         (FIX input)
            HandSignal.txt, HandNoise.txt,
            hand_labels_noise.txt                         (outputs)
            filtered_func_data.ica/melodic_oIC.nii.gz     (component count)
"""

import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Dict, Union

from .writer import ArtifactTargets

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReclassificationPaths:
    """Every input and output location for one subject/fMRI run."""
    results_folder: Path
    fix_folder: Path
    ica_folder: Path

    orig_signal: Path
    orig_noise: Path
    reclass_signal: Path
    reclass_noise: Path

    hand_signal: Path
    hand_noise: Path
    training_labels: Path

    melodic_ic: Path

    @classmethod
    def from_study(
        cls,
        study_folder: Union[str, Path],
        subject: str,
        fmri_name: str,
        high_pass: Union[str, int],
    ) -> "ReclassificationPaths":
        atlas_folder = Path(study_folder) / subject / "MNINonLinear"
        results_folder = atlas_folder / "Results" / fmri_name
        return cls.from_results_folder(results_folder, fmri_name, high_pass)

    @classmethod
    def from_results_folder(
        cls,
        results_folder: Union[str, Path],
        fmri_name: str,
        high_pass: Union[str, int],
    ) -> "ReclassificationPaths":
        results_folder = Path(results_folder)
        fix_folder = results_folder / f"{fmri_name}_hp{high_pass}.ica"
        ica_folder = fix_folder / "filtered_func_data.ica"

        return cls(
            results_folder=results_folder,
            fix_folder=fix_folder,
            ica_folder=ica_folder,
            orig_signal=fix_folder / "Signal.txt",
            orig_noise=fix_folder / "Noise.txt",
            reclass_signal=results_folder / "ReclassifyAsSignal.txt",
            reclass_noise=results_folder / "ReclassifyAsNoise.txt",
            hand_signal=fix_folder / "HandSignal.txt",
            hand_noise=fix_folder / "HandNoise.txt",
            training_labels=fix_folder / "hand_labels_noise.txt",
            melodic_ic=ica_folder / "melodic_oIC.nii.gz",
        )

    @property
    def artifact_targets(self) -> ArtifactTargets:
        return ArtifactTargets(
            hand_signal=self.hand_signal,
            hand_noise=self.hand_noise,
            training_labels=self.training_labels,
        )

    def as_dict(self) -> Dict[str, str]:
        return {f.name: str(getattr(self, f.name)) for f in fields(self)}

    def log(self):
        for name, value in self.as_dict().items():
            logger.info(f"{name}: {value}")

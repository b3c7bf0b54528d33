"""
Output artifacts for a merged classification.

Three files are produced from one MergeResult:
- HandSignal.txt:         ``1 2 5``      (space separated, ascending)
- HandNoise.txt:          ``3 4``        (same format)
- hand_labels_noise.txt:  ``[3, 4]``     (training labels for FIX)

Each file ends with a newline. All three are staged next to their
destinations and only published once every one of them has been
written, so a failed run leaves the previous artifacts in place.
"""

import logging
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Tuple

from .errors import ArtifactWriteError
from .merger import MergeResult

logger = logging.getLogger(__name__)


def _current_umask() -> int:
    mask = os.umask(0)
    os.umask(mask)
    return mask


def format_index_list(indices: Iterable[int]) -> str:
    """``[1, 2, 3]`` -> ``"1 2 3"``; empty input gives an empty string."""
    return " ".join(str(i) for i in indices)


def format_training_labels(indices: Iterable[int]) -> str:
    """``[1, 2, 3]`` -> ``"[1, 2, 3]"``; empty input gives ``"[]"``."""
    return "[" + ", ".join(str(i) for i in indices) + "]"


@dataclass(frozen=True)
class ArtifactTargets:
    """Destinations for the three output artifacts."""
    hand_signal: Path
    hand_noise: Path
    training_labels: Path


def render_artifacts(result: MergeResult) -> Dict[str, str]:
    """
    Render the artifact file contents for a merge result.

    Returns:
        Mapping of artifact name to full file text (newline terminated)
    """
    return {
        "hand_signal": format_index_list(result.signal) + "\n",
        "hand_noise": format_index_list(result.noise) + "\n",
        "training_labels": format_training_labels(result.noise) + "\n",
    }


class ArtifactWriter:
    """
    Writes the three artifacts as one all-or-nothing publication.

    Usage:
        writer = ArtifactWriter()
        written = writer.write(merge_result, targets)
    """

    TEMP_PREFIX = ".icafix_reclass."

    def write(self, result: MergeResult, targets: ArtifactTargets) -> List[Path]:
        """
        Stage then publish all artifacts.

        Args:
            result: Merge output for a run that passed validation
            targets: Where to write each artifact

        Returns:
            Paths that were written, in publication order

        Raises:
            ArtifactWriteError: If any artifact cannot be staged or published
        """
        contents = render_artifacts(result)
        plan = [
            (Path(targets.hand_signal), contents["hand_signal"]),
            (Path(targets.hand_noise), contents["hand_noise"]),
            (Path(targets.training_labels), contents["training_labels"]),
        ]

        staged: List[Tuple[Path, Path]] = []
        try:
            for destination, text in plan:
                staged.append((self._stage(destination, text), destination))
        except OSError as e:
            self._discard(staged)
            raise ArtifactWriteError(f"Failed to stage artifacts: {e}") from e

        published: List[Path] = []
        try:
            for temp_path, destination in staged:
                os.replace(temp_path, destination)
                published.append(destination)
                logger.info(f"Wrote {destination}")
        except OSError as e:
            self._discard([s for s in staged if s[1] not in published])
            raise ArtifactWriteError(
                f"Failed to publish artifacts after {len(published)} of {len(staged)}: {e}"
            ) from e

        return published

    def _stage(self, destination: Path, text: str) -> Path:
        """Write `text` to a temp file in the destination's directory."""
        fd, temp_name = tempfile.mkstemp(
            prefix=self.TEMP_PREFIX,
            suffix=".tmp",
            dir=str(destination.parent),
        )
        try:
            with os.fdopen(fd, 'w', newline='\n') as f:
                f.write(text)
            # mkstemp creates files 0600; match what a plain open() would give
            os.chmod(temp_name, 0o666 & ~_current_umask())
        except OSError:
            os.unlink(temp_name)
            raise
        return Path(temp_name)

    @staticmethod
    def _discard(staged: List[Tuple[Path, Path]]):
        for temp_path, _ in staged:
            try:
                os.unlink(temp_path)
            except FileNotFoundError:
                pass

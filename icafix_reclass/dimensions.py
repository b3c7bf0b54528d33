"""
Component count discovery from the MELODIC mixing image.

The number of ICA components is the 4th dimension of
``melodic_oIC.nii.gz``. Only the header is read.
"""

import logging
from pathlib import Path
from typing import Union

import nibabel as nib

from .errors import ComponentCountError

logger = logging.getLogger(__name__)


def count_components(image_path: Union[str, Path]) -> int:
    """
    Number of ICA components in a MELODIC 4D image.

    Args:
        image_path: Path to melodic_oIC.nii.gz (or any NIfTI image)

    Returns:
        Size of the 4th dimension (1 for a 3D image)

    Raises:
        ComponentCountError: If the image is missing or unreadable
    """
    image_path = Path(image_path)
    if not image_path.exists():
        raise ComponentCountError(f"ICA image not found: {image_path}")

    try:
        img = nib.load(str(image_path))
    except Exception as e:
        raise ComponentCountError(f"Could not read ICA image {image_path}: {e}") from e

    shape = img.header.get_data_shape()
    if len(shape) < 3:
        raise ComponentCountError(
            f"Expected a 3D or 4D image at {image_path}, got shape {shape}"
        )

    n_components = int(shape[3]) if len(shape) > 3 else 1
    logger.info(f"NumICAs: {n_components}")
    return n_components

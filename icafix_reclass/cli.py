"""
CLI for applying hand reclassifications of ICA+FIX components.

Reads FIX's Signal.txt/Noise.txt and the manual ReclassifyAsSignal.txt/
ReclassifyAsNoise.txt, then writes HandSignal.txt, HandNoise.txt and
hand_labels_noise.txt. FIX cleanup is not re-applied.
"""

import logging
import sys
from pathlib import Path

import click
import nibabel

from icafix_reclass import __version__
from icafix_reclass.config import LOG_LEVELS, ReclassConfig, build_config
from icafix_reclass.dimensions import count_components
from icafix_reclass.errors import (
    ArtifactWriteError,
    ClassificationConsistencyError,
    ClassificationReadError,
    ComponentCountError,
    ConfigError,
    MalformedClassificationError,
)
from icafix_reclass.logging_config import configure_structlog
from icafix_reclass.paths import ReclassificationPaths
from icafix_reclass.pipeline import apply_hand_reclassifications

logger = logging.getLogger(__name__)

EXIT_FAILURE = 1
EXIT_USAGE = 2


def show_tool_versions(config: ReclassConfig):
    """Log the HCP pipelines version (when HCPPIPEDIR is known) and nibabel's."""
    logger.info(f"icafix_reclass version: {__version__}")

    if config.hcp_pipeline_dir is not None:
        version_file = Path(config.hcp_pipeline_dir) / "version.txt"
        if version_file.exists():
            logger.info(f"HCP Pipelines version: {version_file.read_text().strip()}")
        else:
            logger.warning(f"HCP Pipelines version file not found: {version_file}")

    logger.info(f"nibabel version: {nibabel.__version__}")


@click.command(context_settings={"help_option_names": ["--help", "-h"]})
@click.option('--study-folder', '--path', 'study_folder', type=click.Path(path_type=Path),
              help='Path to study folder')
@click.option('--subject', help='Subject ID')
@click.option('--fmri-name', help='fMRI name')
@click.option('--high-pass', help='High-pass filter used in ICA+FIX')
@click.option('--num-components', type=click.IntRange(min=0),
              help='Number of ICA components (default: 4th dimension of melodic_oIC)')
@click.option('--config', 'config_file', type=click.Path(path_type=Path),
              help='YAML file with default values for these options')
@click.option('--log-level', type=click.Choice(LOG_LEVELS, case_sensitive=False),
              help='Logging level (default INFO)')
@click.option('--log-file', type=click.Path(path_type=Path), help='Append logs to this file')
@click.option('--matlab-run-mode', hidden=True,
              help='Ignored; accepted so older callers keep working')
@click.version_option(__version__, prog_name='icafix-reclass')
def cli(study_folder, subject, fmri_name, high_pass, num_components,
        config_file, log_level, log_file, matlab_run_mode):
    """Apply hand reclassifications of ICA+FIX noise and signal components."""
    try:
        config = build_config(
            config_file,
            study_folder=study_folder,
            subject=subject,
            fmri_name=fmri_name,
            high_pass=high_pass,
            num_components=num_components,
            log_level=log_level,
            log_file=log_file,
        )
    except ConfigError as e:
        for problem in e.problems:
            click.echo(f"ERROR: {problem}", err=True)
        click.echo("For usage information, use --help", err=True)
        sys.exit(EXIT_USAGE)

    configure_structlog(config.log_level, config.log_file)
    show_tool_versions(config)

    paths = ReclassificationPaths.from_study(
        config.study_folder, config.subject, config.fmri_name, config.high_pass
    )
    paths.log()

    if config.num_components is not None:
        n_components = config.num_components
        logger.info(f"NumICAs (from options): {n_components}")
    else:
        try:
            n_components = count_components(paths.melodic_ic)
        except ComponentCountError as e:
            click.echo(f"ERROR: {e}", err=True)
            sys.exit(EXIT_FAILURE)

    click.echo("merging classifications start")

    try:
        outcome = apply_hand_reclassifications(paths, n_components)
    except (MalformedClassificationError, ClassificationReadError) as e:
        click.echo(f"ERROR: {e}", err=True)
        sys.exit(EXIT_FAILURE)
    except ClassificationConsistencyError as e:
        for failure in e.failures:
            click.echo(failure.message)
        click.echo("ERROR: Sanity checks on input files failed", err=True)
        sys.exit(EXIT_FAILURE)
    except ArtifactWriteError as e:
        click.echo(f"ERROR: {e}", err=True)
        logger.exception("Artifact write error")
        sys.exit(EXIT_FAILURE)

    click.echo(
        f"Signal: {len(outcome.merge.signal)}  Noise: {len(outcome.merge.noise)}  "
        f"(of {n_components} components)"
    )
    click.echo("merging classifications complete")


def main():
    """Main entry point for the CLI."""
    cli()


if __name__ == '__main__':
    main()

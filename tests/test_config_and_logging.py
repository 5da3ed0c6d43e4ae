import dataclasses
import logging

from zip_renamer.config import SETTINGS
from zip_renamer.logger import setup_logging


def test_output_filename_uses_prefix_and_target_name():
    assert SETTINGS.output_filename("batch.zip") == "renamed_batch.zip.zip"


def test_output_filename_falls_back_when_name_missing():
    assert SETTINGS.output_filename("") == "renamed_files.zip"
    assert SETTINGS.output_filename(None) == "renamed_files.zip"


def test_settings_override():
    settings = dataclasses.replace(SETTINGS, output_prefix="fixed_", output_suffix="")
    assert settings.output_filename("batch.zip") == "fixed_batch.zip"


def test_setup_logging_keeps_a_single_handler():
    setup_logging("DEBUG")
    logger = setup_logging("WARNING")

    assert logger.name == "zip_renamer"
    assert len(logger.handlers) == 1
    assert logger.level == logging.WARNING

"""Privilege model utilities.

Provides JSON serialization and model file management.
"""

from privileged.utils.privileges.privilege_helpers import (
    compute_model_checksum,
    create_example_model,
    create_example_model_file,
    get_model_path,
    load_model,
    model_exists,
    model_from_json,
    model_to_json,
    rules_from_json,
    rules_to_json,
    save_model,
)

__all__ = [
    "compute_model_checksum",
    "create_example_model",
    "create_example_model_file",
    "get_model_path",
    "load_model",
    "model_exists",
    "model_from_json",
    "model_to_json",
    "rules_from_json",
    "rules_to_json",
    "save_model",
]

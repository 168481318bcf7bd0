"""Shared utilities for privileged.

Import directly from submodules:
    from privileged.utils.file_helpers import get_app_dir
    from privileged.utils.privileges import load_model
"""

__all__: list[str] = []  # Direct submodule imports required (see docstring)

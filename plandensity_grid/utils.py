"""Output folder helpers for analysis runs."""

import os
from datetime import datetime


def get_target_run_folder(application_name: str) -> str:
    """
    Create ./runs/<application_name>/<YYYYmmdd_HHMMSS> and return its path.

    Used when the heatmap image or JSON report path is not given explicitly.
    """
    run_folder = f"./runs/{application_name}/{datetime.now().strftime('%Y%m%d_%H%M%S')}"
    os.makedirs(run_folder, exist_ok=True)
    return run_folder

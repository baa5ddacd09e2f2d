"""
Configuration - table names, sanitizer thresholds and report columns.
Defaults live at module level; PipelineConfig bundles them for one run.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Tuple, Union

PROJECT_ROOT = Path(__file__).resolve().parent.parent

# Source tables
FEATURE_TABLE = "insurance_feats"
LINK_TABLE = "id_table"
TARGET_TABLE = "insurance_targets"

# Sanitizer
SENTINEL_COLUMN = "age"
SENTINEL_VALUE = -999
OUTLIER_COLUMN = "bmi"
MAD_MULTIPLIER = 5.0
MAD_SCALE = 1.0  # unscaled MAD; use "normal" for the 1.4826 consistency factor

# Reporter
TARGET = "charges"
PREDICTORS = ("age", "sex", "bmi", "children", "smoker", "region")
TREND_PREDICTOR = "bmi"
GROUP_COLUMN = "smoker"


@dataclass(frozen=True)
class PipelineConfig:
    """Settings for one load -> join -> sanitize -> report run."""
    feature_table: str = FEATURE_TABLE
    link_table: str = LINK_TABLE
    target_table: str = TARGET_TABLE
    sentinel_column: str = SENTINEL_COLUMN
    sentinel_value: float = SENTINEL_VALUE
    outlier_column: str = OUTLIER_COLUMN
    mad_multiplier: float = MAD_MULTIPLIER
    mad_scale: Union[float, str] = MAD_SCALE
    target: str = TARGET
    predictors: Tuple[str, ...] = field(default=PREDICTORS)
    trend_predictor: str = TREND_PREDICTOR
    group_column: str = GROUP_COLUMN

    @property
    def sanitized_columns(self) -> Tuple[str, str]:
        return (self.sentinel_column, self.outlier_column)


def default_database_path() -> Path:
    """
    Resolve the SQLite file to analyse.

    Resolution order:
    1. INSURANCE_DB_PATH environment variable (if set)
    2. data/insurance.db under the project root
    """
    env_path = os.environ.get("INSURANCE_DB_PATH")
    if env_path:
        return Path(env_path)
    return PROJECT_ROOT / "data" / "insurance.db"

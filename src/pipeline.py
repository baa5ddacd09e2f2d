"""
Pipeline - load -> join -> sanitize -> report, strictly in that order.
Each stage receives the previous stage's output explicitly; nothing is shared.
"""

import logging
import os
import tempfile
from dataclasses import dataclass
from typing import Optional

import pandas as pd

from .config import PipelineConfig
from .data_engine.cleaner import SanitizationReport, sanitize
from .data_engine.joiner import join_tables
from .data_engine.loader import Storage, load_tables
from .reporting.report import EDAReport, build_report

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PipelineResult:
    raw: pd.DataFrame
    cleaned: pd.DataFrame
    sanitization: SanitizationReport
    report: EDAReport


def run_pipeline(storage: Storage, config: Optional[PipelineConfig] = None) -> PipelineResult:
    """
    Run the whole analysis against one SQLite database.

    Errors from any stage propagate unchanged; there is no retry.
    """
    config = config or PipelineConfig()

    logger.info("Loading tables from %s", storage)
    tables = load_tables(storage, config.feature_table, config.link_table, config.target_table)

    joined = join_tables(tables.features, tables.links, tables.targets)
    raw, cleaned, sanitization = sanitize(joined, config)
    report = build_report(raw, cleaned, config)

    return PipelineResult(raw=raw, cleaned=cleaned, sanitization=sanitization, report=report)


def run_pipeline_bytes(data: bytes, config: Optional[PipelineConfig] = None) -> PipelineResult:
    """Run the analysis on an in-memory SQLite file; the temporary copy is removed afterwards."""
    with tempfile.TemporaryDirectory(prefix="insurance-eda-") as tmp_dir:
        path = os.path.join(tmp_dir, "upload.db")
        with open(path, "wb") as fh:
            fh.write(data)
        return run_pipeline(path, config)

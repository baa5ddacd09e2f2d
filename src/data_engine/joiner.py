"""
Joiner - flattens features, id links and targets into one record set.
"""

import logging

import pandas as pd

from .errors import JoinCardinalityError

logger = logging.getLogger(__name__)


def _require_unique(df: pd.DataFrame, column: str, table: str) -> None:
    dupes = df[column].dropna()
    dupes = dupes[dupes.duplicated()]
    if not dupes.empty:
        sample = dupes.unique()[:5].tolist()
        raise JoinCardinalityError(
            f"Column '{table}.{column}' has {len(dupes)} duplicate key(s) (e.g. {sample}); "
            "a left join on it would multiply feature rows."
        )


def join_tables(
    features: pd.DataFrame,
    links: pd.DataFrame,
    targets: pd.DataFrame,
) -> pd.DataFrame:
    """
    Left-join features -> links (id = id1) -> targets (id2 = id), then drop the ids.

    The result has exactly one row per feature row, in the original order.
    Features without a link or target get NaN charges.

    Raises:
        JoinCardinalityError: id1 or the target id is not unique
    """
    _require_unique(links, "id1", "links")
    _require_unique(targets, "id", "targets")

    # NULL keys never match, as in a SQL left join
    link_map = links[["id1", "id2"]].rename(columns={"id1": "id"}).dropna(subset=["id"])
    target_map = targets.rename(columns={"id": "id2"}).dropna(subset=["id2"])

    merged = features.merge(link_map, on="id", how="left")
    merged = merged.merge(target_map, on="id2", how="left")

    # one row per feature row
    if len(merged) != len(features):
        raise JoinCardinalityError(
            f"Join produced {len(merged)} rows from {len(features)} feature rows."
        )

    unmatched = int(merged["charges"].isna().sum()) if "charges" in merged else len(merged)
    logger.info("Joined %d feature rows; %d without a target", len(merged), unmatched)

    return merged.drop(columns=["id", "id2"]).reset_index(drop=True)

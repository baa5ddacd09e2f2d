"""
Shared fixtures: small insurance tables and a SQLite file holding them.
"""
import os
import sqlite3
import sys
from contextlib import closing

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import matplotlib
matplotlib.use("Agg")

import numpy as np
import pandas as pd
import pytest


@pytest.fixture
def features():
    rng = np.random.default_rng(7)
    n = 40
    bmi = 22.0 + (np.arange(n) % 13)
    bmi[1] = 500.0  # implausible entry
    age = 18.0 + (np.arange(n) * 7) % 47
    age[0] = -999  # sentinel-coded missing age
    return pd.DataFrame({
        "id": np.arange(1, n + 1),
        "age": age,
        "sex": rng.choice(["male", "female"], n),
        "bmi": bmi,
        "children": rng.integers(0, 4, n),
        "smoker": rng.choice(["yes", "no"], n),
        "region": rng.choice(["northeast", "northwest", "southeast", "southwest"], n),
    })


@pytest.fixture
def links(features):
    # Last feature row has no link
    ids = features["id"].iloc[:-1]
    return pd.DataFrame({"id1": ids, "id2": ids + 1000})


@pytest.fixture
def targets(features, links):
    bmi = features.set_index("id")["bmi"].clip(upper=45)
    charges = 1500 + 350 * bmi.loc[links["id1"]].to_numpy()
    return pd.DataFrame({"id": links["id2"].to_numpy(), "charges": charges})


@pytest.fixture
def make_db(tmp_path):
    """Write tables to a fresh SQLite file and return its path."""
    def _make(tables, name="insurance.db"):
        path = tmp_path / name
        with closing(sqlite3.connect(path)) as conn:
            for table, df in tables.items():
                df.to_sql(table, conn, index=False)
        return path
    return _make


@pytest.fixture
def insurance_db(make_db, features, links, targets):
    return make_db({
        "insurance_feats": features,
        "id_table": links,
        "insurance_targets": targets,
    })

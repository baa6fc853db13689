"""
Z-score normalization of feature tables for training correction models.

Tables are 2D arrays with samples in rows and features in columns. Column
indices are supplied by the caller. Protected columns (binary masks,
amplitude scale factors) are never modified.

Floating-point tables keep their dtype. A float64 table therefore needs
`jax_enable_x64`; without it the table would be narrowed to float32, which is
refused with a `DataQualityError` rather than silently losing precision.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

import jax
import jax.numpy as jnp
import numpy as np

from ..errors import ConfigurationError, DataQualityError

logger = logging.getLogger(__name__)

# Forcing columns with a smaller training std are treated as constant
FORCING_STD_THRESHOLD = 1e-10
# Added to every std before dividing
STD_FLOOR = 1e-8


@dataclass(frozen=True)
class NormalizationStatistics:
    """
    Statistics aligned with `columns`.

    Attributes:
        mu: Mean per column, shape (len(columns),)
        sigma: Scale per column, shape (len(columns),)
        columns: Column indices the statistics refer to
        protected_columns: Columns skipped by `apply` and `invert`
    """
    mu: jax.Array
    sigma: jax.Array
    columns: Tuple[int, ...]
    protected_columns: Tuple[int, ...] = ()

    def apply(self, table, protected_columns: Optional[Sequence[int]] = None) -> jax.Array:
        if protected_columns is None:
            protected_columns = self.protected_columns
        return apply(table, self.mu, self.sigma, self.columns, protected_columns)

    def invert(self, table) -> jax.Array:
        return invert(table, self.mu, self.sigma, self.columns, self.protected_columns)


def _as_table(table, split: str) -> jax.Array:
    """Convert to a 2D JAX array without narrowing floating-point precision."""
    source_dtype = np.asarray(table).dtype
    if jnp.issubdtype(source_dtype, jnp.floating):
        converted = jnp.asarray(table)
        if converted.dtype != source_dtype:
            raise DataQualityError(
                f"The {split} table has dtype {source_dtype} but would be converted to "
                f"{converted.dtype}; enable jax_enable_x64 or pass {converted.dtype} data."
            )
    else:
        # Integer or boolean tables are normalized in the default float dtype
        converted = jnp.asarray(table, dtype=float)
    if converted.ndim != 2:
        raise DataQualityError(f"The {split} table must be 2D, got shape {converted.shape}")
    return converted


def _check_columns(n_columns: int, split: str, **column_sets):
    """Raise `ConfigurationError` for column indices outside [0, n_columns)."""
    for name, columns in column_sets.items():
        bad = [c for c in columns if not 0 <= c < n_columns]
        if bad:
            raise ConfigurationError(
                f"{name} {bad} out of range for the {split} table with {n_columns} columns"
            )


def _check_statistics(mu: jax.Array, sigma: jax.Array):
    for name, stat in (("mean", mu), ("std", sigma)):
        if bool(jnp.any(jnp.isnan(stat))):
            raise DataQualityError(f"NaN detected in {name} statistics! Check input data.")
        if bool(jnp.any(jnp.isinf(stat))):
            raise DataQualityError(f"Inf detected in {name} statistics! Check input data.")


def _check_protected(original, normalized, protected_columns: Sequence[int], split: str):
    """Compare protected columns of the caller's data with the normalized table."""
    if len(protected_columns) == 0:
        return
    cols = list(protected_columns)
    if not np.array_equal(np.asarray(original)[:, cols], np.asarray(normalized)[:, cols]):
        raise DataQualityError(
            f"Protected columns {cols} were altered in the {split} data! "
            "Check the protected column definition."
        )


def _warn_nan(table: jax.Array, split: str):
    if bool(jnp.any(jnp.isnan(table))):
        rows, cols = jnp.nonzero(jnp.isnan(table))
        logger.warning(
            "NaN detected in normalized %s data at %d entries (first at row %d, column %d)",
            split, rows.shape[0], int(rows[0]), int(cols[0]),
        )


def fit_and_apply(
    train_table,
    val_table,
    normalize_columns: Sequence[int],
    protected_columns: Sequence[int],
    forcing_column_index: int,
) -> Tuple[jax.Array, jax.Array, jax.Array, jax.Array]:
    """
    Fit z-score statistics on the training split and normalize both splits.

    Columns in `normalize_columns` that are not protected are normalized
    with the training mean and sample standard deviation (plus 1e-8). If the
    forcing column is constant on the training split (std < 1e-10, e.g.
    zero wind) it is left unnormalized to avoid dividing by ~0.

    Args:
        train_table: Training data, shape (n_train, n_features)
        val_table: Validation data, shape (n_val, n_features)
        normalize_columns: Columns to normalize
        protected_columns: Columns that must stay unchanged
        forcing_column_index: Column holding the wind forcing

    Returns:
        train_n: Normalized training data
        val_n: Normalized validation data
        mu: Means aligned with `normalize_columns` (0 where skipped)
        sigma: Scales aligned with `normalize_columns` (1 where skipped)

    Raises:
        ConfigurationError: a column index lies outside the tables.
        DataQualityError: precision loss on conversion, NaN/Inf statistics
            or altered protected columns.
    """
    train = _as_table(train_table, "training")
    val = _as_table(val_table, "validation")
    normalize_columns = [int(c) for c in normalize_columns]
    protected = sorted({int(c) for c in protected_columns})
    forcing_column_index = int(forcing_column_index)
    for split, table in (("training", train), ("validation", val)):
        _check_columns(
            table.shape[1], split,
            normalize_columns=normalize_columns,
            protected_columns=protected,
            forcing_column_index=[forcing_column_index],
        )

    tau = train[:, forcing_column_index]
    tau_mean = float(jnp.mean(tau))
    tau_std = float(jnp.std(tau, ddof=1)) if tau.shape[0] > 1 else 0.0

    skip = set(protected)
    if tau_std < FORCING_STD_THRESHOLD:
        logger.info(
            "Wind forcing is constant (mean=%g, std=%g); skipping normalization for column %d",
            tau_mean, tau_std, forcing_column_index,
        )
        skip.add(forcing_column_index)
    else:
        logger.info(
            "Wind forcing is varying (mean=%g, std=%g); normalizing all features",
            tau_mean, tau_std,
        )

    active = [c for c in normalize_columns if c not in skip]

    mu_full = jnp.zeros((len(normalize_columns),), dtype=train.dtype)
    sigma_full = jnp.ones((len(normalize_columns),), dtype=train.dtype)
    if active:
        cols = jnp.asarray(active)
        mu = jnp.mean(train[:, cols], axis=0)
        sigma = jnp.std(train[:, cols], axis=0, ddof=1) + STD_FLOOR
        _check_statistics(mu, sigma)

        positions = jnp.asarray([normalize_columns.index(c) for c in active])
        mu_full = mu_full.at[positions].set(mu)
        sigma_full = sigma_full.at[positions].set(sigma)

    train_n = _normalize(train, mu_full, sigma_full, normalize_columns, skip)
    val_n = _normalize(val, mu_full, sigma_full, normalize_columns, skip)

    _check_protected(train_table, train_n, protected, "training")
    _check_protected(val_table, val_n, protected, "validation")
    _warn_nan(train_n, "training")
    _warn_nan(val_n, "validation")

    return train_n, val_n, mu_full, sigma_full


def _normalize(table, mu, sigma, normalize_columns, skip):
    active = [i for i, c in enumerate(normalize_columns) if c not in skip]
    if not active:
        return table
    positions = jnp.asarray(active)
    cols = jnp.asarray([normalize_columns[i] for i in active])
    return table.at[:, cols].set((table[:, cols] - mu[positions]) / sigma[positions])


def _check_statistics_shape(mu, sigma, normalize_columns):
    n = len(normalize_columns)
    if mu.shape != (n,) or sigma.shape != (n,):
        raise ConfigurationError(
            f"Statistics of shape {mu.shape}, {sigma.shape} do not match {n} columns"
        )


def apply(
    table,
    mu,
    sigma,
    normalize_columns: Sequence[int],
    protected_columns: Sequence[int] = (),
) -> jax.Array:
    """
    Normalize new data with precomputed statistics.

    Protected columns are skipped even if listed in `normalize_columns`.

    Raises:
        ConfigurationError: a column index lies outside the table.
        DataQualityError: precision loss on conversion or a protected
            column changed.
    """
    table_j = _as_table(table, "input")
    mu = jnp.asarray(mu, dtype=table_j.dtype)
    sigma = jnp.asarray(sigma, dtype=table_j.dtype)
    normalize_columns = [int(c) for c in normalize_columns]
    protected = sorted({int(c) for c in protected_columns})
    _check_columns(
        table_j.shape[1], "input",
        normalize_columns=normalize_columns, protected_columns=protected,
    )
    _check_statistics_shape(mu, sigma, normalize_columns)

    table_n = _normalize(table_j, mu, sigma, normalize_columns, set(protected))
    _check_protected(table, table_n, protected, "input")
    return table_n


def invert(
    table,
    mu,
    sigma,
    normalize_columns: Sequence[int],
    protected_columns: Sequence[int] = (),
) -> jax.Array:
    """
    Map normalized columns back to physical units: x = x_n * sigma + mu.

    Protected columns are left as they are, mirroring `apply`.
    """
    table_j = _as_table(table, "normalized")
    mu = jnp.asarray(mu, dtype=table_j.dtype)
    sigma = jnp.asarray(sigma, dtype=table_j.dtype)
    normalize_columns = [int(c) for c in normalize_columns]
    protected = {int(c) for c in protected_columns}
    _check_columns(
        table_j.shape[1], "normalized",
        normalize_columns=normalize_columns, protected_columns=sorted(protected),
    )
    _check_statistics_shape(mu, sigma, normalize_columns)

    active = [i for i, c in enumerate(normalize_columns) if c not in protected]
    if not active:
        return table_j
    positions = jnp.asarray(active)
    cols = jnp.asarray([normalize_columns[i] for i in active])
    return table_j.at[:, cols].set(table_j[:, cols] * sigma[positions] + mu[positions])


def fit_statistics(
    train_table,
    val_table,
    normalize_columns: Sequence[int],
    protected_columns: Sequence[int],
    forcing_column_index: int,
) -> Tuple[jax.Array, jax.Array, NormalizationStatistics]:
    """`fit_and_apply`, returning the statistics as a `NormalizationStatistics`."""
    train_n, val_n, mu, sigma = fit_and_apply(
        train_table, val_table, normalize_columns, protected_columns, forcing_column_index
    )
    stats = NormalizationStatistics(
        mu=mu,
        sigma=sigma,
        columns=tuple(int(c) for c in normalize_columns),
        protected_columns=tuple(sorted({int(c) for c in protected_columns})),
    )
    return train_n, val_n, stats

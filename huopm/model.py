from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING, Any

from ._compat import FrameKind

if TYPE_CHECKING:
    import pandas as pd
    import polars as pl
    import pyarrow as pa
    from typing_extensions import Self


class BaseModel(ABC):
    """Abstract base class for huopm models.

    Provides the shared data ingestion shorthands (from_pandas, from_polars,
    from_arrow) and pickle persistence.
    """

    @classmethod
    @abstractmethod
    def from_transactions(
        cls,
        data: Any,
        transaction_col: str | None = None,
        item_col: str | None = None,
        verbose: int = 0,
        **kwargs: Any,
    ) -> Self:
        """Initialize the model from a long-format DataFrame or raw records.

        Must be implemented by subclasses.
        """
        pass

    def __dir__(self) -> list[str]:
        """Public API surface for REPL completion; hides underscored attributes."""
        return [k for k in super().__dir__() if not k.startswith("_")]

    @classmethod
    def from_pandas(
        cls,
        df: pd.DataFrame,
        transaction_col: str | None = None,
        item_col: str | None = None,
        verbose: int = 0,
        **kwargs: Any,
    ) -> Self:
        """Shorthand for ``from_transactions(df, transaction_col, item_col)``."""
        return cls.from_transactions(df, transaction_col=transaction_col, item_col=item_col, verbose=verbose, **kwargs)

    @classmethod
    def from_polars(
        cls,
        df: pl.DataFrame,
        transaction_col: str | None = None,
        item_col: str | None = None,
        verbose: int = 0,
        **kwargs: Any,
    ) -> Self:
        """Shorthand for ``from_transactions(df, transaction_col, item_col)``."""
        return cls.from_transactions(df, transaction_col=transaction_col, item_col=item_col, verbose=verbose, **kwargs)

    @classmethod
    def from_arrow(
        cls,
        table: pa.Table,
        transaction_col: str | None = None,
        item_col: str | None = None,
        **kwargs: Any,
    ) -> Self:
        """Shorthand for ``from_transactions(table, transaction_col, item_col)``.

        Parameters
        ----------
        table : pyarrow.Table
            An Arrow table with transaction, item and quantity columns.
        transaction_col : str, optional
            Name of the transaction ID column.
        item_col : str, optional
            Name of the item column.
        **kwargs
            Extra arguments forwarded to ``from_transactions``.
        """
        return cls.from_transactions(table, transaction_col=transaction_col, item_col=item_col, **kwargs)

    def save(self, path: str | Path) -> None:
        """Save the model to disk using pickle.

        Parameters
        ----------
        path : str or Path
            File path to write the model to (e.g. ``"model.pkl"``).
        """
        import pickle

        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        payload = {
            "__huopm_version__": 1,
            "class": type(self).__name__,
            "module": type(self).__module__,
            "state": self.__dict__,
        }
        with open(path, "wb") as f:
            pickle.dump(payload, f, protocol=pickle.HIGHEST_PROTOCOL)

    @classmethod
    def load(cls, path: str | Path) -> Self:
        """Load a previously saved model from disk.

        Parameters
        ----------
        path : str or Path
            File path to load from.

        Returns
        -------
        Self
            The restored model.

        Raises
        ------
        TypeError
            If the file does not hold a huopm model payload.
        """
        import pickle

        path = Path(path)
        with open(path, "rb") as f:
            payload = pickle.load(f)  # noqa: S301

        if not (isinstance(payload, dict) and "__huopm_version__" in payload):
            raise TypeError(f"Expected a saved {cls.__name__}, got {type(payload).__name__}")

        saved_cls_name = payload.get("class", "")
        instance = cls.__new__(cls)  # type: ignore[arg-type]
        instance.__dict__.update(payload["state"])

        if saved_cls_name != cls.__name__:
            import warnings

            warnings.warn(
                f"Model was saved as {saved_cls_name} but loaded as {cls.__name__}. "
                "This may cause unexpected behaviour.",
                stacklevel=2,
            )

        return instance  # type: ignore[return-value]


class Miner(BaseModel):
    """Base class for pattern mining algorithms.

    Inherited by HUOPM.
    """

    def __init__(self, data: Any):
        """Initialize the miner with pre-formatted data.

        Parameters
        ----------
        data : Any
            The parsed database the algorithm runs on.
        """
        self.data = data

        # Subclasses built from a polars / pyarrow frame overwrite this so
        # outputs are converted back to the input type
        self._orig_df_type: FrameKind = "pandas"

    def _convert_to_orig_type(self, df: pd.DataFrame) -> Any:
        """Convert a pandas result back to the input DataFrame type."""
        import pandas as pd

        if df is None or not isinstance(df, pd.DataFrame):
            return df

        if self._orig_df_type in ("pyarrow", "polars"):
            # Arrow list columns need lists, not tuples
            for col in ["itemset", "itemsets"]:
                if col in df.columns:
                    df[col] = df[col].apply(lambda x: list(x) if isinstance(x, (tuple, set, frozenset)) else x)

        if self._orig_df_type == "pyarrow":
            from ._dependencies import import_optional_dependency

            pa = import_optional_dependency("pyarrow")
            return pa.Table.from_pandas(df, preserve_index=False)
        elif self._orig_df_type == "polars":
            from ._dependencies import import_optional_dependency

            pl = import_optional_dependency("polars")
            return pl.from_pandas(df)
        return df

    @abstractmethod
    def mine(self, **kwargs: Any) -> pd.DataFrame:
        """Execute the mining algorithm and return the patterns.

        Must be implemented by subclasses.
        """
        pass

    def fit(self, **kwargs: Any) -> Self:
        """Sklearn-compatible alias for ``mine()``. Runs the mining algorithm.

        Returns
        -------
        self
        """
        self._result = self.mine(**kwargs)
        return self  # type: ignore[return-value]

    def predict(self, **kwargs: Any) -> pd.DataFrame:
        """Return the last mined result, or run ``fit()`` first.

        Returns
        -------
        pd.DataFrame
            The mined patterns.
        """
        if getattr(self, "_result", None) is None:
            self.fit(**kwargs)
        return self._result  # type: ignore[return-value]

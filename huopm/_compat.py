from __future__ import annotations

from typing import TYPE_CHECKING, Any, Literal, Union

if TYPE_CHECKING:
    import pandas as pd
    import polars as pl
    import pyarrow as pa

    #: Union of the long-format tabular inputs accepted by huopm.
    #:
    #: * ``pandas.DataFrame``
    #: * ``polars.DataFrame`` – converted to pandas via Arrow
    #: * ``pyarrow.Table`` – converted to pandas via ``Table.to_pandas()``
    DataFrame = Union[pd.DataFrame, pl.DataFrame, pa.Table]  # noqa: UP007

FrameKind = Literal["pandas", "polars", "pyarrow", "records"]


def frame_kind(data: Any) -> FrameKind:
    """Name the container type of *data* without importing optional libraries."""
    _type = type(data)
    mod = getattr(_type, "__module__", "") or ""
    if _type.__name__ == "Table" and mod.startswith("pyarrow"):
        return "pyarrow"
    if _type.__name__ == "DataFrame" and mod.startswith("polars"):
        return "polars"
    if _type.__name__ == "DataFrame" and mod.startswith("pandas"):
        return "pandas"
    return "records"


def to_pandas(data: Any) -> Any:
    """Coerce polars / PyArrow inputs to a pandas DataFrame; return everything else unchanged."""
    kind = frame_kind(data)

    if kind == "pyarrow":
        from huopm._dependencies import import_optional_dependency

        import_optional_dependency("pyarrow")
        return data.to_pandas()

    if kind == "polars":
        from huopm._dependencies import import_optional_dependency

        import_optional_dependency("polars")
        # polars.DataFrame.to_pandas() goes through pyarrow
        import_optional_dependency("pyarrow", extra="polars -> pandas conversion requires pyarrow.")
        return data.to_pandas()

    return data

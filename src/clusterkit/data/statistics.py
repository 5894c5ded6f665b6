"""
Column statistics over a DataSet.

Small helpers used when summarising clusters: mean, variance, standard
deviation, mode, min and max of one attribute.
"""

from collections import Counter
from typing import Any, Union
import torch

from .data_set import DataSet


def _numeric_column(data_set: DataSet, attr: Union[int, str]) -> torch.Tensor:
    data_set.check_not_empty()
    index = data_set.get_index(attr)
    return torch.tensor([float(item[index]) for item in data_set.data_items],
                        dtype=torch.float64)


def mean(data_set: DataSet, attr: Union[int, str]) -> float:
    """Mean value of a numeric attribute."""
    return float(_numeric_column(data_set, attr).mean())


def variance(data_set: DataSet, attr: Union[int, str]) -> float:
    """Sample variance (n - 1 denominator); 0 for a single item."""
    column = _numeric_column(data_set, attr)
    if column.numel() < 2:
        return 0.0
    return float(column.var())


def standard_deviation(data_set: DataSet, attr: Union[int, str]) -> float:
    return variance(data_set, attr) ** 0.5


def mode(data_set: DataSet, attr: Union[int, str]) -> Any:
    """Most frequent value; the first one seen wins ties."""
    data_set.check_not_empty()
    index = data_set.get_index(attr)
    return Counter(item[index] for item in data_set.data_items).most_common(1)[0][0]


def max_value(data_set: DataSet, attr: Union[int, str]) -> Any:
    data_set.check_not_empty()
    index = data_set.get_index(attr)
    return max(item[index] for item in data_set.data_items)


def min_value(data_set: DataSet, attr: Union[int, str]) -> Any:
    data_set.check_not_empty()
    index = data_set.get_index(attr)
    return min(item[index] for item in data_set.data_items)

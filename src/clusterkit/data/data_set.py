"""
DataSet: the ordered collection of data items every clusterer consumes.

A data set holds N items, each an ordered list of attribute values of the
same arity. Numeric attributes feed the distance computations; nominal ones
are carried along and summarised by their mode.
"""

from numbers import Number
from typing import Any, Iterable, Iterator, List, Optional, Sequence, Union
from collections import Counter
import numpy as np
import pandas as pd
import torch
from torch import Tensor


def _is_numeric(value: Any) -> bool:
    return isinstance(value, Number) and not isinstance(value, bool)


class DataSet:
    """Collection of data items plus one label per attribute.

    Parameters
    ----------
    data_items : sequence of rows, numpy array or tensor, optional
        Items, all with the same number of attributes.
    data_labels : list of str, optional
        Attribute names. Defaults to ``attribute_1 ... attribute_{n-1},
        class_value``.

    Examples
    --------
    >>> ds = DataSet(data_items=[[0, 0], [0, 1], [5, 0]], data_labels=['x', 'y'])
    >>> len(ds), ds.num_attributes
    (3, 2)
    """

    def __init__(self,
                 data_items: Optional[Union[Sequence[Sequence[Any]], np.ndarray, Tensor]] = None,
                 data_labels: Optional[Sequence[str]] = None):
        self._data_items: List[List[Any]] = []
        self._data_labels: List[str] = []
        self._tensor: Optional[Tensor] = None
        if data_items is not None:
            self.set_data_items(data_items)
        if data_labels is not None:
            self.set_data_labels(data_labels)

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------
    @classmethod
    def from_rows(cls, rows: Iterable[Sequence[Any]],
                  data_labels: Optional[Sequence[str]] = None) -> 'DataSet':
        """Build a data set from any iterable of rows."""
        return cls(data_items=[list(row) for row in rows], data_labels=data_labels)

    @classmethod
    def from_csv(cls, filepath: str, header: bool = True,
                 parse_numbers: bool = True) -> 'DataSet':
        """Load data items from a CSV file.

        Args:
            filepath: Path to the CSV file
            header: Whether the first row holds the attribute labels
            parse_numbers: Convert numeric-looking cells to numbers. When
                False every cell is kept as a string.
        """
        frame = pd.read_csv(filepath,
                            header=0 if header else None,
                            dtype=None if parse_numbers else str,
                            skipinitialspace=True)
        rows = [list(row) for row in frame.itertuples(index=False, name=None)]
        labels = [str(c) for c in frame.columns] if header else None
        return cls(data_items=rows, data_labels=labels)

    def set_data_items(self, items) -> 'DataSet':
        """Set the data items, checking that they all share one arity."""
        if isinstance(items, Tensor):
            items = items.detach().cpu().tolist()
        elif isinstance(items, np.ndarray):
            items = items.tolist()
        items = [list(item) for item in items]
        self._check_data_items(items)
        if self._data_labels and items and len(self._data_labels) != len(items[0]):
            self._data_labels = []
        self._data_items = items
        if not self._data_labels and items:
            self._data_labels = self._default_data_labels(len(items[0]))
        self._tensor = None
        return self

    def set_data_labels(self, labels: Sequence[str]) -> 'DataSet':
        """Set attribute labels; their number must match the item arity."""
        labels = list(labels)
        if self._data_items and len(labels) != self.num_attributes:
            raise ValueError(f"Number of labels and attributes do not match. "
                             f"{len(labels)} labels and {self.num_attributes} "
                             f"attributes found.")
        self._data_labels = labels
        return self

    def append(self, data_item: Sequence[Any]) -> 'DataSet':
        """Add one item, checking its arity against the existing items."""
        if data_item is None or isinstance(data_item, (str, bytes)) or len(data_item) == 0:
            raise ValueError("Data item must be a non empty sequence.")
        if not self._data_items:
            return self.set_data_items([data_item])
        if len(data_item) != self.num_attributes:
            raise ValueError(f"Number of attributes do not match. {len(data_item)} "
                             f"attributes provided, {self.num_attributes} "
                             f"attributes expected.")
        self._data_items.append(list(data_item))
        self._tensor = None
        return self

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------
    @property
    def data_items(self) -> List[List[Any]]:
        return self._data_items

    @property
    def data_labels(self) -> List[str]:
        return self._data_labels

    @property
    def num_attributes(self) -> int:
        """Number of attributes, including a class attribute if present."""
        return len(self._data_items[0]) if self._data_items else 0

    @property
    def category_label(self) -> Optional[str]:
        """Label of the last (class) attribute."""
        return self._data_labels[-1] if self._data_labels else None

    @property
    def numeric_attributes(self) -> List[int]:
        """Positions of the attributes holding numbers in the first item."""
        if not self._data_items:
            return []
        return [i for i, value in enumerate(self._data_items[0]) if _is_numeric(value)]

    def __len__(self) -> int:
        return len(self._data_items)

    def __iter__(self) -> Iterator[List[Any]]:
        return iter(self._data_items)

    def __getitem__(self, index: Union[int, slice]) -> 'DataSet':
        """New data set with the item(s) selected by an index or a slice."""
        if isinstance(index, slice):
            selected = self._data_items[index]
        else:
            selected = [self._data_items[index]]
        return DataSet(data_items=selected, data_labels=self._data_labels)

    def subset(self, indices: Iterable[int]) -> 'DataSet':
        """New data set holding the items at the given positions."""
        selected = [self._data_items[i] for i in indices]
        return DataSet(data_items=selected or None,
                       data_labels=self._data_labels if selected else None)

    def get_index(self, attr: Union[int, str]) -> int:
        """Position of an attribute given its label or position."""
        if isinstance(attr, int):
            return attr
        try:
            return self._data_labels.index(attr)
        except ValueError:
            raise ValueError(f"Unknown attribute: {attr}") from None

    def check_not_empty(self) -> None:
        """Raise ValueError if there is no data item."""
        if not self._data_items:
            raise ValueError("Examples data set must not be empty.")

    # ------------------------------------------------------------------
    # Numeric views and statistics
    # ------------------------------------------------------------------
    def to_tensor(self) -> Tensor:
        """(n, d) float64 tensor of the numeric attributes.

        The tensor is built once and cached until items change.
        """
        if self._tensor is None:
            columns = self.numeric_attributes
            if not self._data_items:
                self._tensor = torch.empty((0, 0), dtype=torch.float64)
            else:
                if not columns:
                    raise ValueError("Data set has no numeric attributes to cluster on")
                rows = [[float(item[i]) for i in columns] for item in self._data_items]
                self._tensor = torch.tensor(rows, dtype=torch.float64)
        return self._tensor

    def get_mean_or_mode(self) -> List[Any]:
        """Mean of each numeric attribute and mode of each nominal one."""
        self.check_not_empty()
        summary = []
        for i, value in enumerate(self._data_items[0]):
            column = [item[i] for item in self._data_items]
            if _is_numeric(value):
                summary.append(float(np.mean(column)))
            else:
                summary.append(Counter(column).most_common(1)[0][0])
        return summary

    def build_domain(self, attr: Union[int, str]):
        """Domain of one attribute.

        Returns ``[min, max]`` for numeric attributes and the set of observed
        values for nominal ones.
        """
        self.check_not_empty()
        index = self.get_index(attr)
        column = [item[index] for item in self._data_items]
        if _is_numeric(column[0]):
            return [min(column), max(column)]
        return set(column)

    def build_domains(self) -> list:
        """Domain of every attribute, in label order."""
        return [self.build_domain(i) for i in range(self.num_attributes)]

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    @staticmethod
    def _check_data_items(items: List[List[Any]]) -> None:
        if not items:
            return
        arity = len(items[0])
        if arity == 0:
            raise ValueError("Data items must have at least one attribute")
        for index, item in enumerate(items):
            if len(item) != arity:
                raise ValueError(f"Quantity of attributes is inconsistent. The first "
                                 f"item has {arity} attributes and row {index} has "
                                 f"{len(item)} attributes")

    @staticmethod
    def _default_data_labels(arity: int) -> List[str]:
        labels = [f"attribute_{i + 1}" for i in range(arity - 1)]
        labels.append("class_value")
        return labels

    def __repr__(self) -> str:
        return f"DataSet(n_items={len(self)}, labels={self._data_labels})"

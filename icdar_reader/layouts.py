"""
Dataset Layouts

File naming, index ranges and annotation delimiters for each split of a
dataset. A split directory holds files named:
    <image_prefix><index>.<image_ext>
    <label_prefix><index>.<label_ext>
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from .parsers import Delimiter


@dataclass(frozen=True)
class SplitLayout:
    """Naming convention and index range for a dataset split (train/test)."""
    image_prefix: str
    label_prefix: str
    first_index: int
    last_index: int  # Inclusive
    delimiter: Delimiter
    image_ext: str = "jpg"
    label_ext: str = "txt"
    parser_type: str = "icdar_rect"

    def __post_init__(self):
        if self.last_index < self.first_index:
            raise ValueError(
                f"Invalid index range: {self.first_index}..{self.last_index}"
            )
        object.__setattr__(self, "delimiter", Delimiter.parse(self.delimiter))

    @property
    def size(self) -> int:
        """Number of indices in the full range."""
        return self.last_index - self.first_index + 1

    def count(self, limit: int = 0) -> int:
        """Number of indices to read; a limit of 0 means the full range."""
        if limit < 0:
            raise ValueError(f"Limit must be >= 0, got {limit}")
        return min(self.size, limit) if limit else self.size

    def indices(self, limit: int = 0) -> range:
        return range(self.first_index, self.first_index + self.count(limit))

    def image_name(self, index: int) -> str:
        return f"{self.image_prefix}{index}.{self.image_ext}"

    def label_name(self, index: int) -> str:
        return f"{self.label_prefix}{index}.{self.label_ext}"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SplitLayout":
        if not isinstance(data, dict):
            raise ValueError(f"Split layout must be a mapping, got {type(data).__name__}")

        for key in ("first_index", "last_index"):
            if data.get(key) is None:
                raise ValueError(f"Split layout is missing '{key}'")
        try:
            first_index = int(data["first_index"])
            last_index = int(data["last_index"])
        except (TypeError, ValueError):
            raise ValueError(
                f"Invalid index range: {data['first_index']!r}..{data['last_index']!r}"
            ) from None

        return cls(
            image_prefix=_str_field(data, "image_prefix", ""),
            label_prefix=_str_field(data, "label_prefix", ""),
            first_index=first_index,
            last_index=last_index,
            delimiter=data.get("delimiter") or Delimiter.SPACE,
            image_ext=_str_field(data, "image_ext", "jpg"),
            label_ext=_str_field(data, "label_ext", "txt"),
            parser_type=_str_field(data, "parser_type", "icdar_rect"),
        )


def _str_field(data: Dict[str, Any], key: str, default: str) -> str:
    # An empty YAML value (`key:`) loads as None
    value = data.get(key)
    if value is None:
        return default
    if not isinstance(value, str):
        raise ValueError(f"'{key}' must be a string, got {value!r}")
    return value


@dataclass(frozen=True)
class DatasetLayout:
    """Full layout of a dataset."""
    name: str
    train: SplitLayout
    test: SplitLayout

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DatasetLayout":
        for key in ("train", "test"):
            if key not in data:
                raise ValueError(f"Layout is missing the '{key}' split")
        return cls(
            name=str(data.get("name") or "custom"),
            train=SplitLayout.from_dict(data["train"]),
            test=SplitLayout.from_dict(data["test"]),
        )

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "DatasetLayout":
        """Load a layout from a YAML file."""
        with open(path, "r") as f:
            data = yaml.safe_load(f)

        if not isinstance(data, dict):
            raise ValueError(f"Layout file must contain a mapping: {path}")

        return cls.from_dict(data)


# =============================================================================
# LAYOUTS
# =============================================================================

# Challenge 2 (focused scene text): training images 100.jpg..328.jpg with
# space separated gt_100.txt.., test images img_1.jpg..img_233.jpg with comma
# separated gt_img_1.txt..
ICDAR2013 = DatasetLayout(
    name="icdar2013",
    train=SplitLayout(
        image_prefix="",
        label_prefix="gt_",
        first_index=100,
        last_index=328,
        delimiter=Delimiter.SPACE,
    ),
    test=SplitLayout(
        image_prefix="img_",
        label_prefix="gt_img_",
        first_index=1,
        last_index=233,
        delimiter=Delimiter.COMMA,
    ),
)

# Registry of all layouts
LAYOUTS: Dict[str, DatasetLayout] = {
    "icdar2013": ICDAR2013,
}


def get_layout(name: str) -> Optional[DatasetLayout]:
    """Get a layout by name."""
    return LAYOUTS.get(name.lower())


def get_available_layouts() -> List[str]:
    """Get list of available layout names."""
    return list(LAYOUTS.keys())

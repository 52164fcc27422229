import pytest

from icdar_reader.layouts import (
    ICDAR2013,
    DatasetLayout,
    SplitLayout,
    get_available_layouts,
    get_layout,
)
from icdar_reader.parsers import Delimiter


def test_icdar2013_naming():
    assert ICDAR2013.train.image_name(100) == "100.jpg"
    assert ICDAR2013.train.label_name(100) == "gt_100.txt"
    assert ICDAR2013.train.delimiter is Delimiter.SPACE
    assert ICDAR2013.test.image_name(7) == "img_7.jpg"
    assert ICDAR2013.test.label_name(7) == "gt_img_7.txt"
    assert ICDAR2013.test.delimiter is Delimiter.COMMA


def test_icdar2013_ranges():
    assert ICDAR2013.train.size == 229
    assert list(ICDAR2013.train.indices())[-1] == 328
    assert ICDAR2013.test.size == 233


@pytest.mark.parametrize("limit, expected", [(0, 229), (5, 5), (229, 229), (1000, 229)])
def test_count_with_limit(limit, expected):
    assert ICDAR2013.train.count(limit) == expected
    assert len(ICDAR2013.train.indices(limit)) == expected


def test_indices_start_at_first_index():
    assert list(ICDAR2013.train.indices(3)) == [100, 101, 102]


def test_negative_limit():
    with pytest.raises(ValueError):
        ICDAR2013.test.indices(-1)


def test_invalid_range():
    with pytest.raises(ValueError):
        SplitLayout(image_prefix="", label_prefix="gt_", first_index=5, last_index=4,
                    delimiter=Delimiter.SPACE)


def test_registry():
    assert get_layout("ICDAR2013") is ICDAR2013
    assert get_layout("nope") is None
    assert "icdar2013" in get_available_layouts()


def test_from_yaml(tmp_path):
    path = tmp_path / "layout.yaml"
    path.write_text(
        "name: mini\n"
        "train:\n"
        "  image_prefix: train_\n"
        "  image_ext: png\n"
        "  label_prefix: gt_\n"
        "  first_index: 1\n"
        "  last_index: 3\n"
        "  delimiter: space\n"
        "test:\n"
        "  image_prefix: img_\n"
        "  label_prefix: gt_img_\n"
        "  first_index: 10\n"
        "  last_index: 19\n"
        "  delimiter: ','\n"
    )

    layout = DatasetLayout.from_yaml(path)

    assert layout.name == "mini"
    assert layout.train.image_name(2) == "train_2.png"
    assert layout.train.delimiter is Delimiter.SPACE
    assert layout.test.delimiter is Delimiter.COMMA
    assert layout.test.image_ext == "jpg"
    assert layout.test.size == 10


def test_from_yaml_missing_split(tmp_path):
    path = tmp_path / "layout.yaml"
    path.write_text("name: half\ntrain:\n  first_index: 1\n  last_index: 2\n")

    with pytest.raises(ValueError, match="test"):
        DatasetLayout.from_yaml(path)


def test_from_yaml_not_a_mapping(tmp_path):
    path = tmp_path / "layout.yaml"
    path.write_text("- just\n- a list\n")

    with pytest.raises(ValueError):
        DatasetLayout.from_yaml(path)


def test_from_yaml_empty_values_use_defaults(tmp_path):
    path = tmp_path / "layout.yaml"
    path.write_text(
        "name:\n"
        "train:\n"
        "  image_prefix:\n"
        "  label_prefix: gt_\n"
        "  image_ext:\n"
        "  first_index: 1\n"
        "  last_index: 3\n"
        "test:\n"
        "  image_prefix: img_\n"
        "  label_prefix: gt_img_\n"
        "  first_index: 1\n"
        "  last_index: 3\n"
        "  delimiter:\n"
    )

    layout = DatasetLayout.from_yaml(path)

    assert layout.name == "custom"
    assert layout.train.image_name(1) == "1.jpg"
    assert layout.train.label_name(1) == "gt_1.txt"
    assert layout.test.delimiter is Delimiter.SPACE


@pytest.mark.parametrize("train", [
    "{image_prefix: 7, first_index: 1, last_index: 3}",
    "{label_prefix: gt_, last_index: 3}",
    "{first_index: one, last_index: 3}",
    "[1, 3]",
])
def test_from_yaml_rejects_bad_split(tmp_path, train):
    path = tmp_path / "layout.yaml"
    path.write_text(f"train: {train}\ntest: {{first_index: 1, last_index: 2}}\n")

    with pytest.raises(ValueError):
        DatasetLayout.from_yaml(path)

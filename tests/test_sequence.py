import pytest

from sequence import (
    copy_within,
    fill,
    filtered,
    index_of,
    last_index_of,
    mapped,
    reversed_copy,
    sorted_copy,
)
from uintnarray import Alignment, UintNArray


def six():
    return UintNArray(4, [1, 2, 3, 4, 5, 6])


@pytest.mark.parametrize(
    "args, expected",
    [
        ((3, 4, 6), [1, 2, 3, 5, 6, 6]),
        ((3,), [1, 2, 3, 1, 2, 3]),
        ((3, 0, 6), [1, 2, 3, 1, 2, 3]),
        ((3, 4, 4), [1, 2, 3, 4, 5, 6]),
        ((3, 4), [1, 2, 3, 5, 6, 6]),
        ((3, -2), [1, 2, 3, 5, 6, 6]),
        ((3, -9), [1, 2, 3, 1, 2, 3]),
        ((3, 4, -1), [1, 2, 3, 5, 5, 6]),
        (("string", 0, 6), [1, 2, 3, 4, 5, 6]),
    ],
)
def test_copy_within(args, expected):
    view = six()
    assert copy_within(view, *args) is view
    assert view.tolist() == expected


def test_fill_truncates():
    view = UintNArray(4, [1, 2, 3, 4])
    fill(view, 12)
    assert view.tolist() == [12, 12, 12, 12]
    fill(view, 17, 1, -1)
    assert view.tolist() == [12, 1, 1, 12]


def test_index_of():
    view = UintNArray(4, [1, 2, 3, 2])
    assert index_of(view, 2) == 1
    assert last_index_of(view, 2) == 3
    assert index_of(view, 9) == -1
    assert last_index_of(view, 9) == -1


def test_mapped_and_filtered():
    view = UintNArray(4, [1, 2, 3, 4])
    assert mapped(view, lambda w: w + 1).tolist() == [2, 3, 4, 5]
    assert mapped(view, lambda w: w + 12).tolist() == [13, 14, 15, 0]
    assert filtered(view, lambda w: w == 4).tolist() == [4]


def test_results_keep_alignment():
    view = UintNArray(-4, [1, 2, 3, 4])
    result = mapped(view, lambda w: w + 1)
    assert result.alignment is Alignment.RIGHT
    assert result.tolist() == [2, 3, 4, 5]


def test_reverse_and_sort():
    assert reversed_copy(UintNArray(4, [1, 2, 3, 4])).tolist() == [4, 3, 2, 1]
    assert sorted_copy(UintNArray(4, [1, 3, 2, 4])).tolist() == [1, 2, 3, 4]
    assert sorted_copy(UintNArray(4, [1, 3, 2]), reverse=True).tolist() == [
        3,
        2,
        1,
    ]


def test_builtins_work_on_arrays():
    view = UintNArray(4, [1, 2, 3, 4])
    assert 4 in view
    assert sum(view) == 10
    assert any(w % 2 == 0 for w in view)
    assert list(enumerate(view)) == [(0, 1), (1, 2), (2, 3), (3, 4)]
    assert "-".join(str(w) for w in view) == "1-2-3-4"


def test_copy_within_non_numeric_end_means_length():
    view = copy_within(six(), 3, 0, "string")
    assert view.tolist() == [1, 2, 3, 1, 2, 3]

"""Unit tests for array shape inspection."""

from faim_api.engine.shape import get_array_shape, is_array


class TestGetArrayShape:
    """Test get_array_shape."""

    def test_1d(self) -> None:
        assert get_array_shape([1, 2, 3]) == [3]

    def test_2d(self) -> None:
        assert get_array_shape([[1, 2], [3, 4], [5, 6]]) == [3, 2]

    def test_3d(self) -> None:
        assert get_array_shape([[[1, 2], [3, 4]]]) == [1, 2, 2]

    def test_tuples_count_as_arrays(self) -> None:
        assert get_array_shape(((1, 2), (3, 4))) == [2, 2]

    def test_scalars_and_strings_have_no_shape(self) -> None:
        assert get_array_shape(5) == []
        assert get_array_shape(None) == []
        assert get_array_shape("[1, 2, 3]") == []
        assert get_array_shape({"x": [1, 2]}) == []

    def test_empty_array_ends_with_zero(self) -> None:
        assert get_array_shape([]) == [0]
        assert get_array_shape([[]]) == [1, 0]

    def test_only_first_element_is_inspected(self) -> None:
        assert get_array_shape([[1, 2, 3], [4]]) == [2, 3]


def test_is_array() -> None:
    assert is_array([1])
    assert is_array(())
    assert not is_array("abc")
    assert not is_array(1.5)

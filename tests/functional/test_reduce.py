import operator

import jax.numpy as jnp
import pytest
from rollkit.core.errors import InvalidArgument
from rollkit.functional.reduce import associative_accumulate, reduce


def test_reduce_left_fold():
    assert reduce(operator.add, [1, 2, 3, 4]) == 10
    assert reduce(operator.sub, [10, 1, 2]) == 7


def test_reduce_with_init():
    assert reduce(operator.add, [1, 2, 3], 100) == 106
    assert reduce(lambda acc, v: acc + [v * 2], [1, 2], []) == [2, 4]


def test_reduce_single_element_skips_function():
    def fail(acc, value):
        raise AssertionError("should not be called")

    assert reduce(fail, [42]) == 42


def test_reduce_right_fold():
    def nest(a, b):
        return f"({a}{b})"

    assert reduce(nest, "abc") == "((ab)c)"
    assert reduce(nest, "abc", right=True) == "(a(bc))"
    assert reduce(operator.sub, [10, 1, 2], right=True) == 11
    assert reduce(nest, "ab", "z", right=True) == "(a(bz))"


def test_reduce_accumulate():
    assert reduce(operator.add, [1, 2, 3, 4], accumulate=True) == [1, 3, 6, 10]
    assert reduce(operator.add, [1, 2, 3], 10, accumulate=True) == [10, 11, 13, 16]


def test_reduce_accumulate_right():
    # Element i is the reduction of x[i:]
    assert reduce(operator.add, [1, 2, 3, 4], accumulate=True, right=True) == [
        10,
        9,
        7,
        4,
    ]
    assert reduce(operator.add, [1, 2], 0, accumulate=True, right=True) == [3, 2, 0]


def test_reduce_empty():
    with pytest.raises(InvalidArgument):
        reduce(operator.add, [])
    assert reduce(operator.add, [], 5) == 5
    assert reduce(operator.add, [], 5, accumulate=True) == [5]


def test_reduce_accepts_iterators():
    assert reduce(max, iter([3, 9, 2])) == 9


def test_associative_accumulate_running_max():
    x = jnp.array([1.0, 3.0, 2.0, 5.0, 4.0])
    result = associative_accumulate(jnp.maximum, x)
    assert result.tolist() == [1.0, 3.0, 3.0, 5.0, 5.0]


def test_associative_accumulate_matches_reduce():
    x = [1.0, 2.0, 3.0, 4.0, 5.0]
    expected = reduce(operator.add, x, accumulate=True)
    assert jnp.allclose(associative_accumulate(jnp.add, x), jnp.array(expected))


def test_associative_accumulate_reverse():
    result = associative_accumulate(jnp.add, [1.0, 2.0, 3.0], reverse=True)
    assert result.tolist() == [6.0, 5.0, 3.0]


def test_associative_accumulate_invalid_shape():
    with pytest.raises(InvalidArgument):
        associative_accumulate(jnp.add, jnp.array([]))
    with pytest.raises(InvalidArgument):
        associative_accumulate(jnp.add, jnp.ones((2, 2)))

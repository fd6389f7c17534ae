"""Tests for Optional type (Some and Nothing) and its factories."""

import pytest
from fallible import Err, Nothing, NothingType, Ok, ShapeError, Some, UnwrapError, optional
from hypothesis import given

from tests.strategies import values


def _fail(*_args, **_kwargs):
    pytest.fail('callback must not run on this variant')


class TestCreation:
    """Tests for some() and none()."""

    def test_some_creation(self):
        """some() wraps a value and narrows with is_some()."""
        maybe = optional.some('Hello')
        assert maybe.is_some()
        assert not maybe.is_none()
        assert maybe.value == 'Hello'

    def test_some_with_none(self):
        """Some(None) is present, not Nothing."""
        maybe = optional.some(None)
        assert maybe.is_some()
        assert maybe.value is None
        assert maybe != Nothing

    def test_none_is_singleton(self):
        """none() always returns the Nothing singleton."""
        assert optional.none() is Nothing
        assert isinstance(Nothing, NothingType)
        assert not Nothing.is_some()
        assert Nothing.is_none()

    def test_nothing_instances_equal(self):
        """All NothingType instances compare equal."""
        assert NothingType() == Nothing

    def test_some_is_frozen(self):
        """Some instances are immutable."""
        with pytest.raises(AttributeError):
            Some(42).value = 100  # type: ignore[misc]

    def test_type_tag(self):
        """Both variants carry the Optional tag."""
        assert optional.some('test').type_tag == 'Optional'
        assert optional.none().type_tag == 'Optional'

    @given(values)
    def test_some_holds_any_value(self, value):
        """some(v) is present and holds v."""
        maybe = optional.some(value)
        assert maybe.is_some()
        assert maybe.value is value


class TestValueOr:
    """Tests for value_or and unwrap."""

    def test_value_or_on_some(self):
        """value_or returns the value for Some."""
        assert optional.some('Hello').value_or('Default') == 'Hello'
        assert optional.some(42).value_or(0) == 42
        assert optional.some({'key': 'value'}).value_or({'key': 'another value'}) == {'key': 'value'}

    def test_value_or_on_nothing(self):
        """value_or returns the default for Nothing."""
        assert optional.none().value_or('Default') == 'Default'
        assert optional.none().value_or(123) == 123

    def test_unwrap(self, sample_some, sample_nothing):
        """unwrap returns the value or raises UnwrapError."""
        assert sample_some.unwrap() == 'hello'
        with pytest.raises(UnwrapError):
            sample_nothing.unwrap()


class TestCombinators:
    """Tests for map, and_then, or_else and match."""

    def test_map_some(self):
        """map transforms the value."""
        assert optional.some('Hello').map(str.upper) == Some('HELLO')
        assert optional.some(42).map(lambda v: v * 2) == Some(84)

    def test_map_skips_nothing(self, sample_nothing):
        """map never runs on Nothing."""
        assert sample_nothing.map(_fail) is Nothing

    def test_and_then(self):
        """and_then chains into the returned Optional."""
        assert optional.some('Hello').and_then(lambda v: optional.some(len(v))) == Some(5)
        assert optional.none().and_then(_fail) is Nothing

    def test_or_else(self):
        """or_else is only consulted for Nothing."""
        assert optional.some('Hello').or_else(_fail) == Some('Hello')
        assert optional.none().or_else(lambda: optional.some('Default')) == Some('Default')

    def test_or_else_multiple_fallbacks(self):
        """or_else chains try each fallback in turn."""
        res = optional.none().or_else(optional.none).or_else(lambda: optional.some('fallback'))
        assert res == Some('fallback')

    def test_combined_chain(self):
        """map, and_then and value_or compose."""
        total = optional.some('Hello').map(lambda v: v + ' World').and_then(lambda v: optional.some(len(v))).value_or(0)
        assert total == 11

    def test_early_termination(self):
        """A Nothing mid-chain skips the rest."""

        def long_enough(v, n):
            return optional.some(v) if len(v) > n else optional.none()

        res = (
            optional.some('start')
            .map(lambda v: v + '-step1')
            .and_then(lambda v: long_enough(v, 5))
            .map(str.upper)
            .and_then(lambda v: optional.some(len(v)))
        )
        assert res == Some(11)

        terminated = (
            optional.some('hi')
            .map(lambda v: v + '-step1')
            .and_then(lambda v: long_enough(v, 10))
            .map(_fail)
            .and_then(_fail)
        )
        assert terminated is Nothing

    def test_match(self, sample_some, sample_nothing):
        """match runs exactly one branch."""
        assert sample_some.match(on_some=str.upper, on_none=_fail) == 'HELLO'
        assert sample_nothing.match(on_some=_fail, on_none=lambda: 'empty') == 'empty'

    def test_ok_or(self, sample_some, sample_nothing):
        """ok_or converts to Result."""
        exc = LookupError('missing')
        assert sample_some.ok_or(exc) == Ok('hello')
        assert sample_nothing.ok_or(exc) == Err(exc)


class TestIteration:
    """Tests for the at-most-one-element iteration protocol."""

    def test_some_yields_value(self):
        """Some yields its value once."""
        assert list(optional.some(42)) == [42]

    def test_nothing_yields_nothing(self):
        """Nothing yields no elements."""
        assert list(optional.none()) == []

    def test_collect_present_values(self):
        """Nested iteration collects present values."""
        options = [optional.some(1), optional.none(), optional.some(3), optional.some(5), optional.none()]
        assert [value for opt in options for value in opt] == [1, 3, 5]

    def test_unpacking(self):
        """Some unpacks to its value; Nothing to no values."""
        [first] = optional.some('test')
        assert first == 'test'
        [*rest] = optional.none()
        assert rest == []

    def test_null_like_values(self):
        """Some(None) yields None."""
        assert list(optional.some(None)) == [None]

    @given(values)
    def test_iteration_is_restartable(self, value):
        """Repeated passes yield the same single element."""
        maybe = optional.some(value)
        assert list(maybe) == [value]
        assert list(maybe) == [value]

    def test_nothing_iteration_is_restartable(self):
        """Repeated passes over Nothing stay empty."""
        assert list(Nothing) == []
        assert list(Nothing) == []


class TestFrom:
    """Tests for from_() and the wrap decorator."""

    def test_from_value(self):
        """A returned value becomes Some."""
        assert optional.from_(lambda: {'a': 1}.get('a')) == Some(1)

    def test_from_none(self):
        """A returned None becomes Nothing."""
        assert optional.from_(lambda: {'a': 1}.get('b')) is Nothing

    def test_from_falsy_values_are_present(self):
        """Only None means absent."""
        assert optional.from_(lambda: 0) == Some(0)
        assert optional.from_(lambda: '') == Some('')
        assert optional.from_(lambda: []) == Some([])

    def test_from_propagates_exceptions(self):
        """Exceptions from fn are not swallowed."""
        with pytest.raises(KeyError):
            optional.from_(lambda: {}['missing'])

    def test_wrap(self):
        """Decorated functions return Optional."""

        @optional.wrap
        def find(items, key):
            return items.get(key)

        assert find({'a': 1}, 'a') == Some(1)
        assert find({'a': 1}, 'b') is Nothing
        assert find.__name__ == 'find'


class TestFromShape:
    """Tests for validated raw-shape construction."""

    def test_some_shape(self):
        """{'some': v} builds Some."""
        assert optional.from_shape({'some': None}) == Some(None)

    def test_none_shape(self):
        """{'none': ...} builds Nothing."""
        assert optional.from_shape({'none': True}) is Nothing

    @pytest.mark.parametrize('shape', [{}, {'some': 1, 'none': True}, {'value': 1}, [1]])
    def test_invalid_shapes_rejected(self, shape):
        """Shapes without exactly one variant field fail fast."""
        with pytest.raises(ShapeError):
            optional.from_shape(shape)

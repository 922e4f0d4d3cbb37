import pytest

from tsugumi.shared.enums import (
    CollectionType,
    Direction,
    Layout,
    Orientation,
    PageSpread,
    Spread,
    TitleType,
    UnknownVariantError,
)


@pytest.mark.parametrize(
    ('enum_cls', 'value', 'expected'),
    [
        (TitleType, 'subtitle', TitleType.SUBTITLE),
        (CollectionType, 'set', CollectionType.SET),
        (Direction, 'ltr', Direction.LTR),
        (Layout, 'pre-paginated', Layout.PRE_PAGINATED),
        (Orientation, 'landscape', Orientation.LANDSCAPE),
        (Spread, 'none', Spread.NONE),
    ],
)
def test_parse_canonical_string(enum_cls, value, expected):
    assert enum_cls.parse(value) is expected
    assert str(expected) == value


def test_parse_unknown_value_is_an_error():
    with pytest.raises(UnknownVariantError) as exc_info:
        Direction.parse('RTL')

    assert exc_info.value.value == 'RTL'
    assert exc_info.value.expected == ['rtl', 'ltr']


def test_parse_does_not_fall_back_to_default():
    with pytest.raises(ValueError):
        Spread.parse('')


def test_page_spread_alternates_from_left():
    spreads = [PageSpread.for_index(i) for i in range(5)]

    assert spreads == [
        PageSpread.LEFT,
        PageSpread.RIGHT,
        PageSpread.LEFT,
        PageSpread.RIGHT,
        PageSpread.LEFT,
    ]

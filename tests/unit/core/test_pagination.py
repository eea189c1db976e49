"""Тесты политики пагинации."""

import pytest

from notes_core.core.pagination import has_next_page


class TestHasNextPage:
    """Тесты has_next_page."""

    @pytest.mark.parametrize(
        "total_count, limit, offset, expected",
        [
            (4, 2, 0, True),
            (4, 2, 2, False),
            (5, 2, 2, True),
            (5, 2, 4, False),
            (0, 10, 0, False),
            (10, 10, 0, False),
            (11, 10, 0, True),
            (4, 2, 10, False),
        ],
    )
    def test_has_next_page(self, total_count, limit, offset, expected):
        """Номер текущей страницы сравнивается с числом страниц."""
        assert has_next_page(total_count, limit, offset) is expected

    def test_offset_inside_page(self):
        """Смещение не кратное limit относится к странице offset // limit."""
        assert has_next_page(6, 3, 1) is True
        assert has_next_page(6, 3, 4) is False

    def test_monotonic_in_offset(self):
        """С ростом offset флаг не возвращается в True."""
        flags = [has_next_page(23, 5, offset) for offset in range(0, 40)]
        first_false = flags.index(False)
        assert not any(flags[first_false:])

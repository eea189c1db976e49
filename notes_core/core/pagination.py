"""Политика пагинации."""


def has_next_page(total_count: int, limit: int, offset: int) -> bool:
    """Есть ли страница после текущей.

    Args:
        total_count: Общее количество записей.
        limit: Размер страницы (>= 1, проверяется на входе).
        offset: Смещение текущей страницы.

    Returns:
        True, если номер текущей страницы меньше общего числа страниц.
    """
    total_pages = -(-total_count // limit)
    current_page = offset // limit + 1
    return current_page < total_pages

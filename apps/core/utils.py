from django.core.paginator import Paginator


def get_page(queryset, page_number, per_page=15):
    """
    Pagination helper shared by every list page.

    Args:
        queryset: QuerySet (or list) to paginate
        page_number: raw page number from the query string
        per_page: items per page

    Returns:
        Page object. Missing, invalid or < 1 page numbers give the first
        page; numbers past the end give the last page.
    """
    paginator = Paginator(queryset, per_page)

    try:
        page_num = int(page_number) if page_number else 1
        if page_num < 1:
            page_num = 1
        elif page_num > paginator.num_pages and paginator.num_pages > 0:
            page_num = paginator.num_pages
    except (ValueError, TypeError):
        page_num = 1

    return paginator.get_page(page_num)


def apply_sort(queryset, field, order):
    """Order by `field`, ascending unless order == 'desc'."""
    if order == 'desc':
        return queryset.order_by(f'-{field}', '-pk')
    return queryset.order_by(field, 'pk')


def next_sort_order(order):
    return 'asc' if order == 'desc' else 'desc'


def querystring_without_page(request):
    """Current GET parameters minus `page`, for pagination links."""
    query_params = request.GET.copy()
    query_params.pop('page', None)
    return query_params.urlencode()


def parse_id_list(values):
    """
    Turn a list of ids (ints or numeric strings) into ints.

    Invalid entries are dropped.
    """
    ids = []
    for value in values:
        if isinstance(value, bool):
            continue
        try:
            ids.append(int(value))
        except (TypeError, ValueError):
            continue
    return ids


def parse_int(value):
    """ASCII digit string → int, anything else → None"""
    value = (value or '').strip()
    if value.isascii() and value.isdigit():
        return int(value)
    return None

# jobs/query.py
"""
Filter, sort and window construction for the job listing queries.

Every function takes the job queryset it works on, so callers (and tests)
decide which store handle is queried. `fetch_jobs` and `count_jobs` build
their predicate through the same `build_job_filter` call.
"""
from collections import namedtuple

from django.conf import settings
from django.db.models import Q


MAX_OFFSET = 2 ** 63 - 1


class QueryError(ValueError):
    """Out-of-range paging parameter."""


class Window(namedtuple('Window', ['page', 'size'])):
    __slots__ = ()

    @property
    def skip(self):
        return (self.page - 1) * self.size


def build_job_filter(search=None, category=None):
    """
    Title contains `search` (case-insensitive) AND category equals `category`.
    Empty or missing values add no constraint. `icontains` escapes the LIKE
    wildcards, so the search text is always matched literally.
    """
    q = Q()
    if search:
        q &= Q(title__icontains=search)
    if category:
        q &= Q(category=category)
    return q


def build_job_ordering(sort=None):
    if not sort:
        return ('pk',)
    if sort == 'asc':
        return ('deadline', 'pk')
    return ('-deadline', 'pk')


def _parse_positive(raw, default, name):
    if raw is None or str(raw).strip() == '':
        return default
    try:
        value = int(str(raw).strip())
    except ValueError:
        return default
    if value < 1:
        raise QueryError(f"{name} must be >= 1")
    return value


def parse_window(params):
    """
    page/size from a query dict. Missing or non-numeric values fall back to
    page 1 and the configured page size; numbers below 1, a size above the
    configured maximum or a page past the largest storable offset raise
    QueryError.
    """
    page = _parse_positive(params.get('page'), 1, 'page')
    size = _parse_positive(params.get('size'), settings.JOBS_PAGE_SIZE, 'size')
    if size > settings.JOBS_MAX_PAGE_SIZE:
        raise QueryError(f"size must be <= {settings.JOBS_MAX_PAGE_SIZE}")
    # skip + size must fit the database's signed 64-bit OFFSET/LIMIT
    if page * size > MAX_OFFSET:
        raise QueryError(f"page must be <= {MAX_OFFSET // size}")
    return Window(page, size)


def filtered_jobs(queryset, params):
    return queryset.filter(build_job_filter(params.get('search'), params.get('filter')))


def fetch_jobs(queryset, params):
    window = parse_window(params)
    qs = filtered_jobs(queryset, params).order_by(*build_job_ordering(params.get('sort')))
    return list(qs[window.skip:window.skip + window.size])


def count_jobs(queryset, params):
    return filtered_jobs(queryset, params).count()

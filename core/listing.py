"""
listing.py

The list protocol shared by every collection endpoint:

    ?search=   case-insensitive match (see the two search backends)
    ?<filter>= equality filters, declared per resource with django-filter
    ?sortBy=   API field name, whitelisted per view (default createdAt)
    ?sortOrder=asc|desc (default desc)
    ?page=     1-based (default 1)
    ?limit=    page size (default 10)

Filtering happens before sorting, sorting before pagination.
"""
import math

from django.db.models import Q
from rest_framework.filters import BaseFilterBackend
from rest_framework.pagination import BasePagination

from .responses import success_response


class SubstringSearchFilter(BaseFilterBackend):
    """OR of ``<field>__icontains=<search>`` over ``view.search_fields``"""
    search_param = 'search'

    def get_search_term(self, request):
        return request.query_params.get(self.search_param, '').strip()

    def build_query(self, term, fields):
        query = Q()
        for field in fields:
            query |= Q(**{f'{field}__icontains': term})
        return query

    def filter_queryset(self, request, queryset, view):
        term = self.get_search_term(request)
        fields = getattr(view, 'search_fields', None)
        if not term or not fields:
            return queryset
        return queryset.filter(self.build_query(term, fields))


class TextSearchFilter(SubstringSearchFilter):
    """
    Word-level text search over ``view.text_search_fields``: a record matches
    when any word of the query appears in any of the indexed fields.
    """

    def filter_queryset(self, request, queryset, view):
        term = self.get_search_term(request)
        fields = getattr(view, 'text_search_fields', None)
        if not term or not fields:
            return queryset
        query = Q()
        for word in term.split():
            query |= self.build_query(word, fields)
        return queryset.filter(query)


class SortOrderingFilter(BaseFilterBackend):
    sort_param = 'sortBy'
    order_param = 'sortOrder'
    default_sort = 'createdAt'

    def get_sort_fields(self, view):
        return getattr(view, 'sort_fields', {'createdAt': 'created_at'})

    def get_ordering(self, request, view):
        sort_fields = self.get_sort_fields(view)
        default = getattr(view, 'default_sort', self.default_sort)
        sort_by = request.query_params.get(self.sort_param) or default
        field = sort_fields.get(sort_by, sort_fields[default])
        descending = request.query_params.get(self.order_param, 'desc').lower() != 'asc'
        prefix = '-' if descending else ''
        # pk as tie-breaker keeps pages stable when the sort key repeats
        return [f'{prefix}{field}', f'{prefix}pk']

    def filter_queryset(self, request, queryset, view):
        return queryset.order_by(*self.get_ordering(request, view))


def build_pagination(page, limit, total, total_key='totalItems'):
    return {
        'currentPage': page,
        'totalPages': math.ceil(total / limit) if limit else 0,
        total_key: total,
        'hasNextPage': page * limit < total,
        'hasPrevPage': page > 1,
    }


def positive_int(value, default):
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return number if number > 0 else default


class ListingPagination(BasePagination):
    page_query_param = 'page'
    limit_query_param = 'limit'
    default_limit = 10

    def paginate_queryset(self, queryset, request, view=None):
        self.page = positive_int(request.query_params.get(self.page_query_param), 1)
        self.limit = positive_int(request.query_params.get(self.limit_query_param), self.default_limit)
        self.collection = getattr(view, 'collection_name', 'results')
        self.total_key = getattr(view, 'pagination_total_key', 'totalItems')
        self.total = queryset.count()

        offset = (self.page - 1) * self.limit
        return list(queryset[offset:offset + self.limit])

    def get_paginated_response(self, data):
        return success_response({
            self.collection: data,
            'pagination': build_pagination(self.page, self.limit, self.total, self.total_key),
        })

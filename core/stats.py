"""Aggregation helpers for the statistics endpoints"""
import calendar

from django.db.models import Count
from django.db.models.functions import ExtractMonth, ExtractYear


def months_ago(moment, months):
    """
    Same wall-clock moment ``months`` calendar months earlier. The day is
    clamped to the target month's length (31 March minus one month is 28/29 February).
    """
    month_index = moment.year * 12 + (moment.month - 1) - months
    year, month = divmod(month_index, 12)
    month += 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def monthly_counts(queryset, since, field='created_at'):
    """``[{year, month, count}]`` of records created since ``since``, oldest month first"""
    rows = (
        queryset.filter(**{f'{field}__gte': since})
        .annotate(year=ExtractYear(field), month=ExtractMonth(field))
        .values('year', 'month')
        .annotate(count=Count('pk'))
        .order_by('year', 'month')
    )
    return [{'year': row['year'], 'month': row['month'], 'count': row['count']} for row in rows]


def grouped_counts(queryset, field, key, ordering=None, limit=None):
    """``[{<key>: value, count}]`` grouped over ``field``"""
    rows = (
        queryset.values(field)
        .annotate(count=Count('pk'))
        .order_by(*(ordering or [field]))
    )
    if limit is not None:
        rows = rows[:limit]
    return [{key: row[field], 'count': row['count']} for row in rows]

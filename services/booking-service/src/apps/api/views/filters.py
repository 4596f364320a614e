# services/booking-service/src/apps/api/views/filters.py
"""
API Filters

Django Filter classes for booking API.
"""

import django_filters

from apps.core.models import Booking


class BookingFilter(django_filters.FilterSet):
    """Filter for a company's booking list."""

    # Time range
    start_after = django_filters.DateTimeFilter(
        field_name='start_date_time',
        lookup_expr='gte'
    )
    start_before = django_filters.DateTimeFilter(
        field_name='start_date_time',
        lookup_expr='lte'
    )
    date = django_filters.DateFilter(
        field_name='start_date_time',
        lookup_expr='date'
    )

    # Status filters
    status = django_filters.ChoiceFilter(
        choices=Booking.Status.choices
    )
    active = django_filters.BooleanFilter(
        method='filter_active'
    )

    is_paid = django_filters.BooleanFilter()

    class Meta:
        model = Booking
        fields = ['status', 'is_paid']

    def filter_active(self, queryset, name, value):
        """Filter for bookings that still hold their slot."""
        if value:
            return queryset.filter(status__in=Booking.BLOCKING_STATUSES)
        return queryset.exclude(status__in=Booking.BLOCKING_STATUSES)

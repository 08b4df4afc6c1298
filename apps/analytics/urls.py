"""URL routing for booking history endpoints."""

from django.urls import path  # type: ignore

from .views import HistorySummaryView, RoomHistoryCountsView


urlpatterns = [
    # Do not prefix with 'history/' here; the prefix is defined in config.urls
    path('summary/', HistorySummaryView.as_view(), name='history-summary'),
    path('rooms/', RoomHistoryCountsView.as_view(), name='history-rooms'),
]

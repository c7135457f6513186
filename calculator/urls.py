from django.urls import path, include
from rest_framework.routers import DefaultRouter
from .views import TaxViewSet, TurnoverEntryViewSet
from .apis import DashboardView, DeadlinesView

router = DefaultRouter()
router.register(r'tax', TaxViewSet, basename='tax')
router.register(r'turnover', TurnoverEntryViewSet, basename='turnover')

urlpatterns = [
    path('', include(router.urls)),
    path('dashboard/', DashboardView.as_view(), name='dashboard'),
    path('deadlines/', DeadlinesView.as_view(), name='deadlines'),
]

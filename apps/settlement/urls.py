from django.urls import path
from . import views

app_name = 'settlement'

urlpatterns = [
    # GET /api/settlement/overview/?period=YYYY-MM       - Meal rate and balances
    # GET /api/settlement/balance-sheet/?period=YYYY-MM  - Per-member breakdown
    path('overview/', views.overview, name='overview'),
    path('balance-sheet/', views.balance_sheet, name='balance-sheet'),
]

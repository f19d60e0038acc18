from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'finance'

router = DefaultRouter()
router.register(r'expenses', views.ExpenseViewSet, basename='expense')
router.register(r'deposits', views.DepositViewSet, basename='deposit')
router.register(r'grocery', views.GroceryPurchaseViewSet, basename='grocery')
router.register(r'shopping', views.ShoppingItemViewSet, basename='shopping')

urlpatterns = [
    # Expense routes
    # GET    /api/finance/expenses/            - List month's expenses
    # POST   /api/finance/expenses/            - Record expense (manager)
    # GET    /api/finance/expenses/{id}/       - Get expense
    # GET    /api/finance/expenses/overhead/   - Overhead split per member

    # Deposit routes
    # GET    /api/finance/deposits/            - List month's deposits
    # POST   /api/finance/deposits/            - Record deposit (manager)
    # GET    /api/finance/deposits/summary/    - Totals per category

    # Grocery routes
    # GET    /api/finance/grocery/             - Purchase history
    # POST   /api/finance/grocery/             - Record grocery purchase
    # GET    /api/finance/grocery/spent/       - Spending per buyer

    # Shopping list routes
    # GET    /api/finance/shopping/                   - Pending items
    # POST   /api/finance/shopping/                   - Add item
    # POST   /api/finance/shopping/{id}/mark_bought/  - Mark bought

    # Rent
    path('rent/', views.rent_summary, name='rent-summary'),
    path('rent/me/', views.my_rent, name='my-rent'),

    path('', include(router.urls)),
]

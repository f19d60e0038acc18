from django.contrib import admin
from .models import Expense, Deposit, GroceryPurchase, ShoppingItem


@admin.register(Expense)
class ExpenseAdmin(admin.ModelAdmin):
    list_display = ['title', 'mess', 'amount', 'category', 'paid_by', 'date']
    list_filter = ['category', 'date']
    search_fields = ['title', 'mess__name', 'paid_by__email']
    readonly_fields = ['id', 'created_at']
    date_hierarchy = 'date'


@admin.register(Deposit)
class DepositAdmin(admin.ModelAdmin):
    list_display = ['user', 'mess', 'amount', 'category', 'rent_month', 'date']
    list_filter = ['category', 'date']
    search_fields = ['user__email', 'mess__name']
    readonly_fields = ['id', 'created_at']
    date_hierarchy = 'date'


@admin.register(GroceryPurchase)
class GroceryPurchaseAdmin(admin.ModelAdmin):
    list_display = ['bought_by', 'mess', 'total_cost', 'date']
    search_fields = ['items', 'bought_by__email']
    readonly_fields = ['id', 'created_at', 'expense']


@admin.register(ShoppingItem)
class ShoppingItemAdmin(admin.ModelAdmin):
    list_display = ['name', 'quantity', 'mess', 'status', 'added_by', 'bought_by']
    list_filter = ['status']
    search_fields = ['name', 'mess__name']

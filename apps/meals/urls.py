from django.urls import path
from . import views

app_name = 'meals'

urlpatterns = [
    # GET  /api/meals/?start=&end=&user=   - Meal records in a range
    # POST /api/meals/toggle/              - Toggle one meal (upsert)
    # GET  /api/meals/tracker/?date=       - Daily tracker with billing summary
    path('', views.meal_list, name='meal-list'),
    path('toggle/', views.toggle, name='toggle'),
    path('tracker/', views.tracker, name='tracker'),
]

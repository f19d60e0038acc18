# Generated manually for the finance app

import uuid
from decimal import Decimal
from django.conf import settings
from django.core.validators import MinValueValidator, RegexValidator
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('messes', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Expense',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('title', models.CharField(max_length=200)),
                ('amount', models.DecimalField(decimal_places=2, max_digits=10, validators=[MinValueValidator(Decimal('0.01'))])),
                ('category', models.CharField(choices=[('grocery', 'Grocery'), ('utility', 'Utility'), ('meal', 'Meal'), ('others', 'Others'), ('general', 'General')], default='utility', max_length=20)),
                ('date', models.DateField()),
                ('note', models.TextField(blank=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('mess', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='expenses', to='messes.mess')),
                ('paid_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='expenses_paid', to=settings.AUTH_USER_MODEL)),
                ('recorded_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='expenses_recorded', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'expenses',
                'ordering': ['-date', '-created_at'],
                'indexes': [
                    models.Index(fields=['mess', 'date'], name='expense_mess_date_idx'),
                    models.Index(fields=['mess', 'category'], name='expense_mess_category_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='Deposit',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('amount', models.DecimalField(decimal_places=2, max_digits=10, validators=[MinValueValidator(Decimal('0.01'))])),
                ('category', models.CharField(default='general', max_length=50)),
                ('rent_month', models.CharField(blank=True, max_length=7, validators=[RegexValidator('^\\d{4}-(0[1-9]|1[0-2])$', 'Use YYYY-MM')])),
                ('date', models.DateField()),
                ('note', models.TextField(blank=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('mess', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='deposits', to='messes.mess')),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='deposits', to=settings.AUTH_USER_MODEL)),
                ('recorded_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='deposits_recorded', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'deposits',
                'ordering': ['-date', '-created_at'],
                'indexes': [
                    models.Index(fields=['mess', 'date'], name='deposit_mess_date_idx'),
                    models.Index(fields=['mess', 'category', 'rent_month'], name='deposit_mess_rent_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='GroceryPurchase',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('items', models.TextField()),
                ('total_cost', models.DecimalField(decimal_places=2, max_digits=10, validators=[MinValueValidator(Decimal('0.01'))])),
                ('date', models.DateField()),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('mess', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='grocery_purchases', to='messes.mess')),
                ('bought_by', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='grocery_purchases', to=settings.AUTH_USER_MODEL)),
                ('expense', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name='grocery_purchase', to='finance.expense')),
            ],
            options={
                'db_table': 'grocery_purchases',
                'ordering': ['-date', '-created_at'],
                'indexes': [
                    models.Index(fields=['mess', 'date'], name='grocery_mess_date_idx'),
                    models.Index(fields=['bought_by', 'date'], name='grocery_buyer_date_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='ShoppingItem',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(max_length=200)),
                ('quantity', models.CharField(blank=True, max_length=50)),
                ('status', models.CharField(choices=[('pending', 'Pending'), ('bought', 'Bought')], default='pending', max_length=20)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('bought_at', models.DateTimeField(blank=True, null=True)),
                ('mess', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='shopping_items', to='messes.mess')),
                ('added_by', models.ForeignKey(null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='shopping_items_added', to=settings.AUTH_USER_MODEL)),
                ('bought_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='shopping_items_bought', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'shopping_items',
                'ordering': ['created_at'],
                'indexes': [models.Index(fields=['mess', 'status'], name='shopping_mess_status_idx')],
            },
        ),
    ]
